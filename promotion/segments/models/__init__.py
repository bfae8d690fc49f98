from promotion.segments.models.match_type_model import MatchType
from promotion.segments.models.segment_type_model import SegmentType
from promotion.segments.models.segment_model import Segment, segment_participants, segment_titles
