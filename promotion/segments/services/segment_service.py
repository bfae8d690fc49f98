import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from promotion.segments.models import Segment
from promotion.segments.services.match_type_service import MatchTypeService
from promotion.segments.services.segment_type_service import SegmentTypeService
from promotion.shows.services.show_service import ShowService
from promotion.referees.services.referee_service import RefereeService
from promotion.wrestlers.models import Wrestler
from promotion.titles.models import Title
from promotion.core.exceptions import EntityNotFoundError, BusinessRuleError
from promotion.core.utils import generate_custom_id, utcnow

logger = logging.getLogger(__name__)

class SegmentService:
    def __init__(self, db: Session):
        self.db = db
        self.show_service = ShowService(db)
        self.segment_type_service = SegmentTypeService(db)
        self.match_type_service = MatchTypeService(db)
        self.referee_service = RefereeService(db)

    def _load(self, model, key_column, ids: List[str], label: str):
        if not ids:
            return []
        rows = self.db.query(model).filter(key_column.in_(ids)).all()
        found = {getattr(row, key_column.key): row for row in rows}
        for entity_id in ids:
            if entity_id not in found:
                raise EntityNotFoundError(label, entity_id)
        # Keep the caller's order
        return [found[entity_id] for entity_id in dict.fromkeys(ids)]

    def get_segment(self, segment_id: str) -> Segment:
        segment = self.db.query(Segment).filter(Segment.segment_id == segment_id).first()
        if not segment:
            raise EntityNotFoundError("Segment", segment_id)
        return segment

    def count(self) -> int:
        return self.db.query(Segment).count()

    def list_by_show(self, show_id: str):
        self.show_service.get_show(show_id)
        return (
            self.db.query(Segment)
            .filter(Segment.show_id == show_id)
            .order_by(Segment.segment_order)
            .all()
        )

    def next_order(self, show_id: str) -> int:
        current = self.db.query(func.max(Segment.segment_order)).filter(Segment.show_id == show_id).scalar()
        return (current or 0) + 1

    def create_segment(self, show_id: str, segment_type_id: str, participant_ids: List[str],
                       match_type_id: Optional[str] = None, referee_id: Optional[str] = None,
                       segment_order: Optional[int] = None, title_ids: Optional[List[str]] = None,
                       stipulation: Optional[str] = None) -> Segment:
        """Book a segment on a show; order defaults to the end of the card."""
        show = self.show_service.get_show(show_id)
        segment_type = self.segment_type_service.get_segment_type(segment_type_id)
        match_type = self.match_type_service.get_match_type(match_type_id) if match_type_id else None
        referee = self.referee_service.get_referee(referee_id) if referee_id else None
        participants = self._load(Wrestler, Wrestler.wrestler_id, participant_ids, "Wrestler")
        titles = self._load(Title, Title.title_id, title_ids or [], "Title")

        try:
            segment = Segment(
                segment_id=generate_custom_id(self.db, Segment, "SG", "segment_id"),
                show=show,
                segment_type=segment_type,
                match_type=match_type,
                referee=referee,
                segment_order=segment_order or self.next_order(show.show_id),
                is_title_segment=bool(titles),
                stipulation=stipulation,
                creation_date=utcnow(),
            )
            segment.participants = participants
            segment.titles = titles
            self.db.add(segment)
            self.db.commit()
            self.db.refresh(segment)
            logger.info(f"Segment {segment.segment_id} booked on {show.name} at position {segment.segment_order}")
            return segment
        except Exception:
            self.db.rollback()
            raise

    def set_winners(self, segment_id: str, winner_ids: List[str]) -> Segment:
        segment = self.get_segment(segment_id)
        participant_ids = {w.wrestler_id for w in segment.participants}
        outsiders = [wid for wid in winner_ids if wid not in participant_ids]
        if outsiders:
            raise BusinessRuleError(f"Winners must take part in the segment: {', '.join(outsiders)}")
        segment.winners = [w for w in segment.participants if w.wrestler_id in set(winner_ids)]
        self.db.commit()
        self.db.refresh(segment)
        return segment

    def update_narration(self, segment_id: str, narration: Optional[str], summary: Optional[str] = None):
        segment = self.get_segment(segment_id)
        segment.narration = narration
        if summary is not None:
            segment.summary = summary
        self.db.commit()
        self.db.refresh(segment)
        return segment

    def delete_segment(self, segment_id: str):
        self.db.delete(self.get_segment(segment_id))
        self.db.commit()
