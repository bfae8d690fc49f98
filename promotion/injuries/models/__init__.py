from promotion.injuries.models.injury_model import Injury, InjurySeverity
from promotion.injuries.models.injury_type_model import InjuryType
