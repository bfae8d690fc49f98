import logging
from typing import Optional
from sqlalchemy import and_, func
from sqlalchemy.orm import Session
from promotion.injuries.models import InjuryType
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError
from promotion.core.utils import generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)


class InjuryTypeService:
    def __init__(self, db: Session):
        self.db = db

    def list_injury_types(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(InjuryType).order_by(InjuryType.injury_name), page, size)

    def count(self) -> int:
        return self.db.query(InjuryType).count()

    def get_injury_type(self, injury_type_id: str) -> InjuryType:
        injury_type = self.db.query(InjuryType).filter(InjuryType.injury_type_id == injury_type_id).first()
        if not injury_type:
            raise EntityNotFoundError("InjuryType", injury_type_id)
        return injury_type

    def find_by_name(self, injury_name: str) -> Optional[InjuryType]:
        return self.db.query(InjuryType).filter(InjuryType.injury_name == injury_name).first()

    def get_by_name(self, injury_name: str) -> InjuryType:
        injury_type = self.find_by_name(injury_name)
        if not injury_type:
            raise EntityNotFoundError("InjuryType", injury_name)
        return injury_type

    def create_injury_type(self, injury_name: str, health_effect: Optional[int] = None,
                           stamina_effect: Optional[int] = None, card_effect: Optional[int] = None,
                           special_effects: Optional[str] = None) -> InjuryType:
        if self.find_by_name(injury_name):
            raise DuplicateEntityError("InjuryType", injury_name)
        injury_type = InjuryType(
            injury_type_id=generate_custom_id(self.db, InjuryType, "IT", "injury_type_id"),
            injury_name=injury_name,
            health_effect=health_effect,
            stamina_effect=stamina_effect,
            card_effect=card_effect,
            special_effects=special_effects,
            creation_date=utcnow(),
        )
        self.db.add(injury_type)
        self.db.commit()
        self.db.refresh(injury_type)
        logger.info(f"Created injury type {injury_name} ({injury_type.injury_type_id})")
        return injury_type

    def update_injury_type(self, injury_type_id: str, **changes) -> InjuryType:
        injury_type = self.get_injury_type(injury_type_id)
        name = changes.pop("injury_name", None)
        if name and name != injury_type.injury_name:
            if self.find_by_name(name):
                raise DuplicateEntityError("InjuryType", name)
            injury_type.injury_name = name
        # Effects may be cleared explicitly, so None is written through
        for key, value in changes.items():
            setattr(injury_type, key, value)
        self.db.commit()
        self.db.refresh(injury_type)
        return injury_type

    def delete_injury_type(self, injury_type_id: str):
        self.db.delete(self.get_injury_type(injury_type_id))
        self.db.commit()
        logger.info(f"Deleted injury type {injury_type_id}")

    def get_ordered_by_severity(self):
        """Harshest combined penalty first."""
        total = (
            func.coalesce(InjuryType.health_effect, 0)
            + func.coalesce(InjuryType.stamina_effect, 0)
            + func.coalesce(InjuryType.card_effect, 0)
        )
        return self.db.query(InjuryType).order_by(total, InjuryType.injury_name).all()

    def _with_effect(self, column):
        return self.db.query(InjuryType).filter(and_(column.isnot(None), column != 0))

    def get_with_health_effects(self):
        return self._with_effect(InjuryType.health_effect).all()

    def get_with_stamina_effects(self):
        return self._with_effect(InjuryType.stamina_effect).all()

    def get_with_card_effects(self):
        return self._with_effect(InjuryType.card_effect).all()

    def get_with_special_effects(self):
        return (
            self.db.query(InjuryType)
            .filter(InjuryType.special_effects.isnot(None), func.trim(InjuryType.special_effects) != "")
            .order_by(InjuryType.injury_name)
            .all()
        )

    def get_stats(self) -> dict:
        stats = {
            "health_effect_count": self._with_effect(InjuryType.health_effect).count(),
            "stamina_effect_count": self._with_effect(InjuryType.stamina_effect).count(),
            "card_effect_count": self._with_effect(InjuryType.card_effect).count(),
            "special_effect_count": len(self.get_with_special_effects()),
        }
        stats["total_types"] = sum(stats.values())
        return stats
