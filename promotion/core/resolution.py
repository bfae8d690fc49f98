from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ResolutionResult(Generic[T]):
    """Outcome of a dice-driven resolution attempt."""

    success: bool
    message: str
    entity: Optional[T] = None
    roll1: int = 0
    roll2: int = 0
    total: int = 0

    def to_dict(self, entity_view: Any = None):
        return {
            "success": self.success,
            "message": self.message,
            "roll1": self.roll1,
            "roll2": self.roll2,
            "total": self.total,
            "entity": entity_view,
        }
