"""In-process domain events.

Services publish events after they change state; listeners registered with
``event_bus.subscribe`` run synchronously, in registration order, inside the
publisher's session so their writes land in the same unit of work.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Tuple, Type

from sqlalchemy.orm import Session

from promotion.core.utils import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEvent:
    occurred_at: datetime = field(default_factory=utcnow, kw_only=True)


@dataclass(frozen=True)
class ChampionshipChangeEvent(DomainEvent):
    title_id: str
    title_name: str
    new_champion_ids: Tuple[str, ...]
    previous_champion_ids: Tuple[str, ...] = ()

    @property
    def vacated(self) -> bool:
        return not self.new_champion_ids


@dataclass(frozen=True)
class WrestlerInjuryEvent(DomainEvent):
    wrestler_id: str
    wrestler_name: str
    injury_id: str
    injury_name: str
    severity: str


@dataclass(frozen=True)
class WrestlerInjuryHealedEvent(DomainEvent):
    wrestler_id: str
    wrestler_name: str
    injury_id: str
    injury_name: str


@dataclass(frozen=True)
class FanAwardedEvent(DomainEvent):
    wrestler_id: str
    fan_change: int


@dataclass(frozen=True)
class HeatChangeEvent(DomainEvent):
    rivalry_id: str
    old_heat: int
    new_heat: int
    reason: str
    wrestler_ids: Tuple[str, ...]


@dataclass(frozen=True)
class FactionHeatChangeEvent(DomainEvent):
    faction_rivalry_id: str
    old_heat: int
    new_heat: int
    reason: str
    wrestler_ids: Tuple[str, ...]


@dataclass(frozen=True)
class RivalryResolvedEvent(DomainEvent):
    rivalry_id: str
    total_roll: int


@dataclass(frozen=True)
class AchievementUnlockedEvent(DomainEvent):
    account_id: str
    achievement_key: str


Listener = Callable[[Session, DomainEvent], None]


class EventBus:
    def __init__(self):
        self._listeners: Dict[Type[DomainEvent], List[Listener]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent]):
        """Decorator registering ``fn(db, event)`` for ``event_type``."""
        def decorator(fn: Listener) -> Listener:
            if fn not in self._listeners[event_type]:
                self._listeners[event_type].append(fn)
            return fn
        return decorator

    def unsubscribe(self, event_type: Type[DomainEvent], fn: Listener):
        if fn in self._listeners[event_type]:
            self._listeners[event_type].remove(fn)

    def listeners_for(self, event_type: Type[DomainEvent]) -> List[Listener]:
        return list(self._listeners[event_type])

    def publish(self, db: Session, event: DomainEvent):
        listeners = self.listeners_for(type(event))
        logger.debug(f"Publishing {type(event).__name__} to {len(listeners)} listener(s)")
        for listener in listeners:
            listener(db, event)


event_bus = EventBus()
