from dataclasses import asdict
from sqlalchemy.orm import Session
from promotion.notifications.schemas.notification_schema import Notification
from promotion.core.broadcaster import notification_broadcaster
from promotion.core.events import (
    event_bus, ChampionshipChangeEvent, WrestlerInjuryEvent, WrestlerInjuryHealedEvent, AchievementUnlockedEvent,
)


def _payload(event) -> dict:
    data = asdict(event)
    data["occurred_at"] = event.occurred_at.isoformat()
    return data


@event_bus.subscribe(ChampionshipChangeEvent)
def announce_title_change(db: Session, event: ChampionshipChangeEvent):
    message = f"{event.title_name} vacated" if event.vacated else f"{event.title_name} has changed hands"
    notification_broadcaster.broadcast(Notification(type="CHAMPIONSHIP_CHANGE", message=message, payload=_payload(event)))


@event_bus.subscribe(WrestlerInjuryEvent)
def announce_injury(db: Session, event: WrestlerInjuryEvent):
    notification_broadcaster.broadcast(Notification(
        type="INJURY",
        message=f"{event.wrestler_name} suffered {event.injury_name}",
        payload=_payload(event),
    ))


@event_bus.subscribe(WrestlerInjuryHealedEvent)
def announce_recovery(db: Session, event: WrestlerInjuryHealedEvent):
    notification_broadcaster.broadcast(Notification(
        type="INJURY_HEALED",
        message=f"{event.wrestler_name} recovered from {event.injury_name}",
        payload=_payload(event),
    ))


@event_bus.subscribe(AchievementUnlockedEvent)
def announce_achievement(db: Session, event: AchievementUnlockedEvent):
    notification_broadcaster.broadcast(Notification(
        type="ACHIEVEMENT",
        message=f"Achievement unlocked: {event.achievement_key}",
        payload=_payload(event),
    ))
