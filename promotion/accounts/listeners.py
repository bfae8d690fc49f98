import logging
from sqlalchemy.orm import Session
from promotion.accounts.services.legacy_service import LegacyService
from promotion.wrestlers.models import Wrestler
from promotion.core.events import event_bus, ChampionshipChangeEvent

logger = logging.getLogger(__name__)


@event_bus.subscribe(ChampionshipChangeEvent)
def update_legacy_on_title_change(db: Session, event: ChampionshipChangeEvent):
    """Both the old and the new champions' accounts see their score move."""
    wrestler_ids = set(event.new_champion_ids) | set(event.previous_champion_ids)
    if not wrestler_ids:
        return
    account_ids = {
        account_id
        for (account_id,) in db.query(Wrestler.account_id).filter(Wrestler.wrestler_id.in_(wrestler_ids)).all()
        if account_id
    }
    service = LegacyService(db)
    for account_id in sorted(account_ids):
        service.update_legacy_score(account_id, commit=False)
