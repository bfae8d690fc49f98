from sqlalchemy.orm import Session
from promotion.news.models import NewsCategory
from promotion.news.services.news_service import NewsService
from promotion.wrestlers.models import Wrestler
from promotion.core.events import event_bus, ChampionshipChangeEvent, WrestlerInjuryEvent


def _names(db: Session, wrestler_ids):
    if not wrestler_ids:
        return []
    rows = db.query(Wrestler).filter(Wrestler.wrestler_id.in_(wrestler_ids)).all()
    by_id = {w.wrestler_id: w.name for w in rows}
    return [by_id.get(wrestler_id, wrestler_id) for wrestler_id in wrestler_ids]


@event_bus.subscribe(ChampionshipChangeEvent)
def report_title_change(db: Session, event: ChampionshipChangeEvent):
    previous = " & ".join(_names(db, event.previous_champion_ids))
    if event.vacated:
        headline = f"{event.title_name} vacated"
        content = f"The {event.title_name} has been vacated" + (f" by {previous}." if previous else ".")
    else:
        winners = " & ".join(_names(db, event.new_champion_ids))
        headline = f"New {event.title_name} champion: {winners}"
        content = f"{winners} captured the {event.title_name}" + (f", ending the reign of {previous}." if previous else ".")
    NewsService(db).build_news_item(headline, content, NewsCategory.CHAMPIONSHIP, importance=5)


@event_bus.subscribe(WrestlerInjuryEvent)
def report_injury(db: Session, event: WrestlerInjuryEvent):
    severity = event.severity.lower()
    NewsService(db).build_news_item(
        f"{event.wrestler_name} injured",
        f"{event.wrestler_name} is dealing with a {severity} injury ({event.injury_name}).",
        NewsCategory.INJURY,
        importance=4 if event.severity in ("SEVERE", "CRITICAL") else 3,
    )
