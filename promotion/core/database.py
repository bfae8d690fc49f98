from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from promotion.core.config import settings

connect_args = {}
engine_kwargs = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared between the request thread pool and the scheduler
    connect_args = {"check_same_thread": False}
else:
    engine_kwargs = dict(
        pool_pre_ping=True,   # tests connections before using them
        pool_recycle=1800,    # recycle every 30 min to avoid stale connections
        pool_size=10,
        max_overflow=10,
        pool_timeout=30,
    )

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, **engine_kwargs)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Dependency to get DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def import_models():
    """Import every model module so the mappers and tables are registered."""
    from promotion.accounts.models.account_model import Account, AccountAchievement
    from promotion.npcs.models.npc_model import Npc
    from promotion.wrestlers.models.wrestler_model import Wrestler
    from promotion.teams.models.team_model import Team
    from promotion.referees.models.referee_model import Referee
    from promotion.tasks.models.task_model import Task
    from promotion.shows.models.show_type_model import ShowType
    from promotion.seasons.models.season_model import Season
    from promotion.shows.models.show_model import Show
    from promotion.segments.models.match_type_model import MatchType
    from promotion.segments.models.segment_type_model import SegmentType
    from promotion.segments.models.segment_model import Segment
    from promotion.titles.models.title_model import Title
    from promotion.titles.models.title_reign_model import TitleReign
    from promotion.rivalries.models.rivalry_model import Rivalry, HeatEvent
    from promotion.factions.models.faction_model import Faction
    from promotion.factions.models.faction_rivalry_model import FactionRivalry, FactionHeatEvent
    from promotion.injuries.models.injury_model import Injury
    from promotion.injuries.models.injury_type_model import InjuryType
    from promotion.cards.models.card_model import Card, CardSet
    from promotion.decks.models.deck_model import Deck, DeckCard
    from promotion.news.models.news_model import NewsItem
    from promotion.drafts.models.draft_model import Draft, DraftPick

# Function to initialize the database
def init_db():
    import_models()

    # Use context manager to ensure connection is released
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
