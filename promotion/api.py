from fastapi import APIRouter
from promotion.wrestlers.controllers.wrestler_controller import router as wrestler_router
from promotion.npcs.controllers.npc_controller import router as npc_router
from promotion.referees.controllers.referee_controller import router as referee_router
from promotion.tasks.controllers.task_controller import router as task_router
from promotion.shows.controllers.show_type_controller import router as show_type_router
from promotion.shows.controllers.show_controller import router as show_router
from promotion.seasons.controllers.season_controller import router as season_router
from promotion.segments.controllers.match_type_controller import router as match_type_router
from promotion.segments.controllers.segment_type_controller import router as segment_type_router
from promotion.segments.controllers.segment_controller import router as segment_router
from promotion.rivalries.controllers.rivalry_controller import router as rivalry_router
from promotion.titles.controllers.title_controller import router as title_router
from promotion.rankings.controllers.ranking_controller import router as ranking_router
from promotion.teams.controllers.team_controller import router as team_router
from promotion.injuries.controllers.injury_controller import router as injury_router
from promotion.injuries.controllers.injury_type_controller import router as injury_type_router
from promotion.factions.controllers.faction_controller import router as faction_router
from promotion.factions.controllers.faction_rivalry_controller import router as faction_rivalry_router
from promotion.cards.controllers.card_controller import router as card_router
from promotion.decks.controllers.deck_controller import router as deck_router
from promotion.news.controllers.news_controller import router as news_router
from promotion.accounts.controllers.account_controller import router as account_router
from promotion.drafts.controllers.draft_controller import router as draft_router
from promotion.notifications.controllers.notification_controller import router as notification_router
from promotion.narration.controllers.narration_controller import router as narration_router

api_router = APIRouter(prefix="/api")

api_router.include_router(wrestler_router, prefix="/wrestlers", tags=["wrestlers"])
api_router.include_router(npc_router, prefix="/npcs", tags=["npcs"])
api_router.include_router(referee_router, prefix="/referees", tags=["referees"])
api_router.include_router(task_router, prefix="/tasks", tags=["tasks"])
api_router.include_router(show_type_router, prefix="/show-types", tags=["show-types"])
api_router.include_router(show_router, prefix="/shows", tags=["shows"])
api_router.include_router(season_router, prefix="/seasons", tags=["seasons"])
api_router.include_router(match_type_router, prefix="/match-types", tags=["match-types"])
api_router.include_router(segment_type_router, prefix="/segment-types", tags=["segment-types"])
api_router.include_router(segment_router, prefix="/segments", tags=["segments"])
api_router.include_router(rivalry_router, prefix="/rivalries", tags=["rivalries"])
api_router.include_router(faction_router, prefix="/factions", tags=["factions"])
api_router.include_router(faction_rivalry_router, prefix="/faction-rivalries", tags=["faction-rivalries"])
api_router.include_router(title_router, prefix="/titles", tags=["titles"])
api_router.include_router(ranking_router, prefix="/rankings", tags=["rankings"])
api_router.include_router(team_router, prefix="/teams", tags=["teams"])
api_router.include_router(injury_router, prefix="/injuries", tags=["injuries"])
api_router.include_router(injury_type_router, prefix="/injury-types", tags=["injury-types"])
api_router.include_router(card_router, prefix="/cards", tags=["cards"])
api_router.include_router(deck_router, prefix="/decks", tags=["decks"])
api_router.include_router(news_router, prefix="/news", tags=["news"])
api_router.include_router(account_router, prefix="/accounts", tags=["accounts"])
api_router.include_router(draft_router, prefix="/drafts", tags=["drafts"])
api_router.include_router(notification_router, prefix="/notifications", tags=["notifications"])
api_router.include_router(narration_router, prefix="/narration", tags=["narration"])
