from promotion.factions.models.faction_model import Faction, FactionType, faction_members
from promotion.factions.models.faction_rivalry_model import (
    FactionRivalry, FactionHeatEvent, HEAT_MULTIPLIER, scale_heat_gain,
)
