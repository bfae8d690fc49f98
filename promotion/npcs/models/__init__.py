from promotion.npcs.models.npc_model import Npc
