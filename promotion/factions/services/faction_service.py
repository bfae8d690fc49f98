import logging
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from promotion.factions.models import Faction, FactionRivalry, FactionType
from promotion.npcs.models import Npc
from promotion.wrestlers.models import Wrestler
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError, BusinessRuleError
from promotion.core.utils import ensure_unused, generate_custom_id, paginate, utcnow

logger = logging.getLogger(__name__)


class FactionService:
    def __init__(self, db: Session):
        self.db = db

    def _wrestler(self, wrestler_id: str) -> Wrestler:
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        return wrestler

    def _manager(self, npc_id: str) -> Npc:
        npc = self.db.query(Npc).filter(Npc.npc_id == npc_id).first()
        if not npc:
            raise EntityNotFoundError("Npc", npc_id)
        return npc

    def _active_faction(self, faction_id: str) -> Faction:
        faction = self.get_faction(faction_id)
        if not faction.is_active:
            raise BusinessRuleError(f"Faction {faction.name} has disbanded")
        return faction

    def _ensure_free_agent(self, wrestler: Wrestler, faction: Optional[Faction] = None):
        current = wrestler.faction
        if current is not None and (faction is None or current.faction_id != faction.faction_id):
            raise BusinessRuleError(f"{wrestler.name} already belongs to {current.name}")

    def _save(self, faction: Faction) -> Faction:
        self.db.commit()
        self.db.refresh(faction)
        return faction

    def list_factions(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Faction).order_by(Faction.name), page, size)

    def count(self) -> int:
        return self.db.query(Faction).count()

    def get_faction(self, faction_id: str) -> Faction:
        faction = self.db.query(Faction).filter(Faction.faction_id == faction_id).first()
        if not faction:
            raise EntityNotFoundError("Faction", faction_id)
        return faction

    def find_by_name(self, name: str) -> Optional[Faction]:
        return self.db.query(Faction).filter(Faction.name == name).first()

    def get_by_name(self, name: str) -> Faction:
        faction = self.find_by_name(name)
        if not faction:
            raise EntityNotFoundError("Faction", name)
        return faction

    def create_faction(self, name: str, description: Optional[str] = None, leader_id: Optional[str] = None,
                       manager_id: Optional[str] = None) -> Faction:
        """Form a faction; the leader, if any, is its first member."""
        if self.find_by_name(name):
            raise DuplicateEntityError("Faction", name)
        leader = self._wrestler(leader_id) if leader_id else None
        if leader is not None:
            self._ensure_free_agent(leader)

        now = utcnow()
        faction = Faction(
            faction_id=generate_custom_id(self.db, Faction, "FA", "faction_id"),
            name=name,
            description=description,
            manager=self._manager(manager_id) if manager_id else None,
            is_active=True,
            affinity=0,
            formed_date=now,
            creation_date=now,
        )
        if leader is not None:
            faction.leader = leader
            faction.add_member(leader)
        self.db.add(faction)
        faction = self._save(faction)
        logger.info(f"Faction {faction.name} formed as {faction.faction_id}")
        return faction

    def update_faction(self, faction_id: str, name: Optional[str] = None, description: Optional[str] = None,
                       manager_id: Optional[str] = None) -> Faction:
        faction = self.get_faction(faction_id)
        if name and name != faction.name:
            if self.find_by_name(name):
                raise DuplicateEntityError("Faction", name)
            faction.name = name
        if description is not None:
            faction.description = description
        if manager_id is not None:
            faction.manager = self._manager(manager_id)
        return self._save(faction)

    def add_member(self, faction_id: str, wrestler_id: str) -> Faction:
        faction = self._active_faction(faction_id)
        wrestler = self._wrestler(wrestler_id)
        self._ensure_free_agent(wrestler, faction)
        faction.add_member(wrestler)
        logger.info(f"{wrestler.name} joined {faction.name}")
        return self._save(faction)

    def remove_member(self, faction_id: str, wrestler_id: str, reason: Optional[str] = None) -> Faction:
        faction = self.get_faction(faction_id)
        wrestler = self._wrestler(wrestler_id)
        if not faction.has_member(wrestler):
            raise BusinessRuleError(f"{wrestler.name} is not a member of {faction.name}")
        faction.remove_member(wrestler)
        logger.info(f"{wrestler.name} left {faction.name}: {reason or 'no reason given'}")
        return self._save(faction)

    def change_leader(self, faction_id: str, wrestler_id: str) -> Faction:
        faction = self._active_faction(faction_id)
        wrestler = self._wrestler(wrestler_id)
        if not faction.has_member(wrestler):
            raise BusinessRuleError(f"{wrestler.name} must be a member of {faction.name} to lead it")
        faction.leader = wrestler
        return self._save(faction)

    def disband_faction(self, faction_id: str, reason: Optional[str] = None) -> Faction:
        faction = self._active_faction(faction_id)
        faction.disband(utcnow())
        logger.info(f"Faction {faction.name} disbanded: {reason or 'no reason given'}")
        return self._save(faction)

    def add_affinity(self, faction_id: str, points: int) -> Faction:
        faction = self.get_faction(faction_id)
        faction.affinity = (faction.affinity or 0) + points
        logger.info(f"Faction {faction.name}: {points:+} affinity (now {faction.affinity})")
        return self._save(faction)

    def delete_faction(self, faction_id: str):
        faction = self.get_faction(faction_id)
        ensure_unused("Faction", faction_id, {
            "faction rivalries": self.db.query(FactionRivalry).filter(
                or_(FactionRivalry.faction1_id == faction_id, FactionRivalry.faction2_id == faction_id)
            ).count(),
        })
        faction.members = []
        self.db.delete(faction)
        self.db.commit()

    def get_faction_for_wrestler(self, wrestler_id: str) -> Optional[Faction]:
        return self._wrestler(wrestler_id).faction

    def get_active_factions(self):
        return self.db.query(Faction).filter(Faction.is_active.is_(True)).order_by(Faction.name).all()

    def get_factions_by_type(self, faction_type: FactionType):
        return [faction for faction in self.get_active_factions() if faction.faction_type == faction_type]

    def get_largest_factions(self, limit: int = 10):
        factions = self.get_active_factions()
        factions.sort(key=lambda faction: faction.member_count, reverse=True)
        return factions[:limit]

    def get_factions_with_active_rivalries(self):
        rivalries = self.db.query(FactionRivalry).filter(FactionRivalry.is_active.is_(True)).all()
        faction_ids = {r.faction1_id for r in rivalries} | {r.faction2_id for r in rivalries}
        return [faction for faction in self.get_active_factions() if faction.faction_id in faction_ids]

    def can_have_rivalry(self, faction1_id: str, faction2_id: str) -> bool:
        if faction1_id == faction2_id:
            return False
        faction1 = self.get_faction(faction1_id)
        faction2 = self.get_faction(faction2_id)
        return bool(faction1.is_active and faction2.is_active and faction1.members and faction2.members)
