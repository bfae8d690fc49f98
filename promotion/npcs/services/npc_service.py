from typing import Optional
from sqlalchemy.orm import Session
from promotion.npcs.models import Npc
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError
from promotion.core.utils import generate_custom_id, paginate, utcnow

class NpcService:
    def __init__(self, db: Session):
        self.db = db

    def list_npcs(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Npc).order_by(Npc.name), page, size)

    def count(self) -> int:
        return self.db.query(Npc).count()

    def get_npc(self, npc_id: str) -> Npc:
        npc = self.db.query(Npc).filter(Npc.npc_id == npc_id).first()
        if not npc:
            raise EntityNotFoundError("Npc", npc_id)
        return npc

    def find_by_name(self, name: str) -> Optional[Npc]:
        return self.db.query(Npc).filter(Npc.name == name).first()

    def find_by_type(self, npc_type: str):
        return self.db.query(Npc).filter(Npc.npc_type == npc_type).order_by(Npc.name).all()

    def save(self, npc: Npc) -> Npc:
        """Insert or update an NPC, stamping ids and creation date for new rows."""
        existing = self.find_by_name(npc.name)
        if existing is not None and existing is not npc:
            raise DuplicateEntityError("Npc", npc.name)
        if not npc.npc_id:
            npc.npc_id = generate_custom_id(self.db, Npc, "NPC", "npc_id")
        if npc.creation_date is None:
            npc.creation_date = utcnow()
        try:
            self.db.add(npc)
            self.db.commit()
            self.db.refresh(npc)
            return npc
        except Exception:
            self.db.rollback()
            raise

    def create_npc(self, name: str, npc_type: str = "Other", description: Optional[str] = None) -> Npc:
        return self.save(Npc(name=name, npc_type=npc_type, description=description))

    def update_npc(self, npc_id: str, **changes) -> Npc:
        npc = self.get_npc(npc_id)
        for key, value in changes.items():
            if value is not None:
                setattr(npc, key, value)
        return self.save(npc)

    def delete_npc(self, npc_id: str):
        npc = self.get_npc(npc_id)
        self.db.delete(npc)
        self.db.commit()
