from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from promotion.core.database import Base

class Npc(Base):
    __tablename__ = "npcs"

    npc_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    npc_type = Column(String(50), nullable=False, default="Other")  # Commentator, Manager, Authority...
    description = Column(String(4000))
    creation_date = Column(DateTime, nullable=False)

    managed_wrestlers = relationship("Wrestler", back_populates="manager")
