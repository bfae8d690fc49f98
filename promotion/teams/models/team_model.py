from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from promotion.core.database import Base

class Team(Base):
    __tablename__ = "teams"

    team_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    wrestler1_id = Column(String, ForeignKey("wrestlers.wrestler_id"), nullable=False)
    wrestler2_id = Column(String, ForeignKey("wrestlers.wrestler_id"), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    creation_date = Column(DateTime, nullable=False)

    wrestler1 = relationship("Wrestler", foreign_keys=[wrestler1_id])
    wrestler2 = relationship("Wrestler", foreign_keys=[wrestler2_id])

    @property
    def members(self):
        return [self.wrestler1, self.wrestler2]

    @property
    def combined_fans(self) -> int:
        return sum(member.fans or 0 for member in self.members)
