import enum
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from promotion.core.database import Base


class DraftStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class Draft(Base):
    __tablename__ = "drafts"

    draft_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    participant_ids = Column(JSON, nullable=False)  # account ids in first-round pick order
    rounds = Column(Integer, nullable=False)
    current_round = Column(Integer, nullable=False, default=1)
    current_pick_number = Column(Integer, nullable=False, default=1)
    status = Column(Enum(DraftStatus), nullable=False, default=DraftStatus.ACTIVE)
    creation_date = Column(DateTime, nullable=False)

    picks = relationship("DraftPick", back_populates="draft", order_by="DraftPick.pick_number")

    @property
    def current_turn_account_id(self):
        if self.status == DraftStatus.COMPLETED:
            return None
        order = list(self.participant_ids)
        # Snake order: even rounds pick in reverse
        if self.current_round % 2 == 0:
            order.reverse()
        position = (self.current_pick_number - 1) % len(order)
        return order[position]


class DraftPick(Base):
    __tablename__ = "draft_picks"
    __table_args__ = (UniqueConstraint("draft_id", "wrestler_id", name="uq_draft_wrestler"),)

    pick_id = Column(String, primary_key=True, index=True)
    draft_id = Column(String, ForeignKey("drafts.draft_id"), nullable=False)
    account_id = Column(String, ForeignKey("accounts.account_id"), nullable=False)
    wrestler_id = Column(String, ForeignKey("wrestlers.wrestler_id"), nullable=False)
    round = Column(Integer, nullable=False)
    pick_number = Column(Integer, nullable=False)
    pick_date = Column(DateTime, nullable=False)

    draft = relationship("Draft", back_populates="picks")
    account = relationship("Account")
    wrestler = relationship("Wrestler")
