from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from promotion.core.database import Base

class Account(Base):
    __tablename__ = "accounts"

    account_id = Column(String, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False)
    legacy_score = Column(Integer, nullable=False, default=0)
    prestige = Column(Integer, nullable=False, default=0)
    shows_booked = Column(Integer, nullable=False, default=0)
    creation_date = Column(DateTime, nullable=False)

    wrestlers = relationship("Wrestler", back_populates="account")
    achievements = relationship("AccountAchievement", back_populates="account", cascade="all, delete-orphan")


class AccountAchievement(Base):
    __tablename__ = "account_achievements"
    __table_args__ = (UniqueConstraint("account_id", "achievement_key"),)

    account_achievement_id = Column(String, primary_key=True, index=True)
    account_id = Column(String, ForeignKey("accounts.account_id"), nullable=False)
    achievement_key = Column(String(50), nullable=False)
    xp_value = Column(Integer, nullable=False, default=0)
    unlocked_date = Column(DateTime, nullable=False)

    account = relationship("Account", back_populates="achievements")
