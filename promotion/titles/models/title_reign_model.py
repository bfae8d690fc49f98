from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from promotion.core.database import Base

title_reign_champions = Table(
    "title_reign_champions",
    Base.metadata,
    Column("reign_id", String, ForeignKey("title_reigns.reign_id"), primary_key=True),
    Column("wrestler_id", String, ForeignKey("wrestlers.wrestler_id"), primary_key=True),
)


class TitleReign(Base):
    __tablename__ = "title_reigns"

    reign_id = Column(String, primary_key=True, index=True)
    title_id = Column(String, ForeignKey("titles.title_id"), nullable=False)
    reign_number = Column(Integer, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime)
    won_at_segment_id = Column(String, ForeignKey("segments.segment_id"))

    title = relationship("Title", back_populates="reigns")
    champions = relationship("Wrestler", secondary=title_reign_champions, back_populates="reigns")
    won_at_segment = relationship("Segment", back_populates="reigns_won")

    @property
    def is_current(self) -> bool:
        return self.end_date is None

    def length_days(self, now) -> int:
        end = self.end_date or now
        return max(0, (end - self.start_date).days)
