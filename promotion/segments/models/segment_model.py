from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from promotion.core.database import Base

segment_participants = Table(
    "segment_participants",
    Base.metadata,
    Column("segment_id", String, ForeignKey("segments.segment_id"), primary_key=True),
    Column("wrestler_id", String, ForeignKey("wrestlers.wrestler_id"), primary_key=True),
)

segment_winners = Table(
    "segment_winners",
    Base.metadata,
    Column("segment_id", String, ForeignKey("segments.segment_id"), primary_key=True),
    Column("wrestler_id", String, ForeignKey("wrestlers.wrestler_id"), primary_key=True),
)

segment_titles = Table(
    "segment_titles",
    Base.metadata,
    Column("segment_id", String, ForeignKey("segments.segment_id"), primary_key=True),
    Column("title_id", String, ForeignKey("titles.title_id"), primary_key=True),
)


class Segment(Base):
    __tablename__ = "segments"

    segment_id = Column(String, primary_key=True, index=True)
    show_id = Column(String, ForeignKey("shows.show_id"), nullable=False)
    segment_type_id = Column(String, ForeignKey("segment_types.segment_type_id"), nullable=False)
    match_type_id = Column(String, ForeignKey("match_types.match_type_id"))
    referee_id = Column(String, ForeignKey("referees.ref_id"))
    segment_order = Column(Integer, nullable=False, default=1)
    is_title_segment = Column(Boolean, nullable=False, default=False)
    stipulation = Column(String(255))
    narration = Column(Text)
    summary = Column(Text)
    creation_date = Column(DateTime, nullable=False)

    show = relationship("Show", back_populates="segments")
    segment_type = relationship("SegmentType")
    match_type = relationship("MatchType")
    referee = relationship("Referee", back_populates="segments")
    participants = relationship("Wrestler", secondary=segment_participants)
    winners = relationship("Wrestler", secondary=segment_winners)
    titles = relationship("Title", secondary=segment_titles)
    # Deleting a segment keeps the reign and forgets where it was won
    reigns_won = relationship("TitleReign", back_populates="won_at_segment")
