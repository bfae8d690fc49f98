from sqlalchemy import Column, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from promotion.core.database import Base

class Show(Base):
    __tablename__ = "shows"

    show_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(4000))
    show_type_id = Column(String, ForeignKey("show_types.show_type_id"), nullable=False)
    show_date = Column(Date)
    season_id = Column(String, ForeignKey("seasons.season_id"))
    creation_date = Column(DateTime, nullable=False)

    show_type = relationship("ShowType", back_populates="shows")
    season = relationship("Season", back_populates="shows")
    segments = relationship(
        "Segment", back_populates="show", order_by="Segment.segment_order", cascade="all, delete-orphan"
    )
