from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from promotion.core.database import Base

class Referee(Base):
    __tablename__ = "referees"

    ref_id = Column(String, primary_key=True, index=True)
    ref_name = Column(String(255), unique=True, nullable=False)
    description = Column(String(1000))
    creation_date = Column(DateTime, nullable=False)

    segments = relationship("Segment", back_populates="referee")
