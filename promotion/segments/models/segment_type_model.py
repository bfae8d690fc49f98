from sqlalchemy import Column, String, Boolean, DateTime
from promotion.core.database import Base

class SegmentType(Base):
    __tablename__ = "segment_types"

    segment_type_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(1000))
    is_match = Column(Boolean, nullable=False, default=True)
    creation_date = Column(DateTime, nullable=False)
