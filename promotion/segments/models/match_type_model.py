from sqlalchemy import Column, String, DateTime
from promotion.core.database import Base

class MatchType(Base):
    __tablename__ = "match_types"

    match_type_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(1000))
    creation_date = Column(DateTime, nullable=False)
