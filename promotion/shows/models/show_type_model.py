from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
from promotion.core.database import Base

class ShowType(Base):
    __tablename__ = "show_types"

    show_type_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(1000))
    expected_matches = Column(Integer, nullable=False, default=0)
    expected_promos = Column(Integer, nullable=False, default=0)
    creation_date = Column(DateTime, nullable=False)

    shows = relationship("Show", back_populates="show_type")
