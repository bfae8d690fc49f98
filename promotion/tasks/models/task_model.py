from sqlalchemy import Column, String, Date, DateTime
from promotion.core.database import Base

class Task(Base):
    __tablename__ = "tasks"

    task_id = Column(String, primary_key=True, index=True)
    description = Column(String(255), nullable=False)
    due_date = Column(Date)
    creation_date = Column(DateTime, nullable=False)
