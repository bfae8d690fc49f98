from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from promotion.tasks.models import Task
from promotion.core.exceptions import EntityNotFoundError
from promotion.core.utils import generate_custom_id, paginate, utcnow

class TaskService:
    def __init__(self, db: Session):
        self.db = db

    def create_task(self, description: str, due_date: Optional[date] = None) -> Task:
        if len(description) > 255:
            raise ValueError("Task description must be at most 255 characters")
        task = Task(
            task_id=generate_custom_id(self.db, Task, "TK", "task_id"),
            description=description,
            due_date=due_date,
            creation_date=utcnow(),
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def list_tasks(self, page: int = 0, size: Optional[int] = None):
        # Tasks without a due date sort last
        query = self.db.query(Task).order_by(Task.due_date.is_(None), Task.due_date, Task.creation_date)
        return paginate(query, page, size)

    def count(self) -> int:
        return self.db.query(Task).count()

    def get_task(self, task_id: str) -> Task:
        task = self.db.query(Task).filter(Task.task_id == task_id).first()
        if not task:
            raise EntityNotFoundError("Task", task_id)
        return task

    def update_task(self, task_id: str, description: Optional[str] = None, due_date: Optional[date] = None):
        task = self.get_task(task_id)
        if description:
            task.description = description
        if due_date is not None:
            task.due_date = due_date
        self.db.commit()
        self.db.refresh(task)
        return task

    def delete_task(self, task_id: str):
        self.db.delete(self.get_task(task_id))
        self.db.commit()
