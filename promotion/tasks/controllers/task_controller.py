from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.tasks.schemas.task_schema import TaskCreate, TaskUpdate, TaskRead
from promotion.tasks.services.task_service import TaskService

router = APIRouter()


@router.get("/", response_model=List[TaskRead])
def list_tasks(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return TaskService(db).list_tasks(page, size)


@router.get("/count")
def count_tasks(db: Session = Depends(get_db)):
    return {"count": TaskService(db).count()}


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: str, db: Session = Depends(get_db)):
    return TaskService(db).get_task(task_id)


@router.post("/", response_model=TaskRead, status_code=201)
def create_task(payload: TaskCreate, db: Session = Depends(get_db)):
    return TaskService(db).create_task(payload.description, payload.due_date)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(task_id: str, payload: TaskUpdate, db: Session = Depends(get_db)):
    return TaskService(db).update_task(task_id, payload.description, payload.due_date)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    TaskService(db).delete_task(task_id)
