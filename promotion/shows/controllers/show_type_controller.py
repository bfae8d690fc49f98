from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from promotion.core.database import get_db
from promotion.shows.schemas.show_schema import ShowTypeCreate, ShowTypeUpdate, ShowTypeRead
from promotion.shows.services.show_type_service import ShowTypeService

router = APIRouter()


@router.get("/", response_model=List[ShowTypeRead])
def list_show_types(page: int = 0, size: Optional[int] = None, db: Session = Depends(get_db)):
    return ShowTypeService(db).list_show_types(page, size)


@router.get("/count")
def count_show_types(db: Session = Depends(get_db)):
    return {"count": ShowTypeService(db).count()}


@router.get("/{show_type_id}", response_model=ShowTypeRead)
def get_show_type(show_type_id: str, db: Session = Depends(get_db)):
    return ShowTypeService(db).get_show_type(show_type_id)


@router.post("/", response_model=ShowTypeRead, status_code=201)
def create_show_type(payload: ShowTypeCreate, db: Session = Depends(get_db)):
    return ShowTypeService(db).create_show_type(**payload.model_dump())


@router.put("/{show_type_id}", response_model=ShowTypeRead)
def update_show_type(show_type_id: str, payload: ShowTypeUpdate, db: Session = Depends(get_db)):
    return ShowTypeService(db).update_show_type(show_type_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{show_type_id}", status_code=204)
def delete_show_type(show_type_id: str, db: Session = Depends(get_db)):
    ShowTypeService(db).delete_show_type(show_type_id)
