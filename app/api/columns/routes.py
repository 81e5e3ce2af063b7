from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.schemas import Envelope, Message, message, ok
from app.core.access import ResourceKind, authorize
from app.core.errors import NotFoundError
from app.core.security import get_current_user
from app.db.models.user import User
from app.db.session import get_db
from . import schemas, services

router = APIRouter()


@router.get("/by-project/{project_id}", response_model=Envelope[List[schemas.ColumnOut]])
def get_project_columns(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.PROJECT, project_id)
    return ok(services.get_columns_by_project(db, project_id))


@router.post("", response_model=Envelope[schemas.ColumnOut], status_code=201)
def create_column(
    column: schemas.ColumnCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.PROJECT, column.project_id)
    return ok(services.create_column(db, column))


@router.post("/reorder", response_model=Envelope[List[schemas.ColumnOut]])
def reorder_columns(
    body: schemas.ColumnReorder,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.PROJECT, body.project_id)
    columns = services.reorder_columns(db, body.project_id, [item.id for item in body.column_order])
    return ok(columns)


@router.put("/{column_id}", response_model=Envelope[schemas.ColumnOut])
def update_column(
    column_id: int,
    column: schemas.ColumnUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.COLUMN, column_id)
    updated = services.update_column(db, column_id, column)
    if not updated:
        raise NotFoundError("Column not found")
    return ok(updated)


@router.delete("/{column_id}", response_model=Message)
def delete_column(
    column_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.COLUMN, column_id)
    deleted = services.delete_column(db, column_id)
    if not deleted:
        raise NotFoundError("Column not found")
    return message("Column deleted")
