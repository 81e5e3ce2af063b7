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


@router.get("/by-project/{project_id}", response_model=Envelope[schemas.BoardOut])
def tasks_by_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.PROJECT, project_id)
    return ok(services.get_board(db, project_id))


@router.post("", response_model=Envelope[schemas.TaskOut], status_code=201)
def create_task(
    task: schemas.TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.PROJECT, task.project_id)
    return ok(services.create_task(db, task, current_user))


@router.post("/move", response_model=Envelope[schemas.TaskOut])
def move_task(
    move: schemas.TaskMove,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.TASK, move.task_id)
    return ok(services.move_task(db, move, current_user))


@router.get("/{task_id}", response_model=Envelope[schemas.TaskOut])
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.TASK, task_id)
    return ok(services.get_task(db, task_id))


@router.put("/{task_id}", response_model=Envelope[schemas.TaskOut])
def update_task(
    task_id: int,
    task: schemas.TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.TASK, task_id)
    updated = services.update_task(db, task_id, task, current_user)
    if not updated:
        raise NotFoundError("Task not found")
    return ok(updated)


@router.delete("/{task_id}", response_model=Message)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.TASK, task_id)
    deleted = services.delete_task(db, task_id, current_user)
    if not deleted:
        raise NotFoundError("Task not found")
    return message("Task deleted successfully")
