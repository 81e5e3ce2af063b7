from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.schemas import Envelope, Message, message, ok
from app.core.access import ResourceKind, authorize
from app.core.errors import NotFoundError
from app.core.security import get_current_user, require_admin
from app.db.models.user import User
from app.db.session import get_db
from . import schemas, services

router = APIRouter()


@router.get("", response_model=Envelope[List[schemas.ProjectOut]])
def read_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ok(services.get_projects(db, current_user))


@router.post("", response_model=Envelope[schemas.ProjectOut], status_code=201)
def create_project(
    project: schemas.ProjectCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    return ok(services.create_project(db, project, admin))


@router.get("/{project_id}", response_model=Envelope[schemas.ProjectOut])
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.PROJECT, project_id)
    return ok(services.get_project(db, project_id))


@router.put("/{project_id}", response_model=Envelope[schemas.ProjectOut])
def update_project(
    project_id: int,
    project: schemas.ProjectUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    updated = services.update_project(db, project_id, project)
    if not updated:
        raise NotFoundError("Project not found")
    return ok(updated)


@router.delete("/{project_id}", response_model=Message)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    deleted = services.delete_project(db, project_id)
    if not deleted:
        raise NotFoundError("Project not found")
    return message("Project deleted successfully")


@router.get("/{project_id}/users", response_model=Envelope[List[schemas.MemberOut]])
def read_project_users(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.PROJECT, project_id)
    return ok(services.get_project_users(db, project_id))


@router.get("/{project_id}/stats", response_model=Envelope[schemas.ProjectStats])
def read_project_stats(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.PROJECT, project_id)
    return ok(services.get_project_stats(db, project_id))
