from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.projects.schemas import MemberOut
from app.api.projects.services import get_project_users
from app.api.schemas import Envelope, Message, message, ok
from app.core.access import ResourceKind, authorize
from app.core.security import get_current_user, require_admin
from app.db.models.user import User
from app.db.session import get_db
from . import schemas, services

router = APIRouter()


@router.get("/user/{user_id}", response_model=Envelope[List[schemas.UserProjectOut]])
def read_user_projects(user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return ok(services.get_user_projects(db, user_id))


@router.get("/project/{project_id}", response_model=Envelope[List[MemberOut]])
def read_project_members(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    authorize(db, current_user, ResourceKind.PROJECT, project_id)
    return ok(get_project_users(db, project_id))


@router.post("", response_model=Message, status_code=201)
def add_member(
    membership: schemas.MembershipCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    services.grant(db, membership.project_id, membership.user_id)
    return message("User added to project")


@router.delete("/{project_id}/{user_id}", response_model=Message)
def remove_member(
    project_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    services.revoke(db, project_id, user_id)
    return message("User removed from project")
