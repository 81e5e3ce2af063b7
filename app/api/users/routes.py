from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth.schemas import UserOut
from app.api.schemas import Envelope, Message, message, ok
from app.core.errors import NotFoundError
from app.core.security import require_admin
from app.db.models.user import User
from app.db.session import get_db
from . import schemas, services

router = APIRouter()


@router.get("", response_model=Envelope[List[UserOut]])
def list_users(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return ok(services.get_users(db))


@router.post("", response_model=Envelope[UserOut], status_code=201)
def create_user(
    user: schemas.UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return ok(services.create_user(db, user))


@router.put("/{user_id}", response_model=Envelope[UserOut])
def update_user(
    user_id: int,
    user: schemas.UserUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    updated = services.update_user(db, user_id, user)
    if not updated:
        raise NotFoundError("User not found")
    return ok(updated)


@router.delete("/{user_id}", response_model=Message)
def delete_user(user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    services.delete_user(db, user_id)
    return message("User deleted")
