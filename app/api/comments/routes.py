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


@router.post("", response_model=Envelope[schemas.CommentOut], status_code=201)
def create_comment(
    comment: schemas.CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.TASK, comment.task_id)
    return ok(services.create_comment(db, comment, current_user))


@router.get("/by-task/{task_id}", response_model=Envelope[List[schemas.CommentOut]])
def get_task_comments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.TASK, task_id)
    return ok(services.get_comments_for_task(db, task_id))


@router.put("/{comment_id}", response_model=Envelope[schemas.CommentOut])
def update_comment(
    comment_id: int,
    comment: schemas.CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.COMMENT, comment_id)
    updated = services.update_comment(db, comment_id, comment, current_user.id)
    if not updated:
        raise NotFoundError("Comment not found")
    return ok(updated)


@router.delete("/{comment_id}", response_model=Message)
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(db, current_user, ResourceKind.COMMENT, comment_id)
    deleted = services.delete_comment(db, comment_id, current_user.id)
    if not deleted:
        raise NotFoundError("Comment not found")
    return message("Comment deleted")
