from sqlalchemy.orm import Session, joinedload

from app.core import history
from app.core.errors import ValidationError
from app.db.models.board import Comment
from app.db.models.user import User
from . import schemas


def _clean(content: str) -> str:
    content = content.strip()
    if not content:
        raise ValidationError("content is required")
    return content


def create_comment(db: Session, comment: schemas.CommentCreate, user: User) -> Comment:
    content = _clean(comment.content)
    db_comment = Comment(task_id=comment.task_id, user_id=user.id, content=content)
    db.add(db_comment)
    db.commit()
    db.refresh(db_comment)

    history.record_comment(db, comment.task_id, user.id, content)
    return db_comment


def get_own_comment(db: Session, comment_id: int, user_id: int):
    return db.query(Comment).filter(Comment.id == comment_id, Comment.user_id == user_id).first()


def get_comments_for_task(db: Session, task_id: int):
    return (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.task_id == task_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )


def update_comment(db: Session, comment_id: int, comment: schemas.CommentUpdate, user_id: int):
    db_comment = get_own_comment(db, comment_id, user_id)
    if db_comment:
        db_comment.content = _clean(comment.content)
        db.commit()
        db.refresh(db_comment)
    return db_comment


def delete_comment(db: Session, comment_id: int, user_id: int):
    db_comment = get_own_comment(db, comment_id, user_id)
    if db_comment:
        db.delete(db_comment)
        db.commit()
    return db_comment
