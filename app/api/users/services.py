import logging

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.hashing import Hasher
from app.db.models.board import ProjectMember, Task
from app.db.models.user import User
from . import schemas

logger = logging.getLogger(__name__)


def get_users(db: Session):
    return db.query(User).order_by(User.email).all()


def get_user(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, user: schemas.UserCreate) -> User:
    if db.query(User).filter(User.email == user.email).first():
        raise ConflictError("User with this email already exists")

    db_user = User(
        email=user.email,
        name=user.name,
        password_hash=Hasher.hash_password(user.password),
        role=user.role,
        avatar_url=user.avatar_url,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("New user created: %s (%s)", db_user.email, db_user.role)
    return db_user


def update_user(db: Session, user_id: int, user: schemas.UserUpdate):
    db_user = get_user(db, user_id)
    if not db_user:
        return None

    data = user.model_dump(exclude_unset=True)
    if data.get("name") is not None:
        data["name"] = data["name"].strip()
        if not data["name"]:
            raise ValidationError("name cannot be empty")
    password = data.pop("password", None)
    if password:
        db_user.password_hash = Hasher.hash_password(password)
    for key, value in data.items():
        if value is not None or key == "avatar_url":
            setattr(db_user, key, value)

    db.commit()
    db.refresh(db_user)
    return db_user


def delete_user(db: Session, user_id: int) -> User:
    db_user = get_user(db, user_id)
    if not db_user:
        raise NotFoundError("User not found")
    if db_user.is_admin:
        raise ValidationError("Admin accounts cannot be deleted")

    # Comments, memberships and history attribution follow the FK rules;
    # assignments are cleared here so loaded tasks stay consistent.
    db.query(Task).filter(Task.assignee_id == user_id).update(
        {Task.assignee_id: None}, synchronize_session=False)
    db.query(ProjectMember).filter(ProjectMember.user_id == user_id).delete(synchronize_session=False)
    email = db_user.email
    db.delete(db_user)
    db.commit()
    logger.info("User %s deleted", email)
    return db_user
