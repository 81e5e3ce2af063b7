"""Membership-based authorization for project-scoped resources.

A user may read and write anything that belongs to a project they are a
member of. Admins pass every check. Columns, tasks and comments are resolved
to their owning project first.
"""
from enum import Enum

from sqlalchemy.orm import Session

from app.core.errors import AuthorizationError, NotFoundError
from app.db.models.board import BoardColumn, Comment, Project, ProjectMember, Task
from app.db.models.user import User


class ResourceKind(str, Enum):
    PROJECT = "project"
    COLUMN = "column"
    TASK = "task"
    COMMENT = "comment"


def _resolve_project_id(db: Session, kind: ResourceKind, resource_id: int) -> int:
    if kind == ResourceKind.PROJECT:
        row = db.query(Project.id).filter(Project.id == resource_id).first()
    elif kind == ResourceKind.COLUMN:
        row = db.query(BoardColumn.project_id).filter(BoardColumn.id == resource_id).first()
    elif kind == ResourceKind.TASK:
        row = db.query(Task.project_id).filter(Task.id == resource_id).first()
    elif kind == ResourceKind.COMMENT:
        row = (
            db.query(Task.project_id)
            .join(Comment, Comment.task_id == Task.id)
            .filter(Comment.id == resource_id)
            .first()
        )
    else:
        raise ValueError(f"Unknown resource kind: {kind}")

    if row is None:
        raise NotFoundError(f"{ResourceKind(kind).value.capitalize()} not found")
    return row[0]


def is_member(db: Session, project_id: int, user_id: int) -> bool:
    return db.query(ProjectMember).filter(
        ProjectMember.project_id == project_id,
        ProjectMember.user_id == user_id,
    ).first() is not None


def check_project_access(db: Session, user: User, project_id: int):
    if user.is_admin:
        return
    if not is_member(db, project_id, user.id):
        raise AuthorizationError("Access to project denied")


def authorize(db: Session, user: User, kind: ResourceKind, resource_id: int) -> int:
    """Return the owning project id, or raise NotFoundError / AuthorizationError."""
    project_id = _resolve_project_id(db, ResourceKind(kind), resource_id)
    check_project_access(db, user, project_id)
    return project_id
