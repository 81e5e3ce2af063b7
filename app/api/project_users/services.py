import logging

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.db.models.board import Project, ProjectMember
from app.db.models.user import User

logger = logging.getLogger(__name__)


def get_user_projects(db: Session, user_id: int):
    return (
        db.query(Project)
        .join(ProjectMember, ProjectMember.project_id == Project.id)
        .filter(ProjectMember.user_id == user_id)
        .order_by(Project.name)
        .all()
    )


def get_membership(db: Session, project_id: int, user_id: int):
    return db.query(ProjectMember).filter(
        ProjectMember.project_id == project_id,
        ProjectMember.user_id == user_id,
    ).first()


def grant(db: Session, project_id: int, user_id: int) -> ProjectMember:
    if not db.query(Project.id).filter(Project.id == project_id).first():
        raise NotFoundError("Project not found")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    if get_membership(db, project_id, user_id):
        raise ConflictError("User already has access to the project")

    membership = ProjectMember(project_id=project_id, user_id=user_id)
    db.add(membership)
    db.commit()
    logger.info("User %s added to project %s", user.email, project_id)
    return membership


def revoke(db: Session, project_id: int, user_id: int):
    membership = get_membership(db, project_id, user_id)
    if not membership:
        raise NotFoundError("User has no access to the project")
    db.delete(membership)
    db.commit()
    logger.info("User %s removed from project %s", user_id, project_id)
