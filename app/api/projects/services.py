import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.db.models.board import BoardColumn, Project, ProjectMember, Task
from app.db.models.user import User
from app.db.seed import add_default_columns
from . import schemas

logger = logging.getLogger(__name__)


def _ensure_code_free(db: Session, code: str, exclude_id: int = None):
    query = db.query(Project.id).filter(Project.code == code)
    if exclude_id is not None:
        query = query.filter(Project.id != exclude_id)
    if query.first():
        raise ConflictError("Project with this code already exists")


def create_project(db: Session, project: schemas.ProjectCreate, creator: User) -> Project:
    _ensure_code_free(db, project.code)

    db_project = Project(code=project.code, name=project.name)
    db.add(db_project)
    db.flush()  # to get the id

    db.add(ProjectMember(project_id=db_project.id, user_id=creator.id))
    add_default_columns(db, db_project)
    db.commit()
    db.refresh(db_project)
    logger.info("New project created: %s (%s) by %s", db_project.name, db_project.code, creator.email)
    return db_project


def get_projects(db: Session, user: User):
    query = db.query(Project)
    if not user.is_admin:
        query = query.join(ProjectMember, ProjectMember.project_id == Project.id).filter(
            ProjectMember.user_id == user.id)
    return query.order_by(Project.name).all()


def get_project(db: Session, project_id: int):
    return db.query(Project).filter(Project.id == project_id).first()


def update_project(db: Session, project_id: int, project: schemas.ProjectUpdate):
    db_project = get_project(db, project_id)
    if db_project:
        data = project.model_dump(exclude_unset=True, exclude_none=True)
        if "code" in data:
            _ensure_code_free(db, data["code"], exclude_id=project_id)
        if "name" in data:
            data["name"] = data["name"].strip()
        for key, value in data.items():
            setattr(db_project, key, value)
        db.commit()
        db.refresh(db_project)
        logger.info("Project %s updated", project_id)
    return db_project


def delete_project(db: Session, project_id: int):
    db_project = get_project(db, project_id)
    if db_project:
        name, code = db_project.name, db_project.code
        db.delete(db_project)
        db.commit()
        logger.info("Project %s (%s) deleted", name, code)
    return db_project


def get_project_users(db: Session, project_id: int):
    return (
        db.query(User)
        .join(ProjectMember, ProjectMember.user_id == User.id)
        .filter(ProjectMember.project_id == project_id)
        .order_by(User.name)
        .all()
    )


def get_project_stats(db: Session, project_id: int) -> dict:
    rows = (
        db.query(BoardColumn.id, BoardColumn.name, func.count(Task.id))
        .outerjoin(Task, Task.column_id == BoardColumn.id)
        .filter(BoardColumn.project_id == project_id)
        .group_by(BoardColumn.id, BoardColumn.name, BoardColumn.position)
        .order_by(BoardColumn.position)
        .all()
    )
    return {
        "columns": [
            {"column_id": column_id, "column_name": name, "task_count": count}
            for column_id, name, count in rows
        ],
        "total_users": db.query(ProjectMember).filter(ProjectMember.project_id == project_id).count(),
        "total_tasks": db.query(Task).filter(Task.project_id == project_id).count(),
    }
