import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core import history, ordering
from app.core.errors import NotFoundError, ValidationError
from app.db.models.board import BoardColumn, Task
from app.db.models.user import User
from . import schemas

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = ("description", "assignee_id", "tag", "story_points")


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _check_assignee(db: Session, assignee_id: Optional[int]):
    if assignee_id is not None and not db.query(User.id).filter(User.id == assignee_id).first():
        raise ValidationError("Assignee not found")


def next_seq(db: Session, project_id: int) -> int:
    max_seq = db.query(func.max(Task.seq)).filter(Task.project_id == project_id).scalar()
    return (max_seq or 0) + 1


def get_board(db: Session, project_id: int) -> dict:
    columns = (
        db.query(BoardColumn)
        .filter(BoardColumn.project_id == project_id)
        .order_by(BoardColumn.position, BoardColumn.id)
        .all()
    )
    tasks = (
        db.query(Task)
        .options(joinedload(Task.assignee), joinedload(Task.project))
        .filter(Task.project_id == project_id)
        .order_by(Task.column_id, Task.position, Task.id)
        .all()
    )

    tasks_by_column = {column.id: [] for column in columns}
    for task in tasks:
        tasks_by_column.setdefault(task.column_id, []).append(task)
    logger.debug("Tasks retrieved for project %s", project_id)
    return {"columns": columns, "tasks_by_column": tasks_by_column}


def get_task(db: Session, task_id: int):
    return db.query(Task).filter(Task.id == task_id).first()


def create_task(db: Session, task: schemas.TaskCreate, user: User) -> Task:
    column = db.query(BoardColumn).filter(BoardColumn.id == task.column_id).first()
    if not column:
        raise NotFoundError("Column not found")
    if column.project_id != task.project_id:
        raise ValidationError("Column does not belong to the project")
    _check_assignee(db, task.assignee_id)

    title = task.title.strip()
    if not title:
        raise ValidationError("title is required")

    db_task = Task(
        project_id=task.project_id,
        column_id=task.column_id,
        title=title,
        description=_strip(task.description) or "",
        priority=task.priority or "medium",
        assignee_id=task.assignee_id,
        tag=_strip(task.tag) or "",
        story_points=task.story_points,
        seq=next_seq(db, task.project_id),
        position=ordering.append_position(db, ordering.task_scope(task.column_id)),
    )
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    logger.info("New task created: %s in project %s", db_task.title, db_task.project_id)

    history.record_created(db, db_task, user.id)
    return db_task


def update_task(db: Session, task_id: int, task: schemas.TaskUpdate, user: User):
    db_task = get_task(db, task_id)
    if not db_task:
        return None

    before = db_task.snapshot()
    data = {key: _strip(value) for key, value in task.model_dump(exclude_unset=True).items()}
    for key, value in data.items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        if key == "title" and not value:
            raise ValidationError("title cannot be empty")
        if key == "assignee_id":
            _check_assignee(db, value)
        setattr(db_task, key, value)

    db.commit()
    db.refresh(db_task)
    logger.info("Task %s updated", task_id)

    history.record_updated(db, db_task.id, user.id, before, db_task.snapshot())
    return db_task


def move_task(db: Session, move: schemas.TaskMove, user: User) -> Task:
    db_task = get_task(db, move.task_id)
    if not db_task:
        raise NotFoundError("Task not found")

    dest_column = db.query(BoardColumn).filter(BoardColumn.id == move.dest_column_id).first()
    if not dest_column:
        raise NotFoundError("Target column not found")
    if dest_column.project_id != db_task.project_id:
        raise ValidationError("Cannot move a task to a column of another project")

    source_column = db_task.column
    if move.source_column_id is not None and move.source_column_id != source_column.id:
        logger.debug("Task %s: client source column %s differs from stored %s",
                     db_task.id, move.source_column_id, source_column.id)

    old_position = db_task.position
    if dest_column.id == source_column.id:
        ordering.move_within_scope(db, ordering.task_scope(dest_column.id), db_task, move.dest_index)
    else:
        ordering.move_across_scopes(
            db, db_task,
            ordering.task_scope(source_column.id),
            ordering.task_scope(dest_column.id),
            move.dest_index,
        )
    changed = dest_column.id != source_column.id or db_task.position != old_position
    from_name, to_name = source_column.name, dest_column.name
    db.commit()
    db.refresh(db_task)
    logger.info("Task %s moved from %s to %s", db_task.id, from_name, to_name)

    if changed:
        history.record_moved(db, db_task, user.id, from_name, to_name)
    return db_task


def delete_task(db: Session, task_id: int, user: User):
    db_task = get_task(db, task_id)
    if not db_task:
        return None

    history.record_deleted(db, db_task, user.id)

    column_id = db_task.column_id
    db.delete(db_task)
    ordering.compact(db, ordering.task_scope(column_id))
    db.commit()
    logger.info("Task %s deleted", task_id)
    return db_task
