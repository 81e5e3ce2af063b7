"""Best-effort task audit trail.

``record`` never raises: a failed history write is rolled back and logged so
the primary mutation it describes still succeeds. Call it after the primary
change has been committed.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.db.models.board import TaskHistory
from app.db.models.board.task_history import (
    COMMENT_ADDED, TASK_CREATED, TASK_DELETED, TASK_MOVED, TASK_UPDATED,
)

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("app.audit")

COMMENT_PREVIEW_LENGTH = 100
CREATED_OPTIONAL_FIELDS = ("description", "priority", "assignee_id", "tag", "story_points")


def record(db: Session, task_id: int, user_id: Optional[int], action: str, payload: Optional[Dict[str, Any]] = None):
    audit_logger.info("task=%s user=%s action=%s payload=%s", task_id, user_id, action, payload)
    try:
        db.add(TaskHistory(task_id=task_id, user_id=user_id, action=action, payload=payload))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error adding history entry for task %s (%s): %s", task_id, action, e)


def created_payload(task) -> dict:
    payload = {"title": task.title}
    for field in CREATED_OPTIONAL_FIELDS:
        value = getattr(task, field)
        if value:
            payload[field] = value
    return payload


def diff_changes(before: dict, after: dict) -> List[dict]:
    return [
        {"field": field, "oldValue": before.get(field), "newValue": value}
        for field, value in after.items()
        if before.get(field) != value
    ]


def moved_payload(from_column: Optional[str], to_column: Optional[str], task_title: str) -> dict:
    return {
        "fromColumn": from_column or "unknown",
        "toColumn": to_column or "unknown",
        "taskTitle": task_title,
    }


def deleted_payload(task) -> dict:
    return {"taskTitle": task.title, "taskDescription": task.description}


def comment_payload(content: str) -> dict:
    preview = content[:COMMENT_PREVIEW_LENGTH]
    if len(content) > COMMENT_PREVIEW_LENGTH:
        preview += "..."
    return {"content": preview}


def record_created(db: Session, task, user_id: Optional[int]):
    record(db, task.id, user_id, TASK_CREATED, created_payload(task))


def record_updated(db: Session, task_id: int, user_id: Optional[int], before: dict, after: dict):
    changes = diff_changes(before, after)
    if changes:
        record(db, task_id, user_id, TASK_UPDATED, {"changes": changes})


def record_moved(db: Session, task, user_id: Optional[int], from_column: Optional[str], to_column: Optional[str]):
    record(db, task.id, user_id, TASK_MOVED, moved_payload(from_column, to_column, task.title))


def record_deleted(db: Session, task, user_id: Optional[int]):
    record(db, task.id, user_id, TASK_DELETED, deleted_payload(task))


def record_comment(db: Session, task_id: int, user_id: Optional[int], content: str):
    record(db, task_id, user_id, COMMENT_ADDED, comment_payload(content))


def list_for_task(db: Session, task_id: int) -> List[TaskHistory]:
    return (
        db.query(TaskHistory)
        .options(joinedload(TaskHistory.user))
        .filter(TaskHistory.task_id == task_id)
        .order_by(TaskHistory.created_at.desc(), TaskHistory.id.desc())
        .all()
    )
