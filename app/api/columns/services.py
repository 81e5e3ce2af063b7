import logging

from sqlalchemy.orm import Session

from app.core import ordering
from app.core.errors import ValidationError
from app.db.models.board import BoardColumn
from . import schemas

logger = logging.getLogger(__name__)


def get_columns_by_project(db: Session, project_id: int):
    return (
        db.query(BoardColumn)
        .filter(BoardColumn.project_id == project_id)
        .order_by(BoardColumn.position, BoardColumn.id)
        .all()
    )


def get_column(db: Session, column_id: int):
    return db.query(BoardColumn).filter(BoardColumn.id == column_id).first()


def create_column(db: Session, column: schemas.ColumnCreate) -> BoardColumn:
    name = column.name.strip()
    if not name:
        raise ValidationError("name is required")

    scope = ordering.column_scope(column.project_id)
    db_column = BoardColumn(
        project_id=column.project_id,
        name=name,
        position=ordering.append_position(db, scope),
    )
    db.add(db_column)
    db.commit()
    db.refresh(db_column)
    return db_column


def update_column(db: Session, column_id: int, column: schemas.ColumnUpdate):
    db_column = get_column(db, column_id)
    if db_column:
        data = column.model_dump(exclude_unset=True)
        if data.get("name") is not None:
            name = data["name"].strip()
            if not name:
                raise ValidationError("name is required")
            db_column.name = name
        if data.get("position") is not None:
            ordering.move_within_scope(
                db, ordering.column_scope(db_column.project_id), db_column, data["position"])
        db.commit()
        db.refresh(db_column)
    return db_column


def delete_column(db: Session, column_id: int):
    db_column = get_column(db, column_id)
    if db_column:
        project_id = db_column.project_id
        db.delete(db_column)
        ordering.compact(db, ordering.column_scope(project_id))
        db.commit()
        logger.info("Column %s deleted from project %s", column_id, project_id)
    return db_column


def reorder_columns(db: Session, project_id: int, column_ids):
    columns = ordering.reorder_all(db, ordering.column_scope(project_id), list(column_ids))
    db.commit()
    logger.info("Columns of project %s reordered", project_id)
    return columns
