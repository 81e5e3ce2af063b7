"""Integer position bookkeeping for columns within a project and tasks within a column.

Siblings in a scope are ordered by ``(position, id)``. Appending never touches
siblings; every move or reorder rewrites the whole scope to ``0..n-1``. Nothing
here commits: callers commit once so a renumbering pass lands atomically.
"""
from typing import Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.db.models.board import BoardColumn, Task


class Scope:
    """The ordered collection a position is relative to."""

    def __init__(self, model, parent_attr: str, parent_id: int):
        self.model = model
        self.parent_attr = parent_attr
        self.parent_id = parent_id

    @property
    def _parent_column(self):
        return getattr(self.model, self.parent_attr)

    def contains(self, entity) -> bool:
        return getattr(entity, self.parent_attr) == self.parent_id

    def siblings(self, db: Session) -> List:
        # Sessions run with autoflush off; pending deletes and reparents must be visible here
        db.flush()
        return (
            db.query(self.model)
            .filter(self._parent_column == self.parent_id)
            .order_by(self.model.position, self.model.id)
            .all()
        )

    def __repr__(self):
        return f"Scope({self.model.__name__}.{self.parent_attr}={self.parent_id})"


def column_scope(project_id: int) -> Scope:
    return Scope(BoardColumn, "project_id", project_id)


def task_scope(column_id: int) -> Scope:
    return Scope(Task, "column_id", column_id)


def append_position(db: Session, scope: Scope) -> int:
    max_pos = (
        db.query(func.max(scope.model.position))
        .filter(scope._parent_column == scope.parent_id)
        .scalar()
    )
    return 0 if max_pos is None else max_pos + 1


def _renumber(entities: Iterable):
    for index, entity in enumerate(entities):
        if entity.position != index:
            entity.position = index


def clamp_index(index: int, length: int) -> int:
    return max(0, min(index, length))


def move_within_scope(db: Session, scope: Scope, entity, target_index: int) -> int:
    """Place ``entity`` at ``target_index`` in ``scope`` and renumber; returns the final index."""
    if entity is None:
        raise NotFoundError(f"{scope.model.__name__} not found")
    if not scope.contains(entity):
        raise ValidationError(f"{scope.model.__name__} {entity.id} does not belong to {scope!r}")

    ordered = [e for e in scope.siblings(db) if e.id != entity.id]
    index = clamp_index(target_index, len(ordered))
    ordered.insert(index, entity)
    _renumber(ordered)
    return index


def move_across_scopes(db: Session, entity, source: Scope, dest: Scope, dest_index: int) -> int:
    """Reparent ``entity`` from ``source`` to ``dest`` and insert it at ``dest_index``.

    Both scopes end up densely numbered.
    """
    if entity is None:
        raise NotFoundError(f"{dest.model.__name__} not found")
    if source.parent_attr != dest.parent_attr or source.model is not dest.model:
        raise ValidationError("Source and destination scopes are of different kinds")

    remaining = [e for e in source.siblings(db) if e.id != entity.id]
    _renumber(remaining)

    setattr(entity, dest.parent_attr, dest.parent_id)
    return move_within_scope(db, dest, entity, dest_index)


def reorder_all(db: Session, scope: Scope, ordered_ids: List[int]) -> List:
    """Assign ``position = index`` following ``ordered_ids``.

    Siblings missing from ``ordered_ids`` keep their relative order after the
    listed ones. Ids outside the scope are rejected.
    """
    siblings = scope.siblings(db)
    by_id = {e.id: e for e in siblings}

    seen = set()
    unknown = []
    for entity_id in ordered_ids:
        if entity_id not in by_id:
            unknown.append(entity_id)
        seen.add(entity_id)
    if unknown:
        raise ValidationError(
            f"Ids {unknown} do not belong to {scope!r}", details={"unknown_ids": unknown}
        )
    if len(seen) != len(ordered_ids):
        raise ValidationError("Duplicate ids in ordering")

    ordered = [by_id[i] for i in ordered_ids] + [e for e in siblings if e.id not in seen]
    _renumber(ordered)
    return ordered


def compact(db: Session, scope: Scope):
    """Renumber a scope to ``0..n-1`` keeping its current order."""
    _renumber(scope.siblings(db))
