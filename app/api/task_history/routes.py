from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.schemas import Envelope, ok
from app.core import history
from app.core.access import ResourceKind, authorize
from app.core.security import get_current_user
from app.db.models.user import User
from app.db.session import get_db
from . import schemas

router = APIRouter()


@router.get("/{task_id}", response_model=Envelope[List[schemas.HistoryOut]])
def get_task_history(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Audit trail for a task, newest first."""
    authorize(db, current_user, ResourceKind.TASK, task_id)
    return ok(history.list_for_task(db, task_id))
