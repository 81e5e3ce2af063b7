from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel


class HistoryOut(BaseModel):
    id: int
    task_id: int
    action: str
    payload: Optional[Any] = None
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
