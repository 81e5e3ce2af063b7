from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    task_id: int = Field(alias="taskId")
    content: str = Field(min_length=1, max_length=500)

    model_config = {"populate_by_name": True}


class CommentUpdate(BaseModel):
    content: str = Field(min_length=1, max_length=500)


class CommentOut(BaseModel):
    id: int
    task_id: int
    user_id: int
    user_name: Optional[str] = None
    user_avatar: Optional[str] = None
    content: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
