from datetime import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from app.api.columns.schemas import ColumnOut

Priority = Literal["low", "medium", "high"]


class TaskCreate(BaseModel):
    project_id: int = Field(alias="projectId")
    column_id: int = Field(alias="columnId")
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    priority: Optional[Priority] = None
    assignee_id: Optional[int] = None
    tag: Optional[str] = None
    story_points: Optional[int] = Field(default=None, ge=1, le=100)

    model_config = {"populate_by_name": True}


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    priority: Optional[Priority] = None
    assignee_id: Optional[int] = None
    tag: Optional[str] = None
    story_points: Optional[int] = Field(default=None, ge=1, le=100)


class TaskMove(BaseModel):
    task_id: int = Field(alias="taskId")
    source_column_id: Optional[int] = Field(default=None, alias="sourceColumnId")
    source_index: Optional[int] = Field(default=None, alias="sourceIndex")
    dest_column_id: int = Field(alias="destColumnId")
    dest_index: int = Field(alias="destIndex")

    model_config = {"populate_by_name": True}


class TaskOut(BaseModel):
    id: int
    project_id: int
    column_id: int
    title: str
    description: Optional[str] = None
    priority: str
    assignee_id: Optional[int] = None
    assignee_name: Optional[str] = None
    assignee_avatar: Optional[str] = None
    project_code: Optional[str] = None
    tag: Optional[str] = None
    story_points: Optional[int] = None
    seq: int
    position: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BoardOut(BaseModel):
    columns: List[ColumnOut]
    tasks_by_column: Dict[int, List[TaskOut]] = Field(serialization_alias="tasksByColumn")
