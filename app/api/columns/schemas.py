from typing import List, Optional
from pydantic import BaseModel, Field


class ColumnCreate(BaseModel):
    project_id: int = Field(alias="projectId")
    name: str = Field(min_length=1, max_length=100)

    model_config = {"populate_by_name": True}


class ColumnUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    position: Optional[int] = None


class ColumnOrderItem(BaseModel):
    id: int
    position: Optional[int] = None  # informational; list order wins


class ColumnReorder(BaseModel):
    project_id: int = Field(alias="projectId")
    column_order: List[ColumnOrderItem] = Field(alias="columnOrder")

    model_config = {"populate_by_name": True}


class ColumnOut(BaseModel):
    id: int
    project_id: int
    name: str
    position: int

    model_config = {"from_attributes": True}
