import re
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

CODE_PATTERN = re.compile(r"^[A-Z0-9-]{2,10}$")


def _normalize_code(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().upper()
    if not CODE_PATTERN.match(value):
        raise ValueError("Project code must be 2-10 characters, A-Z, 0-9, -")
    return value


class ProjectBase(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    code: str

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return _normalize_code(value)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    code: Optional[str] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_code(value)


class ProjectOut(BaseModel):
    id: int
    code: str
    name: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MemberOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    role: str
    avatar_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ColumnStat(BaseModel):
    column_id: int
    column_name: str
    task_count: int


class ProjectStats(BaseModel):
    columns: List[ColumnStat]
    total_users: int = Field(serialization_alias="totalUsers")
    total_tasks: int = Field(serialization_alias="totalTasks")
