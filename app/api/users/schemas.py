import re
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

# 6-50 chars, letters and digits, at least one of each
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d]{6,50}$")
PASSWORD_MESSAGE = "Password must be 6-50 characters of letters and digits, with at least one of each"


def _check_password(value: Optional[str]) -> Optional[str]:
    if value is not None and not PASSWORD_PATTERN.match(value):
        raise ValueError(PASSWORD_MESSAGE)
    return value


class UserCreate(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str
    role: Literal["admin", "developer"] = "developer"
    avatar_url: Optional[str] = None

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check_password(value)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    password: Optional[str] = None
    role: Optional[Literal["admin", "developer"]] = None
    avatar_url: Optional[str] = None

    @field_validator("password")
    @classmethod
    def check_password(cls, value: Optional[str]) -> Optional[str]:
        return _check_password(value)
