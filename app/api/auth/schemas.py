from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(alias="refreshToken", min_length=1)

    model_config = {"populate_by_name": True}


class UserOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: str
    avatar_url: Optional[str] = None
    theme: Optional[str] = None

    model_config = {"from_attributes": True}


class TokenPair(BaseModel):
    token: str
    refresh_token: str = Field(serialization_alias="refreshToken")
    token_type: str = "bearer"


class LoginOut(TokenPair):
    user: UserOut


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    password: Optional[str] = None
    avatar_url: Optional[str] = None
    theme: Optional[Literal["light", "dark"]] = None
