from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None


class Message(BaseModel):
    success: bool = True
    message: str


def ok(data=None) -> dict:
    return {"success": True, "data": data}


def message(text: str) -> dict:
    return {"success": True, "message": text}
