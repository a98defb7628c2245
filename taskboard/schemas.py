"""
Row shapes shared by the API responses and the client snapshot
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserOut(BaseModel):
    id: int
    name: str
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class CategoryOut(BaseModel):
    id: int
    name: str
    color: Optional[str] = None

    class Config:
        from_attributes = True


class TodoOut(BaseModel):
    id: int
    text: str
    completed: bool
    category_id: Optional[int] = None
    user_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DeleteResult(BaseModel):
    success: bool = True
