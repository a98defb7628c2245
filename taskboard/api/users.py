"""
Users API endpoints - registration and the user picker
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from pydantic import BaseModel

from taskboard.database import get_db
from taskboard.schemas import UserOut
from taskboard.services.store import TodoStore

router = APIRouter()


class UserCreate(BaseModel):
    # Optional so a missing name is reported as a 400 by the store
    name: Optional[str] = None
    avatar: Optional[str] = None


@router.get("", response_model=List[UserOut])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await TodoStore(db).list_users()


@router.post("", response_model=UserOut)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a new user"""
    return await TodoStore(db).create_user(data.name, data.avatar)
