"""
Categories API endpoints - shared labels, delete blocked while in use
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from pydantic import BaseModel

from taskboard.database import get_db
from taskboard.schemas import CategoryOut, DeleteResult
from taskboard.services.store import TodoStore

router = APIRouter()


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


@router.get("", response_model=List[CategoryOut])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await TodoStore(db).list_categories()


@router.post("", response_model=CategoryOut)
async def create_category(data: CategoryCreate, db: AsyncSession = Depends(get_db)):
    return await TodoStore(db).create_category(data.name, data.color)


@router.put("/{category_id}", response_model=CategoryOut)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Rename / recolor a category"""
    return await TodoStore(db).update_category(category_id, data.model_dump(exclude_unset=True))


@router.delete("/{category_id}", response_model=DeleteResult)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a category. Fails with 400 while any todo still references it."""
    await TodoStore(db).delete_category(category_id)
    return DeleteResult()
