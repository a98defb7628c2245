"""
Todo API endpoints - per-user tasks
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from pydantic import BaseModel

from taskboard.database import get_db
from taskboard.schemas import DeleteResult, TodoOut
from taskboard.services.store import TodoStore

router = APIRouter()


# --- Pydantic Schemas ---

class TodoCreate(BaseModel):
    text: Optional[str] = None
    category_id: Optional[int] = None
    user_id: Optional[int] = None


class TodoUpdate(BaseModel):
    text: Optional[str] = None
    category_id: Optional[int] = None


# --- Endpoints ---

@router.get("", response_model=List[TodoOut])
async def list_todos(
    user_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    """List todos, optionally only those owned by `user_id`"""
    return await TodoStore(db).list_todos(user_id=user_id)


@router.post("", response_model=TodoOut)
async def create_todo(data: TodoCreate, db: AsyncSession = Depends(get_db)):
    """Create a new todo (always starts incomplete)"""
    return await TodoStore(db).create_todo(data.text, data.user_id, data.category_id)


@router.put("/{todo_id}", response_model=TodoOut)
async def update_todo(
    todo_id: int,
    data: TodoUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a todo's text and/or category"""
    return await TodoStore(db).update_todo(todo_id, data.model_dump(exclude_unset=True))


@router.patch("/{todo_id}/toggle", response_model=TodoOut)
async def toggle_todo(todo_id: int, db: AsyncSession = Depends(get_db)):
    """Flip a todo between done and not done"""
    return await TodoStore(db).toggle_todo(todo_id)


@router.delete("/{todo_id}", response_model=DeleteResult)
async def delete_todo(todo_id: int, db: AsyncSession = Depends(get_db)):
    await TodoStore(db).delete_todo(todo_id)
    return DeleteResult()
