"""
Todo store - the single storage interface behind the API.

Every public method maps onto one table operation. Category deletes carry
their usage guard inside the DELETE statement. Driver failures are rolled back and
re-raised as StoreError so the API can report them uniformly.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update, delete, exists, func, not_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.errors import ConflictError, NotFoundError, StoreError, ValidationError
from taskboard.models import User, Category, Todo
from taskboard.utils.validators import is_blank, require, validate_color

logger = logging.getLogger(__name__)

CATEGORY_FIELDS = ("name", "color")
TODO_FIELDS = ("text", "category_id")


class TodoStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _query(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            message = str(getattr(e, "orig", None) or e)
            logger.error(f"Store failure while trying to {action}: {message}")
            raise StoreError(message) from e

    async def _get(self, model, row_id: int, label: str):
        row = await self.db.get(model, row_id, populate_existing=True)
        if row is None:
            raise NotFoundError(f"{label} not found")
        return row

    async def _insert(self, row):
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return row

    # --- Users ---

    async def list_users(self) -> List[User]:
        async with self._query("list users"):
            result = await self.db.execute(select(User).order_by(User.id))
            return list(result.scalars().all())

    async def create_user(self, name: Optional[str], avatar: Optional[str] = None) -> User:
        require(name, "Name is required")
        async with self._query("create user"):
            user = await self._insert(User(name=name.strip(), avatar=avatar))
        logger.info(f"Registered user {user.id} ({user.name})")
        return user

    async def delete_user(self, user_id: int) -> None:
        """Unconditional delete; the user's todos are left in place"""
        async with self._query("delete user"):
            await self.db.execute(delete(User).where(User.id == user_id))
            await self.db.commit()

    # --- Categories ---

    async def list_categories(self) -> List[Category]:
        async with self._query("list categories"):
            result = await self.db.execute(select(Category).order_by(Category.id))
            return list(result.scalars().all())

    async def create_category(self, name: Optional[str], color: Optional[str] = None) -> Category:
        require(name, "Category name is required")
        color = validate_color(color)
        async with self._query("create category"):
            category = await self._insert(Category(name=name.strip(), color=color))
        logger.info(f"Created category {category.id} ({category.name})")
        return category

    async def update_category(self, category_id: int, fields: Dict[str, Any]) -> Category:
        """Apply the supplied name/color to a category. A name is always required."""
        require(fields.get("name"), "Category name is required")
        updates = {k: v for k, v in fields.items() if k in CATEGORY_FIELDS}
        updates["name"] = updates["name"].strip()
        if "color" in updates:
            updates["color"] = validate_color(updates["color"])

        async with self._query("update category"):
            category = await self._get(Category, category_id, "Category")
            for key, value in updates.items():
                setattr(category, key, value)
            await self.db.commit()
            await self.db.refresh(category)
        return category

    async def count_todos_in_category(self, category_id: int) -> int:
        async with self._query("count category usage"):
            result = await self.db.execute(
                select(func.count(Todo.id)).where(Todo.category_id == category_id)
            )
            return result.scalar() or 0

    async def delete_category(self, category_id: int) -> None:
        """Delete a category unless a todo references it.

        The usage check is part of the DELETE itself, so a todo added
        concurrently cannot slip in between a count and the delete.
        Deleting a category that does not exist is a no-op.
        """
        async with self._query("delete category"):
            result = await self.db.execute(
                delete(Category).where(
                    Category.id == category_id,
                    ~exists().where(Todo.category_id == category_id),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                still_there = await self.db.get(Category, category_id, populate_existing=True)
                if still_there is not None:
                    in_use = await self.count_todos_in_category(category_id)
                    logger.info(f"Refused to delete category {category_id}: used by {in_use} todo(s)")
                    raise ConflictError("Category is used by todos")
            await self.db.commit()
        logger.info(f"Deleted category {category_id}")

    # --- Todos ---

    async def list_todos(self, user_id: Optional[int] = None) -> List[Todo]:
        query = select(Todo).order_by(Todo.id)
        if user_id is not None:
            query = query.where(Todo.user_id == user_id)

        async with self._query("list todos"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def create_todo(
        self,
        text: Optional[str],
        user_id: Optional[int],
        category_id: Optional[int] = None,
    ) -> Todo:
        if is_blank(text) or user_id is None:
            raise ValidationError("Text and user are required")

        async with self._query("create todo"):
            todo = await self._insert(Todo(
                text=text.strip(),
                user_id=user_id,
                category_id=category_id,
                completed=False,
            ))
        logger.info(f"Created todo {todo.id} for user {user_id}")
        return todo

    async def update_todo(self, todo_id: int, fields: Dict[str, Any]) -> Todo:
        """Apply exactly the supplied text/category_id fields to a todo"""
        updates = {k: v for k, v in fields.items() if k in TODO_FIELDS}
        if "text" in updates:
            updates["text"] = require(updates["text"], "Text is required").strip()

        async with self._query("update todo"):
            todo = await self._get(Todo, todo_id, "Todo")
            for key, value in updates.items():
                setattr(todo, key, value)
            await self.db.commit()
            await self.db.refresh(todo)
        return todo

    async def toggle_todo(self, todo_id: int) -> Todo:
        """Flip `completed` in a single UPDATE so concurrent toggles both apply"""
        async with self._query("toggle todo"):
            result = await self.db.execute(
                update(Todo)
                .where(Todo.id == todo_id)
                .values(completed=not_(Todo.completed))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("Todo not found")
            await self.db.commit()
            return await self._get(Todo, todo_id, "Todo")

    async def delete_todo(self, todo_id: int) -> None:
        async with self._query("delete todo"):
            await self.db.execute(delete(Todo).where(Todo.id == todo_id))
            await self.db.commit()
