"""
Client-side application state.

AppState keeps the latest snapshot of users, categories and the current
user's todos. Every mutation goes to the API first and then re-fetches
the affected collection; nothing is patched locally. When a request
fails the message lands in `error` and the snapshot is left as it was.
"""
import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

from taskboard.client.api_client import ApiClient, ApiError
from taskboard.schemas import CategoryOut, TodoOut, UserOut

logger = logging.getLogger(__name__)

T = TypeVar("T")

LIGHT = "light"
DARK = "dark"

MODE_SELECT_USER = "select-user"
MODE_TODOS = "todos"


class AppState:
    def __init__(self, api: ApiClient):
        self.api = api
        self.users: List[UserOut] = []
        self.categories: List[CategoryOut] = []
        self.todos: List[TodoOut] = []
        self.current_user: Optional[UserOut] = None
        self.theme: str = LIGHT
        self.error: Optional[str] = None

    @property
    def mode(self) -> str:
        """User picker until someone is selected; there is no way back short of a new state"""
        return MODE_TODOS if self.current_user is not None else MODE_SELECT_USER

    async def _run(self, request: Awaitable[T], refresh: Optional[Callable[[], Awaitable[None]]] = None) -> T:
        try:
            result = await request
            if refresh is not None:
                await refresh()
        except ApiError as e:
            self.error = e.message
            logger.warning(f"Request failed ({e.status_code}): {e.message}")
            raise
        self.error = None
        return result

    # --- Fetching ---

    async def load(self):
        """Initial load: users (auto-selecting the first one) and categories"""
        await self._run(self.fetch_users())
        await self._run(self.fetch_categories())

    async def fetch_users(self):
        users = await self.api.list_users()
        self.users = users

        selected = None
        if self.current_user is not None:
            selected = next((u for u in users if u.id == self.current_user.id), None)
        if selected is None and users:
            selected = users[0]

        changed = (selected.id if selected else None) != (self.current_user.id if self.current_user else None)
        self.current_user = selected
        if changed:
            await self.fetch_todos()

    async def fetch_categories(self):
        self.categories = await self.api.list_categories()

    async def fetch_todos(self):
        if self.current_user is None:
            self.todos = []
            return
        self.todos = await self.api.list_todos(user_id=self.current_user.id)

    # --- Users ---

    async def select_user(self, user_id: int) -> Optional[UserOut]:
        self.current_user = next((u for u in self.users if u.id == user_id), None)
        await self._run(self.fetch_todos())
        return self.current_user

    async def register_user(self, name: str, avatar: Optional[str] = None) -> UserOut:
        user = await self._run(self.api.create_user(name, avatar), self.fetch_users)
        await self.select_user(user.id)
        return user

    # --- Categories ---

    async def add_category(self, name: str, color: Optional[str] = None) -> CategoryOut:
        return await self._run(self.api.create_category(name, color), self.fetch_categories)

    async def update_category(self, category_id: int, name: str, color: Optional[str] = None) -> CategoryOut:
        return await self._run(self.api.update_category(category_id, name, color), self.fetch_categories)

    async def delete_category(self, category_id: int):
        await self._run(self.api.delete_category(category_id), self.fetch_categories)

    # --- Todos (no-ops until a user is selected) ---

    async def add_todo(self, text: str, category_id: Optional[int] = None) -> Optional[TodoOut]:
        if self.current_user is None:
            return None
        request = self.api.create_todo(text, self.current_user.id, category_id)
        return await self._run(request, self.fetch_todos)

    async def update_todo(self, todo_id: int, text: str, category_id: Optional[int]) -> Optional[TodoOut]:
        if self.current_user is None:
            return None
        return await self._run(self.api.update_todo(todo_id, text, category_id), self.fetch_todos)

    async def toggle_todo(self, todo_id: int) -> Optional[TodoOut]:
        if self.current_user is None:
            return None
        return await self._run(self.api.toggle_todo(todo_id), self.fetch_todos)

    async def delete_todo(self, todo_id: int):
        if self.current_user is None:
            return
        await self._run(self.api.delete_todo(todo_id), self.fetch_todos)

    # --- Theme ---

    def toggle_theme(self) -> str:
        self.theme = DARK if self.theme == LIGHT else LIGHT
        return self.theme
