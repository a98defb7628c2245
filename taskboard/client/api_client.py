"""
HTTP client for the Taskboard API.

One coroutine per endpoint. Responses are parsed into the shared row
schemas; any non-2xx response raises ApiError carrying the server's
{"error": ...} message verbatim.
"""
import logging
from typing import Any, List, Optional

import httpx

from taskboard.config import get_settings
from taskboard.schemas import CategoryOut, TodoOut, UserOut

settings = get_settings()
logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text or response.reason_phrase


class ApiClient:
    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.AsyncClient] = None):
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url or settings.API_BASE_URL)

    async def close(self):
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(0, str(e) or e.__class__.__name__) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(response.status_code, message)
        return response.json()

    # --- Users ---

    async def list_users(self) -> List[UserOut]:
        rows = await self._request("GET", "/users")
        return [UserOut.model_validate(r) for r in rows]

    async def create_user(self, name: str, avatar: Optional[str] = None) -> UserOut:
        row = await self._request("POST", "/users", json={"name": name, "avatar": avatar})
        return UserOut.model_validate(row)

    # --- Categories ---

    async def list_categories(self) -> List[CategoryOut]:
        rows = await self._request("GET", "/categories")
        return [CategoryOut.model_validate(r) for r in rows]

    async def create_category(self, name: str, color: Optional[str] = None) -> CategoryOut:
        row = await self._request("POST", "/categories", json={"name": name, "color": color})
        return CategoryOut.model_validate(row)

    async def update_category(self, category_id: int, name: str, color: Optional[str] = None) -> CategoryOut:
        payload = {"name": name}
        if color is not None:
            payload["color"] = color
        row = await self._request("PUT", f"/categories/{category_id}", json=payload)
        return CategoryOut.model_validate(row)

    async def delete_category(self, category_id: int) -> None:
        await self._request("DELETE", f"/categories/{category_id}")

    # --- Todos ---

    async def list_todos(self, user_id: Optional[int] = None) -> List[TodoOut]:
        params = {"user_id": user_id} if user_id is not None else None
        rows = await self._request("GET", "/todos", params=params)
        return [TodoOut.model_validate(r) for r in rows]

    async def create_todo(self, text: str, user_id: int, category_id: Optional[int] = None) -> TodoOut:
        row = await self._request("POST", "/todos", json={
            "text": text,
            "category_id": category_id,
            "user_id": user_id,
        })
        return TodoOut.model_validate(row)

    async def update_todo(self, todo_id: int, text: str, category_id: Optional[int]) -> TodoOut:
        # The server applies every key it receives; a null category_id would clear it
        payload = {"text": text}
        if category_id is not None:
            payload["category_id"] = category_id
        row = await self._request("PUT", f"/todos/{todo_id}", json=payload)
        return TodoOut.model_validate(row)

    async def toggle_todo(self, todo_id: int) -> TodoOut:
        row = await self._request("PATCH", f"/todos/{todo_id}/toggle")
        return TodoOut.model_validate(row)

    async def delete_todo(self, todo_id: int) -> None:
        await self._request("DELETE", f"/todos/{todo_id}")
