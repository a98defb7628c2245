"""
Read-only views over the client snapshot: filtering, sorting and the
completion summary shown above the todo list.
"""
from datetime import datetime
from typing import Dict, List, Optional

from taskboard.schemas import TodoOut
from taskboard.utils.helpers import completed_count, completion_rate

STATUS_FILTERS = ("all", "active", "completed")
SORT_ORDERS = ("newest", "oldest", "alphabetical")


def _created(todo: TodoOut) -> datetime:
    return todo.created_at or datetime.min


def filter_todos(todos: List[TodoOut], status: str = "all", category_id: Optional[int] = None) -> List[TodoOut]:
    if status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter '{status}'. Must be one of: {STATUS_FILTERS}")

    result = list(todos)
    if status == "completed":
        result = [t for t in result if t.completed]
    elif status == "active":
        result = [t for t in result if not t.completed]

    if category_id is not None:
        result = [t for t in result if t.category_id == category_id]
    return result


def sort_todos(todos: List[TodoOut], order: str = "newest") -> List[TodoOut]:
    if order == "newest":
        return sorted(todos, key=_created, reverse=True)
    if order == "oldest":
        return sorted(todos, key=_created)
    if order == "alphabetical":
        return sorted(todos, key=lambda t: t.text.casefold())
    raise ValueError(f"Unknown sort order '{order}'. Must be one of: {SORT_ORDERS}")


def visible_todos(
    todos: List[TodoOut],
    status: str = "all",
    category_id: Optional[int] = None,
    order: str = "newest",
) -> List[TodoOut]:
    return sort_todos(filter_todos(todos, status, category_id), order)


def category_usage(todos: List[TodoOut]) -> Dict[int, int]:
    """Number of todos per category id"""
    counts: Dict[int, int] = {}
    for todo in todos:
        if todo.category_id is not None:
            counts[todo.category_id] = counts.get(todo.category_id, 0) + 1
    return counts


def summarize(todos: List[TodoOut]) -> Dict[str, int]:
    return {
        "total": len(todos),
        "completed": completed_count(todos),
        "rate": completion_rate(todos),
    }
