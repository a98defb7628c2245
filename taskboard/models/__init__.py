from taskboard.models.user import User
from taskboard.models.category import Category
from taskboard.models.todo import Todo

__all__ = [
    "User",
    "Category",
    "Todo",
]
