"""
General helper utilities
"""
import math
from datetime import datetime
from typing import Iterable, Optional

# Palette offered when creating or editing a category
CATEGORY_COLORS = [
    "#4F46E5", "#10B981", "#F59E0B", "#EF4444",
    "#8B5CF6", "#EC4899", "#06B6D4", "#14B8A6",
]

DEFAULT_CATEGORIES = [
    ("Personal", "#4F46E5"),
    ("Work", "#10B981"),
    ("Shopping", "#F59E0B"),
]

DEFAULT_AVATARS = [
    "https://api.dicebear.com/7.x/adventurer-neutral/svg?seed=cat",
    "https://api.dicebear.com/7.x/adventurer-neutral/svg?seed=dog",
    "https://api.dicebear.com/7.x/adventurer-neutral/svg?seed=fox",
    "https://api.dicebear.com/7.x/adventurer-neutral/svg?seed=duck",
]


def format_date(value: Optional[datetime]) -> str:
    """Short month/day label, e.g. 'Mar 7'"""
    if value is None:
        return ""
    return f"{value.strftime('%b')} {value.day}"


def completed_count(todos: Iterable) -> int:
    return sum(1 for todo in todos if todo.completed)


def completion_rate(todos: list) -> int:
    """Percentage of completed todos, rounded; 0 for an empty list"""
    if not todos:
        return 0
    # Half-up, so 12.5 reads as 13
    return math.floor(completed_count(todos) / len(todos) * 100 + 0.5)
