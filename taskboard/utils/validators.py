"""
Input validation utilities
"""
import re
from typing import Any, Optional

from taskboard.errors import ValidationError

HEX_COLOR_RE = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings"""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require(value: Any, message: str) -> Any:
    """Raise ValidationError with the given message when a required value is blank"""
    if is_blank(value):
        raise ValidationError(message)
    return value


def validate_color(color: Optional[str]) -> Optional[str]:
    """Validate a hex color like #10B981 (None is allowed)"""
    if is_blank(color):
        return None
    if not HEX_COLOR_RE.fullmatch(color):
        raise ValidationError(f"Invalid color '{color}'. Expected a hex value like #10B981")
    return color
