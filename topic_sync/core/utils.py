"""
Common utilities.
"""

from typing import Any

__all__ = [
    "get_path",
]


def get_path(response: Any, *keys: str) -> Any:
    """
    Traverse nested mappings in a response, returning `None` if any level is
    missing.
    """
    value = response
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value
