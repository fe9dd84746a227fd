from enum import Enum, auto

from rich.markup import escape

__all__ = [
    "OperationKind",
]


class OperationKind(Enum):
    """
    Kind of remote operation issued during synchronization.
    """

    GET = auto()
    """Lookup of an existing topic"""

    CREATE = auto()
    """Create topic, possibly with children inline"""

    UPDATE = auto()
    """Update existing topic"""

    def __str__(self) -> str:
        color_map = {
            OperationKind.GET: "cyan",
            OperationKind.CREATE: "bright_green",
            OperationKind.UPDATE: "bright_yellow",
        }

        start = escape("[")
        end = escape("]")
        return f"{start}[{color_map[self]}]{self.name}[/{color_map[self]}]{end}"
