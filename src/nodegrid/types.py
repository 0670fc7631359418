"""Shared type definitions for nodegrid.

Enums and small value types used across the IR, layout engines, parsers and
renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class NodeKind(Enum):
    Component = auto()  # multi-input/multi-output block
    Param = auto()  # single-purpose pass-through node

    @classmethod
    def default(cls) -> NodeKind:
        return cls.Component


@dataclass(frozen=True)
class Position:
    """A 2D canvas position.

    Serialised in the compact ``"x,y"`` form using invariant (``.``) decimal
    formatting.
    """

    x: float
    y: float

    @property
    def is_empty(self) -> bool:
        return self.x == 0 and self.y == 0

    @classmethod
    def empty(cls) -> Position:
        return cls(0.0, 0.0)

    @classmethod
    def parse(cls, value: str) -> Position:
        """Parse a compact ``"x,y"`` string.

        Raises:
            ValueError: If the string is empty, does not have exactly two parts,
                or either part is not a number.
        """
        if not value:
            raise ValueError("Position string cannot be empty")
        parts = value.split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid position format: '{value}'. Expected format: 'X,Y'")
        try:
            x = float(parts[0])
        except ValueError:
            raise ValueError(f"Invalid X coordinate: '{parts[0]}'") from None
        try:
            y = float(parts[1])
        except ValueError:
            raise ValueError(f"Invalid Y coordinate: '{parts[1]}'") from None
        return cls(x, y)

    def translated(self, dx: float, dy: float) -> Position:
        return Position(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"{_format_coord(self.x)},{_format_coord(self.y)}"


def _format_coord(value: float) -> str:
    # 12.0 -> "12", 12.5 -> "12.5"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
