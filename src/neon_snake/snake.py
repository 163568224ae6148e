"""Snake representation and direction handling."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable

from neon_snake.grid import Cell


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, matching screen coordinates.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> Direction | None:
        """Map a command or key name (``"up"``, ``"ArrowUp"``, ``"w"``...)."""
        return _NAMES.get(name.strip().lower())


_NAMES: dict[str, Direction] = {
    "up": Direction.UP,
    "arrowup": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "arrowdown": Direction.DOWN,
    "s": Direction.DOWN,
    "left": Direction.LEFT,
    "arrowleft": Direction.LEFT,
    "a": Direction.LEFT,
    "right": Direction.RIGHT,
    "arrowright": Direction.RIGHT,
    "d": Direction.RIGHT,
}


def is_reverse(new: Direction, reference: Direction) -> bool:
    """Return True if *new* points exactly opposite to *reference*."""
    return new.dx == -reference.dx and new.dy == -reference.dy


def step(cell: Cell, direction: Direction) -> Cell:
    """Return the neighbour of *cell* one step in *direction*."""
    return cell[0] + direction.dx, cell[1] + direction.dy


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(self, cells: Iterable[Cell]) -> None:
        self.body: deque[Cell] = deque(cells)
        if not self.body:
            raise ValueError("Snake must have at least 1 segment.")

    @classmethod
    def spawn(cls, grid_size: int, length: int = 3) -> Snake:
        """Place a horizontal snake centred on the grid, facing right."""
        center = grid_size // 2
        return cls((center - i, center) for i in range(length))

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self):
        return iter(self.body)

    def advance(self, new_head: Cell, grew: bool = False) -> Cell | None:
        """Prepend *new_head*; drop the tail unless the snake grew.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        if grew:
            return None
        return self.body.pop()

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def hits_body(self, cell: Cell, growing: bool) -> bool:
        """Check *cell* against the segments still occupied after the move.

        Unless the snake is growing, the tail vacates this tick and is
        skipped.
        """
        check_length = len(self.body) if growing else len(self.body) - 1
        return any(self.body[i] == cell for i in range(check_length))

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "head": list(self.head),
            "length": len(self.body),
        }
