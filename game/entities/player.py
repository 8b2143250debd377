"""
Player entity.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from game.world import CellKind, Grid


class Direction(Enum):
    """Movement intent / facing. Values are (dx, dy) with y growing downwards."""

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


@dataclass(slots=True)
class Player:
    x: int
    y: int
    facing: Direction = Direction.UP

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    def apply(self, intent: Optional[Direction], grid: Grid) -> bool:
        """
        Try to take one step in `intent`; returns True if the player moved.

        Facing follows the attempted direction even when the step is blocked.
        A blocked step is cancelled outright (no sliding along walls). Leaving
        the grid counts as blocked.
        """
        if intent is None:
            return False
        self.facing = intent
        nx, ny = self.x + intent.dx, self.y + intent.dy
        if not grid.in_bounds(nx, ny) or grid.kind_at(nx, ny) is CellKind.WALL:
            return False
        self.x, self.y = nx, ny
        return True
