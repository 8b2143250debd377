"""
Grid model: a flat, linearly addressed map of cell kinds.

Cells are stored row-major in a single list, so a cell is addressed either by
its linear index (`y * width + x`) or by its (x, y) coordinate. Every grid
carries its own width/height; nothing here assumes a fixed map size.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator


class CellKind(Enum):
    """Exclusive kind of a grid cell. Values are the level-file characters."""

    WALL = "#"
    FLOOR = " "
    COIN = "O"
    ENEMY = "X"
    PLAYER = "P"
    DOOR = "D"

    @classmethod
    def from_char(cls, char: str) -> "CellKind":
        return cls(char)


# Kinds the pathfinder will not step onto.
PATH_BLOCKING = frozenset({CellKind.WALL, CellKind.COIN})


class GridIndexError(IndexError):
    """Out-of-range index or coordinate. Always a logic bug in the caller."""


class Grid:
    """Fixed-size rectangular array of CellKind."""

    def __init__(self, width: int, height: int, cells: Iterable[CellKind] | None = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        if cells is None:
            self.cells = [CellKind.FLOOR] * (self.width * self.height)
        else:
            self.cells = list(cells)
            if len(self.cells) != self.width * self.height:
                raise ValueError(
                    f"expected {self.width * self.height} cells for {self.width}x{self.height}, "
                    f"got {len(self.cells)}"
                )

    @classmethod
    def from_rows(cls, rows: list[str]) -> "Grid":
        """Build a grid from equal-width rows of level characters."""
        width = len(rows[0]) if rows else 0
        cells = [CellKind.from_char(ch) for row in rows for ch in row]
        return cls(width, len(rows), cells)

    def to_rows(self) -> list[str]:
        return [
            "".join(kind.value for kind in self.cells[y * self.width:(y + 1) * self.width])
            for y in range(self.height)
        ]

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"

    # Addressing

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def to_index(self, x: int, y: int) -> int:
        """Convert (x, y) to a linear index. No wraparound."""
        if not self.in_bounds(x, y):
            raise GridIndexError(f"coordinate ({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def to_coord(self, index: int) -> tuple[int, int]:
        """Convert a linear index back to (x, y)."""
        self._check_index(index)
        x = index % self.width
        y = (index - x) // self.width
        return x, y

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.cells):
            raise GridIndexError(f"index {index} outside 0..{len(self.cells) - 1}")

    # Cell access

    def cell_at(self, index: int) -> CellKind:
        self._check_index(index)
        return self.cells[index]

    def set_cell(self, index: int, kind: CellKind) -> None:
        self._check_index(index)
        self.cells[index] = kind

    def kind_at(self, x: int, y: int) -> CellKind:
        return self.cells[self.to_index(x, y)]

    # Queries

    def count_cells(self, kind: CellKind) -> int:
        return sum(1 for cell in self.cells if cell is kind)

    def indexes_of(self, kind: CellKind) -> list[int]:
        """All indexes holding `kind`, in increasing index order."""
        return [i for i, cell in enumerate(self.cells) if cell is kind]

    def iter_cells(self) -> Iterator[tuple[int, int, CellKind]]:
        """Yield (x, y, kind) row by row."""
        for i, cell in enumerate(self.cells):
            yield i % self.width, i // self.width, cell

    def copy(self) -> "Grid":
        return Grid(self.width, self.height, self.cells)
