"""
Random entity placement (coins and enemies).
"""
from __future__ import annotations

import random
from typing import Optional

from game.sim.determinism import get_rng
from game.world import CellKind, Grid

# Kinds that make a cell ineligible to receive a new entity. The door is
# included so a coin can never hide the level exit before it is masked.
_OCCUPIED = frozenset({CellKind.WALL, CellKind.ENEMY, CellKind.PLAYER, CellKind.COIN, CellKind.DOOR})


def eligible_cells(grid: Grid) -> list[int]:
    """Indexes that may receive a new entity, in increasing order. Row 0 is the status line."""
    return [
        i for i in range(grid.width, len(grid))
        if grid.cells[i] not in _OCCUPIED
    ]


def place_entities(
    grid: Grid,
    kind: CellKind,
    count: int,
    rng: Optional[random.Random] = None,
) -> list[int]:
    """
    Scatter `count` cells of `kind` over distinct eligible cells.

    If fewer cells are eligible than requested, every eligible cell is filled;
    that is not an error.

    Returns:
        The indexes that were set, in placement order.
    """
    if count <= 0:
        return []
    rng = rng if rng is not None else get_rng("placement")
    cells = eligible_cells(grid)
    rng.shuffle(cells)
    chosen = cells[:count]
    for index in chosen:
        grid.set_cell(index, kind)
    return chosen


def place_coins(grid: Grid, count: int, rng: Optional[random.Random] = None) -> list[int]:
    return place_entities(grid, CellKind.COIN, count, rng)


def place_enemies(grid: Grid, count: int, rng: Optional[random.Random] = None) -> list[int]:
    return place_entities(grid, CellKind.ENEMY, count, rng)
