"""
Enemy chase: step every enemy one cell along its shortest path to the player.

Enemies have no identity beyond the cell they occupy. They are enumerated in
increasing index order and moved one at a time on the live grid, so an enemy
sees the cells earlier enemies have just vacated or claimed this tick.
"""

from __future__ import annotations

import time

from game.systems import perf_stats
from game.systems.pathfinding import Point, TieBreak, find_path
from game.world import CellKind, Grid


def timed_find_path(grid: Grid, start: Point, goal: Point, *, tie_break: TieBreak = TieBreak.ORDERED) -> list[Point]:
    """find_path wrapped with perf counters."""
    t0 = time.perf_counter()
    stats: dict = {}
    path = find_path(grid, start, goal, tie_break=tie_break, stats=stats)
    perf_stats.pathfinding.record(
        (time.perf_counter() - t0) * 1000.0,
        found=bool(path),
        expansions=stats.get("expansions", 0),
    )
    return path


def move_enemies(
    grid: Grid,
    target_index: int,
    *,
    tie_break: TieBreak = TieBreak.ORDERED,
) -> list[tuple[int, int]]:
    """
    Move each enemy one step towards `target_index`.

    An enemy whose next cell already holds another enemy stays put (first
    mover wins). Enemies with no path (or already on the target) stay put.

    Returns:
        (from_index, to_index) for every enemy that actually moved.
    """
    target = grid.to_coord(target_index)
    moves: list[tuple[int, int]] = []

    for enemy_index in grid.indexes_of(CellKind.ENEMY):
        path = timed_find_path(grid, grid.to_coord(enemy_index), target, tie_break=tie_break)
        if len(path) < 2:
            continue
        next_index = grid.to_index(*path[1])
        if grid.cell_at(next_index) is CellKind.ENEMY:
            continue
        grid.set_cell(enemy_index, CellKind.FLOOR)
        grid.set_cell(next_index, CellKind.ENEMY)
        moves.append((enemy_index, next_index))

    return moves
