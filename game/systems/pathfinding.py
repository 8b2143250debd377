"""
A* pathfinding on the cell grid (4-connected, unit cost, Manhattan heuristic).

Walls and coins are both impassable to the search; enemies, the player and
floor are walkable. The goal itself must be walkable or no path is found.

Tie-break policy
----------------
Several frontier points often share the lowest fScore. Which one is expanded
first never changes the path *length*, but it does change which of the
equally short paths comes back, and so where an enemy steps next:

- ORDERED: lowest (x, y) point wins (x first, then y). This is what a
  linear scan over an ordered point set produces, and is the default.
- FIFO: the point inserted into the frontier earliest wins.
- LIFO: the point inserted latest wins.
"""
from __future__ import annotations

import heapq
import itertools
from enum import Enum
from typing import Optional

from game.world import PATH_BLOCKING, Grid

Point = tuple[int, int]

# Neighbour expansion order: left, right, up, down.
_NEIGHBOUR_DELTAS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class TieBreak(Enum):
    ORDERED = "ordered"
    FIFO = "fifo"
    LIFO = "lifo"


def heuristic(a: Point, b: Point) -> int:
    """Manhattan distance heuristic."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def get_neighbors(pos: Point, grid: Grid) -> list[Point]:
    """Get in-bounds, walkable orthogonal neighbours."""
    x, y = pos
    neighbors = []
    for dx, dy in _NEIGHBOUR_DELTAS:
        nx, ny = x + dx, y + dy
        if grid.in_bounds(nx, ny) and grid.kind_at(nx, ny) not in PATH_BLOCKING:
            neighbors.append((nx, ny))
    return neighbors


def find_path(
    grid: Grid,
    start: Point,
    goal: Point,
    *,
    tie_break: TieBreak = TieBreak.ORDERED,
    max_expansions: Optional[int] = None,
    stats: Optional[dict] = None,
) -> list[Point]:
    """
    Find a shortest path from start to goal using A*.

    Args:
        grid: The live Grid (read only)
        start: (x, y) starting point
        goal: (x, y) target point
        tie_break: Which frontier point wins an fScore tie
        max_expansions: Optional cap on expanded points; hitting it returns []
        stats: Optional dict that receives the expansion count

    Returns:
        List of points from start to goal inclusive, or empty list if no path.
    """
    if start == goal:
        if stats is not None:
            stats["expansions"] = 0
        return [start]

    counter = itertools.count()

    def entry(f: int, point: Point) -> tuple:
        if tie_break is TieBreak.FIFO:
            return (f, next(counter), point)
        if tie_break is TieBreak.LIFO:
            return (f, -next(counter), point)
        return (f, point)

    open_set = [entry(heuristic(start, goal), start)]
    came_from: dict[Point, Point] = {}
    g_score = {start: 0}
    f_score = {start: heuristic(start, goal)}
    open_set_hash = {start}

    expansions = 0
    try:
        while open_set:
            item = heapq.heappop(open_set)
            f, current = item[0], item[-1]
            # Stale heap entry: point already expanded or re-queued with a better score.
            if current not in open_set_hash or f != f_score[current]:
                continue

            if current == goal:
                path = []
                while current in came_from:
                    path.append(current)
                    current = came_from[current]
                path.append(start)
                path.reverse()
                return path

            open_set_hash.discard(current)
            expansions += 1
            if max_expansions is not None and expansions >= int(max_expansions):
                return []

            for neighbor in get_neighbors(current, grid):
                tentative_g = g_score[current] + 1
                if neighbor not in g_score or tentative_g < g_score[neighbor]:
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative_g
                    f_score[neighbor] = tentative_g + heuristic(neighbor, goal)
                    open_set_hash.add(neighbor)
                    heapq.heappush(open_set, entry(f_score[neighbor], neighbor))

        # No path found
        return []
    finally:
        if stats is not None:
            stats["expansions"] = expansions
