"""Shared builders for simulation tests."""

from __future__ import annotations

from game.levels import LevelLoadError
from game.simulation import Difficulty, SimulationSettings
from game.systems.pathfinding import TieBreak
from game.world import Grid


def grid(*rows: str) -> Grid:
    return Grid.from_rows(list(rows))


def settings(
    difficulty: Difficulty = Difficulty.NIGHTMARE,
    coins: int = 0,
    enemies: int = 0,
    tie_break: TieBreak = TieBreak.ORDERED,
) -> SimulationSettings:
    return SimulationSettings(
        difficulty=difficulty,
        coins_per_level=coins,
        enemies_per_level=enemies,
        tie_break=tie_break,
    )


class StaticLevels:
    """In-memory level source; every load returns a fresh grid."""

    def __init__(self, *levels: list[str], count: int | None = None):
        self._levels = [list(rows) for rows in levels]
        self._count = count
        self.loads: list[int] = []

    def count(self) -> int:
        return self._count if self._count is not None else len(self._levels)

    def load(self, index: int) -> Grid:
        self.loads.append(index)
        if not 0 <= index < len(self._levels):
            raise LevelLoadError(f"failed to open file: level{index}.txt")
        return Grid.from_rows(self._levels[index])
