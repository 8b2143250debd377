"""
Simulation core: one level's grid, the player, and the per-tick rules.

No pygame, no wall-clock time and no global RNG in here: the engine feeds one
movement intent per tick and reads back a TickReport, which keeps the whole
game drivable from tests.

Tick order:
    lock door (first tick of a level) -> count coins -> move player ->
    move enemies (every `enemy_delay` ticks) -> enemy / coin collisions ->
    door unlock + level transition -> commit player cell
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Protocol

from config import (
    COINS_PER_LEVEL,
    DIFFICULTY,
    ENEMIES_PER_LEVEL,
    ENEMY_DELAY_BY_DIFFICULTY,
    PATHFINDING_TIE_BREAK,
)
from game.entities.player import Direction, Player
from game.levels import LevelLoadError
from game.sim.contracts import GameSummary, TickReport
from game.sim.determinism import get_rng
from game.systems.chase import move_enemies
from game.systems.pathfinding import TieBreak
from game.systems.placement import place_coins, place_enemies
from game.world import CellKind, Grid


class Difficulty(Enum):
    EASY = "easy"  # Extremely easy
    MEDIUM = "medium"  # Quite easy
    HARD = "hard"  # Fairly difficult
    VERY_HARD = "very_hard"
    NIGHTMARE = "nightmare"  # Enemies step every tick

    @property
    def enemy_delay(self) -> int:
        return ENEMY_DELAY_BY_DIFFICULTY[self.value]


class GamePhase(Enum):
    PLAYING = auto()
    GAME_OVER = auto()


# Reasons carried in TickReport.game_over_reason / GameSummary.reason
CAUGHT = "caught"
COMPLETED = "completed"
LEVEL_UNAVAILABLE = "level_unavailable"


class LevelSource(Protocol):
    def load(self, index: int) -> Grid: ...

    def count(self) -> int: ...


@dataclass(slots=True, frozen=True)
class SimulationSettings:
    difficulty: Difficulty = Difficulty.HARD
    coins_per_level: int = 10
    enemies_per_level: int = 1
    tie_break: TieBreak = TieBreak.ORDERED

    @property
    def enemy_delay(self) -> int:
        return self.difficulty.enemy_delay

    @classmethod
    def from_config(cls, **overrides) -> "SimulationSettings":
        values = {
            "difficulty": Difficulty(DIFFICULTY),
            "coins_per_level": COINS_PER_LEVEL,
            "enemies_per_level": ENEMIES_PER_LEVEL,
            "tie_break": TieBreak(PATHFINDING_TIE_BREAK),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class Simulation:
    """Owns the active grid and advances it one tick at a time."""

    def __init__(
        self,
        levels: LevelSource,
        *,
        settings: Optional[SimulationSettings] = None,
        rng: Optional[random.Random] = None,
        start_level: int = 0,
    ):
        self.levels = levels
        self.settings = settings if settings is not None else SimulationSettings.from_config()
        # Deterministic stream for coin/enemy placement across all levels.
        self.rng = rng if rng is not None else get_rng("placement")

        self.num_levels = int(levels.count())
        if not 0 <= start_level < self.num_levels:
            raise LevelLoadError(f"level {start_level} not available ({self.num_levels} level(s) found)")

        self.score = 0
        self.phase = GamePhase.PLAYING
        self.game_over_reason: Optional[str] = None
        self.load_error: Optional[LevelLoadError] = None
        self.player = Player(0, 0, Direction.UP)

        self._enter_level(start_level, levels.load(start_level))

    # Level lifecycle

    def _enter_level(self, index: int, grid: Grid) -> None:
        spawns = grid.indexes_of(CellKind.PLAYER)
        if len(spawns) != 1:
            raise LevelLoadError(f"level {index}: expected exactly one player spawn, found {len(spawns)}")

        self.grid = grid
        self.level_index = index
        x, y = grid.to_coord(spawns[0])
        # Facing carries over between levels.
        self.player = Player(x, y, self.player.facing)
        self.player_index = spawns[0]
        self._previous_index = spawns[0]

        self.remaining_coins = self.settings.coins_per_level
        place_coins(grid, self.settings.coins_per_level, self.rng)
        if self.settings.enemies_per_level > 0:
            place_enemies(grid, self.settings.enemies_per_level, self.rng)

        self.tick = 0
        self.door_index: Optional[int] = None

    def _lock_door(self) -> None:
        """Record the door and mask it as wall until the coins are gone."""
        doors = self.grid.indexes_of(CellKind.DOOR)
        for index in doors:
            self.grid.set_cell(index, CellKind.WALL)
        # With several door markers the last one (highest index) is the exit.
        self.door_index = doors[-1] if doors else None

    def _advance_level(self) -> None:
        next_index = self.level_index + 1
        # Load before touching any state so a bad file leaves this level intact.
        grid = self.levels.load(next_index)
        self._enter_level(next_index, grid)

    def _end(self, reason: str) -> None:
        self.phase = GamePhase.GAME_OVER
        self.game_over_reason = reason

    # Queries

    @property
    def enemy_delay(self) -> int:
        return self.settings.enemy_delay

    @property
    def last_level_index(self) -> int:
        return self.num_levels - 1

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    @property
    def door_locked(self) -> bool:
        return self.door_index is not None and self.grid.cell_at(self.door_index) is CellKind.WALL

    def enemy_positions(self) -> list[tuple[int, int]]:
        return [self.grid.to_coord(i) for i in self.grid.indexes_of(CellKind.ENEMY)]

    def summary(self) -> GameSummary:
        return GameSummary(
            level_index=self.level_index,
            num_levels=self.num_levels,
            coins_collected=self.score,
            reason=self.game_over_reason,
        )

    # Tick

    def step(self, intent: Optional[Direction] = None) -> TickReport:
        """Advance one tick with the sampled movement intent (None = no key held)."""
        if self.is_over:
            return TickReport(
                tick=self.tick,
                level_index=self.level_index,
                player_index=self.player_index,
                game_over=True,
                game_over_reason=self.game_over_reason,
            )

        grid = self.grid
        if self.tick == 0:
            self._lock_door()
        self.tick += 1
        report = TickReport(tick=self.tick, level_index=self.level_index, player_index=self.player_index)

        self.remaining_coins = grid.count_cells(CellKind.COIN)

        self._previous_index = self.player_index
        report.player_moved = self.player.apply(intent, grid)
        self.player_index = grid.to_index(*self.player.position)

        if self.tick % self.enemy_delay == 0:
            report.enemies_moved = True
            report.enemy_moves = move_enemies(grid, self.player_index, tie_break=self.settings.tie_break)

        here = grid.cell_at(self.player_index)
        if here is CellKind.ENEMY:
            self._end(CAUGHT)
        elif here is CellKind.COIN:
            self.score += 1
            self.remaining_coins -= 1
            report.coin_collected = True

        if self.remaining_coins <= 0 and self.door_index is not None:
            if grid.cell_at(self.door_index) is CellKind.WALL:
                grid.set_cell(self.door_index, CellKind.FLOOR)
                report.door_unlocked = True
            if not self.is_over and self.player_index == self.door_index:
                if self.level_index >= self.last_level_index:
                    self._end(COMPLETED)
                else:
                    try:
                        self._advance_level()
                        report.level_changed = True
                    except LevelLoadError as e:
                        self.load_error = e
                        self._end(LEVEL_UNAVAILABLE)

        self._commit_player()

        report.level_index = self.level_index
        report.player_index = self.player_index
        report.game_over = self.is_over
        report.game_over_reason = self.game_over_reason
        return report

    def _commit_player(self) -> None:
        grid = self.grid
        previous = self._previous_index
        # An enemy may have stepped into the vacated cell this tick; leave it there.
        if previous != self.player_index and grid.cell_at(previous) is CellKind.PLAYER:
            grid.set_cell(previous, CellKind.FLOOR)
        grid.set_cell(self.player_index, CellKind.PLAYER)
        self._previous_index = self.player_index
