"""
Thin, stable data contracts handed from the simulation to its consumers.

These are small "struct-like" dataclasses so the renderer, the score report
and tests can read what happened in a tick without reaching into the
simulation's internals.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass(slots=True)
class TickReport:
    """What happened during one simulation tick."""

    tick: int
    level_index: int
    player_index: int
    player_moved: bool = False
    enemies_moved: bool = False
    enemy_moves: list[tuple[int, int]] = field(default_factory=list)
    coin_collected: bool = False
    door_unlocked: bool = False
    level_changed: bool = False
    game_over: bool = False
    game_over_reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class GameSummary:
    """Final numbers for the score report."""

    level_index: int
    num_levels: int
    coins_collected: int
    reason: Optional[str] = None

    @property
    def levels_played(self) -> int:
        return self.level_index + 1

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["levels_played"] = self.levels_played
        return d
