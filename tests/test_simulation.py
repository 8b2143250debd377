"""Tick-level tests for the simulation state machine."""

import random

import pytest

import config
from game.entities.player import Direction
from game.levels import LevelLoadError, LevelSet
from game.simulation import (
    CAUGHT,
    COMPLETED,
    LEVEL_UNAVAILABLE,
    Difficulty,
    GamePhase,
    Simulation,
    SimulationSettings,
)
from game.world import CellKind
from tests.helpers import StaticLevels, settings

COIN_ROOM = [
    "#####",
    "#P  #",
    "# O #",
    "#   #",
    "#####",
]

# Coin left of the spawn, door right of it, no floor left for placement.
TINY_EXIT = [
    "#####",
    "#OPD#",
    "#####",
]

LOCKED_DOOR = [
    "######",
    "#O  PD",
    "######",
]

NEXT_ROOM = [
    "#####",
    "#P  #",
    "#   #",
    "#####",
]


def _sim(*levels, **kwargs):
    opts = {"settings": settings(), "rng": random.Random(5)}
    opts.update(kwargs)
    return Simulation(StaticLevels(*levels), **opts)


def test_collecting_a_coin_end_to_end():
    sim = _sim(COIN_ROOM)

    sim.step(Direction.RIGHT)
    report = sim.step(Direction.DOWN)

    assert sim.player.position == (2, 2)
    assert report.coin_collected
    assert sim.score == 1
    assert sim.remaining_coins == 0
    assert sim.grid.kind_at(2, 2) is CellKind.PLAYER
    assert sim.grid.count_cells(CellKind.COIN) == 0
    assert sim.grid.count_cells(CellKind.PLAYER) == 1


def test_previous_cell_reverts_to_floor():
    sim = _sim(COIN_ROOM)
    sim.step(Direction.RIGHT)
    assert sim.grid.kind_at(1, 1) is CellKind.FLOOR
    assert sim.grid.kind_at(2, 1) is CellKind.PLAYER


def test_wall_blocks_movement_but_updates_facing():
    sim = _sim(COIN_ROOM)
    report = sim.step(Direction.UP)
    assert not report.player_moved
    assert sim.player.position == (1, 1)
    assert sim.player.facing is Direction.UP

    sim.step(Direction.LEFT)
    assert sim.player.position == (1, 1)
    assert sim.player.facing is Direction.LEFT


def test_no_intent_keeps_position_and_facing():
    sim = _sim(COIN_ROOM)
    sim.step(Direction.RIGHT)
    report = sim.step(None)
    assert not report.player_moved
    assert sim.player.position == (2, 1)
    assert sim.player.facing is Direction.RIGHT


def test_door_is_masked_until_coins_are_gone():
    sim = _sim(LOCKED_DOOR)
    door = sim.grid.to_index(5, 1)

    # the door is masked before the first move is resolved
    sim.step(Direction.RIGHT)
    assert sim.door_index == door
    assert sim.grid.cell_at(door) is CellKind.WALL
    assert sim.door_locked
    assert sim.player.position == (4, 1)

    for _ in range(3):
        report = sim.step(Direction.LEFT)
    assert report.coin_collected
    assert report.door_unlocked
    assert sim.grid.cell_at(door) is CellKind.FLOOR
    assert not sim.door_locked

    for _ in range(4):
        report = sim.step(Direction.RIGHT)
    assert sim.player.position == (5, 1)
    assert report.game_over
    assert report.game_over_reason == COMPLETED


def test_crossing_the_door_loads_the_next_level():
    levels = StaticLevels(TINY_EXIT, NEXT_ROOM)
    sim = Simulation(levels, settings=settings(coins=3), rng=random.Random(5))
    first_grid = sim.grid
    assert first_grid.count_cells(CellKind.COIN) == 1  # nowhere to place more

    sim.step(Direction.LEFT)   # coin, door unlocks
    sim.step(Direction.RIGHT)
    report = sim.step(Direction.RIGHT)

    assert report.level_changed
    assert not report.game_over
    assert sim.level_index == 1
    assert sim.grid is not first_grid
    assert sim.tick == 0
    assert sim.remaining_coins == 3
    assert sim.grid.count_cells(CellKind.COIN) == 3
    assert sim.player.position == (1, 1)
    assert sim.grid.kind_at(1, 1) is CellKind.PLAYER
    assert sim.score == 1
    assert levels.loads == [0, 1]


def test_crossing_the_door_on_the_last_level_ends_the_game():
    sim = _sim(TINY_EXIT)
    sim.step(Direction.LEFT)
    sim.step(Direction.RIGHT)
    report = sim.step(Direction.RIGHT)

    assert report.game_over
    assert sim.phase is GamePhase.GAME_OVER
    summary = sim.summary()
    assert summary.reason == COMPLETED
    assert summary.coins_collected == 1
    assert summary.levels_played == 1


def test_failed_level_load_keeps_the_current_grid():
    levels = StaticLevels(TINY_EXIT, count=2)  # level1 is listed but missing
    sim = Simulation(levels, settings=settings(), rng=random.Random(5))
    grid = sim.grid

    sim.step(Direction.LEFT)
    sim.step(Direction.RIGHT)
    report = sim.step(Direction.RIGHT)

    assert report.game_over
    assert report.game_over_reason == LEVEL_UNAVAILABLE
    assert isinstance(sim.load_error, LevelLoadError)
    assert sim.grid is grid
    assert sim.level_index == 0
    assert grid.kind_at(3, 1) is CellKind.PLAYER


def test_missing_first_level_raises():
    with pytest.raises(LevelLoadError):
        Simulation(StaticLevels(), settings=settings())
    with pytest.raises(LevelLoadError):
        Simulation(StaticLevels(COIN_ROOM), settings=settings(), start_level=3)


def test_enemy_steps_one_cell_per_enemy_tick():
    sim = _sim(["X   P"])
    report = sim.step(None)
    assert report.enemies_moved
    assert sim.enemy_positions() == [(1, 0)]
    assert not sim.is_over


def test_enemy_cadence_follows_difficulty():
    sim = _sim(
        ["#######", "#X   P#", "#######"],
        settings=settings(difficulty=Difficulty.HARD),
    )
    assert sim.enemy_delay == 3
    sim.step(None)
    sim.step(None)
    assert sim.enemy_positions() == [(1, 1)]
    report = sim.step(None)
    assert report.enemies_moved
    assert sim.enemy_positions() == [(2, 1)]


@pytest.mark.parametrize(
    "difficulty,delay",
    [
        (Difficulty.EASY, 7),
        (Difficulty.MEDIUM, 5),
        (Difficulty.HARD, 3),
        (Difficulty.VERY_HARD, 2),
        (Difficulty.NIGHTMARE, 1),
    ],
)
def test_difficulty_delays(difficulty, delay):
    assert difficulty.enemy_delay == delay


def test_enemy_catching_player_ends_game():
    sim = _sim(["####", "#XP#", "####"])
    report = sim.step(None)
    assert report.game_over
    assert report.game_over_reason == CAUGHT
    assert sim.summary().reason == CAUGHT


def test_walking_into_an_enemy_ends_game():
    sim = _sim(["#####", "#XP #", "#####"], settings=settings(difficulty=Difficulty.EASY))
    report = sim.step(Direction.LEFT)
    assert not report.enemies_moved
    assert report.game_over_reason == CAUGHT


def test_enemy_in_vacated_cell_is_not_erased():
    sim = _sim(["######", "#XP  #", "######"])
    report = sim.step(Direction.RIGHT)
    assert report.enemy_moves == [(sim.grid.to_index(1, 1), sim.grid.to_index(2, 1))]
    assert sim.grid.kind_at(2, 1) is CellKind.ENEMY
    assert sim.grid.kind_at(3, 1) is CellKind.PLAYER
    assert sim.grid.count_cells(CellKind.ENEMY) == 1
    assert not sim.is_over


def test_steps_after_game_over_change_nothing():
    sim = _sim(["####", "#XP#", "####"])
    sim.step(None)
    before = sim.grid.to_rows()
    tick = sim.tick
    report = sim.step(Direction.RIGHT)
    assert report.game_over
    assert sim.tick == tick
    assert sim.grid.to_rows() == before


def test_bundled_levels_placement_is_seeded():
    def build():
        s = settings(difficulty=Difficulty.HARD, coins=10, enemies=2)
        return Simulation(LevelSet(config.LEVEL_DIR), settings=s, rng=random.Random(42))

    a, b = build(), build()
    assert a.grid.to_rows() == b.grid.to_rows()
    assert a.grid.count_cells(CellKind.COIN) == 10
    assert a.grid.count_cells(CellKind.ENEMY) == 2
    assert a.num_levels == 3
    for x in range(a.grid.width):
        assert a.grid.kind_at(x, 0) is CellKind.WALL

    for direction in [Direction.RIGHT] * 5 + [Direction.DOWN] * 3:
        ra, rb = a.step(direction), b.step(direction)
        assert ra.to_dict() == rb.to_dict()
    assert a.grid.to_rows() == b.grid.to_rows()


def test_settings_from_config_take_overrides():
    s = SimulationSettings.from_config(coins_per_level=4, enemies_per_level=None)
    assert s.coins_per_level == 4
    assert s.enemies_per_level == config.ENEMIES_PER_LEVEL
    assert s.difficulty is Difficulty(config.DIFFICULTY)
    assert s.enemy_delay == config.ENEMY_DELAY_BY_DIFFICULTY[config.DIFFICULTY]
