"""
Endless Chase - collect every coin, then reach the door before the enemies reach you.

Usage:
    python main.py [--difficulty <tier>] [--levels <dir>] [--seed <int>]

Difficulty tiers (ticks between enemy steps):
    easy       7
    medium     5
    hard       3   (default)
    very_hard  2
    nightmare  1
"""
import sys
import argparse

import config
from game.engine import GameEngine
from game.levels import LevelLoadError, LevelSet
from game.sim.determinism import get_rng, set_sim_seed
from game.simulation import Difficulty, Simulation, SimulationSettings
from game.systems.pathfinding import TieBreak
from game.ui.report import print_report


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Endless Chase - a grid maze chase game with A* enemies"
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        default=config.DIFFICULTY,
        choices=[d.value for d in Difficulty],
        help=f"enemy speed tier (default: {config.DIFFICULTY})"
    )
    parser.add_argument("--levels", type=str, default=config.LEVEL_DIR, help="directory holding level<N>.txt files")
    parser.add_argument("--start-level", type=int, default=0, help="level index to start on (default: 0)")
    parser.add_argument("--seed", type=int, default=config.SIM_SEED, help="placement RNG seed (default: clock)")
    parser.add_argument("--coins", type=int, default=config.COINS_PER_LEVEL, help="coins scattered per level")
    parser.add_argument("--enemies", type=int, default=config.ENEMIES_PER_LEVEL, help="enemies scattered per level")
    parser.add_argument("--tick-ms", type=int, default=config.TICK_DELAY_MS, help="delay between ticks in ms")
    parser.add_argument(
        "--tie-break",
        type=str,
        default=config.PATHFINDING_TIE_BREAK,
        choices=[t.value for t in TieBreak],
        help="A* frontier tie-break policy (default: ordered)"
    )
    args = parser.parse_args(argv)

    # argparse only checks `choices` for values given on the command line, not for defaults from .env
    difficulties = [d.value for d in Difficulty]
    if args.difficulty not in difficulties:
        parser.error(f"invalid CHASE_DIFFICULTY {args.difficulty!r}; choose from {', '.join(difficulties)}")
    policies = [t.value for t in TieBreak]
    if args.tie_break not in policies:
        parser.error(f"invalid CHASE_TIE_BREAK {args.tie_break!r}; choose from {', '.join(policies)}")
    return args


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    print("=" * 50)
    print("  Endless Chase")
    print("=" * 50)
    print()

    set_sim_seed(args.seed)
    print(f"[main] difficulty={args.difficulty} tie_break={args.tie_break}")

    settings = SimulationSettings(
        difficulty=Difficulty(args.difficulty),
        coins_per_level=max(0, args.coins),
        enemies_per_level=max(0, args.enemies),
        tie_break=TieBreak(args.tie_break),
    )
    levels = LevelSet(args.levels)
    try:
        sim = Simulation(levels, settings=settings, rng=get_rng("placement"), start_level=args.start_level)
    except LevelLoadError as e:
        print(f"[levels] {e}")
        return 1

    print()
    print("Controls:")
    print("  WASD / Arrows - Move")
    print("  F2            - Perf overlay")
    print("  Esc           - Quit")
    print()
    print("Starting game...")
    print()

    game = GameEngine(sim, tick_delay_ms=args.tick_ms)
    summary = game.run()

    print_report(summary)
    print("Thanks for playing!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
