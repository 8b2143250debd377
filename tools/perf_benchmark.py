"""
Headless performance benchmark runner.

Every enemy re-runs A* from scratch on every enemy tick, which is the dominant
cost of a tick. This drives the simulation without a window (random-walk
player, no sleeping) and prints ms/tick plus pathfinding stats so enemy count
and tie-break policy can be compared.

Examples:
  python tools/perf_benchmark.py --ticks 2000 --enemies 8 --seed 3
  python tools/perf_benchmark.py --ticks 5000 --enemies 20 --tie-break fifo --csv perf.csv
"""

from __future__ import annotations

import argparse
import csv
import sys
import time
from pathlib import Path

# Ensure imports work when running as `python tools/perf_benchmark.py`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import LEVEL_DIR  # noqa: E402
from game.entities.player import Direction  # noqa: E402
from game.levels import LevelSet  # noqa: E402
from game.sim.determinism import get_rng, set_sim_seed  # noqa: E402
from game.simulation import Difficulty, Simulation, SimulationSettings  # noqa: E402
from game.systems import perf_stats  # noqa: E402
from game.systems.pathfinding import TieBreak  # noqa: E402


def _fmt(v: float) -> str:
    return f"{v:0.3f}"


def run_benchmark(
    *,
    ticks: int,
    enemies: int,
    coins: int,
    seed: int,
    tie_break: TieBreak,
    level_dir: str = LEVEL_DIR,
) -> dict:
    """Run up to `ticks` ticks (restarting after each game over) and return the measurements."""
    set_sim_seed(seed)
    settings = SimulationSettings(
        difficulty=Difficulty.NIGHTMARE,
        coins_per_level=coins,
        enemies_per_level=enemies,
        tie_break=tie_break,
    )
    levels = LevelSet(level_dir)
    placement_rng = get_rng("placement")
    walk_rng = get_rng("benchmark_walk")
    directions = list(Direction)

    perf_stats.reset_pathfinding()
    sim = Simulation(levels, settings=settings, rng=placement_rng)
    games = 1
    t0 = time.perf_counter()
    for _ in range(ticks):
        if sim.is_over:
            sim = Simulation(levels, settings=settings, rng=placement_rng)
            games += 1
        sim.step(walk_rng.choice(directions))
    total_ms = (time.perf_counter() - t0) * 1000.0

    return {
        "ticks": ticks,
        "games": games,
        "enemies": enemies,
        "seed": seed,
        "tie_break": tie_break.value,
        "ms_per_tick": total_ms / ticks if ticks else 0.0,
        **{f"pf_{k}": v for k, v in perf_stats.pathfinding.snapshot().items()},
    }


def main() -> int:
    ap = argparse.ArgumentParser(description="Headless perf benchmark (ms/tick)")
    ap.add_argument("--ticks", type=int, default=2000)
    ap.add_argument("--seed", type=int, default=3)
    ap.add_argument("--enemies", type=int, default=4, help="enemies scattered per level")
    ap.add_argument("--coins", type=int, default=10, help="coins scattered per level")
    ap.add_argument("--tie-break", type=str, default="ordered", choices=[t.value for t in TieBreak])
    ap.add_argument("--levels", type=str, default=LEVEL_DIR)
    ap.add_argument("--csv", type=str, default="", help="optional path to append one row of results")
    ns = ap.parse_args()

    result = run_benchmark(
        ticks=max(1, int(ns.ticks)),
        enemies=max(0, int(ns.enemies)),
        coins=max(0, int(ns.coins)),
        seed=int(ns.seed),
        tie_break=TieBreak(ns.tie_break),
        level_dir=ns.levels,
    )

    print("[perf] ticks:", result["ticks"], "games:", result["games"], "enemies/level:", result["enemies"])
    print("[perf] ms/tick total:", _fmt(result["ms_per_tick"]))
    print(
        "[perf] pathfinding: calls=",
        result["pf_calls"],
        "fails=",
        result["pf_failures"],
        "expanded=",
        result["pf_expansions"],
        "ms_total=",
        _fmt(result["pf_total_ms"]),
        "ms/call=",
        _fmt(result["pf_avg_ms"]),
        "ms/worst=",
        _fmt(result["pf_worst_ms"]),
    )
    if ns.csv:
        out_path = Path(ns.csv)
        write_header = not out_path.exists()
        with out_path.open("a", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            if write_header:
                w.writerow(list(result.keys()))
            w.writerow(list(result.values()))
        print("[perf] wrote:", str(out_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
