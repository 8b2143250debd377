"""
Pathfinding counters behind the F2 overlay and tools/perf_benchmark.py.

Each enemy runs a fresh A* search on every enemy tick; with many enemies on
a fast difficulty that search is nearly the whole tick. One record() per
search keeps the bookkeeping out of the chase loop.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class _PathStats:
    calls: int = 0
    failures: int = 0
    expansions: int = 0
    total_ms: float = 0.0
    worst_ms: float = 0.0

    @property
    def avg_ms(self) -> float:
        return self.total_ms / self.calls if self.calls else 0.0

    def record(self, elapsed_ms: float, *, found: bool, expansions: int) -> None:
        self.calls += 1
        self.expansions += int(expansions)
        self.total_ms += elapsed_ms
        self.worst_ms = max(self.worst_ms, elapsed_ms)
        if not found:
            self.failures += 1

    def snapshot(self) -> dict:
        d = asdict(self)
        d["avg_ms"] = self.avg_ms
        return d

    def clear(self) -> None:
        self.calls = self.failures = self.expansions = 0
        self.total_ms = self.worst_ms = 0.0


# Shared by every Simulation in the process.
pathfinding = _PathStats()


def reset_pathfinding() -> None:
    pathfinding.clear()
