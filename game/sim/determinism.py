"""
Seeded randomness for the simulation.

Coin and enemy placement are the only random decisions in a game. They draw
from `random.Random` streams derived here from one base seed, so a run is
replayed by passing the same `--seed` (or CHASE_SIM_SEED).

Streams are keyed by a tag ("placement", "benchmark_walk", ...). A tagged
stream depends only on the base seed and the tag, never on how many numbers
other systems have drawn.
"""

from __future__ import annotations

import random
import time
import zlib
from typing import Optional

_SEED_MASK = 0xFFFFFFFF

_base_seed: int = 1
_shared: random.Random = random.Random(_base_seed)


def set_sim_seed(seed: Optional[int]) -> int:
    """
    Install the base seed and return it (reduced to 32 bits).

    `None` picks one from the clock. The chosen seed is printed either way so
    any run can be repeated with `--seed`.
    """
    global _base_seed, _shared
    origin = "fixed"
    if seed is None:
        seed = time.time_ns()
        origin = "clock"
    _base_seed = int(seed) & _SEED_MASK
    _shared = random.Random(_base_seed)
    print(f"[determinism] base seed {_base_seed} ({origin}); replay with --seed {_base_seed}")
    return _base_seed


def get_sim_seed() -> int:
    return _base_seed


def _stream_seed(tag: str) -> int:
    # zlib.crc32 is stable between processes; hash() of a str is not.
    return (_base_seed ^ zlib.crc32(tag.encode("utf-8"))) & _SEED_MASK


def get_rng(tag: Optional[str] = None) -> random.Random:
    """
    A fresh stream for `tag`, or the shared stream when no tag is given.

    The shared stream's output depends on every earlier draw from it.
    """
    if tag is None:
        return _shared
    return random.Random(_stream_seed(str(tag)))
