"""
Level files: loading, validation and counting.

A level is plain text, one grid row per line, using the CellKind alphabet:

    #  wall        O  coin       P  player spawn
       floor       X  enemy      D  door to the next level

Levels live in a directory as `level0.txt`, `level1.txt`, ... A level is
either returned as a complete Grid or rejected with LevelLoadError; a
partially parsed grid never escapes this module.
"""
from __future__ import annotations

import re
from pathlib import Path

from game.world import CellKind, Grid

_LEVEL_FILE_RE = re.compile(r"^level(\d+)\.txt$")
_ALPHABET = {kind.value for kind in CellKind}


class LevelLoadError(Exception):
    """A level (or the level directory) is missing, unreadable or malformed."""


def parse_level(text: str, source: str = "<string>") -> Grid:
    """Parse level text into a Grid, validating shape and alphabet."""
    rows = [line.rstrip("\r") for line in text.split("\n")]
    while rows and rows[-1] == "":
        rows.pop()
    if not rows:
        raise LevelLoadError(f"{source}: level is empty")

    width = len(rows[0])
    if width == 0:
        raise LevelLoadError(f"{source}: first row is empty")
    for y, row in enumerate(rows):
        if len(row) != width:
            raise LevelLoadError(f"{source}: row {y} has width {len(row)}, expected {width}")
        bad = set(row) - _ALPHABET
        if bad:
            raise LevelLoadError(f"{source}: row {y} has unknown characters {sorted(bad)!r}")

    spawns = sum(row.count(CellKind.PLAYER.value) for row in rows)
    if spawns != 1:
        raise LevelLoadError(f"{source}: expected exactly one player spawn, found {spawns}")

    return Grid.from_rows(rows)


def count_levels(level_dir: str | Path) -> int:
    """Count `level<N>.txt` files in a directory."""
    path = Path(level_dir)
    if not path.is_dir():
        raise LevelLoadError(f"level directory not found: {path}")
    try:
        entries = list(path.iterdir())
    except OSError as e:
        raise LevelLoadError(f"failed to open directory {path}: {e}") from e
    return sum(1 for p in entries if p.is_file() and _LEVEL_FILE_RE.match(p.name))


class LevelSet:
    """A directory of numbered level files."""

    def __init__(self, level_dir: str | Path):
        self.level_dir = Path(level_dir)

    def path_for(self, index: int) -> Path:
        return self.level_dir / f"level{int(index)}.txt"

    def count(self) -> int:
        return count_levels(self.level_dir)

    def load(self, index: int) -> Grid:
        path = self.path_for(index)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise LevelLoadError(f"failed to open file: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise LevelLoadError(f"failed to read {path}: {e}") from e
        return parse_level(text, source=str(path))
