"""
Determinism guard (static check).

A game is replayable from its seed only if the tick rules never consult the
clock or an unseeded RNG. This walks the AST of the simulation modules and
reports every call that would break that:

- clock reads: time.time()/time_ns()/monotonic(), pygame.time.get_ticks(),
  datetime.now()/utcnow()/today()
- module-level random.*() (placement must use game.sim.determinism.get_rng
  or an injected random.Random)
- built-in hash() (salted per process)

time.perf_counter() stays legal; it only feeds perf counters.

Presentation and the real-time loop are not simulation code and are not
scanned: game/ui, game/graphics, game/engine.py, game/controls.py. Neither is
game/sim, which owns the seeded wrappers.

Usage:
  python tools/determinism_guard.py
  python tools/determinism_guard.py --paths game/systems --json
"""

from __future__ import annotations

import argparse
import ast
import json
from pathlib import Path
from typing import Callable, Iterable, NamedTuple


PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SCAN_PATHS = [
    PROJECT_ROOT / "game" / "entities",
    PROJECT_ROOT / "game" / "systems",
    PROJECT_ROOT / "game" / "simulation.py",
    PROJECT_ROOT / "game" / "world.py",
    PROJECT_ROOT / "game" / "levels.py",
]

EXCLUDED_DIRS = [
    PROJECT_ROOT / "game" / "ui",
    PROJECT_ROOT / "game" / "graphics",
    PROJECT_ROOT / "game" / "sim",
]


class Rule(NamedTuple):
    kind: str
    matches: Callable[[tuple[str, ...]], bool]
    detail: str


_CLOCK_FUNCS = {"time", "time_ns", "monotonic"}
_DATETIME_FUNCS = {"now", "utcnow", "today"}
_RANDOM_FUNCS = {
    "random", "randint", "randrange", "uniform",
    "choice", "choices", "sample", "shuffle", "seed",
}

RULES = [
    Rule(
        "wall_clock_time",
        lambda c: c == ("pygame", "time", "get_ticks"),
        "pygame.time.get_ticks() in simulation code; the tick counter is the only clock.",
    ),
    Rule(
        "wall_clock_time",
        lambda c: len(c) == 2 and c[0] == "time" and c[1] in _CLOCK_FUNCS,
        "time.*() in simulation code; the tick counter is the only clock.",
    ),
    Rule(
        "wall_clock_time",
        lambda c: c[-1] in _DATETIME_FUNCS and "datetime" in c,
        "datetime.now()/utcnow()/today() in simulation code.",
    ),
    Rule(
        "global_rng",
        lambda c: len(c) == 2 and c[0] == "random" and c[1] in _RANDOM_FUNCS,
        "global random.*(); use game.sim.determinism.get_rng(tag) or an injected random.Random.",
    ),
    Rule(
        "unstable_hash",
        lambda c: c == ("hash",),
        "built-in hash() is salted per process; use zlib.crc32 for stable keys.",
    ),
]


def _relpath(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(path)


def _excluded(path: Path) -> bool:
    resolved = path.resolve()
    return any(resolved.is_relative_to(d.resolve()) for d in EXCLUDED_DIRS)


def collect_files(roots: Iterable[Path]) -> list[Path]:
    files: set[Path] = set()
    for root in roots:
        if root.is_file() and root.suffix == ".py":
            files.add(root)
        elif root.is_dir():
            files.update(p for p in root.rglob("*.py") if not _excluded(p))
    return sorted(files)


def call_chain(func: ast.AST) -> tuple[str, ...] | None:
    """`pygame.time.get_ticks` -> ("pygame", "time", "get_ticks"); None for anything but names/attributes."""
    parts: list[str] = []
    while isinstance(func, ast.Attribute):
        parts.append(func.attr)
        func = func.value
    if not isinstance(func, ast.Name):
        return None
    parts.append(func.id)
    return tuple(reversed(parts))


def _finding(kind: str, path: Path, line: int, col: int, detail: str) -> dict:
    return {"kind": kind, "file": _relpath(path), "line": line, "col": col, "detail": detail}


def scan_file(path: Path) -> list[dict]:
    src = path.read_text(encoding="utf-8", errors="replace")
    try:
        tree = ast.parse(src, filename=str(path))
    except SyntaxError as e:
        return [_finding("parse_error", path, e.lineno or 0, e.offset or 0, f"SyntaxError: {e.msg}")]

    findings = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        chain = call_chain(node.func)
        if chain is None:
            continue
        for rule in RULES:
            if rule.matches(chain):
                findings.append(_finding(rule.kind, path, node.lineno, node.col_offset, rule.detail))
                break
    return sorted(findings, key=lambda f: (f["file"], f["line"], f["col"]))


def scan(paths: Iterable[Path] | None = None) -> list[dict]:
    """Findings for `paths` (files or dirs), defaulting to the simulation modules."""
    roots = list(paths) if paths else DEFAULT_SCAN_PATHS
    findings: list[dict] = []
    for path in collect_files(roots):
        findings.extend(scan_file(path))
    return findings


def main() -> int:
    ap = argparse.ArgumentParser(description="Static determinism guard for simulation code")
    ap.add_argument("--paths", nargs="*", default=[], help="files or dirs to scan instead of the simulation modules")
    ap.add_argument("--json", action="store_true", help="emit machine-readable JSON")
    ns = ap.parse_args()

    findings = scan([Path(p) for p in ns.paths] or None)

    if ns.json:
        print(json.dumps({"findings": findings}, indent=2))
    elif not findings:
        print("[determinism_guard] PASS: no violations found")
    else:
        print(f"[determinism_guard] FAIL: {len(findings)} violation(s)")
        for f in findings:
            print(f"- {f['file']}:{f['line']}:{f['col']} [{f['kind']}] {f['detail']}")

    return 1 if findings else 0


if __name__ == "__main__":
    raise SystemExit(main())
