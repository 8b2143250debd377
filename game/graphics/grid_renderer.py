"""
Grid renderer: draws every cell of the active grid as a coloured tile + glyph.

What each kind looks like lives in an immutable GlyphTable handed to the
renderer; nothing about presentation is stored in the simulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

import pygame

from config import (
    CELL_SIZE,
    COLOR_COIN,
    COLOR_DOOR,
    COLOR_ENEMY,
    COLOR_FLOOR,
    COLOR_PLAYER,
    COLOR_WALL,
    COLOR_WHITE,
)
from game.entities.player import Direction
from game.graphics.font_cache import render_text_cached
from game.world import CellKind, Grid

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Glyph:
    symbol: str
    color: Color
    background: Color = COLOR_FLOOR


def _default_glyphs() -> Mapping[CellKind, Glyph]:
    return MappingProxyType({
        CellKind.WALL: Glyph("", COLOR_WALL, COLOR_WALL),
        CellKind.FLOOR: Glyph("", COLOR_FLOOR),
        CellKind.COIN: Glyph("O", COLOR_COIN),
        CellKind.ENEMY: Glyph("X", COLOR_ENEMY),
        CellKind.PLAYER: Glyph("^", COLOR_PLAYER),
        CellKind.DOOR: Glyph("D", COLOR_WHITE, COLOR_DOOR),
    })


def _default_player_symbols() -> Mapping[Direction, str]:
    return MappingProxyType({
        Direction.UP: "^",
        Direction.DOWN: "v",
        Direction.LEFT: "<",
        Direction.RIGHT: ">",
    })


@dataclass(frozen=True)
class GlyphTable:
    """Kind -> glyph, plus the player symbol for each facing."""

    glyphs: Mapping[CellKind, Glyph] = field(default_factory=_default_glyphs)
    player_symbols: Mapping[Direction, str] = field(default_factory=_default_player_symbols)

    def __post_init__(self):
        # Snapshot caller-supplied dicts so later edits to them cannot leak in.
        object.__setattr__(self, "glyphs", MappingProxyType(dict(self.glyphs)))
        object.__setattr__(self, "player_symbols", MappingProxyType(dict(self.player_symbols)))

    def glyph_for(self, kind: CellKind, facing: Direction = Direction.UP) -> Glyph:
        glyph = self.glyphs[kind]
        if kind is CellKind.PLAYER:
            return Glyph(self.player_symbols.get(facing, glyph.symbol), glyph.color, glyph.background)
        return glyph

    def text_rows(self, grid: Grid, facing: Direction = Direction.UP) -> list[str]:
        """Plain-text view of the grid (one character per cell, walls as '#')."""
        rows = []
        for y in range(grid.height):
            chars = []
            for x in range(grid.width):
                kind = grid.kind_at(x, y)
                symbol = self.glyph_for(kind, facing).symbol
                chars.append(symbol or kind.value)
            rows.append("".join(chars))
        return rows


class GridRenderer:
    """Draws a Grid onto a surface, one CELL_SIZE square per cell."""

    def __init__(self, glyphs: GlyphTable | None = None, cell_size: int = CELL_SIZE):
        self.glyphs = glyphs if glyphs is not None else GlyphTable()
        self.cell_size = int(cell_size)
        self.font_size = max(8, int(self.cell_size * 1.1))

    def surface_size(self, grid: Grid) -> tuple[int, int]:
        return grid.width * self.cell_size, grid.height * self.cell_size

    def render(self, surface: pygame.Surface, grid: Grid, facing: Direction, *, skip_rows: int = 0):
        """Render the grid. Rows above `skip_rows` are left to the HUD (status line)."""
        cs = self.cell_size
        for x, y, kind in grid.iter_cells():
            if y < skip_rows:
                continue
            glyph = self.glyphs.glyph_for(kind, facing)
            rect = pygame.Rect(x * cs, y * cs, cs, cs)
            pygame.draw.rect(surface, glyph.background, rect)
            if glyph.symbol:
                img = render_text_cached(self.font_size, glyph.symbol, glyph.color)
                surface.blit(img, img.get_rect(center=rect.center))
