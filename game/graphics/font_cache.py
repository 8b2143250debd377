"""
Font and glyph surface cache for the grid renderer and HUD.

Every tick redraws the whole board, one glyph per cell. The board only ever
shows a handful of distinct (symbol, colour) pairs, so each pair is rendered
once and blitted from here afterwards. Font objects are shared by size.
"""

from __future__ import annotations

from typing import Dict, Tuple

import pygame

Color = Tuple[int, int, int]
_GlyphKey = Tuple[int, str, Color, bool]

_fonts: Dict[int, pygame.font.Font] = {}
_glyphs: Dict[_GlyphKey, pygame.Surface] = {}

# Oldest entries are evicted past this; a board needs far fewer.
_GLYPH_CACHE_MAX = 256


def get_font(size: int) -> pygame.font.Font:
    """Default pygame font at `size`, created on first use (needs pygame.font.init())."""
    size = int(size)
    if size not in _fonts:
        _fonts[size] = pygame.font.Font(None, size)
    return _fonts[size]


def render_text_cached(size: int, text: str, color: Color, antialias: bool = True) -> pygame.Surface:
    """
    Surface for a short static label such as a cell glyph.

    The score line changes every coin and is rendered directly instead.
    """
    key: _GlyphKey = (int(size), str(text), tuple(int(c) for c in color[:3]), bool(antialias))
    surf = _glyphs.get(key)
    if surf is None:
        if len(_glyphs) >= _GLYPH_CACHE_MAX:
            del _glyphs[next(iter(_glyphs))]
        surf = get_font(key[0]).render(key[1], key[3], key[2])
        _glyphs[key] = surf
    return surf


def cache_size() -> int:
    return len(_glyphs)


def clear_caches() -> None:
    """Forget every font and surface; required before pygame.quit() if pygame is started again."""
    _fonts.clear()
    _glyphs.clear()
