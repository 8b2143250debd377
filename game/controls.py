"""
Keyboard polling -> per-tick movement intent.

Input is sampled, not queued: once per tick the engine takes a
`pygame.key.get_pressed()` snapshot and turns it into at most one Direction.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence

import pygame

from game.entities.player import Direction

# Checked in this order; the first held key wins.
KEY_BINDINGS: tuple[tuple[Direction, tuple[int, ...]], ...] = (
    (Direction.UP, (pygame.K_w, pygame.K_UP)),
    (Direction.LEFT, (pygame.K_a, pygame.K_LEFT)),
    (Direction.DOWN, (pygame.K_s, pygame.K_DOWN)),
    (Direction.RIGHT, (pygame.K_d, pygame.K_RIGHT)),
)

InputSampler = Callable[[], Optional[Direction]]


def intent_from_pressed(pressed: Sequence[bool]) -> Optional[Direction]:
    """Map a get_pressed() snapshot to a movement intent (None if no movement key is held)."""
    for direction, keys in KEY_BINDINGS:
        if any(pressed[key] for key in keys):
            return direction
    return None


def poll_keyboard() -> Optional[Direction]:
    """Default input sampler: poll the live keyboard state."""
    return intent_from_pressed(pygame.key.get_pressed())
