"""
Game entities package.

Enemies, coins and the door are plain cell kinds on the grid (see
`game/world.py`); only the player carries state of its own.
"""
from .player import Direction, Player
