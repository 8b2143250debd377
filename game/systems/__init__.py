"""
Game systems package.
"""
from .pathfinding import TieBreak, find_path
from .placement import place_coins, place_enemies, place_entities
from .chase import move_enemies
