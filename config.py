"""
Configuration settings for Endless Chase.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent

# Window settings
VERSION = "1.0.0"
GAME_TITLE = f"Endless Chase (v{VERSION})"
CELL_SIZE = int(os.getenv("CHASE_CELL_SIZE", "20"))  # pixels per grid cell
FPS = 60

# Grid settings (bundled levels; every loaded grid carries its own size)
DEFAULT_GRID_WIDTH = 30
DEFAULT_GRID_HEIGHT = 31
STATUS_ROW = 0  # reserved for the status line, never hosts entities

# Colors
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_WALL = (40, 60, 150)
COLOR_FLOOR = (12, 12, 18)
COLOR_COIN = (255, 215, 0)
COLOR_ENEMY = (220, 20, 60)
COLOR_PLAYER = (50, 205, 50)
COLOR_DOOR = (139, 69, 19)
COLOR_STATUS_BG = (30, 30, 40)

# Pacing
TICK_DELAY_MS = int(os.getenv("CHASE_TICK_DELAY_MS", "50"))

# Difficulty: ticks between enemy steps (lower = faster enemies)
ENEMY_DELAY_BY_DIFFICULTY = {
    "easy": 7,
    "medium": 5,
    "hard": 3,
    "very_hard": 2,
    "nightmare": 1,
}
DIFFICULTY = os.getenv("CHASE_DIFFICULTY", "hard").strip().lower()

# Level contents
COINS_PER_LEVEL = int(os.getenv("CHASE_COINS_PER_LEVEL", "10"))
ENEMIES_PER_LEVEL = int(os.getenv("CHASE_ENEMIES_PER_LEVEL", "1"))
LEVEL_DIR = os.getenv("CHASE_LEVEL_DIR", str(PROJECT_ROOT / "levels"))

# Determinism: unset means seed from the clock at startup
_seed = os.getenv("CHASE_SIM_SEED", "").strip()
SIM_SEED = int(_seed) if _seed else None

# Pathfinding: ordered | fifo | lifo
PATHFINDING_TIE_BREAK = os.getenv("CHASE_TIE_BREAK", "ordered").strip().lower()
