"""2048 sliding-tile game engine with checksummed save files."""

from .config import GameConfig
from .controller import GameController, KeyPressFilter, LoadOutcome
from .core import Direction, GameState, GameStateView
from .envs import TwentyFortyEight

__all__ = [
    "GameConfig",
    "GameController",
    "KeyPressFilter",
    "LoadOutcome",
    "Direction",
    "GameState",
    "GameStateView",
    "TwentyFortyEight",
]
