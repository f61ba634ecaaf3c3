from .game_base import Game
from .config import EngineConfig

__all__ = ["Game", "EngineConfig"]
