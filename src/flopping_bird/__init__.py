"""
Flopping Bird: a frame-driven flappy-bird simulation with a pygame front-end.
"""

from .config import GameConfig, Variant
from .physics_engine import GameEngine
from .score_store import BestScoreStore
from .snapshot import FrameSnapshot

__all__ = ["GameConfig", "Variant", "GameEngine", "BestScoreStore", "FrameSnapshot"]
