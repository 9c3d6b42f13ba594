"""
snapshot.py: Read-only view of one finished tick, handed to the renderer.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class FrameSnapshot:
    frame: int
    status: str
    score: int
    best_score: int
    speed: float
    shake: float
    avatar: Dict[str, Any]
    pipes: Tuple[Dict[str, Any], ...] = ()
    terrain: Tuple[Dict[str, Any], ...] = ()
    collectibles: Tuple[Dict[str, Any], ...] = ()
    hazards: Tuple[Dict[str, Any], ...] = ()
    particles: Tuple[Dict[str, Any], ...] = ()
    texts: Tuple[Dict[str, Any], ...] = ()
