"""
obstacles.py: Pipe pair placement, cadence and vertical oscillation.
"""

import math
from typing import Tuple

from .config import GameConfig
from .data_models import ObstaclePair


def gap_bounds(config: GameConfig) -> Tuple[float, float]:
    """
    Allowed range for a pair's top-segment height. Always non-empty: if the
    playfield is too short for the gap, the range collapses onto its minimum.
    """
    low = config.pipe_min_height
    high = config.height - config.ground_allowance - config.pipe_gap - config.pipe_min_height
    return low, max(low, high)


def spawn_interval(config: GameConfig, speed: float) -> int:
    """Ticks between two pairs; shorter as the run speeds up."""
    if speed <= 0:
        return config.pipe_spawn_interval
    return max(1, math.ceil(config.pipe_spawn_interval * config.base_speed / speed))


def make_pair(config: GameConfig, x: float, top_height: float,
              moving: bool = False, move_speed: float = 0.0, hue: float = 0.0) -> ObstaclePair:
    low, high = gap_bounds(config)
    return ObstaclePair(
        x=float(x),
        top_height=min(max(float(top_height), low), high),
        gap=config.pipe_gap,
        width=config.pipe_width,
        moving=moving,
        move_speed=move_speed if moving else 0.0,
        hue=hue,
    )


def oscillate(pair: ObstaclePair, low: float, high: float):
    """Moves a moving pair vertically, turning around at the bounds."""
    if not pair.moving or pair.neutralized:
        return
    target = pair.top_height + pair.move_speed * pair.move_dir
    if target < low or target > high:
        pair.move_dir *= -1
        target = pair.top_height + pair.move_speed * pair.move_dir
    pair.top_height = min(max(target, low), high)


def has_passed(pair: ObstaclePair, avatar_x: float) -> bool:
    """True on the first tick the trailing edge is behind the avatar."""
    return not pair.passed and pair.trailing_edge < avatar_x


def is_offscreen(pair: ObstaclePair) -> bool:
    return pair.trailing_edge < 0
