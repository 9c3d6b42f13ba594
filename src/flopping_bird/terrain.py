"""
terrain.py: Procedurally extended ground silhouette used by the advanced variant.
"""

import logging
import random
from typing import List, Optional

from .config import GameConfig
from .data_models import TerrainPoint

log = logging.getLogger(__name__)


def next_height(previous: float, delta: float, low: float, high: float) -> float:
    """Height of a new control point from an already drawn delta."""
    return min(max(previous + delta, low), high)


class TerrainProfile:
    """
    Polyline of control points ordered by x, interpolated linearly.
    Heights are measured up from the bottom of the playfield.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.points: List[TerrainPoint] = []

    def reset(self, rng: random.Random):
        """Flat start under the avatar, then random hills up to the right edge."""
        cfg = self.config
        self.points = [TerrainPoint(x=0.0, height=float(cfg.terrain_start_height))]
        self._extend(rng)
        log.debug("Terrain reset with %d points", len(self.points))

    def height_at(self, x: float) -> float:
        for left, right in zip(self.points, self.points[1:]):
            if left.x <= x <= right.x:
                span = right.x - left.x
                if span <= 0:
                    return left.height
                t = (x - left.x) / span
                return left.height + (right.height - left.height) * t
        return self.config.ground_height

    def surface_y(self, x: float) -> float:
        """Screen-space y of the terrain surface at x."""
        return self.config.height - self.height_at(x)

    def advance(self, speed: float, rng: random.Random):
        """Scrolls left by speed, growing at the right and dropping at the left."""
        for point in self.points:
            point.x -= speed
        self._extend(rng)

        spacing = self.config.terrain_spacing
        # Drop the first point once the segment after it is fully off-screen
        while len(self.points) > 2 and self.points[1].x < -spacing:
            self.points.pop(0)

    def _extend(self, rng: random.Random):
        cfg = self.config
        if not self.points:
            self.points.append(TerrainPoint(x=0.0, height=float(cfg.terrain_start_height)))
        low = min(cfg.terrain_min_height, cfg.terrain_max_height)
        high = max(cfg.terrain_min_height, cfg.terrain_max_height)
        while self.points[-1].x < cfg.width + cfg.terrain_spacing:
            last = self.points[-1]
            delta = rng.uniform(-cfg.terrain_max_delta, cfg.terrain_max_delta)
            self.points.append(TerrainPoint(
                x=last.x + cfg.terrain_spacing,
                height=next_height(last.height, delta, low, high),
            ))

    def to_client_state(self):
        return [point.to_client_state() for point in self.points]
