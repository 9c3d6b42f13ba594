"""
physics_core.py: The shared, deterministic kinematic functions and collision logic.
"""

import enum
import math
from typing import Optional

from .config import GameConfig
from .data_models import Avatar, ObstaclePair, EffectKind


class BoundaryEvent(enum.Enum):
    NONE = "none"
    CEILING = "ceiling"             # Clamped and pushed down, never terminal
    FLOOR_BOUNCE = "floor_bounce"   # Floor hit while invincible
    FLOOR_HIT = "floor_hit"         # Floor hit, ends the run


class PhysicsCore:
    """
    Shared deterministic physics used by the engine and its tests.
    Holds no run state of its own, only the config it was built with.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def integrate(self, avatar: Avatar):
        """Advances velocity, position and rotation by one tick."""
        cfg = self.config
        avatar.velocity += cfg.gravity
        avatar.y += avatar.velocity

        if avatar.velocity < 0:
            avatar.rotation = max(cfg.min_rotation, avatar.rotation - cfg.rotation_up_step)
        else:
            avatar.rotation += cfg.rotation_down_step
            if cfg.max_rotation is not None:
                avatar.rotation = min(avatar.rotation, cfg.max_rotation)

    def apply_impulse(self, avatar: Avatar, glitch: bool = False):
        """Flap. A glitch flap launches the avatar harder than normal."""
        avatar.velocity = self.config.flap_strength
        avatar.rotation = self.config.flap_rotation
        if glitch:
            avatar.velocity *= self.config.glitch_multiplier

    def update_radius(self, avatar: Avatar):
        if avatar.effects.is_active(EffectKind.TINY):
            avatar.radius = avatar.base_radius / 2
        else:
            avatar.radius = avatar.base_radius

    def refresh_status(self, avatar: Avatar):
        """Counts status timers down and reapplies their effect on size."""
        avatar.effects.tick()
        self.update_radius(avatar)

    def resolve_bounds(self, avatar: Avatar, floor_y: float) -> BoundaryEvent:
        """Keeps the avatar between the ceiling and the floor at floor_y."""
        cfg = self.config

        if avatar.y + avatar.radius >= floor_y:
            avatar.y = floor_y - avatar.radius
            if avatar.invincible:
                avatar.velocity = cfg.floor_bounce_velocity
                return BoundaryEvent.FLOOR_BOUNCE
            return BoundaryEvent.FLOOR_HIT

        if avatar.y - avatar.radius <= 0:
            avatar.y = avatar.radius
            avatar.velocity = cfg.ceiling_bounce_velocity
            return BoundaryEvent.CEILING

        return BoundaryEvent.NONE

    def overlaps_pair(self, avatar: Avatar, pair: ObstaclePair) -> bool:
        """Bounding test of the avatar circle against both pipe segments."""
        if pair.neutralized:
            return False
        r = avatar.radius
        if not (avatar.x + r > pair.x and avatar.x - r < pair.x + pair.width):
            return False
        return avatar.y - r < pair.top_height or avatar.y + r > pair.gap_bottom

    def overlaps_circle(self, avatar: Avatar, x: float, y: float, radius: float) -> bool:
        """True when the centre distance is below the sum of radii."""
        return math.hypot(avatar.x - x, avatar.y - y) < avatar.radius + radius

    def respawn(self, avatar: Avatar):
        cfg = self.config
        avatar.x = cfg.avatar_x
        avatar.y = cfg.height / 2
        avatar.velocity = 0.0
        avatar.rotation = 0.0
        avatar.base_radius = cfg.avatar_radius
        avatar.radius = cfg.avatar_radius
        avatar.effects.clear()
