"""
config.py: Per-engine game configuration and the three variant presets.
"""

import enum
from dataclasses import dataclass, replace
from typing import Optional, Union

from . import constants as C


class Variant(enum.Enum):
    MINIMAL = "minimal"
    CHAOS = "chaos"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class GameConfig:
    """Everything an engine instance needs to simulate one game variant."""
    variant: Variant = Variant.ADVANCED

    # World
    width: float = C.SCREEN_WIDTH
    height: float = C.SCREEN_HEIGHT
    ground_height: float = C.GROUND_HEIGHT
    avatar_x: float = C.AVATAR_X
    avatar_radius: float = C.AVATAR_RADIUS

    # Avatar physics
    gravity: float = C.GRAVITY
    flap_strength: float = C.FLAP_STRENGTH
    flap_rotation: float = C.FLAP_ROTATION
    min_rotation: float = C.MIN_ROTATION
    rotation_up_step: float = C.ROTATION_UP_STEP
    rotation_down_step: float = C.ROTATION_DOWN_STEP
    max_rotation: Optional[float] = None      # None means a continuous spin
    ceiling_bounce_velocity: float = C.CEILING_BOUNCE_VELOCITY
    floor_bounce_velocity: float = C.FLOOR_BOUNCE_VELOCITY
    glitch_chance: float = C.GLITCH_CHANCE
    glitch_multiplier: float = C.GLITCH_MULTIPLIER

    # Speed
    base_speed: float = C.BASE_SPEED
    speed_increment: float = C.SPEED_INCREMENT
    speed_ramp_every: int = C.SPEED_RAMP_EVERY
    slow_speed: float = C.SLOW_SPEED

    # Pipes
    pipe_spawn_interval: int = C.PIPE_SPAWN_INTERVAL
    pipe_width: float = C.PIPE_WIDTH
    pipe_gap: float = C.PIPE_GAP
    pipe_min_height: float = C.PIPE_MIN_HEIGHT
    ground_allowance: float = C.GROUND_HEIGHT
    moving_pipe_chance: float = C.MOVING_PIPE_CHANCE
    pipe_move_speed_min: float = C.PIPE_MOVE_SPEED_MIN
    pipe_move_speed_max: float = C.PIPE_MOVE_SPEED_MAX

    # Terrain
    terrain_enabled: bool = False
    terrain_spacing: float = C.TERRAIN_SPACING
    terrain_max_delta: float = C.TERRAIN_MAX_DELTA
    terrain_min_height: float = C.TERRAIN_MIN_HEIGHT
    terrain_max_height: float = C.TERRAIN_MAX_HEIGHT
    terrain_start_height: float = C.TERRAIN_START_HEIGHT

    # Power-ups
    powerups_enabled: bool = False
    powerup_chance: float = C.POWERUP_CHANCE
    powerup_radius: float = C.POWERUP_RADIUS
    powerup_bob_amplitude: float = C.POWERUP_BOB_AMPLITUDE
    shield_duration: int = C.SHIELD_DURATION
    tiny_duration: int = C.TINY_DURATION
    slow_duration: int = C.SLOW_DURATION

    # Hazards
    hazards_enabled: bool = False
    hazard_chance: float = C.HAZARD_CHANCE
    hazard_size: float = C.HAZARD_SIZE
    hazard_bonus: int = C.HAZARD_BONUS
    hazard_extra_speed: float = C.HAZARD_EXTRA_SPEED
    hazard_margin: float = C.HAZARD_MARGIN
    ghost_amplitude: float = C.GHOST_AMPLITUDE
    rocket_homing_step: float = C.ROCKET_HOMING_STEP

    # Particles, floating text, screen shake
    effects_enabled: bool = True

    @property
    def floor_y(self) -> float:
        """Screen-space y of the flat floor."""
        return self.height - self.ground_height

    @classmethod
    def for_variant(cls, variant: Union[Variant, str]) -> "GameConfig":
        """Returns the preset for one of the three game iterations."""
        try:
            variant = Variant(variant)
        except ValueError:
            raise ValueError(f"Unknown game variant: {variant!r}") from None

        if variant is Variant.MINIMAL:
            return cls(
                variant=variant,
                max_rotation=C.MAX_ROTATION_CAPPED,
                glitch_chance=0.0,
                moving_pipe_chance=0.0,
                effects_enabled=False,
            )
        if variant is Variant.CHAOS:
            return cls(variant=variant)
        return cls(
            variant=variant,
            terrain_enabled=True,
            powerups_enabled=True,
            hazards_enabled=True,
            # Keep every gap above the highest possible terrain
            ground_allowance=C.TERRAIN_MAX_HEIGHT,
        )

    def with_overrides(self, **changes) -> "GameConfig":
        return replace(self, **changes)
