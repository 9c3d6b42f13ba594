"""
pickups.py: Power-ups and hazards of the advanced variant.
"""

import math
from typing import List

from .config import GameConfig
from .data_models import (
    Avatar, Collectible, EffectKind, Hazard, HazardKind, ObstaclePair, PowerUpKind
)

BOB_RATE = 0.1
GHOST_FREQ_TICK = 0.1
GHOST_FREQ_X = 0.05


def make_collectible(pair: ObstaclePair, kind: PowerUpKind, config: GameConfig) -> Collectible:
    """Places a power-up in the middle of the pair's gap."""
    y = pair.top_height + pair.gap / 2
    return Collectible(
        x=pair.x + pair.width / 2,
        y=y,
        base_y=y,
        kind=kind,
        radius=config.powerup_radius,
        pair=pair,
    )


def move_collectible(collectible: Collectible, speed: float, frame: int, amplitude: float):
    """Scrolls and bobs a power-up, keeping it centred on a moving gap."""
    collectible.x -= speed
    pair = collectible.pair
    if pair is not None:
        collectible.base_y = pair.top_height + pair.gap / 2
    collectible.y = collectible.base_y + math.sin(frame * BOB_RATE) * amplitude


def apply_power_up(kind: PowerUpKind, avatar: Avatar, pairs: List[ObstaclePair],
                   config: GameConfig) -> int:
    """
    Activates the effect of a picked up power-up. Returns how many pairs an
    area clear neutralized (zero for every other kind).
    """
    effects = avatar.effects
    if kind is PowerUpKind.SHIELD:
        effects.activate(EffectKind.INVINCIBLE, config.shield_duration)
    elif kind is PowerUpKind.SHRINK:
        effects.activate(EffectKind.TINY, config.tiny_duration)
        avatar.radius = avatar.base_radius / 2
    elif kind is PowerUpKind.SLOW_TIME:
        effects.activate(EffectKind.SLOW, config.slow_duration)
    elif kind is PowerUpKind.AREA_CLEAR:
        cleared = 0
        for pair in pairs:
            visible = pair.x < config.width and pair.trailing_edge > 0
            if visible and not pair.neutralized:
                pair.neutralized = True
                pair.moving = False
                cleared += 1
        return cleared
    return 0


def make_hazard(kind: HazardKind, x: float, y: float, speed: float,
                config: GameConfig) -> Hazard:
    return Hazard(x=float(x), y=float(y), base_y=float(y), kind=kind, speed=speed,
                  size=config.hazard_size)


def move_hazard(hazard: Hazard, frame: int, target_y: float, config: GameConfig):
    hazard.x -= hazard.speed
    if hazard.kind is HazardKind.GHOST:
        # Phase keeps advancing whatever the speed since x only decreases
        wobble = math.sin(frame * GHOST_FREQ_TICK - hazard.x * GHOST_FREQ_X)
        hazard.y = hazard.base_y + wobble * config.ghost_amplitude
    else:
        diff = target_y - hazard.y
        step = config.rocket_homing_step
        if abs(diff) <= step:
            hazard.y = target_y
        else:
            hazard.y += math.copysign(step, diff)


def is_offscreen(x: float, size: float) -> bool:
    return x + size < 0
