"""
data_models.py: Data structures for the game state.
"""

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import AVATAR_X, AVATAR_RADIUS, RESPAWN_Y, BASE_SPEED


class EffectKind(enum.Enum):
    INVINCIBLE = "invincible"
    TINY = "tiny"
    SLOW = "slow"


class PowerUpKind(enum.Enum):
    SHIELD = "shield"
    SHRINK = "shrink"
    SLOW_TIME = "slow_time"
    AREA_CLEAR = "area_clear"


class HazardKind(enum.Enum):
    GHOST = "ghost"     # Erratic sinusoidal drift
    ROCKET = "rocket"   # Homes in on the avatar


class RunStatus(enum.Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass
class StatusEffects:
    """Remaining ticks per timed effect. Zero means inactive."""
    timers: Dict[EffectKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in EffectKind})

    def activate(self, kind: EffectKind, ticks: int):
        self.timers[kind] = max(0, int(ticks))

    def remaining(self, kind: EffectKind) -> int:
        return self.timers.get(kind, 0)

    def is_active(self, kind: EffectKind) -> bool:
        return self.remaining(kind) > 0

    def tick(self):
        """Counts every timer down by one, floored at zero."""
        for kind, left in self.timers.items():
            self.timers[kind] = max(0, left - 1)

    def clear(self):
        for kind in self.timers:
            self.timers[kind] = 0

    def active_kinds(self) -> List[str]:
        return [kind.value for kind, left in self.timers.items() if left > 0]


@dataclass
class Avatar:
    """The falling entity controlled by the player."""
    x: float = AVATAR_X
    y: float = RESPAWN_Y
    velocity: float = 0.0
    rotation: float = 0.0
    base_radius: float = AVATAR_RADIUS
    radius: float = AVATAR_RADIUS
    effects: StatusEffects = field(default_factory=StatusEffects)

    @property
    def invincible(self) -> bool:
        return self.effects.is_active(EffectKind.INVINCIBLE)

    def to_client_state(self):
        """Prepares a minimal state dictionary for the renderer."""
        return {
            "x": self.x,
            "y": round(self.y, 2),
            "v": round(self.velocity, 2),
            "rotation": round(self.rotation, 4),
            "radius": self.radius,
            "effects": self.effects.active_kinds(),
        }


@dataclass
class ObstaclePair:
    """A top/bottom pipe pair with an open gap between them."""
    x: float
    top_height: float
    gap: float
    width: float
    passed: bool = False
    moving: bool = False
    move_speed: float = 0.0
    move_dir: int = 1
    neutralized: bool = False   # Cleared pairs stay on screen but cannot hit
    hue: float = 0.0

    @property
    def gap_bottom(self) -> float:
        return self.top_height + self.gap

    @property
    def trailing_edge(self) -> float:
        return self.x + self.width

    def to_client_state(self):
        return {
            "x": round(self.x, 2),
            "top_height": round(self.top_height, 2),
            "gap": self.gap,
            "width": self.width,
            "moving": self.moving,
            "neutralized": self.neutralized,
            "hue": self.hue,
        }


@dataclass
class TerrainPoint:
    x: float
    height: float

    def to_client_state(self):
        return {"x": round(self.x, 2), "height": round(self.height, 2)}


@dataclass
class Collectible:
    """A power-up floating inside a pipe gap."""
    x: float
    y: float
    kind: PowerUpKind
    radius: float
    base_y: float = 0.0
    pair: Optional[ObstaclePair] = field(default=None, repr=False, compare=False)  # Gap it rides in

    def to_client_state(self):
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "kind": self.kind.value,
            "radius": self.radius,
        }


@dataclass
class Hazard:
    """A hostile entity flying in from the right."""
    x: float
    y: float
    kind: HazardKind
    speed: float
    size: float
    base_y: float = 0.0

    def to_client_state(self):
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "kind": self.kind.value,
            "size": self.size,
        }


@dataclass
class Particle:
    x: float
    y: float
    size: float
    speed_x: float
    speed_y: float
    color: str
    life: float = 1.0

    def to_client_state(self):
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "size": self.size,
            "color": self.color,
            "life": round(self.life, 3),
        }


@dataclass
class FloatingText:
    text: str
    x: float
    y: float
    hue: float
    life: float = 1.0
    scale: float = 1.0

    def to_client_state(self):
        return {
            "text": self.text,
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "hue": self.hue,
            "life": round(self.life, 3),
            "scale": round(self.scale, 3),
        }


@dataclass
class RunState:
    """Score, speed and every entity collection of the current run."""
    status: RunStatus = RunStatus.NOT_STARTED
    score: int = 0
    base_speed: float = BASE_SPEED      # Speed without slow-time applied
    speed: float = BASE_SPEED           # Speed the world actually scrolls at
    next_ramp_score: int = 0
    frame: int = 0
    spawn_counter: int = 0
    shake: float = 0.0
    end_cause: Optional[str] = None

    pairs: List[ObstaclePair] = field(default_factory=list)
    collectibles: List[Collectible] = field(default_factory=list)
    hazards: List[Hazard] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    texts: List[FloatingText] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return self.status is RunStatus.ACTIVE
