"""
effects.py: Transient particles, floating texts and screen shake.
Purely cosmetic; none of this feeds back into the simulation.
"""

import random
from typing import List, Optional

from .constants import (
    PARTICLE_DECAY, TEXT_DECAY, TEXT_RISE, TEXT_GROWTH, SHAKE_DECAY, SHAKE_CUTOFF
)
from .data_models import Particle, FloatingText


def burst(rng: random.Random, x: float, y: float, count: int,
          color: Optional[str] = None) -> List[Particle]:
    """A spray of particles; without a colour each one gets a random hue."""
    particles = []
    for _ in range(count):
        particles.append(Particle(
            x=x,
            y=y,
            size=rng.random() * 5 + 2,
            speed_x=rng.random() * 4 - 2,
            speed_y=rng.random() * 4 - 2,
            color=color or f"hsl({rng.random() * 360:.0f}, 100%, 50%)",
        ))
    return particles


def floating_text(rng: random.Random, text: str, x: float, y: float) -> FloatingText:
    return FloatingText(text=text, x=x, y=y, hue=rng.random() * 360)


def update_particles(particles: List[Particle]) -> List[Particle]:
    for p in particles:
        p.x += p.speed_x
        p.y += p.speed_y
        p.life -= PARTICLE_DECAY
    return [p for p in particles if p.life > 0]


def update_texts(texts: List[FloatingText]) -> List[FloatingText]:
    for t in texts:
        t.y += TEXT_RISE
        t.life -= TEXT_DECAY
        t.scale += TEXT_GROWTH
    return [t for t in texts if t.life > 0]


def decay_shake(intensity: float) -> float:
    intensity *= SHAKE_DECAY
    return 0.0 if intensity < SHAKE_CUTOFF else intensity
