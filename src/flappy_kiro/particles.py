"""
particles.py: Capacity-bounded pool of visual-effect particles.

Particles are plain Particle records tagged by `kind`. Each kind maps to an
(integrate, is_dead) pair in PARTICLE_RULES, so adding an effect means adding
a factory and a table entry rather than a subclass.
"""

import logging
import math
import random
from typing import Callable, Dict, List, Optional, Tuple

from .constants import (
    FIELD_WIDTH, FIELD_HEIGHT, MAX_PARTICLES,
    EXPLOSION_COUNT, SPARKLE_COUNT, CONFETTI_COUNT,
    TRAIL_LIFE, TRAIL_SIZE, EXPLOSION_LIFE, EXPLOSION_SIZE, EXPLOSION_GRAVITY,
    SPARKLE_LIFE, SPARKLE_SIZE, CONFETTI_LIFE, CONFETTI_SIZE, CONFETTI_GRAVITY,
    EXPLOSION_COLORS, SPARKLE_COLORS, CONFETTI_COLORS, KIRO_PURPLE
)
from .data_models import Color, Particle

logger = logging.getLogger(__name__)


# -------- Integration rules --------

def _drift(p: Particle):
    p.x += p.vx
    p.y += p.vy
    p.life -= 1


def _fall(p: Particle):
    p.x += p.vx
    p.y += p.vy
    p.vy += p.gravity
    p.life -= 1


def _tumble(p: Particle):
    _fall(p)
    p.rotation += p.rotation_speed


def _expired(p: Particle, field_height: float) -> bool:
    return p.life <= 0


def _expired_or_fallen(p: Particle, field_height: float) -> bool:
    return p.life <= 0 or p.y > field_height


PARTICLE_RULES: Dict[str, Tuple[Callable, Callable]] = {
    "trail": (_drift, _expired),
    "explosion": (_fall, _expired),
    "sparkle": (_drift, _expired),
    "confetti": (_tumble, _expired_or_fallen),
}


def integrate(p: Particle):
    """Advances a particle by one tick using its kind's rule."""
    PARTICLE_RULES[p.kind][0](p)


def is_dead(p: Particle, field_height: float = FIELD_HEIGHT) -> bool:
    return PARTICLE_RULES[p.kind][1](p, field_height)


def opacity(p: Particle) -> float:
    """Draw alpha in [0, 1]: a linear fade, twinkling for sparkles."""
    fade = max(0.0, min(1.0, p.life / p.max_life))
    if p.kind == "sparkle":
        return fade * abs(math.sin((p.max_life - p.life) / 10))
    return fade


# -------- Factories --------

def make_trail(x: float, y: float, color: Optional[Color] = None) -> Particle:
    return Particle("trail", x, y, 0.0, 0.0, TRAIL_LIFE, TRAIL_LIFE,
                    color or KIRO_PURPLE, TRAIL_SIZE)


def make_explosion(x: float, y: float, rng: random.Random) -> Particle:
    angle = rng.random() * math.pi * 2
    speed = rng.random() * 3 + 2
    return Particle("explosion", x, y,
                    math.cos(angle) * speed, math.sin(angle) * speed,
                    EXPLOSION_LIFE, EXPLOSION_LIFE, rng.choice(EXPLOSION_COLORS),
                    EXPLOSION_SIZE, gravity=EXPLOSION_GRAVITY)


def make_sparkle(x: float, y: float, rng: random.Random) -> Particle:
    angle = rng.random() * math.pi * 2
    speed = rng.random() * 2 + 0.5
    return Particle("sparkle", x, y,
                    math.cos(angle) * speed, math.sin(angle) * speed,
                    SPARKLE_LIFE, SPARKLE_LIFE, rng.choice(SPARKLE_COLORS),
                    SPARKLE_SIZE)


def make_confetti(x: float, y: float, rng: random.Random) -> Particle:
    return Particle("confetti", x, y,
                    (rng.random() - 0.5) * 4, rng.random() * -3 - 2,
                    CONFETTI_LIFE, CONFETTI_LIFE, rng.choice(CONFETTI_COLORS),
                    CONFETTI_SIZE, gravity=CONFETTI_GRAVITY,
                    rotation=rng.random() * math.pi * 2,
                    rotation_speed=(rng.random() - 0.5) * 0.2)


class ParticleSystem:
    """
    Owns every live particle. Once `max_particles` are alive, new particles
    are dropped; existing ones are never evicted to make room.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 max_particles: int = MAX_PARTICLES,
                 field_width: float = FIELD_WIDTH,
                 field_height: float = FIELD_HEIGHT):
        self.rng = rng or random.Random()
        self.max_particles = max_particles
        self.field_width = field_width
        self.field_height = field_height
        self.particles: List[Particle] = []
        self.dropped = 0

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def spawn(self, particle: Particle) -> bool:
        if len(self.particles) >= self.max_particles:
            self.dropped += 1
            return False
        self.particles.append(particle)
        return True

    def update(self):
        """Advances every particle one tick, then prunes dead ones."""
        for p in self.particles:
            integrate(p)
        self.particles = [
            p for p in self.particles if not is_dead(p, self.field_height)
        ]

    def clear(self):
        self.particles.clear()

    # -------- Bursts --------

    def create_trail(self, x: float, y: float, color: Optional[Color] = None):
        self.spawn(make_trail(x, y, color))

    def create_explosion(self, x: float, y: float):
        for _ in range(EXPLOSION_COUNT):
            self.spawn(make_explosion(x, y, self.rng))

    def create_sparkles(self, x: float, y: float):
        for _ in range(SPARKLE_COUNT):
            self.spawn(make_sparkle(x, y, self.rng))

    def create_confetti(self):
        """Scatters confetti across the top half of the field."""
        for _ in range(CONFETTI_COUNT):
            x = self.rng.random() * self.field_width
            y = self.rng.random() * self.field_height * 0.5
            self.spawn(make_confetti(x, y, self.rng))
        logger.debug("Confetti burst; %d particles live", len(self.particles))
