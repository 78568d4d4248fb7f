"""
state.py: The mutable simulation state shared by every component.

One SimulationState is owned by the Game and handed to each component's step
function every tick. Nothing else holds game state, so all writes happen on
the thread that drives Game.tick().
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .data_models import Player, Obstacle, Hostile
from .levels import LevelManager, monotonic_ms
from .particles import ParticleSystem
from .weapons import MissileManager


class GameState(Enum):
    CHARACTER_SELECT = "characterSelect"
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


class Variant(Enum):
    SHOOTER = "shooter"         # Hostiles + missiles; kills score
    CLASSIC = "classic"         # Obstacles only; passes score


@dataclass
class SimulationState:
    rng: random.Random
    particles: ParticleSystem
    levels: LevelManager
    weapon: MissileManager
    variant: Variant = Variant.SHOOTER
    player: Player = field(default_factory=Player)
    obstacles: List[Obstacle] = field(default_factory=list)
    hostiles: List[Hostile] = field(default_factory=list)

    score: int = 0
    high_score: int = 0
    confetti_triggered: bool = False
    frame_count: int = 0
    hostile_spawn_counter: int = 0

    def reset_session(self):
        """Clears everything a new game must not inherit."""
        self.score = 0
        self.frame_count = 0
        self.confetti_triggered = False
        self.hostile_spawn_counter = 0
        self.obstacles = []
        self.hostiles = []
        self.player.reset()
        self.weapon.reset()
        self.levels.reset()


def new_state(rng: Optional[random.Random] = None,
              clock: Callable[[], float] = monotonic_ms,
              variant: Variant = Variant.SHOOTER) -> SimulationState:
    """Wires the components together around one shared rng and clock."""
    rng = rng or random.Random()
    particles = ParticleSystem(rng=rng)
    levels = LevelManager(particles=particles, clock=clock)
    return SimulationState(
        rng=rng,
        particles=particles,
        levels=levels,
        weapon=MissileManager(levels),
        variant=variant,
    )
