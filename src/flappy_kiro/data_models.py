"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .constants import (
    PLAYER_START_X, PLAYER_START_Y, PLAYER_SIZE, PLAYER_SPEED,
    OBSTACLE_WIDTH, HOSTILE_SIZE
)

Color = Tuple[int, int, int]


@dataclass
class Player:
    """The controllable actor. Position is the top-left corner."""
    x: float = PLAYER_START_X
    y: float = PLAYER_START_Y
    width: float = PLAYER_SIZE
    height: float = PLAYER_SIZE
    speed: float = PLAYER_SPEED

    # Held direction flags, toggled by press/release input
    keys: Dict[str, bool] = field(default_factory=lambda: {
        "up": False, "down": False, "left": False, "right": False
    })

    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def reset(self):
        self.x = PLAYER_START_X
        self.y = PLAYER_START_Y


@dataclass
class Obstacle:
    """A scrolling wall with a vertical gap between top_height and bottom_y."""
    x: float
    top_height: float
    bottom_y: float
    width: float = OBSTACLE_WIDTH
    passed: bool = False

    def gap_center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, (self.top_height + self.bottom_y) / 2


@dataclass
class Hostile:
    """A hostile entity flying right to left."""
    x: float
    y: float
    speed: float
    width: float = HOSTILE_SIZE
    height: float = HOSTILE_SIZE

    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Projectile:
    """
    A missile. (x, y) is the nose-left point on the vertical center line,
    so the bounding box is (x, y - height / 2, width, height).
    """
    x: float
    y: float
    vx: float
    vy: float
    width: float
    height: float
    damage: int
    tier: str                   # "basic" | "spread" | "homing"
    color: Color
    homing_strength: float = 0.0

    def bounds(self) -> Tuple[float, float, float, float]:
        return self.x, self.y - self.height / 2, self.width, self.height


@dataclass(frozen=True)
class WeaponPower:
    damage: int
    speed: float
    size: float
    cooldown: float             # milliseconds


@dataclass(frozen=True)
class LevelParameters:
    hostile_speed_multiplier: float
    spawn_interval_multiplier: float
    weapon_power: WeaponPower


@dataclass
class Particle:
    """
    A transient visual effect. `kind` selects the integration and death
    rules in particles.py; gravity and rotation are only used by some kinds.
    """
    kind: str                   # "trail" | "explosion" | "sparkle" | "confetti"
    x: float
    y: float
    vx: float
    vy: float
    life: int
    max_life: int
    color: Color
    size: float
    gravity: float = 0.0
    rotation: float = 0.0
    rotation_speed: float = 0.0


@dataclass(frozen=True)
class Character:
    id: str
    name: str
    sprite: str
    color: Color
