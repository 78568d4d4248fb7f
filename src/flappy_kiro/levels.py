"""
levels.py: Score-driven difficulty progression.

The level is derived from the cumulative score alone:
level = score // POINTS_PER_LEVEL + 1. Every tuning value is a pure function
of the level, so there is no stored difficulty state to drift out of sync.
"""

import logging
import time
from typing import Callable, Dict, Optional

from .constants import (
    POINTS_PER_LEVEL, LEVEL_TRANSITION_MS, SPREAD_MIN_LEVEL, HOMING_MIN_LEVEL
)
from .data_models import LevelParameters, WeaponPower

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def level_for_score(score: int, points_per_level: int = POINTS_PER_LEVEL) -> int:
    return score // points_per_level + 1


def weapon_power(level: int) -> WeaponPower:
    """Weapons hit harder, fly faster and recharge sooner each level."""
    return WeaponPower(
        damage=10 + (level - 1) * 2,
        speed=8 + min(level - 1, 10) * 0.5,
        size=1.0 + min(level - 1, 15) * 0.05,
        cooldown=max(200, 500 - (level - 1) * 15),
    )


def weapon_tier(level: int) -> str:
    if level < SPREAD_MIN_LEVEL:
        return "basic"
    if level < HOMING_MIN_LEVEL:
        return "spread"
    return "homing"


def level_parameters(level: int) -> LevelParameters:
    return LevelParameters(
        hostile_speed_multiplier=1.0 + (level - 1) * 0.15,
        spawn_interval_multiplier=max(0.3, 1.0 - (level - 1) * 0.08),
        weapon_power=weapon_power(level),
    )


class LevelManager:
    def __init__(self, particles=None,
                 clock: Callable[[], float] = monotonic_ms,
                 points_per_level: int = POINTS_PER_LEVEL,
                 transition_ms: float = LEVEL_TRANSITION_MS):
        self.particles = particles
        self.clock = clock
        self.points_per_level = points_per_level
        self.transition_ms = transition_ms

        self.current_level = 1
        self.transition_shown = False
        self.transition_start = 0.0

    def recompute(self, score: int) -> bool:
        """Re-derives the level from `score`. Returns True on a level-up."""
        new_level = level_for_score(score, self.points_per_level)
        if new_level <= self.current_level:
            return False

        self.current_level = new_level
        self.transition_shown = True
        self.transition_start = self.clock()
        if self.particles is not None:
            self.particles.create_confetti()
        logger.info("Level up: %d (score %d)", new_level, score)
        return True

    def parameters(self, level: Optional[int] = None) -> LevelParameters:
        return level_parameters(self.current_level if level is None else level)

    def weapon_power(self) -> WeaponPower:
        return weapon_power(self.current_level)

    def tier(self) -> str:
        return weapon_tier(self.current_level)

    def level_info(self) -> Dict:
        """Level number, score threshold and HUD color theme."""
        hue = (self.current_level * 60) % 360
        return {
            "number": self.current_level,
            "score_threshold": (self.current_level - 1) * self.points_per_level,
            "theme": {"hue": hue, "accent": (hue, 70, 50)},
        }

    def is_transition_active(self) -> bool:
        if not self.transition_shown:
            return False
        if self.clock() - self.transition_start >= self.transition_ms:
            self.transition_shown = False
            return False
        return True

    def transition_progress(self) -> float:
        """Fraction of the transition window elapsed; 1.0 when inactive."""
        if not self.is_transition_active():
            return 1.0
        return (self.clock() - self.transition_start) / self.transition_ms

    def reset(self):
        self.current_level = 1
        self.transition_shown = False
        self.transition_start = 0.0
