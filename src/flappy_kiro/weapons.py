"""
weapons.py: Missile construction and the cooldown-gated missile launcher.

The tier depends on the current level: basic up to level 10, a three-way
spread for 11-20 and homing missiles beyond that. Every missile counts
against MAX_MISSILES individually.
"""

import logging
import math
from typing import Iterable, List, Optional

from .constants import (
    FIELD_WIDTH, FIELD_HEIGHT, MAX_MISSILES, MISSILE_OFFSCREEN_MARGIN,
    MISSILE_SHAPES, SPREAD_OFFSETS, SPREAD_VY_PER_OFFSET, SPREAD_SPEED_FACTOR,
    HOMING_BASE_STRENGTH, HOMING_STRENGTH_PER_LEVEL, HOMING_MAX_VY,
    HOMING_MIN_LEVEL
)
from .data_models import Hostile, Projectile
from .levels import LevelManager, weapon_power, weapon_tier
from .physics import overlaps

logger = logging.getLogger(__name__)


def make_missile(x: float, y: float, level: int, angle_offset: int = 0) -> Projectile:
    """Builds one missile for `level`, scaled by that level's weapon power."""
    power = weapon_power(level)
    tier = weapon_tier(level)
    width, height, color = MISSILE_SHAPES[tier]

    vx, vy = power.speed, 0.0
    homing_strength = 0.0
    if tier == "spread":
        vx = power.speed * SPREAD_SPEED_FACTOR
        vy = angle_offset * SPREAD_VY_PER_OFFSET
    elif tier == "homing":
        homing_strength = (HOMING_BASE_STRENGTH
                           + (level - (HOMING_MIN_LEVEL - 1)) * HOMING_STRENGTH_PER_LEVEL)

    return Projectile(
        x=x, y=y, vx=vx, vy=vy,
        width=width * power.size, height=height * power.size,
        damage=power.damage, tier=tier, color=color,
        homing_strength=homing_strength,
    )


def nearest_target(missile: Projectile, targets: Iterable[Hostile]) -> Optional[Hostile]:
    best, best_dist = None, math.inf
    for target in targets:
        tx, ty = target.center()
        dist = math.hypot(tx - missile.x, ty - missile.y)
        if dist < best_dist:
            best, best_dist = target, dist
    return best


def steer(missile: Projectile, target: Optional[Hostile]):
    """Bends a homing missile's vertical velocity toward `target`."""
    if target is None:
        return
    tx, ty = target.center()
    dx = tx - missile.x
    dy = ty - missile.y
    distance = math.hypot(dx, dy)
    if distance > 0:
        missile.vy += (dy / distance) * missile.homing_strength
        missile.vy = max(-HOMING_MAX_VY, min(HOMING_MAX_VY, missile.vy))


class MissileManager:
    """
    Owns the live missiles and the launcher cooldown.
    Cooldown is tracked in milliseconds of wall time, not ticks.
    """

    def __init__(self, levels: LevelManager,
                 capacity: int = MAX_MISSILES,
                 field_width: float = FIELD_WIDTH,
                 field_height: float = FIELD_HEIGHT):
        self.levels = levels
        self.capacity = capacity
        self.field_width = field_width
        self.field_height = field_height
        self.missiles: List[Projectile] = []
        self.cooldown = 0.0

    def can_fire(self) -> bool:
        return self.cooldown <= 0 and len(self.missiles) < self.capacity

    def count(self) -> int:
        return len(self.missiles)

    def damage(self) -> int:
        """Damage credited for a hit, read from the current level."""
        return self.levels.weapon_power().damage

    def fire(self, origin_x: float, origin_y: float) -> bool:
        if not self.can_fire():
            logger.debug("Fire rejected (cooldown=%.0f, missiles=%d)",
                         self.cooldown, len(self.missiles))
            return False

        level = self.levels.current_level
        offsets = SPREAD_OFFSETS if weapon_tier(level) == "spread" else (0,)
        for offset in offsets:
            if len(self.missiles) >= self.capacity:
                break
            self.missiles.append(make_missile(origin_x, origin_y, level, offset))

        self.cooldown = self.levels.weapon_power().cooldown
        return True

    def update(self, elapsed_ms: float, targets: Iterable[Hostile] = ()):
        """Runs the cooldown down by `elapsed_ms`, moves and culls missiles."""
        if self.cooldown > 0:
            self.cooldown = max(0.0, self.cooldown - elapsed_ms)

        targets = list(targets)
        for missile in self.missiles:
            if missile.tier == "homing":
                steer(missile, nearest_target(missile, targets))
            missile.x += missile.vx
            missile.y += missile.vy

        self.cleanup()

    def is_off_screen(self, missile: Projectile) -> bool:
        return (missile.x > self.field_width
                or missile.y < -MISSILE_OFFSCREEN_MARGIN
                or missile.y > self.field_height + MISSILE_OFFSCREEN_MARGIN)

    def cleanup(self):
        self.missiles = [m for m in self.missiles if not self.is_off_screen(m)]

    def check_collision(self, hostile: Optional[Hostile]) -> bool:
        """Consumes at most one missile overlapping `hostile`, newest first."""
        if hostile is None:
            return False

        for i in range(len(self.missiles) - 1, -1, -1):
            if overlaps(self.missiles[i].bounds(),
                        (hostile.x, hostile.y, hostile.width, hostile.height)):
                del self.missiles[i]
                return True
        return False

    def reset(self):
        self.missiles = []
        self.cooldown = 0.0
