"""
spawner.py: Obstacle and hostile spawning and scrolling.
"""

import logging
from typing import List

from .constants import (
    FIELD_WIDTH, FIELD_HEIGHT,
    OBSTACLE_GAP, OBSTACLE_MIN_HEIGHT, OBSTACLE_SPEED, OBSTACLE_SPAWN_INTERVAL,
    HOSTILE_BASE_SPEED, HOSTILE_SPAWN_INTERVAL, HOSTILE_SPAWN_MARGIN
)
from .data_models import Obstacle, Hostile
from .state import SimulationState, Variant

logger = logging.getLogger(__name__)


class EntitySpawner:
    """
    Spawns obstacles on a fixed tick cadence and hostiles on a cadence that
    shortens with the level. Both scroll right to left.
    """

    def __init__(self, field_width: float = FIELD_WIDTH,
                 field_height: float = FIELD_HEIGHT,
                 obstacle_interval: int = OBSTACLE_SPAWN_INTERVAL,
                 hostile_interval: int = HOSTILE_SPAWN_INTERVAL):
        self.field_width = field_width
        self.field_height = field_height
        self.obstacle_interval = obstacle_interval
        self.hostile_interval = hostile_interval

    # -------- Obstacles --------

    def spawn_obstacle(self, state: SimulationState) -> Obstacle:
        """Adds an obstacle at the right edge with a randomly placed gap."""
        max_height = self.field_height - OBSTACLE_GAP - OBSTACLE_MIN_HEIGHT
        top_height = state.rng.uniform(OBSTACLE_MIN_HEIGHT, max_height)
        obstacle = Obstacle(x=float(self.field_width), top_height=top_height,
                            bottom_y=top_height + OBSTACLE_GAP)
        state.obstacles.append(obstacle)
        return obstacle

    def step_obstacles(self, state: SimulationState) -> List[Obstacle]:
        """
        Scrolls obstacles and spawns on cadence.
        Returns the obstacles whose trailing edge crossed the player this tick.
        """
        passed = []
        for obstacle in state.obstacles:
            obstacle.x -= OBSTACLE_SPEED
            if not obstacle.passed and obstacle.x + obstacle.width < state.player.x:
                obstacle.passed = True
                passed.append(obstacle)

        state.obstacles = [o for o in state.obstacles if o.x + o.width >= 0]

        if state.frame_count % self.obstacle_interval == 0:
            self.spawn_obstacle(state)
        return passed

    # -------- Hostiles --------

    def spawn_interval(self, state: SimulationState) -> float:
        params = state.levels.parameters()
        return self.hostile_interval * params.spawn_interval_multiplier

    def spawn_hostile(self, state: SimulationState) -> Hostile:
        params = state.levels.parameters()
        y = state.rng.random() * (self.field_height - 2 * HOSTILE_SPAWN_MARGIN) + HOSTILE_SPAWN_MARGIN
        hostile = Hostile(x=float(self.field_width), y=y,
                          speed=HOSTILE_BASE_SPEED * params.hostile_speed_multiplier)
        state.hostiles.append(hostile)
        return hostile

    def step_hostiles(self, state: SimulationState):
        state.hostile_spawn_counter += 1
        if state.hostile_spawn_counter >= self.spawn_interval(state):
            self.spawn_hostile(state)
            state.hostile_spawn_counter = 0

        for hostile in state.hostiles:
            hostile.x -= hostile.speed
        # Exiting on the left never scores
        state.hostiles = [h for h in state.hostiles if h.x + h.width >= 0]

    def step(self, state: SimulationState) -> List[Obstacle]:
        passed = self.step_obstacles(state)
        if state.variant is Variant.SHOOTER:
            self.step_hostiles(state)
        return passed
