"""
collisions.py: Per-tick collision resolution and scoring.

Order matters and is fixed: missile hits first (so a hostile shot this tick
cannot also kill the player), then player vs hostile, then player vs
obstacle.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .data_models import Obstacle
from .physics import PhysicsCore
from .scores import ScoreManager
from .state import SimulationState

logger = logging.getLogger(__name__)


@dataclass
class CollisionOutcome:
    kills: int = 0
    passes: int = 0
    game_over: bool = False


class CollisionResolver:
    def __init__(self, scores: ScoreManager, physics: Optional[PhysicsCore] = None):
        self.scores = scores
        self.physics = physics or PhysicsCore()

    def resolve(self, state: SimulationState) -> CollisionOutcome:
        outcome = CollisionOutcome()

        for i in range(len(state.hostiles) - 1, -1, -1):
            hostile = state.hostiles[i]

            if state.weapon.check_collision(hostile):
                self.award(state, state.weapon.damage())
                cx, cy = hostile.center()
                state.particles.create_explosion(cx, cy)
                self.check_high_score(state)
                del state.hostiles[i]
                outcome.kills += 1
                continue

            if self.physics.hits_hostile(state.player, hostile):
                outcome.game_over = True
                return outcome

        if self.physics.first_obstacle_hit(state.player, state.obstacles) is not None:
            outcome.game_over = True
        return outcome

    def score_passes(self, state: SimulationState, passed: Iterable[Obstacle]) -> int:
        """Awards one point and a sparkle burst per passed obstacle."""
        count = 0
        for obstacle in passed:
            self.award(state, 1)
            gx, gy = obstacle.gap_center()
            state.particles.create_sparkles(gx, gy)
            self.check_high_score(state)
            count += 1
        return count

    def award(self, state: SimulationState, points: int):
        state.score += points
        state.levels.recompute(state.score)

    def check_high_score(self, state: SimulationState):
        """Saves and celebrates the first high-score break of the session."""
        if state.confetti_triggered:
            return
        if ScoreManager.is_new_high_score(state.score, state.high_score):
            state.high_score = state.score
            self.scores.save_high_score(state.high_score)
            state.particles.create_confetti()
            state.confetti_triggered = True
            logger.info("New high score: %d", state.high_score)
