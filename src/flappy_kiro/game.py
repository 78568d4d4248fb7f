"""
game.py: The game state machine and per-tick orchestration.

    CHARACTER_SELECT -> START -> PLAYING -> GAME_OVER -> PLAYING ...

Game owns the SimulationState and is the only writer to it. The frontend
calls tick() once per frame and forwards input through press(), release(),
confirm(), navigate() and reset_high_score().
"""

import logging
import random
from enum import Enum
from typing import Callable, Optional

from .characters import CharacterManager
from .collisions import CollisionOutcome, CollisionResolver
from .constants import TRAIL_EVERY_TICKS
from .levels import monotonic_ms
from .physics import PhysicsCore
from .scores import ScoreManager
from .spawner import EntitySpawner
from .state import GameState, SimulationState, Variant, new_state
from .storage import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Game:
    def __init__(self, store: Optional[KeyValueStore] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = monotonic_ms,
                 variant: Variant = Variant.SHOOTER):
        self.clock = clock
        self.store = store if store is not None else MemoryStore()
        self.sim: SimulationState = new_state(rng=rng, clock=clock, variant=variant)

        self.physics = PhysicsCore()
        self.spawner = EntitySpawner()
        self.scores = ScoreManager(self.store)
        self.resolver = CollisionResolver(self.scores, self.physics)
        self.characters = CharacterManager(self.store)

        self.state = GameState.CHARACTER_SELECT
        self.selected_index = self.characters.index_of_selected()
        self.sim.high_score = self.scores.get_high_score()
        self.last_tick_ms = self.clock()

    # -------- Input --------

    def press(self, direction: Direction):
        if self.state is GameState.CHARACTER_SELECT:
            if direction is Direction.LEFT:
                self.navigate(-1)
            elif direction is Direction.RIGHT:
                self.navigate(1)
            return

        self.sim.player.keys[direction.value] = True
        if self.state is GameState.START:
            self.reset_game()

    def release(self, direction: Direction):
        self.sim.player.keys[direction.value] = False

    def navigate(self, step: int):
        """Cycles the highlighted character on the selection screen."""
        if self.state is not GameState.CHARACTER_SELECT:
            return
        self.selected_index = (self.selected_index + step) % len(self.characters.characters)

    def confirm(self):
        """Space/Enter: choose, start, fire or restart depending on state."""
        if self.state is GameState.CHARACTER_SELECT:
            chosen = self.characters.characters[self.selected_index]
            self.characters.set_selected(chosen.id)
            self.state = GameState.START
            logger.info("Playing as %s", chosen.name)
        elif self.state in (GameState.START, GameState.GAME_OVER):
            self.reset_game()
        elif self.state is GameState.PLAYING:
            self.fire()

    def fire(self) -> bool:
        player = self.sim.player
        return self.sim.weapon.fire(player.x + player.width, player.y + player.height / 2)

    def reset_high_score(self) -> bool:
        if self.state is not GameState.START:
            return False
        self.sim.high_score = 0
        self.scores.save_high_score(0)
        logger.info("High score reset")
        return True

    # -------- Transitions --------

    def reset_game(self):
        self.sim.reset_session()
        self.last_tick_ms = self.clock()
        self.state = GameState.PLAYING

    def game_over(self):
        self.state = GameState.GAME_OVER
        cx, cy = self.sim.player.center()
        self.sim.particles.create_explosion(cx, cy)

        if ScoreManager.is_new_high_score(self.sim.score, self.sim.high_score):
            self.sim.high_score = self.sim.score
            self.scores.save_high_score(self.sim.high_score)
        logger.info("Game over: score %d, high score %d",
                    self.sim.score, self.sim.high_score)

    # -------- Tick --------

    def tick(self) -> Optional[CollisionOutcome]:
        """Advances one frame. Returns the collision outcome while playing."""
        now = self.clock()
        elapsed = now - self.last_tick_ms
        self.last_tick_ms = now

        if self.state is not GameState.PLAYING:
            return None

        sim = self.sim
        sim.frame_count += 1
        self.physics.move_player(sim.player)

        passed = self.spawner.step(sim)
        passes = 0
        if sim.variant is Variant.CLASSIC:
            passes = self.resolver.score_passes(sim, passed)
        sim.weapon.update(elapsed, targets=sim.hostiles)

        outcome = self.resolver.resolve(sim)
        outcome.passes = passes
        sim.levels.recompute(sim.score)
        if outcome.game_over:
            self.game_over()

        if sim.frame_count % TRAIL_EVERY_TICKS == 0:
            cx, cy = sim.player.center()
            sim.particles.create_trail(cx, cy, self.characters.selected.color)
        sim.particles.update()
        return outcome
