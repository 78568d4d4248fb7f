import random

import pytest

from flappy_kiro.game import Game
from flappy_kiro.state import new_state
from flappy_kiro.storage import MemoryStore


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 10_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def sim(rng, clock):
    return new_state(rng=rng, clock=clock)


@pytest.fixture
def game(store, rng, clock):
    return Game(store=store, rng=rng, clock=clock)


@pytest.fixture
def playing_game(game):
    """A game past character select and start, with an empty field."""
    game.confirm()
    game.confirm()
    return game
