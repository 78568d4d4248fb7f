"""Flappy Kiro: a frame-driven arcade shooter simulation with a pygame frontend."""

from .game import Direction, Game
from .state import GameState, Variant

__all__ = ["Direction", "Game", "GameState", "Variant"]
