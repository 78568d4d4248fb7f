"""
scores.py: High score persistence.
"""

import logging

from .constants import HIGH_SCORE_KEY
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class ScoreManager:
    def __init__(self, store: KeyValueStore, key: str = HIGH_SCORE_KEY):
        self.store = store
        self.key = key

    def get_high_score(self) -> int:
        stored = self.store.get(self.key)
        if not stored:
            return 0
        try:
            return int(stored, 10)
        except ValueError:
            logger.warning("Ignoring unreadable high score %r", stored)
            return 0

    def save_high_score(self, score: int):
        self.store.set(self.key, str(int(score)))

    @staticmethod
    def is_new_high_score(current: int, high: int) -> bool:
        return current > high
