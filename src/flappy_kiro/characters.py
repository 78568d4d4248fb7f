"""
characters.py: The selectable player characters and the persisted choice.
"""

import logging
from typing import List, Optional

from .constants import CHARACTER_KEY, KIRO_PURPLE
from .data_models import Character
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

CHARACTERS: List[Character] = [
    Character("kiro", "Kiro", "kiro-logo.png", KIRO_PURPLE),
    Character("bird", "Angry Bird", "AngryBird.png", (255, 68, 68)),
    Character("star", "Star", "star.png", (255, 255, 68)),
]


class CharacterManager:
    """Tracks the selected character; defaults to the first one."""

    def __init__(self, store: KeyValueStore, characters: Optional[List[Character]] = None,
                 key: str = CHARACTER_KEY):
        self.store = store
        self.characters = characters or CHARACTERS
        self.key = key
        self.selected = self.characters[0]
        self.load_selection()

    def find(self, character_id: str):
        return next((c for c in self.characters if c.id == character_id), None)

    def index_of_selected(self) -> int:
        return self.characters.index(self.selected)

    def set_selected(self, character_id: str) -> bool:
        character = self.find(character_id)
        if character is None:
            return False
        self.selected = character
        self.store.set(self.key, character.id)
        return True

    def load_selection(self):
        saved_id = self.store.get(self.key)
        if not saved_id:
            return
        character = self.find(saved_id)
        if character is None:
            logger.warning("Unknown saved character %r, keeping %s",
                           saved_id, self.selected.id)
            return
        self.selected = character
