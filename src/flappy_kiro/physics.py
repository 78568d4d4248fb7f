"""
physics.py: Shared deterministic movement and collision checks.
"""

from typing import Iterable, Optional, Tuple

from .constants import FIELD_WIDTH, FIELD_HEIGHT
from .data_models import Player, Obstacle, Hostile

Box = Tuple[float, float, float, float]  # (x, y, width, height)


def overlaps(a: Box, b: Box) -> bool:
    """Strict axis-aligned overlap; touching edges do not collide."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax + aw > bx and ax < bx + bw and ay + ah > by and ay < by + bh


def player_box(player: Player) -> Box:
    return player.x, player.y, player.width, player.height


class PhysicsCore:
    """
    Player movement and player-vs-world collision used by the game loop.
    """

    def __init__(self, field_width: float = FIELD_WIDTH,
                 field_height: float = FIELD_HEIGHT):
        self.field_width = field_width
        self.field_height = field_height

    def move_player(self, player: Player):
        """Applies held direction keys, then clamps the player to the field."""
        if player.keys["up"]:
            player.y -= player.speed
        if player.keys["down"]:
            player.y += player.speed
        if player.keys["left"]:
            player.x -= player.speed
        if player.keys["right"]:
            player.x += player.speed

        player.y = max(0, min(player.y, self.field_height - player.height))
        player.x = max(0, min(player.x, self.field_width - player.width))

    def hits_hostile(self, player: Player, hostile: Hostile) -> bool:
        return overlaps(player_box(player),
                        (hostile.x, hostile.y, hostile.width, hostile.height))

    def hits_obstacle(self, player: Player, obstacle: Obstacle) -> bool:
        """True if the player touches the top or bottom segment."""
        if player.x + player.width > obstacle.x and player.x < obstacle.x + obstacle.width:
            return player.y < obstacle.top_height or player.y + player.height > obstacle.bottom_y
        return False

    def first_obstacle_hit(self, player: Player,
                           obstacles: Iterable[Obstacle]) -> Optional[Obstacle]:
        for obstacle in obstacles:
            if self.hits_obstacle(player, obstacle):
                return obstacle
        return None
