#!/usr/bin/env python3
"""
client.py

Pygame window for the game: runs one Game.tick() per frame, forwards
keyboard/mouse input and renders the current state. Nothing here writes to
the simulation except through the Game input API.
"""

import logging
import os
import sys
from typing import Dict, Optional

import pygame

from .constants import FIELD_WIDTH, FIELD_HEIGHT, RENDER_FPS, DB_FILE, KIRO_PURPLE
from .game import Direction, Game
from .particles import opacity
from .state import GameState
from .storage import open_store

logger = logging.getLogger(__name__)

ASSET_DIR = os.environ.get("FLAPPY_KIRO_ASSETS", "assets")
HOSTILE_SPRITE = "AngryBird.png"

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}

WHITE = (255, 255, 255)
GREY = (170, 170, 170)
RESET_BUTTON = pygame.Rect(FIELD_WIDTH // 2 - 80, FIELD_HEIGHT - 80, 160, 40)


def setup_logging(level=logging.INFO):
    """Configures root logging once."""
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[logging.StreamHandler(sys.stdout)]
        )


def dispatch_event(game: Game, event) -> bool:
    """Maps one pygame event onto the Game input API. False means quit."""
    if event.type == pygame.QUIT:
        return False

    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in KEY_DIRECTIONS:
            game.press(KEY_DIRECTIONS[event.key])
        elif event.key == pygame.K_SPACE:
            game.confirm()
        elif event.key == pygame.K_RETURN and game.state is GameState.CHARACTER_SELECT:
            game.confirm()

    elif event.type == pygame.KEYUP and event.key in KEY_DIRECTIONS:
        game.release(KEY_DIRECTIONS[event.key])

    elif event.type == pygame.MOUSEBUTTONDOWN:
        if game.state is GameState.START and RESET_BUTTON.collidepoint(event.pos):
            game.reset_high_score()
        else:
            game.confirm()

    return True


def load_sprite(name: str) -> Optional[pygame.Surface]:
    """Loads a sprite, or None so the caller draws a placeholder."""
    path = os.path.join(ASSET_DIR, name)
    try:
        return pygame.image.load(path).convert_alpha()
    except (pygame.error, FileNotFoundError) as e:
        logger.warning("Sprite %s unavailable (%s); using placeholder", path, e)
        return None


class GameClient:
    def __init__(self, game: Game):
        pygame.init()
        self.game = game
        self.screen = pygame.display.set_mode((FIELD_WIDTH, FIELD_HEIGHT))
        pygame.display.set_caption("Flappy Kiro")
        self.clock = pygame.time.Clock()

        self.large_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 28)
        self.small_font = pygame.font.Font(None, 22)

        self.sprites: Dict[str, Optional[pygame.Surface]] = {
            c.id: load_sprite(c.sprite) for c in game.characters.characters
        }
        self.hostile_sprite = load_sprite(HOSTILE_SPRITE)

    def run(self):
        """The main client loop."""
        running = True
        while running:
            self.clock.tick(RENDER_FPS)

            for event in pygame.event.get():
                if not dispatch_event(self.game, event):
                    running = False

            self.game.tick()
            self._draw_game()

        pygame.quit()

    # -------- Drawing --------

    def _blit_or_fill(self, sprite, rect: pygame.Rect, color, flip: bool = False):
        if sprite is None:
            pygame.draw.rect(self.screen, color, rect)
            return
        image = pygame.transform.scale(sprite, rect.size)
        if flip:
            image = pygame.transform.flip(image, True, False)
        self.screen.blit(image, rect)

    def _text(self, font, text: str, color, center_x: int, y: int):
        surf = font.render(text, True, color)
        self.screen.blit(surf, (center_x - surf.get_width() // 2, y))

    def _draw_background(self):
        hue = self.game.sim.levels.level_info()["theme"]["hue"]
        bg = pygame.Color(0)
        bg.hsla = (hue, 30, 8, 100)
        self.screen.fill(bg)

    def _draw_world(self):
        sim = self.game.sim
        screen = self.screen

        for obstacle in sim.obstacles:
            top = pygame.Rect(obstacle.x, 0, obstacle.width, obstacle.top_height)
            bottom = pygame.Rect(obstacle.x, obstacle.bottom_y, obstacle.width,
                                 FIELD_HEIGHT - obstacle.bottom_y)
            for rect in (top, bottom):
                pygame.draw.rect(screen, (42, 42, 42), rect)
                pygame.draw.rect(screen, KIRO_PURPLE, rect, 3)

        for hostile in sim.hostiles:
            rect = pygame.Rect(hostile.x, hostile.y, hostile.width, hostile.height)
            self._blit_or_fill(self.hostile_sprite, rect, (255, 0, 0), flip=True)

        for missile in sim.weapon.missiles:
            pygame.draw.rect(screen, missile.color, pygame.Rect(*missile.bounds()))

        player = sim.player
        selected = self.game.characters.selected
        self._blit_or_fill(self.sprites.get(selected.id),
                           pygame.Rect(player.x, player.y, player.width, player.height),
                           selected.color)

        for p in sim.particles:
            size = max(1, int(p.size))
            dot = pygame.Surface((size, size), pygame.SRCALPHA)
            dot.fill((*p.color, int(255 * opacity(p))))
            screen.blit(dot, (p.x - size / 2, p.y - size / 2))

    def _draw_hud(self):
        sim = self.game.sim
        screen = self.screen
        screen.blit(self.font.render(f"Score: {sim.score}", True, WHITE), (20, 20))
        screen.blit(self.small_font.render(f"High Score: {sim.high_score}", True, KIRO_PURPLE), (20, 50))

        levels = sim.levels
        power = levels.weapon_power()
        lines = [
            f"Level {levels.current_level}  {levels.tier().title()}",
            f"DMG: {power.damage} | SPD: {power.speed:.1f}",
            f"Ammo: {sim.weapon.count()}/{sim.weapon.capacity}",
            "READY!" if sim.weapon.cooldown <= 0 else f"Cooldown {sim.weapon.cooldown:.0f}ms",
        ]
        for i, line in enumerate(lines):
            screen.blit(self.small_font.render(line, True, GREY), (20, 80 + i * 20))

        if levels.is_transition_active():
            progress = levels.transition_progress()
            alpha = progress * 2 if progress < 0.5 else (1 - progress) * 2
            banner = self.large_font.render(f"LEVEL {levels.current_level}", True, WHITE)
            banner.set_alpha(int(255 * alpha))
            screen.blit(banner, (FIELD_WIDTH // 2 - banner.get_width() // 2, FIELD_HEIGHT // 2 - 40))

    def _draw_overlay(self):
        game = self.game
        cx, cy = FIELD_WIDTH // 2, FIELD_HEIGHT // 2
        shade = pygame.Surface((FIELD_WIDTH, FIELD_HEIGHT), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 190))
        self.screen.blit(shade, (0, 0))

        if game.state is GameState.CHARACTER_SELECT:
            self._text(self.large_font, "Choose Your Character", KIRO_PURPLE, cx, 60)
            characters = game.characters.characters
            start_x = cx - (len(characters) * 120 - 20) // 2
            for i, char in enumerate(characters):
                card = pygame.Rect(start_x + i * 120, 150, 100, 140)
                selected = i == game.selected_index
                pygame.draw.rect(self.screen, KIRO_PURPLE if selected else (42, 42, 42), card)
                pygame.draw.rect(self.screen, WHITE if selected else KIRO_PURPLE, card, 4 if selected else 2)
                self._blit_or_fill(self.sprites.get(char.id),
                                   pygame.Rect(card.x + 20, card.y + 15, 60, 60), char.color)
                self._text(self.small_font, char.name, WHITE, card.centerx, card.bottom - 30)
            self._text(self.font, "LEFT/RIGHT to select, SPACE or ENTER to confirm", WHITE, cx, 350)

        elif game.state is GameState.START:
            self._text(self.large_font, "Flappy Kiro", KIRO_PURPLE, cx, cy - 80)
            self._text(self.font, "Press SPACE or Arrow Keys to start", WHITE, cx, cy)
            if game.sim.high_score > 0:
                self._text(self.font, f"High Score: {game.sim.high_score}", KIRO_PURPLE, cx, cy + 40)
            self._text(self.small_font, f"Playing as: {game.characters.selected.name}", WHITE, cx, cy + 80)
            pygame.draw.rect(self.screen, (255, 68, 68), RESET_BUTTON)
            pygame.draw.rect(self.screen, WHITE, RESET_BUTTON, 2)
            self._text(self.small_font, "Reset High Score", WHITE, cx, RESET_BUTTON.y + 12)

        elif game.state is GameState.GAME_OVER:
            self._text(self.large_font, "Game Over", KIRO_PURPLE, cx, cy - 100)
            self._text(self.font, f"Score: {game.sim.score}", WHITE, cx, cy - 30)
            self._text(self.font, f"High Score: {game.sim.high_score}", KIRO_PURPLE, cx, cy + 10)
            self._text(self.font, "Press SPACE or click to restart", WHITE, cx, cy + 60)

    def _draw_game(self):
        self._draw_background()
        self._draw_world()
        if self.game.state is GameState.PLAYING:
            self._draw_hud()
        else:
            self._draw_overlay()
        pygame.display.flip()


def main():
    setup_logging()
    store = open_store(os.environ.get("FLAPPY_KIRO_DB", DB_FILE))
    try:
        GameClient(Game(store=store)).run()
    finally:
        store.close()


if __name__ == "__main__":
    main()
