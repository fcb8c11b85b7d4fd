# flappybot/game/render.py
from __future__ import annotations
from typing import Optional
import pygame
from .config import (
    COLOR_BG, COLOR_FG, COLOR_PIPE, COLOR_PIPE_EDGE, COLOR_ACTOR, COLOR_ACTOR_DEAD,
    COLOR_PANEL, COLOR_BUTTON, COLOR_HUD, Tuning, DEFAULT_TUNING
)
from .engine import Phase, RunState, Viewport


def draw_world(surf: pygame.Surface, state: RunState, viewport: Viewport,
               tuning: Tuning = DEFAULT_TUNING) -> None:
    """Pipes and actor. Reads the snapshot only."""
    surf.fill(COLOR_BG)
    w, h = int(viewport.width), int(viewport.height)

    for ob in state.obstacles:
        top = pygame.Rect(int(ob.x), 0, int(ob.width), int(ob.top_height))
        bot = pygame.Rect(int(ob.x), int(ob.bottom_y), int(ob.width), h - int(ob.bottom_y))
        for r in (top, bot):
            pygame.draw.rect(surf, COLOR_PIPE, r)
            pygame.draw.rect(surf, COLOR_PIPE_EDGE, r, width=2)

    size = int(tuning.actor_size)
    sprite = pygame.Surface((size, size), pygame.SRCALPHA)
    color = COLOR_ACTOR_DEAD if state.over else COLOR_ACTOR
    pygame.draw.rect(sprite, color, sprite.get_rect(), border_radius=size // 5)
    # eye, so the tilt reads
    pygame.draw.circle(sprite, COLOR_PANEL, (size * 3 // 4, size // 3), size // 8)
    # pygame rotates counter-clockwise; positive vy tilts nose down
    rotated = pygame.transform.rotate(sprite, -state.actor.tilt_degrees)
    left = viewport.width * tuning.actor_x_fraction
    center = (int(left + size / 2), int(state.actor.y + size / 2))
    surf.blit(rotated, rotated.get_rect(center=center))


def _panel(surf: pygame.Surface, viewport: Viewport, w: int, h: int) -> pygame.Rect:
    rect = pygame.Rect(0, 0, w, h)
    rect.center = (int(viewport.width // 2), int(viewport.height // 2))
    pygame.draw.rect(surf, COLOR_PANEL, rect, border_radius=10)
    return rect


def _blit_centered(surf, font, text, color, cx, y) -> None:
    img = font.render(text, True, color)
    surf.blit(img, (cx - img.get_width() // 2, y))


def draw_overlay(surf: pygame.Surface, state: RunState, viewport: Viewport,
                 big: pygame.font.Font, small: pygame.font.Font) -> Optional[pygame.Rect]:
    """
    Start prompt / live HUD / game-over summary, picked by phase.
    Returns the restart button rect while OVER (for click hit-testing), else None.
    """
    cx = int(viewport.width // 2)

    if state.phase is Phase.NOT_STARTED:
        panel = _panel(surf, viewport, 420, 180)
        _blit_centered(surf, big, "Flappy Bot", COLOR_FG, cx, panel.top + 30)
        _blit_centered(surf, small, "SPACE / click to start", COLOR_BUTTON, cx, panel.top + 110)
        return None

    if state.phase is Phase.RUNNING:
        _blit_centered(surf, big, str(state.score), COLOR_HUD, cx, 64)
        return None

    panel = _panel(surf, viewport, 420, 240)
    _blit_centered(surf, big, "Game Over!", COLOR_FG, cx, panel.top + 24)
    _blit_centered(surf, small, f"Final Score: {state.score}", COLOR_FG, cx, panel.top + 96)
    button = pygame.Rect(0, 0, 200, 56)
    button.center = (cx, panel.bottom - 56)
    pygame.draw.rect(surf, COLOR_BUTTON, button, border_radius=10)
    _blit_centered(surf, small, "Restart (R)", COLOR_PANEL, cx,
                   button.centery - small.get_height() // 2)
    return button
