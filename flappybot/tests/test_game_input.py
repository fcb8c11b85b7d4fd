# flappybot/tests/test_game_input.py
"""
Input adapter tests: events are fed straight to handle_event, no window needed.

Usage (from repo root):
  pytest flappybot/tests/test_game_input.py
  python -m flappybot.tests.test_game_input
"""

from __future__ import annotations

import pygame
import pytest

from flappybot.game.config import JUMP_FORCE
from flappybot.game.engine import Phase, SimulationEngine
from flappybot.game.game import handle_event, parse_args


def _over_engine() -> SimulationEngine:
    engine = SimulationEngine(1200, 800, seed=1)
    engine.flap()
    tick = 0
    while engine.phase is Phase.RUNNING:
        tick += 1
        engine.update(tick * 1000.0 / 60.0)
    return engine


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def _click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


def test_restart_then_flap_in_same_frame():
    engine = _over_engine()
    rect = None
    for event in (_key(pygame.K_r), _key(pygame.K_SPACE)):
        rect = handle_event(engine, event, 60.0, rect)
    assert engine.phase is Phase.RUNNING
    assert engine.state.score == 0
    assert engine.state.actor.vy == pytest.approx(JUMP_FORCE)


def test_restart_button_not_reused_after_restart():
    engine = _over_engine()
    button = pygame.Rect(500, 400, 200, 56)
    rect = handle_event(engine, _click((600, 420)), 60.0, button)
    assert rect is None
    assert engine.phase is Phase.NOT_STARTED
    # the next click in the batch is a flap, not a second restart
    rect = handle_event(engine, _click((600, 420)), 60.0, rect)
    assert engine.phase is Phase.RUNNING


def test_space_ignored_while_over_and_quit():
    engine = _over_engine()
    frozen = engine.state
    button = pygame.Rect(0, 0, 10, 10)
    assert handle_event(engine, _key(pygame.K_SPACE), 60.0, button) is button
    assert engine.state is frozen
    assert handle_event(engine, pygame.event.Event(pygame.QUIT), 60.0, button) is False
    assert handle_event(engine, _key(pygame.K_ESCAPE), 60.0, button) is False


def test_resize_event_is_clamped_to_minimum():
    engine = SimulationEngine(1200, 800, seed=1)
    handle_event(engine, pygame.event.Event(pygame.VIDEORESIZE, w=200, h=300, size=(200, 300)),
                 60.0, None)
    assert tuple(engine.viewport) == (320.0, 400.0)


def test_fps_zero_means_uncapped():
    assert parse_args(["--fps", "0"]).fps == 0
    assert parse_args([]).fps == 60


if __name__ == "__main__":
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 All input tests passed")
