# flappybot/game/game.py
import sys, argparse
import logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_RETURN
from .config import (
    WIDTH, HEIGHT, FPS, MIN_VIEWPORT_WIDTH, MIN_VIEWPORT_HEIGHT, SEED_DEFAULT
)
from .engine import Phase, SimulationEngine
from .frame_driver import RefreshRateMeter
from .render import draw_world, draw_overlay
from ..logger import setup_logging

log = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy Bot")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Spawn seed. Omit for a random seed each launch.")
    p.add_argument("--width", type=int, default=WIDTH)
    p.add_argument("--height", type=int, default=HEIGHT)
    p.add_argument("--fps", type=int, default=FPS,
                   help="Frame cap, 0 = uncapped. The refresh meter measures the loop rate "
                        "after this cap, so high-refresh compensation only applies with "
                        "--fps above 75 or --fps 0 on a fast display.")
    p.add_argument("--log-level", default="info",
                   choices=["debug", "info", "warning", "error"])
    p.add_argument("--log-file", default=None, help="Also write NDJSON logs here")
    return p.parse_args(argv)


def clamp_viewport(width: int, height: int):
    return max(width, MIN_VIEWPORT_WIDTH), max(height, MIN_VIEWPORT_HEIGHT)


def handle_event(engine: SimulationEngine, event, refresh_rate: float, restart_rect):
    """
    Input adapter for one event. Reads the engine phase per event, so a
    restart and a flap in the same frame both apply, in order.
    Returns the restart button rect still valid for later events, or None
    once the game-over overlay is gone. Returns False on quit.
    """
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.VIDEORESIZE:
        engine.resize(*clamp_viewport(event.w, event.h))
    if event.type == pygame.KEYDOWN:
        if event.key == K_ESCAPE:
            return False
        if event.key == K_SPACE and engine.phase is not Phase.OVER:
            engine.flap(refresh_rate)
        elif event.key in (K_r, K_RETURN) and engine.phase is Phase.OVER:
            engine.restart()
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        if engine.phase is not Phase.OVER:
            engine.flap(refresh_rate)
        elif restart_rect is not None and restart_rect.collidepoint(event.pos):
            engine.restart()
    return restart_rect if engine.phase is Phase.OVER else None


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    width, height = clamp_viewport(args.width, args.height)

    pygame.init()
    pygame.display.set_caption("Flappy Bot")
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    big = pygame.font.SysFont("jetbrainsmono", 56, bold=True)
    small = pygame.font.SysFont("jetbrainsmono", 24)

    engine = SimulationEngine(width, height, seed=args.seed)
    meter = RefreshRateMeter()
    restart_rect = None
    log.info("window %dx%d, seed=%s, fps cap=%s", width, height, engine.seed, args.fps or "none")

    while True:
        clock.tick(args.fps)
        refresh_rate = meter.sample(pygame.time.get_ticks())

        for event in pygame.event.get():
            if event.type == pygame.VIDEORESIZE:
                w, h = clamp_viewport(event.w, event.h)
                if (w, h) != (event.w, event.h):
                    screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
            restart_rect = handle_event(engine, event, refresh_rate, restart_rect)
            if restart_rect is False:
                pygame.quit(); sys.exit()

        if engine.phase is Phase.RUNNING:
            engine.update(pygame.time.get_ticks(), refresh_rate)

        # --- Render ---
        state = engine.state
        draw_world(screen, state, engine.viewport, engine.tuning)
        restart_rect = draw_overlay(screen, state, engine.viewport, big, small)
        pygame.display.flip()


if __name__ == "__main__":
    run()
