# flappybot/game/obstacles.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, replace
from typing import Iterable, Tuple
from .config import (
    PIPE_SIZES, GAP_HEIGHT_FRACTION, MIN_TOP_HEIGHT, MIN_BOTTOM_MARGIN,
    Tuning, DEFAULT_TUNING
)

log = logging.getLogger(__name__)

SIZE_CLASSES: Tuple[str, ...] = ("small", "medium", "large")


@dataclass(frozen=True)
class Obstacle:
    """
    A pipe pair sharing one column:
    - top segment spans [0, top_height)
    - gap spans [top_height, bottom_y]
    - bottom segment spans (bottom_y, viewport floor]
    """
    x: float
    top_height: float
    bottom_y: float
    size: str = "medium"  # "small" | "medium" | "large"
    passed: bool = False

    @property
    def width(self) -> float:
        return PIPE_SIZES[self.size][0]

    @property
    def extent(self) -> float:
        """Fixed vertical extent of the size class."""
        return PIPE_SIZES[self.size][1]

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_size(self) -> float:
        return self.bottom_y - self.top_height

    def moved(self, dx: float) -> "Obstacle":
        return replace(self, x=self.x - dx)

    def mark_passed(self) -> "Obstacle":
        return replace(self, passed=True)


def gap_size_for(viewport_height: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Configured gap, shrunk on short viewports so the pipes never fill the screen."""
    return min(tuning.pipe_gap, viewport_height * GAP_HEIGHT_FRACTION)


def max_top_height(viewport_height: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    return viewport_height - gap_size_for(viewport_height, tuning) - MIN_BOTTOM_MARGIN


def refit(obstacle: Obstacle, viewport_height: float,
          tuning: Tuning = DEFAULT_TUNING) -> Obstacle:
    """
    Re-lay a live obstacle's gap against a new viewport height.
    Keeps x / size / passed; the gap is re-capped and its top clamped into
    [MIN_TOP_HEIGHT, max_top_height] so the floor margin holds again.
    """
    gap = gap_size_for(viewport_height, tuning)
    top = max(MIN_TOP_HEIGHT, min(obstacle.top_height, max_top_height(viewport_height, tuning)))
    return replace(obstacle, top_height=top, bottom_y=top + gap)


def placeholder(viewport_width: float, viewport_height: float,
                tuning: Tuning = DEFAULT_TUNING) -> Obstacle:
    """Static obstacle shown on the start screen, gap centred vertically."""
    gap = gap_size_for(viewport_height, tuning)
    top = min((viewport_height - gap) / 2, max_top_height(viewport_height, tuning))
    return Obstacle(x=viewport_width / 3, top_height=top, bottom_y=top + gap, size="medium")


class ObstacleSpawner:
    """
    Draws obstacle size and gap position from an injectable random source.
    Pass `rng` for full control (tests), or a `seed` (int, or None for a random one).
    """
    def __init__(self, seed: int | None = None, rng: random.Random | None = None,
                 tuning: Tuning = DEFAULT_TUNING):
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.tuning = tuning

    def spawn(self, viewport_width: float, viewport_height: float) -> Obstacle:
        size = self.rng.choice(SIZE_CLASSES)
        gap = gap_size_for(viewport_height, self.tuning)
        span = max_top_height(viewport_height, self.tuning) - MIN_TOP_HEIGHT
        top = self.rng.random() * span + MIN_TOP_HEIGHT
        obstacle = Obstacle(x=float(viewport_width), top_height=top, bottom_y=top + gap, size=size)
        log.debug("spawned %s obstacle at x=%.1f gap=[%.1f, %.1f]",
                  size, obstacle.x, obstacle.top_height, obstacle.bottom_y)
        return obstacle


def scroll(obstacles: Iterable[Obstacle], dx: float) -> Tuple[Obstacle, ...]:
    """Move every obstacle left by dx and drop those whose right edge left the viewport."""
    kept = []
    for ob in obstacles:
        ob = ob.moved(dx)
        if ob.x > -ob.width:
            kept.append(ob)
        else:
            log.debug("despawned %s obstacle at x=%.1f", ob.size, ob.x)
    return tuple(kept)
