# flappybot/game/engine.py
"""
Per-frame simulation for Flappy Bot.

The module-level functions (`initial_state`, `flap`, `update`, `restart`) are
pure transforms over immutable `RunState` snapshots; the only side effect is
drawing spawn parameters from the injected `ObstacleSpawner`.
`SimulationEngine` wraps them around a single mutable cell for the game loop.

Per tick, while RUNNING:
  1. difficulty multiplier from the score (capped)
  2. refresh-rate scale for gravity / scroll speed
  3. integrate vy then y
  4. floor / ceiling check        -> OVER
  5. spawn at the right edge every SPAWN_INTERVAL_MS
  6. scroll + despawn
  7. hit-box vs pipe columns      -> OVER
  8. score every pipe whose right edge cleared the actor's left edge
"""
from __future__ import annotations
import enum
import logging
import math
from dataclasses import dataclass, replace, field
from typing import NamedTuple, Optional, Tuple

from .actor import Actor
from .config import (
    MIN_VIEWPORT_WIDTH, MIN_VIEWPORT_HEIGHT, REFERENCE_REFRESH_HZ,
    Tuning, DEFAULT_TUNING
)
from .difficulty import effective_gravity, effective_speed, effective_jump
from .obstacles import Obstacle, ObstacleSpawner, placeholder, refit, scroll

log = logging.getLogger(__name__)


class Phase(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    OVER = "over"


class Viewport(NamedTuple):
    width: float
    height: float


def validate_viewport(width: float, height: float) -> Viewport:
    """Reject viewports the spawner cannot lay a gap into."""
    for name, value, minimum in (("width", width, MIN_VIEWPORT_WIDTH),
                                 ("height", height, MIN_VIEWPORT_HEIGHT)):
        if not math.isfinite(value):
            raise ValueError(f"viewport {name} must be finite, got {value!r}")
        if value < minimum:
            raise ValueError(f"viewport {name} {value} is below the minimum {minimum}")
    return Viewport(float(width), float(height))


@dataclass(frozen=True)
class RunState:
    actor: Actor
    obstacles: Tuple[Obstacle, ...] = field(default_factory=tuple)
    score: int = 0
    phase: Phase = Phase.NOT_STARTED
    last_spawn_ms: Optional[float] = None  # None until the first spawn of the run
    end_cause: Optional[str] = None        # "floor" | "ceiling" | "obstacle"

    @property
    def started(self) -> bool:
        return self.phase is not Phase.NOT_STARTED

    @property
    def over(self) -> bool:
        return self.phase is Phase.OVER


# -------------------- Pure transforms --------------------

def initial_state(viewport: Viewport, tuning: Tuning = DEFAULT_TUNING) -> RunState:
    """Fresh start screen: centred actor and one placeholder pipe."""
    return RunState(
        actor=Actor.centered(viewport.height),
        obstacles=(placeholder(viewport.width, viewport.height, tuning),),
    )


def restart(viewport: Viewport) -> RunState:
    """Back to NOT_STARTED with no pipes and a zero score."""
    return RunState(actor=Actor.centered(viewport.height))


def flap(state: RunState, refresh_rate: float = REFERENCE_REFRESH_HZ,
         tuning: Tuning = DEFAULT_TUNING) -> RunState:
    if state.phase is Phase.OVER:
        return state
    vy = effective_jump(state.score, refresh_rate, tuning)
    return replace(state, actor=state.actor.with_velocity(vy), phase=Phase.RUNNING)


def collides(actor: Actor, obstacle: Obstacle, viewport_width: float,
             tuning: Tuning = DEFAULT_TUNING) -> bool:
    """Inside the pipe's column but outside its gap."""
    left, right = actor.span_x(viewport_width, tuning)
    if not (right > obstacle.x and left < obstacle.right):
        return False
    top, bottom = actor.hitbox_y(tuning)
    return top < obstacle.top_height or bottom > obstacle.bottom_y


def _end(state: RunState, cause: str) -> RunState:
    log.debug("run over (%s) with score %d", cause, state.score)
    return replace(state, phase=Phase.OVER, end_cause=cause)


def update(state: RunState, viewport: Viewport, now_ms: float, spawner: ObstacleSpawner,
           refresh_rate: float = REFERENCE_REFRESH_HZ,
           tuning: Tuning = DEFAULT_TUNING) -> RunState:
    """Advance one frame. Returns `state` itself outside RUNNING."""
    if state.phase is not Phase.RUNNING:
        return state

    gravity = effective_gravity(state.score, refresh_rate, tuning)
    speed = effective_speed(state.score, refresh_rate, tuning)

    actor = state.actor.integrated(gravity)
    cause = actor.out_of_bounds(viewport.height, tuning)
    if cause is not None:
        return _end(state, cause)

    obstacles = state.obstacles
    last_spawn_ms = state.last_spawn_ms
    if last_spawn_ms is None or now_ms - last_spawn_ms > tuning.spawn_interval_ms:
        obstacles = obstacles + (spawner.spawn(viewport.width, viewport.height),)
        last_spawn_ms = now_ms

    obstacles = scroll(obstacles, speed)

    if any(collides(actor, ob, viewport.width, tuning) for ob in obstacles):
        return _end(state, "obstacle")

    actor_left = actor.left(viewport.width, tuning)
    score = state.score
    scored = []
    for ob in obstacles:
        if not ob.passed and ob.right < actor_left:
            ob = ob.mark_passed()
            score += 1
            log.debug("scored: pipe right=%.1f < actor left=%.1f -> %d", ob.right, actor_left, score)
        scored.append(ob)

    return replace(state, actor=actor, obstacles=tuple(scored), score=score,
                   last_spawn_ms=last_spawn_ms)


# -------------------- Stateful wrapper --------------------

class SimulationEngine:
    """
    Owns the single run-state cell. Not thread-safe: flap / update / restart /
    resize must be called from the same loop, in arrival order.
    """
    def __init__(self, width: float, height: float, seed: int | None = None,
                 rng=None, tuning: Tuning = DEFAULT_TUNING):
        self.viewport = validate_viewport(width, height)
        self.tuning = tuning
        self.spawner = ObstacleSpawner(seed=seed, rng=rng, tuning=tuning)
        self._state = initial_state(self.viewport, tuning)

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def seed(self) -> int | None:
        return self.spawner.seed

    def flap(self, refresh_rate: float = REFERENCE_REFRESH_HZ) -> RunState:
        was_started = self._state.started
        self._state = flap(self._state, refresh_rate, self.tuning)
        if not was_started and self._state.started:
            log.info("run started (seed=%s)", self.seed)
        return self._state

    def update(self, now_ms: float, refresh_rate: float = REFERENCE_REFRESH_HZ) -> RunState:
        prev = self._state
        self._state = update(prev, self.viewport, now_ms, self.spawner, refresh_rate, self.tuning)
        if self._state.over and not prev.over:
            log.info("game over: %s, final score %d", self._state.end_cause, self._state.score)
        return self._state

    def restart(self) -> RunState:
        self._state = restart(self.viewport)
        log.info("run reset")
        return self._state

    def resize(self, width: float, height: float) -> Viewport:
        self.viewport = validate_viewport(width, height)
        if self._state.phase is Phase.NOT_STARTED:
            # the start-screen pipe follows the new geometry too
            obstacles = self._state.obstacles
            if obstacles:
                obstacles = (placeholder(self.viewport.width, self.viewport.height, self.tuning),)
            self._state = replace(self._state, actor=Actor.centered(self.viewport.height),
                                  obstacles=obstacles)
        else:
            # live pipes keep their column but their gaps follow the new height
            obstacles = tuple(refit(ob, self.viewport.height, self.tuning)
                              for ob in self._state.obstacles)
            self._state = replace(self._state, obstacles=obstacles)
        return self.viewport
