# flappybot/game/actor.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Tuple
from .config import Tuning, DEFAULT_TUNING, TILT_PER_VELOCITY, MAX_TILT_DEG


@dataclass(frozen=True)
class Actor:
    """
    The controllable bot. Horizontal position is fixed (a fraction of the
    viewport width); only the vertical axis is simulated.
    - y  : TOP edge of the sprite, px from the top of the viewport
    - vy : px per tick, positive = falling
    """
    y: float
    vy: float = 0.0

    @classmethod
    def centered(cls, viewport_height: float) -> "Actor":
        return cls(y=viewport_height / 2, vy=0.0)

    def integrated(self, gravity: float) -> "Actor":
        """One semi-implicit Euler step: velocity first, then position."""
        vy = self.vy + gravity
        return replace(self, y=self.y + vy, vy=vy)

    def with_velocity(self, vy: float) -> "Actor":
        return replace(self, vy=vy)

    @property
    def tilt_degrees(self) -> float:
        t = self.vy * TILT_PER_VELOCITY
        return max(-MAX_TILT_DEG, min(MAX_TILT_DEG, t))

    # --- geometry ---

    def left(self, viewport_width: float, tuning: Tuning = DEFAULT_TUNING) -> float:
        return viewport_width * tuning.actor_x_fraction

    def span_x(self, viewport_width: float, tuning: Tuning = DEFAULT_TUNING) -> Tuple[float, float]:
        left = self.left(viewport_width, tuning)
        return left, left + tuning.actor_size

    def hitbox_y(self, tuning: Tuning = DEFAULT_TUNING) -> Tuple[float, float]:
        """Forgiving vertical extent (top, bottom), inset from the sprite on both ends."""
        return (self.y + tuning.hitbox_padding,
                self.y + tuning.actor_size - tuning.hitbox_padding)

    def out_of_bounds(self, viewport_height: float, tuning: Tuning = DEFAULT_TUNING) -> str | None:
        """'floor' / 'ceiling' when the sprite leaves the viewport, else None."""
        if self.y + tuning.actor_size > viewport_height:
            return "floor"
        if self.y < 0:
            return "ceiling"
        return None
