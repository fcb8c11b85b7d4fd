# flappybot/env/observations.py
from __future__ import annotations
from typing import List
import numpy as np

from flappybot.game.config import Tuning, DEFAULT_TUNING
from flappybot.game.difficulty import difficulty_multiplier
from flappybot.game.engine import RunState, Viewport

OBS_SIZE = 9
LOOKAHEAD_PIPES = 2
VY_NORM = 20.0  # px/tick mapped to +-1
# (dx, gap_top, gap_bottom) when no pipe is ahead: far away, gap = whole screen
NO_PIPE = (1.0, 0.0, 1.0)

OBS_LOW = np.array([0.0, -1.0, 0.0] + [-1.0, 0.0, 0.0] * LOOKAHEAD_PIPES, dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0] + [1.0, 1.0, 1.0] * LOOKAHEAD_PIPES, dtype=np.float32)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def _pipes_ahead(state: RunState, actor_left: float):
    """Pipes whose right edge has not yet cleared the actor, nearest first."""
    ahead = [ob for ob in state.obstacles if ob.right >= actor_left]
    ahead.sort(key=lambda ob: ob.x)
    return ahead[:LOOKAHEAD_PIPES]


def build_observation(state: RunState, viewport: Viewport,
                      tuning: Tuning = DEFAULT_TUNING) -> np.ndarray:
    """
    Returns a fixed (9,) float32 vector:
      [ y_norm, vy_norm, difficulty_norm,
        dx1, gap_top1, gap_bottom1,
        dx2, gap_top2, gap_bottom2 ]
    - y_norm          in [0,1]  (top edge over the playable height)
    - vy_norm         in [-1,1]
    - difficulty_norm in [0,1]  (0 = base speed, 1 = capped)
    - dx              in [-1,1] (pipe left edge minus actor left edge, over viewport width)
    - gap_top/bottom  in [0,1]  (screen space)
    """
    h = float(viewport.height)
    w = float(viewport.width)
    actor = state.actor

    y_norm = _clamp(actor.y / max(1.0, h - tuning.actor_size), 0.0, 1.0)
    vy_norm = _clamp(actor.vy / VY_NORM, -1.0, 1.0)
    span = max(1e-6, tuning.difficulty_cap - 1.0)
    diff_norm = _clamp((difficulty_multiplier(state.score, tuning) - 1.0) / span, 0.0, 1.0)

    feats: List[float] = [y_norm, vy_norm, diff_norm]

    actor_left = actor.left(w, tuning)
    pipes = _pipes_ahead(state, actor_left)
    for i in range(LOOKAHEAD_PIPES):
        if i < len(pipes):
            ob = pipes[i]
            feats.extend([
                _clamp((ob.x - actor_left) / w, -1.0, 1.0),
                _clamp(ob.top_height / h, 0.0, 1.0),
                _clamp(ob.bottom_y / h, 0.0, 1.0),
            ])
        else:
            feats.extend(NO_PIPE)

    return np.asarray(feats, dtype=np.float32)


def gap_center_error(obs: np.ndarray, actor_size_norm: float) -> float:
    """Signed distance from the actor's centre to the next gap's centre (screen-normalized)."""
    gap_top, gap_bot = float(obs[4]), float(obs[5])
    actor_center = float(obs[0]) * (1.0 - actor_size_norm) + actor_size_norm / 2
    return actor_center - (gap_top + gap_bot) / 2
