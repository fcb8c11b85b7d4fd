# flappybot/tests/test_observations.py
import numpy as np

from flappybot.env.observations import (
    build_observation, gap_center_error, OBS_LOW, OBS_HIGH, OBS_SIZE, NO_PIPE
)
from flappybot.game.actor import Actor
from flappybot.game.config import ACTOR_SIZE
from flappybot.game.engine import Phase, RunState, Viewport, initial_state, restart
from flappybot.game.obstacles import Obstacle

VP = Viewport(1200.0, 800.0)


def _in_bounds(obs: np.ndarray) -> bool:
    return bool(np.all(obs >= OBS_LOW) and np.all(obs <= OBS_HIGH))


def test_shape_dtype_and_placeholder():
    obs = build_observation(initial_state(VP), VP)
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert _in_bounds(obs)
    # placeholder pipe at x=400, gap [300, 500]
    assert np.isclose(obs[3], (400.0 - 120.0) / 1200.0)
    assert np.isclose(obs[4], 300.0 / 800.0)
    assert np.isclose(obs[5], 500.0 / 800.0)
    assert tuple(obs[6:9]) == NO_PIPE


def test_no_pipes_uses_sentinels():
    obs = build_observation(restart(VP), VP)
    assert tuple(obs[3:6]) == NO_PIPE and tuple(obs[6:9]) == NO_PIPE
    assert obs[2] == 0.0


def test_passed_pipes_are_ignored_and_order_is_nearest_first():
    behind = Obstacle(x=0.0, top_height=100, bottom_y=300, passed=True)
    far = Obstacle(x=900.0, top_height=200, bottom_y=400)
    near = Obstacle(x=500.0, top_height=300, bottom_y=500)
    s = RunState(actor=Actor(y=400.0, vy=-50.0), obstacles=(behind, near, far),
                 score=1000, phase=Phase.RUNNING)
    obs = build_observation(s, VP)
    assert _in_bounds(obs)
    assert obs[1] == -1.0          # clipped
    assert obs[2] == 1.0           # difficulty capped
    assert np.isclose(obs[3], (500.0 - 120.0) / 1200.0)
    assert np.isclose(obs[6], (900.0 - 120.0) / 1200.0)


def test_gap_center_error_sign():
    s = RunState(actor=Actor(y=600.0), obstacles=(Obstacle(x=500.0, top_height=300, bottom_y=500),),
                 phase=Phase.RUNNING)
    obs = build_observation(s, VP)
    assert gap_center_error(obs, ACTOR_SIZE / 800.0) > 0   # below the gap centre
    s = RunState(actor=Actor(y=100.0), obstacles=s.obstacles, phase=Phase.RUNNING)
    obs = build_observation(s, VP)
    assert gap_center_error(obs, ACTOR_SIZE / 800.0) < 0


if __name__ == "__main__":
    test_shape_dtype_and_placeholder()
    test_no_pipes_uses_sentinels()
    test_passed_pipes_are_ignored_and_order_is_nearest_first()
    test_gap_center_error_sign()
    print("✓ observation sanity passed")
