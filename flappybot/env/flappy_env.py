# flappybot/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flappybot.game.config import WIDTH, HEIGHT, REFERENCE_REFRESH_HZ, Tuning, DEFAULT_TUNING
from flappybot.game.engine import SimulationEngine, Phase
from flappybot.game.render import draw_world
from flappybot.env.observations import build_observation, OBS_LOW, OBS_HIGH

SCORE_BONUS = 5.0


class FlappyEnv(gym.Env):
    """
    Flappy Bot Gymnasium environment (vector observations).
    - Simulation at the reference refresh rate (60 Hz) on a synthetic clock,
      so spawn timing is reproducible.
    - Agent acts every `frame_skip` frames (default 2) -> 30 decisions/sec.
    - Observation: shape (9,), float32 (see build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0,
                 width: int = WIDTH,
                 height: int = HEIGHT,
                 tuning: Tuning = DEFAULT_TUNING):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.width = width
        self.height = height
        self.tuning = tuning

        self.sim_fps = REFERENCE_REFRESH_HZ
        self.ms_per_tick = 1000.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.engine: Optional[SimulationEngine] = None
        self.ticks: int = 0
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Spawn seed comes from the env RNG so reset() without a seed stays reproducible
        spawn_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.engine = SimulationEngine(self.width, self.height, seed=spawn_seed, tuning=self.tuning)
        self.engine.flap(self.sim_fps)  # opening flap starts the run

        self.ticks = 0
        self.timestep = 0
        self.current_seed = spawn_seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.engine is not None, "call reset() before step()"

        if int(action) == 1:
            self.engine.flap(self.sim_fps)

        score_before = self.engine.state.score
        for _ in range(self.frame_skip):
            self.ticks += 1
            self.engine.update(self.ticks * self.ms_per_tick, self.sim_fps)
            if self.engine.phase is Phase.OVER:
                break

        state = self.engine.state
        terminated = state.over
        if terminated:
            reward = -1.0
        else:
            reward = 1.0 + SCORE_BONUS * (state.score - score_before)

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": state.score,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "end_cause": state.end_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.engine is not None
        return build_observation(self.engine.state, self.engine.viewport, self.tuning)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.engine is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((self.width, self.height))
                pygame.display.set_caption("Flappy Bot — Gym Env")
            else:
                self.screen = pygame.Surface((self.width, self.height))
            self.clock = pygame.time.Clock()

        draw_world(self.screen, self.engine.state, self.engine.viewport, self.tuning)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
