"""rario/env.py — Gymnasium environment over one stage.

One env step is one game frame. The action space is the six key combinations
in rario.controls. An episode ends when the player falls out of the world and
is truncated after max_steps frames.
"""

from __future__ import annotations

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from rario.config import GameConfig
from rario.constants import DEFAULT_STAGE
from rario.controls import NUM_ACTIONS, action_input
from rario.observation import OBS_DIM, extract_observation
from rario.simulation import (
    BounceEvent,
    Event,
    FellOffWorldEvent,
    SimState,
    create_sim,
    sim_step,
)

# Reward per fraction of the stage newly reached
PROGRESS_WEIGHT = 10.0
BOUNCE_BONUS = 0.1
FALL_PENALTY = 5.0
FRAME_COST = 0.001


def step_reward(sim: SimState, events: list[Event], prev_max_x: float) -> float:
    """New ground covered this frame, plus a bonus per bounce, minus costs."""
    reward = PROGRESS_WEIGHT * (sim.max_x_reached - prev_max_x) / sim.level_width
    for event in events:
        if isinstance(event, BounceEvent):
            reward += BOUNCE_BONUS
        elif isinstance(event, FellOffWorldEvent):
            reward -= FALL_PENALTY
    return reward - FRAME_COST


class RarioEnv(gym.Env):
    metadata = {"render_modes": [], "render_fps": 60}

    def __init__(
        self,
        stage: str = DEFAULT_STAGE,
        max_steps: int = 3600,
        config: GameConfig | None = None,
    ) -> None:
        super().__init__()
        self.stage = stage
        self.max_steps = max_steps
        self.config = config

        self.observation_space = spaces.Box(-np.inf, np.inf, shape=(OBS_DIM,), dtype=np.float32)
        self.action_space = spaces.Discrete(NUM_ACTIONS)
        self.sim: SimState | None = None

    def reset(self, *, seed: int | None = None, options: dict | None = None):
        super().reset(seed=seed)
        self.sim = create_sim(self.stage, self.config)
        return extract_observation(self.sim), self._info([])

    def step(self, action):
        if self.sim is None:
            raise RuntimeError("step() called before reset()")
        sim = self.sim
        prev_max_x = sim.max_x_reached
        events = sim_step(sim, action_input(int(action)))

        reward = step_reward(sim, events, prev_max_x)
        terminated = sim.player_lost
        truncated = not terminated and sim.frame >= self.max_steps
        return extract_observation(sim), reward, terminated, truncated, self._info(events)

    def _info(self, events: list[Event]) -> dict:
        sim = self.sim
        return {
            "frame": sim.frame,
            "world_x": sim.player_world_x,
            "x_back": sim.camera.x_back,
            "max_x": sim.max_x_reached,
            "jumps": sim.jumps,
            "bounced": any(isinstance(e, BounceEvent) for e in events),
            "lost": sim.player_lost,
        }
