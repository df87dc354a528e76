"""Tests for rario/env.py — RarioEnv Gymnasium environment."""

from __future__ import annotations

import gymnasium as gym
import numpy as np
import pytest

from rario.controls import NUM_ACTIONS, Action
from rario.env import (
    BOUNCE_BONUS,
    FALL_PENALTY,
    FRAME_COST,
    RarioEnv,
    step_reward,
)
from rario.observation import OBS_DIM
from rario.simulation import BounceEvent, FellOffWorldEvent, create_sim, create_sim_from_tiles
from tests.grids import build_gap


# ---------------------------------------------------------------------------
# Spaces
# ---------------------------------------------------------------------------

def test_spaces():
    env = RarioEnv()
    assert env.observation_space.shape == (OBS_DIM,)
    assert env.observation_space.dtype == np.float32
    assert env.action_space.n == NUM_ACTIONS


# ---------------------------------------------------------------------------
# Reset / step
# ---------------------------------------------------------------------------

def test_step_before_reset():
    with pytest.raises(RuntimeError):
        RarioEnv().step(Action.RIGHT)


def test_reset():
    env = RarioEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == (OBS_DIM,)
    assert obs.dtype == np.float32
    assert info == {
        "frame": 0, "world_x": 0.0, "x_back": 0.0, "max_x": 0.0,
        "jumps": 0, "bounced": False, "lost": False,
    }


def test_step_returns_five_tuple():
    env = RarioEnv()
    env.reset()
    obs, reward, terminated, truncated, info = env.step(Action.RIGHT)
    assert obs.shape == (OBS_DIM,)
    assert isinstance(reward, float)
    assert terminated is False
    assert truncated is False
    assert info["frame"] == 1


def test_running_right_earns_reward():
    env = RarioEnv()
    env.reset()
    total = sum(env.step(Action.RIGHT)[1] for _ in range(120))
    assert total > 0.0


def test_standing_still_costs_a_frame():
    env = RarioEnv()
    env.reset()
    assert env.step(Action.IDLE)[1] == pytest.approx(-FRAME_COST)


def test_jump_is_counted():
    env = RarioEnv()
    env.reset()
    info = env.step(Action.JUMP)[4]
    assert info["jumps"] == 1


def test_truncation():
    env = RarioEnv(max_steps=5)
    env.reset()
    for _ in range(4):
        assert env.step(Action.IDLE)[3] is False
    assert env.step(Action.IDLE)[3] is True


def test_fall_terminates():
    env = RarioEnv()
    env.reset()
    env.sim = create_sim_from_tiles(build_gap(2, gap_width=2), 36, 184)
    terminated = False
    reward = 0.0
    for _ in range(120):
        _, reward, terminated, truncated, info = env.step(Action.IDLE)
        if terminated:
            break
    assert terminated
    assert truncated is False
    assert info["lost"] is True
    assert reward == pytest.approx(-FALL_PENALTY - FRAME_COST)


def test_reset_restarts_stage():
    env = RarioEnv()
    env.reset()
    for _ in range(30):
        env.step(Action.RIGHT)
    _, info = env.reset()
    assert info["frame"] == 0
    assert info["world_x"] == 0.0


# ---------------------------------------------------------------------------
# Reward
# ---------------------------------------------------------------------------

def test_bounce_bonus():
    sim = create_sim()
    reward = step_reward(sim, [BounceEvent(enemy_index=0)], sim.max_x_reached)
    assert reward == pytest.approx(BOUNCE_BONUS - FRAME_COST)


def test_fall_penalty():
    sim = create_sim()
    reward = step_reward(sim, [FellOffWorldEvent()], sim.max_x_reached)
    assert reward == pytest.approx(-FALL_PENALTY - FRAME_COST)


def test_progress_scaled_by_stage_width():
    sim = create_sim()
    sim.max_x_reached = sim.level_width / 10
    assert step_reward(sim, [], 0.0) == pytest.approx(1.0 - FRAME_COST)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def test_registered_env():
    import rario.env_registration  # noqa: F401

    env = gym.make("rario/World1-1-v0")
    obs, _ = env.reset(seed=1)
    assert obs.shape == (OBS_DIM,)
    env.close()
