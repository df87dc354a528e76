"""Tests for rario/observation.py — observation vector layout."""

from __future__ import annotations

import numpy as np
import pytest

from rario.actors import create_enemy
from rario.observation import (
    OBS_DIM,
    OBS_ENEMY_DX,
    OBS_ENEMY_DY,
    OBS_GROUNDED,
    OBS_PROGRESS,
    OBS_SCROLL,
    OBS_TIME,
    OBS_VX,
    OBS_VY,
    OBS_X,
    OBS_Y,
    extract_observation,
)
from rario.physics import InputState
from rario.simulation import create_sim, create_sim_from_tiles, sim_step
from tests.grids import build_flat


def test_shape_and_dtype():
    obs = extract_observation(create_sim())
    assert obs.shape == (OBS_DIM,)
    assert obs.dtype == np.float32


def test_initial_world1_1():
    obs = extract_observation(create_sim("world1-1"))
    assert obs[OBS_X] == 0.0
    assert obs[OBS_Y] == pytest.approx(184 / 224)
    assert obs[OBS_VX] == 0.0
    assert obs[OBS_VY] == 0.0
    assert obs[OBS_GROUNDED] == 1.0
    assert obs[OBS_SCROLL] == 0.0
    assert obs[OBS_ENEMY_DX] == pytest.approx(528 / 254)
    assert obs[OBS_ENEMY_DY] == 0.0
    assert obs[OBS_PROGRESS] == 0.0
    assert obs[OBS_TIME] == 0.0


def test_no_enemies():
    obs = extract_observation(create_sim_from_tiles(build_flat(), 32, 184))
    assert obs[OBS_ENEMY_DX] == 0.0
    assert obs[OBS_ENEMY_DY] == 0.0


def test_nearest_enemy_chosen():
    enemies = [create_enemy(x=200), create_enemy(x=10, y=168)]
    sim = create_sim_from_tiles(build_flat(), 32, 184, enemies=enemies)
    obs = extract_observation(sim)
    assert obs[OBS_ENEMY_DX] == pytest.approx(-22 / 254)
    assert obs[OBS_ENEMY_DY] == pytest.approx(-16 / 224)


def test_values_after_running():
    sim = create_sim_from_tiles(build_flat(), 0, 184)
    for _ in range(200):
        sim_step(sim, InputState(right=True))
    obs = extract_observation(sim)
    assert obs[OBS_VX] == pytest.approx(1.0)
    assert obs[OBS_SCROLL] > 0.0
    assert obs[OBS_PROGRESS] == pytest.approx(sim.max_x_reached / 3392)
    assert obs[OBS_TIME] == pytest.approx(200 / 3600)


def test_airborne_flag():
    sim = create_sim_from_tiles(build_flat(), 32, 184)
    sim_step(sim, InputState(up=True))
    sim_step(sim, InputState())
    obs = extract_observation(sim)
    assert obs[OBS_GROUNDED] == 0.0
    assert obs[OBS_VY] < 0.0
