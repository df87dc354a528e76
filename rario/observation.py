"""rario/observation.py — Observation extraction from SimState.

Produces a flat float32 numpy vector for agent consumption.
"""

from __future__ import annotations

import numpy as np

from rario.simulation import SimState

OBS_DIM = 10

OBS_X = 0
OBS_Y = 1
OBS_VX = 2
OBS_VY = 3
OBS_GROUNDED = 4
OBS_SCROLL = 5
OBS_ENEMY_DX = 6
OBS_ENEMY_DY = 7
OBS_PROGRESS = 8
OBS_TIME = 9

TIME_SCALE = 3600.0


def extract_observation(sim: SimState) -> np.ndarray:
    """Extract an observation vector from the current simulation state.

    Layout:
        [0] world x (normalized by level_width)
        [1] y (normalized by level_height)
        [2] x velocity (normalized by max_x_speed)
        [3] y velocity (normalized by |jump_velocity|)
        [4] grounded flag (0.0 or 1.0)
        [5] scroll offset (normalized by max scroll)
        [6] nearest enemy dx (normalized by screen width, 0 if none)
        [7] nearest enemy dy (normalized by screen height, 0 if none)
        [8] max progress (max_x_reached / level_width)
        [9] time fraction (frame / 3600)
    """
    cfg = sim.config
    p = sim.player
    obs = np.zeros(OBS_DIM, dtype=np.float32)

    obs[OBS_X] = sim.player_world_x / sim.level_width
    obs[OBS_Y] = p.y / sim.level_height
    obs[OBS_VX] = p.vx / cfg.max_x_speed
    obs[OBS_VY] = p.vy / abs(cfg.jump_velocity)
    obs[OBS_GROUNDED] = float(sim.player_grounded)
    if sim.camera.max_scroll > 0:
        obs[OBS_SCROLL] = sim.camera.x_back / sim.camera.max_scroll

    if sim.enemies:
        nearest = min(sim.enemies, key=lambda e: abs(e.x - p.x))
        obs[OBS_ENEMY_DX] = (nearest.x - p.x) / cfg.screen_width
        obs[OBS_ENEMY_DY] = (nearest.y - p.y) / cfg.screen_height

    obs[OBS_PROGRESS] = sim.max_x_reached / sim.level_width
    obs[OBS_TIME] = float(sim.frame) / TIME_SCALE

    return obs
