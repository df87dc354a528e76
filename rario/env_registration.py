"""rario/env_registration.py — Register Rario envs with Gymnasium.

Import this module to register all environments::

    import rario.env_registration
    env = gymnasium.make("rario/World1-1-v0")
"""

import gymnasium as gym

gym.register(
    id="rario/World1-1-v0",
    entry_point="rario.env:RarioEnv",
    kwargs={"stage": "world1-1", "max_steps": 3600},
    max_episode_steps=3600,
)
