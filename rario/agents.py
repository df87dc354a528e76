"""rario/agents.py — Programmed players for headless runs.

An agent looks at the observation vector and picks an Action each frame.
Three are enough to exercise world1-1: standing still (grounding and
friction), running right (scrolling, pipes stop it) and running right with a
jump whenever a pipe or step stalls it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from rario.controls import Action
from rario.observation import OBS_GROUNDED, OBS_VX


@runtime_checkable
class Agent(Protocol):
    def act(self, obs: np.ndarray) -> int: ...

    def reset(self) -> None: ...


class StandStill:
    def act(self, obs: np.ndarray) -> int:
        return Action.IDLE

    def reset(self) -> None:
        pass


class RunRight:
    def act(self, obs: np.ndarray) -> int:
        return Action.RIGHT

    def reset(self) -> None:
        pass


class JumpRunner:
    """Runs right; jumps after `stall_frames` grounded frames below `stall_speed`.

    A pipe zeroes vx on every contact, so the counter fills while blocked.
    The start-up acceleration crosses half speed after 25 frames, before the
    default counter of 30 runs out.
    """

    def __init__(self, stall_speed: float = 0.5, stall_frames: int = 30) -> None:
        self.stall_speed = stall_speed
        self.stall_frames = stall_frames
        self._slow_frames = 0

    def act(self, obs: np.ndarray) -> int:
        grounded = obs[OBS_GROUNDED] > 0.5
        self._slow_frames = self._slow_frames + 1 if (
            grounded and obs[OBS_VX] < self.stall_speed
        ) else 0

        if self._slow_frames < self.stall_frames:
            return Action.RIGHT
        self._slow_frames = 0
        return Action.RIGHT_JUMP

    def reset(self) -> None:
        self._slow_frames = 0


AGENTS: dict[str, type] = {
    "stand_still": StandStill,
    "run_right": RunRight,
    "jump_runner": JumpRunner,
}


def make_agent(name: str, params: dict | None = None) -> Agent:
    """Instantiate the agent called `name`, passing params as keyword arguments.

    Raises:
        KeyError: If no agent has that name.
    """
    try:
        cls = AGENTS[name]
    except KeyError:
        raise KeyError(f"No agent named {name!r}; choose from {sorted(AGENTS)}") from None
    return cls(**(params or {}))
