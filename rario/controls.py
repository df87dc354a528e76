"""rario/controls.py — Discrete actions over the three game keys.

The game reads only Left, Right and Up, so an action is a combination of
one horizontal direction (or none) and whether Up is held. Holding Up on a
grounded frame jumps; nothing else needs edge detection.
"""

from __future__ import annotations

from enum import IntEnum

from rario.physics import InputState


class Action(IntEnum):
    IDLE = 0
    LEFT = 1
    RIGHT = 2
    JUMP = 3
    LEFT_JUMP = 4
    RIGHT_JUMP = 5

    @property
    def direction(self) -> int:
        """-1, 0 or +1, the value handed to Actor.move_dir."""
        if self in (Action.LEFT, Action.LEFT_JUMP):
            return -1
        if self in (Action.RIGHT, Action.RIGHT_JUMP):
            return 1
        return 0

    @property
    def jumps(self) -> bool:
        return self in (Action.JUMP, Action.LEFT_JUMP, Action.RIGHT_JUMP)


NUM_ACTIONS = len(Action)


def action_input(action: int) -> InputState:
    """Build the key snapshot an action stands for.

    Raises:
        ValueError: If action is not one of the Action values.
    """
    act = Action(action)
    return InputState(
        left=act.direction < 0,
        right=act.direction > 0,
        up=act.jumps,
    )
