"""Vertical motion of the runner: jump arcs under constant gravity."""

from typing import Protocol

from dinorun.game.constants import JUMP_VELOCITY, GRAVITY


class JumpState(Protocol):
    is_jumping: bool
    is_crouching: bool
    jump_height: float
    jump_velocity: float


class RunnerPhysics:
    """Integrates jump height and velocity on a game state.

    Height is measured up from the ground and never goes negative. The
    runner is at rest exactly when height and velocity are both zero.
    """

    def __init__(self, jump_velocity: float = JUMP_VELOCITY, gravity: float = GRAVITY):
        self.jump_velocity = jump_velocity
        self.gravity = gravity

    @staticmethod
    def is_airborne(state: JumpState) -> bool:
        return state.is_jumping or state.jump_height > 0

    @staticmethod
    def visual_offset(state: JumpState) -> float:
        """Vertical sprite offset (negative is up)."""
        return -state.jump_height

    def launch(self, state: JumpState) -> None:
        """Apply the jump impulse from the ground. Cancels a crouch."""
        state.is_crouching = False
        state.is_jumping = True
        state.jump_height = 0.0
        state.jump_velocity = self.jump_velocity

    def step(self, state: JumpState, delta_ms: float) -> bool:
        """Advance the arc by delta_ms. Returns True on the landing step."""
        if not self.is_airborne(state):
            return False

        dt = delta_ms / 1000.0
        state.jump_velocity -= self.gravity * dt
        state.jump_height = max(0.0, state.jump_height + state.jump_velocity * dt)

        if state.jump_height == 0.0:
            state.jump_velocity = 0.0
            state.is_jumping = False
            return True
        return False

    def reset(self, state: JumpState) -> None:
        """Put the runner back on the ground at rest."""
        state.jump_height = 0.0
        state.jump_velocity = 0.0
        state.is_jumping = False
