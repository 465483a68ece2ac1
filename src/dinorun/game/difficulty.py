"""Difficulty ramp: the obstacle traversal period shrinks while a run lasts."""

from typing import Protocol

from dinorun.game.constants import SPEED_INITIAL, SPEED_MIN, SPEED_STEP


class SpeedState(Protocol):
    speed_ms: float


class DifficultyController:
    """Linear decrease of ``speed_ms`` (period of one obstacle pass) down to a floor."""

    def __init__(
        self,
        speed_initial: float = SPEED_INITIAL,
        speed_min: float = SPEED_MIN,
        speed_step: float = SPEED_STEP,
    ):
        if speed_min > speed_initial:
            raise ValueError("speed_min must not exceed speed_initial")
        self.speed_initial = speed_initial
        self.speed_min = speed_min
        self.speed_step = speed_step

    def reset(self, state: SpeedState) -> None:
        state.speed_ms = self.speed_initial

    def update(self, state: SpeedState, delta_ms: float) -> None:
        if state.speed_ms <= self.speed_min:
            return
        decrement = (max(0.0, delta_ms) / 1000.0) * self.speed_step
        state.speed_ms = max(self.speed_min, state.speed_ms - decrement)
