"""Stage geometry: bounding boxes and where the runner stands.

Stage coordinates: x grows right, y grows down, origin at the stage's
top-left corner. Heights above the ground are converted here.
"""

from __future__ import annotations

from dataclasses import dataclass

from dinorun.game.constants import (
    STAGE_WIDTH, STAGE_HEIGHT, GROUND_OFFSET,
    RUNNER_X, RUNNER_WIDTH, RUNNER_HEIGHT, RUNNER_CROUCH_HEIGHT,
)


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box (``top`` < ``bottom``)."""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> Box:
        return cls(left=x, top=y, right=x + width, bottom=y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class StageLayout:
    """Fixed placement of the stage and the runner sprite."""
    width: int = STAGE_WIDTH
    height: int = STAGE_HEIGHT
    ground_offset: int = GROUND_OFFSET
    runner_x: int = RUNNER_X
    runner_width: int = RUNNER_WIDTH
    runner_height: int = RUNNER_HEIGHT
    runner_crouch_height: int = RUNNER_CROUCH_HEIGHT

    @property
    def ground_y(self) -> float:
        """Stage y of the runner's feet when standing on the ground."""
        return self.height - self.ground_offset

    def runner_box(self, jump_height: float = 0.0, crouching: bool = False) -> Box:
        sprite_height = self.runner_crouch_height if crouching else self.runner_height
        bottom = self.ground_y - jump_height
        return Box(
            left=self.runner_x,
            top=bottom - sprite_height,
            right=self.runner_x + self.runner_width,
            bottom=bottom,
        )
