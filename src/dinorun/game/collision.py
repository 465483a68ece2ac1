"""Runner/obstacle overlap test with sprite-padding tolerances.

Boxes are in stage coordinates (y grows down), so a box's ``top`` is
numerically smaller than its ``bottom``.
"""

from enum import Enum, auto
from typing import Tuple

from dinorun.game.constants import (
    RUNNER_RIGHT_INSET, RUNNER_LEFT_INSET,
    GROUND_TOP_PADDING, GROUND_BOTTOM_PADDING,
    AERIAL_PADDING, DUCK_CLEARANCE,
)
from dinorun.game.layout import Box
from dinorun.game.obstacle import ObstacleVariant


class CollisionOutcome(Enum):
    CLEAR = auto()    # no overlap
    DUCKED = auto()   # overlap, but a crouching runner passes under an aerial obstacle
    HIT = auto()

    @property
    def is_hit(self) -> bool:
        return self is CollisionOutcome.HIT


class CollisionDetector:
    """AABB test between the runner and the live obstacle.

    The runner box is shrunk horizontally to ignore the transparent margin
    of its sprite, and the vertical test is padded per variant: the flying
    sprite has a tighter hitbox than the cactus.
    """

    def __init__(
        self,
        runner_right_inset: float = RUNNER_RIGHT_INSET,
        runner_left_inset: float = RUNNER_LEFT_INSET,
        ground_padding: Tuple[float, float] = (GROUND_TOP_PADDING, GROUND_BOTTOM_PADDING),
        aerial_padding: Tuple[float, float] = (AERIAL_PADDING, AERIAL_PADDING),
        duck_clearance: float = DUCK_CLEARANCE,
    ):
        self.runner_right_inset = runner_right_inset
        self.runner_left_inset = runner_left_inset
        self.ground_padding = ground_padding
        self.aerial_padding = aerial_padding
        self.duck_clearance = duck_clearance

    def padding_for(self, variant: ObstacleVariant) -> Tuple[float, float]:
        """(top, bottom) vertical padding for a variant."""
        return self.aerial_padding if variant is ObstacleVariant.AERIAL else self.ground_padding

    def horizontal_overlap(self, runner: Box, obstacle: Box) -> bool:
        return (
            runner.right - self.runner_right_inset > obstacle.left
            and obstacle.right > runner.left + self.runner_left_inset
        )

    def vertical_overlap(self, runner: Box, obstacle: Box, variant: ObstacleVariant) -> bool:
        top_padding, bottom_padding = self.padding_for(variant)
        return (
            runner.bottom - bottom_padding > obstacle.top
            and runner.top + top_padding < obstacle.bottom
        )

    def has_clearance(self, runner: Box, obstacle: Box) -> bool:
        """Whether a crouched runner's top is low enough to pass beneath the obstacle."""
        return runner.top + self.duck_clearance >= obstacle.bottom

    def check(
        self,
        runner: Box,
        obstacle: Box,
        variant: ObstacleVariant,
        crouching: bool,
    ) -> CollisionOutcome:
        if not (self.horizontal_overlap(runner, obstacle)
                and self.vertical_overlap(runner, obstacle, variant)):
            return CollisionOutcome.CLEAR

        if variant is ObstacleVariant.AERIAL and crouching and self.has_clearance(runner, obstacle):
            return CollisionOutcome.DUCKED

        return CollisionOutcome.HIT
