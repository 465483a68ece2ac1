"""Obstacle variants and the manager of the single live obstacle."""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from dinorun.core.events import Event, EventBus, EventType
from dinorun.game.layout import Box
from dinorun.game.constants import (
    AERIAL_BASE_CHANCE, AERIAL_MAX_CHANCE, AERIAL_RAMP_SCORE,
    STAGE_WIDTH, STAGE_HEIGHT,
)

logger = logging.getLogger(__name__)


class ObstacleVariant(Enum):
    """Obstacle categories."""
    GROUND = "cactus"
    AERIAL = "bird"


@dataclass(frozen=True)
class VariantSpec:
    """Fixed geometry of a variant plus its vertical offset range (inclusive)."""
    width: int
    height: int
    offset_range: Tuple[int, int]
    label: str


VARIANTS: Dict[ObstacleVariant, VariantSpec] = {
    ObstacleVariant.GROUND: VariantSpec(width=32, height=50, offset_range=(40, 40), label="Cactus"),
    ObstacleVariant.AERIAL: VariantSpec(width=48, height=32, offset_range=(110, 150), label="Pterodactyl"),
}


@dataclass(frozen=True)
class Obstacle:
    """One obstacle. Replaced, never mutated, when a new variant is picked."""
    variant: ObstacleVariant
    width: int
    height: int
    ground_offset: int  # bottom edge, measured up from the stage bottom

    @property
    def label(self) -> str:
        return VARIANTS[self.variant].label


def aerial_probability(
    score: float,
    base: float = AERIAL_BASE_CHANCE,
    maximum: float = AERIAL_MAX_CHANCE,
    ramp_score: int = AERIAL_RAMP_SCORE,
) -> float:
    """Chance of an aerial obstacle, ramping linearly from base to maximum over ramp_score points."""
    normalized = min(math.floor(max(0.0, score)) / ramp_score, 1.0)
    return base + normalized * (maximum - base)


class ObstacleManager:
    """Owns the live obstacle's variant, geometry and track position.

    The obstacle travels from the stage's right edge until it has fully
    left past the left edge; one such pass is a cycle lasting the current
    traversal period. A new variant is chosen when a cycle completes, but
    only if the obstacle really is off stage, so stray iteration signals
    (nested sprite animations, early notifications) cannot skip variants.
    """

    MOVE_ANIMATION = "move-obstacle"

    def __init__(
        self,
        stage_width: int = STAGE_WIDTH,
        stage_height: int = STAGE_HEIGHT,
        rng: Optional[random.Random] = None,
        aerial_base_chance: float = AERIAL_BASE_CHANCE,
        aerial_max_chance: float = AERIAL_MAX_CHANCE,
        ramp_score: int = AERIAL_RAMP_SCORE,
        score_source: Optional[Callable[[], float]] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.stage_width = stage_width
        self.stage_height = stage_height
        self.rng = rng or random.Random()
        self.aerial_base_chance = aerial_base_chance
        self.aerial_max_chance = aerial_max_chance
        self.ramp_score = ramp_score
        self._score_source = score_source or (lambda: 0.0)
        self._event_bus = event_bus

        self._obstacle = self._build(ObstacleVariant.GROUND)
        self._progress = 0.0
        self._overflow = 0.0

    @property
    def obstacle(self) -> Obstacle:
        return self._obstacle

    @property
    def variant(self) -> ObstacleVariant:
        return self._obstacle.variant

    @property
    def x(self) -> float:
        """Left edge of the obstacle in stage coordinates."""
        return self.stage_width - self._progress * (self.stage_width + self._obstacle.width)

    @property
    def progress(self) -> float:
        """Fraction of the current cycle already travelled."""
        return self._progress

    def bounding_box(self) -> Box:
        o = self._obstacle
        bottom = self.stage_height - o.ground_offset
        return Box(left=self.x, top=bottom - o.height, right=self.x + o.width, bottom=bottom)

    def choose_variant(self, score: float) -> ObstacleVariant:
        chance = aerial_probability(
            score, self.aerial_base_chance, self.aerial_max_chance, self.ramp_score
        )
        return ObstacleVariant.AERIAL if self.rng.random() < chance else ObstacleVariant.GROUND

    def randomize(self, score: float = 0.0) -> Obstacle:
        """Pick a variant for the given score and replace the live obstacle."""
        self._obstacle = self._build(self.choose_variant(score))
        logger.debug(
            f"Obstacle: {self._obstacle.label} {self._obstacle.width}x{self._obstacle.height} "
            f"at {self._obstacle.ground_offset}px"
        )
        if self._event_bus is not None:
            self._event_bus.emit(Event(
                EventType.OBSTACLE_CHANGED,
                data={
                    "variant": self._obstacle.variant.value,
                    "width": self._obstacle.width,
                    "height": self._obstacle.height,
                    "ground_offset": self._obstacle.ground_offset,
                },
                source="obstacles",
            ))
        return self._obstacle

    def reset_animation(self, score: float = 0.0) -> Obstacle:
        """Re-randomize and put the obstacle back at the stage's starting edge."""
        obstacle = self.randomize(score)
        self._progress = 0.0
        self._overflow = 0.0
        return obstacle

    def advance(self, delta_ms: float, period_ms: float) -> bool:
        """Move along the track.

        Returns True when the cycle has been completed; the obstacle then
        stays at the end of the track until ``begin_cycle()``.
        """
        if period_ms <= 0 or delta_ms <= 0:
            return self._progress >= 1.0
        self._progress += delta_ms / period_ms
        if self._progress >= 1.0:
            self._overflow = (self._progress - 1.0) % 1.0
            self._progress = 1.0
            return True
        return False

    def begin_cycle(self) -> None:
        """Restart from the right edge, keeping the time left over from the last cycle."""
        self._progress = self._overflow
        self._overflow = 0.0

    def handle_animation_iteration(self, animation_name: str, stage_left: float = 0.0) -> bool:
        """React to an animation-iteration signal. Returns True if a new obstacle was chosen."""
        # Nested animations on the sprite (wing flaps) report iterations too
        if animation_name != self.MOVE_ANIMATION:
            return False

        if self.bounding_box().right > stage_left:
            logger.debug("Ignoring cycle signal while the obstacle is still on stage")
            return False

        self.randomize(self._score_source())
        return True

    def _build(self, variant: ObstacleVariant) -> Obstacle:
        shape = VARIANTS[variant]
        low, high = shape.offset_range
        offset = low if low == high else self.rng.randint(low, high)
        return Obstacle(variant=variant, width=shape.width, height=shape.height, ground_offset=offset)
