"""Stage animation driver for the obstacle track.

Moves the live obstacle across the stage once per traversal period and
reports animation iterations to the manager, the way a looping CSS
animation would: the sprite's own wing-flap loop reports iterations too,
and only the track's "move-obstacle" iteration means a cycle finished.
"""

import logging
from typing import Callable, List, Optional

from dinorun.core.scheduler import FrameScheduler
from dinorun.game.controller import GameController
from dinorun.game.obstacle import ObstacleManager, ObstacleVariant

logger = logging.getLogger(__name__)

IterationListener = Callable[[str], None]


class ObstacleAnimator:
    """Frame-driven obstacle track animation.

    Runs whenever the stage is not paused, independently of the
    controller's own tick subscription. The period is read from the
    controller every frame, so the difficulty ramp speeds it up live.
    """

    FLAP_ANIMATION = "flap"
    FLAP_PERIOD_MS = 240.0

    def __init__(
        self,
        obstacles: ObstacleManager,
        controller: GameController,
        scheduler: Optional[FrameScheduler] = None,
        stage_left: float = 0.0,
    ):
        self.obstacles = obstacles
        self.controller = controller
        self.stage_left = stage_left

        self._last_timestamp: Optional[float] = None
        self._flap_elapsed = 0.0
        self._listeners: List[IterationListener] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

        if scheduler is not None:
            self.attach(scheduler)

    def attach(self, scheduler: FrameScheduler) -> None:
        if self._unsubscribe is not None:
            return
        self._unsubscribe = scheduler.subscribe(self.on_frame)
        logger.debug("Obstacle animator attached")

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            logger.debug("Obstacle animator detached")

    def add_listener(self, listener: IterationListener) -> None:
        """Observe every iteration name delivered to the manager."""
        self._listeners.append(listener)

    @property
    def running(self) -> bool:
        return not self.controller.state.paused

    def on_frame(self, timestamp: float) -> None:
        if not self.running:
            # Paused animations resume where they stopped
            self._last_timestamp = None
            return

        if self._last_timestamp is None:
            self._last_timestamp = timestamp
            return

        delta = timestamp - self._last_timestamp
        self._last_timestamp = timestamp
        if delta <= 0:
            return

        self._advance_flap(delta)

        if self.obstacles.advance(delta, self.controller.state.speed_ms):
            self._iterate(ObstacleManager.MOVE_ANIMATION)
            self.obstacles.begin_cycle()

    def _advance_flap(self, delta: float) -> None:
        if self.obstacles.variant is not ObstacleVariant.AERIAL:
            self._flap_elapsed = 0.0
            return
        self._flap_elapsed += delta
        while self._flap_elapsed >= self.FLAP_PERIOD_MS:
            self._flap_elapsed -= self.FLAP_PERIOD_MS
            self._iterate(self.FLAP_ANIMATION)

    def _iterate(self, name: str) -> None:
        self.obstacles.handle_animation_iteration(name, self.stage_left)
        for listener in self._listeners:
            try:
                listener(name)
            except Exception as e:
                logger.error(f"Animation listener error: {e}")
