"""Game session: builds and wires one playable game from settings."""

import logging
import random
from typing import Optional

from dinorun.audio.engine import AudioEngine
from dinorun.core.events import EventBus
from dinorun.core.scheduler import FrameScheduler
from dinorun.game.animation import ObstacleAnimator
from dinorun.game.collision import CollisionDetector
from dinorun.game.controller import GameController, GameView
from dinorun.game.difficulty import DifficultyController
from dinorun.game.layout import StageLayout
from dinorun.game.obstacle import ObstacleManager
from dinorun.game.physics import RunnerPhysics
from dinorun.game.scoreboard import JsonFileStore, KeyValueStore, Scoreboard
from dinorun.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class GameSession:
    """Everything one game needs, sharing a scheduler and an event bus.

    The host pumps the session with monotonic millisecond timestamps once
    per frame and forwards input to ``controller``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[KeyValueStore] = None,
        audio: Optional[AudioEngine] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_settings()
        s = self.settings

        self.event_bus = EventBus()
        self.scheduler = FrameScheduler()

        self.layout = StageLayout(
            width=s.stage.width,
            height=s.stage.height,
            ground_offset=s.stage.ground_offset,
            runner_x=s.stage.runner_x,
            runner_width=s.stage.runner_width,
            runner_height=s.stage.runner_height,
            runner_crouch_height=s.stage.runner_crouch_height,
        )

        self.scoreboard = Scoreboard(
            storage=store if store is not None else JsonFileStore(s.high_score_path),
            key=s.high_score_key,
        )
        self.obstacles = ObstacleManager(
            stage_width=s.stage.width,
            stage_height=s.stage.height,
            rng=rng,
            aerial_base_chance=s.obstacles.aerial_base_chance,
            aerial_max_chance=s.obstacles.aerial_max_chance,
            ramp_score=s.obstacles.ramp_score,
            score_source=lambda: self.scoreboard.score,
            event_bus=self.event_bus,
        )

        self.controller = GameController(
            scoreboard=self.scoreboard,
            obstacles=self.obstacles,
            physics=RunnerPhysics(
                jump_velocity=s.physics.jump_velocity,
                gravity=s.physics.gravity,
            ),
            difficulty=DifficultyController(
                speed_initial=s.difficulty.speed_initial_ms,
                speed_min=s.difficulty.speed_min_ms,
                speed_step=s.difficulty.speed_step,
            ),
            collisions=CollisionDetector(
                runner_right_inset=s.collision.runner_right_inset,
                runner_left_inset=s.collision.runner_left_inset,
                ground_padding=(s.collision.ground_top_padding, s.collision.ground_bottom_padding),
                aerial_padding=(s.collision.aerial_top_padding, s.collision.aerial_bottom_padding),
                duck_clearance=s.collision.duck_clearance,
            ),
            layout=self.layout,
            scheduler=self.scheduler,
            event_bus=self.event_bus,
            hit_flash_ms=s.hit_flash_ms,
            max_physics_delta_ms=s.physics.max_physics_delta_ms,
        )

        # Subscribed before the controller's tick, so the track moves first each frame
        self.animator = ObstacleAnimator(self.obstacles, self.controller, self.scheduler)

        self.audio = audio
        if self.audio is not None:
            self.audio.attach(self.event_bus)

        self.controller.initialize()
        logger.info("Game session ready")

    def pump(self, timestamp: float) -> None:
        """Deliver one frame at ``timestamp`` milliseconds."""
        self.scheduler.pump(timestamp)

    def view(self) -> GameView:
        return self.controller.view()

    def close(self) -> None:
        self.animator.detach()
        if self.audio is not None:
            self.audio.detach()
