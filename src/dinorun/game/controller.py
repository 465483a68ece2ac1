"""Game controller: the per-tick loop and the Idle/Playing/Ended phase machine.

The controller is driven from outside. A frame scheduler delivers
monotonic timestamps to ``on_tick`` while a run is playing, and input
handling calls the command methods (``start``, ``jump``, ``start_crouch``,
``stop_crouch``, ``handle_blur``, ``handle_visibility_change``). Every
command checks its preconditions and returns False instead of raising
when it does not apply.

Notifications (run started, jump, run ended, ...) go out on the event bus;
presentation polls ``view()`` for the flags it needs.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from dinorun.core.events import Event, EventBus, EventType
from dinorun.core.scheduler import DeferredHandle, FrameScheduler
from dinorun.core.state import Phase, PhaseMachine
from dinorun.game.collision import CollisionDetector, CollisionOutcome
from dinorun.game.constants import HIT_FLASH_MS, MAX_PHYSICS_DELTA, SCORE_DIVISOR
from dinorun.game.difficulty import DifficultyController
from dinorun.game.layout import Box, StageLayout
from dinorun.game.obstacle import Obstacle, ObstacleManager
from dinorun.game.physics import RunnerPhysics
from dinorun.game.scoreboard import Scoreboard

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    """Mutable state of the current run, owned by one controller."""
    phase: Phase = Phase.IDLE

    # Runner
    is_jumping: bool = False
    is_crouching: bool = False
    jump_height: float = 0.0
    jump_velocity: float = 0.0

    # Loop
    speed_ms: float = 0.0
    last_tick_timestamp: Optional[float] = None
    hidden: bool = False

    # Presentation flags
    paused: bool = True
    hit: bool = False
    has_played: bool = False


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot for a renderer."""
    phase: Phase
    paused: bool
    hit: bool
    jumping: bool
    crouching: bool
    runner_offset: float
    runner_box: Box
    speed_ms: float
    score: float
    display_score: int
    high_score: int
    obstacle: Obstacle
    obstacle_box: Box
    start_button_visible: bool
    start_button_label: str


class GameController:
    """Orchestrates physics, difficulty, collisions and scoring for one game."""

    def __init__(
        self,
        scoreboard: Scoreboard,
        obstacles: ObstacleManager,
        physics: Optional[RunnerPhysics] = None,
        difficulty: Optional[DifficultyController] = None,
        collisions: Optional[CollisionDetector] = None,
        layout: Optional[StageLayout] = None,
        scheduler: Optional[FrameScheduler] = None,
        event_bus: Optional[EventBus] = None,
        hit_flash_ms: float = HIT_FLASH_MS,
        max_physics_delta_ms: float = MAX_PHYSICS_DELTA,
    ):
        self.scoreboard = scoreboard
        self.obstacles = obstacles
        self.physics = physics or RunnerPhysics()
        self.difficulty = difficulty or DifficultyController()
        self.collisions = collisions or CollisionDetector()
        self.layout = layout or StageLayout()
        self.scheduler = scheduler
        self.event_bus = event_bus or EventBus()
        self.hit_flash_ms = hit_flash_ms
        self.max_physics_delta_ms = max_physics_delta_ms

        self.state = GameState(speed_ms=self.difficulty.speed_initial)
        self._machine = PhaseMachine(self.state)

        self._unsubscribe_tick: Optional[Callable[[], None]] = None
        self._hit_timer: Optional[DeferredHandle] = None

    # ------------------------------------------------------------------
    # Setup and queries
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load the high score and show the idle stage with a first obstacle."""
        self.scoreboard.initialize()
        self.state.paused = True
        self.obstacles.randomize(self.scoreboard.score)
        self.physics.reset(self.state)
        logger.info("Game initialized")

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def is_running(self) -> bool:
        return self.state.phase is Phase.PLAYING

    @property
    def hit_timer_pending(self) -> bool:
        return self._hit_timer is not None and self._hit_timer.pending

    def runner_box(self) -> Box:
        return self.layout.runner_box(self.state.jump_height, self.state.is_crouching)

    def view(self) -> GameView:
        running = self.is_running()
        return GameView(
            phase=self.state.phase,
            paused=self.state.paused,
            hit=self.state.hit,
            jumping=self.state.is_jumping,
            crouching=self.state.is_crouching,
            runner_offset=self.physics.visual_offset(self.state),
            runner_box=self.runner_box(),
            speed_ms=self.state.speed_ms,
            score=self.scoreboard.score,
            display_score=self.scoreboard.display_score,
            high_score=self.scoreboard.high_score,
            obstacle=self.obstacles.obstacle,
            obstacle_box=self.obstacles.bounding_box(),
            start_button_visible=not running,
            start_button_label="Play Again" if self.state.has_played else "Start",
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Begin a new run. No-op while one is already playing."""
        if self.is_running():
            return False

        self._cancel_hit_timer()
        self.stop_crouch()

        self.scoreboard.reset_score()
        self.obstacles.reset_animation(self.scoreboard.score)

        self.state.paused = self.state.hidden
        self.state.hit = False

        self.difficulty.reset(self.state)
        self.physics.reset(self.state)
        self.state.is_crouching = False

        self._machine.transition(Phase.PLAYING)
        self.state.last_tick_timestamp = None
        self._subscribe_ticks()

        logger.info("Run started")
        self._emit(EventType.RUN_STARTED)
        return True

    def end(self) -> bool:
        """Finish the current run. No-op unless playing."""
        if not self.is_running():
            return False

        self._machine.transition(Phase.ENDED)
        self.state.paused = True
        self.state.has_played = True
        self._unsubscribe_ticks()
        self.stop_crouch()

        self._flash_hit()

        new_best = self.scoreboard.update_high_score_if_needed()
        self.state.last_tick_timestamp = None
        self.physics.reset(self.state)

        logger.info(
            f"Run ended at {self.scoreboard.display_score} (best {self.scoreboard.high_score})"
        )
        if new_best:
            self._emit(EventType.HIGH_SCORE, {"high_score": self.scoreboard.high_score})
        self._emit(EventType.RUN_ENDED, {
            "score": self.scoreboard.score,
            "high_score": self.scoreboard.high_score,
            "new_high_score": new_best,
        })
        return True

    def jump(self) -> bool:
        """Launch a jump. No-op mid-jump or when not playing."""
        if self.state.is_jumping or not self.is_running():
            return False

        if self.state.is_crouching:
            self.stop_crouch()

        self.physics.launch(self.state)
        self._emit(EventType.JUMP)
        return True

    def start_crouch(self) -> bool:
        if self.state.is_crouching or not self.is_running() or self.state.is_jumping:
            return False
        self.state.is_crouching = True
        self._emit(EventType.CROUCH_STARTED)
        return True

    def stop_crouch(self) -> bool:
        if not self.state.is_crouching:
            return False
        self.state.is_crouching = False
        self._emit(EventType.CROUCH_ENDED)
        return True

    def handle_visibility_change(self, hidden: bool) -> None:
        """The host went to the background (or came back). Never ends the run."""
        was_hidden = self.state.hidden
        self.state.hidden = hidden
        if hidden:
            self.state.paused = True
            self.stop_crouch()
            return

        if was_hidden:
            # The first visible tick becomes the new baseline
            self.state.last_tick_timestamp = None
        if self.is_running():
            self.state.paused = False

    def handle_blur(self) -> None:
        # Key-up events are lost while unfocused
        self.stop_crouch()

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def on_tick(self, timestamp: float) -> None:
        """Advance the run to ``timestamp`` (milliseconds, monotonic)."""
        if not self.is_running():
            return

        # Backgrounded: keep the baseline fresh so resuming adds no time
        if self.state.hidden:
            self.state.last_tick_timestamp = timestamp
            return

        if self.state.last_tick_timestamp is None:
            self.state.last_tick_timestamp = timestamp
            return

        delta = timestamp - self.state.last_tick_timestamp
        self.state.last_tick_timestamp = timestamp
        physics_delta = min(delta, self.max_physics_delta_ms)

        if self.physics.step(self.state, physics_delta):
            self._emit(EventType.LANDED)
        self.difficulty.update(self.state, delta)
        self.check_collision()
        self.scoreboard.add_score(delta / SCORE_DIVISOR)

    def check_collision(self) -> CollisionOutcome:
        outcome = self.collisions.check(
            self.runner_box(),
            self.obstacles.bounding_box(),
            self.obstacles.variant,
            self.state.is_crouching,
        )
        if outcome.is_hit:
            self.end()
        return outcome

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _subscribe_ticks(self) -> None:
        if self.scheduler is None or self._unsubscribe_tick is not None:
            return
        self._unsubscribe_tick = self.scheduler.subscribe(self.on_tick)

    def _unsubscribe_ticks(self) -> None:
        if self._unsubscribe_tick is not None:
            self._unsubscribe_tick()
            self._unsubscribe_tick = None

    def _flash_hit(self) -> None:
        self._cancel_hit_timer()
        self.state.hit = True
        if self.scheduler is None:
            # Without timers the flag stays up until the next start()
            return
        self._hit_timer = self.scheduler.call_later(self.hit_flash_ms, self._clear_hit)

    def _clear_hit(self) -> None:
        self.state.hit = False
        self._hit_timer = None
        self._emit(EventType.HIT_CLEARED)

    def _cancel_hit_timer(self) -> None:
        if self._hit_timer is not None:
            self._hit_timer.cancel()
            self._hit_timer = None

    def _emit(self, event_type: EventType, data: Optional[dict] = None) -> None:
        self.event_bus.emit(Event(event_type, data=data or {}, source="controller"))
