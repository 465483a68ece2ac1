"""Shared fixtures: deterministic randomness and a wired controller."""

import random
from dataclasses import dataclass

import pytest

from dinorun.core.events import EventBus
from dinorun.core.scheduler import FrameScheduler
from dinorun.game.controller import GameController
from dinorun.game.obstacle import ObstacleManager
from dinorun.game.scoreboard import MemoryStore, Scoreboard
from dinorun.settings import Settings


class FixedRandom(random.Random):
    """Random source that always draws the same value and the low end of ranges."""

    def __init__(self, value: float = 0.99):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        return a


@dataclass
class Rig:
    controller: GameController
    scoreboard: Scoreboard
    obstacles: ObstacleManager
    scheduler: FrameScheduler
    event_bus: EventBus
    store: MemoryStore

    def place_obstacle(self, x: float) -> None:
        """Move the live obstacle so its left edge sits at stage x."""
        self.obstacles.reset_animation(self.scoreboard.score)
        self.obstacles.advance(
            self.obstacles.stage_width - x,
            self.obstacles.stage_width + self.obstacles.obstacle.width,
        )

    def tick(self, timestamp: float) -> None:
        self.scheduler.pump(timestamp)


@pytest.fixture
def ground_rng() -> FixedRandom:
    """Always picks the ground variant."""
    return FixedRandom(0.99)


@pytest.fixture
def aerial_rng() -> FixedRandom:
    """Always picks the aerial variant."""
    return FixedRandom(0.0)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def rig(store, ground_rng) -> Rig:
    bus = EventBus()
    scheduler = FrameScheduler()
    scoreboard = Scoreboard(storage=store)
    obstacles = ObstacleManager(
        rng=ground_rng,
        score_source=lambda: scoreboard.score,
        event_bus=bus,
    )
    controller = GameController(
        scoreboard=scoreboard,
        obstacles=obstacles,
        scheduler=scheduler,
        event_bus=bus,
    )
    controller.initialize()
    return Rig(controller, scoreboard, obstacles, scheduler, bus, store)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        high_score_path=tmp_path / "high_score.json",
        audio={"enabled": False},
    )
