"""Game core: scoring, obstacles, physics, collisions and the run controller."""

from .controller import GameController, GameState, GameView
from .obstacle import Obstacle, ObstacleManager, ObstacleVariant
from .scoreboard import JsonFileStore, MemoryStore, Scoreboard

__all__ = [
    "GameController",
    "GameState",
    "GameView",
    "Obstacle",
    "ObstacleManager",
    "ObstacleVariant",
    "JsonFileStore",
    "MemoryStore",
    "Scoreboard",
]
