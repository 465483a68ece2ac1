"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. ``DINORUN_PHYSICS__GRAVITY=3800``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dinorun.game import constants as C


class PhysicsSettings(BaseModel):
    """Jump arc tuning."""

    jump_velocity: float = Field(default=C.JUMP_VELOCITY, gt=0)  # px/s
    gravity: float = Field(default=C.GRAVITY, gt=0)  # px/s^2
    max_physics_delta_ms: float = Field(default=C.MAX_PHYSICS_DELTA, gt=0)


class DifficultySettings(BaseModel):
    """Obstacle traversal period ramp."""

    speed_initial_ms: float = Field(default=C.SPEED_INITIAL, gt=0)
    speed_min_ms: float = Field(default=C.SPEED_MIN, gt=0)
    speed_step: float = Field(default=C.SPEED_STEP, ge=0)  # ms per second of play

    @model_validator(mode="after")
    def _check_floor(self) -> "DifficultySettings":
        if self.speed_min_ms > self.speed_initial_ms:
            raise ValueError("speed_min_ms must not exceed speed_initial_ms")
        return self


class ObstacleSettings(BaseModel):
    """Variant selection odds."""

    aerial_base_chance: float = Field(default=C.AERIAL_BASE_CHANCE, ge=0.0, le=1.0)
    aerial_max_chance: float = Field(default=C.AERIAL_MAX_CHANCE, ge=0.0, le=1.0)
    ramp_score: int = Field(default=C.AERIAL_RAMP_SCORE, gt=0)


class CollisionSettings(BaseModel):
    """Hitbox tolerances."""

    runner_right_inset: float = C.RUNNER_RIGHT_INSET
    runner_left_inset: float = C.RUNNER_LEFT_INSET
    ground_top_padding: float = C.GROUND_TOP_PADDING
    ground_bottom_padding: float = C.GROUND_BOTTOM_PADDING
    aerial_top_padding: float = C.AERIAL_PADDING
    aerial_bottom_padding: float = C.AERIAL_PADDING
    duck_clearance: float = C.DUCK_CLEARANCE


class StageSettings(BaseModel):
    """Stage and runner geometry in stage pixels."""

    width: int = Field(default=C.STAGE_WIDTH, gt=0)
    height: int = Field(default=C.STAGE_HEIGHT, gt=0)
    ground_offset: int = Field(default=C.GROUND_OFFSET, ge=0)
    runner_x: int = C.RUNNER_X
    runner_width: int = Field(default=C.RUNNER_WIDTH, gt=0)
    runner_height: int = Field(default=C.RUNNER_HEIGHT, gt=0)
    runner_crouch_height: int = Field(default=C.RUNNER_CROUCH_HEIGHT, gt=0)


class AudioSettings(BaseModel):
    """Sound effects output."""

    enabled: bool = True
    master_volume: float = Field(default=0.35, ge=0.0, le=1.0)
    sample_rate: int = 44100


class WindowSettings(BaseModel):
    """Desktop window."""

    scale: int = Field(default=1, ge=1, le=4)
    fps: int = Field(default=60, gt=0)
    title: str = "Dino Run"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DINORUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Game
    hit_flash_ms: float = Field(default=C.HIT_FLASH_MS, ge=0)

    # Persistence
    high_score_path: Path = Field(
        default_factory=lambda: Path.home() / ".dinorun" / "high_score.json"
    )
    high_score_key: str = C.HIGH_SCORE_KEY

    # Nested settings
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    difficulty: DifficultySettings = Field(default_factory=DifficultySettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    collision: CollisionSettings = Field(default_factory=CollisionSettings)
    stage: StageSettings = Field(default_factory=StageSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    window: WindowSettings = Field(default_factory=WindowSettings)

    @property
    def window_size(self) -> tuple:
        """Window size in screen pixels."""
        return (self.stage.width * self.window.scale, self.stage.height * self.window.scale)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
