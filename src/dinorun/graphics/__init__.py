"""Graphics module for the stage rendering pipeline."""

from dinorun.graphics.primitives import (
    clear,
    create_buffer,
    draw_rect,
    draw_sprite,
    tint,
)
from dinorun.graphics.stage import StageRenderer

__all__ = [
    "clear",
    "create_buffer",
    "draw_rect",
    "draw_sprite",
    "tint",
    "StageRenderer",
]
