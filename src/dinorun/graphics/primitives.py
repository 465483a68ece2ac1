"""Basic drawing primitives for the stage buffer."""

from typing import Sequence, Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def create_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate an RGB buffer of shape (height, width, 3)."""
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle on the buffer, clipped to its bounds.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw a one pixel outline
    """
    h, w = buffer.shape[:2]

    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    if x1 >= x2 or y1 >= y2:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    buffer[y1, x1:x2] = color
    buffer[y2 - 1, x1:x2] = color
    buffer[y1:y2, x1] = color
    buffer[y1:y2, x2 - 1] = color


def draw_sprite(
    buffer: Buffer,
    rows: Sequence[str],
    x: int,
    y: int,
    color: Color,
    scale: int = 1,
) -> None:
    """Draw a one-color sprite given as text rows ('#' is a pixel).

    Each sprite pixel becomes a ``scale`` x ``scale`` block.
    """
    for row_idx, row in enumerate(rows):
        for col_idx, pixel in enumerate(row):
            if pixel == "#":
                draw_rect(buffer, x + col_idx * scale, y + row_idx * scale, scale, scale, color)


def tint(buffer: Buffer, color: Color, amount: float) -> None:
    """Blend the whole buffer toward a color (0 = unchanged, 1 = solid)."""
    amount = max(0.0, min(1.0, amount))
    if amount == 0.0:
        return
    blended = buffer.astype(np.float32) * (1.0 - amount) + np.array(color, dtype=np.float32) * amount
    np.copyto(buffer, blended.astype(np.uint8))
