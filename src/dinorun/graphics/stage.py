"""Stage renderer: projects a GameView onto an RGB buffer.

Text (score, start button) is drawn by the window on top of this buffer.
"""

from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from dinorun.game.controller import GameView
from dinorun.game.layout import Box, StageLayout
from dinorun.game.obstacle import ObstacleVariant
from dinorun.graphics.primitives import Color, clear, create_buffer, draw_rect, draw_sprite, tint

SKY = (247, 247, 247)
INK = (83, 83, 83)
GROUND_DOT = (160, 160, 160)
HIT_RED = (220, 60, 60)

SPRITE_SCALE = 4  # runner sprites: 15x22 cells -> 60x88 px
OBSTACLE_SCALE = 2  # obstacle sprites: 16x25 and 24x16 cells

# =============================================================================
# Sprites ('#' is ink)
# =============================================================================

DINO_RUN1 = [
    "        #######",
    "       ## #####",
    "       ########",
    "       ########",
    "       ########",
    "       ####    ",
    "       ######  ",
    "#     ####     ",
    "#    #####     ",
    "##  ########   ",
    "### ####### #  ",
    "###########    ",
    "##########     ",
    " #########     ",
    "  #######      ",
    "   ######      ",
    "   ###  #      ",
    "   ##   ##     ",
    "   #           ",
    "   ##          ",
    "               ",
    "               ",
]

DINO_RUN2 = DINO_RUN1[:16] + [
    "   ###  #      ",
    "   #    ##     ",
    "        #      ",
    "        ##     ",
    "               ",
    "               ",
]

DINO_CROUCH = [
    "               ",
    "#              ",
    "##     ########",
    "###### ## #####",
    "###############",
    "###############",
    " ##############",
    "  ######## ### ",
    "   ######      ",
    "   ##  ##      ",
    "   #    #      ",
    "   ##   ##     ",
]

CACTUS = [
    "      ###       ",
    "     #####      ",
    "     #####      ",
    "     #####  ##  ",
    "##   #####  ##  ",
    "##   #####  ##  ",
    "##   ##### ###  ",
    "###  #########  ",
    " ############   ",
    "  ##########    ",
] + ["     #####      "] * 15

BIRD_UP = [
    "      #                 ",
    "      ##                ",
    "      ###               ",
    "    # ####              ",
    "   ## #####             ",
    "  ### ######            ",
    " ###############        ",
    "####################### ",
    "      ############      ",
    "       ##########       ",
    "        ########        ",
    "                        ",
    "                        ",
    "                        ",
    "                        ",
    "                        ",
]

BIRD_DOWN = [
    "                        ",
    "                        ",
    "                        ",
    "    #                   ",
    "   ##                   ",
    "  ###                   ",
    " ###############        ",
    "####################### ",
    "      ############      ",
    "       #########        ",
    "       ######           ",
    "       #####            ",
    "       ####             ",
    "       ###              ",
    "       ##               ",
    "       #                ",
]


class StageRenderer:
    """Draws the ground, runner and obstacle for a view."""

    def __init__(self, layout: Optional[StageLayout] = None):
        self.layout = layout or StageLayout()
        self._buffer = create_buffer(self.layout.width, self.layout.height, SKY)

    @property
    def buffer(self) -> NDArray[np.uint8]:
        return self._buffer

    def render(self, view: GameView) -> NDArray[np.uint8]:
        buffer = self._buffer
        clear(buffer, SKY)

        self._render_ground(buffer, view)
        self._render_obstacle(buffer, view)
        self._render_runner(buffer, view)

        if view.hit:
            tint(buffer, HIT_RED, 0.25)
        return buffer

    def _render_ground(self, buffer: NDArray, view: GameView) -> None:
        ground_y = self.layout.ground_y
        draw_rect(buffer, 0, ground_y, self.layout.width, 2, INK)

        # Texture scrolls with the obstacle track
        shift = int(view.obstacle_box.left) % 24
        for x in range(shift - 24, self.layout.width, 24):
            draw_rect(buffer, x, ground_y + 6, 3, 1, GROUND_DOT)
            draw_rect(buffer, x + 11, ground_y + 12, 2, 1, GROUND_DOT)

    def _render_runner(self, buffer: NDArray, view: GameView) -> None:
        if view.crouching:
            sprite = DINO_CROUCH
        elif view.jumping or view.paused:
            sprite = DINO_RUN1
        else:
            sprite = DINO_RUN1 if view.display_score % 2 == 0 else DINO_RUN2
        self._blit(buffer, sprite, view.runner_box, SPRITE_SCALE, INK)

    def _render_obstacle(self, buffer: NDArray, view: GameView) -> None:
        if view.obstacle.variant is ObstacleVariant.AERIAL:
            sprite = BIRD_UP if (int(view.obstacle_box.left) // 24) % 2 == 0 else BIRD_DOWN
        else:
            sprite = CACTUS
        self._blit(buffer, sprite, view.obstacle_box, OBSTACLE_SCALE, INK)

    @staticmethod
    def _blit(buffer: NDArray, sprite: List[str], box: Box, scale: int, color: Color) -> None:
        """Draw a sprite bottom-aligned inside a box."""
        y = int(round(box.bottom)) - len(sprite) * scale
        draw_sprite(buffer, sprite, int(round(box.left)), y, color, scale)
