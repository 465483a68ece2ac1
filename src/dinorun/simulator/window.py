"""
Desktop game window using pygame.

Pumps the game session once per frame with pygame's millisecond clock,
renders the stage buffer and overlays the score and the start button.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from dinorun.game.controller import GameView
from dinorun.game.session import GameSession
from dinorun.graphics.stage import INK, StageRenderer
from dinorun.simulator.controls import Controls

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    title: str = "Dino Run"
    scale: int = 1
    fps: int = 60

    # Colors
    text_color: Tuple[int, int, int] = INK
    button_color: Tuple[int, int, int] = INK
    button_text_color: Tuple[int, int, int] = (247, 247, 247)

    # Start button size in stage pixels
    button_width: int = 140
    button_height: int = 36


class GameWindow:
    """
    Playable window around a GameSession.

    Keyboard Mapping:
        SPACE / UP / W: Jump
        DOWN / S: Crouch
        ESC: Exit

    Mouse:
        Left button on the stage: jump (upper half) or crouch (lower half)
        Start button: start a run
    """

    def __init__(self, session: GameSession, config: Optional[WindowConfig] = None) -> None:
        self.session = session
        self.config = config or WindowConfig()
        self.layout = session.layout
        self.controls = Controls(session.controller, self.layout.height)
        self.renderer = StageRenderer(self.layout)

        # Pygame setup
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._font: Optional[pygame.font.Font] = None
        self._running = False
        self._frame_count = 0

        logger.info("GameWindow created")

    @property
    def size(self) -> Tuple[int, int]:
        return (self.layout.width * self.config.scale, self.layout.height * self.config.scale)

    @property
    def start_button_rect(self) -> pygame.Rect:
        """Start button in stage coordinates."""
        rect = pygame.Rect(0, 0, self.config.button_width, self.config.button_height)
        rect.center = (self.layout.width // 2, self.layout.height // 2)
        return rect

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(self.size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 24 * self.config.scale)

        logger.info(f"Pygame initialized: {self.size[0]}x{self.size[1]}")

    def _to_stage(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        return (pos[0] / self.config.scale, pos[1] / self.config.scale)

    def _on_start_button(self, pos: Tuple[int, int]) -> bool:
        if self.session.controller.is_running():
            return False
        x, y = self._to_stage(pos)
        return self.start_button_rect.collidepoint(x, y)

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                else:
                    self.controls.key_down(event.key)

            elif event.type == pygame.KEYUP:
                self.controls.key_up(event.key)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                _, y = self._to_stage(event.pos)
                self.controls.pointer_down(
                    y,
                    primary=event.button == 1,
                    on_start_button=self._on_start_button(event.pos),
                )

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1 and self._on_start_button(event.pos):
                    self.controls.click_start()
                self.controls.pointer_up(primary=event.button == 1)

            elif event.type == pygame.WINDOWLEAVE:
                self.controls.pointer_up()

            elif event.type == pygame.WINDOWFOCUSLOST:
                self.controls.blur()

            elif event.type in (pygame.WINDOWMINIMIZED, pygame.WINDOWHIDDEN):
                self.session.controller.handle_visibility_change(True)

            elif event.type in (pygame.WINDOWRESTORED, pygame.WINDOWSHOWN):
                self.session.controller.handle_visibility_change(False)

    def _render(self) -> None:
        """Render the stage and its overlay."""
        if not self._screen:
            return

        view = self.session.view()
        buffer = self.renderer.render(view)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        if self.config.scale != 1:
            surface = pygame.transform.scale(surface, self.size)
        self._screen.blit(surface, (0, 0))

        self._render_score(view)
        if view.start_button_visible:
            self._render_start_button(view)

        pygame.display.flip()

    def _render_score(self, view: GameView) -> None:
        if not self._font:
            return
        text = f"HI {view.high_score:05d}  {view.display_score:05d}"
        text_surface = self._font.render(text, True, self.config.text_color)
        margin = 10 * self.config.scale
        self._screen.blit(text_surface, (self.size[0] - text_surface.get_width() - margin, margin))

    def _render_start_button(self, view: GameView) -> None:
        s = self.config.scale
        stage_rect = self.start_button_rect
        rect = pygame.Rect(stage_rect.x * s, stage_rect.y * s, stage_rect.w * s, stage_rect.h * s)
        pygame.draw.rect(self._screen, self.config.button_color, rect, border_radius=6 * s)

        if self._font:
            label = self._font.render(view.start_button_label, True, self.config.button_text_color)
            self._screen.blit(label, label.get_rect(center=rect.center))

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            self.session.pump(float(pygame.time.get_ticks()))

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.session.close()
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False
