"""
Input mapping from keyboard and pointer to game commands.

Keyboard Mapping:
    SPACE / UP / W: Jump (starts a run if none is playing)
    DOWN / S: Crouch while held (starts a run if none is playing)

Pointer:
    Upper half of the stage: Jump
    Lower half of the stage: Crouch while held
"""

import logging
from typing import Protocol

import pygame

logger = logging.getLogger(__name__)

JUMP_KEYS = frozenset({pygame.K_SPACE, pygame.K_UP, pygame.K_w})
CROUCH_KEYS = frozenset({pygame.K_DOWN, pygame.K_s})


class GameCommands(Protocol):
    """Command surface the controls drive."""

    def is_running(self) -> bool: ...
    def start(self) -> bool: ...
    def jump(self) -> bool: ...
    def start_crouch(self) -> bool: ...
    def stop_crouch(self) -> bool: ...
    def handle_blur(self) -> None: ...


class Controls:
    """Translates raw input into controller commands."""

    def __init__(self, game: GameCommands, stage_height: float):
        self.game = game
        self.stage_height = stage_height

    def key_down(self, key: int) -> bool:
        """Handle key press. Returns True if the key is a game key."""
        if key in JUMP_KEYS:
            if not self.game.is_running():
                self.game.start()
            self.game.jump()
            return True

        if key in CROUCH_KEYS:
            if not self.game.is_running():
                self.game.start()
            self.game.start_crouch()
            return True

        return False

    def key_up(self, key: int) -> bool:
        """Handle key release."""
        if key in CROUCH_KEYS:
            self.game.stop_crouch()
            return True
        return False

    def pointer_down(self, y: float, primary: bool = True, on_start_button: bool = False) -> bool:
        """Press at stage y. The start button handles its own clicks."""
        if not primary or on_start_button:
            return False

        if not self.game.is_running():
            self.game.start()

        if not self.game.is_running():
            return False

        if y > self.stage_height / 2:
            self.game.start_crouch()
        else:
            self.game.jump()
        return True

    def pointer_up(self, primary: bool = True) -> bool:
        """Release, leave or cancel."""
        if not primary:
            return False
        self.game.stop_crouch()
        return True

    def click_start(self) -> bool:
        return self.game.start()

    def blur(self) -> None:
        logger.debug("Window lost focus")
        self.game.handle_blur()
