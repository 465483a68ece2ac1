"""
Main entry point for Dino Run.

Loads settings, builds a game session and opens the desktop window.
"""

import asyncio
import logging
import sys


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_window() -> None:
    """Run the game in a pygame window."""
    from dinorun.audio.engine import AudioEngine
    from dinorun.game.session import GameSession
    from dinorun.settings import get_settings
    from dinorun.simulator.window import GameWindow, WindowConfig

    settings = get_settings()

    audio = AudioEngine(
        sample_rate=settings.audio.sample_rate,
        master_volume=settings.audio.master_volume,
        enabled=settings.audio.enabled,
    )
    session = GameSession(settings=settings, audio=audio)

    config = WindowConfig(
        title=settings.window.title,
        scale=settings.window.scale,
        fps=settings.window.fps,
    )
    window = GameWindow(session, config=config)

    try:
        await window.run()
    finally:
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    from dinorun.settings import get_settings

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Dino Run starting...")

    try:
        asyncio.run(run_window())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Dino Run stopped")


if __name__ == "__main__":
    main()
