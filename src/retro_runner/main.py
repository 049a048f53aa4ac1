"""
Main entry point for Retro Runner.

Loads configuration, sets up logging and persistence, and launches the
pygame window.
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from retro_runner.config.settings import Settings, get_settings
from retro_runner.core.events import EventBus
from retro_runner.game.session import GameSession
from retro_runner.storage.store import JsonFileStore


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure console logging, plus an optional log file."""
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")


async def run_game(settings: Settings) -> None:
    """Build the session and run the window until it closes."""
    from retro_runner.simulator.window import GameWindow, WindowConfig

    event_bus = EventBus()
    store = JsonFileStore(settings.storage.path)
    session = GameSession(settings=settings, store=store, event_bus=event_bus)

    config = WindowConfig(
        width=settings.display.width,
        height=settings.display.height,
        scale=settings.display.scale,
        fps=settings.display.fps,
    )
    window = GameWindow(session=session, config=config, event_bus=event_bus)
    await window.run()


def main() -> None:
    """Main entry point."""
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("Retro Runner starting...")
    logger.info("Controls: SPACE/UP jump, R restart, C change character, Q quit")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Retro Runner stopped")


if __name__ == "__main__":
    main()
