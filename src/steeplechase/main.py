"""
Main entry point for Steeplechase.

Reads STEEPLECHASE_ENV (simulator or headless) and launches the
appropriate version.
"""

import asyncio
import logging
import sys
from pathlib import Path

from steeplechase.config.settings import Settings, get_settings
from steeplechase.core.events import EventType


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        # Truncate on each run for fresh logs
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


async def run_simulator(settings: Settings) -> None:
    """Run the desktop window."""
    from steeplechase.simulator.window import SimulatorWindow

    window = SimulatorWindow(settings=settings)
    await window.run()


def run_headless(settings: Settings) -> int:
    """Run without a window or input until the horse falls or time runs out.

    Returns:
        Final score
    """
    from steeplechase.session import RaceSession

    logger = logging.getLogger(__name__)
    session = RaceSession(settings)
    frame_ms = settings.world.reference_frame_ms

    for _ in range(settings.headless_ticks):
        session.update(frame_ms)
        if session.engine.is_ended:
            break

    snapshot = session.engine.snapshot()
    ended = session.event_bus.get_history(EventType.RUN_ENDED, limit=1)
    cause = f"hit {ended[0].data['kind']}" if ended else "time limit"
    logger.info(
        f"Headless run finished ({cause}): score {snapshot.score}, phase {snapshot.phase.name}, "
        f"{snapshot.elapsed_ms / 1000:.1f}s simulated"
    )
    return snapshot.score


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()
    get_settings.cache_clear()
    settings = get_settings()

    log_file = Path("simulator.log") if settings.is_simulator else None
    setup_logging(settings.debug, log_file)

    logger = logging.getLogger(__name__)
    logger.info("Steeplechase starting...")

    try:
        if settings.env == "simulator":
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        else:
            logger.info("Running in headless mode")
            run_headless(settings)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Steeplechase stopped")


if __name__ == "__main__":
    main()
