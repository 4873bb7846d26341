"""
Main entry point for the lucky draw wheel.

Runs the pygame front end, or a headless demo spin when
LUCKYDRAW_ENV=headless.
"""

import asyncio
import logging
import math
import sys

from luckydraw.app import LuckyDrawApp
from luckydraw.config.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the pygame window."""
    from luckydraw.simulator.window import SimulatorWindow

    app = LuckyDrawApp(settings=settings)
    window = SimulatorWindow(app)
    await window.run()


def run_headless(settings: Settings) -> None:
    """Spin once with a synthetic flick and print the result."""
    logger = logging.getLogger(__name__)

    # Synthetic clock so the flick has a measurable velocity
    now = [0.0]
    app = LuckyDrawApp(settings=settings, clock=lambda: now[0])
    geometry = app.wheel.geometry

    # Quarter-turn flick in 60 ms at 70% of the radius
    reach = geometry.radius * 0.7
    app.press(geometry.center_x + reach, geometry.center_y)
    for step in range(1, 7):
        now[0] += 0.01
        angle = step * (math.pi / 2) / 6
        app.drag(
            geometry.center_x + reach * math.cos(angle),
            geometry.center_y + reach * math.sin(angle),
        )
    app.release()

    if not app.wheel.is_spinning:
        logger.warning("Flick too weak to spin")
        return

    result = None
    while result is None:
        result = app.tick()
    logger.info(f"Winner: #{result.index} {result.prize}")
    print(result.prize)


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()
    get_settings.cache_clear()
    settings = get_settings()

    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Lucky draw starting...")

    try:
        if settings.is_simulator:
            logger.info("Running pygame simulator")
            asyncio.run(run_simulator(settings))
        else:
            logger.info("Running headless")
            run_headless(settings)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Lucky draw stopped")


if __name__ == "__main__":
    main()
