import logging
import pygame
from pinball_race.settings import *
from pinball_race.models.race import RaceController
from pinball_race.scenes.race import run_race
from pinball_race.utils.rand import make_rng
from pinball_race.utils.timing import FrameScheduler

logger = logging.getLogger(__name__)


def configure_logging(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    configure_logging()
    logger.info("Starting Pinball Race v%s", VERSION)
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))

    pygame.display.set_caption(f"Pinball Race v{VERSION} - 5 Balls")
    clock = pygame.time.Clock()

    scheduler = FrameScheduler()
    controller = RaceController(scheduler, rng=make_rng(SEED))

    try:
        # The race starts as soon as the window is up
        controller.start()
        run_race(screen, clock, controller, scheduler)
    finally:
        controller.cleanup()
        pygame.quit()


if __name__ == "__main__":
    main()
