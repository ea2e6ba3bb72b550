import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from pinball_race.models.race import RaceController
from pinball_race.utils.timing import FrameScheduler


@pytest.fixture(scope="session", autouse=True)
def headless_pygame():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def controller(scheduler):
    race = RaceController(scheduler, rng=random.Random(1234))
    yield race
    race.cleanup()


@pytest.fixture
def started(controller):
    controller.start()
    return controller
