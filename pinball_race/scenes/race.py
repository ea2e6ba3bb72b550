import logging
import pygame
from pinball_race.settings import *
from pinball_race.scenes.podium import PodiumView
from pinball_race.utils.ui import Button, draw_sidebar

logger = logging.getLogger(__name__)


def make_controls():
    x = ARENA_WIDTH + 34
    y = 104
    return [
        Button((x, y, 110, 44), "Start", COLOR_START_BUTTON, key=pygame.K_s),
        Button((x + 122, y, 110, 44), "Reset", COLOR_RESET_BUTTON, key=pygame.K_r),
    ]


def run_race(screen, clock, controller, scheduler):
    """Main race loop."""
    start_button, reset_button = controls = make_controls()
    podium = PodiumView()

    state = {"snapshot": None}

    def on_change(snapshot):
        state["snapshot"] = snapshot
        if snapshot.is_podium_visible:
            podium.open(scheduler.now())
        else:
            podium.close()

    unsubscribe = controller.subscribe(on_change)

    try:
        while True:
            # Input
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logger.info("Window closed")
                    return "QUIT"
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return "QUIT"
                    elif event.key == start_button.key:
                        controller.start()
                    elif event.key == reset_button.key:
                        controller.reset()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if podium.visible and podium.button.hit(event.pos):
                        controller.reset()
                    elif start_button.hit(event.pos):
                        controller.start()
                    elif reset_button.hit(event.pos):
                        controller.reset()

            elapsed = clock.tick(FPS)

            # Timers, physics, then the display-refresh callbacks
            scheduler.advance(elapsed)
            controller.update(elapsed)
            scheduler.run_frame()

            # Draw
            screen.fill(COLOR_BG)
            if controller.canvas is not None:
                screen.blit(controller.canvas, (0, 0))
            if controller.overlay_surface is not None:
                screen.blit(controller.overlay_surface, (0, 0))
            podium.draw(screen, state["snapshot"].ranking, scheduler.now())
            draw_sidebar(screen, state["snapshot"], controls)

            pygame.display.flip()
    finally:
        unsubscribe()
