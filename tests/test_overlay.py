import pygame

from pinball_race.models.particle import Particle
from pinball_race.settings import ARENA_HEIGHT, ARENA_WIDTH, FINISH_Y
from pinball_race.utils.physics import create_surface
from pinball_race.utils.ui import OverlayRenderer


def _overlay():
    return OverlayRenderer(create_surface(ARENA_WIDTH, ARENA_HEIGHT, transparent=True))


def test_draw_particles_paints_live_particles():
    overlay = _overlay()
    overlay.draw_particles([Particle(50, 60, 0, 0, 70, (0, 80, 60))])
    assert overlay.surface.get_at((50, 60)).a == 255


def test_faded_particle_is_drawn_translucent():
    overlay = _overlay()
    overlay.draw_particles([Particle(50, 60, 0, 0, 35, (120, 80, 60))])
    assert 0 < overlay.surface.get_at((50, 60)).a < 255


def test_each_frame_fully_replaces_the_previous_one():
    overlay = _overlay()
    overlay.draw_particles([Particle(50, 60, 0, 0, 70, (0, 80, 60))])
    overlay.draw_particles([Particle(300, 300, 0, 0, 70, (0, 80, 60))])
    assert overlay.surface.get_at((50, 60)).a == 0
    assert overlay.surface.get_at((300, 300)).a == 255


def test_clear_leaves_nothing_behind():
    overlay = _overlay()
    overlay.draw_particles([Particle(50, 60, 0, 0, 70, (0, 80, 60))])
    overlay.clear()
    assert overlay.surface.get_bounding_rect().size == (0, 0)


def test_static_overlay_tints_the_finish_band():
    overlay = _overlay()
    target = pygame.Surface((ARENA_WIDTH, ARENA_HEIGHT))
    target.fill((0, 0, 0))
    overlay.draw_static(target)
    assert target.get_at((ARENA_WIDTH // 2, FINISH_Y)) != pygame.Color(0, 0, 0)
    # Outside the band and labels nothing is touched
    assert target.get_at((ARENA_WIDTH // 2, FINISH_Y - 100)) == pygame.Color(0, 0, 0)
