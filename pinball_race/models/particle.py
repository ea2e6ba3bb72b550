import math
import random
import logging
import pygame
from pinball_race.settings import *
from pinball_race.utils.rand import rand_range

logger = logging.getLogger(__name__)


class Particle:
    def __init__(self, x, y, vx, vy, life, color_hsl):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.life = life
        self.color_hsl = color_hsl

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.vy += PARTICLE_GRAVITY
        self.life -= 1

    @property
    def alpha(self):
        return max(self.life / PARTICLE_MAX_LIFE, 0)

    @property
    def color(self):
        color = pygame.Color(0, 0, 0)
        hue, saturation, lightness = self.color_hsl
        color.hsla = (hue, saturation, lightness, 100)
        color.a = int(round(self.alpha * 255))
        return color


class ParticleSystem:
    """Forward integrator for one fireworks burst."""

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()
        self.particles = []

    def burst(self, x, y, count=PARTICLE_COUNT):
        # Evenly spread by angle, speed and life vary per particle
        particles = []
        for i in range(count):
            angle = FULL_CIRCLE * i / count
            speed = rand_range(self.rng, *PARTICLE_SPEED_RANGE)
            life = self.rng.randrange(*PARTICLE_LIFE_RANGE)
            hue = self.rng.randrange(0, 360)
            particles.append(Particle(
                x, y,
                math.cos(angle) * speed,
                math.sin(angle) * speed,
                life,
                (hue, PARTICLE_SATURATION, PARTICLE_LIGHTNESS),
            ))
        self.particles = particles
        return particles

    def tick(self):
        for p in self.particles:
            p.update()
        self.particles = [p for p in self.particles if p.life > 0]
        return self.particles

    @property
    def has_live_particles(self):
        return len(self.particles) > 0

    def clear(self):
        self.particles = []


class ParticleLoop:
    """Per-frame driver for a ParticleSystem.

    The first frame runs as soon as the burst is spawned, later ones are
    requested from the scheduler one at a time while particles are alive.
    The loop ends either when the burst decays or when stop() is called;
    either way the surface is cleared once and no further frame is
    requested. on_finished is only called when the burst decays on its own.
    """

    def __init__(self, system, scheduler, draw, clear, on_finished=None):
        self.system = system
        self.scheduler = scheduler
        self.draw = draw
        self.clear = clear
        self.running = False
        self.frames = 0
        self.on_finished = on_finished
        self._generation = 0

    def start(self, x, y):
        if self.running:
            self.stop()
        self._generation += 1
        self.system.burst(x, y)
        self.running = True
        self.frames = 0
        logger.info("Fireworks burst at (%.0f, %.0f) with %d particles", x, y, len(self.system.particles))
        self._frame(self._generation)

    def stop(self):
        if not self.running:
            return
        self.running = False
        self._generation += 1
        self.system.clear()
        self.clear()

    def _request(self, generation):
        self.scheduler.request_frame(lambda: self._frame(generation))

    def _frame(self, generation):
        if not self.running or generation != self._generation:
            return
        live = self.system.tick()
        self.frames += 1
        self.draw(live)
        if self.system.has_live_particles:
            self._request(generation)
        else:
            self.running = False
            self.clear()
            logger.debug("Fireworks finished after %d frames", self.frames)
            if self.on_finished is not None:
                self.on_finished()
