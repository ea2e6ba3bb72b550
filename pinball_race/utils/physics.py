import logging
import pygame
import pymunk
import pymunk.pygame_util
from pinball_race.settings import *

logger = logging.getLogger(__name__)


class PhysicsWorld:
    """A pymunk space plus body labels and a batched collision-start stream.

    Begin callbacks fire in the middle of Space.step, so pairs are collected
    during the step and handed to listeners afterwards as one list, in the
    order pymunk reported them.
    """

    def __init__(self, gravity_y=GRAVITY_Y):
        self.space = pymunk.Space()
        self.space.gravity = (0, gravity_y)
        self.labels = {}
        self.frame = 0
        self._pending_pairs = []
        self._listeners = []
        self.space.on_collision(begin=self._on_begin)

    def add(self, body, *shapes, label=None):
        self.space.add(body, *shapes)
        for shape in shapes:
            self.labels[shape] = label
        return body

    def label_of(self, shape):
        return self.labels.get(shape)

    def on_collision_start(self, listener):
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_begin(self, arbiter, space, data):
        shape_a, shape_b = arbiter.shapes
        self._pending_pairs.append((self.label_of(shape_a), self.label_of(shape_b)))

    def step(self, dt=PHYSICS_DT):
        self.space.step(dt)
        self.frame += 1
        pairs = self._pending_pairs
        self._pending_pairs = []
        if pairs:
            for listener in list(self._listeners):
                listener(pairs)
        return pairs

    def clear(self):
        self._listeners = []
        self._pending_pairs = []
        shapes = list(self.space.shapes)
        bodies = list(self.space.bodies)
        if shapes:
            self.space.remove(*shapes)
        if bodies:
            self.space.remove(*bodies)
        self.labels = {}
        logger.debug("Cleared %d shapes and %d bodies", len(shapes), len(bodies))


class PhysicsRunner:
    """Fixed-step stepping loop, started and stopped independently of rendering."""

    def __init__(self, world, step_ms=PHYSICS_STEP_MS, max_steps=MAX_STEPS_PER_FRAME):
        self.world = world
        self.step_ms = step_ms
        self.max_steps = max_steps
        self.running = False
        self._accumulator = 0.0

    def start(self):
        self.running = True
        self._accumulator = 0.0

    def stop(self):
        self.running = False
        self._accumulator = 0.0

    def tick(self, elapsed_ms):
        if not self.running:
            return 0
        self._accumulator += elapsed_ms
        steps = 0
        while self._accumulator >= self.step_ms and steps < self.max_steps:
            self._accumulator -= self.step_ms
            self.world.step(self.step_ms / 1000.0)
            steps += 1
            # A listener may have stopped us mid-batch
            if not self.running:
                break
        if steps == self.max_steps:
            # Falling behind, drop the backlog instead of spiralling
            self._accumulator = 0.0
        return steps


class PhysicsRenderer:
    """Draws the world's shapes to a surface and then runs after-render hooks."""

    def __init__(self, world, surface, background=COLOR_BG):
        self.world = world
        self.surface = surface
        self.background = background
        self.running = False
        self.draw_options = pymunk.pygame_util.DrawOptions(surface)
        self.draw_options.flags = pymunk.SpaceDebugDrawOptions.DRAW_SHAPES
        self._after_render = []

    def run(self):
        self.running = True

    def stop(self):
        self.running = False

    def on_after_render(self, hook):
        self._after_render.append(hook)

    def off_after_render(self, hook):
        if hook in self._after_render:
            self._after_render.remove(hook)

    @property
    def hooks(self):
        return list(self._after_render)

    def render(self):
        if not self.running:
            return False
        self.surface.fill(self.background)
        self.world.space.debug_draw(self.draw_options)
        for hook in list(self._after_render):
            hook(self.surface)
        return True

    def release(self):
        self.running = False
        self._after_render = []
        self.surface = None


def create_surface(width, height, transparent=False):
    if transparent:
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        surface.fill((0, 0, 0, 0))
        return surface
    return pygame.Surface((width, height))
