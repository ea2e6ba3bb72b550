import enum
import logging
from pinball_race.settings import *
from pinball_race.models.racer import ROSTER
from pinball_race.models.arena import build_arena, celebration_point
from pinball_race.models.finish_tracker import FinishTracker
from pinball_race.models.particle import ParticleSystem, ParticleLoop
from pinball_race.utils.physics import PhysicsWorld, PhysicsRunner, PhysicsRenderer, create_surface
from pinball_race.utils.rand import make_rng
from pinball_race.utils.ui import OverlayRenderer

logger = logging.getLogger(__name__)


class RaceSetupError(RuntimeError):
    """The physics world or a drawing surface could not be created."""


class RaceState(enum.Enum):
    BUILDING = "building"
    RUNNING = "running"
    ALL_FINISHED = "all_finished"
    PODIUM = "podium"


class RankingEntry:
    def __init__(self, racer_id, color, name):
        self.racer_id = racer_id
        self.color = color
        self.name = name

    def __eq__(self, other):
        return (isinstance(other, RankingEntry)
                and (self.racer_id, self.color, self.name) == (other.racer_id, other.color, other.name))

    def __repr__(self):
        return f"RankingEntry({self.racer_id})"


class RaceSnapshot:
    """What the presentation layer gets to see after every change."""

    def __init__(self, state, ranking, is_podium_visible, celebrating):
        self.state = state
        self.ranking = ranking
        self.is_podium_visible = is_podium_visible
        self.celebrating = celebrating

    @property
    def ranking_ids(self):
        return [entry.racer_id for entry in self.ranking]


class RaceSession:
    """All handles belonging to one race. Built in BUILDING, released on teardown."""

    def __init__(self):
        self.world = None
        self.canvas = None
        self.renderer = None
        self.runner = None
        self.overlay = None
        self.arena = None
        self.fireworks = None
        self.static_hook = None
        self.unsubscribe_collisions = None
        self.podium_timer = None

    def release(self):
        # Each resource on its own so one failure doesn't leak the rest
        self._guard("podium timer", self._cancel_podium_timer)
        self._guard("fireworks", self._stop_fireworks)
        self._guard("overlay hook", self._detach_static_hook)
        self._guard("renderer", self._stop_renderer)
        self._guard("runner", self._stop_runner)
        self._guard("collision stream", self._unsubscribe)
        self._guard("world", self._clear_world)
        self._guard("overlay surface", self._clear_overlay)

    def _guard(self, name, release):
        try:
            release()
        except Exception:
            logger.exception("Failed to release %s", name)

    def _cancel_podium_timer(self):
        if self.podium_timer is not None:
            self.podium_timer.cancel()
            self.podium_timer = None

    def _stop_fireworks(self):
        if self.fireworks is not None:
            self.fireworks.stop()
            self.fireworks = None

    def _detach_static_hook(self):
        if self.renderer is not None and self.static_hook is not None:
            self.renderer.off_after_render(self.static_hook)
        self.static_hook = None

    def _stop_renderer(self):
        if self.renderer is not None:
            self.renderer.stop()
            self.renderer.release()
            self.renderer = None
        self.canvas = None

    def _stop_runner(self):
        if self.runner is not None:
            self.runner.stop()
            self.runner = None

    def _unsubscribe(self):
        if self.unsubscribe_collisions is not None:
            self.unsubscribe_collisions()
            self.unsubscribe_collisions = None

    def _clear_world(self):
        if self.world is not None:
            self.world.clear()
            self.world = None
        self.arena = None

    def _clear_overlay(self):
        if self.overlay is not None:
            self.overlay.clear()
            self.overlay = None


class RaceController:
    """Race lifecycle: building, running, all finished, podium.

    The controller only reacts to ranking edges. The first 0 -> 1 transition
    fires the fireworks (latched until the next build) and reaching the full
    racer count schedules the podium after PODIUM_DELAY_MS. reset() cancels
    anything still pending from the previous race.
    """

    def __init__(self, scheduler, rng=None, width=ARENA_WIDTH, height=ARENA_HEIGHT,
                 surface_factory=create_surface):
        self.scheduler = scheduler
        self.rng = rng if rng is not None else make_rng(SEED)
        self.width = width
        self.height = height
        self.surface_factory = surface_factory
        self.state = RaceState.BUILDING
        self.session = None
        self.tracker = FinishTracker(scheduler.now)
        self.celebrated = False
        self.is_podium_visible = False
        self._subscribers = []

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def start(self):
        self._build()

    def reset(self):
        self._build()

    def cleanup(self):
        """Release the session and fall back to an empty, Building-ready state."""
        had_session = self._teardown()
        self.state = RaceState.BUILDING
        self.tracker = FinishTracker(self.scheduler.now)
        self.celebrated = False
        self.is_podium_visible = False
        if had_session:
            self._publish()

    def _teardown(self):
        session = self.session
        self.session = None
        if session is None:
            return False
        session.release()
        logger.info("Race torn down")
        return True

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------
    def subscribe(self, callback):
        self._subscribers.append(callback)
        callback(self.snapshot)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def ranking(self):
        return [RankingEntry(r.racer_id, ROSTER[r.racer_id].color, ROSTER[r.racer_id].name)
                for r in self.tracker.records]

    @property
    def celebrating(self):
        return bool(self.session and self.session.fireworks and self.session.fireworks.running)

    @property
    def snapshot(self):
        return RaceSnapshot(self.state, tuple(self.ranking), self.is_podium_visible, self.celebrating)

    def _publish(self):
        snapshot = self.snapshot
        for callback in list(self._subscribers):
            callback(snapshot)

    # ------------------------------------------------------------------
    # Frame driving
    # ------------------------------------------------------------------
    def update(self, elapsed_ms):
        """Step physics and redraw the physics canvas for one display frame."""
        session = self.session
        if session is None:
            return 0
        steps = session.runner.tick(elapsed_ms)
        if self.session is session:
            session.renderer.render()
        return steps

    @property
    def canvas(self):
        return self.session.canvas if self.session else None

    @property
    def overlay_surface(self):
        return self.session.overlay.surface if self.session and self.session.overlay else None

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def _build(self):
        self._teardown()
        self.state = RaceState.BUILDING
        self.tracker = FinishTracker(self.scheduler.now)
        self.celebrated = False
        self.is_podium_visible = False
        self._publish()

        session = RaceSession()
        self.session = session
        try:
            self._populate(session)
        except Exception as e:
            self._teardown()
            raise RaceSetupError(f"could not build the race arena: {e}") from e

        self.state = RaceState.RUNNING
        logger.info("Race started with %d balls", len(session.arena.balls))
        self._publish()

    def _populate(self, session):
        session.world = PhysicsWorld()
        session.canvas = self.surface_factory(self.width, self.height)
        session.renderer = PhysicsRenderer(session.world, session.canvas)
        session.runner = PhysicsRunner(session.world)
        session.overlay = OverlayRenderer(self.surface_factory(self.width, self.height, transparent=True))
        session.fireworks = ParticleLoop(
            ParticleSystem(self.rng), self.scheduler,
            session.overlay.draw_particles, session.overlay.clear,
            on_finished=self._on_fireworks_finished,
        )

        session.arena = build_arena(session.world, self.rng, self.width, self.height)
        session.unsubscribe_collisions = session.world.on_collision_start(self.handle_collisions)

        session.static_hook = session.overlay.draw_static
        session.renderer.on_after_render(session.static_hook)

        session.renderer.run()
        session.runner.start()

    # ------------------------------------------------------------------
    # Reactions
    # ------------------------------------------------------------------
    def handle_collisions(self, pairs):
        """Route one physics step's collision pairs through the finish tracker."""
        if self.session is None:
            return
        before = len(self.tracker)
        if self.tracker.process_pairs(pairs):
            self._on_ranking_changed(before, len(self.tracker))

    def _on_ranking_changed(self, before, after):
        if before == 0 and after >= 1 and not self.celebrated:
            self.celebrated = True
            self.session.fireworks.start(*celebration_point(self.width, FINISH_Y))

        if after == RACER_COUNT and self.state == RaceState.RUNNING:
            self.state = RaceState.ALL_FINISHED
            self.session.podium_timer = self.scheduler.call_later(PODIUM_DELAY_MS, self._show_podium)
            logger.info("All balls finished, podium in %d ms", PODIUM_DELAY_MS)

        self._publish()

    def _on_fireworks_finished(self):
        if self.session is not None:
            self._publish()

    def _show_podium(self):
        if self.session is None or self.state != RaceState.ALL_FINISHED:
            return
        self.session.podium_timer = None
        self.state = RaceState.PODIUM
        self.is_podium_visible = True
        logger.info("Podium: %s", ", ".join(entry.name for entry in self.ranking))
        self._publish()
