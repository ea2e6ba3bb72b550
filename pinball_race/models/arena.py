import pymunk
from pinball_race.settings import *
from pinball_race.models.racer import ROSTER
from pinball_race.utils.rand import rand_range


class Arena:
    """Handle to everything build_arena put into the world."""

    def __init__(self):
        self.walls = []
        self.finish = None
        self.pegs = []
        self.bumpers = []
        self.paddles = []
        self.balls = {}

    def ball_shape(self, racer_id):
        return self.balls[racer_id]


def _static_body(x, y, angle=0.0):
    body = pymunk.Body(body_type=pymunk.Body.STATIC)
    body.position = (x, y)
    body.angle = angle
    return body


def add_static_box(world, x, y, width, height, color, angle=0.0, label=None,
                   sensor=False, elasticity=0.0, friction=0.1):
    body = _static_body(x, y, angle)
    shape = pymunk.Poly.create_box(body, (width, height))
    shape.sensor = sensor
    shape.elasticity = elasticity
    shape.friction = friction
    shape.color = color + (255,)
    world.add(body, shape, label=label)
    return shape


def add_static_circle(world, x, y, radius, color, label=None, elasticity=0.0, friction=0.1):
    body = _static_body(x, y)
    shape = pymunk.Circle(body, radius)
    shape.elasticity = elasticity
    shape.friction = friction
    shape.color = color + (255,)
    world.add(body, shape, label=label)
    return shape


def _air_drag(air_friction):
    # pymunk only has space-wide damping, so apply per-ball drag here
    def velocity_func(body, gravity, damping, dt):
        drag = (1.0 - air_friction) ** (dt * FPS)
        pymunk.Body.update_velocity(body, gravity, damping * drag, dt)
    return velocity_func


def add_ball(world, racer, x, y, velocity):
    moment = pymunk.moment_for_circle(BALL_MASS, 0, BALL_RADIUS)
    body = pymunk.Body(BALL_MASS, moment)
    body.position = (x, y)
    body.velocity = velocity
    body.velocity_func = _air_drag(BALL_AIR_FRICTION)
    shape = pymunk.Circle(body, BALL_RADIUS)
    shape.elasticity = BALL_ELASTICITY
    shape.friction = BALL_FRICTION
    shape.color = racer.color + (255,)
    world.add(body, shape, label=racer.label)
    return shape


def peg_positions(width=ARENA_WIDTH, rows=PEG_ROWS, cols=PEG_COLS):
    """Brick-like stagger: odd rows shift right by half a column."""
    spacing_x = (width - 2 * PEG_MARGIN_X) / (cols - 1)
    positions = []
    for r in range(rows):
        for c in range(cols):
            x = PEG_MARGIN_X + c * spacing_x + (spacing_x / 2 if r % 2 else 0)
            y = PEG_OFFSET_Y + r * PEG_SPACING_Y
            positions.append((x, y))
    return positions


def celebration_point(width=ARENA_WIDTH, finish_y=FINISH_Y):
    cx = max(CELEBRATION_MARGIN_X, min(width - CELEBRATION_MARGIN_X, width / 2))
    return cx, finish_y - CELEBRATION_OFFSET_Y


def build_arena(world, rng, width=ARENA_WIDTH, height=ARENA_HEIGHT):
    """Populate the world with walls, finish sensor, obstacles and the five balls."""
    arena = Arena()
    t = WALL_THICKNESS

    # Walls sit just outside the visible area
    arena.walls = [
        add_static_box(world, width / 2, height + t / 2, width, t, COLOR_WALL, label="ground"),
        add_static_box(world, width / 2, -t / 2, width, t, COLOR_WALL, label="ceiling"),
        add_static_box(world, -t / 2, height / 2, t, height, COLOR_WALL, label="left_wall"),
        add_static_box(world, width + t / 2, height / 2, t, height, COLOR_WALL, label="right_wall"),
    ]

    arena.finish = add_static_box(
        world, width / 2, FINISH_Y, width - 2 * FINISH_MARGIN, FINISH_SENSOR_HEIGHT,
        COLOR_FINISH, label=FINISH_LABEL, sensor=True,
    )

    for x, y in peg_positions(width):
        arena.pegs.append(add_static_circle(
            world, x, y, PEG_RADIUS, COLOR_PEG, label="peg",
            elasticity=PEG_ELASTICITY, friction=PEG_FRICTION,
        ))

    for fx, fy, color in BUMPERS:
        arena.bumpers.append(add_static_circle(
            world, width * fx, height * fy, BUMPER_RADIUS, color, label="bumper",
            elasticity=BUMPER_ELASTICITY,
        ))

    for fx, fy, angle, color in PADDLES:
        arena.paddles.append(add_static_box(
            world, width * fx, height * fy, PADDLE_SIZE[0], PADDLE_SIZE[1], color,
            angle=angle, label="paddle",
        ))

    for racer in ROSTER:
        x = BALL_START_X + racer.id * BALL_SPACING_X
        # px/frame -> px/s
        vx = rand_range(rng, *BALL_VX_RANGE) * FPS
        vy = rand_range(rng, *BALL_VY_RANGE) * FPS
        arena.balls[racer.id] = add_ball(world, racer, x, BALL_START_Y, (vx, vy))

    return arena
