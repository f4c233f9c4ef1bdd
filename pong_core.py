"""
Simulation core for a one-player Pong: left paddle is the player, right paddle
is a scripted tracker.

Everything lives on an explicit GameState; front ends feed input through
press/release/point/toggle_pause, call tick() once per frame and draw from
snapshot().
"""
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

LEFT, RIGHT = "left", "right"
UP, DOWN = "up", "down"


@dataclass
class Config:
    width: float = 800
    height: float = 500
    paddle_w: float = 12
    paddle_h: float = 90
    paddle_margin: float = 12
    paddle_speed: float = 6          # keyboard move per frame
    ai_speed_base: float = 4.2
    ai_speed_scale: float = 0.2      # ai speed grows with ball speed
    ai_dead_zone: float = 8
    ball_radius: float = 8
    initial_ball_speed: float = 5
    ball_speed_increase: float = 0.3  # per paddle hit, uncapped
    max_launch_angle: float = math.pi / 3   # serve cone, either side of horizontal
    max_bounce_angle: float = 5 * math.pi / 12
    nudge: float = 0.5
    score_delay: float = 0.8         # seconds
    fps: int = 60

    def __post_init__(self):
        for name in ("width", "height", "paddle_w", "paddle_h", "paddle_speed",
                     "ball_radius", "initial_ball_speed", "fps"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.paddle_h > self.height:
            raise ValueError("paddle_h cannot exceed the field height")
        if self.score_delay < 0:
            raise ValueError("score_delay cannot be negative")


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


@dataclass
class Paddle:
    x: float
    y: float
    width: float
    height: float

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass
class Ball:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    speed: float = 0.0
    radius: float = 8.0


@dataclass
class Scores:
    left: int = 0
    right: int = 0


@dataclass
class InputState:
    up: bool = False
    down: bool = False
    pointer_y: Optional[float] = None  # set by mouse/touch, cleared by keys


@dataclass
class PendingLaunch:
    due: float
    direction: int
    resume: bool = True


@dataclass
class GameState:
    config: Config
    left: Paddle
    right: Paddle
    ball: Ball
    scores: Scores = field(default_factory=Scores)
    inputs: InputState = field(default_factory=InputState)
    running: bool = True
    pending: Optional[PendingLaunch] = None
    rng: random.Random = field(default_factory=random.Random)
    now: float = 0.0   # clock value seen by the latest tick()
    frame: int = 0


@dataclass(frozen=True)
class Snapshot:
    width: float
    height: float
    left: Tuple[float, float, float, float]
    right: Tuple[float, float, float, float]
    ball: Tuple[float, float, float]
    scores: Tuple[int, int]
    running: bool
    frame: int


def new_game(config: Optional[Config] = None, seed=None) -> GameState:
    cfg = config or Config()
    start_y = (cfg.height - cfg.paddle_h) / 2
    state = GameState(
        config=cfg,
        left=Paddle(cfg.paddle_margin, start_y, cfg.paddle_w, cfg.paddle_h),
        right=Paddle(cfg.width - cfg.paddle_w - cfg.paddle_margin, start_y,
                     cfg.paddle_w, cfg.paddle_h),
        ball=Ball(cfg.width / 2, cfg.height / 2, speed=cfg.initial_ball_speed,
                  radius=cfg.ball_radius),
        rng=random.Random(seed),
    )
    launch_ball(state)
    return state


def launch_ball(state: GameState, direction: Optional[int] = None, angle: Optional[float] = None):
    """Serve from the center at the initial speed.

    direction is -1 (leftward), +1 (rightward) or None for a coin flip.
    angle overrides the random draw from the launch cone.
    """
    if direction not in (None, -1, 1):
        raise ValueError(f"direction must be -1, 1 or None, got {direction!r}")
    cfg, ball = state.config, state.ball
    ball.x = cfg.width / 2
    ball.y = cfg.height / 2
    ball.speed = cfg.initial_ball_speed

    if angle is None:
        angle = state.rng.uniform(-cfg.max_launch_angle, cfg.max_launch_angle)
    sign = direction if direction is not None else (-1 if state.rng.random() < 0.5 else 1)
    ball.vx = math.cos(angle) * ball.speed * sign
    ball.vy = math.sin(angle) * ball.speed
    logger.info("launch dir=%+d angle=%.1fdeg", sign, math.degrees(angle))


def _deflect(state: GameState, paddle: Paddle, side: int):
    # -1 at the top edge, +1 at the bottom edge, beyond that if the frame overshot
    cfg, ball = state.config, state.ball
    normalized = (ball.y - paddle.center_y) / (paddle.height / 2)
    bounce_angle = normalized * cfg.max_bounce_angle

    ball.speed += cfg.ball_speed_increase
    ball.vx = math.cos(bounce_angle) * ball.speed * side
    ball.vy = math.sin(bounce_angle) * ball.speed
    logger.debug("paddle hit side=%+d normalized=%.2f speed=%.2f", side, normalized, ball.speed)


def _collide_paddles(state: GameState):
    ball, lp, rp = state.ball, state.left, state.right
    nudge = state.config.nudge

    if (ball.vx < 0
            and lp.x <= ball.x - ball.radius <= lp.x + lp.width
            and lp.y <= ball.y <= lp.y + lp.height):
        _deflect(state, lp, 1)
        ball.x = lp.x + lp.width + ball.radius + nudge

    if (ball.vx > 0
            and rp.x <= ball.x + ball.radius <= rp.x + rp.width
            and rp.y <= ball.y <= rp.y + rp.height):
        _deflect(state, rp, -1)
        ball.x = rp.x - ball.radius - nudge


def _score(state: GameState, side: str, direction: int):
    if side == LEFT:
        state.scores.left += 1
    else:
        state.scores.right += 1
    state.running = False
    state.pending = PendingLaunch(due=state.now + state.config.score_delay, direction=direction)
    logger.info("%s scores (%d-%d)", side, state.scores.left, state.scores.right)


def move_player(state: GameState):
    cfg, paddle, inputs = state.config, state.left, state.inputs
    if inputs.pointer_y is not None:
        paddle.y = inputs.pointer_y - paddle.height / 2
    elif inputs.up:
        paddle.y -= cfg.paddle_speed
    elif inputs.down:
        paddle.y += cfg.paddle_speed
    paddle.y = clamp(paddle.y, 0, cfg.height - paddle.height)


def move_opponent(state: GameState):
    cfg, paddle, ball = state.config, state.right, state.ball
    ai_speed = cfg.ai_speed_base + ball.speed * cfg.ai_speed_scale
    center = paddle.center_y
    if ball.y < center - cfg.ai_dead_zone:
        paddle.y -= ai_speed
    elif ball.y > center + cfg.ai_dead_zone:
        paddle.y += ai_speed
    paddle.y = clamp(paddle.y, 0, cfg.height - paddle.height)


def step(state: GameState) -> Optional[str]:
    """Advance one frame. Returns the side that scored this frame, if any."""
    if not state.running:
        return None
    cfg, ball = state.config, state.ball
    state.frame += 1

    ball.x += ball.vx
    ball.y += ball.vy

    # top / bottom walls
    if ball.y - ball.radius <= 0:
        ball.y = ball.radius
        ball.vy = -ball.vy
    elif ball.y + ball.radius >= cfg.height:
        ball.y = cfg.height - ball.radius
        ball.vy = -ball.vy

    # no swept test: a fast enough ball can skip through a paddle
    _collide_paddles(state)

    scored = None
    if ball.x - ball.radius <= 0:
        scored = RIGHT
        _score(state, RIGHT, 1)
    elif ball.x + ball.radius >= cfg.width:
        scored = LEFT
        _score(state, LEFT, -1)

    move_player(state)
    move_opponent(state)
    return scored


def poll_launch(state: GameState, now: float) -> bool:
    state.now = now
    pending = state.pending
    if pending is None or now < pending.due:
        return False
    state.pending = None
    launch_ball(state, pending.direction)
    state.running = pending.resume
    if not pending.resume:
        logger.info("relaunch held: paused during score delay")
    return True


def tick(state: GameState, now: float) -> Optional[str]:
    """One frame: fire a due relaunch, then run the physics step."""
    poll_launch(state, now)
    return step(state)


# --- input mapper ---

def _check_direction(direction):
    if direction not in (UP, DOWN):
        raise ValueError(f"direction must be {UP!r} or {DOWN!r}, got {direction!r}")


def press(state: GameState, direction: str):
    _check_direction(direction)
    setattr(state.inputs, direction, True)
    state.inputs.pointer_y = None


def release(state: GameState, direction: str):
    _check_direction(direction)
    setattr(state.inputs, direction, False)


def point(state: GameState, y: float):
    state.inputs.pointer_y = y


def toggle_pause(state: GameState):
    # during the score delay only the pending resume is flipped; the ball is
    # still past the goal line, so physics must not run yet
    if state.pending is not None:
        state.pending.resume = not state.pending.resume
        logger.info("resume after relaunch: %s", state.pending.resume)
        return

    state.running = not state.running
    logger.info("paused" if not state.running else "resumed")
    ball = state.ball
    if state.running and abs(ball.vx) < 0.001 and abs(ball.vy) < 0.001:
        launch_ball(state)


def snapshot(state: GameState) -> Snapshot:
    lp, rp, ball = state.left, state.right, state.ball
    return Snapshot(
        width=state.config.width,
        height=state.config.height,
        left=(lp.x, lp.y, lp.width, lp.height),
        right=(rp.x, rp.y, rp.width, rp.height),
        ball=(ball.x, ball.y, ball.radius),
        scores=(state.scores.left, state.scores.right),
        running=state.running,
        frame=state.frame,
    )
