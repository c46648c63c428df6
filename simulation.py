"""
Headless Pong simulation: one keyboard paddle against a damped tracking AI.

No pygame dependency here; the front end in pong.py feeds key codes in and
draws the Frame snapshots that come out.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

WIDTH, HEIGHT = 600, 400
PADDLE_W, PADDLE_H = 10, 75
PADDLE_MARGIN = 40
PADDLE_STEP = 8
BALL_RADIUS = 7
BALL_SPEED = 7
BALL_VELOCITY = (5, 5)
SPEED_INCREMENT = 0.2
AI_DAMPING = 0.1
WINNING_SCORE = 20


class Side(Enum):
    USER = "user"
    AI = "ai"


class Event(Enum):
    HIT = "hit"
    WALL = "wall"
    SCORE = "score"


@dataclass
class Paddle:
    x: float
    y: float
    width: float = PADDLE_W
    height: float = PADDLE_H
    score: int = 0

    @property
    def top(self):
        return self.y

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def left(self):
        return self.x

    @property
    def right(self):
        return self.x + self.width

    @property
    def center_y(self):
        return self.y + self.height / 2


@dataclass
class Ball:
    x: float
    y: float
    radius: float = BALL_RADIUS
    speed: float = BALL_SPEED
    velocity_x: float = BALL_VELOCITY[0]
    velocity_y: float = BALL_VELOCITY[1]

    @property
    def top(self):
        return self.y - self.radius

    @property
    def bottom(self):
        return self.y + self.radius

    @property
    def left(self):
        return self.x - self.radius

    @property
    def right(self):
        return self.x + self.radius


@dataclass(frozen=True)
class Bounds:
    width: float = WIDTH
    height: float = HEIGHT

    @property
    def center_x(self):
        return self.width / 2

    @property
    def center_y(self):
        return self.height / 2


@dataclass(frozen=True)
class Playing:
    pass


@dataclass(frozen=True)
class Won:
    side: Side


@dataclass
class MatchState:
    last_point: Optional[Side] = None
    phase: Union[Playing, Won] = field(default_factory=Playing)

    @property
    def user_point(self) -> bool:
        return self.last_point is Side.USER

    @property
    def ai_point(self) -> bool:
        return self.last_point is Side.AI

    @property
    def is_over(self) -> bool:
        return isinstance(self.phase, Won)

    @property
    def winner(self) -> Optional[Side]:
        return self.phase.side if self.is_over else None

    @property
    def user_is_winner(self) -> bool:
        return self.winner is Side.USER

    @property
    def ai_is_winner(self) -> bool:
        return self.winner is Side.AI


class InputTracker:
    """Held state of the up/down control keys. Other keys are ignored."""

    def __init__(self, up_key="up", down_key="down"):
        self.up_key = up_key
        self.down_key = down_key
        self.move_up = False
        self.move_down = False

    def _set(self, key, held):
        if key == self.up_key:
            self.move_up = held
        elif key == self.down_key:
            self.move_down = held

    def press(self, key):
        self._set(key, True)

    def release(self, key):
        self._set(key, False)


@dataclass
class GameState:
    bounds: Bounds
    user: Paddle
    ai: Paddle
    ball: Ball
    match: MatchState = field(default_factory=MatchState)
    controls: InputTracker = field(default_factory=InputTracker)


def new_game(bounds: Bounds = Bounds(), controls: Optional[InputTracker] = None) -> GameState:
    paddle_y = bounds.height / 2 - PADDLE_H / 2
    return GameState(
        bounds=bounds,
        user=Paddle(PADDLE_MARGIN, paddle_y),
        ai=Paddle(bounds.width - (PADDLE_W + PADDLE_MARGIN), paddle_y),
        ball=Ball(bounds.center_x, bounds.center_y),
        controls=controls if controls is not None else InputTracker(),
    )


# --- Physics ---

def move_user_paddle(state: GameState):
    user, controls = state.user, state.controls
    floor = state.bounds.height - user.height
    # up wins when both keys are held
    if controls.move_up and user.y > 0:
        user.y = max(0, user.y - PADDLE_STEP)
    elif controls.move_down and user.y < floor:
        user.y = min(floor, user.y + PADDLE_STEP)


def bounce_off_walls(state: GameState, events: List[Event]):
    ball = state.ball
    if ball.bottom >= state.bounds.height or ball.top <= 0:
        events.append(Event.WALL)
        ball.velocity_y = -ball.velocity_y


def reset_ball(ball: Ball, bounds: Bounds):
    """Recentre and serve back the other way.

    The velocity is only negated, so its magnitude keeps whatever the last
    rally left it at even though speed drops back to BALL_SPEED.
    """
    ball.x = bounds.center_x
    ball.y = bounds.center_y
    ball.speed = BALL_SPEED
    ball.velocity_x = -ball.velocity_x
    ball.velocity_y = -ball.velocity_y


def _award_point(state: GameState, side: Side, events: List[Event]):
    paddle = state.user if side is Side.USER else state.ai
    paddle.score += 1
    state.match.last_point = side
    reset_ball(state.ball, state.bounds)
    events.append(Event.SCORE)


def check_scoring(state: GameState, events: List[Event]):
    # Right wall goes first; the left wall test then sees the reset ball.
    if state.ball.right >= state.bounds.width:
        _award_point(state, Side.USER, events)
    if state.ball.left <= 0:
        _award_point(state, Side.AI, events)


def move_ball(ball: Ball):
    ball.x += ball.velocity_x
    ball.y += ball.velocity_y


def track_ai_paddle(state: GameState):
    # Proportional pull toward the ball, deliberately not clamped to the field
    ai = state.ai
    ai.y += (state.ball.y - ai.center_y) * AI_DAMPING


def collides(paddle: Paddle, ball: Ball) -> bool:
    return (ball.left < paddle.right and ball.top < paddle.bottom
            and ball.right > paddle.left and ball.bottom > paddle.top)


def deflect_from_paddle(state: GameState, events: List[Event]):
    ball = state.ball
    paddle = state.user if ball.x < state.bounds.center_x else state.ai
    if not collides(paddle, ball):
        return

    events.append(Event.HIT)
    angle = 0.0
    if ball.y < paddle.center_y:
        angle = -math.pi / 4
    elif ball.y > paddle.center_y:
        angle = math.pi / 4

    direction = 1 if paddle is state.user else -1
    ball.velocity_x = direction * ball.speed * math.cos(angle)
    ball.velocity_y = ball.speed * math.sin(angle)
    ball.speed += SPEED_INCREMENT


def physics_step(state: GameState) -> List[Event]:
    """Advance one fixed tick. Movement is per tick, not scaled by wall time."""
    events: List[Event] = []
    move_user_paddle(state)
    bounce_off_walls(state, events)
    check_scoring(state, events)
    move_ball(state.ball)
    track_ai_paddle(state)
    deflect_from_paddle(state, events)
    return events


# --- Match ---

def check_win(state: GameState) -> bool:
    if state.match.is_over:
        return True

    if state.user.score >= WINNING_SCORE:
        side = Side.USER
    elif state.ai.score >= WINNING_SCORE:
        side = Side.AI
    else:
        return False

    ball = state.ball
    reset_ball(ball, state.bounds)
    ball.speed = 0
    ball.velocity_x = 0
    ball.velocity_y = 0
    state.match.phase = Won(side)
    return True


def tick(state: GameState) -> List[Event]:
    events: List[Event] = []
    if not check_win(state):
        events = physics_step(state)
        # a winning point freezes the ball in the same tick
        check_win(state)
    return events


# --- Read-only view for the renderer ---

@dataclass(frozen=True)
class PaddleView:
    x: float
    y: float
    width: float
    height: float
    score: int


@dataclass(frozen=True)
class BallView:
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class Frame:
    width: float
    height: float
    user: PaddleView
    ai: PaddleView
    ball: BallView
    user_point: bool
    ai_point: bool
    winner: Optional[Side]


def _paddle_view(paddle: Paddle) -> PaddleView:
    return PaddleView(paddle.x, paddle.y, paddle.width, paddle.height, paddle.score)


def snapshot(state: GameState) -> Frame:
    ball = state.ball
    return Frame(
        width=state.bounds.width,
        height=state.bounds.height,
        user=_paddle_view(state.user),
        ai=_paddle_view(state.ai),
        ball=BallView(ball.x, ball.y, ball.radius),
        user_point=state.match.user_point,
        ai_point=state.match.ai_point,
        winner=state.match.winner,
    )
