import pytest

import pong_core
from pong_core import Config


@pytest.fixture
def cfg():
    return Config()


@pytest.fixture
def state(cfg):
    return pong_core.new_game(cfg, seed=1234)


@pytest.fixture
def place_ball(state):
    def place(x, y, vx=0.0, vy=0.0, speed=None):
        ball = state.ball
        ball.x, ball.y, ball.vx, ball.vy = x, y, vx, vy
        if speed is not None:
            ball.speed = speed
        return ball
    return place
