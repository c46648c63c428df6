"""
Front end tests: event routing, HUD messages, drawing and a short headless
run of the game loop on SDL's dummy drivers.
"""

import sys
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pong
from simulation import InputTracker, Side, Won, new_game, snapshot


@pytest.fixture
def fonts():
    pygame.init()
    yield pong.load_fonts()
    pygame.quit()


def key_event(kind, key):
    return pygame.event.Event(kind, key=key)


class TestHandleEvent:

    def test_arrow_keys_drive_tracker(self):
        controls = InputTracker(pygame.K_UP, pygame.K_DOWN)
        assert pong.handle_event(key_event(pygame.KEYDOWN, pygame.K_UP), controls)
        assert controls.move_up
        assert pong.handle_event(key_event(pygame.KEYDOWN, pygame.K_DOWN), controls)
        assert controls.move_down
        pong.handle_event(key_event(pygame.KEYUP, pygame.K_UP), controls)
        assert not controls.move_up and controls.move_down

    def test_other_keys_ignored(self):
        controls = InputTracker(pygame.K_UP, pygame.K_DOWN)
        assert pong.handle_event(key_event(pygame.KEYDOWN, pygame.K_w), controls)
        assert not controls.move_up and not controls.move_down

    def test_quit_and_escape(self):
        controls = InputTracker(pygame.K_UP, pygame.K_DOWN)
        assert not pong.handle_event(pygame.event.Event(pygame.QUIT), controls)
        assert not pong.handle_event(key_event(pygame.KEYDOWN, pygame.K_ESCAPE), controls)


class TestBanner:

    def test_no_message_before_first_point(self):
        assert pong.banner(snapshot(new_game())) is None

    def test_point_messages(self):
        state = new_game()
        state.match.last_point = Side.USER
        assert pong.banner(snapshot(state))[0] == "User got a point!"
        state.match.last_point = Side.AI
        assert pong.banner(snapshot(state))[0] == "Ai got a point!"

    def test_winner_replaces_point_message(self):
        state = new_game()
        state.match.last_point = Side.AI
        state.match.phase = Won(Side.AI)
        assert pong.banner(snapshot(state))[0] == "Ai wins!"
        state.match.phase = Won(Side.USER)
        assert pong.banner(snapshot(state))[0] == "User wins!"


class TestRender:

    def test_draws_field(self, fonts):
        state = new_game()
        surface = pygame.Surface((600, 400))
        pong.render(surface, snapshot(state), fonts)

        assert tuple(surface.get_at((5, 5)))[:3] == pong.BG
        assert tuple(surface.get_at((45, 200)))[:3] == pong.PADDLE_COLOR
        assert tuple(surface.get_at((555, 200)))[:3] == pong.PADDLE_COLOR
        assert tuple(surface.get_at((300, 200)))[:3] == pong.BALL_COLOR

    def test_render_does_not_touch_state(self, fonts):
        state = new_game()
        state.match.phase = Won(Side.USER)
        before = snapshot(state)
        pong.render(pygame.Surface((600, 400)), before, fonts)
        assert snapshot(state) == before


class TestGameLoop:

    def test_headless_run(self):
        state = pong.game(max_ticks=3, mute=True)
        # three ticks of the opening serve
        assert (state.ball.x, state.ball.y) == (315, 215)
        assert not state.match.is_over

    def test_main_prints_score(self, capsys):
        pong.main(["--mute", "--max-ticks", "2"])
        assert "User 0 - 0 Ai" in capsys.readouterr().out
