import signal

import pytest

import config
from templates import CORRIDOR

pygame = pytest.importorskip("pygame")

import pacman_game  # noqa: E402
from pacman_game import PacmanGame  # noqa: E402


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    monkeypatch.setattr(signal, "signal", lambda signum, handler: None)
    yield
    pygame.quit()


@pytest.fixture
def game(headless):
    return PacmanGame(seed=1, session_logging=False)


def test_fps_option_leaves_simulation_config_alone(headless, monkeypatch):
    created = []
    monkeypatch.setattr(PacmanGame, "run", lambda self: created.append(self))
    assert pacman_game.main(["--fps", "30"]) == 0
    assert created[0].fps == 30
    assert config.TARGET_FPS == 60


def test_window_fits_maze_and_hud(game):
    assert (game.screen_width, game.screen_height) == (560, 620 + 40)
    assert game.screen.get_size() == (560, 660)


def test_window_follows_level_size(game):
    game.session.maze.load(CORRIDOR)
    game.on_level_complete({})
    assert (game.screen_width, game.screen_height) == (180, 100)
    assert game.screen.get_size() == (180, 100)


def test_capture_shows_rising_score(game):
    game.on_capture({'points': 200})
    text, x, y, _ = game.score_popups[0]
    assert text == "+200"
    assert (x, y) == game.session.pacman.position

    game.update_score_popups(0.5)
    assert game.score_popups[0][2] < y
    game.update_score_popups(0.6)
    assert game.score_popups == []


def test_draw_every_phase(game):
    game.on_capture({'points': 200})
    game.draw()
    game.session.toggle_pause()
    game.draw()
    game.session.state.phase = pacman_game.GamePhase.GAME_OVER
    game.draw()
