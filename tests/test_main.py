"""Tests for rario/main.py — input mapping, App state machine, entry point.

Pyxel is patched out; no window is opened.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from rario.constants import GAMEOVER_DELAY
from rario.simulation import create_sim_from_tiles
from tests.grids import build_gap


def _quiet_pyxel(mock_pyxel: MagicMock) -> MagicMock:
    """No keys held, nothing pressed."""
    mock_pyxel.btn.return_value = False
    mock_pyxel.btnp.return_value = False
    mock_pyxel.frame_count = 0
    return mock_pyxel


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class TestReadInput:
    @patch("rario.main.pyxel")
    def test_maps_arrow_keys(self, mock_pyxel):
        from rario.main import _read_input
        held = {mock_pyxel.KEY_RIGHT, mock_pyxel.KEY_UP}
        mock_pyxel.btn.side_effect = lambda key: key in held
        inp = _read_input()
        assert (inp.left, inp.right, inp.up) == (False, True, True)

    @patch("rario.main.pyxel")
    def test_nothing_held(self, mock_pyxel):
        from rario.main import _read_input
        _quiet_pyxel(mock_pyxel)
        inp = _read_input()
        assert not (inp.left or inp.right or inp.up)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

@pytest.fixture
def app():
    with patch("rario.main.pyxel") as mock_pyxel, patch("rario.renderer.pyxel"):
        _quiet_pyxel(mock_pyxel)
        from rario.main import App
        yield App("world1-1")


class TestApp:
    def test_window_setup(self):
        with patch("rario.main.pyxel") as mock_pyxel, patch("rario.renderer.pyxel"):
            _quiet_pyxel(mock_pyxel)
            from rario.main import App
            App("world1-1").run()
            mock_pyxel.init.assert_called_once_with(
                254, 224, title="Super Rario Bros", fps=60,
            )
            assert mock_pyxel.run.called

    def test_starts_in_gameplay(self, app):
        assert app.state == "gameplay"
        assert app.sim.stage_name == "world1-1"
        assert app.textures == {}

    def test_update_advances_sim(self, app):
        for _ in range(5):
            app.update()
        assert app.sim.frame == 5

    def test_draw_gameplay(self, app):
        app.draw()

    def test_game_over_and_restart(self, app):
        app.sim = create_sim_from_tiles(build_gap(2, gap_width=2), 36, 184)
        for _ in range(120):
            app.update()
            if app.state == "game_over":
                break
        assert app.state == "game_over"
        assert app.gameover_timer == GAMEOVER_DELAY

        app.draw()
        for _ in range(GAMEOVER_DELAY):
            app.update()
        assert app.state == "gameplay"
        assert app.sim.frame == 0
        assert not app.sim.player_lost

    def test_quit_key(self):
        with patch("rario.main.pyxel") as mock_pyxel, patch("rario.renderer.pyxel"):
            _quiet_pyxel(mock_pyxel)
            from rario.main import App
            game = App("world1-1")
            mock_pyxel.btnp.side_effect = lambda key: key == mock_pyxel.KEY_Q
            game.update()
            assert mock_pyxel.quit.called


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

class TestMain:
    def test_runs_app(self):
        with patch("rario.main.App") as mock_app:
            from rario.main import main
            main(["--stage", "world1-1"])
            assert mock_app.call_args.args[0] == "world1-1"
            assert mock_app.return_value.run.called

    def test_unknown_stage_exits(self):
        with patch("rario.main.pyxel") as mock_pyxel, patch("rario.renderer.pyxel"):
            _quiet_pyxel(mock_pyxel)
            from rario.main import main
            with pytest.raises(SystemExit) as exc_info:
                main(["--stage", "world9-9"])
            assert exc_info.value.code == 1

    def test_missing_config_exits(self, tmp_path):
        with patch("rario.main.App") as mock_app:
            from rario.main import main
            with pytest.raises(SystemExit) as exc_info:
                main(["--config", str(tmp_path / "missing.yaml")])
            assert exc_info.value.code == 1
            assert not mock_app.called
