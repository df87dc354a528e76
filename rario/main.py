"""rario/main.py — Game window, state machine and entry point.

Pyxel owns the window, event polling and 60 Hz frame pacing. Each update
reads the keyboard into an InputState and advances the headless simulation;
each draw renders the result. Falling off the world switches to a GAME OVER
screen and then restarts the stage.
"""

from __future__ import annotations

import argparse
import logging
import sys

import pyxel

from rario import renderer
from rario.config import GameConfig, load_config
from rario.constants import DEFAULT_STAGE, GAMEOVER_DELAY, TITLE
from rario.debug import DEBUG
from rario.physics import InputState
from rario.simulation import FellOffWorldEvent, SimState, create_sim, sim_step

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

def _read_input() -> InputState:
    """Map Pyxel keys to InputState."""
    return InputState(
        left=pyxel.btn(pyxel.KEY_LEFT),
        right=pyxel.btn(pyxel.KEY_RIGHT),
        up=pyxel.btn(pyxel.KEY_UP),
    )


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

class App:
    def __init__(self, stage_name: str = DEFAULT_STAGE, config: GameConfig | None = None):
        self.config = config or load_config()
        self.stage_name = stage_name

        cfg = self.config
        pyxel.init(cfg.screen_width, cfg.screen_height, title=TITLE, fps=cfg.fps)
        renderer.init_palette()

        self.state = "gameplay"
        self.gameover_timer = 0
        self.sim: SimState | None = None
        self.textures: dict = {}
        self._load_stage()

    def run(self) -> None:
        pyxel.run(self.update, self.draw)

    # ------------------------------------------------------------------
    # Stage loading
    # ------------------------------------------------------------------

    def _load_stage(self):
        self.sim = create_sim(self.stage_name, self.config)
        if not self.textures:
            self.textures = renderer.load_textures(self.sim.images)
        self.sim.player.texture = self.textures.get("player")
        for enemy in self.sim.enemies:
            enemy.texture = self.textures.get("enemy")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def update(self):
        if pyxel.btnp(pyxel.KEY_Q):
            pyxel.quit()

        if self.state == "gameplay":
            self._update_gameplay()
        elif self.state == "game_over":
            self._update_game_over()

    def draw(self):
        if self.state == "gameplay":
            self._draw_gameplay()
        elif self.state == "game_over":
            renderer.draw_game_over(self.config.screen_width, self.config.screen_height)

    # ------------------------------------------------------------------
    # GAMEPLAY
    # ------------------------------------------------------------------

    def _update_gameplay(self):
        events = sim_step(self.sim, _read_input())
        if any(isinstance(e, FellOffWorldEvent) for e in events):
            log.info(
                "Game over at frame %d, world x %.1f",
                self.sim.frame, self.sim.player_world_x,
            )
            self.gameover_timer = GAMEOVER_DELAY
            self.state = "game_over"

    def _draw_gameplay(self):
        sim = self.sim
        cfg = self.config
        renderer.draw_background(sim.camera, cfg.screen_height, self.textures.get("background"))
        renderer.draw_tiles(sim.tiles, sim.camera.x_back, cfg.screen_width)
        for actor in sim.actors:
            renderer.draw_actor(actor, pyxel.frame_count)
        renderer.draw_hud(sim.stage_name, sim.player_world_x, sim.frame, cfg.fps)
        if DEBUG:
            renderer.draw_debug_hud(sim.player, sim.camera.x_back)

    # ------------------------------------------------------------------
    # GAME OVER
    # ------------------------------------------------------------------

    def _update_game_over(self):
        self.gameover_timer -= 1
        if self.gameover_timer <= 0:
            log.info("Restarting stage %s", self.stage_name)
            self._load_stage()
            self.state = "gameplay"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Parse arguments, load resources and run the game window."""
    parser = argparse.ArgumentParser(description=TITLE)
    parser.add_argument("--stage", default=DEFAULT_STAGE, help="Stage to play")
    parser.add_argument("--config", help="YAML file of config overrides")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        app = App(args.stage, config)
    except (OSError, ValueError) as exc:
        log.error("Failed to load resources: %s", exc)
        sys.exit(1)

    app.run()


if __name__ == "__main__":
    main()
