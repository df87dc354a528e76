"""rario/simulation.py — Headless game simulation.

Provides SimState (complete headless game state), create_sim() for loading a
real stage, and sim_step() which advances one frame. No Pyxel imports; the
game window in main.py and the headless tooling drive the same step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from rario.actors import Actor, Enemy, Player, UpdateOutcome, create_enemy, create_player
from rario.camera import Camera, camera_update, create_camera
from rario.collision import collision_pass
from rario.config import DEFAULT_CONFIG, GameConfig
from rario.constants import DEFAULT_STAGE
from rario.level import load_stage
from rario.physics import Axis, InputState
from rario.tilemap import Tile


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

@dataclass
class JumpEvent:
    pass


@dataclass
class LandedEvent:
    pass


@dataclass
class BounceEvent:
    enemy_index: int


@dataclass
class FellOffWorldEvent:
    pass


Event = JumpEvent | LandedEvent | BounceEvent | FellOffWorldEvent


# ---------------------------------------------------------------------------
# SimState
# ---------------------------------------------------------------------------

@dataclass
class SimState:
    """Everything one play session simulates, minus rendering state."""

    config: GameConfig
    tiles: list[Tile]
    player: Player
    enemies: list[Enemy]
    camera: Camera
    level_width: int
    level_height: int
    frame: int = 0
    max_x_reached: float = 0.0
    jumps: int = 0
    player_lost: bool = False
    player_grounded: bool = True
    stage_name: str = ""
    images: dict = field(default_factory=dict)

    @property
    def actors(self) -> list[Actor]:
        """Player first, then enemies, in collision order."""
        return [self.player, *self.enemies]

    @property
    def player_world_x(self) -> float:
        return self.camera.x_back + self.player.x


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def create_sim(stage_name: str = DEFAULT_STAGE, config: Optional[GameConfig] = None) -> SimState:
    """Load a stage and initialize all game state. No Pyxel.

    Raises:
        ValueError: If stage_name is not recognized.
        FileNotFoundError: If stage data files are missing.
    """
    config = config or DEFAULT_CONFIG
    stage = load_stage(stage_name, config.tile_size)

    sx, sy = stage.player_start
    player = create_player(config, sx, sy)
    enemies = [create_enemy(config, s.x, s.y, s.vx) for s in stage.enemy_spawns]

    sim = SimState(
        config=config,
        tiles=stage.tiles,
        player=player,
        enemies=enemies,
        camera=create_camera(config, world_width=stage.level_width),
        level_width=stage.level_width,
        level_height=stage.level_height,
        stage_name=stage_name,
        images=stage.images,
    )
    sim.max_x_reached = sim.player_world_x
    return sim


def create_sim_from_tiles(
    tiles: Sequence[Tile],
    start_x: float,
    start_y: float,
    *,
    config: Optional[GameConfig] = None,
    enemies: Optional[list[Enemy]] = None,
) -> SimState:
    """Create a SimState from a bare tile list (for synthetic tests)."""
    config = config or DEFAULT_CONFIG
    sim = SimState(
        config=config,
        tiles=list(tiles),
        player=create_player(config, start_x, start_y),
        enemies=list(enemies or []),
        camera=create_camera(config),
        level_width=config.world_width,
        level_height=config.screen_height,
    )
    sim.max_x_reached = sim.player_world_x
    return sim


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------

def sim_step(sim: SimState, inp: InputState) -> list[Event]:
    """Advance the simulation by one frame.

    Returns a list of events that occurred during this frame. Once the player
    has fallen out of the world the state is frozen and no events follow.
    """
    events: list[Event] = []

    if sim.player_lost:
        return events

    player = sim.player

    # Horizontal input
    if inp.left:
        player.move_dir(-1)
    if inp.right:
        player.move_dir(1)

    # Scroll before collision so tiles are tested at this frame's offset
    camera_update(sim.camera, player, sim.enemies)

    enemy_vx = [enemy.vx for enemy in sim.enemies]
    hits = collision_pass(sim.actors, sim.tiles, sim.camera.x_back)

    # Enemy wall hits that reversed direction
    for i, (enemy, hit) in enumerate(zip(sim.enemies, hits[Axis.X][1:])):
        if hit is not None and enemy.vx != enemy_vx[i]:
            events.append(BounceEvent(enemy_index=i))

    grounded = not player.falling
    if grounded and not sim.player_grounded:
        events.append(LandedEvent())
    sim.player_grounded = grounded

    if inp.up and not player.falling:
        player.jump()
        sim.jumps += 1
        events.append(JumpEvent())

    # Per-actor bookkeeping
    if player.update(inp) is UpdateOutcome.LOST:
        sim.player_lost = True
        events.append(FellOffWorldEvent())
    for enemy in sim.enemies:
        enemy.update(inp)

    sim.max_x_reached = max(sim.max_x_reached, sim.player_world_x)
    sim.frame += 1
    return events
