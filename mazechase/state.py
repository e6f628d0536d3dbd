"""Explicit simulation state.

All mutable round data lives in one ``GameState`` object that the per-tick
update receives and returns; there are no module-level globals. Renderers
read ``snapshot(state)``, a detached pydantic copy.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from .agents import Ghost, Player
from .clock import ModeCycle
from .environment import MazeGrid, MazeGridState
from .logging_utils import log_info
from .scenario import MazeLayout
from .schemas import (
    MESSAGE_NONE,
    GameSettings,
    GameSnapshot,
    GhostMode,
    GhostSnapshot,
    PlayerSnapshot,
    RoundOutcome,
)


@dataclass
class RoundState:
    score: int = 0
    lives: int = 3
    level: int = 1
    power_active: bool = False
    power_expires_at: float = 0.0
    mode_cycle: ModeCycle = field(default_factory=ModeCycle)
    running: bool = True
    message: str = MESSAGE_NONE
    outcome: Optional[RoundOutcome] = None
    # Wall-clock time of the terminal transition, for auto-restart
    ended_at: Optional[float] = None
    tick: int = 0


@dataclass
class GameState:
    layout: MazeLayout
    settings: GameSettings
    grid: MazeGrid
    player: Player
    ghosts: List[Ghost]
    round: RoundState
    rng: random.Random

    @property
    def remaining(self) -> int:
        return self.grid.remaining_count()


def new_game(
    layout: MazeLayout,
    settings: Optional[GameSettings] = None,
    *,
    seed: Optional[int] = None,
) -> GameState:
    """Build grid, agents and round state for ``layout`` at round-start values."""
    settings = settings or GameSettings()
    grid = layout.build_grid(portals_enabled=settings.portals_enabled)
    spawns = grid.spawn_tiles()

    player = Player(tile=layout.player_start, start_tile=layout.player_start, speed=settings.player_speed)
    ghosts = [
        Ghost(tile=spawns[i % len(spawns)], index=i, home_tile=spawns[i % len(spawns)])
        for i in range(settings.ghost_count)
    ]
    state = GameState(
        layout=layout,
        settings=settings,
        grid=grid,
        player=player,
        ghosts=ghosts,
        round=RoundState(lives=settings.starting_lives),
        rng=random.Random(seed),
    )
    reset_positions(state)
    return state


def restart(state: GameState) -> GameState:
    """Reinitialize grid, round and agents in place; callable at any time."""
    state.grid.reset()
    state.round = RoundState(lives=state.settings.starting_lives)
    reset_positions(state)
    log_info(
        f"Round start on '{state.layout.name}': "
        f"{state.grid.remaining_count()} collectibles, {state.round.lives} lives"
    )
    return state


def reset_positions(state: GameState) -> None:
    """Return every agent to its spawn tile; the grid is left untouched."""
    state.player.reset()
    state.player.speed = state.settings.player_speed
    for ghost in state.ghosts:
        ghost.respawn()
        ghost.mode = GhostMode.SCATTER


def snapshot(state: GameState) -> GameSnapshot:
    """Detached copy of everything a renderer reads."""
    grid = state.grid
    round_state = state.round
    player = state.player
    return GameSnapshot(
        tick=round_state.tick,
        score=round_state.score,
        lives=round_state.lives,
        level=round_state.level,
        message=round_state.message,
        running=round_state.running,
        outcome=round_state.outcome,
        power_active=round_state.power_active,
        power_expires_at=round_state.power_expires_at if round_state.power_active else None,
        scatter_phase=round_state.mode_cycle.scatter,
        progress=grid.progress(),
        player=PlayerSnapshot(
            position=list(player.position),
            tile=list(player.tile),
            direction=player.direction.name,
            facing=player.facing,
            pending_direction=player.pending.name,
        ),
        ghosts=[
            GhostSnapshot(
                position=list(ghost.position),
                tile=list(ghost.tile),
                direction=ghost.direction.name,
                index=ghost.index,
                mode=ghost.mode,
                edible=ghost.edible,
                home=list(ghost.home_tile),
                planned_tile=list(ghost.planned_tile) if ghost.planned_tile is not None else None,
            )
            for ghost in state.ghosts
        ],
        grid=MazeGridState(
            width=grid.width,
            height=grid.height,
            rows=grid.render_rows(),
            portal_row=grid.portal_row if grid.portals_active else None,
            remaining_collectibles=grid.remaining_count(),
            starting_collectibles=grid.starting_count,
        ),
    )
