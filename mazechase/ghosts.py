"""Adversary targeting, move planning and movement.

Planning is a sequential fold over the adversaries in index order. Each
non-frightened adversary claims (reserves) the tile it commits to, and
adversaries later in the order route around tiles already claimed in the
same tick. Index order is the tie-break rule: adversary 0 always gets first
pick. Reservation is advisory; when every alternative is taken the first
candidate is accepted anyway so no adversary can deadlock.

Frightened adversaries wander randomly and neither claim tiles nor respect
claims.
"""

from __future__ import annotations

import math
import random
from typing import Dict, Optional, Sequence, Set

from .agents import Ghost, Player
from .clock import Difficulty
from .environment import Direction, MazeGrid, Tile, nearest_passable, next_step
from .logging_utils import log_error, pathing_debug_enabled
from .schemas import GhostMode


def scatter_corner(grid: MazeGrid, index: int) -> Tile:
    """Home corner for adversary ``index``, moved onto the nearest open tile."""
    corners = [
        (0, 0),
        (0, grid.width - 1),
        (grid.height - 1, 0),
        (grid.height - 1, grid.width - 1),
    ]
    return nearest_passable(grid, corners[index % len(corners)])


def chase_target(grid: MazeGrid, player: Player, lookahead: int) -> Tile:
    """Player tile projected ``lookahead`` tiles along its direction.

    Clamped to the grid; falls back to the player's own tile when the
    projected tile is a wall.
    """
    row, col = player.direction.apply(player.tile, lookahead)
    row = min(max(row, 0), grid.height - 1)
    col = min(max(col, 0), grid.width - 1)
    if grid.is_passable((row, col)):
        return row, col
    return player.tile


def target_for(ghost: Ghost, grid: MazeGrid, player: Player, difficulty: Difficulty) -> Tile:
    if ghost.mode is GhostMode.SCATTER:
        return scatter_corner(grid, ghost.index)
    return chase_target(grid, player, difficulty.lookahead)


def update_modes(ghosts: Sequence[Ghost], scatter_phase: bool) -> None:
    """Edible adversaries are frightened; the rest follow the shared phase."""
    shared = GhostMode.SCATTER if scatter_phase else GhostMode.CHASE
    for ghost in ghosts:
        ghost.mode = GhostMode.FRIGHTENED if ghost.edible else shared


def direction_between(grid: MazeGrid, origin: Tile, destination: Tile) -> Direction:
    """Direction of a single step, portal crossings included."""
    if origin == destination:
        return Direction.NONE
    if grid.is_portal_crossing(origin, destination):
        return Direction.LEFT if origin[1] == 0 else Direction.RIGHT
    d_row = destination[0] - origin[0]
    d_col = destination[1] - origin[1]
    for direction in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT):
        if direction.value == (d_row, d_col):
            return direction
    return Direction.NONE


def _random_neighbor(
    grid: MazeGrid, ghost: Ghost, rng: random.Random, *, avoid_previous: bool
) -> Tile:
    options = grid.neighbors(ghost.tile)
    if avoid_previous:
        forward = [tile for tile in options if tile != ghost.previous_tile]
        options = forward or options
    if not options:
        return ghost.tile
    return rng.choice(options)


def _unreserved_alternative(
    grid: MazeGrid, ghost: Ghost, target: Tile, reserved: Set[Tile]
) -> Optional[Tile]:
    options = sorted(
        grid.neighbors(ghost.tile),
        key=lambda tile: math.hypot(tile[0] - target[0], tile[1] - target[1]),
    )
    for tile in options:
        if tile not in reserved and tile != ghost.previous_tile:
            return tile
    return None


def _commit(ghost: Ghost, grid: MazeGrid, chosen: Tile) -> None:
    if chosen == ghost.tile:
        ghost.direction = Direction.NONE
        return
    ghost.direction = direction_between(grid, ghost.tile, chosen)
    if not ghost.just_respawned and grid.is_portal_crossing(ghost.tile, chosen):
        # Edge-to-edge hop happens instantly instead of gliding across the maze
        ghost.previous_tile = ghost.tile
        ghost.snap_to(chosen)
        ghost.planned_tile = None
        return
    ghost.planned_tile = chosen


def choose_tile(
    ghost: Ghost,
    grid: MazeGrid,
    player: Player,
    difficulty: Difficulty,
    reserved: Set[Tile],
    rng: random.Random,
) -> Tile:
    """Pick the next tile for a centred, uncommitted adversary."""
    if ghost.frightened:
        return _random_neighbor(grid, ghost, rng, avoid_previous=False)

    target = target_for(ghost, grid, player, difficulty)
    step = next_step(grid, ghost.tile, target)
    if step is None:
        if ghost.tile != target and pathing_debug_enabled():
            log_error(
                f"[Pathing] Ghost {ghost.index} has no path from {ghost.tile} to {target}; "
                "choosing a random neighbour"
            )
        step = _random_neighbor(grid, ghost, rng, avoid_previous=True)

    if step in reserved:
        alternative = _unreserved_alternative(grid, ghost, target, reserved)
        if alternative is not None:
            return alternative
    return step


def plan_moves(
    ghosts: Sequence[Ghost],
    grid: MazeGrid,
    player: Player,
    difficulty: Difficulty,
    rng: random.Random,
    tolerance: float,
) -> Dict[int, Tile]:
    """Run one planning tick. Returns the tile each adversary committed to, by index.

    Tiles already committed by non-frightened adversaries still in transit
    are claimed before anyone plans, so a fresh plan never converges on them.
    """
    reserved: Set[Tile] = {
        ghost.planned_tile
        for ghost in ghosts
        if ghost.planned_tile is not None and not ghost.frightened
    }
    commitments: Dict[int, Tile] = {}

    for ghost in sorted(ghosts, key=lambda g: g.index):
        if ghost.planned_tile is not None or not ghost.is_centered(tolerance):
            if ghost.planned_tile is not None:
                commitments[ghost.index] = ghost.planned_tile
            ghost.just_respawned = False
            continue

        ghost.snap_to(ghost.tile)
        chosen = choose_tile(ghost, grid, player, difficulty, reserved, rng)
        if not ghost.frightened:
            reserved.add(chosen)
        _commit(ghost, grid, chosen)
        commitments[ghost.index] = chosen
        ghost.just_respawned = False

    return commitments


def advance_ghost(ghost: Ghost, grid: MazeGrid, delta: float, tunnel_factor: float) -> None:
    """Glide toward the committed tile; arrival makes it the current tile."""
    factor = tunnel_factor if grid.portals_active and ghost.tile[0] == grid.portal_row else 1.0
    target = ghost.planned_tile if ghost.planned_tile is not None else ghost.tile
    arrived = ghost.move_toward(target, ghost.speed * factor * delta)
    if arrived and ghost.planned_tile is not None:
        ghost.previous_tile = ghost.tile
        ghost.tile = ghost.planned_tile
        ghost.planned_tile = None


def ghost_speed(player_speed: float, ratio: float, difficulty: Difficulty) -> float:
    return player_speed * ratio * difficulty.speed_multiplier

