"""Per-frame player movement.

The player turns only at tile centres: once centred, the buffered direction
request is adopted if its destination is passable, a blocked current
direction stops the player, and a non-zero direction commits the player to
the adjacent tile (or teleports it across an enabled portal edge). The
continuous position then glides toward the committed tile's centre.
"""

from __future__ import annotations

import math
from typing import List, Optional

from .agents import EPSILON, Player, direction_angle
from .environment import Direction, MazeGrid, Tile


def can_enter(grid: MazeGrid, tile: Tile, direction: Direction) -> bool:
    """True when the player may start moving from ``tile`` in ``direction``.

    Stepping off the edge of the portal row counts as allowed even if the
    opposite edge tile is a wall; the commit step then keeps the player put.
    """
    if direction is Direction.NONE:
        return False
    return grid.step_target(tile, direction) is not None or grid.crosses_portal(tile, direction)


def steer_player(player: Player, grid: MazeGrid, tolerance: float) -> Optional[Tile]:
    """Apply the turn-at-centre rules.

    Returns the tile the player was centred on, or None while it is between
    tiles (no turn is possible then).
    """
    if not player.is_centered(tolerance):
        return None
    player.snap_to(player.tile)
    centre = player.tile

    if player.pending is not Direction.NONE and can_enter(grid, player.tile, player.pending):
        player.direction = player.pending
        player.facing = direction_angle(player.direction)

    if player.direction is not Direction.NONE and not can_enter(grid, player.tile, player.direction):
        player.direction = Direction.NONE

    if player.direction is Direction.NONE:
        return centre

    if grid.crosses_portal(player.tile, player.direction):
        destination = grid.step_target(player.tile, player.direction)
        # Blocked destination: treat the portal like a wall and stay put
        if destination is not None:
            player.snap_to(destination)
        return centre

    player.tile = player.direction.apply(player.tile)
    return centre


def update_player(player: Player, grid: MazeGrid, delta: float, tolerance: float) -> List[Tile]:
    """Advance the player by one frame.

    Returns the tiles whose centre the player reached this frame, in order.
    Those are the tiles whose collectibles get eaten.
    """
    reached: List[Tile] = []
    centre = steer_player(player, grid, tolerance)
    if centre is not None:
        reached.append(centre)

    before = player.position
    arrived = player.move_toward(player.tile, player.speed * delta)
    if arrived and player.tile not in reached:
        reached.append(player.tile)

    d_row = player.position[0] - before[0]
    d_col = player.position[1] - before[1]
    if abs(d_row) + abs(d_col) > EPSILON:
        player.facing = math.atan2(d_row, d_col)
    elif player.direction is not Direction.NONE:
        player.facing = direction_angle(player.direction)

    return reached
