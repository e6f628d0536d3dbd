"""Agent shapes for the player and the adversaries.

Positions are continuous ``(row, col)`` pairs in tile units: the centre of
tile ``(r, c)`` is exactly ``(r, c)``. Every agent also carries the discrete
tile it is committed to; movement interpolates the position toward a tile
centre and snaps on arrival.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .environment import Direction, Tile
from .schemas import GhostMode

# Distances below this are treated as zero
EPSILON = 1e-6

Position = Tuple[float, float]


def tile_center(tile: Tile) -> Position:
    return float(tile[0]), float(tile[1])


def interpolate(position: Position, target: Tile, distance: float) -> Tuple[Position, bool]:
    """Move ``position`` toward the centre of ``target`` by at most ``distance``.

    Returns ``(new_position, arrived)``. Overshoot is clamped to the centre.
    """
    center = tile_center(target)
    d_row = center[0] - position[0]
    d_col = center[1] - position[1]
    remaining = math.hypot(d_row, d_col)
    if remaining <= distance + EPSILON:
        return center, True
    scale = distance / remaining
    return (position[0] + d_row * scale, position[1] + d_col * scale), False


def direction_angle(direction: Direction) -> float:
    """Facing angle for a movement direction, same convention as displacement facing."""
    return math.atan2(direction.d_row, direction.d_col)


@dataclass
class MovingAgent:
    """Continuous position plus the tile the agent is committed to."""

    tile: Tile
    position: Position = field(init=False, default=(0.0, 0.0))
    direction: Direction = Direction.NONE
    speed: float = 0.0

    def __post_init__(self) -> None:
        self.position = tile_center(self.tile)

    def snap_to(self, tile: Tile) -> None:
        self.tile = tile
        self.position = tile_center(tile)

    def distance_to(self, tile: Tile) -> float:
        center = tile_center(tile)
        return math.hypot(self.position[0] - center[0], self.position[1] - center[1])

    def is_centered(self, tolerance: float) -> bool:
        return self.distance_to(self.tile) < tolerance

    def move_toward(self, tile: Tile, distance: float) -> bool:
        self.position, arrived = interpolate(self.position, tile, distance)
        return arrived

    def distance_between(self, other: "MovingAgent") -> float:
        return math.hypot(
            self.position[0] - other.position[0],
            self.position[1] - other.position[1],
        )


@dataclass
class Player(MovingAgent):
    start_tile: Tile = (0, 0)
    pending: Direction = Direction.NONE
    facing: float = 0.0

    def reset(self) -> None:
        self.snap_to(self.start_tile)
        self.direction = Direction.NONE
        self.pending = Direction.NONE
        self.facing = 0.0


@dataclass
class Ghost(MovingAgent):
    # Stable index; fixes both the scatter corner and the planning order
    index: int = 0
    home_tile: Tile = (0, 0)
    mode: GhostMode = GhostMode.SCATTER
    edible: bool = False
    planned_tile: Optional[Tile] = None
    previous_tile: Optional[Tile] = None
    # Suppresses portal teleport for the first planning pass after a respawn
    just_respawned: bool = True

    def respawn(self) -> None:
        self.snap_to(self.home_tile)
        self.direction = Direction.NONE
        self.planned_tile = None
        self.previous_tile = None
        self.edible = False
        self.just_respawned = True

    @property
    def frightened(self) -> bool:
        return self.mode is GhostMode.FRIGHTENED
