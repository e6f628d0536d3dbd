"""Maze environment: grid model, pathfinding and snapshots."""

from .grid import (
    MOVES,
    PELLET_SCORE,
    POWER_PELLET_SCORE,
    Direction,
    MazeGrid,
    Tile,
    TileKind,
)
from .schemas import MazeGridState
from .helpers import (
    bfs_distances,
    grid_shortest_path,
    nearest_passable,
    next_step,
    render_ascii,
)

__all__ = [
    "MOVES",
    "PELLET_SCORE",
    "POWER_PELLET_SCORE",
    "Direction",
    "MazeGrid",
    "Tile",
    "TileKind",
    "MazeGridState",
    "bfs_distances",
    "grid_shortest_path",
    "nearest_passable",
    "next_step",
    "render_ascii",
]
