"""Utilities for maze grids: breadth-first pathfinding and debug rendering."""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple

from .grid import MazeGrid, Tile
from .schemas import MazeGridState


def grid_shortest_path(grid: MazeGrid, start: Tile, goal: Tile) -> Optional[List[Tile]]:
    """Return a path of (row, col) coordinates avoiding walls.

    Uses BFS to find the shortest path on the maze (portal wrap included when
    the grid has portals enabled). Returns None if the goal is a wall or
    unreachable. Path includes start and goal.
    """

    # Trivial case: already at goal
    if start == goal:
        return [start]
    if not grid.is_passable(goal):
        return None

    visited = {start}
    # Parent links instead of copying paths per node; the maze is small but
    # the search runs once per adversary per planning tick.
    parents: Dict[Tile, Tile] = {}
    queue: deque[Tile] = deque([start])

    while queue:
        # Process cells in FIFO order (BFS). First path to reach goal is shortest.
        coord = queue.popleft()
        # grid.neighbors() yields in a fixed direction order so equal-length
        # paths always resolve the same way.
        for nb in grid.neighbors(coord):
            if nb in visited:
                continue
            visited.add(nb)
            parents[nb] = coord
            if nb == goal:
                return _unwind(parents, start, goal)
            queue.append(nb)
    # No path exists - goal disconnected
    return None


def _unwind(parents: Dict[Tile, Tile], start: Tile, goal: Tile) -> List[Tile]:
    path = [goal]
    while path[-1] != start:
        path.append(parents[path[-1]])
    path.reverse()
    return path


def next_step(grid: MazeGrid, start: Tile, goal: Tile) -> Optional[Tile]:
    """Return the first tile to step onto when walking from ``start`` to ``goal``.

    None when ``start == goal`` or no path exists.
    """
    path = grid_shortest_path(grid, start, goal)
    if path is None or len(path) < 2:
        return None
    return path[1]


def bfs_distances(grid: MazeGrid, start: Tile) -> Dict[Tile, int]:
    """Hop count from ``start`` to every reachable tile (portal wrap included)."""
    distances = {start: 0}
    queue: deque[Tile] = deque([start])
    while queue:
        coord = queue.popleft()
        for nb in grid.neighbors(coord):
            if nb not in distances:
                distances[nb] = distances[coord] + 1
                queue.append(nb)
    return distances


def nearest_passable(grid: MazeGrid, tile: Tile) -> Tile:
    """Closest non-wall tile to ``tile`` by Manhattan distance (row-major tie break)."""
    if grid.is_passable(tile):
        return tile
    best: Optional[Tuple[int, Tile]] = None
    for r in range(grid.height):
        for c in range(grid.width):
            if not grid.is_passable((r, c)):
                continue
            distance = abs(r - tile[0]) + abs(c - tile[1])
            if best is None or distance < best[0]:
                best = (distance, (r, c))
    if best is None:
        raise ValueError("Maze has no passable tiles")
    return best[1]


_DEFAULT_TILE_SYMBOLS: Dict[str, str] = {
    "#": "██",
    ".": "· ",
    "o": "● ",
    "G": "--",
    " ": "  ",
    "player": "C ",
    "ghost": "M ",
    "ghost_edible": "w ",
}


def render_ascii(
    grid: MazeGridState,
    *,
    player: Optional[Sequence[int]] = None,
    ghosts: Sequence[Tuple[Sequence[int], bool]] = (),
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render the maze snapshot as text, overlaying agents on their tiles.

    ``ghosts`` is a sequence of ``(tile, edible)`` pairs. Intended for debug
    views and headless runs; unknown tile characters fall back to ``??``.
    """

    mapping = {**_DEFAULT_TILE_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    overlay: Dict[Tuple[int, int], str] = {}
    for tile, edible in ghosts:
        overlay[(tile[0], tile[1])] = mapping["ghost_edible" if edible else "ghost"]
    if player is not None:
        overlay[(player[0], player[1])] = mapping["player"]

    lines: List[str] = []
    for r, row in enumerate(grid.rows):
        row_chars: List[str] = []
        for c, ch in enumerate(row):
            row_chars.append(overlay.get((r, c)) or mapping.get(ch, "??"))
        lines.append("".join(row_chars))
    return "\n".join(lines)
