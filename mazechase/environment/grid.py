"""Tile maze model.

The maze is built once from a textual layout and afterwards only changes when
collectibles are eaten (Collectible/PowerCollectible -> Open) or when the
whole grid is reset for a new round. Walls are never passable. A single
designated portal row may wrap horizontally at its two edge tiles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

# (row, col) coordinate into the maze
Tile = Tuple[int, int]

PELLET_SCORE = 10
POWER_PELLET_SCORE = 50


class TileKind(str, Enum):
    """Classification of a single maze cell."""

    WALL = "wall"
    OPEN = "open"
    COLLECTIBLE = "collectible"
    POWER_COLLECTIBLE = "power_collectible"
    SPAWN_AREA = "spawn_area"

    @classmethod
    def from_char(cls, char: str) -> "TileKind":
        return _CHAR_KINDS.get(char, cls.OPEN)

    @property
    def char(self) -> str:
        return _KIND_CHARS[self]

    @property
    def is_collectible(self) -> bool:
        return self in (TileKind.COLLECTIBLE, TileKind.POWER_COLLECTIBLE)


_CHAR_KINDS: Dict[str, TileKind] = {
    "#": TileKind.WALL,
    ".": TileKind.COLLECTIBLE,
    "o": TileKind.POWER_COLLECTIBLE,
    "G": TileKind.SPAWN_AREA,
}
_KIND_CHARS: Dict[TileKind, str] = {
    TileKind.WALL: "#",
    TileKind.COLLECTIBLE: ".",
    TileKind.POWER_COLLECTIBLE: "o",
    TileKind.SPAWN_AREA: "G",
    TileKind.OPEN: " ",
}


class Direction(Enum):
    """Closed set of movement directions; value is the (d_row, d_col) delta."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)
    NONE = (0, 0)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    def apply(self, tile: Tile, distance: int = 1) -> Tile:
        """Offset ``tile`` by this direction ``distance`` times (no bounds checks)."""
        return tile[0] + self.d_row * distance, tile[1] + self.d_col * distance


# Expansion order for neighbour searches. Fixed so BFS tie-breaking is stable.
MOVES: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


@dataclass
class MazeGrid:
    """Rectangular maze with collectible bookkeeping.

    ``rows`` must already be rectangular (see ``scenario.parse_layout``); the
    grid keeps them as the pristine layout that ``reset()`` rebuilds from.
    """

    rows: List[str]
    portal_row: Optional[int] = None
    portals_enabled: bool = True
    kinds: List[List[TileKind]] = field(init=False, repr=False)
    starting_count: int = field(init=False, default=0)
    _remaining: int = field(init=False, default=0, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def portals_active(self) -> bool:
        return self.portals_enabled and self.portal_row is not None

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def in_bounds(self, tile: Tile) -> bool:
        row, col = tile
        return 0 <= row < self.height and 0 <= col < self.width

    def classify(self, tile: Tile) -> TileKind:
        """Return the tile's kind; anything outside the maze counts as wall."""
        if not self.in_bounds(tile):
            return TileKind.WALL
        return self.kinds[tile[0]][tile[1]]

    def is_passable(self, tile: Tile) -> bool:
        return self.classify(tile) is not TileKind.WALL

    def spawn_tiles(self) -> List[Tile]:
        """Adversary spawn markers in row-major order."""
        return [
            (r, c)
            for r in range(self.height)
            for c in range(self.width)
            if self.kinds[r][c] is TileKind.SPAWN_AREA
        ]

    # ------------------------------------------------------------------
    # Movement queries
    # ------------------------------------------------------------------

    def step_target(self, tile: Tile, direction: Direction) -> Optional[Tile]:
        """Return the tile one step from ``tile`` in ``direction``, or None if blocked.

        Stepping off the left/right edge of the portal row wraps to the
        opposite edge tile when portals are enabled and that tile is not a wall.
        """
        if direction is Direction.NONE:
            return None
        row, col = direction.apply(tile)
        if not 0 <= row < self.height:
            return None
        if not 0 <= col < self.width:
            if not (self.portals_active and row == self.portal_row and direction.is_horizontal):
                return None
            col %= self.width
        target = (row, col)
        return target if self.is_passable(target) else None

    def crosses_portal(self, tile: Tile, direction: Direction) -> bool:
        """True when stepping from ``tile`` in ``direction`` leaves the grid on the portal row."""
        if not (self.portals_active and direction.is_horizontal and tile[0] == self.portal_row):
            return False
        col = tile[1] + direction.d_col
        return not 0 <= col < self.width

    def is_portal_crossing(self, origin: Tile, destination: Tile) -> bool:
        """True when ``origin`` and ``destination`` are the two edge tiles of the portal row."""
        if not self.portals_active or self.width < 3:
            return False
        if origin[0] != self.portal_row or destination[0] != self.portal_row:
            return False
        return {origin[1], destination[1]} == {0, self.width - 1}

    def neighbors(self, tile: Tile) -> List[Tile]:
        """Passable neighbour tiles (portal wrap included) in ``MOVES`` order."""
        result: List[Tile] = []
        for direction in MOVES:
            target = self.step_target(tile, direction)
            if target is not None and target not in result:
                result.append(target)
        return result

    # ------------------------------------------------------------------
    # Collectibles
    # ------------------------------------------------------------------

    def consume(self, tile: Tile) -> Tuple[int, bool]:
        """Eat the collectible at ``tile``.

        Returns ``(score_delta, triggers_power_mode)``. Non-collectible tiles
        are a no-op returning ``(0, False)``.
        """
        kind = self.classify(tile)
        if not kind.is_collectible:
            return 0, False
        self.kinds[tile[0]][tile[1]] = TileKind.OPEN
        self._remaining -= 1
        if kind is TileKind.POWER_COLLECTIBLE:
            return POWER_PELLET_SCORE, True
        return PELLET_SCORE, False

    def remaining_count(self) -> int:
        return self._remaining

    def progress(self) -> float:
        """Fraction of the round's collectibles eaten so far (0.0 - 1.0)."""
        if self.starting_count <= 0:
            return 0.0
        return 1.0 - (self._remaining / self.starting_count)

    def reset(self) -> None:
        """Rebuild every tile from the layout and recount collectibles."""
        self.kinds = [[TileKind.from_char(ch) for ch in row] for row in self.rows]
        count = sum(1 for row in self.kinds for kind in row if kind.is_collectible)
        self.starting_count = count
        self._remaining = count

    def render_rows(self) -> List[str]:
        """Current tile classifications as layout characters."""
        return ["".join(kind.char for kind in row) for row in self.kinds]
