"""
Maze layout loading and validation.

A layout is a list of equal-width text rows plus a little metadata (portal
row, player start). Layouts are validated once at load time so a broken maze
is rejected up front instead of failing at an arbitrary tick.

Character legend:
- ``#`` wall
- ``.`` collectible
- ``o`` power collectible
- ``G`` adversary spawn marker
- ``P`` player start (becomes open floor)
- anything else: open floor

Layout file structure (``{layouts_dir}/{name}.json``):
```json
{
  "name": "Classic",
  "description": "...",
  "rows": ["#####", "#.G.#", ...],
  "portal_row": 14,
  "player_start": [23, 13]
}
```

Usage:
    loader = LayoutLoader()
    layout = loader.load("classic")
    grid = layout.build_grid(portals_enabled=True)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from .config import Config
from .environment import MazeGrid, TileKind


class MalformedLayoutError(ValueError):
    """Raised when a maze layout cannot be used to start a round."""

    def __init__(self, layout_name: str, reason: str) -> None:
        self.layout_name = layout_name
        self.reason = reason
        super().__init__(f"Layout '{layout_name}' is malformed: {reason}")


class MazeLayout(BaseModel):
    """Validated, rectangular maze description."""

    name: str = Field(..., description="Human-readable layout name")
    description: str = Field("", description="Optional notes about the layout")
    rows: List[str] = Field(..., description="Rectangular rows using the layout legend")
    portal_row: Optional[int] = Field(
        None, description="Row whose edge tiles wrap horizontally (None for no portals)",
    )
    player_start: Tuple[int, int] = Field(..., description="Player spawn tile (row, col)")

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0])

    def build_grid(self, *, portals_enabled: bool = True) -> MazeGrid:
        return MazeGrid(
            rows=list(self.rows),
            portal_row=self.portal_row,
            portals_enabled=portals_enabled,
        )


CLASSIC_ROWS: List[str] = [
    "############################",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#o####.#####.##.#####.####o#",
    "#.####.#####.##.#####.####.#",
    "#..........................#",
    "#.####.##.########.##.####.#",
    "#.####.##.########.##.####.#",
    "#......##....##....##......#",
    "######.##### ## #####.######",
    "     #.##### ## #####.#     ",
    "     #.##          ##.#     ",
    "     #.## ###GG### ##.#     ",
    "######.## #      # ##.######",
    "      .   #      #   .      ",
    "######.## #      # ##.######",
    "     #.## ######## ##.#     ",
    "     #.##          ##.#     ",
    "     #.## ######## ##.#     ",
    "######.## ######## ##.######",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#.####.#####.##.#####.####.#",
    "#o..##................##..o#",
    "###.##.##.########.##.##.###",
    "###.##.##.########.##.##.###",
    "#......##....##....##......#",
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",
]
CLASSIC_PORTAL_ROW = 14
CLASSIC_PLAYER_START = (23, 13)


def parse_layout(
    rows: Sequence[str],
    *,
    name: str = "custom",
    description: str = "",
    portal_row: Optional[int] = None,
    player_start: Optional[Sequence[int]] = None,
) -> MazeLayout:
    """Validate raw rows and return a rectangular ``MazeLayout``.

    A ``P`` marker, when present, supplies the player start and overrides
    ``player_start``. Short rows are not padded with open floor; every row
    must have the width of the first one.

    Raises:
        MalformedLayoutError: empty layout, rows of different widths,
            several ``P`` markers, no ``G`` spawn marker, missing or blocked
            player start, or a portal row outside the maze.
    """
    if not rows or not any(rows):
        raise MalformedLayoutError(name, "layout has no rows")

    width = len(rows[0])
    ragged = [r for r, row in enumerate(rows) if len(row) != width]
    if ragged:
        raise MalformedLayoutError(
            name, f"row {ragged[0]} has {len(rows[ragged[0]])} columns, expected {width}"
        )
    grid_rows = list(rows)

    markers = [
        (r, c) for r, row in enumerate(grid_rows) for c, ch in enumerate(row) if ch == "P"
    ]
    if len(markers) > 1:
        raise MalformedLayoutError(name, f"found {len(markers)} 'P' player markers")
    if markers:
        start: Optional[Tuple[int, int]] = markers[0]
        grid_rows = [row.replace("P", " ") for row in grid_rows]
    elif player_start is not None:
        start = (int(player_start[0]), int(player_start[1]))
    else:
        start = None

    if start is None:
        raise MalformedLayoutError(name, "no player start ('P' marker or player_start)")

    if not any("G" in row for row in grid_rows):
        raise MalformedLayoutError(name, "no adversary spawn ('G') markers")

    height = len(grid_rows)
    if not (0 <= start[0] < height and 0 <= start[1] < width):
        raise MalformedLayoutError(name, f"player start {start} is outside the maze")
    if TileKind.from_char(grid_rows[start[0]][start[1]]) is TileKind.WALL:
        raise MalformedLayoutError(name, f"player start {start} is a wall")

    if portal_row is not None and not 0 <= portal_row < height:
        raise MalformedLayoutError(
            name, f"portal row {portal_row} is outside rows 0..{height - 1}"
        )

    return MazeLayout(
        name=name,
        description=description,
        rows=grid_rows,
        portal_row=portal_row,
        player_start=start,
    )


CLASSIC_LAYOUT: MazeLayout = parse_layout(
    CLASSIC_ROWS,
    name="classic",
    description="28x30 arcade maze with a single tunnel row",
    portal_row=CLASSIC_PORTAL_ROW,
    player_start=CLASSIC_PLAYER_START,
)


class LayoutLoader:
    """Load and validate maze layouts from JSON files.

    Directory structure:
    - Default: {PROJECT_ROOT}/examples/layouts/
    - Override via constructor: LayoutLoader(Path("/custom/layouts"))
    - Layout files: {layout_name}.json (e.g., "classic.json")

    The name ``classic`` falls back to the built-in layout when no file by
    that name exists, so the package works without the examples directory.
    """

    def __init__(self, layouts_dir: Optional[Path] = None):
        """Initialize layout loader.

        Args:
            layouts_dir: Directory containing layout files.
                         Defaults to Config.LAYOUTS_DIR
        """
        self.layouts_dir = layouts_dir or Config.LAYOUTS_DIR

    def load(self, layout_name: str) -> MazeLayout:
        """Load a layout by name from a JSON file.

        Raises:
            FileNotFoundError: If the layout file doesn't exist
            MalformedLayoutError: If required fields are missing or the maze is invalid
            json.JSONDecodeError: If the file contains invalid JSON
        """
        layout_path = self.layouts_dir / f"{layout_name}.json"

        if not layout_path.exists():
            if layout_name == CLASSIC_LAYOUT.name:
                return CLASSIC_LAYOUT
            raise FileNotFoundError(
                f"Layout '{layout_name}' not found at {layout_path}"
            )

        data = json.loads(layout_path.read_text())
        return self._parse(layout_name, data)

    def _parse(self, layout_name: str, data: Dict[str, Any]) -> MazeLayout:
        rows = data.get("rows")
        if not isinstance(rows, list) or not all(isinstance(row, str) for row in rows):
            raise MalformedLayoutError(layout_name, "'rows' must be a list of strings")

        return parse_layout(
            rows,
            name=data.get("name", layout_name),
            description=data.get("description", ""),
            portal_row=data.get("portal_row"),
            player_start=data.get("player_start"),
        )

    def list_layouts(self) -> List[str]:
        """List all available layout files (without .json extension)."""
        if not self.layouts_dir.exists():
            return [CLASSIC_LAYOUT.name]

        names = [
            f.stem for f in self.layouts_dir.glob("*.json")
            if not f.name.startswith("_")
        ]
        if CLASSIC_LAYOUT.name not in names:
            names.append(CLASSIC_LAYOUT.name)
        return sorted(names)


def load_layout(layout_name: str) -> MazeLayout:
    """Convenience function to load a layout from the default directory."""
    loader = LayoutLoader()
    return loader.load(layout_name)
