"""Pydantic schemas for maze snapshots.

These models mirror the ``MazeGrid`` dataclass in ``grid.py`` but ensure the
state handed to renderers stays serializable and detached from the live grid.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class MazeGridState(BaseModel):
    """Current tile classifications encoded as layout characters."""

    width: int
    height: int
    rows: List[str] = Field(
        default_factory=list,
        description="One string per row: '#' wall, '.' collectible, 'o' power, 'G' spawn, ' ' open",
    )
    portal_row: Optional[int] = Field(
        None, description="Row that wraps horizontally; None when portals are disabled",
    )
    remaining_collectibles: int = Field(0, ge=0)
    starting_collectibles: int = Field(0, ge=0)

    def char_at(self, row: int, col: int) -> str:
        return self.rows[row][col]
