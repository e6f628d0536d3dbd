"""
Pydantic schemas for the mazechase simulation.

Two families of models live here:
- ``GameSettings``: every tuning constant of a round, expressed in tiles and
  seconds so the simulation does not depend on the display refresh rate.
- Snapshots (``GameSnapshot`` and friends): detached, serializable copies of
  the live simulation state handed to renderers, listeners and tests.

The live state itself is a set of plain dataclasses (see ``state.py``) that
the per-tick update mutates; snapshots never alias it.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .environment import MazeGridState


# Status messages exposed to the UI layer
MESSAGE_NONE = ""
MESSAGE_DIED = "you died"
MESSAGE_GAME_OVER = "game over"
MESSAGE_LEVEL_COMPLETE = "level complete"


class GhostMode(str, Enum):
    """Behaviour mode of an adversary."""

    SCATTER = "scatter"
    CHASE = "chase"
    FRIGHTENED = "frightened"


class RoundOutcome(str, Enum):
    """Terminal result of a round."""

    WON = "won"
    LOST = "lost"


# ============================================================================
# Settings
# ============================================================================


class GameSettings(BaseModel):
    """Tuning constants for one round.

    Distances are measured in tiles and times in seconds. The defaults follow
    the classic arcade feel at 60 frames per second (e.g. the
    player covers 0.12 tiles per frame, i.e. 7.2 tiles per second).
    """

    portals_enabled: bool = Field(True, description="Allow wrap-around on the layout's portal row")
    starting_lives: int = Field(3, ge=1, description="Lives at round start")
    ghost_count: int = Field(4, ge=1, description="Number of adversaries")

    # Movement
    player_speed: float = Field(7.2, gt=0, description="Player speed in tiles per second")
    ghost_speed_ratio: float = Field(0.9, gt=0, description="Adversary base speed relative to the player")
    max_speed_bonus: float = Field(
        0.9, ge=0, description="Extra adversary speed multiplier reached at 100% progress",
    )
    tunnel_speed_factor: float = Field(0.92, gt=0, description="Adversary speed factor on the portal row")
    centering_tolerance: float = Field(
        0.1, gt=0, description="Distance (tiles) from a tile centre that counts as centred",
    )

    # Collision and scoring
    collision_radius: float = Field(0.6, gt=0, description="Player/adversary contact distance in tiles")
    ghost_score: int = Field(200, ge=0, description="Bonus for eating an edible adversary")
    power_duration: float = Field(8.0, gt=0, description="Seconds adversaries stay edible")

    # Difficulty curve
    base_mode_period: float = Field(7.0, gt=0, description="Scatter/chase period at 0% progress")
    min_mode_period: float = Field(2.0, gt=0, description="Floor of the scatter/chase period")
    mode_period_shrink: float = Field(
        0.6, ge=0, le=1, description="Fraction of the base period removed at 100% progress",
    )
    base_lookahead: int = Field(1, ge=0, description="Chase lookahead (tiles) at 0% progress")
    lookahead_growth: float = Field(4.0, ge=0, description="Lookahead tiles added at 100% progress")

    # Clock
    max_frame_delta: float = Field(
        5 / 60, gt=0, description="Largest frame delta (seconds) applied; larger gaps skip the tick",
    )
    auto_restart_delay: Optional[float] = Field(
        None, ge=0, description="Seconds after game over before restarting; None waits for restart()",
    )


# ============================================================================
# Snapshots
# ============================================================================


class AgentSnapshot(BaseModel):
    """Position and heading shared by the player and adversaries."""

    # Using List instead of Tuple keeps the JSON schema simple for clients
    position: List[float] = Field(
        ..., min_length=2, max_length=2, description="Continuous [row, col] in tile units",
    )
    tile: List[int] = Field(..., min_length=2, max_length=2, description="Current [row, col] tile")
    direction: str = Field("NONE", description="Movement direction name")


class PlayerSnapshot(AgentSnapshot):
    facing: float = Field(0.0, description="Facing angle in radians, atan2(d_row, d_col)")
    pending_direction: str = Field("NONE", description="Buffered turn request")


class GhostSnapshot(AgentSnapshot):
    index: int = Field(..., ge=0)
    mode: GhostMode
    edible: bool = False
    home: List[int] = Field(..., min_length=2, max_length=2)
    planned_tile: Optional[List[int]] = None


class GameSnapshot(BaseModel):
    """Everything a renderer needs for one frame."""

    tick: int = Field(0, ge=0, description="Number of applied simulation steps")
    score: int = Field(0, ge=0)
    lives: int = Field(0, ge=0)
    level: int = Field(1, ge=1)
    message: str = Field(MESSAGE_NONE, description="Status text for the UI")
    running: bool = True
    outcome: Optional[RoundOutcome] = None
    power_active: bool = False
    power_expires_at: Optional[float] = None
    scatter_phase: bool = True
    progress: float = Field(0.0, ge=0, le=1)
    player: PlayerSnapshot
    ghosts: List[GhostSnapshot] = Field(default_factory=list)
    grid: MazeGridState
