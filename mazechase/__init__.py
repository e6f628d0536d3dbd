"""
mazechase - tile maze chase simulation core.

Maze navigation, adversary pursuit and collision/scoring for an arcade
maze game, independent of any rendering, audio or input toolkit.

No global state. No rendering. All dependencies injected by the caller.
"""

__version__ = "0.1.0"

# Main loop driver
from .orchestrator import Orchestrator

# Core interfaces
from .simulation_rules import SimulationRules, ArcadeRules
from .state import GameState, RoundState, new_game, restart, snapshot
from .agents import Player, Ghost
from .clock import GameClock, Difficulty, ModeCycle

from .environment import (
    Direction,
    MazeGrid,
    MazeGridState,
    Tile,
    TileKind,
    bfs_distances,
    grid_shortest_path,
    next_step,
    render_ascii,
)

# Schemas
from .schemas import (
    GameSettings,
    GameSnapshot,
    GhostMode,
    GhostSnapshot,
    PlayerSnapshot,
    RoundOutcome,
)

# Layout helpers
from .scenario import (
    CLASSIC_LAYOUT,
    LayoutLoader,
    MalformedLayoutError,
    MazeLayout,
    load_layout,
    parse_layout,
)

__all__ = [
    # Main class
    "Orchestrator",
    # Core interfaces
    "SimulationRules",
    "ArcadeRules",
    "GameState",
    "RoundState",
    "new_game",
    "restart",
    "snapshot",
    "Player",
    "Ghost",
    "GameClock",
    "Difficulty",
    "ModeCycle",
    # Environment
    "Direction",
    "MazeGrid",
    "MazeGridState",
    "Tile",
    "TileKind",
    "bfs_distances",
    "grid_shortest_path",
    "next_step",
    "render_ascii",
    # Schemas
    "GameSettings",
    "GameSnapshot",
    "GhostMode",
    "GhostSnapshot",
    "PlayerSnapshot",
    "RoundOutcome",
    # Layouts
    "CLASSIC_LAYOUT",
    "LayoutLoader",
    "MalformedLayoutError",
    "MazeLayout",
    "load_layout",
    "parse_layout",
]
