"""
SimulationRules interface for defining the per-tick update of a mazechase round.

This module provides the abstract base class for world rules plus the default
arcade implementation. The orchestrator owns the clock and input; the rules
own everything that happens inside a single tick.

Key responsibilities:
- Apply one tick of movement, planning, collisions and scoring
- Decide when the loop should stop (terminal round states)
- Lifecycle hook when a round (re)starts

Design principle: one tick is one pure-Python fold over an explicit state
object. Nothing inside a tick blocks, retries, or touches I/O.
"""

from abc import ABC, abstractmethod

from .clock import Difficulty
from .ghosts import advance_ghost, ghost_speed, plan_moves, update_modes
from .logging_utils import log_deterministic
from .player import update_player
from .schemas import RoundOutcome
from .scoring import (
    CollisionOutcome,
    collides,
    consume_at,
    end_round,
    expire_power_mode,
    resolve_collision,
)
from .state import GameState


class SimulationRules(ABC):
    """Abstract base class for the per-tick update of a round.

    The orchestrator calls ``apply_tick`` once per accepted frame with the
    elapsed seconds and the current wall-clock timestamp. Implementations
    mutate the given ``GameState`` and return it, so the same object flows
    through every tick of a round.

    What BELONGS in SimulationRules:
    - Agent movement and turn handling
    - Adversary targeting and move planning
    - Collision detection and score/lives bookkeeping
    - Timers (power mode, scatter/chase cycle)

    What does NOT belong here:
    - Frame timing and anomalous-delta rejection (``GameClock``)
    - Input capture, rendering, audio
    """

    @abstractmethod
    def apply_tick(self, state: GameState, delta: float, now: float) -> GameState:
        """
        Advance the round by one frame.

        Args:
            state: Current game state (mutated in place)
            delta: Seconds since the previous accepted tick (already validated)
            now: Wall-clock timestamp of this tick, used for expiry comparisons

        Returns:
            The updated game state
        """
        pass

    def on_round_start(self, state: GameState) -> GameState:
        """
        Hook called after every restart, before the first tick of the round.

        Override to tweak the fresh state (e.g. change lives for a practice
        mode). Default leaves the state untouched.
        """
        return state

    def should_stop(self, state: GameState) -> bool:
        """Return True when the round reached a terminal state."""
        return not state.round.running


class ArcadeRules(SimulationRules):
    """Default rules: the arcade round as described by the game settings.

    Tick order:
    1. Player steering, movement and collectible consumption; clearing the
       last collectible ends the round before any adversary moves
    2. Scatter/chase toggle and power-mode expiry
    3. Adversary speed and mode refresh
    4. Adversary planning (sequential reservation fold)
    5. Adversary movement, each followed by its collision check
    """

    def apply_tick(self, state: GameState, delta: float, now: float) -> GameState:
        round_state = state.round
        if not round_state.running:
            return state
        round_state.tick += 1

        settings = state.settings
        grid = state.grid
        difficulty = Difficulty.from_progress(grid.progress(), settings)

        # 1. Player
        for tile in update_player(state.player, grid, delta, settings.centering_tolerance):
            consume_at(state, tile, now)
        if grid.remaining_count() == 0:
            end_round(state, RoundOutcome.WON, now)
            return state

        # 2. Timers. Power expiry is independent of the scatter/chase phase.
        if round_state.mode_cycle.advance(delta, difficulty.mode_period):
            phase = "scatter" if round_state.mode_cycle.scatter else "chase"
            log_deterministic(
                f"[Ghosts] Switching to {phase} (period {difficulty.mode_period:.1f}s)"
            )
        expire_power_mode(state, now)

        # 3. Adversary speed and modes
        speed = ghost_speed(settings.player_speed, settings.ghost_speed_ratio, difficulty)
        for ghost in state.ghosts:
            ghost.speed = speed
        update_modes(state.ghosts, round_state.mode_cycle.scatter)

        # 4. Planning
        plan_moves(
            state.ghosts,
            grid,
            state.player,
            difficulty,
            state.rng,
            settings.centering_tolerance,
        )

        # 5. Movement and collisions
        for ghost in state.ghosts:
            advance_ghost(ghost, grid, delta, settings.tunnel_speed_factor)
            if not collides(state, ghost):
                continue
            outcome = resolve_collision(state, ghost, now)
            if outcome is not CollisionOutcome.GHOST_EATEN:
                # Agents were reset (or the round ended); nothing else moves this tick
                return state

        return state
