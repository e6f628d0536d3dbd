"""Collision and scoring engine.

Handles collectible consumption, the power-mode timer, player/adversary
contact and the terminal round transitions. Power mode expiry compares the
wall clock against a stored expiry timestamp rather than counting down per
frame, so skipped ticks never stretch the frightened window.
"""

from __future__ import annotations

from enum import Enum

from .agents import Ghost
from .environment import Tile
from .logging_utils import log_error, log_power, log_success
from .schemas import (
    MESSAGE_DIED,
    MESSAGE_GAME_OVER,
    MESSAGE_LEVEL_COMPLETE,
    GhostMode,
    RoundOutcome,
)
from .state import GameState, reset_positions


class CollisionOutcome(str, Enum):
    GHOST_EATEN = "ghost_eaten"
    LIFE_LOST = "life_lost"
    GAME_OVER = "game_over"


def consume_at(state: GameState, tile: Tile, now: float) -> int:
    """Eat whatever collectible sits on ``tile``; returns the score awarded."""
    delta, triggers_power = state.grid.consume(tile)
    state.round.score += delta
    if triggers_power:
        activate_power_mode(state, now)
    return delta


def activate_power_mode(state: GameState, now: float) -> None:
    """Make every adversary edible until ``now + power_duration``."""
    round_state = state.round
    was_active = round_state.power_active
    round_state.power_active = True
    round_state.power_expires_at = now + state.settings.power_duration
    for ghost in state.ghosts:
        ghost.edible = True
        ghost.mode = GhostMode.FRIGHTENED
    if not was_active:
        log_power(f"Power mode on for {state.settings.power_duration:.1f}s")


def expire_power_mode(state: GameState, now: float) -> bool:
    """Clear edibility on every adversary once the expiry timestamp passes."""
    round_state = state.round
    if not round_state.power_active or now <= round_state.power_expires_at:
        return False
    round_state.power_active = False
    for ghost in state.ghosts:
        ghost.edible = False
    log_power("Power mode expired")
    return True


def collides(state: GameState, ghost: Ghost) -> bool:
    return state.player.distance_between(ghost) < state.settings.collision_radius


def eat_ghost(state: GameState, ghost: Ghost) -> None:
    state.round.score += state.settings.ghost_score
    ghost.respawn()
    log_success(f"Ghost {ghost.index} eaten (+{state.settings.ghost_score})")


def lose_life(state: GameState, now: float) -> CollisionOutcome:
    """Take one life; reset agents or end the round when none are left.

    Collectible progress is preserved either way.
    """
    round_state = state.round
    round_state.lives = max(round_state.lives - 1, 0)
    if round_state.lives <= 0:
        end_round(state, RoundOutcome.LOST, now)
        return CollisionOutcome.GAME_OVER

    round_state.message = MESSAGE_DIED
    reset_positions(state)
    log_error(f"Player died, {round_state.lives} lives left")
    return CollisionOutcome.LIFE_LOST


def resolve_collision(state: GameState, ghost: Ghost, now: float) -> CollisionOutcome:
    if ghost.edible:
        eat_ghost(state, ghost)
        return CollisionOutcome.GHOST_EATEN
    return lose_life(state, now)


def end_round(state: GameState, outcome: RoundOutcome, now: float) -> None:
    """Enter a terminal state; only a restart leaves it."""
    round_state = state.round
    round_state.running = False
    round_state.outcome = outcome
    round_state.ended_at = now
    if outcome is RoundOutcome.LOST:
        round_state.message = MESSAGE_GAME_OVER
        log_error(f"Game over, final score {round_state.score}")
    else:
        round_state.message = MESSAGE_LEVEL_COMPLETE
        log_success(f"Level complete, score {round_state.score}")
