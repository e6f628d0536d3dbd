"""Collision, power mode and scoring bookkeeping."""

from mazechase.schemas import (
    MESSAGE_DIED,
    MESSAGE_GAME_OVER,
    MESSAGE_LEVEL_COMPLETE,
    GameSettings,
    GhostMode,
    RoundOutcome,
)
from mazechase.scenario import parse_layout
from mazechase.scoring import (
    CollisionOutcome,
    activate_power_mode,
    collides,
    consume_at,
    end_round,
    expire_power_mode,
    resolve_collision,
)
from mazechase.state import new_game


def _state(lives=3, ghost_count=2):
    layout = parse_layout(
        [
            "#########",
            "#P..o...#",
            "#.#####.#",
            "#...G...#",
            "#########",
        ],
        name="ring",
    )
    settings = GameSettings(starting_lives=lives, ghost_count=ghost_count)
    return new_game(layout, settings, seed=1)


def test_consume_awards_points():
    state = _state()

    assert consume_at(state, (1, 2), now=0.0) == 10
    assert consume_at(state, (1, 2), now=0.0) == 0
    assert state.round.score == 10
    assert not state.round.power_active


def test_power_collectible_makes_every_ghost_edible():
    state = _state()

    assert consume_at(state, (1, 4), now=2.0) == 50
    assert state.round.power_active
    assert state.round.power_expires_at == 10.0
    assert all(ghost.edible for ghost in state.ghosts)
    assert all(ghost.mode is GhostMode.FRIGHTENED for ghost in state.ghosts)


def test_power_mode_refresh_extends_expiry():
    state = _state()
    activate_power_mode(state, now=1.0)
    activate_power_mode(state, now=5.0)

    assert state.round.power_expires_at == 13.0
    assert not expire_power_mode(state, now=12.0)
    assert state.round.power_active


def test_power_mode_expires_strictly_after_deadline():
    state = _state()
    activate_power_mode(state, now=0.0)

    assert not expire_power_mode(state, now=8.0)
    assert all(ghost.edible for ghost in state.ghosts)

    assert expire_power_mode(state, now=8.01)
    assert not state.round.power_active
    assert not any(ghost.edible for ghost in state.ghosts)
    # Already expired: nothing left to do
    assert not expire_power_mode(state, now=9.0)


def test_collision_radius():
    state = _state()
    ghost = state.ghosts[0]
    ghost.position = (1.0, 1.61)
    assert not collides(state, ghost)

    ghost.position = (1.0, 1.5)
    assert collides(state, ghost)


def test_eating_edible_ghost_scores_and_respawns():
    state = _state()
    ghost = state.ghosts[0]
    activate_power_mode(state, now=0.0)
    ghost.snap_to((1, 2))

    outcome = resolve_collision(state, ghost, now=1.0)

    assert outcome is CollisionOutcome.GHOST_EATEN
    assert state.round.score == 200
    assert ghost.tile == ghost.home_tile
    assert not ghost.edible
    assert ghost.just_respawned
    assert state.round.lives == 3
    # Power mode keeps running for the others
    assert state.round.power_active
    assert state.ghosts[1].edible


def test_life_lost_resets_agents_but_keeps_collectibles():
    state = _state()
    consume_at(state, (1, 2), now=0.0)
    remaining = state.remaining
    state.player.snap_to((1, 3))
    ghost = state.ghosts[0]
    ghost.snap_to((1, 3))

    outcome = resolve_collision(state, ghost, now=1.0)

    assert outcome is CollisionOutcome.LIFE_LOST
    assert state.round.lives == 2
    assert state.round.message == MESSAGE_DIED
    assert state.round.running
    assert state.player.tile == (1, 1)
    assert ghost.tile == ghost.home_tile
    assert state.remaining == remaining
    assert state.round.score == 10


def test_last_life_ends_round():
    state = _state(lives=1)
    ghost = state.ghosts[0]
    ghost.snap_to(state.player.tile)

    outcome = resolve_collision(state, ghost, now=4.0)

    assert outcome is CollisionOutcome.GAME_OVER
    assert state.round.lives == 0
    assert not state.round.running
    assert state.round.outcome is RoundOutcome.LOST
    assert state.round.message == MESSAGE_GAME_OVER
    assert state.round.ended_at == 4.0


def test_end_round_won():
    state = _state()

    end_round(state, RoundOutcome.WON, now=3.0)

    assert not state.round.running
    assert state.round.outcome is RoundOutcome.WON
    assert state.round.message == MESSAGE_LEVEL_COMPLETE
