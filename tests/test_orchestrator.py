"""Tests covering the orchestrator loop with an injected clock."""

import math

import pytest

from mazechase.environment import Direction
from mazechase.orchestrator import Orchestrator
from mazechase.scenario import parse_layout
from mazechase.schemas import GameSettings, RoundOutcome
from mazechase.simulation_rules import ArcadeRules, SimulationRules
from mazechase.state import GameState

FRAME = 1 / 60

CORRIDOR = parse_layout(["#######", "#P...G#", "#######"], name="corridor")
SINGLE_PELLET = parse_layout(["#######", "#P.#G #", "#######"], name="single")


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class SteppingClock(FakeClock):
    """Advances by one frame every time it is read."""

    def __call__(self) -> float:
        self.now += FRAME
        return self.now


class CountingRules(SimulationRules):
    """Records every delta it is given; never ends the round."""

    def __init__(self):
        self.deltas = []
        self.round_starts = 0

    def apply_tick(self, state: GameState, delta: float, now: float) -> GameState:
        self.deltas.append(delta)
        state.round.tick += 1
        return state

    def on_round_start(self, state: GameState) -> GameState:
        self.round_starts += 1
        return state


def _orchestrator(layout=CORRIDOR, clock=None, rules=None, **settings):
    settings.setdefault("ghost_count", 1)
    return Orchestrator(
        layout=layout,
        settings=GameSettings(**settings),
        simulation_rules=rules,
        seed=0,
        time_source=clock or FakeClock(),
    )


def test_constructor_starts_a_round():
    rules = CountingRules()
    orchestrator = _orchestrator(rules=rules)

    frame = orchestrator.snapshot()
    assert orchestrator.running
    assert frame.tick == 0
    assert frame.lives == 3
    assert frame.grid.remaining_collectibles == 3
    assert rules.round_starts == 1


def test_tick_passes_frame_delta_to_rules():
    rules = CountingRules()
    orchestrator = _orchestrator(rules=rules)

    assert orchestrator.tick(now=FRAME)
    assert orchestrator.tick(now=3 * FRAME)

    assert rules.deltas == pytest.approx([FRAME, 2 * FRAME])
    assert orchestrator.snapshot().tick == 2


@pytest.mark.parametrize("bad_now", [1.0, -1.0, math.nan, math.inf])
def test_anomalous_delta_skips_the_tick(bad_now):
    rules = CountingRules()
    orchestrator = _orchestrator(rules=rules)

    assert not orchestrator.tick(now=bad_now)
    assert rules.deltas == []
    assert orchestrator.snapshot().tick == 0


def test_loop_resumes_after_skipped_tick():
    rules = CountingRules()
    orchestrator = _orchestrator(rules=rules)

    assert not orchestrator.tick(now=10.0)
    assert orchestrator.tick(now=10.0 + FRAME)
    assert rules.deltas == pytest.approx([FRAME])


def test_request_direction_is_buffered_until_centre():
    clock = FakeClock()
    orchestrator = _orchestrator(clock=clock)

    orchestrator.request_direction(Direction.RIGHT)
    assert orchestrator.snapshot().player.pending_direction == "RIGHT"

    for n in range(1, 10):
        orchestrator.tick(now=n * FRAME)

    frame = orchestrator.snapshot()
    assert frame.player.direction == "RIGHT"
    assert frame.score == 10


def test_tick_listeners_receive_snapshots():
    seen = []
    orchestrator = _orchestrator()
    orchestrator.tick_listeners.append(lambda tick, frame: seen.append((tick, frame.tick)))

    def broken(tick, frame):
        raise RuntimeError("listener failure")

    orchestrator.tick_listeners.append(broken)

    for n in range(1, 4):
        orchestrator.tick(now=n * FRAME)

    assert seen == [(1, 1), (2, 2), (3, 3)]


def test_restart_resets_round_and_clock():
    clock = FakeClock()
    orchestrator = _orchestrator(clock=clock)
    orchestrator.request_direction(Direction.RIGHT)
    for n in range(1, 10):
        orchestrator.tick(now=n * FRAME)
    assert orchestrator.snapshot().score == 10

    frame = orchestrator.restart(now=50.0)

    assert frame.score == 0
    assert frame.tick == 0
    assert frame.grid.remaining_collectibles == 3
    assert frame.player.pending_direction == "NONE"
    # Delta is measured from the restart timestamp
    assert orchestrator.tick(now=50.0 + FRAME)


def test_game_over_waits_for_restart_without_auto_restart():
    orchestrator = _orchestrator(starting_lives=1)
    n = 0
    while orchestrator.running and n < 200:
        n += 1
        orchestrator.tick(now=n * FRAME)

    assert not orchestrator.running
    assert orchestrator.snapshot().outcome is RoundOutcome.LOST
    assert not orchestrator.tick(now=1000.0)
    assert not orchestrator.running


def test_auto_restart_after_delay():
    orchestrator = _orchestrator(starting_lives=1, auto_restart_delay=0.5)
    n = 0
    while orchestrator.running and n < 200:
        n += 1
        orchestrator.tick(now=n * FRAME)
    ended = n * FRAME
    assert not orchestrator.running

    assert not orchestrator.tick(now=ended + 0.25)
    assert not orchestrator.running

    assert not orchestrator.tick(now=ended + 0.6)
    assert orchestrator.running
    assert orchestrator.snapshot().lives == 1
    assert orchestrator.tick(now=ended + 0.6 + FRAME)


def test_win_is_not_auto_restarted():
    orchestrator = _orchestrator(layout=SINGLE_PELLET, auto_restart_delay=0.0)
    orchestrator.request_direction(Direction.RIGHT)
    for n in range(1, 10):
        orchestrator.tick(now=n * FRAME)

    assert orchestrator.snapshot().outcome is RoundOutcome.WON
    assert not orchestrator.tick(now=5.0)
    assert not orchestrator.running


@pytest.mark.asyncio
async def test_run_applies_requested_frames():
    orchestrator = _orchestrator(clock=SteppingClock(), rules=CountingRules())

    result = await orchestrator.run(num_ticks=5, frame_interval=0)

    assert result["frames"] == 5
    assert result["applied"] == 5
    assert result["final_state"].tick == 5
    assert result["run_id"] == orchestrator.run_id


@pytest.mark.asyncio
async def test_run_stops_when_round_ends():
    orchestrator = _orchestrator(layout=SINGLE_PELLET, clock=SteppingClock())
    orchestrator.request_direction(Direction.RIGHT)

    result = await orchestrator.run(num_ticks=100, frame_interval=0)

    assert result["applied"] == 9
    assert result["frames"] == 9
    assert result["final_state"].outcome is RoundOutcome.WON
    assert not result["final_state"].running


@pytest.mark.asyncio
async def test_run_defaults_to_arcade_rules():
    orchestrator = _orchestrator(clock=SteppingClock())

    assert isinstance(orchestrator.simulation_rules, ArcadeRules)
    result = await orchestrator.run(num_ticks=3, frame_interval=0)
    assert result["applied"] == 3
