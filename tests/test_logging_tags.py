"""Tests for event tags ([⚡], [!], [✓], [i]) in round output.

These tests assert that:
- Power mode transitions print the power tag
- Deaths and game over print the error tag, wins the success tag
- Pathing fallbacks are only reported when MAZECHASE_DEBUG_PATHING is set
"""

from __future__ import annotations

import contextlib
import io
import random

from mazechase.agents import Ghost, Player
from mazechase.clock import Difficulty
from mazechase.environment import MazeGrid
from mazechase.ghosts import choose_tile
from mazechase.logging_utils import (
    LOG_TAG_ERROR,
    LOG_TAG_INFO,
    LOG_TAG_POWER,
    LOG_TAG_SUCCESS,
    Color,
    colored,
    pathing_debug_enabled,
)
from mazechase.scenario import parse_layout
from mazechase.schemas import GameSettings, GhostMode, RoundOutcome
from mazechase.scoring import activate_power_mode, end_round, expire_power_mode, lose_life
from mazechase.state import new_game, restart


def _state(lives=3):
    layout = parse_layout(["#######", "#P.o.G#", "#######"], name="tags")
    return new_game(layout, GameSettings(ghost_count=1, starting_lives=lives), seed=0)


def _capture(fn, *args, **kwargs) -> str:
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        fn(*args, **kwargs)
    return buf.getvalue()


def test_power_mode_tags(monkeypatch):
    monkeypatch.setenv("MAZECHASE_NO_COLOR", "1")
    state = _state()

    out = _capture(activate_power_mode, state, 0.0)
    assert f"{LOG_TAG_POWER} Power mode on for 8.0s" in out

    # Refreshing an active power mode stays quiet
    assert _capture(activate_power_mode, state, 1.0) == ""

    out = _capture(expire_power_mode, state, 20.0)
    assert f"{LOG_TAG_POWER} Power mode expired" in out


def test_death_and_round_end_tags(monkeypatch):
    monkeypatch.setenv("MAZECHASE_NO_COLOR", "1")
    state = _state(lives=2)

    assert f"{LOG_TAG_ERROR} Player died, 1 lives left" in _capture(lose_life, state, 1.0)
    assert f"{LOG_TAG_ERROR} Game over" in _capture(lose_life, state, 2.0)

    other = _state()
    assert f"{LOG_TAG_SUCCESS} Level complete" in _capture(end_round, other, RoundOutcome.WON, 3.0)


def test_restart_logs_round_start(monkeypatch):
    monkeypatch.setenv("MAZECHASE_NO_COLOR", "1")
    state = _state()

    out = _capture(restart, state)

    assert f"{LOG_TAG_INFO} Round start on 'tags'" in out
    assert "3 lives" in out


def test_pathing_fallback_logged_only_in_debug(monkeypatch):
    monkeypatch.setenv("MAZECHASE_NO_COLOR", "1")
    grid = MazeGrid(rows=["#######", "#G.#. #", "#..#..#", "#######"])
    player = Player(tile=(1, 5), start_tile=(1, 5))
    ghost = Ghost(tile=(1, 1), index=0, home_tile=(1, 1))
    ghost.mode = GhostMode.CHASE
    difficulty = Difficulty.from_progress(0.0, GameSettings())

    monkeypatch.delenv("MAZECHASE_DEBUG_PATHING", raising=False)
    assert not pathing_debug_enabled()
    out = _capture(choose_tile, ghost, grid, player, difficulty, set(), random.Random(0))
    assert out == ""

    monkeypatch.setenv("MAZECHASE_DEBUG_PATHING", "true")
    assert pathing_debug_enabled()
    out = _capture(choose_tile, ghost, grid, player, difficulty, set(), random.Random(0))
    assert f"{LOG_TAG_ERROR} [Pathing] Ghost 0 has no path" in out


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.delenv("MAZECHASE_NO_COLOR", raising=False)
    text = colored("hello", Color.GREEN, bold=True)
    assert text.startswith(Color.BOLD.value + Color.GREEN.value)
    assert text.endswith(Color.RESET.value)

    monkeypatch.setenv("MAZECHASE_NO_COLOR", "1")
    assert colored("hello", Color.GREEN) == "hello"
