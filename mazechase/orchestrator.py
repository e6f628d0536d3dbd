"""
Main game loop orchestrator.

Fully decoupled from rendering, audio and input capture.
All dependencies are injected by the caller.

Coordinates the frame loop:
1. Read the wall clock and derive a frame delta (skip anomalous ticks)
2. Apply one tick of simulation rules to the explicit game state
3. Notify tick listeners with a detached snapshot
4. Stop (or auto-restart) when the round reaches a terminal state
"""

import asyncio
import time
from typing import Callable, Dict, List, Optional
from uuid import UUID, uuid4

from .clock import GameClock
from .environment import Direction
from .logging_utils import Color, LOG_TAG_INFO, colored, log_info
from .scenario import CLASSIC_LAYOUT, MazeLayout
from .schemas import GameSettings, GameSnapshot, RoundOutcome
from .simulation_rules import ArcadeRules, SimulationRules
from .state import GameState, new_game, restart, snapshot

TickListener = Callable[[int, GameSnapshot], None]


class Orchestrator:
    """
    Main game loop orchestrator.

    Owns the single ``GameState`` of a round, the frame clock and the input
    queue (one pending direction). Renderers call ``snapshot()`` after each
    tick; they never see the live state.
    """

    def __init__(
        self,
        layout: Optional[MazeLayout] = None,
        settings: Optional[GameSettings] = None,
        simulation_rules: Optional[SimulationRules] = None,
        *,
        seed: Optional[int] = None,
        time_source: Callable[[], float] = time.perf_counter,
        tick_listeners: Optional[List[TickListener]] = None,
    ):
        """Initialize orchestrator with all dependencies injected.

        Args:
            layout: Maze layout (defaults to the built-in classic maze)
            settings: Tuning constants (defaults to GameSettings())
            simulation_rules: Per-tick rules (defaults to ArcadeRules)
            seed: Seed for the frightened-mode random choices
            time_source: Callable returning wall-clock seconds; tests inject a fake
            tick_listeners: Optional callables invoked after each applied tick
                with (tick, snapshot).
        """
        self.layout = layout or CLASSIC_LAYOUT
        self.settings = settings or GameSettings()
        self.simulation_rules = simulation_rules or ArcadeRules()
        self.time_source = time_source
        self.clock = GameClock(self.settings.max_frame_delta)
        self.tick_listeners = tick_listeners or []

        # Tag console output so concurrent games in one process stay distinguishable
        self.run_id: UUID = uuid4()

        self.state: GameState = new_game(self.layout, self.settings, seed=seed)
        self.restart()

    def restart(self, now: Optional[float] = None) -> GameSnapshot:
        """Reinitialize grid, round state and agents, and re-arm the loop."""
        self.state = restart(self.state)
        self.state = self.simulation_rules.on_round_start(self.state)
        self.clock.reset(now if now is not None else self.time_source())
        return self.snapshot()

    def request_direction(self, direction: Direction) -> None:
        """Buffer a directional intent; it is applied at the next tile centre."""
        self.state.player.pending = direction

    def snapshot(self) -> GameSnapshot:
        return snapshot(self.state)

    @property
    def running(self) -> bool:
        return self.state.round.running

    def _maybe_auto_restart(self, now: float) -> bool:
        delay = self.settings.auto_restart_delay
        round_state = self.state.round
        if delay is None or round_state.outcome is not RoundOutcome.LOST:
            return False
        if round_state.ended_at is None or now - round_state.ended_at < delay:
            return False
        log_info("Auto-restarting after game over")
        self.restart(now)
        return True

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance the simulation by one frame.

        Returns True when a simulation step was applied, False when the tick
        was skipped (terminal round or anomalous frame delta).
        """
        now = self.time_source() if now is None else now

        if not self.state.round.running:
            self._maybe_auto_restart(now)
            return False

        delta = self.clock.frame_delta(now)
        if delta is None:
            return False

        self.state = self.simulation_rules.apply_tick(self.state, delta, now)

        # Listener failures are reported but don't stop the loop
        if self.tick_listeners:
            frame = self.snapshot()
            for listener in self.tick_listeners:
                try:
                    listener(frame.tick, frame)
                except Exception as exc:  # pragma: no cover - diagnostic hook
                    print(f"  [Listener] Tick listener failed: {exc}")
        return True

    async def run(
        self,
        num_ticks: Optional[int] = None,
        *,
        frame_interval: float = 1 / 60,
    ) -> Dict:
        """Drive the loop until the round ends or ``num_ticks`` frames elapse.

        With ``auto_restart_delay`` configured the loop keeps going through
        game over and only ``num_ticks`` bounds it.

        Returns:
            Dict with run_id, frames (loop iterations), applied (simulation
            steps) and final_state (snapshot)
        """
        print(colored(f"{LOG_TAG_INFO} Starting run {self.run_id} on '{self.layout.name}'", Color.CYAN))

        frames = 0
        applied = 0
        while num_ticks is None or frames < num_ticks:
            if self.tick():
                applied += 1
            frames += 1

            if (
                self.simulation_rules.should_stop(self.state)
                and self.settings.auto_restart_delay is None
            ):
                print(f"\nRound finished: {self.state.round.message or 'stopped'}")
                break

            await asyncio.sleep(frame_interval)

        return {
            "run_id": self.run_id,
            "frames": frames,
            "applied": applied,
            "final_state": self.snapshot(),
        }
