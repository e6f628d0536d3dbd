"""Frame clock and difficulty scaling.

``GameClock`` turns wall-clock timestamps into per-tick deltas and rejects
anomalous gaps (tab suspension, clock jumps) by returning None, which makes
the caller skip that tick entirely.

``Difficulty`` derives the progress-driven tuning for one tick: adversary
speed multiplier, chase lookahead and the scatter/chase period.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .schemas import GameSettings


class GameClock:
    """Wall clock to frame delta conversion."""

    def __init__(self, max_frame_delta: float):
        self.max_frame_delta = max_frame_delta
        self._last: Optional[float] = None

    @property
    def last(self) -> Optional[float]:
        return self._last

    def reset(self, now: Optional[float] = None) -> None:
        """Forget the previous tick; the next ``frame_delta`` call yields 0."""
        self._last = now

    def frame_delta(self, now: float) -> Optional[float]:
        """Seconds since the previous call, or None if the tick must be skipped.

        The reference timestamp always advances (for finite ``now``), so a
        single huge gap costs one skipped tick and the loop resumes normally.
        """
        if not math.isfinite(now):
            return None
        if self._last is None:
            self._last = now
            return 0.0
        delta = now - self._last
        self._last = now
        if delta < 0 or delta > self.max_frame_delta:
            return None
        return delta


@dataclass(frozen=True)
class Difficulty:
    progress: float
    speed_multiplier: float
    lookahead: int
    mode_period: float

    @classmethod
    def from_progress(cls, progress: float, settings: GameSettings) -> "Difficulty":
        progress = min(max(progress, 0.0), 1.0)
        speed_multiplier = 1.0 + progress * settings.max_speed_bonus
        lookahead = max(1, math.ceil(settings.base_lookahead + progress * settings.lookahead_growth))
        mode_period = max(
            settings.min_mode_period,
            settings.base_mode_period * (1.0 - progress * settings.mode_period_shrink),
        )
        return cls(
            progress=progress,
            speed_multiplier=speed_multiplier,
            lookahead=lookahead,
            mode_period=mode_period,
        )


@dataclass
class ModeCycle:
    """Shared scatter/chase toggle."""

    elapsed: float = 0.0
    scatter: bool = True

    def advance(self, delta: float, period: float) -> bool:
        """Accumulate ``delta``; flip the phase once ``period`` is exceeded. Returns True on a flip."""
        self.elapsed += delta
        if self.elapsed > period:
            self.scatter = not self.scatter
            self.elapsed = 0.0
            return True
        return False
