"""Simulation clocks.

A clock turns frame triggers into physics time steps. The wall clock
measures real elapsed time; the fixed-step clock replays a predetermined
sequence so tests and headless runs are deterministic.

Typical usage example:
    from flightloop.core.clock import SimulationClock

    clock = SimulationClock(max_delta=0.1)
    clock.tick()  # Baseline, returns 0.0
    ...
    dt = clock.tick()
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

from flightloop.core.logging_system import get_logger

logger = get_logger(__name__)


class IClock(ABC):
    """Source of per-tick time steps."""

    @abstractmethod
    def tick(self) -> float:
        """Return the time step for the current tick in seconds."""


class SimulationClock(IClock):
    """Measures wall time between consecutive ticks.

    The first tick only establishes the baseline and returns 0.0. When
    ``max_delta`` is set, steps longer than it (frame hitches, debugger
    pauses, window drags) are clamped to it.
    """

    def __init__(
        self,
        max_delta: float | None = None,
        time_source: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize the clock.

        Args:
            max_delta: Upper bound for a single step in seconds, or None
                for no bound.
            time_source: Monotonic clock returning seconds.

        Raises:
            ValueError: If max_delta is not positive.
        """
        if max_delta is not None and max_delta <= 0.0:
            raise ValueError(f"max_delta must be positive, got {max_delta}")
        self.max_delta = max_delta
        self._time_source = time_source
        self._last: float | None = None
        self.clamped_ticks = 0

    def tick(self) -> float:
        now = self._time_source()
        if self._last is None:
            self._last = now
            return 0.0

        dt = max(0.0, now - self._last)
        self._last = now

        if self.max_delta is not None and dt > self.max_delta:
            self.clamped_ticks += 1
            logger.debug("Clamped frame step %.3fs to %.3fs", dt, self.max_delta)
            dt = self.max_delta
        return dt


class FixedStepClock(IClock):
    """Returns predetermined time steps.

    With a single float every tick returns that value. With a sequence the
    steps are returned in order, then the last one repeats.
    """

    def __init__(self, steps: float | Iterable[float] = 1.0 / 60.0) -> None:
        if isinstance(steps, (int, float)):
            self._steps = [float(steps)]
        else:
            self._steps = [float(s) for s in steps]
        if not self._steps:
            raise ValueError("FixedStepClock needs at least one step")
        self._index = 0

    def tick(self) -> float:
        dt = self._steps[min(self._index, len(self._steps) - 1)]
        self._index += 1
        return dt
