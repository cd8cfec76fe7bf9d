"""Cooperative loop that owns both the UI event pump and the poll schedule.

There is one thread of control. Each iteration drains pending UI events,
checks for a quit request, and counts down ticks until the next poll cycle.
The poll interval is decomposed into short ticks so a quit request is noticed
within one tick no matter how long the idle interval is.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from ..domain.ports import LifecyclePort
from ..usecases.adaptive_poller import AdaptivePoller, PollTick

SleepFn = Callable[[float], None]


class MonitorLoop:
    """Run poll cycles until the lifecycle port asks to quit."""

    def __init__(
        self,
        poller: AdaptivePoller,
        signals: LifecyclePort,
        *,
        tick_s: float = 0.1,
        sleep: SleepFn = time.sleep,
        on_tick: Optional[Callable[[PollTick], None]] = None,
    ) -> None:
        """
        Args:
            poller: Poll cycle owner; the only writer of poll state.
            signals: Source of UI event draining and quit requests.
            tick_s: Sleep granularity between quit checks, in seconds.
            sleep: Sleep function, injectable for tests.
            on_tick: Optional observer called after each poll cycle.
        """
        self.poller = poller
        self.signals = signals
        self.tick_s = max(0.0, float(tick_s))
        self._sleep = sleep
        self._on_tick = on_tick
        # Start at one so the baseline is taken on the first iteration.
        self._countdown = 1
        self._log = logging.getLogger(__name__)

    @property
    def countdown(self) -> int:
        return self._countdown

    def step(self) -> bool:
        """Run one loop iteration; return False once quit was requested."""
        self.signals.pump_events()
        if self.signals.quit_requested():
            return False
        self._countdown -= 1
        if self._countdown <= 0:
            self._countdown = self._run_cycle()
        return True

    def run(self, max_cycles: Optional[int] = None) -> int:
        """Loop until quit (or ``max_cycles`` poll cycles); return cycles run."""
        cycles = 0
        self._log.info("Monitor loop started (tick %.0f ms)", self.tick_s * 1000)
        while True:
            countdown_before = self._countdown
            if not self.step():
                self._log.info("Quit requested; monitor loop stopping")
                break
            if countdown_before <= 1:
                cycles += 1
                if max_cycles is not None and cycles >= max_cycles:
                    break
            self._sleep(self.tick_s)
        return cycles

    def _run_cycle(self) -> int:
        try:
            tick = self.poller.poll_once()
        except Exception:
            # The loop only ends on an explicit quit.
            self._log.exception("Poll cycle failed; retrying on the next cycle")
            return self.poller.interval_ticks
        if self._on_tick is not None:
            self._on_tick(tick)
        return max(1, tick.next_interval_ticks)


__all__ = ["MonitorLoop"]
