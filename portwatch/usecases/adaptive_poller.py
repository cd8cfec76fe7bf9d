"""Poll cycle driving enumerate -> diff -> dispatch on a variable schedule."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from portwatch.domain.entities import (
    UNINITIALIZED,
    PollRegime,
    PortDiff,
    PortEvent,
    PortSnapshot,
    _Uninitialized,
)
from portwatch.domain.port_diff import diff_snapshots

EnumerateFn = Callable[[], PortSnapshot]
DispatchFn = Callable[[PortDiff], List[PortEvent]]


@dataclass
class PollState:
    """Mutable poller state; written only inside :meth:`AdaptivePoller.poll_once`."""

    previous: Union[PortSnapshot, _Uninitialized] = UNINITIALIZED
    """Last adopted snapshot, or the uninitialized marker before the baseline."""
    interval_ticks: int = 1
    """Ticks to wait before the next cycle."""
    regime: PollRegime = "active"


@dataclass(frozen=True)
class PollTick:
    """Outcome of one poll cycle, used by the loop to schedule the next one."""

    snapshot: PortSnapshot
    next_interval_ticks: int
    regime: PollRegime
    diff: PortDiff = field(default_factory=PortDiff)
    events: tuple = ()
    baseline: bool = False
    """True when the cycle only adopted the first snapshot."""
    skipped: bool = False
    """True when the device registry was unavailable and nothing was compared."""


class AdaptivePoller:
    """Runs poll cycles and picks the next interval from the last result.

    A cycle with at least one change (and the first cycle) schedules the next
    one at the active interval; a quiet cycle falls back to the idle interval.
    """

    def __init__(
        self,
        enumerate_ports: EnumerateFn,
        dispatch: DispatchFn,
        *,
        idle_ticks: int = 20,
        active_ticks: int = 10,
    ) -> None:
        """Bind the enumeration and dispatch use cases.

        Args:
            enumerate_ports: Callable returning a fresh snapshot.
            dispatch: Callable notifying about a non-empty diff.
            idle_ticks: Ticks between cycles while nothing changes.
            active_ticks: Ticks between cycles right after a change.
        """
        if idle_ticks < 1 or active_ticks < 1:
            raise ValueError("Poll intervals must be at least one tick.")
        self.enumerate_ports = enumerate_ports
        self.dispatch = dispatch
        self.idle_ticks = int(idle_ticks)
        self.active_ticks = int(active_ticks)
        self.state = PollState(interval_ticks=self.active_ticks)
        self._log = logging.getLogger(__name__)

    @property
    def previous(self) -> Union[PortSnapshot, _Uninitialized]:
        return self.state.previous

    @property
    def interval_ticks(self) -> int:
        return self.state.interval_ticks

    @property
    def has_baseline(self) -> bool:
        return not isinstance(self.state.previous, _Uninitialized)

    def reset(self) -> None:
        """Forget the baseline; the next cycle adopts a new one silently."""
        self.state = PollState(interval_ticks=self.active_ticks)

    def poll_once(self) -> PollTick:
        """Run one enumerate/diff/dispatch cycle.

        Returns:
            PollTick: Snapshot, diff, dispatched events and the next interval.

        Side Effects:
            Replaces the stored snapshot and interval; dispatches notifications.
        """
        snapshot = self.enumerate_ports()

        if not snapshot.available:
            # Keep the stored snapshot: an outage must not read as "all ports removed".
            return PollTick(
                snapshot=snapshot,
                next_interval_ticks=self.state.interval_ticks,
                regime=self.state.regime,
                skipped=True,
            )

        if not self.has_baseline:
            self.state = PollState(previous=snapshot, interval_ticks=self.active_ticks)
            self._log.info("Baseline adopted with %d port(s): %s", len(snapshot), ", ".join(snapshot.devices()) or "-")
            return PollTick(
                snapshot=snapshot,
                next_interval_ticks=self.active_ticks,
                regime="active",
                baseline=True,
            )

        diff = diff_snapshots(self.state.previous, snapshot)
        events: List[PortEvent] = self.dispatch(diff) if not diff.is_empty else []
        regime: PollRegime = "idle" if diff.is_empty else "active"
        interval = self.idle_ticks if diff.is_empty else self.active_ticks
        self.state = PollState(previous=snapshot, interval_ticks=interval, regime=regime)
        if not diff.is_empty:
            self._log.debug(
                "Detected %d change(s); next poll in %d tick(s)", len(diff), interval
            )
        return PollTick(
            snapshot=snapshot,
            next_interval_ticks=interval,
            regime=regime,
            diff=diff,
            events=tuple(events),
        )

    def snapshot(self) -> Optional[PortSnapshot]:
        """Return the stored snapshot, or ``None`` before the baseline."""
        return self.state.previous if self.has_baseline else None


__all__ = ["AdaptivePoller", "PollState", "PollTick"]
