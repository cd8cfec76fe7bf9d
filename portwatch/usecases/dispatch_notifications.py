"""Turn snapshot diffs into user notifications."""

from __future__ import annotations

import logging
from typing import List

from portwatch.domain.entities import PortDiff, PortEvent, PortRecord
from portwatch.domain.ports import NotificationPort

CONNECTED_TITLE = "Serial port connected"
DISCONNECTED_TITLE = "Serial port disconnected"


def connected_event(record: PortRecord) -> PortEvent:
    return PortEvent(
        kind="connected",
        record=record,
        title=CONNECTED_TITLE,
        message=f"New serial port {record.device} connected",
    )


def disconnected_event(record: PortRecord) -> PortEvent:
    return PortEvent(
        kind="disconnected",
        record=record,
        title=DISCONNECTED_TITLE,
        message=f"Serial port {record.device} removed",
    )


class DispatchPortNotifications:
    """Use-case callable forwarding one notification per detected change."""

    def __init__(self, notifier: NotificationPort) -> None:
        self.notifier = notifier
        self._log = logging.getLogger(__name__)

    def __call__(self, diff: PortDiff) -> List[PortEvent]:
        """Emit connected events, then disconnected events, for ``diff``.

        Args:
            diff: Changes detected by the last poll cycle.

        Returns:
            List[PortEvent]: Events handed to the notifier, in delivery order.

        Side Effects:
            Calls ``NotificationPort.show`` once per event. A failing notifier
            is logged and does not stop delivery of the remaining events.
        """
        events = [connected_event(record) for record in diff.added]
        events.extend(disconnected_event(record) for record in diff.removed)
        for event in events:
            self._log.info("%s: %s", event.kind, event.record.key)
            try:
                self.notifier.show(event.title, event.message)
            except Exception:
                self._log.exception("Notifier failed for %s event on %s", event.kind, event.device)
        return events


__all__ = [
    "CONNECTED_TITLE",
    "DISCONNECTED_TITLE",
    "DispatchPortNotifications",
    "connected_event",
    "disconnected_event",
]
