from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Tuple

from portwatch.domain.ports import NotificationPort


class LogNotifier(NotificationPort):
    """Notification sink that writes to the ``portwatch.notify`` logger.

    Used for headless runs and as the fallback when no desktop view exists.
    Keeps the most recent notifications for inspection.
    """

    def __init__(self, history: int = 50) -> None:
        self._log = logging.getLogger("portwatch.notify")
        self._history: Deque[Tuple[str, str]] = deque(maxlen=max(1, int(history)))

    def show(self, title: str, message: str) -> None:
        self._history.append((title, message))
        self._log.info("%s - %s", title, message)

    @property
    def history(self) -> List[Tuple[str, str]]:
        return list(self._history)


__all__ = ["LogNotifier"]
