"""Domain-level error types raised by device query adapters.

Enumeration code catches these and degrades to "no ports observed" instead
of letting OS-specific exceptions escape the engine.
"""

from __future__ import annotations


class PortWatchError(Exception):
    """Base class for errors raised inside the port watcher."""


class DeviceQueryUnavailable(PortWatchError):
    """The OS device registry could not be queried (invalid handle, backend error)."""


class DeviceReadError(PortWatchError):
    """A single device's registry key or property could not be read."""

    def __init__(self, handle: object, key: str, reason: str = "") -> None:
        message = f"Cannot read {key!r} for device {handle!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.handle = handle
        self.key = key


__all__ = ["DeviceQueryUnavailable", "DeviceReadError", "PortWatchError"]
