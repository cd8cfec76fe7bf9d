"""Domain package exports for value objects and port protocols."""

from .entities import (
    UNINITIALIZED,
    PortDiff,
    PortEvent,
    PortRecord,
    PortSnapshot,
)
from .errors import DeviceQueryUnavailable, DeviceReadError, PortWatchError
from .port_diff import diff_snapshots
from .ports import UseCaseError

__all__ = [
    "DeviceQueryUnavailable",
    "DeviceReadError",
    "PortDiff",
    "PortEvent",
    "PortRecord",
    "PortSnapshot",
    "PortWatchError",
    "UNINITIALIZED",
    "UseCaseError",
    "diff_snapshots",
]
