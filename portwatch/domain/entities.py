"""Value objects describing observed serial ports and their changes.

Snapshots are immutable and produced fresh on every enumeration. The poller
replaces its stored snapshot wholesale after each cycle instead of mutating it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, Literal, Tuple

EventKind = Literal["connected", "disconnected"]
PollRegime = Literal["active", "idle"]


@dataclass(frozen=True, order=True)
class PortRecord:
    """One attached serial port.

    Attributes:
        device: Platform device name, e.g. ``COM3`` or ``/dev/ttyUSB0``.
        description: Human-readable friendly name reported by the OS.

    Equality, hashing and ordering cover both fields, so a port whose
    description changes while its device name stays the same is a different
    record.
    """

    device: str
    description: str = ""

    @property
    def key(self) -> str:
        return f"{self.device}:{self.description}"

    @property
    def label(self) -> str:
        """Display text for menus."""
        if self.description:
            return f"{self.device} - {self.description}"
        return self.device


@dataclass(frozen=True)
class PortSnapshot:
    """Complete set of ports observed at one instant.

    Iteration is always in lexicographic record order so that diffs and menu
    contents are deterministic regardless of enumeration order.

    ``available`` is False when the device registry could not be queried; such
    a snapshot is empty and compares equal to any other empty snapshot.
    """

    ports: FrozenSet[PortRecord] = field(default_factory=frozenset)
    available: bool = field(default=True, compare=False)

    @classmethod
    def of(cls, records: Iterable[PortRecord]) -> "PortSnapshot":
        return cls(ports=frozenset(records))

    @classmethod
    def unavailable(cls) -> "PortSnapshot":
        return cls(available=False)

    def records(self) -> Tuple[PortRecord, ...]:
        return tuple(sorted(self.ports))

    def devices(self) -> List[str]:
        return [record.device for record in self.records()]

    def __iter__(self) -> Iterator[PortRecord]:
        return iter(self.records())

    def __len__(self) -> int:
        return len(self.ports)

    def __contains__(self, record: object) -> bool:
        return record in self.ports

    def __bool__(self) -> bool:
        return bool(self.ports)


class _Uninitialized:
    """Marker for "no baseline adopted yet"; distinct from an empty snapshot."""

    _instance = None

    def __new__(cls) -> "_Uninitialized":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNINITIALIZED"

    def __bool__(self) -> bool:
        return False


UNINITIALIZED = _Uninitialized()


@dataclass(frozen=True)
class PortDiff:
    """Delta between two snapshots; both sequences are sorted and disjoint."""

    added: Tuple[PortRecord, ...] = ()
    removed: Tuple[PortRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed

    def __len__(self) -> int:
        return len(self.added) + len(self.removed)


@dataclass(frozen=True)
class PortEvent:
    """Notification payload for a single connect/disconnect."""

    kind: EventKind
    record: PortRecord
    title: str
    message: str

    @property
    def device(self) -> str:
        return self.record.device


__all__ = [
    "EventKind",
    "PollRegime",
    "PortDiff",
    "PortEvent",
    "PortRecord",
    "PortSnapshot",
    "UNINITIALIZED",
]
