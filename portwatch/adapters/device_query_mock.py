from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from portwatch.domain.errors import DeviceQueryUnavailable, DeviceReadError
from portwatch.domain.ports import (
    PROP_FRIENDLY_NAME,
    PROP_PORT_NAME,
    SERIAL_PORT_CLASS,
    DeviceQueryPort,
)

PropertyValue = Union[str, bytes, None]

# Frame marker: the registry query fails on this cycle.
UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class MockDevice:
    """Fake registry entry.

    ``unreadable`` makes every property read fail; ``unreadable_keys`` fails
    only the named properties.
    """

    port_name: PropertyValue
    friendly_name: PropertyValue = None
    unreadable: bool = False
    unreadable_keys: Tuple[str, ...] = ()

    def properties(self) -> Dict[str, PropertyValue]:
        return {PROP_PORT_NAME: self.port_name, PROP_FRIENDLY_NAME: self.friendly_name}


@dataclass
class DeviceQueryMock(DeviceQueryPort):
    """Offline substitute for the OS device registry.

    Plays back ``frames`` one per query; the last frame repeats once the script
    runs out. A frame is a list of devices or :data:`UNAVAILABLE`.
    """

    frames: List[object] = field(default_factory=list)
    queries: int = 0

    @classmethod
    def from_ports(cls, *frames: Iterable[tuple]) -> "DeviceQueryMock":
        """Build frames from ``(port_name, friendly_name)`` pairs."""
        return cls(frames=[[MockDevice(*pair) for pair in frame] for frame in frames])

    def push(self, frame: object) -> None:
        self.frames.append(frame)

    def _current(self) -> object:
        if not self.frames:
            return []
        index = min(self.queries, len(self.frames) - 1)
        return self.frames[index]

    # ---------- DeviceQueryPort ----------

    def query_present_devices(self, device_class: str) -> Optional[List[MockDevice]]:
        frame = self._current()
        self.queries += 1
        if device_class != SERIAL_PORT_CLASS:
            return []
        if frame == UNAVAILABLE:
            raise DeviceQueryUnavailable("mock registry unavailable")
        if frame is None:
            return None
        return list(frame)

    def read_string_property(self, handle: MockDevice, key: str) -> PropertyValue:
        if handle.unreadable or key in handle.unreadable_keys:
            raise DeviceReadError(handle, key, "mock key cannot be opened")
        return handle.properties().get(key)


def demo_frames() -> List[Sequence[MockDevice]]:
    """Short plug/unplug script used by ``--mock`` runs."""
    usb = MockDevice("COM3", "USB Serial Device")
    bt = MockDevice("COM4", "Standard Serial over Bluetooth link")
    return [[usb], [usb], [usb, bt], [usb, bt], [bt], [bt], []]


__all__ = ["DeviceQueryMock", "MockDevice", "UNAVAILABLE", "demo_frames"]
