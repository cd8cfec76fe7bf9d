"""Device query adapter backed by pyserial's port enumeration.

``serial.tools.list_ports.comports()`` walks the OS device registry (SetupAPI
on Windows, sysfs on Linux, IOKit on macOS) and returns one ``ListPortInfo``
per present serial device. Those objects are the handles this adapter hands
to the enumeration use case.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

import serial.tools.list_ports
from serial.tools.list_ports_common import ListPortInfo

from portwatch.domain.errors import DeviceQueryUnavailable, DeviceReadError
from portwatch.domain.ports import (
    PROP_FRIENDLY_NAME,
    PROP_PORT_NAME,
    SERIAL_PORT_CLASS,
    DeviceQueryPort,
)

# pyserial's placeholder for properties the OS did not report.
_UNKNOWN = "n/a"

_PROPERTY_ATTRS = {
    PROP_PORT_NAME: "device",
    PROP_FRIENDLY_NAME: "description",
}

ComportsFn = Callable[..., Sequence[ListPortInfo]]


class PySerialDeviceQuery(DeviceQueryPort):
    """``DeviceQueryPort`` over ``serial.tools.list_ports.comports``."""

    def __init__(self, *, include_links: bool = False, comports: Optional[ComportsFn] = None) -> None:
        self.include_links = include_links
        self._comports = comports or serial.tools.list_ports.comports
        self._log = logging.getLogger(__name__)

    def query_present_devices(self, device_class: str) -> Optional[List[ListPortInfo]]:
        if device_class != SERIAL_PORT_CLASS:
            self._log.debug("Unsupported device class %r; returning no devices", device_class)
            return []
        try:
            return list(self._comports(include_links=self.include_links))
        except Exception as exc:
            raise DeviceQueryUnavailable(f"{exc.__class__.__name__}: {exc}") from exc

    def read_string_property(self, handle: ListPortInfo, key: str) -> Optional[str]:
        attr = _PROPERTY_ATTRS.get(key)
        if attr is None:
            raise DeviceReadError(handle, key, "unknown property")
        try:
            value = getattr(handle, attr)
        except AttributeError as exc:
            raise DeviceReadError(handle, key, str(exc)) from exc
        if value is None or value == _UNKNOWN:
            return None
        return value


__all__ = ["PySerialDeviceQuery"]
