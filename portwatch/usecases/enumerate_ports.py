"""Use case for listing the serial ports currently attached to the machine.

Both the background poller and the menu refresh call this; neither keeps the
result beyond its own cycle except the poller's stored baseline.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional, Sequence, Tuple, Union

from portwatch.domain.entities import PortRecord, PortSnapshot
from portwatch.domain.errors import DeviceQueryUnavailable, DeviceReadError
from portwatch.domain.ports import (
    PROP_FRIENDLY_NAME,
    PROP_PORT_NAME,
    SERIAL_PORT_CLASS,
    DeviceHandle,
    DeviceQueryPort,
)


def default_port_prefixes(platform: Optional[str] = None) -> Tuple[str, ...]:
    """Return the serial-port naming convention for ``platform``."""
    name = platform or sys.platform
    if name.startswith("win"):
        return ("COM",)
    return ("/dev/tty", "/dev/cu.")


def decode_field(value: Union[str, bytes, None]) -> str:
    """Return ``value`` as text; undecodable bytes become an empty string."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            return ""
    return value.rstrip("\x00").strip()


class EnumeratePorts:
    """Use-case callable producing a fresh :class:`PortSnapshot`."""

    def __init__(
        self,
        device_port: DeviceQueryPort,
        *,
        port_prefixes: Optional[Sequence[str]] = None,
        device_class: str = SERIAL_PORT_CLASS,
    ) -> None:
        """Bind the device query adapter and port-name filter.

        Args:
            device_port: Adapter exposing the OS device registry.
            port_prefixes: Accepted port-name prefixes; platform default if omitted.
            device_class: Device class passed to the adapter query.
        """
        self.device_port = device_port
        self.port_prefixes: Tuple[str, ...] = tuple(port_prefixes or default_port_prefixes())
        self.device_class = device_class
        self._log = logging.getLogger(__name__)
        self._unavailable_reported = False

    def __call__(self) -> PortSnapshot:
        """Query the registry and fold matching devices into a snapshot.

        Returns:
            PortSnapshot: Attached ports. Empty (and marked unavailable) when
            the registry cannot be queried, so the next cycle retries naturally.

        Side Effects:
            Read-only adapter calls; logs when the registry is unavailable.
        """
        handles = self._query_handles()
        if handles is None:
            return PortSnapshot.unavailable()
        return PortSnapshot.of(self._read_records(handles))

    def _query_handles(self) -> Optional[Sequence[DeviceHandle]]:
        try:
            handles = self.device_port.query_present_devices(self.device_class)
        except DeviceQueryUnavailable as exc:
            self._report_unavailable(str(exc))
            return None
        if handles is None:
            self._report_unavailable("no device handle")
            return None
        if self._unavailable_reported:
            self._log.info("Device registry available again")
            self._unavailable_reported = False
        return handles

    def _report_unavailable(self, reason: str) -> None:
        # Warn once per outage, then stay quiet until the registry recovers.
        if self._unavailable_reported:
            self._log.debug("Device registry still unavailable: %s", reason)
            return
        self._log.warning("Device registry unavailable, reporting no ports: %s", reason)
        self._unavailable_reported = True

    def _read_records(self, handles: Iterable[DeviceHandle]) -> Iterable[PortRecord]:
        for handle in handles:
            record = self._read_record(handle)
            if record is not None:
                yield record

    def _read_record(self, handle: DeviceHandle) -> Optional[PortRecord]:
        try:
            raw_name = self.device_port.read_string_property(handle, PROP_PORT_NAME)
            if raw_name is None:
                return None
            device = decode_field(raw_name)
            if not device.startswith(self.port_prefixes):
                return None
            description = decode_field(
                self.device_port.read_string_property(handle, PROP_FRIENDLY_NAME)
            )
        except DeviceReadError as exc:
            self._log.debug("Skipping device: %s", exc)
            return None
        return PortRecord(device=device, description=description)


__all__ = ["EnumeratePorts", "decode_field", "default_port_prefixes"]
