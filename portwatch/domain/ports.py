from __future__ import annotations
from typing import Any, List, Optional, Protocol, Sequence, Tuple, Union

DeviceHandle = Any
MenuEntry = Tuple[int, str]

# Device class understood by the query adapters ("Ports (COM & LPT)").
SERIAL_PORT_CLASS = "Ports"
PROP_PORT_NAME = "PortName"
PROP_FRIENDLY_NAME = "FriendlyName"


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class DeviceQueryPort(Protocol):
    """Read-only access to the OS device registry.
    Called on every poll cycle and every menu refresh.
    """

    def query_present_devices(self, device_class: str) -> Optional[List[DeviceHandle]]: ...  # None -> unavailable
    def read_string_property(
        self, handle: DeviceHandle, key: str
    ) -> Optional[Union[str, bytes]]: ...  # None -> absent; raises DeviceReadError


class NotificationPort(Protocol):
    """Fire-and-forget user notification (tray balloon, toast, log line)."""

    def show(self, title: str, message: str) -> None: ...


class MenuPort(Protocol):
    """Submenu listing the currently attached ports."""

    def set_entries(self, entries: Sequence[MenuEntry]) -> None: ...


class LifecyclePort(Protocol):
    """Signals delivered by the UI runtime to the cooperative loop."""

    def pump_events(self) -> None: ...  # non-blocking drain of pending UI events
    def quit_requested(self) -> bool: ...


class SettingsStoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: dict) -> None: ...
    def load_user_settings(self) -> Optional[dict]: ...
