# portwatch/app/main.py
from __future__ import annotations
import argparse
import logging
import signal
from collections import deque
from typing import Deque, List, Optional, Sequence

# ---- UseCases & Adapters ----
from ..adapters.device_query_mock import DeviceQueryMock, demo_frames
from ..adapters.notifier_log import LogNotifier
from ..adapters.serial_query_pyserial import PySerialDeviceQuery
from ..adapters.storage_local import StorageLocal, default_settings_dir
from ..domain.entities import PortEvent
from ..domain.ports import (
    DeviceQueryPort,
    LifecyclePort,
    MenuEntry,
    NotificationPort,
    UseCaseError,
)
from ..usecases.adaptive_poller import AdaptivePoller, PollTick
from ..usecases.dispatch_notifications import DispatchPortNotifications
from ..usecases.enumerate_ports import EnumeratePorts
from ..usecases.refresh_port_menu import RefreshPortMenu
from ..utils import logging as logging_utils
from .monitor_loop import MonitorLoop
from .settings import MonitorSettings

STARTUP_TITLE = "Serial monitor"
STARTUP_MESSAGE = "Serial monitor started, watching for port changes..."


class HeadlessSignals(LifecyclePort):
    """Lifecycle port for console runs; SIGINT/SIGTERM request a quit."""

    def __init__(self) -> None:
        self._quit = False

    def install(self) -> None:
        signal.signal(signal.SIGINT, self._handle_signal)
        if hasattr(signal, "SIGTERM"):
            signal.signal(signal.SIGTERM, self._handle_signal)

    def _handle_signal(self, signum, frame) -> None:
        self._quit = True

    def pump_events(self) -> None:
        return None

    def quit_requested(self) -> bool:
        return self._quit

    def request_quit(self) -> None:
        self._quit = True


class LogMenu:
    """Menu port for headless runs: logs the entries it would display."""

    def __init__(self) -> None:
        self.entries: List[MenuEntry] = []
        self._log = logging.getLogger(__name__)

    def set_entries(self, entries: Sequence[MenuEntry]) -> None:
        self.entries = list(entries)
        self._log.info("Ports: %s", ", ".join(label for _, label in self.entries) or "none")


class App:
    """Bootstrap: wire device query adapter, use cases, and the monitor loop."""

    def __init__(
        self,
        settings: MonitorSettings,
        *,
        device_port: DeviceQueryPort,
        notifier: NotificationPort,
        menu,
        signals: LifecyclePort,
        sleep=None,
        event_history: int = 100,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.settings = settings
        self.notifier = notifier
        self.signals = signals

        self.enumerate_ports = EnumeratePorts(device_port, port_prefixes=settings.port_prefixes)
        self.dispatch = DispatchPortNotifications(notifier)
        self.refresh_menu = RefreshPortMenu(self.enumerate_ports, menu)
        self.poller = AdaptivePoller(
            self.enumerate_ports,
            self.dispatch,
            idle_ticks=settings.idle_ticks,
            active_ticks=settings.active_ticks,
        )
        loop_kwargs = {"tick_s": settings.tick_s, "on_tick": self._on_tick}
        if sleep is not None:
            loop_kwargs["sleep"] = sleep
        self.loop = MonitorLoop(self.poller, signals, **loop_kwargs)
        self._events: Deque[PortEvent] = deque(maxlen=max(1, int(event_history)))

    def on_menu_open(self) -> None:
        """Handler for the UI "menu about to open" signal."""
        self.refresh_menu()

    def run(self, max_cycles: Optional[int] = None) -> int:
        if self.settings.notify_on_start:
            self.notifier.show(STARTUP_TITLE, STARTUP_MESSAGE)
        return self.loop.run(max_cycles=max_cycles)

    @property
    def events(self) -> List[PortEvent]:
        """Most recent dispatched events, oldest first."""
        return list(self._events)

    def _on_tick(self, tick: PollTick) -> None:
        self._events.extend(tick.events)


def load_settings(storage: StorageLocal) -> MonitorSettings:
    log = logging.getLogger(__name__)
    try:
        payload = storage.load_user_settings()
    except (OSError, ValueError) as exc:
        log.warning("Ignoring unreadable settings file %s: %s", storage.settings_path, exc)
        return MonitorSettings()
    if payload is None:
        return MonitorSettings()
    try:
        return MonitorSettings.from_dict(payload)
    except UseCaseError as exc:
        log.warning("Ignoring invalid settings in %s: %s", storage.settings_path, exc.message)
        return MonitorSettings()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI args for the monitor."""
    parser = argparse.ArgumentParser(description="Watch serial ports and notify on plug/unplug.")
    parser.add_argument("--settings-dir", default=None, help="Directory holding user_settings.json.")
    parser.add_argument("--idle-ms", type=int, default=None, help="Poll interval while nothing changes.")
    parser.add_argument("--active-ms", type=int, default=None, help="Poll interval right after a change.")
    parser.add_argument("--tick-ms", type=int, default=None, help="Quit-check granularity.")
    parser.add_argument("--prefix", action="append", default=None, help="Accepted port-name prefix (repeatable).")
    parser.add_argument("--headless", action="store_true", help="Log notifications instead of opening a window.")
    parser.add_argument("--mock", action="store_true", help="Use a scripted fake device registry.")
    parser.add_argument("--once", action="store_true", help="Take the baseline, run one more cycle, and exit.")
    parser.add_argument("--list", action="store_true", help="Print the attached ports and exit.")
    parser.add_argument("--save-settings", action="store_true", help="Persist the effective settings and exit.")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging_utils.configure_root()
    log = logging.getLogger(__name__)

    storage = StorageLocal(args.settings_dir or default_settings_dir())
    try:
        settings = load_settings(storage).with_overrides(
            idle_interval_ms=args.idle_ms,
            active_interval_ms=args.active_ms,
            tick_ms=args.tick_ms,
            port_prefixes=args.prefix or (["COM"] if args.mock else None),
            debug_logging=True if args.debug else None,
        )
    except UseCaseError as exc:
        log.error("%s", exc.message)
        return 2
    logging_utils.apply_preferences(settings.debug_logging)

    if args.save_settings:
        storage.save_user_settings(settings.to_dict())
        log.info("Settings saved to %s", storage.settings_path)
        return 0

    device_port: DeviceQueryPort = (
        DeviceQueryMock(frames=list(demo_frames())) if args.mock else PySerialDeviceQuery()
    )

    if args.list:
        for record in EnumeratePorts(device_port, port_prefixes=settings.port_prefixes)():
            print(record.label)
        return 0

    max_cycles = 2 if args.once else None
    if args.headless or args.once:
        signals = HeadlessSignals()
        signals.install()
        app = App(settings, device_port=device_port, notifier=LogNotifier(), menu=LogMenu(), signals=signals)
        app.run(max_cycles=max_cycles)
        return 0

    import tkinter as tk

    from .views.tray_window import TrayWindowView

    try:
        view = TrayWindowView(on_menu_open=lambda: app.on_menu_open())
    except tk.TclError as exc:
        log.error("Cannot open the monitor window (%s); run with --headless instead", exc)
        return 1
    app = App(settings, device_port=device_port, notifier=view, menu=view, signals=view)
    try:
        app.run()
    finally:
        view.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
