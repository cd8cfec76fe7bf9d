from __future__ import annotations

from typing import List

import pytest

from portwatch.adapters.device_query_mock import DeviceQueryMock, MockDevice
from portwatch.adapters.storage_local import StorageLocal
from portwatch.app import main as app_main
from portwatch.app.main import STARTUP_MESSAGE, STARTUP_TITLE, App, HeadlessSignals
from portwatch.app.settings import MonitorSettings


class SinkStub:
    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def show(self, title: str, message: str) -> None:
        self.calls.append((title, message))


class MenuStub:
    def __init__(self) -> None:
        self.entries: List[tuple] = []

    def set_entries(self, entries) -> None:
        self.entries = list(entries)


def _make_app(frames, *, notify_on_start=True, event_history=100):
    sink = SinkStub()
    menu = MenuStub()
    query = DeviceQueryMock(frames=frames)
    settings = MonitorSettings(
        tick_ms=10,
        idle_interval_ms=40,
        active_interval_ms=20,
        port_prefixes=("COM",),
        notify_on_start=notify_on_start,
        debug_logging=False,
    )
    app = App(
        settings,
        device_port=query,
        notifier=sink,
        menu=menu,
        signals=HeadlessSignals(),
        sleep=lambda s: None,
        event_history=event_history,
    )
    return app, sink, menu, query


def test_app_announces_start_and_reports_changes():
    usb = MockDevice("COM3", "USB Serial")
    bt = MockDevice("COM4", "Bluetooth")
    app, sink, _, _ = _make_app([[usb], [usb, bt]])

    cycles = app.run(max_cycles=2)

    assert cycles == 2
    assert sink.calls == [
        (STARTUP_TITLE, STARTUP_MESSAGE),
        ("Serial port connected", "New serial port COM4 connected"),
    ]
    assert [event.device for event in app.events] == ["COM4"]


def test_app_without_start_notification():
    app, sink, _, _ = _make_app([[MockDevice("COM3", "USB")]], notify_on_start=False)

    app.run(max_cycles=1)

    assert sink.calls == []


def test_menu_open_enumerates_live_instead_of_poller_cache():
    usb = MockDevice("COM3", "USB Serial")
    bt = MockDevice("COM4", "Bluetooth")
    app, _, menu, query = _make_app([[usb], [usb, bt]])
    app.run(max_cycles=1)

    app.on_menu_open()

    assert query.queries == 2
    assert [label for _, label in menu.entries] == ["COM3 - USB Serial", "COM4 - Bluetooth"]
    assert app.poller.snapshot().devices() == ["COM3"]


def test_quit_request_stops_run():
    app, _, _, _ = _make_app([[]])
    app.signals.request_quit()

    assert app.run() == 0


def test_main_headless_mock_once(tmp_path, monkeypatch):
    monkeypatch.setattr(HeadlessSignals, "install", lambda self: None)

    code = app_main.main(
        [
            "--mock",
            "--once",
            "--settings-dir",
            str(tmp_path),
            "--tick-ms",
            "1",
            "--idle-ms",
            "2",
            "--active-ms",
            "1",
        ]
    )

    assert code == 0


def test_main_list_prints_ports(tmp_path, capsys):
    code = app_main.main(["--mock", "--list", "--settings-dir", str(tmp_path)])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["COM3 - USB Serial Device"]


def test_main_saves_settings(tmp_path):
    code = app_main.main(
        ["--save-settings", "--settings-dir", str(tmp_path), "--idle-ms", "5000", "--prefix", "COM"]
    )

    assert code == 0
    saved = StorageLocal(str(tmp_path)).load_user_settings()
    assert saved["idle_interval_ms"] == 5000
    assert saved["port_prefixes"] == ["COM"]


def test_main_rejects_invalid_overrides(tmp_path):
    code = app_main.main(
        ["--save-settings", "--settings-dir", str(tmp_path), "--idle-ms", "100", "--active-ms", "500"]
    )

    assert code == 2


def test_invalid_settings_file_falls_back_to_defaults(tmp_path):
    storage = StorageLocal(str(tmp_path))
    storage.save_user_settings({"tick_ms": "fast"})

    assert app_main.load_settings(storage) == MonitorSettings()


def test_event_history_keeps_only_recent_events():
    usb = MockDevice("COM3", "USB Serial")
    frames = [[usb] if i % 2 == 0 else [] for i in range(501)]
    app, sink, _, _ = _make_app(frames, notify_on_start=False, event_history=50)

    app.run(max_cycles=501)

    assert len(sink.calls) == 500
    assert len(app.events) == 50
    assert app.events[-1].kind == "connected"
    assert app.events[-2].kind == "disconnected"


def test_main_without_display_suggests_headless(tmp_path, monkeypatch, caplog):
    tk = pytest.importorskip("tkinter")
    from portwatch.app.views import tray_window

    def _no_display(*args, **kwargs):
        raise tk.TclError("no display name and no $DISPLAY environment variable")

    monkeypatch.setattr(tray_window, "TrayWindowView", _no_display)

    with caplog.at_level("ERROR", logger="portwatch.app.main"):
        code = app_main.main(["--mock", "--settings-dir", str(tmp_path)])

    assert code == 1
    assert "--headless" in caplog.text
