import pytest

tk = pytest.importorskip("tkinter")

from portwatch.app.views.tray_window import NO_PORTS_LABEL, TrayWindowView  # noqa: E402


@pytest.fixture
def view():
    opened = []
    try:
        win = TrayWindowView(on_menu_open=lambda: opened.append(True), toast_ms=0)
    except tk.TclError:
        pytest.skip("Tk display not available")
    win.withdraw()
    win.opened = opened
    yield win
    win.close()


def _labels(menu):
    last = menu.index("end")
    if last is None:
        return []
    return [menu.entrycget(i, "label") for i in range(last + 1)]


def test_empty_menu_shows_placeholder(view):
    assert _labels(view.ports_menu) == [NO_PORTS_LABEL]


def test_set_entries_replaces_menu(view):
    view.set_entries([(1000, "COM3 - USB Serial"), (1001, "COM4 - Bluetooth")])

    assert _labels(view.ports_menu) == ["COM3 - USB Serial", "COM4 - Bluetooth"]
    assert view.ports_menu.entrycget(0, "state") == "disabled"


def test_menu_open_hook_and_quit(view):
    view._handle_menu_open()
    view.show("Serial port connected", "New serial port COM4 connected")
    view.pump_events()

    assert view.opened == [True]
    assert view.message_var.get() == "New serial port COM4 connected"
    assert view.quit_requested() is False

    view.request_quit()

    assert view.quit_requested() is True
