from portwatch.adapters.device_query_mock import UNAVAILABLE, DeviceQueryMock, MockDevice
from portwatch.usecases.enumerate_ports import EnumeratePorts
from portwatch.usecases.refresh_port_menu import PORT_MENU_BASE_ID, RefreshPortMenu


class _MenuStub:
    def __init__(self):
        self.entries = None
        self.calls = 0

    def set_entries(self, entries):
        self.calls += 1
        self.entries = list(entries)


def _uc(*frames):
    query = DeviceQueryMock(frames=list(frames))
    menu = _MenuStub()
    return RefreshPortMenu(EnumeratePorts(query, port_prefixes=("COM",)), menu), menu, query


def test_refresh_lists_current_ports_in_order():
    uc, menu, _ = _uc([MockDevice("COM4", "Bluetooth"), MockDevice("COM3", "USB Serial")])

    labels = uc()

    assert labels == ["COM3 - USB Serial", "COM4 - Bluetooth"]
    assert menu.entries == [
        (PORT_MENU_BASE_ID, "COM3 - USB Serial"),
        (PORT_MENU_BASE_ID + 1, "COM4 - Bluetooth"),
    ]


def test_refresh_enumerates_fresh_every_time():
    uc, menu, query = _uc([MockDevice("COM3", "USB")], [])

    assert uc() == ["COM3 - USB"]
    assert uc() == []
    assert query.queries == 2
    assert menu.calls == 2


def test_refresh_with_unavailable_registry_gives_empty_menu():
    uc, menu, _ = _uc(UNAVAILABLE)

    assert uc() == []
    assert menu.entries == []
