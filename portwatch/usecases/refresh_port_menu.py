"""Use case that rebuilds the port submenu right before it opens."""

from __future__ import annotations

from typing import List

from portwatch.domain.ports import MenuEntry, MenuPort
from portwatch.usecases.enumerate_ports import EnumeratePorts

PORT_MENU_BASE_ID = 1000


class RefreshPortMenu:
    """Use-case callable for the "menu about to open" signal.

    Enumerates live instead of reading the poller's stored snapshot, so the
    menu is current even when the last background poll is stale.
    """

    def __init__(self, enumerate_ports: EnumeratePorts, menu: MenuPort) -> None:
        self.enumerate_ports = enumerate_ports
        self.menu = menu

    def __call__(self) -> List[str]:
        """Populate the menu and return its labels in display order."""
        snapshot = self.enumerate_ports()
        entries: List[MenuEntry] = [
            (PORT_MENU_BASE_ID + index, record.label)
            for index, record in enumerate(snapshot)
        ]
        self.menu.set_entries(entries)
        return [label for _, label in entries]


__all__ = ["PORT_MENU_BASE_ID", "RefreshPortMenu"]
