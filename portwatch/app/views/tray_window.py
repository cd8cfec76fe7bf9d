"""
TrayWindowView
--------------
Small Tkinter window standing in for the system tray icon.
This file contains **only View code** - no device queries, no diffing. It
exposes callback hooks that are connected by the app composition module.

The window provides:
  * A "Ports" menu rebuilt right before it opens (``postcommand``)
  * A "Quit" menu item and window-close handling
  * A status line and short-lived toast popups for notifications
"""
from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional, Sequence, Tuple

NO_PORTS_LABEL = "No serial ports"


class TrayWindowView(tk.Tk):
    """Top-level window implementing the notification, menu and lifecycle ports.

    ``pump_events`` drains pending Tk events without blocking so the
    cooperative monitor loop, not ``mainloop``, owns the thread.
    """

    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        on_menu_open: OnVoid = None,
        title: str = "Serial port monitor",
        toast_ms: int = 4000,
    ) -> None:
        super().__init__()
        self.title(title)
        self.geometry("360x90")
        self.resizable(False, False)

        self._on_menu_open = on_menu_open
        self._toast_ms = max(0, int(toast_ms))
        self._quit = False
        self._toast: Optional[tk.Toplevel] = None

        self._build_menu()
        self._build_status()

        self.protocol("WM_DELETE_WINDOW", self.request_quit)
        self.bind("<Control-q>", lambda e: self.request_quit())

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_menu(self) -> None:
        menubar = tk.Menu(self)
        self.ports_menu = tk.Menu(menubar, tearoff=False, postcommand=self._handle_menu_open)
        menubar.add_cascade(label="Ports", menu=self.ports_menu)
        menubar.add_command(label="Quit", command=self.request_quit)
        self.config(menu=menubar)
        self.set_entries(())

    def _build_status(self) -> None:
        frame = ttk.Frame(self, padding=8)
        frame.pack(fill="both", expand=True)
        self.title_var = tk.StringVar(value="Serial monitor")
        self.message_var = tk.StringVar(value="Watching for port changes...")
        ttk.Label(frame, textvariable=self.title_var, font=("TkDefaultFont", 10, "bold")).pack(anchor="w")
        ttk.Label(frame, textvariable=self.message_var).pack(anchor="w")

    def _handle_menu_open(self) -> None:
        if self._on_menu_open:
            self._on_menu_open()

    # ------------------------------------------------------------------
    # MenuPort
    # ------------------------------------------------------------------
    def set_entries(self, entries: Sequence[Tuple[int, str]]) -> None:
        """Replace the port submenu; entries are display-only."""
        self.ports_menu.delete(0, "end")
        if not entries:
            self.ports_menu.add_command(label=NO_PORTS_LABEL, state="disabled")
            return
        for _menu_id, label in entries:
            self.ports_menu.add_command(label=label, state="disabled")

    # ------------------------------------------------------------------
    # NotificationPort
    # ------------------------------------------------------------------
    def show(self, title: str, message: str) -> None:
        self.title_var.set(title)
        self.message_var.set(message)
        if self._toast_ms:
            self._show_toast(title, message)

    def _show_toast(self, title: str, message: str) -> None:
        if self._toast is not None:
            self._toast.destroy()
        toast = tk.Toplevel(self)
        toast.overrideredirect(True)
        toast.attributes("-topmost", True)
        body = ttk.Frame(toast, padding=10, relief="solid", borderwidth=1)
        body.pack(fill="both", expand=True)
        ttk.Label(body, text=title, font=("TkDefaultFont", 10, "bold")).pack(anchor="w")
        ttk.Label(body, text=message).pack(anchor="w")
        toast.update_idletasks()
        x = self.winfo_screenwidth() - toast.winfo_reqwidth() - 24
        y = self.winfo_screenheight() - toast.winfo_reqheight() - 64
        toast.geometry(f"+{x}+{y}")
        self._toast = toast
        self.after(self._toast_ms, lambda: self._dismiss_toast(toast))

    def _dismiss_toast(self, toast: tk.Toplevel) -> None:
        if self._toast is toast:
            self._toast = None
        toast.destroy()

    # ------------------------------------------------------------------
    # LifecyclePort
    # ------------------------------------------------------------------
    def pump_events(self) -> None:
        if self._quit:
            return
        try:
            self.update()
        except tk.TclError:
            # Window already destroyed by the window manager.
            self._quit = True

    def quit_requested(self) -> bool:
        return self._quit

    def request_quit(self) -> None:
        self._quit = True

    def close(self) -> None:
        try:
            self.destroy()
        except tk.TclError:
            pass
