"""
TkHostShell – IHostShell for a Tk toplevel window.

Dragging and resizing follow the pointer until button 1 is released. Signals
travel through a SignalBus shared by all windows of the process; handlers
run on the Tk event loop via ``after(0, ...)``.
"""

from __future__ import annotations

import tkinter as tk
from typing import Callable, Optional

from core.common.signal_bus import SignalBus
from core.contracts.host import (
    SETTINGS_WINDOW_LABEL,
    HostError,
    IHostShell,
    ResizeDirection,
    SignalHandler,
)

MIN_WIDTH = 140
MIN_HEIGHT = 60

SecondaryFactory = Callable[[], "TkHostShell"]


class TkHostShell(IHostShell):
    def __init__(
        self,
        window: tk.Wm,
        label: str,
        bus: SignalBus,
        *,
        secondary_factory: Optional[SecondaryFactory] = None,
    ) -> None:
        """
        Args:
            window: The Tk or Toplevel this shell controls.
            label: Window label used as signal target.
            bus: Process-wide signal bus.
            secondary_factory: Builds the settings window (primary window only).
        """
        self._window = window
        self._label = label
        self._bus = bus
        self._secondary_factory = secondary_factory
        self._secondary: Optional[TkHostShell] = None
        self._motion_id: Optional[str] = None
        self._release_id: Optional[str] = None

        bus.register_window(label, lambda fn: window.after(0, fn))
        window.bind("<Destroy>", self._on_destroy, add="+")

    @property
    def label(self) -> str:
        return self._label

    @property
    def window(self) -> tk.Wm:
        return self._window

    # --- Drag / resize --------------------------------------------------------

    def start_dragging(self) -> None:
        try:
            w = self._window
            dx = w.winfo_pointerx() - w.winfo_rootx()
            dy = w.winfo_pointery() - w.winfo_rooty()
        except tk.TclError as exc:
            raise HostError(f"Cannot start dragging: {exc}") from exc

        def on_motion(event: tk.Event) -> None:
            w.geometry(f"+{event.x_root - dx}+{event.y_root - dy}")

        self._track_pointer(on_motion)

    def start_resize_dragging(self, direction: ResizeDirection) -> None:
        if not isinstance(direction, ResizeDirection):
            raise HostError(f"Unknown resize direction: {direction!r}")
        try:
            w = self._window
            x0, y0 = w.winfo_rootx(), w.winfo_rooty()
            width0, height0 = w.winfo_width(), w.winfo_height()
            px0, py0 = w.winfo_pointerx(), w.winfo_pointery()
        except tk.TclError as exc:
            raise HostError(f"Cannot start resizing: {exc}") from exc

        name = direction.value

        def on_motion(event: tk.Event) -> None:
            dx = event.x_root - px0
            dy = event.y_root - py0
            x, y, width, height = x0, y0, width0, height0
            if "East" in name:
                width = max(MIN_WIDTH, width0 + dx)
            if "West" in name:
                width = max(MIN_WIDTH, width0 - dx)
                x = x0 + width0 - width
            if "South" in name:
                height = max(MIN_HEIGHT, height0 + dy)
            if "North" in name:
                height = max(MIN_HEIGHT, height0 - dy)
                y = y0 + height0 - height
            w.geometry(f"{width}x{height}+{x}+{y}")

        self._track_pointer(on_motion)

    def _track_pointer(self, on_motion: Callable[[tk.Event], None]) -> None:
        self._stop_tracking()
        w = self._window
        self._motion_id = w.bind("<B1-Motion>", on_motion, add="+")
        self._release_id = w.bind("<ButtonRelease-1>", lambda _e: self._stop_tracking(), add="+")

    def _stop_tracking(self) -> None:
        w = self._window
        for sequence, attr in (("<B1-Motion>", "_motion_id"), ("<ButtonRelease-1>", "_release_id")):
            func_id = getattr(self, attr)
            if func_id is not None:
                try:
                    w.unbind(sequence, func_id)
                except tk.TclError:
                    pass
                setattr(self, attr, None)

    # --- Secondary window -----------------------------------------------------

    def open_secondary_window(self) -> None:
        if self._secondary_factory is None:
            raise HostError("This window cannot open a settings window")
        try:
            self._secondary = self._secondary_factory()
        except tk.TclError as exc:
            raise HostError(f"Cannot open settings window: {exc}") from exc

    def focus_secondary_window(self) -> bool:
        secondary = self._secondary
        if secondary is None or not self._bus.has_window(SETTINGS_WINDOW_LABEL):
            self._secondary = None
            return False
        try:
            secondary.window.deiconify()
            secondary.window.lift()
            secondary.window.focus_force()
        except tk.TclError as exc:
            raise HostError(f"Cannot focus settings window: {exc}") from exc
        return True

    def close_current_window(self) -> None:
        try:
            self._window.destroy()
        except tk.TclError as exc:
            raise HostError(f"Cannot close window: {exc}") from exc

    # --- Signals --------------------------------------------------------------

    def emit(self, event: str, target: str) -> None:
        self._bus.emit(event, target)

    def subscribe(self, event: str, handler: SignalHandler) -> None:
        self._bus.subscribe(self._label, event, handler)

    def _on_destroy(self, event: tk.Event) -> None:
        if event.widget is self._window:
            self._bus.unregister_window(self._label)
