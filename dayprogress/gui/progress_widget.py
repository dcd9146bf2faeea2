"""
DayProgressWidget (Tkinter)
---------------------------
The always-on-top display: current time, progress through the active day
window, and the window itself.

UX notes:
- Drag anywhere to move; drag the edge strips to resize.
- Triple click opens the settings window (or focuses an open one).
- Re-renders just after every wall-clock second.
- Reloads its settings when the settings window signals a restart.
"""

from __future__ import annotations

import tkinter as tk
from typing import Optional

from PIL import ImageTk

from core.contracts.host import (
    SETTINGS_REFRESH_EVENT,
    SETTINGS_WINDOW_LABEL,
    WIDGET_RESTART_EVENT,
    HostError,
    IHostShell,
    ResizeDirection,
)
from core.helpers.status_helper import StatusLine
from core.logging.logic.logger import logger

from ..logic.clock_service import ClockService, DayProgress
from ..logic.settings_editor import SettingsEditor
from ..logic.settings_store import FEATURE_ID
from ..models.widget_settings import WidgetSettings
from .progress_bar import render_progress_bar
from .themes import palette_for

HANDLE = 5
BAR_HEIGHT = 8

# (direction, place() options) for the invisible resize strips
_HANDLE_LAYOUT = (
    (ResizeDirection.NORTH, dict(relx=0, rely=0, relwidth=1, height=HANDLE)),
    (ResizeDirection.SOUTH, dict(relx=0, rely=1, relwidth=1, height=HANDLE, anchor="sw")),
    (ResizeDirection.WEST, dict(relx=0, rely=0, relheight=1, width=HANDLE)),
    (ResizeDirection.EAST, dict(relx=1, rely=0, relheight=1, width=HANDLE, anchor="ne")),
    (ResizeDirection.NORTH_WEST, dict(relx=0, rely=0, width=HANDLE * 2, height=HANDLE * 2)),
    (ResizeDirection.NORTH_EAST, dict(relx=1, rely=0, width=HANDLE * 2, height=HANDLE * 2, anchor="ne")),
    (ResizeDirection.SOUTH_WEST, dict(relx=0, rely=1, width=HANDLE * 2, height=HANDLE * 2, anchor="sw")),
    (ResizeDirection.SOUTH_EAST, dict(relx=1, rely=1, width=HANDLE * 2, height=HANDLE * 2, anchor="se")),
)

_CURSORS = {
    ResizeDirection.NORTH: "top_side",
    ResizeDirection.SOUTH: "bottom_side",
    ResizeDirection.WEST: "left_side",
    ResizeDirection.EAST: "right_side",
    ResizeDirection.NORTH_WEST: "top_left_corner",
    ResizeDirection.NORTH_EAST: "top_right_corner",
    ResizeDirection.SOUTH_WEST: "bottom_left_corner",
    ResizeDirection.SOUTH_EAST: "bottom_right_corner",
}


class DayProgressWidget(tk.Frame):
    """
    Main view. Mount this into the primary toplevel.
    """

    def __init__(
        self,
        parent: tk.Misc,
        *,
        editor: SettingsEditor,
        shell: IHostShell,
        clock: Optional[ClockService] = None,
        tick_offset_ms: int = 5,
    ) -> None:
        super().__init__(parent, highlightthickness=0, bd=0)
        self._editor = editor
        self._shell = shell
        self._clock = clock or ClockService()
        self._tick_offset_ms = tick_offset_ms
        self._after_id: Optional[str] = None
        self._dragging = False
        self._bar_image: Optional[ImageTk.PhotoImage] = None
        self._last_percent = 0.0

        self._build_ui()
        self._status = StatusLine(self.status_var.set, self.after, self.after_cancel)
        shell.subscribe(WIDGET_RESTART_EVENT, self.restart)

        self._apply_theme()
        self.render()
        if not editor.apply_run_on_startup_preference(editor.settings.run_on_startup):
            self._status.set_status("Startup setting could not be applied.", 2200)
        else:
            self._status.set_status("Triple click to open settings.", 2200)
        self._schedule_tick()

    @property
    def settings(self) -> WidgetSettings:
        return self._editor.settings

    # --- Public API ---------------------------------------------------------

    def restart(self) -> None:
        """Reloads settings from the store and starts over."""
        self._editor.reload()
        logger.log(FEATURE_ID, "WidgetRestarted")
        self._apply_theme()
        self.render()
        if not self._editor.apply_run_on_startup_preference(self.settings.run_on_startup):
            self._status.set_status("Startup setting could not be applied.", 2200)
        self._reschedule()

    def render(self) -> DayProgress:
        s = self.settings
        progress = self._clock.day_progress(self._clock.now(), s)

        self.time_var.set(self._clock.format_time(progress.now, s))
        self.percent_var.set(self._clock.format_percent(progress.percent))
        if s.show_percent:
            self.percent_label.grid()
        else:
            self.percent_label.grid_remove()
        self.window_var.set(self._clock.format_window(progress.schedule.window))
        self._draw_bar(progress.percent)
        return progress

    # --- UI -----------------------------------------------------------------

    def _build_ui(self) -> None:
        self.columnconfigure(0, weight=1)

        self.time_var = tk.StringVar(value="--:--")
        self.percent_var = tk.StringVar(value="")
        self.window_var = tk.StringVar(value="")
        self.status_var = tk.StringVar(value="")

        self.time_label = tk.Label(self, textvariable=self.time_var, font=("Segoe UI", 26, "bold"))
        self.time_label.grid(row=0, column=0, sticky="w", padx=(14, 6), pady=(10, 0))

        self.percent_label = tk.Label(self, textvariable=self.percent_var, font=("Segoe UI", 18))
        self.percent_label.grid(row=0, column=1, sticky="e", padx=(6, 14), pady=(10, 0))

        self.bar_label = tk.Label(self, bd=0, highlightthickness=0, padx=0, pady=0)
        self.bar_label.grid(row=1, column=0, columnspan=2, sticky="ew", padx=14, pady=(6, 2))

        self.window_label = tk.Label(self, textvariable=self.window_var, font=("Segoe UI", 10))
        self.window_label.grid(row=2, column=0, sticky="w", padx=14)

        self.status_label = tk.Label(self, textvariable=self.status_var, font=("Segoe UI", 9))
        self.status_label.grid(row=3, column=0, columnspan=2, sticky="w", padx=14, pady=(0, 8))

        for w in (self, self.time_label, self.percent_label, self.bar_label,
                  self.window_label, self.status_label):
            w.bind("<ButtonPress-1>", self._on_press)
            w.bind("<B1-Motion>", self._on_motion)
            w.bind("<Triple-Button-1>", lambda _e: self.open_settings())

        self.bar_label.bind("<Configure>", lambda _e: self._draw_bar(None))

        self._handles = []
        for direction, opts in _HANDLE_LAYOUT:
            handle = tk.Frame(self, cursor=_CURSORS[direction], bd=0, highlightthickness=0)
            handle.place(**opts)
            handle.bind("<ButtonPress-1>", lambda _e, d=direction: self._on_resize(d))
            self._handles.append(handle)

    def _apply_theme(self) -> None:
        p = palette_for(self.settings.theme)
        self.configure(bg=p.background)
        for lbl, fg in ((self.time_label, p.foreground), (self.percent_label, p.accent),
                        (self.window_label, p.muted), (self.status_label, p.muted),
                        (self.bar_label, p.foreground)):
            lbl.configure(bg=p.background, fg=fg)
        for handle in self._handles:
            handle.configure(bg=p.background)
            handle.lift()

    def _draw_bar(self, percent: Optional[float]) -> None:
        if percent is None:
            percent = self._last_percent
        self._last_percent = percent
        width = max(self.bar_label.winfo_width(), 40)
        img = render_progress_bar(width, BAR_HEIGHT, percent, palette_for(self.settings.theme))
        self._bar_image = ImageTk.PhotoImage(img)
        self.bar_label.configure(image=self._bar_image)

    # --- Pointer ------------------------------------------------------------

    def _on_press(self, _event: tk.Event) -> None:
        self._dragging = False

    def _on_motion(self, _event: tk.Event) -> None:
        if self._dragging:
            return
        self._dragging = True
        try:
            self._shell.start_dragging()
        except HostError as exc:
            self._dragging = False
            logger.log(FEATURE_ID, "DragFailed", level="WARNING", message=str(exc))
            self._status.set_status("Unable to move widget.", 2000)

    def _on_resize(self, direction: ResizeDirection) -> str:
        try:
            self._shell.start_resize_dragging(direction)
        except HostError as exc:
            logger.log(FEATURE_ID, "ResizeFailed", level="WARNING", message=str(exc))
            self._status.set_status("Unable to resize widget.", 2000)
        return "break"

    def open_settings(self) -> None:
        self._dragging = False
        try:
            if self._shell.focus_secondary_window():
                self._shell.emit(SETTINGS_REFRESH_EVENT, SETTINGS_WINDOW_LABEL)
                return
        except HostError as exc:
            logger.log(FEATURE_ID, "SettingsFocusFailed", level="WARNING", message=str(exc))
            self._status.set_status("Unable to focus settings window.", 2000)
            return
        try:
            self._shell.open_secondary_window()
        except HostError as exc:
            logger.log(FEATURE_ID, "SettingsOpenFailed", level="WARNING", message=str(exc))
            self._status.set_status("Unable to open settings window.", 2000)

    # --- Tick loop ----------------------------------------------------------

    def _schedule_tick(self) -> None:
        delay = self._clock.next_tick_delay_ms(self._clock.now(), self._tick_offset_ms)
        self._after_id = self.after(delay, self._on_tick)

    def _reschedule(self) -> None:
        if self._after_id is not None:
            self.after_cancel(self._after_id)
            self._after_id = None
        self._schedule_tick()

    def _on_tick(self) -> None:
        self.render()
        self._schedule_tick()
