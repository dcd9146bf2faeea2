"""
DayProgressSettingsWidget (Tkinter)
-----------------------------------
Settings UI for the Day Progress widget.

UX:
- Theme, clock format, display toggles, startup toggle.
- Weekday and weekend windows plus one optional override per weekday.
- Save validates every window first; invalid input leaves everything as is.
- In the settings window, a successful save restarts the widget and closes
  this window shortly after.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import messagebox, ttk
from typing import List, Optional, Tuple

from core.contracts.host import SETTINGS_REFRESH_EVENT, HostError, IHostShell
from core.helpers.status_helper import StatusLine
from core.logging.logic.logger import logger

from ..exceptions.errors import SettingsPersistenceError
from ..logic.settings_editor import OverrideRow, SaveOutcome, SettingsEditor, SettingsForm
from ..logic.settings_store import FEATURE_ID
from ..models.widget_settings import DAY_NAMES, ThemeId

_THEME_VALUES = [t.value for t in ThemeId]


class DayProgressSettingsWidget(ttk.Frame):
    """
    Settings editor bound to a SettingsEditor and the shell of its window.
    """

    def __init__(self, parent: tk.Misc, *, editor: SettingsEditor, shell: Optional[IHostShell] = None) -> None:
        super().__init__(parent, padding=10)
        self._editor = editor
        self._shell = shell

        self._build_ui()
        self._status = StatusLine(self.status_var.set, self.after, self.after_cancel)
        self._populate(editor.form())

        if shell is not None:
            shell.subscribe(SETTINGS_REFRESH_EVENT, self.refresh)
        self._status.set_status("Save to apply and restart the widget.", 2400)

    # --- Public API ---------------------------------------------------------

    def refresh(self) -> None:
        """Discards unsaved edits and shows the stored settings."""
        self._editor.reload()
        self._populate(self._editor.form())

    # --- UI -----------------------------------------------------------------

    def _build_ui(self) -> None:
        self.columnconfigure(1, weight=1)
        row = 0

        # Appearance
        ttk.Label(self, text="Theme").grid(row=row, column=0, sticky="w", pady=4)
        self.theme_var = tk.StringVar(value=ThemeId.MIDNIGHT.value)
        ttk.Combobox(self, textvariable=self.theme_var, values=_THEME_VALUES, state="readonly").grid(
            row=row, column=1, columnspan=3, sticky="ew", pady=4
        )
        row += 1

        ttk.Label(self, text="Time format").grid(row=row, column=0, sticky="w", pady=4)
        self.use_24h_var = tk.BooleanVar(value=False)
        fmt = ttk.Frame(self)
        fmt.grid(row=row, column=1, columnspan=3, sticky="w")
        ttk.Radiobutton(fmt, text="12-hour", variable=self.use_24h_var, value=False).grid(row=0, column=0)
        ttk.Radiobutton(fmt, text="24-hour", variable=self.use_24h_var, value=True).grid(row=0, column=1, padx=8)
        row += 1

        self.show_seconds_var = tk.BooleanVar(value=False)
        self.show_percent_var = tk.BooleanVar(value=True)
        self.run_on_startup_var = tk.BooleanVar(value=False)
        for text, var in (("Show seconds", self.show_seconds_var),
                          ("Show percent", self.show_percent_var),
                          ("Run at system startup", self.run_on_startup_var)):
            ttk.Checkbutton(self, text=text, variable=var).grid(row=row, column=0, columnspan=4, sticky="w", pady=2)
            row += 1

        # Default windows
        ttk.Separator(self).grid(row=row, column=0, columnspan=4, sticky="ew", pady=8)
        row += 1
        self.weekday_start, self.weekday_end = self._window_row(row, "Weekdays (Mon–Fri)")
        row += 1
        self.weekend_start, self.weekend_end = self._window_row(row, "Weekend (Sat–Sun)")
        row += 1

        # Per-day overrides
        ttk.Separator(self).grid(row=row, column=0, columnspan=4, sticky="ew", pady=8)
        row += 1
        ttk.Label(self, text="Overrides").grid(row=row, column=0, sticky="w", pady=(0, 4))
        row += 1
        self.override_rows: List[Tuple[tk.BooleanVar, ttk.Entry, ttk.Entry]] = []
        for day, name in enumerate(DAY_NAMES):
            enabled = tk.BooleanVar(value=False)
            ttk.Checkbutton(self, text=name, variable=enabled).grid(row=row, column=0, sticky="w", pady=2)
            start = ttk.Entry(self, width=7)
            end = ttk.Entry(self, width=7)
            start.grid(row=row, column=1, sticky="w", pady=2)
            ttk.Label(self, text="to").grid(row=row, column=2, padx=4)
            end.grid(row=row, column=3, sticky="w", pady=2)
            self.override_rows.append((enabled, start, end))
            row += 1

        # Buttons
        ttk.Separator(self).grid(row=row, column=0, columnspan=4, sticky="ew", pady=8)
        row += 1
        btns = ttk.Frame(self)
        btns.grid(row=row, column=0, columnspan=4, sticky="e")
        self.save_btn = ttk.Button(btns, text="Save", command=self._on_save)
        self.reset_btn = ttk.Button(btns, text="Reset to defaults", command=self._on_reset)
        self.close_btn = ttk.Button(btns, text="Close", command=self._on_close)
        self.save_btn.grid(row=0, column=0, padx=(0, 6))
        self.reset_btn.grid(row=0, column=1, padx=(0, 6))
        self.close_btn.grid(row=0, column=2)
        row += 1

        self.status_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.status_var, wraplength=380).grid(
            row=row, column=0, columnspan=4, sticky="w", pady=(8, 0)
        )

    def _window_row(self, row: int, text: str) -> Tuple[ttk.Entry, ttk.Entry]:
        ttk.Label(self, text=text).grid(row=row, column=0, sticky="w", pady=2)
        start = ttk.Entry(self, width=7)
        end = ttk.Entry(self, width=7)
        start.grid(row=row, column=1, sticky="w", pady=2)
        ttk.Label(self, text="to").grid(row=row, column=2, padx=4)
        end.grid(row=row, column=3, sticky="w", pady=2)
        return start, end

    # --- Data binding -------------------------------------------------------

    def _populate(self, form: SettingsForm) -> None:
        self.theme_var.set(form.theme)
        self.use_24h_var.set(form.use_24h)
        self.show_seconds_var.set(form.show_seconds)
        self.show_percent_var.set(form.show_percent)
        self.run_on_startup_var.set(form.run_on_startup)
        self._set_text(self.weekday_start, form.weekday_start)
        self._set_text(self.weekday_end, form.weekday_end)
        self._set_text(self.weekend_start, form.weekend_start)
        self._set_text(self.weekend_end, form.weekend_end)
        for (enabled, start, end), row in zip(self.override_rows, form.overrides):
            enabled.set(row.enabled)
            self._set_text(start, row.start)
            self._set_text(end, row.end)

    def _collect(self) -> SettingsForm:
        return SettingsForm(
            theme=self.theme_var.get(),
            use_24h=bool(self.use_24h_var.get()),
            show_seconds=bool(self.show_seconds_var.get()),
            show_percent=bool(self.show_percent_var.get()),
            run_on_startup=bool(self.run_on_startup_var.get()),
            weekday_start=self.weekday_start.get(),
            weekday_end=self.weekday_end.get(),
            weekend_start=self.weekend_start.get(),
            weekend_end=self.weekend_end.get(),
            overrides=tuple(
                OverrideRow(bool(enabled.get()), start.get(), end.get())
                for enabled, start, end in self.override_rows
            ),
        )

    # --- Actions ------------------------------------------------------------

    def _on_save(self) -> None:
        try:
            outcome = self._editor.submit(self._collect())
        except SettingsPersistenceError as exc:
            messagebox.showerror(title="Settings not saved", message=str(exc), parent=self)
            return
        self._show_outcome(outcome)
        if outcome.close_after_ms is not None:
            self.after(outcome.close_after_ms, self._on_close)

    def _on_reset(self) -> None:
        try:
            outcome = self._editor.reset_to_defaults()
        except SettingsPersistenceError as exc:
            messagebox.showerror(title="Settings not saved", message=str(exc), parent=self)
            return
        self._populate(self._editor.form())
        self._show_outcome(outcome)

    def _on_close(self) -> None:
        if self._shell is None or not self._shell.is_settings_window:
            return
        try:
            self._shell.close_current_window()
        except HostError as exc:
            logger.log(FEATURE_ID, "SettingsCloseFailed", level="WARNING", message=str(exc))

    def _show_outcome(self, outcome: SaveOutcome) -> None:
        self._status.set_status(outcome.status.text, outcome.status.duration_ms)

    # --- Helpers ------------------------------------------------------------

    @staticmethod
    def _set_text(ctrl: ttk.Entry, value: str) -> None:
        ctrl.delete(0, "end")
        ctrl.insert(0, value)
