"""
Application wiring for the Day Progress widget.

Builds the store, autostart backend, windows and shells from the layered
configuration and starts the Tk main loop.
"""

from __future__ import annotations

import tkinter as tk
from datetime import datetime
from pathlib import Path
from typing import Optional

from core.common.signal_bus import SignalBus
from core.config.config_service import config_service
from core.contracts.host import (
    MAIN_WINDOW_LABEL,
    SETTINGS_WINDOW_LABEL,
    IAutostart,
    IHostShell,
)
from core.logging.logic.logger import logger
from core.settings.logic.key_value_store import SQLiteKeyValueStore

from . import create_feature_view, create_settings_view, get_feature_name
from .gui.tk_host_shell import TkHostShell
from .logic.autostart import create_autostart
from .logic.clock_service import ClockService
from .logic.settings_editor import SettingsEditor
from .logic.settings_store import FEATURE_ID, WidgetSettingsStore

SETTINGS_WINDOW_TITLE = "Widget Settings"


def build_store(db_path: Optional[Path] = None) -> WidgetSettingsStore:
    return WidgetSettingsStore(SQLiteKeyValueStore(db_path or config_service.database.settings))


def build_editor(
    shell: Optional[IHostShell] = None,
    *,
    store: Optional[WidgetSettingsStore] = None,
    autostart: Optional[IAutostart] = None,
) -> SettingsEditor:
    """Each window gets its own editor, i.e. its own freshly loaded settings copy."""
    return SettingsEditor(store or build_store(), autostart or create_autostart(), shell)


def status_text(now: Optional[datetime] = None, store: Optional[WidgetSettingsStore] = None) -> str:
    """One-line summary of the active window, e.g. for ``--status``."""
    clock = ClockService(config_service.general.timezone)
    settings = (store or build_store()).load()
    now = now or clock.now()
    progress = clock.day_progress(now, settings)
    return (
        f"{clock.format_time(now, settings)}  "
        f"{clock.format_window(progress.schedule.window)}  "
        f"{clock.format_percent(progress.percent)}"
    )


def _open_settings_window(master: tk.Misc, bus: SignalBus) -> TkHostShell:
    cfg = config_service.widget
    top = tk.Toplevel(master)
    top.title(SETTINGS_WINDOW_TITLE)
    top.geometry(f"{cfg.settings_width}x{cfg.settings_height}")
    top.minsize(cfg.settings_width, cfg.settings_height)
    top.resizable(False, False)

    shell = TkHostShell(top, SETTINGS_WINDOW_LABEL, bus)
    create_settings_view(top, shell).pack(fill="both", expand=True)
    return shell


def run_widget() -> None:
    cfg = config_service.widget
    root = tk.Tk()
    root.title(get_feature_name())
    root.geometry(f"{cfg.width}x{cfg.height}")
    root.overrideredirect(True)
    root.attributes("-topmost", bool(cfg.always_on_top))

    bus = SignalBus()
    shell = TkHostShell(
        root, MAIN_WINDOW_LABEL, bus,
        secondary_factory=lambda: _open_settings_window(root, bus),
    )
    create_feature_view(root, shell).pack(fill="both", expand=True)

    # Escape closes the borderless widget
    root.bind("<Escape>", lambda _e: shell.close_current_window())
    logger.log(FEATURE_ID, "WidgetStarted")
    root.mainloop()


def run_settings() -> None:
    """Settings form as the only window (no widget to restart)."""
    cfg = config_service.widget
    root = tk.Tk()
    root.title(SETTINGS_WINDOW_TITLE)
    root.geometry(f"{cfg.settings_width}x{cfg.settings_height}")

    bus = SignalBus()
    shell = TkHostShell(root, SETTINGS_WINDOW_LABEL, bus)
    create_settings_view(root, shell).pack(fill="both", expand=True)
    root.mainloop()
