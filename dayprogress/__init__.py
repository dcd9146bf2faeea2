"""
Day Progress feature package initializer.

Provides factory functions a host window can call to create the progress
view and its settings view without hard-coding internals.

Both factories accept a `parent` Tk container and the shell of the window
they are mounted in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # tkinter stays optional for the headless logic
    import tkinter as tk

    from core.contracts.host import IHostShell


def get_feature_name() -> str:
    """
    Human readable feature name (used e.g. for window titles).

    Returns:
        str: The configured application name.
    """
    from core.config.config_service import config_service
    return config_service.general.app_name or "Day Progress"


def create_feature_view(parent: tk.Misc, shell: IHostShell) -> tk.Frame:
    """
    Factory for the main progress view.

    Args:
        parent (tk.Misc): Tk container to mount the widget onto.
        shell (IHostShell): Shell of the primary window.

    Returns:
        tk.Frame: A fully wired progress widget.
    """
    from core.config.config_service import config_service

    from .app import build_editor
    from .gui.progress_widget import DayProgressWidget
    from .logic.clock_service import ClockService
    return DayProgressWidget(
        parent,
        editor=build_editor(shell),
        shell=shell,
        clock=ClockService(config_service.general.timezone),
        tick_offset_ms=config_service.widget.tick_offset_ms,
    )


def create_settings_view(parent: tk.Misc, shell: Optional[IHostShell] = None) -> tk.Frame:
    """
    Factory for the settings view.

    Args:
        parent (tk.Misc): Tk container to mount the widget onto.
        shell (IHostShell, optional): Shell of the settings window.

    Returns:
        tk.Frame: The settings editor frame.
    """
    from .app import build_editor
    from .gui.settings_widget import DayProgressSettingsWidget
    return DayProgressSettingsWidget(parent, editor=build_editor(shell), shell=shell)
