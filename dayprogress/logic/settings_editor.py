"""
SettingsEditor – the edit boundary between the settings form and the store.

The form hands over raw values (time fields as "HH:MM" text). Nothing is
persisted unless every window parses and has distinct start/end; the first
invalid field produces a short, field-specific status message and the
current settings stay as they were.

A successful submit:
1. applies the run-at-startup preference (failures are reported, not fatal)
2. saves the complete settings value (failures propagate)
3. in the secondary window, signals the primary window to restart and asks
   the caller to close the secondary window shortly after
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from core.contracts.host import (
    MAIN_WINDOW_LABEL,
    WIDGET_RESTART_EVENT,
    AutostartError,
    HostError,
    IAutostart,
    IHostShell,
)
from core.logging.logic.logger import logger

from ..exceptions.errors import InvalidWindowInput
from ..models.day_window import DayOverride, DayWindow
from ..models.widget_settings import (
    DAY_NAMES,
    DAYS_PER_WEEK,
    DEFAULT_SETTINGS,
    ThemeId,
    TimeFormat,
    WidgetSettings,
)
from .clock_service import minutes_to_time, parse_time_to_minutes
from .settings_store import FEATURE_ID, WidgetSettingsStore

INVALID_FORMAT = "invalid time format."
SAME_START_END = "start and end cannot be the same."

WEEKDAY_LABEL = "Weekday schedule"
WEEKEND_LABEL = "Weekend schedule"


def override_label(day: int) -> str:
    return f"Override {DAY_NAMES[day]}"


def read_window(start_text: str, end_text: str, label: str) -> DayWindow:
    """
    Parses a start/end pair typed by the user.

    Raises:
        InvalidWindowInput: On a malformed time or equal start and end.
    """
    start = parse_time_to_minutes(start_text.strip())
    end = parse_time_to_minutes(end_text.strip())
    if start is None or end is None:
        raise InvalidWindowInput(label, INVALID_FORMAT)
    if start == end:
        raise InvalidWindowInput(label, SAME_START_END)
    return DayWindow(start, end)


# --- Form values ----------------------------------------------------------

@dataclass(frozen=True)
class OverrideRow:
    enabled: bool
    start: str
    end: str


@dataclass(frozen=True)
class SettingsForm:
    """Raw values as typed into the settings form."""
    theme: str
    use_24h: bool
    show_seconds: bool
    show_percent: bool
    run_on_startup: bool
    weekday_start: str
    weekday_end: str
    weekend_start: str
    weekend_end: str
    overrides: Tuple[OverrideRow, ...]

    @classmethod
    def from_settings(cls, s: WidgetSettings) -> "SettingsForm":
        return cls(
            theme=s.theme.value,
            use_24h=s.use_24h,
            show_seconds=s.show_seconds,
            show_percent=s.show_percent,
            run_on_startup=s.run_on_startup,
            weekday_start=minutes_to_time(s.weekday.start_minutes),
            weekday_end=minutes_to_time(s.weekday.end_minutes),
            weekend_start=minutes_to_time(s.weekend.start_minutes),
            weekend_end=minutes_to_time(s.weekend.end_minutes),
            overrides=tuple(
                OverrideRow(o.enabled, minutes_to_time(o.start_minutes), minutes_to_time(o.end_minutes))
                for o in s.overrides
            ),
        )


def build_settings(form: SettingsForm) -> WidgetSettings:
    """
    Validated WidgetSettings from raw form values.

    Raises:
        InvalidWindowInput: For the first window that does not parse.
    """
    weekday = read_window(form.weekday_start, form.weekday_end, WEEKDAY_LABEL)
    weekend = read_window(form.weekend_start, form.weekend_end, WEEKEND_LABEL)

    rows: Sequence[OverrideRow] = form.overrides
    if len(rows) != DAYS_PER_WEEK:
        raise ValueError(f"expected {DAYS_PER_WEEK} override rows, got {len(rows)}")
    overrides = tuple(
        DayOverride(enabled=bool(row.enabled), window=read_window(row.start, row.end, override_label(day)))
        for day, row in enumerate(rows)
    )

    return WidgetSettings(
        theme=ThemeId.parse(form.theme),
        time_format=TimeFormat.H24 if form.use_24h else TimeFormat.H12,
        show_seconds=bool(form.show_seconds),
        show_percent=bool(form.show_percent),
        run_on_startup=bool(form.run_on_startup),
        weekday=weekday,
        weekend=weekend,
        overrides=overrides,
    )


# --- Outcomes -------------------------------------------------------------

@dataclass(frozen=True)
class StatusMessage:
    text: str
    duration_ms: int


@dataclass(frozen=True)
class SaveOutcome:
    saved: bool
    settings: WidgetSettings
    status: StatusMessage
    autostart_applied: bool = True
    close_after_ms: Optional[int] = None


# --- Editor ---------------------------------------------------------------

class SettingsEditor:
    """
    Owns the in-memory settings of one window and the save/reset flow.
    """

    def __init__(
        self,
        store: WidgetSettingsStore,
        autostart: IAutostart,
        shell: Optional[IHostShell] = None,
    ) -> None:
        self._store = store
        self._autostart = autostart
        self._shell = shell
        self._settings = store.load()

    @property
    def settings(self) -> WidgetSettings:
        return self._settings

    @property
    def in_settings_window(self) -> bool:
        return self._shell is not None and self._shell.is_settings_window

    def reload(self) -> WidgetSettings:
        self._settings = self._store.load()
        return self._settings

    def form(self) -> SettingsForm:
        return SettingsForm.from_settings(self._settings)

    # --- Actions ------------------------------------------------------------

    def submit(self, form: SettingsForm) -> SaveOutcome:
        try:
            candidate = build_settings(form)
        except InvalidWindowInput as exc:
            logger.log(FEATURE_ID, "SettingsInputRejected", level="DEBUG", message=str(exc))
            return SaveOutcome(False, self._settings, StatusMessage(str(exc), 2000))

        autostart_applied = self.apply_run_on_startup_preference(candidate.run_on_startup)
        self._store.save(candidate)
        self._settings = candidate

        if not self.in_settings_window:
            if autostart_applied:
                return SaveOutcome(True, candidate, StatusMessage("Settings saved.", 1200))
            return SaveOutcome(
                True, candidate,
                StatusMessage("Settings saved, but startup setting could not be applied.", 2200),
                autostart_applied=False,
            )

        try:
            self._shell.emit(WIDGET_RESTART_EVENT, MAIN_WINDOW_LABEL)
        except HostError as exc:
            logger.log(FEATURE_ID, "WidgetRestartFailed", level="WARNING", message=str(exc))
            text = (
                "Settings saved, but widget restart failed."
                if autostart_applied
                else "Settings saved, but startup setting and widget restart failed."
            )
            return SaveOutcome(True, candidate, StatusMessage(text, 2400), autostart_applied)

        if autostart_applied:
            return SaveOutcome(
                True, candidate, StatusMessage("Settings saved. Restarting widget...", 1000),
                close_after_ms=180,
            )
        return SaveOutcome(
            True, candidate, StatusMessage("Settings saved. Startup setting could not be applied.", 2200),
            autostart_applied=False, close_after_ms=1200,
        )

    def reset_to_defaults(self) -> SaveOutcome:
        autostart_applied = self.apply_run_on_startup_preference(DEFAULT_SETTINGS.run_on_startup)
        self._store.save(DEFAULT_SETTINGS)
        self._settings = DEFAULT_SETTINGS
        if autostart_applied:
            return SaveOutcome(True, DEFAULT_SETTINGS, StatusMessage("Reset to defaults.", 1200))
        return SaveOutcome(
            True, DEFAULT_SETTINGS,
            StatusMessage("Reset done, but startup setting could not be applied.", 2200),
            autostart_applied=False,
        )

    def apply_run_on_startup_preference(self, enabled: bool) -> bool:
        """Brings the OS registration in line with ``enabled``; False on failure."""
        try:
            if self._autostart.is_enabled() == enabled:
                return True
            if enabled:
                self._autostart.enable()
            else:
                self._autostart.disable()
            return True
        except (AutostartError, OSError) as exc:
            logger.log(FEATURE_ID, "AutostartFailed", level="WARNING", message=str(exc))
            return False
