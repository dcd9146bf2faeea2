"""
WidgetSettingsStore
-------------------
Loads and saves WidgetSettings through a string key-value store.

Strategy:
- Two keys are read in priority order: the current schema, then the legacy
  schema. Each key has its own parser; the first one that yields a complete
  value wins. When none does, the factory defaults are returned.
- Corrupt or stale data is never surfaced: it is logged and skipped.
- Saving always writes the complete current-schema document; the legacy key
  is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from core.contracts.settings import IKeyValueStore
from core.logging.logic.logger import logger

from ..exceptions.errors import SettingsPersistenceError
from ..models.widget_settings import DEFAULT_SETTINGS, WidgetSettings
from . import settings_codec

FEATURE_ID = "dayprogress"

CURRENT_SCHEMA_KEY = "widget-launcher.settings.v2"
LEGACY_SCHEMA_KEY = "widget-launcher.settings.v1"

SOURCE_CURRENT = "current"
SOURCE_LEGACY = "legacy"
SOURCE_DEFAULT = "default"


@dataclass(frozen=True)
class SettingsParser:
    """One persisted schema: where it lives and how to turn it into settings."""
    source: str
    key: str
    parse: Callable[[Any], Optional[WidgetSettings]]


@dataclass(frozen=True)
class LoadResult:
    settings: WidgetSettings
    source: str


class SettingsParserChain:
    """Tries each parser in order against the store; never raises."""

    def __init__(self, parsers: Sequence[SettingsParser]) -> None:
        self._parsers = tuple(parsers)

    def resolve(self, store: IKeyValueStore) -> LoadResult:
        for parser in self._parsers:
            settings = self._try(parser, store)
            if settings is not None:
                return LoadResult(settings, parser.source)
        return LoadResult(DEFAULT_SETTINGS, SOURCE_DEFAULT)

    @staticmethod
    def _try(parser: SettingsParser, store: IKeyValueStore) -> Optional[WidgetSettings]:
        try:
            raw = store.get(parser.key)
        except Exception as exc:  # noqa: BLE001 - a broken store must not block startup
            logger.log(FEATURE_ID, "SettingsReadFailed", level="WARNING",
                       reference_id=parser.key, message=str(exc))
            return None
        if not raw:
            return None

        try:
            settings = parser.parse(settings_codec.decode(raw))
        except (ValueError, RecursionError, OverflowError) as exc:
            logger.log(FEATURE_ID, "CorruptSettingsIgnored", level="WARNING",
                       reference_id=parser.key, message=str(exc))
            return None

        if settings is None:
            logger.log(FEATURE_ID, "InvalidSettingsIgnored", level="WARNING",
                       reference_id=parser.key, message=f"{parser.source} schema rejected")
        return settings


DEFAULT_CHAIN = SettingsParserChain((
    SettingsParser(SOURCE_CURRENT, CURRENT_SCHEMA_KEY, settings_codec.parse_current),
    SettingsParser(SOURCE_LEGACY, LEGACY_SCHEMA_KEY, settings_codec.parse_legacy),
))


class WidgetSettingsStore:
    """
    Loads and saves WidgetSettings under the current-schema key.
    """

    def __init__(self, store: IKeyValueStore, *, chain: SettingsParserChain = DEFAULT_CHAIN) -> None:
        self._store = store
        self._chain = chain

    # --- Public API ---------------------------------------------------------

    def load(self) -> WidgetSettings:
        """Returns a fully valid WidgetSettings; never raises."""
        return self.load_with_source().settings

    def load_with_source(self) -> LoadResult:
        result = self._chain.resolve(self._store)
        if result.source == SOURCE_LEGACY:
            logger.log(FEATURE_ID, "LegacySettingsMigrated", reference_id=LEGACY_SCHEMA_KEY)
        logger.log(FEATURE_ID, "SettingsLoaded", level="DEBUG", message=result.source)
        return result

    def save(self, settings: WidgetSettings) -> None:
        """
        Writes the complete settings document.

        Raises:
            SettingsPersistenceError: If the store rejected the write.
        """
        text = settings_codec.encode(settings)
        try:
            self._store.set(CURRENT_SCHEMA_KEY, text)
        except Exception as exc:
            logger.log(FEATURE_ID, "SettingsSaveFailed", level="ERROR",
                       reference_id=CURRENT_SCHEMA_KEY, message=str(exc))
            raise SettingsPersistenceError(f"Could not save settings: {exc}") from exc
        logger.log(FEATURE_ID, "SettingsSaved", reference_id=CURRENT_SCHEMA_KEY)
