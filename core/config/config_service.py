"""Typed, layered configuration for the Day Progress widget.

Layers, lowest precedence first:

    code      embedded ``_DEFAULTS``
    defaults  ``core/config/defaults.ini`` (shipped with the package, optional)
    env       ``DAYPROGRESS_<SECTION>__<KEY>`` variables
    machine   ``core/config/config.ini`` (optional, site-wide)
    user      ``config.ini`` in the per-user config directory

Every layer is a plain ``{section: {key: text}}`` mapping; the merged text is
cast onto the dataclass views ``database``, ``general`` and ``widget``.
"""
from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, List, NamedTuple, Tuple

Sections = Dict[str, Dict[str, Any]]

APP_DIR_NAME = "DayProgress"
ENV_PREFIX = "DAYPROGRESS_"


# --------------------------------------------------------------------------- #
#  Locations
# --------------------------------------------------------------------------- #

def _user_base_dir(kind: str) -> Path:
    """Per-user directory for ``kind`` ("config" or "data")."""
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or (Path.home() / "AppData" / "Roaming")
        return Path(appdata) / APP_DIR_NAME
    if kind == "config":
        base = os.environ.get("XDG_CONFIG_HOME") or (Path.home() / ".config")
    else:
        base = os.environ.get("XDG_DATA_HOME") or (Path.home() / ".local" / "share")
    return Path(base) / APP_DIR_NAME.lower()


CONFIG_DIR = Path(__file__).resolve().parent
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
MACHINE_INI = CONFIG_DIR / "config.ini"
DATA_DIR = _user_base_dir("data")


def _user_config_path() -> Path:
    return _user_base_dir("config") / "config.ini"


_DEFAULTS: Sections = {
    "Database": {
        "settings": (DATA_DIR / "settings.db").as_posix(),
        "logging": (DATA_DIR / "logs.db").as_posix(),
    },
    "General": {
        "app_name": "Day Progress",
        "version": "1.0.0",
        "timezone": "",
    },
    "Widget": {
        "width": "260",
        "height": "120",
        "settings_width": "430",
        "settings_height": "640",
        "always_on_top": "true",
        "tick_offset_ms": "5",
    },
}


# --------------------------------------------------------------------------- #
#  Typed views
# --------------------------------------------------------------------------- #

@dataclass
class DatabaseConfig:
    settings: Path
    logging: Path


@dataclass
class GeneralConfig:
    app_name: str = "Day Progress"
    version: str = ""
    timezone: str = ""  # IANA name; empty = system local zone


@dataclass
class WidgetConfig:
    width: int = 260
    height: int = 120
    settings_width: int = 430
    settings_height: int = 640
    always_on_top: bool = True
    tick_offset_ms: int = 5


@dataclass
class AppConfig:
    database: DatabaseConfig
    general: GeneralConfig
    widget: WidgetConfig


# --------------------------------------------------------------------------- #
#  Layer loaders
# --------------------------------------------------------------------------- #

class Layer(NamedTuple):
    name: str
    origin: str
    values: Sections


def _read_ini(path: Path) -> Sections:
    if not path.is_file():
        return {}
    cp = configparser.ConfigParser()
    try:
        cp.read(path, encoding="utf-8")
    except (OSError, configparser.Error):
        # an unreadable or broken file contributes nothing
        return {}
    return {section: dict(cp.items(section)) for section in cp.sections()}


def _env_overlays() -> Sections:
    result: Sections = {}
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        section, sep, key = env_key[len(ENV_PREFIX):].partition("__")
        if not sep or not section or not key:
            continue
        result.setdefault(section.title(), {})[key.lower()] = value
    return result


def _collect_layers() -> List[Layer]:
    user_ini = _user_config_path()
    return [
        Layer("code", "embedded", _DEFAULTS),
        Layer("defaults.ini", str(DEFAULTS_INI), _read_ini(DEFAULTS_INI)),
        Layer("env", "os.environ", _env_overlays()),
        Layer("machine", str(MACHINE_INI), _read_ini(MACHINE_INI)),
        Layer("user", str(user_ini), _read_ini(user_ini)),
    ]


# --------------------------------------------------------------------------- #
#  Casting
# --------------------------------------------------------------------------- #

def _cast(value: Any, typ: Any) -> Any:
    """Casts ini text to ``typ``; string annotations are understood."""
    if typ in (Path, "Path"):
        return Path(str(value)).expanduser()
    if typ in (bool, "bool"):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    if typ in (int, "int"):
        return int(value)
    if typ in (float, "float"):
        return float(value)
    return str(value)


def _build_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    return cls(**{f.name: _cast(data.get(f.name, f.default), f.type) for f in fields(cls)})


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #

class ConfigService:
    """Merged configuration with typed section views and per-key provenance."""

    def __init__(self) -> None:
        self._lock = RLock()
        self.reload()

    def reload(self) -> None:
        with self._lock:
            merged: Sections = {}
            sources: Dict[Tuple[str, str], Dict[str, str]] = {}
            for layer in _collect_layers():
                for section, items in layer.values.items():
                    target = merged.setdefault(section, {})
                    for key, value in items.items():
                        target[key] = value
                        sources[(section, key)] = {"layer": layer.name, "source": layer.origin}

            self._merged = merged
            self._sources = sources
            self.database: DatabaseConfig = _build_dataclass(DatabaseConfig, merged.get("Database", {}))
            self.general: GeneralConfig = _build_dataclass(GeneralConfig, merged.get("General", {}))
            self.widget: WidgetConfig = _build_dataclass(WidgetConfig, merged.get("Widget", {}))

    def as_app_config(self) -> AppConfig:
        return AppConfig(database=self.database, general=self.general, widget=self.widget)

    def get(self, section: str, key: str, *, cast: Callable[[Any], Any] | type = str) -> Any:
        val = self._merged.get(section, {}).get(key)
        if val is None:
            return None
        if isinstance(cast, type):
            return _cast(val, cast)
        return cast(val)

    def meta_source(self, section: str, key: str) -> Dict[str, str] | None:
        """``{"layer": ..., "source": ...}`` of the layer that supplied the value."""
        return self._sources.get((section, key))


# Global singleton
config_service = ConfigService()
