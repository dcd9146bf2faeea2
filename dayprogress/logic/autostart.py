"""
Run-at-startup registration for the current platform.

- Windows : value under HKCU\\Software\\Microsoft\\Windows\\CurrentVersion\\Run
- macOS   : ~/Library/LaunchAgents/<id>.plist
- others  : XDG autostart entry ~/.config/autostart/<name>.desktop

Every backend raises AutostartError on failure; callers decide how loud to be.
"""

from __future__ import annotations

import os
import plistlib
import shlex
import sys
from abc import abstractmethod
from pathlib import Path
from typing import List, Optional

from core.contracts.host import AutostartError, IAutostart

APP_NAME = "DayProgress"
APP_ID = "io.dayprogress.widget"
RUN_REGISTRY_PATH = r"Software\Microsoft\Windows\CurrentVersion\Run"


def get_launch_command() -> List[str]:
    """Command line that starts the widget the way it was started now."""
    executable = Path(sys.argv[0]).resolve()
    if getattr(sys, "frozen", False):
        return [str(executable)]
    python = Path(sys.executable).resolve()
    return [str(python), str(executable)]


def _quote_windows(args: List[str]) -> str:
    return " ".join(f'"{a}"' for a in args)


class WindowsRegistryAutostart(IAutostart):
    def __init__(self, command: Optional[List[str]] = None, name: str = APP_NAME) -> None:
        self._command = _quote_windows(command or get_launch_command())
        self._name = name

    def is_enabled(self) -> bool:
        import winreg
        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_REGISTRY_PATH, 0, winreg.KEY_READ) as key:
                value, _ = winreg.QueryValueEx(key, self._name)
                return value == self._command
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise AutostartError(f"Cannot read startup registry: {exc}") from exc

    def enable(self) -> None:
        import winreg
        try:
            with winreg.CreateKey(winreg.HKEY_CURRENT_USER, RUN_REGISTRY_PATH) as key:
                winreg.SetValueEx(key, self._name, 0, winreg.REG_SZ, self._command)
        except OSError as exc:
            raise AutostartError(f"Cannot write startup registry: {exc}") from exc

    def disable(self) -> None:
        import winreg
        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_REGISTRY_PATH, 0, winreg.KEY_SET_VALUE) as key:
                winreg.DeleteValue(key, self._name)
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise AutostartError(f"Cannot update startup registry: {exc}") from exc


class _FileAutostart(IAutostart):
    """Registration = one file the session manager reads at login."""

    def __init__(self, path: Path, command: Optional[List[str]] = None) -> None:
        self.path = path
        self._command = command or get_launch_command()

    @abstractmethod
    def _render(self) -> bytes:
        """File contents that register the launch command."""

    def is_enabled(self) -> bool:
        try:
            return self.path.is_file()
        except OSError as exc:
            raise AutostartError(f"Cannot inspect {self.path}: {exc}") from exc

    def enable(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_bytes(self._render())
            tmp.replace(self.path)
        except OSError as exc:
            raise AutostartError(f"Cannot write {self.path}: {exc}") from exc

    def disable(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise AutostartError(f"Cannot remove {self.path}: {exc}") from exc


class XdgAutostart(_FileAutostart):
    def __init__(self, config_home: Optional[Path] = None, command: Optional[List[str]] = None) -> None:
        base = config_home or Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
        super().__init__(Path(base) / "autostart" / f"{APP_NAME.lower()}.desktop", command)

    def _render(self) -> bytes:
        lines = [
            "[Desktop Entry]",
            "Type=Application",
            f"Name={APP_NAME}",
            f"Exec={shlex.join(self._command)}",
            "X-GNOME-Autostart-enabled=true",
            "",
        ]
        return "\n".join(lines).encode("utf-8")


class LaunchAgentAutostart(_FileAutostart):
    def __init__(self, home: Optional[Path] = None, command: Optional[List[str]] = None) -> None:
        base = Path(home or Path.home())
        super().__init__(base / "Library" / "LaunchAgents" / f"{APP_ID}.plist", command)

    def _render(self) -> bytes:
        return plistlib.dumps({
            "Label": APP_ID,
            "ProgramArguments": list(self._command),
            "RunAtLoad": True,
        })


def create_autostart() -> IAutostart:
    if sys.platform == "win32":
        return WindowsRegistryAutostart()
    if sys.platform == "darwin":
        return LaunchAgentAutostart()
    return XdgAutostart()
