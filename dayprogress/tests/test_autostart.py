"""
dayprogress/tests/test_autostart.py

File-based startup registration (XDG and macOS LaunchAgents), exercised in a
temporary directory.
"""

from __future__ import annotations

import plistlib
import sys
import tempfile
import unittest
from pathlib import Path

from core.contracts.host import AutostartError
from dayprogress.logic.autostart import (
    APP_ID,
    LaunchAgentAutostart,
    XdgAutostart,
    _FileAutostart,
    create_autostart,
)

COMMAND = ["/usr/bin/python3", "/opt/day progress/main.py"]


class TestXdgAutostart(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_enable_disable_cycle(self) -> None:
        autostart = XdgAutostart(config_home=self.home, command=COMMAND)
        self.assertFalse(autostart.is_enabled())

        autostart.enable()
        self.assertTrue(autostart.is_enabled())
        text = autostart.path.read_text(encoding="utf-8")
        self.assertIn("[Desktop Entry]", text)
        self.assertIn("Exec=/usr/bin/python3 '/opt/day progress/main.py'", text)
        self.assertEqual(autostart.path.parent, self.home / "autostart")

        autostart.disable()
        self.assertFalse(autostart.is_enabled())
        autostart.disable()  # absent registration is fine

    def test_enable_is_idempotent(self) -> None:
        autostart = XdgAutostart(config_home=self.home, command=COMMAND)
        autostart.enable()
        autostart.enable()
        self.assertEqual([p.name for p in autostart.path.parent.iterdir()], [autostart.path.name])

    def test_unwritable_location_raises(self) -> None:
        blocker = self.home / "file"
        blocker.write_text("x", encoding="utf-8")
        autostart = XdgAutostart(config_home=blocker, command=COMMAND)
        with self.assertRaises(AutostartError):
            autostart.enable()


class TestLaunchAgentAutostart(unittest.TestCase):
    def test_plist_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            autostart = LaunchAgentAutostart(home=Path(tmp), command=COMMAND)
            autostart.enable()

            data = plistlib.loads(autostart.path.read_bytes())
            self.assertEqual(data["Label"], APP_ID)
            self.assertEqual(data["ProgramArguments"], COMMAND)
            self.assertTrue(data["RunAtLoad"])

            autostart.disable()
            self.assertFalse(autostart.is_enabled())


class TestCreateAutostart(unittest.TestCase):
    @unittest.skipUnless(sys.platform.startswith("linux"), "XDG backend is used on Linux")
    def test_linux_uses_xdg(self) -> None:
        self.assertIsInstance(create_autostart(), XdgAutostart)

    def test_file_backend_needs_a_renderer(self) -> None:
        with self.assertRaises(TypeError):
            _FileAutostart(Path(tempfile.gettempdir()) / "dayprogress.entry", COMMAND)

        class _Partial(_FileAutostart):
            pass

        with self.assertRaises(TypeError):
            _Partial(Path(tempfile.gettempdir()) / "dayprogress.entry", COMMAND)


if __name__ == "__main__":
    unittest.main()
