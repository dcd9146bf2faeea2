"""
core/tests/test_config_service.py

Typed casting and the environment layer of ConfigService.
"""

from __future__ import annotations

import os
import tempfile
import unittest
import uuid
from pathlib import Path
from unittest import mock

from core.config.config_service import ConfigService, _cast, _env_overlays


class TestCast(unittest.TestCase):
    def test_bool(self) -> None:
        for text in ("1", "true", "Yes", " on "):
            self.assertTrue(_cast(text, bool))
        for text in ("0", "false", "off", ""):
            self.assertFalse(_cast(text, "bool"))

    def test_numbers_and_paths(self) -> None:
        self.assertEqual(_cast("42", "int"), 42)
        self.assertEqual(_cast("1.5", float), 1.5)
        self.assertEqual(_cast("~/x.db", Path), Path("~/x.db").expanduser())
        self.assertEqual(_cast(7, str), "7")


class TestEnvironmentLayer(unittest.TestCase):
    def test_overlay_parsing(self) -> None:
        env = {"DAYPROGRESS_WIDGET__WIDTH": "300", "DAYPROGRESS_BROKEN": "x", "OTHER__KEY": "y"}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual(_env_overlays(), {"Widget": {"width": "300"}})

    def test_env_value_reaches_typed_config(self) -> None:
        missing = Path(tempfile.gettempdir()) / uuid.uuid4().hex / "config.ini"
        with mock.patch.dict(os.environ, {"DAYPROGRESS_WIDGET__TICK_OFFSET_MS": "12"}), \
                mock.patch("core.config.config_service._user_config_path", return_value=missing):
            service = ConfigService()
        self.assertEqual(service.meta_source("Widget", "tick_offset_ms")["layer"], "env")
        self.assertEqual(service.widget.tick_offset_ms, 12)
        self.assertIsInstance(service.database.settings, Path)

    def test_embedded_defaults(self) -> None:
        service = ConfigService()
        self.assertEqual(service.get("Widget", "width", cast=int), service.widget.width)
        self.assertIsNone(service.get("Widget", "missing"))
        self.assertIs(service.as_app_config().widget, service.widget)


if __name__ == "__main__":
    unittest.main()
