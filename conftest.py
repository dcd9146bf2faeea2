"""
conftest.py

Points every per-user location at a throwaway directory before ``core`` is
imported, so the logger and settings singletons never open the real user
databases while the test suite runs.
"""

from __future__ import annotations

import atexit
import os
import shutil
import tempfile
from pathlib import Path

_SANDBOX = Path(tempfile.mkdtemp(prefix="dayprogress-tests-"))
atexit.register(shutil.rmtree, _SANDBOX, ignore_errors=True)

os.environ["XDG_CONFIG_HOME"] = str(_SANDBOX / "config")
os.environ["XDG_DATA_HOME"] = str(_SANDBOX / "data")
os.environ["APPDATA"] = str(_SANDBOX / "appdata")
os.environ["DAYPROGRESS_DATABASE__LOGGING"] = (_SANDBOX / "data" / "logs.db").as_posix()
os.environ["DAYPROGRESS_DATABASE__SETTINGS"] = (_SANDBOX / "data" / "settings.db").as_posix()
