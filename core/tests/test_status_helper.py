"""
core/tests/test_status_helper.py

StatusLine with a fake ``after`` scheduler.
"""

from __future__ import annotations

import unittest

from core.helpers.status_helper import StatusLine


class FakeScheduler:
    def __init__(self) -> None:
        self.jobs = {}
        self.delays = {}
        self._next = 0

    def after(self, ms, fn):
        self._next += 1
        handle = f"after#{self._next}"
        self.jobs[handle] = fn
        self.delays[handle] = ms
        return handle

    def after_cancel(self, handle) -> None:
        self.jobs.pop(handle, None)

    def run_all(self) -> None:
        jobs, self.jobs = self.jobs, {}
        for fn in jobs.values():
            fn()


class TestStatusLine(unittest.TestCase):
    def setUp(self) -> None:
        self.shown = []
        self.sched = FakeScheduler()
        self.status = StatusLine(self.shown.append, self.sched.after, self.sched.after_cancel)

    def test_message_clears_after_duration(self) -> None:
        self.status.set_status("Settings saved.", 1200)
        self.assertEqual(self.status.text, "Settings saved.")
        self.assertEqual(list(self.sched.delays.values()), [1200])

        self.sched.run_all()
        self.assertEqual(self.status.text, "")
        self.assertEqual(self.shown, ["Settings saved.", ""])

    def test_new_message_cancels_pending_clear(self) -> None:
        self.status.set_status("first", 1000)
        self.status.set_status("second", 2000)
        self.assertEqual(len(self.sched.jobs), 1)

        self.sched.run_all()
        self.assertEqual(self.shown, ["first", "second", ""])

    def test_zero_duration_keeps_message(self) -> None:
        self.status.set_status("sticky")
        self.assertEqual(self.sched.jobs, {})
        self.assertEqual(self.status.text, "sticky")


if __name__ == "__main__":
    unittest.main()
