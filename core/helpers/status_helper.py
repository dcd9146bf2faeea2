"""
status_helper.py

Transient status messages for the GUI.

- Sets a message on a label (or any text setter).
- The message is cleared automatically after the given duration.
- A new message replaces the previous one and cancels its pending clear.

Scheduling goes through the Tk-style ``after``/``after_cancel`` pair of the
owning widget, so the clear runs on the GUI thread.
"""

from __future__ import annotations

from typing import Any, Callable, Optional


class StatusLine:
    def __init__(
        self,
        setter: Callable[[str], None],
        after: Callable[[int, Callable[[], None]], Any],
        after_cancel: Callable[[Any], None],
    ) -> None:
        """
        :param setter: function that shows the text, e.g. ``label_var.set``
        :param after: scheduler, e.g. ``widget.after``
        :param after_cancel: cancels a handle returned by ``after``
        """
        self._setter = setter
        self._after = after
        self._after_cancel = after_cancel
        self._pending: Optional[Any] = None
        self.text = ""

    def set_status(self, message: str, clear_after_ms: int = 0) -> None:
        """Shows ``message``; ``clear_after_ms`` <= 0 keeps it until replaced."""
        self._cancel_pending()
        self._show(message)
        if clear_after_ms and clear_after_ms > 0:
            self._pending = self._after(clear_after_ms, self._clear)

    def _clear(self) -> None:
        self._pending = None
        self._show("")

    def _show(self, message: str) -> None:
        self.text = message
        self._setter(message)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._after_cancel(self._pending)
            self._pending = None
