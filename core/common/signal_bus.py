"""
core/common/signal_bus.py

Named signals between the windows of one process.

Windows register under a label; ``emit`` schedules every handler the target
window subscribed for the signal and returns immediately. The emitter never
waits for the receiver.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, List

from core.contracts.host import HostError, SignalHandler

Scheduler = Callable[[Callable[[], None]], Any]


def _run_now(fn: Callable[[], None]) -> None:
    fn()


class SignalBus:
    def __init__(self) -> None:
        self._windows: Dict[str, Scheduler] = {}
        self._handlers: DefaultDict[tuple[str, str], List[SignalHandler]] = defaultdict(list)

    def register_window(self, label: str, scheduler: Scheduler = _run_now) -> None:
        """``scheduler`` runs a callable later on the window's thread (e.g. ``lambda f: w.after(0, f)``)."""
        self._windows[label] = scheduler

    def unregister_window(self, label: str) -> None:
        self._windows.pop(label, None)
        for key in [k for k in self._handlers if k[0] == label]:
            del self._handlers[key]

    def has_window(self, label: str) -> bool:
        return label in self._windows

    def subscribe(self, label: str, event: str, handler: SignalHandler) -> None:
        self._handlers[(label, event)].append(handler)

    def emit(self, event: str, target: str) -> None:
        scheduler = self._windows.get(target)
        if scheduler is None:
            raise HostError(f"No window labelled {target!r}")
        for handler in list(self._handlers.get((target, event), ())):
            scheduler(handler)
