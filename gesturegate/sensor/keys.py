from __future__ import annotations

import threading
from typing import Callable, FrozenSet, Optional

from gesturegate.core.types import normalize_modifiers


class ModifierKeyTracker:
    """
    Press/release key names -> raw modifier snapshots.

    Tracks the device-dependent names ("ctrl_l", "ctrl_r", ...) so letting go
    of one side keeps the modifier held while the other side is down.
    `on_change` only fires when the held set actually changes; key
    auto-repeat and non-modifier keys produce nothing.
    """

    def __init__(self, on_change: Optional[Callable[[FrozenSet[str]], None]] = None) -> None:
        self.on_change = on_change
        self._held: set[str] = set()
        self._lock = threading.Lock()

    @property
    def held(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._held)

    def press(self, name: Optional[str]) -> None:
        if not _is_modifier(name):
            return
        with self._lock:
            if name in self._held:
                return
            self._held.add(name)
            snapshot = frozenset(self._held)
        self._notify(snapshot)

    def release(self, name: Optional[str]) -> None:
        with self._lock:
            if name not in self._held:
                return
            self._held.discard(name)
            snapshot = frozenset(self._held)
        self._notify(snapshot)

    def reset(self) -> None:
        """Forget everything (e.g. after losing the keyboard)."""
        with self._lock:
            if not self._held:
                return
            self._held.clear()
        self._notify(frozenset())

    def _notify(self, snapshot: FrozenSet[str]) -> None:
        if self.on_change is not None:
            self.on_change(snapshot)


def _is_modifier(name: Optional[str]) -> bool:
    return bool(name) and bool(normalize_modifiers((name,)))
