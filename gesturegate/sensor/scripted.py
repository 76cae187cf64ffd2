from __future__ import annotations

from typing import Optional

from gesturegate.core.types import Delta2D
from gesturegate.sensor.sources import MagnifySource, ModifierSource, ScrollSource


class ScriptedModifierSource(ModifierSource):
    """Deterministic keyboard: hold("cmd", "alt"), release_all()."""

    def hold(self, *keys) -> None:
        self.publish(keys)

    def release_all(self) -> None:
        self.publish(())


class ScriptedScrollSource(ScrollSource):
    """
    Scroll source with explicit phases, like a trackpad that reports
    began / changed / ended itself. feed() + flush() still work too.
    Respects pause() like the real thing.
    """

    def __init__(self, points_per_tick: float = 1.0) -> None:
        super().__init__(points_per_tick=points_per_tick, idle_timeout=None)

    def begin(self) -> None:
        if self.paused or self._delegate is None:
            return
        self._delegate.on_scroll_began()

    def change(self, x: float, y: float) -> None:
        if self.paused or self._delegate is None:
            return
        self._delegate.on_scroll_changed(Delta2D(x, y))

    def cancel_burst(self) -> None:
        if self.paused or self._delegate is None:
            return
        self._delegate.on_scroll_cancelled()

    def end(self, delta: Optional[Delta2D]) -> None:
        if self.paused or self._delegate is None:
            return
        self._delegate.on_scroll_ended(delta)

    def swipe(self, x: float, y: float) -> None:
        """One complete burst that finishes at (x, y)."""
        self.begin()
        self.change(x, y)
        self.end(Delta2D(x, y))


class ScriptedMagnifySource(MagnifySource):
    def begin(self) -> None:
        self._emit_began()

    def change(self, magnification: float, angle: float = 0.0) -> None:
        self._emit_changed(magnification, angle)

    def cancel(self) -> None:
        self._emit_cancelled()

    def end(self) -> None:
        self._emit_ended()
