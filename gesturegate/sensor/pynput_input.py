from __future__ import annotations

import logging
from typing import Optional

from pynput import keyboard, mouse

from gesturegate.sensor.keys import ModifierKeyTracker
from gesturegate.sensor.sources import ModifierSource, ScrollSource

log = logging.getLogger(__name__)


def _key_name(k) -> Optional[str]:
    # keyboard.Key members carry a name ("ctrl_l"); plain KeyCodes do not
    name = getattr(k, "name", None)
    return name if isinstance(name, str) else None


class PynputModifierSource(ModifierSource):
    """
    System-wide modifier monitor (X11 / macOS / Windows via pynput).
    Sees key changes whichever window has focus.
    """

    def __init__(self) -> None:
        super().__init__()
        self._tracker = ModifierKeyTracker(on_change=self.publish)
        self._listener: Optional[keyboard.Listener] = None

    def start(self) -> None:
        if self._listener is not None:
            return
        self._listener = keyboard.Listener(on_press=self._on_press, on_release=self._on_release)
        self._listener.start()
        log.info("keyboard monitor started")

    def close(self) -> None:
        listener, self._listener = self._listener, None
        if listener is not None:
            listener.stop()
        # nothing is held once we stop watching
        self._tracker.reset()

    def _on_press(self, k) -> None:
        self._tracker.press(_key_name(k))

    def _on_release(self, k) -> None:
        self._tracker.release(_key_name(k))


class PynputScrollSource(ScrollSource):
    """
    Wheel / two-finger scroll ticks from the system-wide mouse listener.
    `invert` flips both axes (natural scrolling).
    """

    def __init__(self, points_per_tick: float = 10.0, idle_timeout: float = 0.15, invert: bool = False) -> None:
        super().__init__(points_per_tick=points_per_tick, idle_timeout=idle_timeout)
        self.invert = invert
        self._listener: Optional[mouse.Listener] = None

    def start(self) -> None:
        if self._listener is not None:
            return
        self._listener = mouse.Listener(on_scroll=self._on_scroll)
        self._listener.start()
        log.info("scroll monitor started")

    def close(self) -> None:
        listener, self._listener = self._listener, None
        if listener is not None:
            listener.stop()
        super().close()

    def _on_scroll(self, x, y, dx, dy) -> None:
        if self.invert:
            dx, dy = -dx, -dy
        self.feed(dx, dy)
