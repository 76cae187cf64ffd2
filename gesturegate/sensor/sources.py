"""
Collaborator interfaces: where modifier snapshots, scroll bursts and
magnify (pinch / rotate) events come from.

Concrete devices live in pynput_input.py and evdev_touchpad.py; scripted.py
has in-process fakes for the demo and tests.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterable, Optional

from gesturegate.core.types import Delta2D

log = logging.getLogger(__name__)


class SourceUnavailableError(RuntimeError):
    """No usable device or backend for a source."""


class Subscription:
    """
    Handle for one registered listener. close() releases it exactly once,
    no matter how often it is called.
    """

    def __init__(self, release: Optional[Callable[[], None]] = None) -> None:
        self._release = release
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._release is None

    def close(self) -> None:
        with self._lock:
            release, self._release = self._release, None
        if release is not None:
            release()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


# ============================================================
# Modifier snapshots
# ============================================================

ModifierCallback = Callable[[Iterable], None]


class ModifierSource:
    """Fans raw modifier snapshots out to every subscriber."""

    def __init__(self) -> None:
        self._callbacks: list[ModifierCallback] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: ModifierCallback) -> Subscription:
        with self._lock:
            self._callbacks.append(callback)
        return Subscription(lambda: self._unsubscribe(callback))

    def _unsubscribe(self, callback: ModifierCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def publish(self, raw: Iterable) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        snapshot = frozenset(raw)
        for cb in callbacks:
            cb(snapshot)


# ============================================================
# Scroll
# ============================================================

class ScrollDelegate:
    def on_scroll_began(self) -> None:
        pass

    def on_scroll_changed(self, delta: Delta2D) -> None:
        pass

    def on_scroll_cancelled(self) -> None:
        pass

    def on_scroll_ended(self, delta: Optional[Delta2D]) -> None:
        pass


class ScrollSource:
    """
    Turns phase-less scroll ticks into bursts:

        began -> changed(accumulated)* -> ended(accumulated | None)

    A burst ends after `idle_timeout` seconds without ticks (or on flush()).
    `ended` carries None when the burst never moved. Nothing is delivered
    while paused; pausing drops a half-finished burst silently.
    """

    def __init__(self, points_per_tick: float = 10.0, idle_timeout: Optional[float] = 0.15) -> None:
        self.points_per_tick = float(points_per_tick)
        self.idle_timeout = idle_timeout
        self._delegate: Optional[ScrollDelegate] = None

        # _dispatch is held while calling the delegate so callbacks keep
        # their order; _state is never held across a delegate call.
        self._dispatch = threading.RLock()
        self._state = threading.Lock()

        self._paused = False
        self._active = False
        self._moved = False
        self._acc_x = 0.0
        self._acc_y = 0.0
        self._generation = 0

        # one watchdog thread per source; ticks only move the deadline
        self._deadline: Optional[float] = None
        self._wake = threading.Condition(self._state)
        self._watchdog: Optional[threading.Thread] = None
        self._watchdog_stop: Optional[threading.Event] = None

    def set_delegate(self, delegate: Optional[ScrollDelegate]) -> None:
        self._delegate = delegate

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def active(self) -> bool:
        return self._active

    def pause(self) -> None:
        with self._state:
            self._paused = True
            self._reset_locked()

    def resume(self) -> None:
        with self._state:
            self._paused = False

    def feed(self, dx: float, dy: float) -> None:
        """One scroll tick, in ticks (scaled by points_per_tick)."""
        with self._dispatch:
            with self._state:
                if self._paused:
                    return
                began = not self._active
                self._active = True
                moved = bool(dx) or bool(dy)
                if moved:
                    self._moved = True
                    self._acc_x += dx * self.points_per_tick
                    self._acc_y += dy * self.points_per_tick
                delta = Delta2D(self._acc_x, self._acc_y)
                self._arm_timer_locked()

            d = self._delegate
            if d is None:
                return
            if began:
                d.on_scroll_began()
            if moved:
                d.on_scroll_changed(delta)

    def flush(self) -> None:
        """End the current burst now (if any)."""
        self._finish(None)

    def cancel(self) -> None:
        """Abort the current burst; the delegate sees `cancelled`."""
        with self._dispatch:
            with self._state:
                if not self._active:
                    return
                self._reset_locked()
            d = self._delegate
            if d is not None:
                d.on_scroll_cancelled()

    def close(self) -> None:
        """Drop any burst and stop the idle watchdog."""
        with self._state:
            self._reset_locked()
            if self._watchdog_stop is not None:
                self._watchdog_stop.set()
            self._watchdog = None
            self._watchdog_stop = None
            self._wake.notify_all()

    def _finish(self, generation: Optional[int]) -> None:
        with self._dispatch:
            with self._state:
                if not self._active:
                    return
                if generation is not None and generation != self._generation:
                    # a newer tick re-armed the timer
                    return
                delta = Delta2D(self._acc_x, self._acc_y) if self._moved else None
                self._reset_locked()
            log.debug("scroll burst ended delta=%s", delta)
            d = self._delegate
            if d is not None:
                d.on_scroll_ended(delta)

    def _arm_timer_locked(self) -> None:
        self._generation += 1
        if self.idle_timeout is None:
            return
        self._deadline = time.monotonic() + self.idle_timeout
        if self._watchdog is None:
            stop = threading.Event()
            t = threading.Thread(target=self._watch, args=(stop,), name="scroll-idle", daemon=True)
            self._watchdog, self._watchdog_stop = t, stop
            t.start()
        self._wake.notify()

    def _watch(self, stop: threading.Event) -> None:
        while True:
            with self._state:
                while not stop.is_set():
                    if self._deadline is None:
                        self._wake.wait()
                        continue
                    left = self._deadline - time.monotonic()
                    if left <= 0:
                        break
                    self._wake.wait(left)
                if stop.is_set():
                    return
                self._deadline = None
                generation = self._generation
            self._finish(generation)

    def _reset_locked(self) -> None:
        self._deadline = None
        self._generation += 1
        self._active = False
        self._moved = False
        self._acc_x = 0.0
        self._acc_y = 0.0


# ============================================================
# Magnify
# ============================================================

class MagnifyDelegate:
    def on_magnify_began(self) -> None:
        pass

    def on_magnify_changed(self, magnification: float, angle: float) -> None:
        pass

    def on_magnify_cancelled(self) -> None:
        pass

    def on_magnify_ended(self) -> None:
        pass


class MagnifySource:
    """Base for pinch / rotate sources; subclasses call the _emit_* helpers."""

    def __init__(self) -> None:
        self._delegate: Optional[MagnifyDelegate] = None

    def set_delegate(self, delegate: Optional[MagnifyDelegate]) -> None:
        self._delegate = delegate

    def close(self) -> None:
        pass

    def _emit_began(self) -> None:
        if self._delegate is not None:
            self._delegate.on_magnify_began()

    def _emit_changed(self, magnification: float, angle: float) -> None:
        if self._delegate is not None:
            self._delegate.on_magnify_changed(magnification, angle)

    def _emit_cancelled(self) -> None:
        if self._delegate is not None:
            self._delegate.on_magnify_cancelled()

    def _emit_ended(self) -> None:
        if self._delegate is not None:
            self._delegate.on_magnify_ended()
