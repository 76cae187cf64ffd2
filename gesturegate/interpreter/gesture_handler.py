from __future__ import annotations

import logging
import math
import threading
from typing import Iterable, Optional

from gesturegate.core.config import DEFAULT_CONFIG, GestureConfig
from gesturegate.core.types import (
    Delta2D, GestureDelegate, GesturePhase,
    ModifierSet, EMPTY_MODIFIERS, normalize_modifiers,
)
from gesturegate.interpreter.swipe import classify_swipe
from gesturegate.sensor.sources import (
    MagnifyDelegate, MagnifySource, ModifierSource,
    ScrollDelegate, ScrollSource, Subscription,
)

log = logging.getLogger(__name__)


class GestureHandler(ScrollDelegate, MagnifyDelegate):
    """
    Modifier-gated gesture arbiter.

    Fuses modifier snapshots with the scroll and magnify streams and emits
    at most one gesture at a time:

        ENDED -> BEGAN -> CHANGED* -> ENDED

    A gesture begins on the first scroll/magnify `began` (or as soon as a
    trigger combination is held, with should_begin_early) and only ends when
    every modifier is released or the handler is closed. Which callback a
    motion event produces is decided from the held modifiers on every event.

    All entry points share one re-entrant lock; sources may call in from
    their own threads.
    """

    def __init__(
        self,
        config: GestureConfig = DEFAULT_CONFIG,
        scroll_source: Optional[ScrollSource] = None,
        magnify_source: Optional[MagnifySource] = None,
        modifier_sources: Iterable[ModifierSource] = (),
        delegate: Optional[GestureDelegate] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._config = config
        self._delegate = delegate
        self._modifiers: ModifierSet = EMPTY_MODIFIERS
        self._phase = GesturePhase.ENDED
        self._closed = False

        self._scroll = scroll_source
        self._magnify = magnify_source
        self._subscriptions: list[Subscription] = []

        try:
            if scroll_source is not None:
                scroll_source.set_delegate(self)
                scroll_source.pause()
            if magnify_source is not None:
                magnify_source.set_delegate(self)
            # global and local monitors all land in the same handler
            for src in modifier_sources:
                self._subscriptions.append(src.subscribe(self.on_modifier_change))
        except BaseException:
            self.close()
            raise

    # ------------------------------------------------------------
    # configuration / state
    # ------------------------------------------------------------

    @property
    def config(self) -> GestureConfig:
        return self._config

    def configure(self, config: GestureConfig) -> None:
        with self._lock:
            self._config = config

    def set_delegate(self, delegate: Optional[GestureDelegate]) -> None:
        with self._lock:
            self._delegate = delegate

    @property
    def phase(self) -> GesturePhase:
        return self._phase

    @property
    def modifiers(self) -> ModifierSet:
        return self._modifiers

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------
    # modifier tracking
    # ------------------------------------------------------------

    def on_modifier_change(self, raw_flags: Iterable) -> None:
        with self._lock:
            if self._closed:
                return
            cfg = self._config
            self._modifiers = normalize_modifiers(raw_flags)

            if not self._modifiers:
                if self._scroll is not None:
                    self._scroll.pause()
                self._end()
            elif self._modifiers in cfg.trigger_sets:
                if cfg.should_begin_early:
                    self._begin()
                if self._scroll is not None:
                    self._scroll.resume()
            # any other combination leaves listening as it was

    # ------------------------------------------------------------
    # scroll
    # ------------------------------------------------------------

    def on_scroll_began(self) -> None:
        with self._lock:
            if not self._modifiers:
                return
            self._begin()

    def on_scroll_changed(self, delta: Delta2D) -> None:
        with self._lock:
            if not self._modifiers:
                return
            cfg = self._config
            # move wins when both combinations are equal
            if self._modifiers == cfg.move_mods:
                self._begin()
                self._phase = GesturePhase.CHANGED
                self._emit("on_move_gesture", delta)
            elif self._modifiers == cfg.resize_delta_mods:
                self._begin()
                self._phase = GesturePhase.CHANGED
                self._emit("on_resize_delta_gesture", delta)

    def on_scroll_cancelled(self) -> None:
        pass

    def on_scroll_ended(self, delta: Optional[Delta2D]) -> None:
        with self._lock:
            if not self._modifiers or delta is None:
                return
            cfg = self._config
            if self._modifiers != cfg.swipe_mods:
                return
            swipe = classify_swipe(delta, cfg.swipe_threshold)
            if swipe is None:
                return
            # a swipe is a pulse inside the held session, not its end
            self._begin()
            self._phase = GesturePhase.CHANGED
            self._emit("on_swipe_gesture", swipe)

    # ------------------------------------------------------------
    # magnify
    # ------------------------------------------------------------

    def on_magnify_began(self) -> None:
        with self._lock:
            if not self._modifiers:
                return
            self._begin()

    def on_magnify_changed(self, magnification: float, angle: float) -> None:
        with self._lock:
            if not self._modifiers:
                return
            if self._modifiers != self._config.resize_factor_mods:
                return
            self._begin()
            self._phase = GesturePhase.CHANGED
            self._emit("on_resize_factor_gesture", resize_factor(magnification, angle))

    def on_magnify_cancelled(self) -> None:
        pass

    def on_magnify_ended(self) -> None:
        pass

    # ------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------

    def close(self) -> None:
        """Release every monitor, detach from the sources, end any gesture."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            subs, self._subscriptions = self._subscriptions, []
            for sub in subs:
                try:
                    sub.close()
                except Exception:
                    # keep releasing the rest
                    log.exception("failed to release modifier monitor")
            if self._scroll is not None:
                self._scroll.pause()
                self._scroll.set_delegate(None)
            if self._magnify is not None:
                self._magnify.set_delegate(None)
            self._modifiers = EMPTY_MODIFIERS
            self._end()

    def __enter__(self) -> "GestureHandler":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------
    # internals
    # ------------------------------------------------------------

    def _begin(self) -> None:
        # called on every began event; only the first one counts
        if self._phase != GesturePhase.ENDED:
            return
        self._phase = GesturePhase.BEGAN
        log.debug("gesture began mods=%s", sorted(m.value for m in self._modifiers))
        self._emit("on_gesture_began")

    def _end(self) -> None:
        if self._phase == GesturePhase.ENDED:
            return
        self._phase = GesturePhase.ENDED
        log.debug("gesture ended")
        self._emit("on_gesture_ended")

    def _emit(self, name: str, *args) -> None:
        d = self._delegate
        if d is None:
            return
        getattr(d, name)(*args)


def resize_factor(magnification: float, angle: float) -> Delta2D:
    """Magnify event -> resize factor, pointing against the pinch direction."""
    return Delta2D(-magnification * math.cos(angle), -magnification * math.sin(angle))
