from __future__ import annotations

import logging
import threading
from typing import Optional

from evdev import InputDevice, ecodes as e, list_devices

from gesturegate.sensor.pinch import PinchEvent, PinchPhase, PinchTracker
from gesturegate.sensor.sources import MagnifySource, SourceUnavailableError

log = logging.getLogger(__name__)


def is_touchpad(dev: InputDevice) -> bool:
    caps = dev.capabilities(absinfo=False)
    abs_codes = set(caps.get(e.EV_ABS, []))
    keys = set(caps.get(e.EV_KEY, []))
    needed = {e.ABS_MT_SLOT, e.ABS_MT_TRACKING_ID, e.ABS_MT_POSITION_X, e.ABS_MT_POSITION_Y}
    # a touchscreen reports BTN_TOUCH too, but never the finger-count buttons
    return needed <= abs_codes and e.BTN_TOOL_DOUBLETAP in keys


class EvdevMagnifySource(MagnifySource):
    """
    Pinch / rotate from a Linux multi-touch touchpad (MT protocol B).
    Needs read access to /dev/input/event* (input group or root).
    """

    def __init__(self, device: InputDevice, tracker: Optional[PinchTracker] = None) -> None:
        super().__init__()
        self.device = device
        self.tracker = tracker or PinchTracker()
        self._slot = 0
        self._slots: dict[int, dict] = {}
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def find(cls, path: Optional[str] = None) -> "EvdevMagnifySource":
        if path is not None:
            try:
                return cls(InputDevice(path))
            except OSError as exc:
                raise SourceUnavailableError(f"cannot open {path}: {exc}") from exc

        for p in list_devices():
            try:
                dev = InputDevice(p)
            except OSError:
                continue
            if is_touchpad(dev):
                log.info("using touchpad %s (%s)", dev.path, dev.name)
                return cls(dev)
            dev.close()
        raise SourceUnavailableError("no multi-touch touchpad found (check /dev/input permissions)")

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="evdev-magnify", daemon=True)
        self._thread.start()

    def close(self) -> None:
        self._stop.set()
        try:
            self.device.close()
        except OSError:
            pass
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)
        self._thread = None

    def _run(self) -> None:
        try:
            for ev in self.device.read_loop():
                if self._stop.is_set():
                    break
                self._handle(ev)
        except OSError as exc:
            if not self._stop.is_set():
                log.warning("touchpad stream failed: %s", exc)
        self._dispatch(self.tracker.cancel())

    def _handle(self, ev) -> None:
        if ev.type == e.EV_ABS:
            if ev.code == e.ABS_MT_SLOT:
                self._slot = ev.value
            elif ev.code == e.ABS_MT_TRACKING_ID:
                if ev.value < 0:
                    self._slots.pop(self._slot, None)
                else:
                    self._slots[self._slot] = {}
            elif ev.code == e.ABS_MT_POSITION_X:
                self._slots.setdefault(self._slot, {})["x"] = float(ev.value)
            elif ev.code == e.ABS_MT_POSITION_Y:
                self._slots.setdefault(self._slot, {})["y"] = float(ev.value)
        elif ev.type == e.EV_SYN and ev.code == e.SYN_REPORT:
            contacts = [
                (s["x"], s["y"]) for _, s in sorted(self._slots.items())
                if "x" in s and "y" in s
            ]
            self._dispatch(self.tracker.update(contacts))

    def _dispatch(self, events: list[PinchEvent]) -> None:
        for ev in events:
            if ev.phase == PinchPhase.BEGAN:
                self._emit_began()
            elif ev.phase == PinchPhase.CHANGED:
                self._emit_changed(ev.magnification, ev.angle)
            elif ev.phase == PinchPhase.ENDED:
                self._emit_ended()
            elif ev.phase == PinchPhase.CANCELLED:
                self._emit_cancelled()
