from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

Point = Tuple[float, float]
Pair = Tuple[Point, Point]

# fingers whose travel directions differ by less than this are dragging, not pinching
SYNC_ANGLE = math.radians(30.0)


class PinchPhase(str, Enum):
    BEGAN = "BEGAN"
    CHANGED = "CHANGED"
    ENDED = "ENDED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class PinchEvent:
    phase: PinchPhase
    magnification: float = 0.0   # relative, 0.0 = no change
    angle: float = 0.0           # finger axis, radians in [0, pi/2]


def wrap_angle(a: float) -> float:
    return math.atan2(math.sin(a), math.cos(a))


def axis_angle(pair: Pair) -> float:
    """
    Direction of the line through both fingers, folded into [0, pi/2]:
    0 for side by side, pi/2 for one above the other. Finger order and
    the sign of the slope do not matter.
    """
    (x0, y0), (x1, y1) = pair
    return math.atan2(abs(y1 - y0), abs(x1 - x0))


def _distance(pair: Pair) -> float:
    (x0, y0), (x1, y1) = pair
    return math.hypot(x1 - x0, y1 - y0)


class PinchTracker:
    """
    Touch contacts per frame -> pinch events.

    Two contacts going down only arm the tracker. The pinch is recognised
    (BEGAN, then a first CHANGED) once the finger distance has changed by
    `scale_threshold` since touch-down while the fingers are not travelling
    the same way; two fingers dragged together are a scroll and never
    begin a pinch.

    While pinching, every frame reports the change since the last report:
      magnification = distance / previous_distance - 1
      angle         = axis_angle of the fingers
    Changes below `epsilon` are folded into the next report. Frames where
    both fingers move together are skipped and rebase the reference.
    """

    def __init__(
        self,
        epsilon: float = 1e-3,
        min_distance: float = 1.0,
        scale_threshold: float = 0.08,
        sync_angle: float = SYNC_ANGLE,
        min_travel: float = 1.0,
    ) -> None:
        self.epsilon = epsilon
        self.min_distance = min_distance
        self.scale_threshold = scale_threshold
        self.sync_angle = sync_angle
        self.min_travel = min_travel
        self._start: Optional[Pair] = None
        self._ref: Optional[Pair] = None
        self._pinching = False

    @property
    def active(self) -> bool:
        return self._pinching

    def update(self, contacts: Sequence[Point]) -> list[PinchEvent]:
        if len(contacts) != 2:
            return self._stop(PinchPhase.ENDED)

        (x0, y0), (x1, y1) = contacts
        pair: Pair = ((float(x0), float(y0)), (float(x1), float(y1)))
        dist = _distance(pair)

        if self._start is None:
            if dist >= self.min_distance:
                self._start = self._ref = pair
            return []

        if not self._pinching:
            scale = dist / _distance(self._start) - 1.0
            if abs(scale) < self.scale_threshold or self.moving_together(self._start, pair):
                return []
            self._pinching = True
            self._ref = pair
            return [
                PinchEvent(PinchPhase.BEGAN),
                PinchEvent(PinchPhase.CHANGED, scale, axis_angle(pair)),
            ]

        if dist < self.min_distance:
            return []
        if self.moving_together(self._ref, pair):
            self._ref = pair
            return []
        magnification = dist / _distance(self._ref) - 1.0
        if abs(magnification) < self.epsilon:
            return []
        self._ref = pair
        return [PinchEvent(PinchPhase.CHANGED, magnification, axis_angle(pair))]

    def moving_together(self, before: Pair, after: Pair) -> bool:
        """True when both fingers travelled, in nearly the same direction."""
        directions = []
        for (bx, by), (ax, ay) in zip(before, after):
            dx, dy = ax - bx, ay - by
            if math.hypot(dx, dy) < self.min_travel:
                return False
            directions.append(math.atan2(dy, dx))
        return abs(wrap_angle(directions[1] - directions[0])) < self.sync_angle

    def cancel(self) -> list[PinchEvent]:
        return self._stop(PinchPhase.CANCELLED)

    def _stop(self, phase: PinchPhase) -> list[PinchEvent]:
        was_pinching = self._pinching
        self._start = self._ref = None
        self._pinching = False
        return [PinchEvent(phase)] if was_pinching else []
