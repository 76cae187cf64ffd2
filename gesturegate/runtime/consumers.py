from __future__ import annotations

from dataclasses import dataclass, field

from gesturegate.core.types import (
    Delta2D, EventType, GestureDelegate, GestureEvent, GestureType,
)


@dataclass
class EventCollector(GestureDelegate):
    """Keeps every callback as a GestureEvent, in order."""
    events: list[GestureEvent] = field(default_factory=list)

    def on_gesture_began(self) -> None:
        self.events.append(GestureEvent(type=EventType.BEGAN))

    def on_move_gesture(self, delta: Delta2D) -> None:
        self.events.append(GestureEvent(type=EventType.MOVE, delta=delta))

    def on_resize_delta_gesture(self, delta: Delta2D) -> None:
        self.events.append(GestureEvent(type=EventType.RESIZE_DELTA, delta=delta))

    def on_resize_factor_gesture(self, factor: Delta2D) -> None:
        self.events.append(GestureEvent(type=EventType.RESIZE_FACTOR, delta=factor))

    def on_swipe_gesture(self, type: GestureType) -> None:
        self.events.append(GestureEvent(type=EventType.SWIPE, swipe=type))

    def on_gesture_ended(self) -> None:
        self.events.append(GestureEvent(type=EventType.ENDED))

    def types(self) -> list[EventType]:
        return [ev.type for ev in self.events]

    def clear(self) -> None:
        self.events.clear()


class PrintingDelegate(GestureDelegate):
    """Console consumer for the runtime and the demo."""

    def __init__(self, prefix: str = "[GestureGate]") -> None:
        self.prefix = prefix

    def on_gesture_began(self) -> None:
        print(f"{self.prefix} BEGAN")

    def on_move_gesture(self, delta: Delta2D) -> None:
        print(f"{self.prefix} MOVE dx={delta.x:+.1f} dy={delta.y:+.1f}")

    def on_resize_delta_gesture(self, delta: Delta2D) -> None:
        print(f"{self.prefix} RESIZE_DELTA dx={delta.x:+.1f} dy={delta.y:+.1f}")

    def on_resize_factor_gesture(self, factor: Delta2D) -> None:
        print(f"{self.prefix} RESIZE_FACTOR fx={factor.x:+.3f} fy={factor.y:+.3f}")

    def on_swipe_gesture(self, type: GestureType) -> None:
        print(f"{self.prefix} {type.value}")

    def on_gesture_ended(self) -> None:
        print(f"{self.prefix} ENDED")
