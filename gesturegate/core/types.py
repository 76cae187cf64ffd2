"""
GestureGate: core contracts

Shared vocabulary between the sources (keyboard / trackpad), the
GestureHandler and whatever consumes its gestures.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional


# ============================================================
# Keyboard → Handler (modifier snapshots)
# ============================================================

class ModifierKey(str, Enum):
    CAPS_LOCK = "CAPS_LOCK"
    SHIFT = "SHIFT"
    CONTROL = "CONTROL"
    OPTION = "OPTION"
    COMMAND = "COMMAND"
    NUMERIC_PAD = "NUMERIC_PAD"
    HELP = "HELP"
    FUNCTION = "FUNCTION"


ModifierSet = FrozenSet[ModifierKey]

EMPTY_MODIFIERS: ModifierSet = frozenset()

# device-dependent key names (left/right variants, platform spellings)
_KEY_ALIASES = {
    "caps_lock": ModifierKey.CAPS_LOCK,
    "shift": ModifierKey.SHIFT,
    "shift_l": ModifierKey.SHIFT,
    "shift_r": ModifierKey.SHIFT,
    "ctrl": ModifierKey.CONTROL,
    "ctrl_l": ModifierKey.CONTROL,
    "ctrl_r": ModifierKey.CONTROL,
    "control": ModifierKey.CONTROL,
    "alt": ModifierKey.OPTION,
    "alt_l": ModifierKey.OPTION,
    "alt_r": ModifierKey.OPTION,
    "alt_gr": ModifierKey.OPTION,
    "option": ModifierKey.OPTION,
    "cmd": ModifierKey.COMMAND,
    "cmd_l": ModifierKey.COMMAND,
    "cmd_r": ModifierKey.COMMAND,
    "command": ModifierKey.COMMAND,
    "super": ModifierKey.COMMAND,
    "super_l": ModifierKey.COMMAND,
    "super_r": ModifierKey.COMMAND,
    "numeric_pad": ModifierKey.NUMERIC_PAD,
    "help": ModifierKey.HELP,
    "fn": ModifierKey.FUNCTION,
    "function": ModifierKey.FUNCTION,
}


def normalize_modifiers(raw: Optional[Iterable]) -> ModifierSet:
    """
    Reduce a raw modifier snapshot to the device-independent ModifierSet.

    Accepts ModifierKey members or key names ("ctrl_l", "cmd", "alt_gr"...).
    Anything that is not a relevant modifier is masked out.
    """
    if not raw:
        return EMPTY_MODIFIERS
    out = set()
    for k in raw:
        if isinstance(k, ModifierKey):
            out.add(k)
            continue
        key = _KEY_ALIASES.get(str(k).strip().lower())
        if key is None:
            try:
                key = ModifierKey(str(k).strip().upper())
            except ValueError:
                continue
        out.add(key)
    return frozenset(out)


def mods(*names) -> ModifierSet:
    """Shorthand: mods("cmd", "alt") == {COMMAND, OPTION}."""
    return normalize_modifiers(names)


# ============================================================
# Handler state
# ============================================================

class GesturePhase(str, Enum):
    BEGAN = "BEGAN"
    CHANGED = "CHANGED"
    ENDED = "ENDED"


class GestureType(str, Enum):
    MOVE = "MOVE"
    RESIZE_DELTA = "RESIZE_DELTA"
    RESIZE_FACTOR = "RESIZE_FACTOR"
    SWIPE_TOP = "SWIPE_TOP"
    SWIPE_TOP_RIGHT = "SWIPE_TOP_RIGHT"
    SWIPE_RIGHT = "SWIPE_RIGHT"
    SWIPE_BOTTOM_RIGHT = "SWIPE_BOTTOM_RIGHT"
    SWIPE_BOTTOM = "SWIPE_BOTTOM"
    SWIPE_BOTTOM_LEFT = "SWIPE_BOTTOM_LEFT"
    SWIPE_LEFT = "SWIPE_LEFT"
    SWIPE_TOP_LEFT = "SWIPE_TOP_LEFT"

    @property
    def is_swipe(self) -> bool:
        return self.value.startswith("SWIPE_")


@dataclass(frozen=True)
class Delta2D:
    """Accumulated motion (scroll) or resize factor, in source units."""
    x: float
    y: float


# ============================================================
# Handler → Consumer
# ============================================================

class EventType(str, Enum):
    BEGAN = "BEGAN"
    MOVE = "MOVE"
    RESIZE_DELTA = "RESIZE_DELTA"
    RESIZE_FACTOR = "RESIZE_FACTOR"
    SWIPE = "SWIPE"
    ENDED = "ENDED"


@dataclass(frozen=True)
class GestureEvent:
    """
    One consumer callback, captured as a value.

    `delta` is set for MOVE / RESIZE_DELTA / RESIZE_FACTOR,
    `swipe` for SWIPE, neither for BEGAN / ENDED.
    """
    type: EventType
    delta: Optional[Delta2D] = None
    swipe: Optional[GestureType] = None


class GestureDelegate:
    """
    Consumer interface. Every callback is invoked synchronously from
    inside the handler; the default implementations do nothing.
    """

    def on_gesture_began(self) -> None:
        pass

    def on_move_gesture(self, delta: Delta2D) -> None:
        pass

    def on_resize_delta_gesture(self, delta: Delta2D) -> None:
        pass

    def on_resize_factor_gesture(self, factor: Delta2D) -> None:
        pass

    def on_swipe_gesture(self, type: GestureType) -> None:
        pass

    def on_gesture_ended(self) -> None:
        pass
