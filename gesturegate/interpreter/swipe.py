from __future__ import annotations

from typing import Optional

from gesturegate.core.types import Delta2D, GestureType


# (sign x, sign y) -> swipe. The x axis is inverted: content scrolled
# towards negative x reads as a swipe to the right.
SWIPE_TABLE = {
    (-1, -1): GestureType.SWIPE_BOTTOM_RIGHT,
    (-1, 0): GestureType.SWIPE_RIGHT,
    (-1, 1): GestureType.SWIPE_TOP_RIGHT,
    (0, -1): GestureType.SWIPE_BOTTOM,
    (0, 1): GestureType.SWIPE_TOP,
    (1, -1): GestureType.SWIPE_BOTTOM_LEFT,
    (1, 0): GestureType.SWIPE_LEFT,
    (1, 1): GestureType.SWIPE_TOP_LEFT,
}


def _axis_sign(value: float, threshold: float) -> int:
    if abs(value) > threshold:
        return 1 if value > 0 else -1
    return 0


def classify_swipe(delta: Delta2D, threshold: float) -> Optional[GestureType]:
    """
    Map a finished scroll delta onto one of the eight swipe directions.

    An axis only counts when it moved strictly more than `threshold`.
    Returns None when neither axis did.
    """
    key = (_axis_sign(delta.x, threshold), _axis_sign(delta.y, threshold))
    return SWIPE_TABLE.get(key)
