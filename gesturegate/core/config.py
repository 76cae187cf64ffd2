"""
GestureGate: defaults (presets)

Modifier combinations use the macOS names: COMMAND is the primary
modifier (Super / Windows key on Linux), OPTION the secondary (Alt).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum

from gesturegate.core.types import ModifierKey, ModifierSet, normalize_modifiers


PRIMARY: ModifierSet = frozenset({ModifierKey.COMMAND})
PRIMARY_SECONDARY: ModifierSet = frozenset({ModifierKey.COMMAND, ModifierKey.OPTION})


class PresetName(str, Enum):
    DEFAULT = "Default"
    PRECISION = "Precision"
    CHILL = "Chill"


@dataclass(frozen=True)
class GestureConfig:
    move_mods: ModifierSet = PRIMARY
    resize_delta_mods: ModifierSet = PRIMARY_SECONDARY
    resize_factor_mods: ModifierSet = PRIMARY
    swipe_mods: ModifierSet = PRIMARY
    should_begin_early: bool = False
    swipe_threshold: float = 30.0

    def __post_init__(self) -> None:
        # accept plain iterables of key names, store canonical sets
        for name in ("move_mods", "resize_delta_mods", "resize_factor_mods", "swipe_mods"):
            object.__setattr__(self, name, normalize_modifiers(getattr(self, name)))

        threshold = float(self.swipe_threshold)
        if not math.isfinite(threshold) or threshold < 0.0:
            raise ValueError(f"swipe_threshold must be a finite value >= 0, got {self.swipe_threshold!r}")
        object.__setattr__(self, "swipe_threshold", threshold)

    @property
    def trigger_sets(self) -> tuple[ModifierSet, ...]:
        return (self.move_mods, self.resize_delta_mods, self.resize_factor_mods, self.swipe_mods)

    def with_overrides(self, **changes) -> "GestureConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = GestureConfig()

# Larger swipe threshold: fewer accidental swipes while moving.
PRECISION_CONFIG = GestureConfig(swipe_threshold=50.0)

# Begin as soon as the modifiers go down; short flicks count as swipes.
CHILL_CONFIG = GestureConfig(should_begin_early=True, swipe_threshold=20.0)

PRESETS = {
    PresetName.DEFAULT: DEFAULT_CONFIG,
    PresetName.PRECISION: PRECISION_CONFIG,
    PresetName.CHILL: CHILL_CONFIG,
}
