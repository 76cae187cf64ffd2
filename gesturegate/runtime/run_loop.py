from __future__ import annotations

import argparse
import logging
import time
from typing import Optional

from gesturegate.core.config import PRESETS, GestureConfig, PresetName
from gesturegate.interpreter.gesture_handler import GestureHandler
from gesturegate.runtime.consumers import PrintingDelegate
from gesturegate.sensor.sources import SourceUnavailableError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="GestureGate - modifier-gated trackpad gestures",
    )
    parser.add_argument(
        "--preset",
        choices=[p.value for p in PresetName],
        default=PresetName.DEFAULT.value,
        help="Gesture preset (default: Default)",
    )
    parser.add_argument(
        "--swipe-threshold",
        type=float,
        default=None,
        help="Swipe threshold in scroll points (overrides preset)",
    )
    parser.add_argument(
        "--begin-early",
        action="store_true",
        help="Begin the gesture as soon as a trigger combination is held",
    )
    parser.add_argument(
        "--no-magnify",
        action="store_true",
        help="Do not open the touchpad for pinch / rotate",
    )
    parser.add_argument(
        "--device",
        default=None,
        help="Touchpad event device (default: first multi-touch touchpad)",
    )
    parser.add_argument(
        "--natural-scroll",
        action="store_true",
        help="Invert scroll direction",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> GestureConfig:
    cfg = PRESETS[PresetName(args.preset)]
    overrides = {}
    if args.swipe_threshold is not None:
        overrides["swipe_threshold"] = args.swipe_threshold
    if args.begin_early:
        overrides["should_begin_early"] = True
    return cfg.with_overrides(**overrides) if overrides else cfg


def _open_magnify(args: argparse.Namespace):
    if args.no_magnify:
        return None
    try:
        from gesturegate.sensor.evdev_touchpad import EvdevMagnifySource
        return EvdevMagnifySource.find(args.device)
    except ImportError as exc:
        print(f"[GestureGate] Magnify: unavailable ({exc}). Move / resize / swipe only.")
    except SourceUnavailableError as exc:
        print(f"[GestureGate] Magnify: {exc}. Move / resize / swipe only.")
    return None


def run(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args)

    # pynput needs a display / accessibility permission; fail loudly here
    from gesturegate.sensor.pynput_input import PynputModifierSource, PynputScrollSource

    keyboard_src = PynputModifierSource()
    scroll_src = PynputScrollSource(invert=args.natural_scroll)
    magnify_src = _open_magnify(args)

    handler: Optional[GestureHandler] = None
    try:
        handler = GestureHandler(
            config=config,
            scroll_source=scroll_src,
            magnify_source=magnify_src,
            modifier_sources=[keyboard_src],
            delegate=PrintingDelegate(),
        )
        keyboard_src.start()
        scroll_src.start()
        if magnify_src is not None:
            magnify_src.start()

        print(f"[GestureGate] Running ({config_summary(config)}). Ctrl+C to exit.")
        while True:
            time.sleep(0.5)
    except KeyboardInterrupt:
        print("\n[GestureGate] exiting")
    finally:
        # handler first: ends any open gesture while the consumer is attached
        if handler is not None:
            handler.close()
        keyboard_src.close()
        scroll_src.close()
        if magnify_src is not None:
            magnify_src.close()


def config_summary(cfg: GestureConfig) -> str:
    def fmt(ms):
        return "+".join(sorted(m.value.lower() for m in ms)) or "-"

    return (
        f"move={fmt(cfg.move_mods)} resize={fmt(cfg.resize_delta_mods)} "
        f"pinch={fmt(cfg.resize_factor_mods)} swipe={fmt(cfg.swipe_mods)} "
        f"threshold={cfg.swipe_threshold:g} early={cfg.should_begin_early}"
    )


if __name__ == "__main__":
    run()
