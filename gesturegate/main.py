from __future__ import annotations

from gesturegate.core.config import DEFAULT_CONFIG, GestureConfig
from gesturegate.interpreter.gesture_handler import GestureHandler
from gesturegate.runtime.consumers import PrintingDelegate
from gesturegate.sensor.scripted import (
	ScriptedMagnifySource, ScriptedModifierSource, ScriptedScrollSource,
)


def demo_session(keys: ScriptedModifierSource, scroll: ScriptedScrollSource, magnify: ScriptedMagnifySource) -> None:
	# cmd + two-finger drag: move
	keys.hold("cmd")
	scroll.begin()
	for i in range(1, 4):
		scroll.change(5.0 * i, -2.0 * i)
	scroll.end(None)

	# cmd + alt: same drag resizes
	keys.hold("cmd", "alt")
	scroll.begin()
	scroll.change(12.0, 8.0)
	scroll.end(None)

	# back to cmd only: pinch, then a flick to the right
	keys.hold("cmd")
	magnify.begin()
	magnify.change(0.25)
	magnify.end()
	scroll.swipe(-45.0, 0.0)

	keys.release_all()

	# nothing is held: ignored
	scroll.swipe(80.0, 80.0)


def main(config: GestureConfig = DEFAULT_CONFIG) -> None:
	keys = ScriptedModifierSource()
	scroll = ScriptedScrollSource()
	magnify = ScriptedMagnifySource()

	print("GestureGate scripted demo.")
	with GestureHandler(
		config=config,
		scroll_source=scroll,
		magnify_source=magnify,
		modifier_sources=[keys],
		delegate=PrintingDelegate(),
	):
		demo_session(keys, scroll, magnify)
	print("done")


if __name__ == "__main__":
	main()
