import math

import pytest

from gesturegate.interpreter.gesture_handler import resize_factor
from gesturegate.sensor.pinch import PinchPhase, PinchTracker, axis_angle, wrap_angle


def phases(events):
    return [e.phase for e in events]


def test_pinch_lifecycle():
    t = PinchTracker()
    assert t.update([(0.0, 0.0)]) == []

    # touch-down only arms the tracker
    assert t.update([(0.0, 0.0), (100.0, 0.0)]) == []
    assert not t.active

    began, ev = t.update([(0.0, 0.0), (150.0, 0.0)])
    assert began.phase == PinchPhase.BEGAN
    assert ev.phase == PinchPhase.CHANGED
    assert ev.magnification == pytest.approx(0.5)
    assert ev.angle == pytest.approx(0.0)
    assert t.active

    # relative to the last report, not the start
    (ev,) = t.update([(0.0, 0.0), (75.0, 0.0)])
    assert ev.magnification == pytest.approx(-0.5)

    assert phases(t.update([(0.0, 0.0)])) == [PinchPhase.ENDED]
    assert not t.active
    assert t.update([]) == []


def test_pinch_begins_only_past_scale_threshold():
    t = PinchTracker(scale_threshold=0.08)
    t.update([(0.0, 0.0), (100.0, 0.0)])
    assert t.update([(0.0, 0.0), (105.0, 0.0)]) == []

    began, ev = t.update([(0.0, 0.0), (110.0, 0.0)])
    assert began.phase == PinchPhase.BEGAN
    # the first report carries everything since touch-down
    assert ev.magnification == pytest.approx(0.1)


def test_small_changes_fold_into_next_report():
    t = PinchTracker(epsilon=0.01)
    t.update([(0.0, 0.0), (100.0, 0.0)])
    t.update([(0.0, 0.0), (110.0, 0.0)])

    assert t.update([(0.0, 0.0), (110.5, 0.0)]) == []
    (ev,) = t.update([(0.0, 0.0), (121.0, 0.0)])
    assert ev.magnification == pytest.approx(0.1)


def test_two_finger_drag_is_not_a_pinch():
    t = PinchTracker()
    out = []
    for i in range(10):
        jitter = 2.0 if i % 2 else -2.0
        y = 200.0 + 20.0 * i
        out += t.update([(400.0 + jitter, y), (600.0 - jitter, y)])

    assert PinchPhase.CHANGED not in phases(out)
    assert not t.active


def test_fingers_moving_together_suppress_large_scale():
    t = PinchTracker()
    t.update([(400.0, 200.0), (600.0, 200.0)])
    # distance grows 30%, but both fingers head down the pad
    assert t.update([(380.0, 400.0), (640.0, 420.0)]) == []
    assert not t.active


def test_drag_during_pinch_is_skipped():
    t = PinchTracker()
    t.update([(0.0, 0.0), (100.0, 0.0)])
    t.update([(0.0, 0.0), (150.0, 0.0)])

    assert t.update([(0.0, 50.0), (150.0, 50.0)]) == []
    assert t.active

    # the drag rebased the reference
    (ev,) = t.update([(0.0, 50.0), (300.0, 50.0)])
    assert ev.magnification == pytest.approx(1.0)


def test_one_finger_still_counts_as_pinch():
    t = PinchTracker()
    t.update([(100.0, 100.0), (100.0, 300.0)])
    began, ev = t.update([(100.0, 100.0), (100.0, 400.0)])
    assert ev.magnification == pytest.approx(0.5)
    assert ev.angle == pytest.approx(math.pi / 2)


def test_vertical_pinch_resizes_height():
    t = PinchTracker()
    t.update([(500.0, 200.0), (500.0, 400.0)])
    _, ev = t.update([(500.0, 100.0), (500.0, 500.0)])

    f = resize_factor(ev.magnification, ev.angle)
    assert abs(f.y) > abs(f.x)
    assert f.y == pytest.approx(-1.0)


def test_horizontal_pinch_resizes_width():
    t = PinchTracker()
    t.update([(200.0, 300.0), (400.0, 300.0)])
    _, ev = t.update([(100.0, 300.0), (500.0, 300.0)])

    f = resize_factor(ev.magnification, ev.angle)
    assert abs(f.x) > abs(f.y)
    assert f.x == pytest.approx(-1.0)


def test_axis_angle():
    assert axis_angle(((0.0, 0.0), (10.0, 0.0))) == pytest.approx(0.0)
    assert axis_angle(((10.0, 0.0), (0.0, 0.0))) == pytest.approx(0.0)
    assert axis_angle(((0.0, 0.0), (0.0, 10.0))) == pytest.approx(math.pi / 2)
    assert axis_angle(((0.0, 10.0), (0.0, 0.0))) == pytest.approx(math.pi / 2)
    assert axis_angle(((0.0, 0.0), (-1.0, 1.0))) == pytest.approx(math.pi / 4)


def test_fingers_on_top_of_each_other_do_not_arm():
    t = PinchTracker(min_distance=1.0)
    assert t.update([(5.0, 5.0), (5.0, 5.2)]) == []
    assert t.update([(5.0, 5.0), (5.0, 5.3)]) == []
    assert not t.active


def test_third_finger_ends_pinch():
    t = PinchTracker()
    t.update([(0.0, 0.0), (100.0, 0.0)])
    t.update([(0.0, 0.0), (150.0, 0.0)])
    assert phases(t.update([(0.0, 0.0), (150.0, 0.0), (50.0, 50.0)])) == [PinchPhase.ENDED]


def test_lifting_before_recognition_is_silent():
    t = PinchTracker()
    t.update([(0.0, 0.0), (100.0, 0.0)])
    assert t.update([(0.0, 0.0)]) == []
    assert t.cancel() == []


def test_cancel():
    t = PinchTracker()
    assert t.cancel() == []
    t.update([(0.0, 0.0), (100.0, 0.0)])
    t.update([(0.0, 0.0), (150.0, 0.0)])
    assert phases(t.cancel()) == [PinchPhase.CANCELLED]
    assert not t.active


def test_wrap_angle():
    assert wrap_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)
    assert wrap_angle(-3 * math.pi / 2) == pytest.approx(math.pi / 2)
    assert wrap_angle(0.25) == pytest.approx(0.25)
