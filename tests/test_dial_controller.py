import math

import cairo
import numpy as np
import pytest

from hue_dial.core.dial_controller import (
    MAX_BORDER_WIDTH,
    DialController,
    MotionEvent,
    PressEvent,
    ReleaseEvent,
)
from hue_dial.core.wheel_renderer import surface_to_rgba
from hue_dial.utils.angles import DialTarget, angular_distance, polar_to_screen


class _Recorder:
    def __init__(self, controller):
        self.redraws = 0
        self.relayouts = 0
        self.changed = []
        controller.connect("redraw", self._on_redraw)
        controller.connect("relayout", self._on_relayout)
        controller.connect("changed", self.changed.append)

    def _on_redraw(self):
        self.redraws += 1

    def _on_relayout(self):
        self.relayouts += 1


@pytest.fixture
def dial():
    controller = DialController()
    controller.layout_allocated(200, 200)
    return controller


def test_defaults():
    controller = DialController()

    assert controller.alpha == 0.0
    assert controller.beta == math.pi
    assert controller.clockwise is False
    assert controller.border_width == 0
    assert controller.preferred_size() == (96, 96)
    assert not controller.dragging


def test_preferred_and_disk_size_with_border(dial):
    dial.set_border_width(10)

    assert dial.preferred_size() == (116, 116)
    assert dial.disk_size() == 180
    assert dial.disk_origin() == (10, 10)


def test_disk_is_centered_in_wide_allocation():
    controller = DialController(border_width=10)
    controller.layout_allocated(300, 200)

    assert controller.disk_size() == 180
    assert controller.disk_origin() == (60, 10)


@pytest.mark.parametrize("value, expected", [(100, MAX_BORDER_WIDTH), (-5, 0), (12, 12)])
def test_border_width_is_clamped(value, expected):
    controller = DialController()
    controller.set_border_width(value)
    assert controller.get_border_width() == expected


def test_angle_setters_normalize(dial):
    dial.set_alpha(-0.5)
    dial.set_beta(2 * math.pi)

    assert dial.get_alpha() == pytest.approx(2 * math.pi - 0.5)
    assert dial.get_beta() == 0.0


def test_constructor_normalizes_and_clamps():
    controller = DialController(alpha=-1.0, beta=7.0, clockwise=1, border_width=80)

    assert controller.alpha == pytest.approx(2 * math.pi - 1.0)
    assert controller.beta == pytest.approx(7.0 - 2 * math.pi)
    assert controller.clockwise is True
    assert controller.border_width == MAX_BORDER_WIDTH


def test_mutators_signal_redraw_and_relayout(dial):
    recorder = _Recorder(dial)

    dial.alpha = 1.0
    dial.clockwise = True
    assert recorder.redraws == 2
    assert recorder.relayouts == 0

    dial.border_width = 4
    assert recorder.redraws == 3
    assert recorder.relayouts == 1
    assert recorder.changed == ["alpha", "clockwise", "border-width"]


def test_setting_same_value_is_silent(dial):
    recorder = _Recorder(dial)

    dial.set_beta(math.pi)
    dial.set_border_width(0)

    assert recorder.redraws == 0
    assert recorder.changed == []


def test_disconnect_stops_callbacks(dial):
    calls = []
    dial.connect("changed", calls.append)
    dial.disconnect("changed", calls.append)

    dial.set_alpha(2.0)

    assert calls == []


def test_unknown_signal_raises(dial):
    with pytest.raises(ValueError):
        dial.connect("toggled", lambda: None)


def test_unknown_event_raises(dial):
    with pytest.raises(TypeError):
        dial.handle_event(object())


def test_center_press_drags_both_handles(dial):
    assert dial.handle_event(PressEvent(x=100, y=100))
    assert dial.session.target == DialTarget.BOTH

    separation = angular_distance(dial.alpha, dial.beta)
    # Press angle at dead center is 0, drag a quarter turn counterclockwise
    x, y = polar_to_screen(100, 100, 50, math.pi / 2)
    assert dial.handle_event(MotionEvent(x=x, y=y))

    assert dial.alpha == pytest.approx(math.pi / 2)
    assert dial.beta == pytest.approx(3 * math.pi / 2)
    assert angular_distance(dial.alpha, dial.beta) == pytest.approx(separation)

    assert dial.handle_event(ReleaseEvent())
    assert not dial.dragging


def test_press_near_alpha_snaps_and_drags_it(dial):
    recorder = _Recorder(dial)
    x, y = polar_to_screen(100, 100, 80, math.radians(8))

    dial.handle_press(PressEvent(x=x, y=y, state=1))

    assert dial.session.target == DialTarget.ALPHA
    assert dial.press_state == 1
    assert dial.alpha == pytest.approx(math.radians(8))
    assert recorder.changed == ["alpha"]

    x, y = polar_to_screen(100, 100, 80, math.radians(40))
    dial.handle_motion(MotionEvent(x=x, y=y))

    assert dial.alpha == pytest.approx(math.radians(40))
    assert dial.beta == math.pi


def test_press_state_lives_on_the_controller_only(dial):
    dial.handle_press(PressEvent(x=100, y=100, state=4))

    assert dial.press_state == 4
    assert not hasattr(dial.session, "press_state")

    dial.handle_release(ReleaseEvent())
    dial.handle_press(PressEvent(x=100, y=100, state=0))

    assert dial.press_state == 0


def test_motion_without_press_is_ignored(dial):
    assert not dial.handle_motion(MotionEvent(x=10, y=100))
    assert dial.alpha == 0.0


def test_motion_after_release_is_ignored(dial):
    dial.handle_press(PressEvent(x=100, y=100))
    dial.handle_release(ReleaseEvent())

    assert not dial.handle_motion(MotionEvent(x=100, y=10))
    assert dial.alpha == 0.0


def test_context_menu_press_does_not_start_drag(dial):
    dial.handle_press(PressEvent(x=190, y=100, state=4))
    dial.handle_release(ReleaseEvent())

    assert not dial.handle_press(PressEvent(x=190, y=100, button=3, state=4))
    assert dial.press_state == 0
    assert not dial.dragging


def test_other_buttons_are_ignored(dial):
    assert not dial.handle_press(PressEvent(x=100, y=100, button=2))
    assert not dial.dragging
    assert not dial.handle_release(ReleaseEvent(button=2))


def test_release_without_session(dial):
    assert not dial.handle_release(ReleaseEvent())


def test_cancel_drag_drops_session(dial):
    dial.handle_press(PressEvent(x=100, y=100))

    dial.cancel_drag()

    assert not dial.dragging
    dial.cancel_drag()


def test_hit_testing_uses_border_reduced_size():
    controller = DialController(border_width=40)
    controller.layout_allocated(200, 200)

    # Disk is 120px, inner disk radius 18px: 25px out at alpha's angle grabs alpha
    controller.handle_press(PressEvent(x=125, y=100))
    assert controller.session.target == DialTarget.ALPHA


def _render(controller, width, height):
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    ctx = cairo.Context(surface)
    controller.layout_allocated(width, height)
    controller.render(ctx)
    return surface_to_rgba(surface)


def test_render_paints_disk_inside_border():
    controller = DialController(border_width=10)
    rgba = _render(controller, 200, 200)

    assert rgba[5, 5, 3] == 0
    assert rgba[11, 11, 3] == 0
    assert rgba[150, 100, 3] == 255
    assert rgba[100, 15, 3] == 255


def test_render_with_custom_background():
    def gray(angle, distance):
        return np.full(np.shape(angle) + (3,), 128)

    controller = DialController(background=gray)
    rgba = _render(controller, 100, 100)

    assert tuple(rgba[75, 50]) == (128, 128, 128, 255)


def test_render_zero_area_is_noop():
    controller = DialController(border_width=20)
    rgba = _render(controller, 30, 30)

    assert not rgba[..., 3].any()
