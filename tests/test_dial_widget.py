import math

import pytest

try:
    import gi

    gi.require_version("Gtk", "4.0")
    from gi.repository import Gtk
except (ImportError, ValueError):  # pragma: no cover
    pytest.skip("GTK 4 not available", allow_module_level=True)

if not Gtk.init_check():  # pragma: no cover
    pytest.skip("No display available", allow_module_level=True)

from hue_dial.core.dial_controller import DialController, PressEvent
from hue_dial.ui.dial_widget import DialWidget


def test_widget_requests_preferred_size():
    widget = DialWidget(DialController(border_width=6))

    assert widget.get_content_width() == 108
    assert widget.get_content_height() == 108


def test_border_change_updates_content_size():
    widget = DialWidget()

    widget.set_border_width(20)

    assert widget.get_content_width() == 136
    assert widget.get_content_height() == 136


def test_accessors_forward_to_controller():
    controller = DialController()
    widget = DialWidget(controller)

    widget.set_alpha(1.5)
    widget.set_beta(-1.0)
    widget.set_clockwise(True)

    assert controller.alpha == 1.5
    assert widget.get_beta() == pytest.approx(2 * math.pi - 1.0)
    assert widget.get_clockwise() is True


def test_unmap_cancels_drag():
    controller = DialController()
    controller.layout_allocated(100, 100)
    widget = DialWidget(controller)

    controller.handle_press(PressEvent(x=50, y=50))
    assert controller.dragging

    widget._on_unmap(widget)

    assert not controller.dragging
