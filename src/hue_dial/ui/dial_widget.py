"""GTK 4 widget hosting a dial controller."""

import logging
from typing import Optional

import gi

gi.require_version("Gtk", "4.0")

from gi.repository import Gtk
import cairo

from hue_dial.core.dial_controller import (
    DialController,
    MotionEvent,
    PressEvent,
    ReleaseEvent,
)

logger = logging.getLogger(__name__)


class DialWidget(Gtk.DrawingArea):
    """Color wheel with two draggable handles."""

    def __init__(self, controller: Optional[DialController] = None):
        super().__init__()

        self.controller = controller if controller is not None else DialController()

        # Button of the press that started the current drag
        self._drag_button = 0

        self.controller.connect("redraw", self.queue_draw)
        self.controller.connect("relayout", self._update_content_size)

        # Setup drawing function
        self.set_draw_func(self._draw)
        self.connect("resize", self._on_resize)
        self.connect("unmap", self._on_unmap)

        # Setup input handlers
        self._setup_input_handlers()

        # Request natural size
        self._update_content_size()

    def _setup_input_handlers(self):
        """Setup press/drag/release handling."""
        drag_controller = Gtk.GestureDrag()
        drag_controller.set_button(0)  # All buttons, the controller filters
        drag_controller.connect("drag-begin", self._on_drag_begin)
        drag_controller.connect("drag-update", self._on_drag_update)
        drag_controller.connect("drag-end", self._on_drag_end)
        drag_controller.connect("cancel", self._on_drag_cancel)
        self.add_controller(drag_controller)

    def _update_content_size(self):
        """Report the controller's preferred size to the layout."""
        width, height = self.controller.preferred_size()
        self.set_content_width(width)
        self.set_content_height(height)
        self.queue_resize()

    def _draw(self, area: Gtk.DrawingArea, ctx: cairo.Context, width: int, height: int):
        """Main drawing function."""
        self.controller.layout_allocated(width, height)
        self.controller.render(ctx)

    def _on_resize(self, area, width: int, height: int):
        self.controller.layout_allocated(width, height)

    def _on_unmap(self, widget):
        # A hidden widget never sees the release
        self.controller.cancel_drag()

    def _on_drag_begin(self, gesture: Gtk.GestureDrag, start_x: float, start_y: float):
        button = gesture.get_current_button()
        state = int(gesture.get_current_event_state())

        self.controller.layout_allocated(self.get_width(), self.get_height())

        handled = self.controller.handle_press(
            PressEvent(x=start_x, y=start_y, button=button, state=state)
        )

        if handled:
            self._drag_button = button
            gesture.set_state(Gtk.EventSequenceState.CLAIMED)
        else:
            logger.debug(f"Ignoring press with button {button}")
            self._drag_button = 0
            gesture.set_state(Gtk.EventSequenceState.DENIED)

    def _on_drag_update(self, gesture: Gtk.GestureDrag, offset_x: float, offset_y: float):
        ok, start_x, start_y = gesture.get_start_point()
        if not ok:
            return

        self.controller.handle_motion(MotionEvent(x=start_x + offset_x, y=start_y + offset_y))

    def _on_drag_end(self, gesture: Gtk.GestureDrag, offset_x: float, offset_y: float):
        if self._drag_button:
            self.controller.handle_release(ReleaseEvent(button=self._drag_button))
            self._drag_button = 0

    def _on_drag_cancel(self, gesture, sequence):
        self._drag_button = 0
        self.controller.cancel_drag()

    # Convenience accessors
    def get_alpha(self) -> float:
        return self.controller.get_alpha()

    def set_alpha(self, alpha: float):
        self.controller.set_alpha(alpha)

    def get_beta(self) -> float:
        return self.controller.get_beta()

    def set_beta(self, beta: float):
        self.controller.set_beta(beta)

    def get_clockwise(self) -> bool:
        return self.controller.get_clockwise()

    def set_clockwise(self, clockwise: bool):
        self.controller.set_clockwise(clockwise)

    def get_border_width(self) -> int:
        return self.controller.get_border_width()

    def set_border_width(self, border_width: int):
        self.controller.set_border_width(border_width)
