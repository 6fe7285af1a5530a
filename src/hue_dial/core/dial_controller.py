"""Dial state and the controller that ties input, hit testing and drawing."""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import cairo

from hue_dial.core.hit_tester import DragSession, HitTester
from hue_dial.core.overlay_renderer import OverlayRenderer
from hue_dial.core.wheel_renderer import BackgroundFunc, WheelRenderer, hsv_background
from hue_dial.utils.angles import normalize

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 0.0
DEFAULT_BETA = math.pi
DEFAULT_CLOCKWISE = False
DEFAULT_BORDER_WIDTH = 0
MAX_BORDER_WIDTH = 64

# Natural disk diameter before borders are added
MIN_DISK_SIZE = 96

PRIMARY_BUTTON = 1
CONTEXT_MENU_BUTTON = 3

SIGNALS = ("redraw", "relayout", "changed")


@dataclass
class PressEvent:
    """Pointer press in widget-local coordinates."""

    x: float
    y: float
    button: int = PRIMARY_BUTTON
    state: int = 0  # Modifier mask


@dataclass
class MotionEvent:
    """Pointer motion in widget-local coordinates."""

    x: float
    y: float


@dataclass
class ReleaseEvent:
    """Pointer release."""

    button: int = PRIMARY_BUTTON


@dataclass
class DialState:
    """Everything the dial draws from."""

    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA
    clockwise: bool = DEFAULT_CLOCKWISE
    border_width: int = DEFAULT_BORDER_WIDTH
    width: int = 0
    height: int = 0


def clamp_border_width(value: int) -> int:
    """Clamp a border width into 0..MAX_BORDER_WIDTH."""
    return max(0, min(MAX_BORDER_WIDTH, int(value)))


class DialController:
    """
    Owns the dial state and reacts to pointer events and redraw requests.

    Host toolkits feed events in through handle_press/handle_motion/
    handle_release (or handle_event), report their allocation through
    layout_allocated, and call render from their draw callback. Listeners
    registered with connect() are told when a redraw or relayout is needed.
    """

    def __init__(
        self,
        alpha: float = DEFAULT_ALPHA,
        beta: float = DEFAULT_BETA,
        clockwise: bool = DEFAULT_CLOCKWISE,
        border_width: int = DEFAULT_BORDER_WIDTH,
        background: BackgroundFunc = hsv_background,
    ):
        self._state = DialState(
            alpha=normalize(alpha),
            beta=normalize(beta),
            clockwise=bool(clockwise),
            border_width=clamp_border_width(border_width),
        )

        self.hit_tester = HitTester()
        self.wheel_renderer = WheelRenderer(background)
        self.overlay_renderer = OverlayRenderer()

        self.session: Optional[DragSession] = None
        # Modifier state of the last primary press
        self.press_state = 0

        self._listeners: Dict[str, List[Callable]] = {name: [] for name in SIGNALS}

    # Listeners
    def connect(self, signal: str, callback: Callable):
        """
        Register a callback for a controller signal.

        "redraw" and "relayout" callbacks take no arguments; "changed"
        callbacks receive the name of the property that changed.
        """
        if signal not in self._listeners:
            raise ValueError(f"Unknown signal '{signal}', expected one of {SIGNALS}")
        self._listeners[signal].append(callback)

    def disconnect(self, signal: str, callback: Callable):
        """Remove a callback registered with connect()."""
        if signal not in self._listeners:
            raise ValueError(f"Unknown signal '{signal}', expected one of {SIGNALS}")
        if callback in self._listeners[signal]:
            self._listeners[signal].remove(callback)

    def _emit(self, signal: str, *args):
        for callback in list(self._listeners[signal]):
            callback(*args)

    def _property_changed(self, name: str, relayout: bool = False):
        self._emit("changed", name)
        if relayout:
            self._emit("relayout")
        self._emit("redraw")

    # Properties
    @property
    def state(self) -> DialState:
        """A copy of the current state."""
        return DialState(**vars(self._state))

    def get_alpha(self) -> float:
        return self._state.alpha

    def set_alpha(self, alpha: float):
        alpha = normalize(alpha)
        if alpha != self._state.alpha:
            self._state.alpha = alpha
            self._property_changed("alpha")

    def get_beta(self) -> float:
        return self._state.beta

    def set_beta(self, beta: float):
        beta = normalize(beta)
        if beta != self._state.beta:
            self._state.beta = beta
            self._property_changed("beta")

    def get_clockwise(self) -> bool:
        return self._state.clockwise

    def set_clockwise(self, clockwise: bool):
        clockwise = bool(clockwise)
        if clockwise != self._state.clockwise:
            self._state.clockwise = clockwise
            self._property_changed("clockwise")

    def get_border_width(self) -> int:
        return self._state.border_width

    def set_border_width(self, border_width: int):
        border_width = clamp_border_width(border_width)
        if border_width != self._state.border_width:
            logger.debug(f"Border width {self._state.border_width} -> {border_width}")
            self._state.border_width = border_width
            self._property_changed("border-width", relayout=True)

    alpha = property(get_alpha, set_alpha)
    beta = property(get_beta, set_beta)
    clockwise = property(get_clockwise, set_clockwise)
    border_width = property(get_border_width, set_border_width)

    def set_background(self, background: BackgroundFunc):
        """Use a different color function for the wheel."""
        self.wheel_renderer.set_color_func(background)
        self._emit("redraw")

    # Layout
    def layout_allocated(self, width: int, height: int):
        """Record the allocation given by the host."""
        if (width, height) != (self._state.width, self._state.height):
            logger.debug(f"Allocated {width}x{height}")
            self._state.width = width
            self._state.height = height

    def preferred_size(self) -> Tuple[int, int]:
        """Natural size: the minimum disk plus the border on both sides."""
        size = 2 * self._state.border_width + MIN_DISK_SIZE
        return size, size

    @staticmethod
    def _disk_size(state: DialState) -> int:
        return min(state.width, state.height) - 2 * state.border_width

    @staticmethod
    def _disk_origin(state: DialState) -> Tuple[int, int]:
        size = DialController._disk_size(state)
        border = state.border_width
        x = (state.width - 2 * border - size) // 2
        y = (state.height - 2 * border - size) // 2
        return border + x, border + y

    def disk_size(self) -> int:
        """Diameter of the drawable disk for the current allocation."""
        return self._disk_size(self._state)

    def disk_origin(self) -> Tuple[int, int]:
        """Top-left corner of the disk's bounding square."""
        return self._disk_origin(self._state)

    def center(self) -> Tuple[float, float]:
        """Center of the allocation, used for pointer angles."""
        return self._state.width / 2.0, self._state.height / 2.0

    # Input
    def handle_event(self, event) -> bool:
        """
        Dispatch a press, motion or release event.

        Returns:
            True if the event changed the drag session or the angles
        """
        if isinstance(event, PressEvent):
            return self.handle_press(event)
        elif isinstance(event, MotionEvent):
            return self.handle_motion(event)
        elif isinstance(event, ReleaseEvent):
            return self.handle_release(event)

        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def handle_press(self, event: PressEvent) -> bool:
        if event.button == CONTEXT_MENU_BUTTON:
            self.press_state = 0
            return False

        if event.button != PRIMARY_BUTTON:
            return False

        self.press_state = event.state

        session, alpha, beta = self.hit_tester.on_press(
            self.center(),
            self.disk_size(),
            self._state.alpha,
            self._state.beta,
            event.x,
            event.y,
        )
        self.session = session

        self.set_alpha(alpha)
        self.set_beta(beta)
        return True

    def handle_motion(self, event: MotionEvent) -> bool:
        if self.session is None or not self.session.active:
            return False

        alpha, beta, _ = self.hit_tester.on_motion(
            self.session,
            self.center(),
            event.x,
            event.y,
            self._state.alpha,
            self._state.beta,
        )

        self.set_alpha(alpha)
        self.set_beta(beta)
        return True

    def handle_release(self, event: ReleaseEvent) -> bool:
        if event.button != PRIMARY_BUTTON or self.session is None:
            return False

        self.hit_tester.on_release(self.session)
        self.session = None
        return True

    def cancel_drag(self):
        """Drop any drag in progress, as if the primary button was released."""
        if self.session is not None:
            logger.debug("Drag cancelled by host")
            self.handle_release(ReleaseEvent(button=PRIMARY_BUTTON))

    @property
    def dragging(self) -> bool:
        return self.session is not None

    # Drawing
    def render(self, ctx: cairo.Context):
        """Draw the wheel and the overlay into the current allocation."""
        state = self.state

        size = self._disk_size(state)
        if size <= 0:
            return

        x, y = self._disk_origin(state)

        ctx.save()
        ctx.translate(x, y)

        self.wheel_renderer.paint(ctx, size)
        self.overlay_renderer.paint(ctx, size, state.alpha, state.beta, state.clockwise)

        ctx.restore()
