"""Pointer hit testing and drag updates for the dial handles."""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from hue_dial.utils.angles import (
    DialTarget,
    closest_handle,
    min_proximity,
    normalize,
    pointer_angle,
)

logger = logging.getLogger(__name__)

# Fraction of the disk radius inside which a press always grabs both handles
EACH_OR_BOTH = 0.3

# A press this close (radians) to a handle grabs that handle alone
HANDLE_PROXIMITY = math.pi / 12


@dataclass
class DragSession:
    """State of one press-drag-release gesture."""

    target: DialTarget
    last_angle: float  # Angle seen at the previous event
    active: bool = True


class HitTester:
    """Decides what a pointer grabs and how dragging moves the handles."""

    def __init__(
        self,
        each_or_both: float = EACH_OR_BOTH,
        handle_proximity: float = HANDLE_PROXIMITY,
    ):
        """
        Initialize the hit tester.

        Args:
            each_or_both: Inner-disk fraction where a press grabs both handles
            handle_proximity: Angular threshold for grabbing a single handle
        """
        self.each_or_both = each_or_both
        self.handle_proximity = handle_proximity

    def on_press(
        self,
        center: Tuple[float, float],
        size: int,
        alpha: float,
        beta: float,
        x: float,
        y: float,
    ) -> Tuple[DragSession, float, float]:
        """
        Start a drag session for a press at (x, y).

        A press outside the inner disk and within the proximity threshold of
        a handle grabs that handle and snaps it to the pointer right away.
        Anything else grabs both handles.

        Args:
            center: (x, y) center used for angle computation
            size: Disk diameter in pixels
            alpha: Current alpha angle
            beta: Current beta angle
            x, y: Pointer position in widget coordinates

        Returns:
            Tuple of (session, alpha, beta) with the snapped angles applied
        """
        center_x, center_y = center
        press_angle = pointer_angle(center_x, center_y, x, y)
        radial_distance = math.hypot(x - center_x, y - center_y)

        if (radial_distance > size / 2.0 * self.each_or_both and
                min_proximity(alpha, beta, press_angle) < self.handle_proximity):
            target = closest_handle(alpha, beta, press_angle)

            if target == DialTarget.ALPHA:
                alpha = press_angle
            else:
                beta = press_angle
        else:
            target = DialTarget.BOTH

        logger.debug(
            f"Press at ({x:.1f}, {y:.1f}): angle {math.degrees(press_angle):.1f}°, "
            f"target {target.value}"
        )

        session = DragSession(target=target, last_angle=press_angle)
        return session, alpha, beta

    def on_motion(
        self,
        session: DragSession,
        center: Tuple[float, float],
        x: float,
        y: float,
        alpha: float,
        beta: float,
    ) -> Tuple[float, float, float]:
        """
        Apply pointer motion to the handles grabbed by a session.

        The delta between events is a raw difference; it is not wrapped, so a
        crossing of the 0/2π seam yields a delta near ±2π.

        Args:
            session: Active drag session, its last_angle is updated
            center: (x, y) center used for angle computation
            x, y: Pointer position in widget coordinates
            alpha: Current alpha angle
            beta: Current beta angle

        Returns:
            Tuple of (alpha, beta, last_angle)
        """
        center_x, center_y = center
        motion_angle = pointer_angle(center_x, center_y, x, y)

        delta = motion_angle - session.last_angle
        session.last_angle = motion_angle

        if delta:
            if session.target == DialTarget.ALPHA:
                alpha = motion_angle
            elif session.target == DialTarget.BETA:
                beta = motion_angle
            else:
                alpha = normalize(alpha + delta)
                beta = normalize(beta + delta)

        return alpha, beta, motion_angle

    def on_release(self, session: DragSession):
        """End a drag session. Angles are left untouched."""
        session.active = False
        logger.debug(f"Drag on {session.target.value} released")
