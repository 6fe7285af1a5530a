"""Angle helpers for the dial.

All angles are in radians and follow the mathematical convention:
0 points right, angles grow counterclockwise. Screen coordinates have Y
growing downward, so every conversion to the screen flips Y.
"""

import math
from enum import Enum
from typing import Tuple

TURN = 2 * math.pi


class DialTarget(Enum):
    """Which handle(s) follow the pointer during a drag."""

    ALPHA = "alpha"
    BETA = "beta"
    BOTH = "both"


def normalize(angle: float) -> float:
    """
    Bring an angle into [0, 2π) with a single correction step.

    Only one full turn is added or subtracted, so the input must already be
    within one turn of the range.

    Args:
        angle: Angle in radians

    Returns:
        Angle in [0, 2π)
    """
    if angle < 0:
        return angle + TURN
    elif angle >= TURN:
        return angle - TURN
    else:
        return angle


def atan2_positive(y: float, x: float) -> float:
    """Four-quadrant arctangent mapped into [0, 2π)."""
    temp = math.atan2(y, x)
    # A tiny negative result would land exactly on 2π
    return normalize(temp + TURN) if temp < 0 else temp


def angular_distance(a: float, b: float) -> float:
    """Shortest unsigned distance between two normalized angles."""
    diff = normalize(a - b)
    return min(diff, TURN - diff)


def min_proximity(alpha: float, beta: float, angle: float) -> float:
    """Distance from angle to whichever handle is nearer."""
    return min(angular_distance(alpha, angle), angular_distance(beta, angle))


def closest_handle(alpha: float, beta: float, angle: float) -> DialTarget:
    """
    Pick the handle nearest to an angle.

    Alpha wins only when it is strictly closer; ties go to beta.

    Args:
        alpha: Alpha handle angle
        beta: Beta handle angle
        angle: Angle to compare against

    Returns:
        DialTarget.ALPHA or DialTarget.BETA
    """
    temp_alpha = angular_distance(alpha, angle)
    temp_beta = angular_distance(beta, angle)

    if temp_alpha - temp_beta < 0:
        return DialTarget.ALPHA
    return DialTarget.BETA


def polar_to_screen(
    center_x: float, center_y: float, radius: float, angle: float
) -> Tuple[float, float]:
    """
    Convert polar coordinates to screen coordinates.

    Args:
        center_x: X coordinate of the origin
        center_y: Y coordinate of the origin
        radius: Distance from origin
        angle: Angle in radians (0 = right, counterclockwise)

    Returns:
        (x, y) coordinates with Y growing downward
    """
    x = center_x + radius * math.cos(angle)
    y = center_y - radius * math.sin(angle)  # Negative for screen coordinates
    return x, y


def pointer_angle(
    center_x: float, center_y: float, x: float, y: float
) -> float:
    """Angle of a screen point around a center, in [0, 2π)."""
    return normalize(atan2_positive(center_y - y, x - center_x))
