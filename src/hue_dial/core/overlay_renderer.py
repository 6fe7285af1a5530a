"""Handle, tick and arc overlay drawn on top of the color wheel."""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import cairo

from hue_dial.core.hit_tester import EACH_OR_BOTH
from hue_dial.utils.angles import polar_to_screen

# Arrowhead base as a fraction of the radius
REL = 0.8
# Angular half-width of the arrowhead (radians)
DEL = 0.1
# Length of the direction tick (pixels)
TICK = 10

Point = Tuple[float, float]
Segment = Tuple[Point, Point]


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class ArcSpec:
    """A cairo arc in screen space (angles measured clockwise from +X)."""

    center_x: float
    center_y: float
    radius: float
    start: float
    end: float
    negative: bool  # True for cairo.Context.arc_negative

    def sweep_end(self) -> float:
        """End angle after cairo's own wrapping of the sweep."""
        end = self.end
        if self.negative:
            while end > self.start:
                end -= 2 * math.pi
        else:
            while end < self.start:
                end += 2 * math.pi
        return end

    def point_at(self, fraction: float) -> Point:
        """Screen point at a fraction (0..1) along the sweep."""
        angle = self.start + (self.sweep_end() - self.start) * fraction
        return (
            self.center_x + self.radius * math.cos(angle),
            self.center_y + self.radius * math.sin(angle),
        )


@dataclass
class OverlayGeometry:
    """Every path element of the overlay, in disk-local coordinates."""

    radius: int
    segments: List[Segment] = field(default_factory=list)
    tick: Optional[Segment] = None
    arc: Optional[ArcSpec] = None


def handle_segments(radius: int, angle: float) -> List[Segment]:
    """
    Line from the center to the rim plus its V-shaped arrowhead.

    Args:
        radius: Disk radius in pixels, also the center coordinate
        angle: Handle angle in radians

    Returns:
        Three segments: shaft, then the two arrowhead strokes
    """
    tip = polar_to_screen(radius, radius, radius, angle)
    tip_x, tip_y = tip

    segments = [((radius, radius), (_round(tip_x), _round(tip_y)))]

    for offset in (-DEL, DEL):
        base_x, base_y = polar_to_screen(radius, radius, radius * REL, angle + offset)
        segments.append((tip, (_round(base_x), _round(base_y))))

    return segments


def build_overlay(size: int, alpha: float, beta: float, clockwise: bool) -> OverlayGeometry:
    """
    Compute the overlay paths for a disk of the given size.

    Args:
        size: Disk diameter in pixels
        alpha: Alpha handle angle
        beta: Beta handle angle
        clockwise: Direction of the arc from alpha to beta

    Returns:
        OverlayGeometry with handle segments, direction tick and arc
    """
    radius = int(size / 2.0)
    direction = -1 if clockwise else 1

    geometry = OverlayGeometry(radius=radius)
    geometry.segments.extend(handle_segments(radius, alpha))
    geometry.segments.extend(handle_segments(radius, beta))

    dist = int(radius * EACH_OR_BOTH)

    tick_start = polar_to_screen(radius, radius, dist, beta)
    tick_end = (
        _round(tick_start[0] + direction * TICK * math.sin(beta)),
        _round(tick_start[1] + direction * TICK * math.cos(beta)),
    )
    geometry.tick = (tick_start, tick_end)

    # Cairo angles run clockwise on screen, so the handle angles are negated
    geometry.arc = ArcSpec(
        center_x=radius,
        center_y=radius,
        radius=dist,
        start=-alpha,
        end=-beta,
        negative=not clockwise,
    )

    return geometry


def draw_overlay(
    ctx: cairo.Context, size: int, alpha: float, beta: float, clockwise: bool
):
    """
    Stroke the handles and the arc between them.

    The path is stroked twice, a wide translucent white halo under a thin
    dark core, so it stays visible on any hue.
    """
    if size <= 0:
        return

    geometry = build_overlay(size, alpha, beta, clockwise)

    ctx.save()
    ctx.new_path()

    for start, end in geometry.segments + [geometry.tick]:
        ctx.move_to(*start)
        ctx.line_to(*end)

    arc = geometry.arc
    ctx.new_sub_path()
    if arc.negative:
        ctx.arc_negative(arc.center_x, arc.center_y, arc.radius, arc.start, arc.end)
    else:
        ctx.arc(arc.center_x, arc.center_y, arc.radius, arc.start, arc.end)

    ctx.set_line_width(3.0)
    ctx.set_source_rgba(1.0, 1.0, 1.0, 0.6)
    ctx.stroke_preserve()

    ctx.set_line_width(1.0)
    ctx.set_source_rgba(0.0, 0.0, 0.0, 0.8)
    ctx.stroke()

    ctx.restore()


class OverlayRenderer:
    """Draws the overlay for a dial state."""

    def paint(self, ctx: cairo.Context, size: int, alpha: float, beta: float, clockwise: bool):
        draw_overlay(ctx, size, alpha, beta, clockwise)
