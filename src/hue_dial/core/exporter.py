"""Offscreen rendering and PNG export of a dial."""

import logging
from pathlib import Path
from typing import Optional, Union

import cairo

from hue_dial.core.dial_controller import DialController

logger = logging.getLogger(__name__)


def render_dial_surface(
    controller: DialController, size: Optional[int] = None
) -> cairo.ImageSurface:
    """
    Render a dial into a new square image surface.

    The controller's properties are copied into a scratch controller so the
    live widget's allocation is left alone.

    Args:
        controller: Dial to render
        size: Side of the image in pixels (defaults to the preferred size)

    Returns:
        ARGB32 surface, transparent outside the disk
    """
    if size is None:
        size = controller.preferred_size()[0]

    state = controller.state
    scratch = DialController(
        alpha=state.alpha,
        beta=state.beta,
        clockwise=state.clockwise,
        border_width=state.border_width,
        background=controller.wheel_renderer.color_func,
    )
    scratch.layout_allocated(size, size)

    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, size, size)
    ctx = cairo.Context(surface)

    # Clear
    ctx.set_source_rgba(0, 0, 0, 0)
    ctx.paint()

    scratch.render(ctx)
    surface.flush()

    return surface


def export_png(
    controller: DialController, output_path: Union[str, Path], size: Optional[int] = None
) -> bool:
    """
    Save a rendering of the dial as a PNG file.

    Args:
        controller: Dial to render
        output_path: Path to output PNG file
        size: Side of the image in pixels

    Returns:
        True if successful, False otherwise
    """
    try:
        surface = render_dial_surface(controller, size)
        surface.write_to_png(str(output_path))
        logger.info(f"Exported {surface.get_width()}x{surface.get_height()} dial to {output_path}")
        return True
    except (cairo.Error, OSError) as e:
        logger.error(f"Error exporting dial image: {e}")
        return False
