"""Procedural color wheel rendering for the dial background."""

import logging
import math
import sys
from typing import Callable, Optional, Tuple

import cairo
import numpy as np

from hue_dial.utils.angles import TURN

logger = logging.getLogger(__name__)

# Maps (turn fraction, radial distance) arrays to an (..., 3) RGB array
BackgroundFunc = Callable[[np.ndarray, np.ndarray], np.ndarray]

# Byte positions of R, G, B, A inside a native-endian ARGB32 pixel
if sys.byteorder == "little":
    ARGB32_ORDER = (2, 1, 0, 3)
else:
    ARGB32_ORDER = (1, 2, 3, 0)


def hsv_to_rgb(hue, saturation, value) -> np.ndarray:
    """
    Convert HSV to 8-bit RGB, element-wise.

    Works on scalars or arrays of matching shape.

    Args:
        hue: Hue as a turn fraction in [0, 1]
        saturation: Saturation in [0, 1]
        value: Value in [0, 1]

    Returns:
        uint8 array with a trailing axis of length 3
    """
    hue = np.asarray(hue, dtype=np.float64)
    s = np.asarray(saturation, dtype=np.float64)
    v = np.asarray(value, dtype=np.float64)

    h = hue * 6.0
    h = np.where(h >= 6.0, 0.0, h)
    sector = np.floor(h)
    f = h - sector
    sector = sector.astype(np.int64) % 6

    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    r = np.choose(sector, [v, q, p, p, t, v])
    g = np.choose(sector, [t, v, v, q, p, p])
    b = np.choose(sector, [p, p, t, v, v, q])

    rgb = np.stack([r, g, b], axis=-1)
    return np.rint(np.clip(rgb, 0.0, 1.0) * 255.0).astype(np.uint8)


def hsv_background(angle, distance) -> np.ndarray:
    """Default wheel: hue follows angle, saturation follows distance."""
    value = 1.0 - np.sqrt(distance) / 4.0
    return hsv_to_rgb(angle, distance, value)


def wheel_coordinates(size: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute per-pixel polar coordinates of a size x size square.

    Args:
        size: Square side in pixels

    Returns:
        (angle, distance) arrays of shape (size, size), indexed [row, column].
        angle is a turn fraction, distance is relative to the radius and not
        clamped.
    """
    half = size / 2.0
    j, i = np.mgrid[0:size, 0:size].astype(np.float64)

    distance = np.sqrt((i - half) ** 2 + (j - half) ** 2) / half

    angle = np.arctan2(half - j, i - half)
    angle = np.where(angle < 0, angle + TURN, angle) / TURN

    return angle, distance


def _shade(
    angle: np.ndarray, distance: np.ndarray, color_func: BackgroundFunc
) -> np.ndarray:
    size = angle.shape[0]
    rgb = np.asarray(color_func(angle, np.minimum(1.0, distance)))

    # Out-of-range channels saturate instead of wrapping around
    return np.clip(rgb, 0, 255).astype(np.uint8).reshape(size, size, 3)


def compute_wheel_rgb(size: int, color_func: BackgroundFunc = hsv_background) -> np.ndarray:
    """Colors for the full square, shape (size, size, 3)."""
    if size <= 0:
        return np.zeros((0, 0, 3), dtype=np.uint8)

    angle, distance = wheel_coordinates(size)
    return _shade(angle, distance, color_func)


def render_background(size: int, color_func: BackgroundFunc = hsv_background) -> np.ndarray:
    """
    Rasterize the color wheel into an RGBA buffer.

    Pixels inside the inscribed circle are opaque, pixels outside it are
    fully transparent.

    Args:
        size: Diameter of the wheel in pixels
        color_func: Background strategy

    Returns:
        uint8 array of shape (size, size, 4); empty for size <= 0
    """
    if size <= 0:
        return np.zeros((0, 0, 4), dtype=np.uint8)

    angle, distance = wheel_coordinates(size)

    rgba = np.empty((size, size, 4), dtype=np.uint8)
    rgba[..., :3] = _shade(angle, distance, color_func)
    rgba[..., 3] = np.where(distance <= 1.0, 255, 0)

    return rgba


def surface_pixels(surface: cairo.ImageSurface) -> np.ndarray:
    """
    View an ARGB32 surface's memory as a (height, width, 4) byte array.

    The channel order is native ARGB32; index it with ARGB32_ORDER.
    """
    width = surface.get_width()
    height = surface.get_height()
    stride = surface.get_stride()

    return np.ndarray(
        shape=(height, width, 4),
        dtype=np.uint8,
        buffer=surface.get_data(),
        strides=(stride, 4, 1),
    )


def surface_to_rgba(surface: cairo.ImageSurface) -> np.ndarray:
    """Copy an ARGB32 surface into a (height, width, 4) RGBA array."""
    surface.flush()
    if surface.get_width() == 0 or surface.get_height() == 0:
        return np.zeros((surface.get_height(), surface.get_width(), 4), dtype=np.uint8)

    return surface_pixels(surface)[..., list(ARGB32_ORDER)].copy()


def create_wheel_surface(
    size: int, color_func: BackgroundFunc = hsv_background
) -> cairo.ImageSurface:
    """
    Create an opaque ARGB32 surface holding the full square of colors.

    Args:
        size: Side in pixels, must be positive
        color_func: Background strategy

    Returns:
        New cairo image surface
    """
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, size, size)

    data = surface_pixels(surface)
    rgb = compute_wheel_rgb(size, color_func)

    r, g, b, a = ARGB32_ORDER
    data[..., r] = rgb[..., 0]
    data[..., g] = rgb[..., 1]
    data[..., b] = rgb[..., 2]
    data[..., a] = 255

    surface.mark_dirty()
    return surface


def paint_background(
    ctx: cairo.Context,
    size: int,
    color_func: BackgroundFunc = hsv_background,
    surface: Optional[cairo.ImageSurface] = None,
):
    """
    Paint the wheel as a disk with its top-left corner at the origin.

    Args:
        ctx: Cairo context
        size: Disk diameter in pixels
        color_func: Background strategy
        surface: Pre-rendered wheel surface to reuse
    """
    if size <= 0:
        return

    if surface is None:
        surface = create_wheel_surface(size, color_func)

    ctx.save()

    ctx.set_source_surface(surface, 0.0, 0.0)

    ctx.arc(size / 2.0, size / 2.0, size / 2.0, 0.0, 2 * math.pi)
    ctx.clip()

    ctx.paint()

    ctx.restore()


class WheelRenderer:
    """Paints the wheel, keeping the last rasterized surface around."""

    def __init__(self, color_func: BackgroundFunc = hsv_background):
        self.color_func = color_func
        self._surface = None
        self._surface_size = 0

    def set_color_func(self, color_func: BackgroundFunc):
        """Swap the background strategy and drop the cached raster."""
        self.color_func = color_func
        self.invalidate()

    def invalidate(self):
        """Forget the cached surface."""
        self._surface = None
        self._surface_size = 0

    def get_surface(self, size: int) -> Optional[cairo.ImageSurface]:
        """Wheel surface for a size, rasterized only when the size changes."""
        if size <= 0:
            return None

        if self._surface is None or self._surface_size != size:
            logger.debug(f"Rasterizing {size}x{size} color wheel")
            self._surface = create_wheel_surface(size, self.color_func)
            self._surface_size = size

        return self._surface

    def paint(self, ctx: cairo.Context, size: int):
        """Paint the wheel disk at the origin of ctx."""
        surface = self.get_surface(size)
        if surface is None:
            return

        paint_background(ctx, size, self.color_func, surface=surface)
