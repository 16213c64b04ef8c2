import math
import warnings
from typing import Tuple
import numpy as np
from skimage.color import lab2rgb, rgb2lab

from .types import ColorSpace, PixelBuffer
from .utils.geometry import barycentric_mask


def prepare_color_field(buffer: PixelBuffer, color_space: ColorSpace) -> np.ndarray:
    """
    Per-pixel channels that triangle colors are averaged in.

    Args:
        buffer: Normalized pixel buffer
        color_space: RGB keeps 0-255 channels, LAB converts to CIELAB (D65)

    Returns:
        Read-only float array (H, W, 3)
    """
    if color_space == ColorSpace.LAB:
        field = rgb2lab(buffer.rgb)
    else:
        field = buffer.rgb.astype(np.float64)

    field.flags.writeable = False
    return field


def to_rgb_bytes(channels: np.ndarray, color_space: ColorSpace) -> Tuple[int, int, int]:
    """Convert averaged channels back to 8-bit RGB, rounding half up and clamping."""
    if color_space == ColorSpace.LAB:
        with warnings.catch_warnings():
            # Averages can leave the sRGB gamut; they are clamped below
            warnings.simplefilter('ignore', UserWarning)
            rgb = lab2rgb(np.asarray(channels, dtype=np.float64).reshape(1, 1, 3)).reshape(3) * 255.0
    else:
        rgb = np.asarray(channels, dtype=np.float64)

    rgb = np.clip(np.floor(rgb + 0.5), 0, 255)
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


def bounding_box(vertices: np.ndarray, width: int, height: int) -> Tuple[int, int, int, int]:
    """Integer pixel range [min_x, max_x) x [min_y, max_y) covering the triangle."""
    min_x = max(0, math.floor(vertices[:, 0].min()))
    max_x = min(width, math.ceil(vertices[:, 0].max()))
    min_y = max(0, math.floor(vertices[:, 1].min()))
    max_y = min(height, math.ceil(vertices[:, 1].max()))
    return min_x, max_x, min_y, max_y


def average_color(vertices: np.ndarray, buffer: PixelBuffer, field: np.ndarray,
                  color_space: ColorSpace) -> Tuple[int, int, int]:
    """
    Mean color of the pixels covered by a triangle.

    Pixels are the integer positions inside the bounding box that pass the
    barycentric containment test. When none do, the pixel nearest the box
    centre is used as-is.

    Args:
        vertices: Triangle vertices (3, 2)
        buffer: Normalized pixel buffer
        field: Output of prepare_color_field() for buffer
        color_space: Space the field was prepared in

    Returns:
        (r, g, b) with each channel in [0, 255]
    """
    min_x, max_x, min_y, max_y = bounding_box(vertices, buffer.width, buffer.height)

    if max_x > min_x and max_y > min_y:
        ys, xs = np.mgrid[min_y:max_y, min_x:max_x]
        mask = barycentric_mask(vertices, xs, ys)
        if mask.any():
            samples = field[min_y:max_y, min_x:max_x][mask]
            return to_rgb_bytes(samples.mean(axis=0), color_space)

    cx = min(buffer.width - 1, (min_x + max_x) // 2)
    cy = min(buffer.height - 1, (min_y + max_y) // 2)
    warnings.warn(f"No pixel centres inside triangle {vertices.tolist()}, "
                  f"using pixel ({cx}, {cy})")
    r, g, b = buffer.rgb[cy, cx]
    return int(r), int(g), int(b)
