"""Basic drawing primitives for RGB numpy buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]


def create_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate a (height, width, 3) buffer filled with a color."""
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
    thickness: float = 1.0,
) -> None:
    """Draw a circle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
        filled: If True, fill circle; if False, draw a ring
        thickness: Ring width (when filled=False)
    """
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2

    if filled:
        mask = dist_sq <= radius ** 2
    else:
        inner = max(0.0, radius - thickness)
        mask = (dist_sq <= radius ** 2) & (dist_sq >= inner ** 2)
    buffer[mask] = color


def draw_triangle(
    buffer: Buffer,
    p1: Point,
    p2: Point,
    p3: Point,
    color: Color,
) -> None:
    """Fill a triangle using edge functions over its bounding box."""
    h, w = buffer.shape[:2]
    xs = (p1[0], p2[0], p3[0])
    ys = (p1[1], p2[1], p3[1])

    x_min = max(0, int(np.floor(min(xs))))
    x_max = min(w - 1, int(np.ceil(max(xs))))
    y_min = max(0, int(np.floor(min(ys))))
    y_max = min(h - 1, int(np.ceil(max(ys))))
    if x_min > x_max or y_min > y_max:
        return

    py, px = np.mgrid[y_min:y_max + 1, x_min:x_max + 1]

    def edge(a: Point, b: Point) -> NDArray[np.float64]:
        return (b[0] - a[0]) * (py - a[1]) - (b[1] - a[1]) * (px - a[0])

    e1 = edge(p1, p2)
    e2 = edge(p2, p3)
    e3 = edge(p3, p1)
    # Inside if all edge functions share a sign (either winding)
    mask = ((e1 >= 0) & (e2 >= 0) & (e3 >= 0)) | ((e1 <= 0) & (e2 <= 0) & (e3 <= 0))
    buffer[y_min:y_max + 1, x_min:x_max + 1][mask] = color
