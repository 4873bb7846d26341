"""Wheel rasterizer.

Fills the wheel disk pixel by pixel from the same segment formula the
outcome resolver uses, so whatever is drawn under the pointer is what
wins.
"""

from dataclasses import dataclass
from typing import Sequence
import math
import numpy as np

from luckydraw.graphics.primitives import Buffer, Color, draw_circle, draw_triangle
from luckydraw.prizes.palette import hex_to_rgb
from luckydraw.wheel.gesture import WheelGeometry
from luckydraw.wheel.outcome import POINTER_ANGLE, TAU, segment_angle

SEPARATOR_COLOR: Color = (255, 255, 255)
HUB_COLOR: Color = (255, 255, 255)
POINTER_COLOR: Color = (250, 204, 21)


@dataclass
class SegmentLabel:
    """Where to draw a prize name."""

    index: int
    angle: float  # Segment midpoint, screen radians
    x: float
    y: float
    flipped: bool  # Text on the left half reads better rotated by π


def segment_index_map(
    width: int,
    height: int,
    rotation: float,
    prize_count: int,
    geometry: WheelGeometry,
) -> np.ndarray:
    """Per-pixel segment index, -1 outside the disk."""
    y_indices, x_indices = np.mgrid[:height, :width]
    dx = x_indices + 0.5 - geometry.center_x
    dy = y_indices + 0.5 - geometry.center_y

    angles = np.mod(np.arctan2(dy, dx) - rotation, TAU)
    # Tiny negative inputs round up to TAU; that is the start of segment 0
    angles = np.where(angles >= TAU, 0.0, angles)
    indices = np.floor(angles / segment_angle(prize_count)).astype(np.int32)
    indices = np.minimum(indices, prize_count - 1)
    indices[dx ** 2 + dy ** 2 > geometry.radius ** 2] = -1
    return indices


def render_wheel(
    buffer: Buffer,
    rotation: float,
    prize_count: int,
    geometry: WheelGeometry,
    colors: Sequence[str],
    separator_width: float = 1.5,
) -> None:
    """Draw the wheel, pointer and hub onto a buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        rotation: Accumulated wheel rotation in radians
        prize_count: Number of segments
        geometry: Wheel center and radius in buffer pixels
        colors: Hex color per segment
        separator_width: Half-width in pixels of the lines between segments
    """
    h, w = buffer.shape[:2]
    indices = segment_index_map(w, h, rotation, prize_count, geometry)

    palette = np.array([hex_to_rgb(c) for c in colors], dtype=np.uint8)
    inside = indices >= 0
    buffer[inside] = palette[indices[inside]]

    # Separators: pixels close to a segment boundary ray
    y_indices, x_indices = np.mgrid[:h, :w]
    dx = x_indices + 0.5 - geometry.center_x
    dy = y_indices + 0.5 - geometry.center_y
    seg = segment_angle(prize_count)
    local = np.mod(np.arctan2(dy, dx) - rotation, seg)
    gap = np.minimum(local, seg - local) * np.hypot(dx, dy)
    buffer[inside & (gap < separator_width)] = SEPARATOR_COLOR

    draw_circle(buffer, geometry.center_x, geometry.center_y, geometry.radius,
                SEPARATOR_COLOR, filled=False, thickness=3)
    draw_circle(buffer, geometry.center_x, geometry.center_y,
                max(4.0, geometry.radius * 0.08), HUB_COLOR)
    draw_pointer(buffer, geometry)


def draw_pointer(buffer: Buffer, geometry: WheelGeometry, color: Color = POINTER_COLOR) -> None:
    """Downward triangle straddling the rim at the top of the wheel."""
    size = max(6.0, geometry.radius * 0.09)
    cx = geometry.center_x
    rim_y = geometry.center_y - geometry.radius
    draw_triangle(
        buffer,
        (cx - size, rim_y - size),
        (cx + size, rim_y - size),
        (cx, rim_y + size),
        color,
    )


def label_positions(
    rotation: float,
    prize_count: int,
    geometry: WheelGeometry,
    radius_factor: float = 0.65,
) -> list[SegmentLabel]:
    """Text anchors at each segment's midpoint."""
    seg = segment_angle(prize_count)
    text_radius = geometry.radius * radius_factor
    labels = []
    for i in range(prize_count):
        mid = i * seg + rotation + seg / 2
        normalized = mid % TAU
        labels.append(SegmentLabel(
            index=i,
            angle=mid,
            x=geometry.center_x + math.cos(mid) * text_radius,
            y=geometry.center_y + math.sin(mid) * text_radius,
            flipped=math.pi / 2 < normalized < 3 * math.pi / 2,
        ))
    return labels


def pointer_pixel(geometry: WheelGeometry, inset: float = 0.5) -> tuple[int, int]:
    """Buffer pixel just inside the rim under the pointer."""
    distance = geometry.radius * inset
    x = geometry.center_x + math.cos(POINTER_ANGLE) * distance
    y = geometry.center_y + math.sin(POINTER_ANGLE) * distance
    return int(x), int(y)
