"""Rendering for the lucky draw wheel."""

from .primitives import Buffer, Color, clear, create_buffer, draw_circle, draw_triangle
from .wheel import label_positions, pointer_pixel, render_wheel, segment_index_map

__all__ = [
    "Buffer",
    "Color",
    "clear",
    "create_buffer",
    "draw_circle",
    "draw_triangle",
    "label_positions",
    "pointer_pixel",
    "render_wheel",
    "segment_index_map",
]
