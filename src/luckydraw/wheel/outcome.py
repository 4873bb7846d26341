"""Angle normalization and winner resolution.

Segment ``i`` of ``n`` is drawn from ``i * 2π/n + rotation`` to
``(i + 1) * 2π/n + rotation`` in screen angles (y axis pointing down,
so positive angles run clockwise). The pointer sits at the top of the
wheel, screen angle ``-π/2``.
"""

import math

TAU = 2 * math.pi
POINTER_ANGLE = -math.pi / 2


def normalize_angle(angle: float) -> float:
    """Wrap any finite angle into [0, 2π)."""
    # Python's float modulo already takes the sign of the divisor
    wrapped = angle % TAU
    # Tiny negative inputs can round up to exactly 2π
    if wrapped >= TAU:
        return 0.0
    return wrapped


def segment_angle(prize_count: int) -> float:
    """Angular width of one segment."""
    return TAU / prize_count


def segment_at(angle: float, rotation: float, prize_count: int) -> int:
    """Index of the segment drawn under a screen angle at a given rotation."""
    width = segment_angle(prize_count)
    index = int(math.floor(normalize_angle(angle - rotation) / width))
    return min(index, prize_count - 1)


def resolve_winner(rotation: float, prize_count: int) -> int:
    """Index of the segment under the pointer."""
    return segment_at(POINTER_ANGLE, rotation, prize_count)
