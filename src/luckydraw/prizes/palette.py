"""Segment colors."""

WHEEL_COLORS = [
    "#3b82f6",  # Blue
    "#10b981",  # Emerald
    "#f59e0b",  # Amber
    "#ef4444",  # Red
    "#8b5cf6",  # Violet
    "#ec4899",  # Pink
    "#06b6d4",  # Cyan
    "#84cc16",  # Lime
    "#f97316",  # Orange
    "#6366f1",  # Indigo
    "#14b8a6",  # Teal
    "#a855f7",  # Purple
]


def color_for(index: int) -> str:
    """Palette color for a segment index, cycling past the end."""
    return WHEEL_COLORS[index % len(WHEEL_COLORS)]


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Convert '#rrggbb' to an RGB tuple."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb color, got {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
