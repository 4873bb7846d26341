"""Prize list, draw history and segment colors."""

from .history import DrawHistory, DrawRecord
from .palette import WHEEL_COLORS, color_for, hex_to_rgb
from .store import DEFAULT_PRIZES, Prize, PrizeStore

__all__ = [
    "DrawHistory",
    "DrawRecord",
    "WHEEL_COLORS",
    "color_for",
    "hex_to_rgb",
    "DEFAULT_PRIZES",
    "Prize",
    "PrizeStore",
]
