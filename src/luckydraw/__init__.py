"""Lucky draw: a drag-to-spin prize wheel with friction physics."""

__version__ = "0.1.0"
