"""Configuration for the lucky draw wheel."""

from .settings import Settings, PhysicsSettings, DisplaySettings, get_settings

__all__ = ["Settings", "PhysicsSettings", "DisplaySettings", "get_settings"]
