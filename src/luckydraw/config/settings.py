"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested models use a double underscore, e.g. LUCKYDRAW_PHYSICS__FRICTION=0.98.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsSettings(BaseModel):
    """Wheel motion and release tuning."""

    # Per-tick velocity multiplier while coasting
    friction: float = Field(default=0.985, gt=0.0, lt=1.0)
    # Below this (rad/s) the wheel counts as stopped
    min_velocity: float = Field(default=0.001, gt=0.0)
    # Fixed integration step in seconds, independent of frame time
    time_step: float = Field(default=0.016, gt=0.0)

    # Release energy loss applied to the averaged drag velocity
    release_damping: float = Field(default=0.8, gt=0.0, le=1.0)
    max_velocity: float = Field(default=50.0, gt=0.0)
    spin_threshold: float = Field(default=3.0, ge=0.0)
    # Half-width of the uniform perturbation added on a spinning release
    release_jitter: float = Field(default=2.5, ge=0.0)
    # Trailing window of drag samples averaged on release, in seconds
    sample_window: float = Field(default=0.1, gt=0.0)


class DisplaySettings(BaseModel):
    """Simulator window settings."""

    width: int = 960
    height: int = 640
    fps: int = 60
    title: str = "Lucky Draw"

    # Wheel placement inside the window
    wheel_radius: int = 260
    wheel_center_x: int = 320
    wheel_center_y: int = 320

    bg_color: tuple[int, int, int] = (15, 23, 42)
    panel_color: tuple[int, int, int] = (30, 41, 59)
    text_color: tuple[int, int, int] = (226, 232, 240)
    pointer_color: tuple[int, int, int] = (250, 204, 21)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="LUCKYDRAW_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Collaborator limits
    min_prizes: int = 2
    max_prizes: int = 12
    history_limit: int = 50

    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with the pygame front end."""
        return self.env == "simulator"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
