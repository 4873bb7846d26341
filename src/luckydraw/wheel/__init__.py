"""Wheel physics: drag tracking, friction integration and winner resolution."""

from .engine import PhysicsWheel
from .gesture import GestureTracker, VelocitySample, WheelGeometry
from .outcome import normalize_angle, resolve_winner, segment_at
from .physics import MotionIntegrator

__all__ = [
    "PhysicsWheel",
    "GestureTracker",
    "VelocitySample",
    "WheelGeometry",
    "MotionIntegrator",
    "normalize_angle",
    "resolve_winner",
    "segment_at",
]
