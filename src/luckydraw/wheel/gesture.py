"""Drag tracking for the wheel.

Turns pointer positions into angular deltas while the wheel is held,
and estimates a release velocity from the trailing window of samples.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional
import math
import time

from luckydraw.wheel.outcome import TAU


@dataclass
class VelocitySample:
    """Instantaneous angular velocity observed during a drag."""

    velocity: float  # rad/s
    timestamp: float  # seconds, clock-relative


@dataclass
class WheelGeometry:
    """Wheel placement in the caller's pixel coordinates."""

    center_x: float
    center_y: float
    radius: float

    def relative(self, x: float, y: float) -> tuple[float, float]:
        """Translate a position into center-relative coordinates."""
        return x - self.center_x, y - self.center_y

    def contains(self, x: float, y: float) -> bool:
        """Check if a position lies on the wheel disk."""
        dx, dy = self.relative(x, y)
        return math.hypot(dx, dy) <= self.radius


def wrap_delta(delta: float) -> float:
    """Fold a raw angle difference into (-π, π]."""
    if delta > math.pi:
        delta -= TAU
    elif delta <= -math.pi:
        delta += TAU
    return delta


class GestureTracker:
    """Follows one drag at a time.

    The tracker does not own the wheel rotation; ``move`` returns the
    angular delta and the caller applies it.
    """

    def __init__(
        self,
        window: float = 0.1,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.window = window
        self._clock = clock or time.monotonic
        self._samples: deque[VelocitySample] = deque()
        self._last_angle = 0.0
        self._last_time = 0.0
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def samples(self) -> list[VelocitySample]:
        return list(self._samples)

    def begin(self, dx: float, dy: float) -> None:
        """Start tracking from a center-relative position."""
        self._last_angle = math.atan2(dy, dx)
        self._last_time = self._clock()
        self._samples.clear()
        self._active = True

    def update(self, dx: float, dy: float) -> float:
        """Record a new center-relative position.

        Returns:
            Angular delta since the previous position, in radians
        """
        if not self._active:
            return 0.0

        current_angle = math.atan2(dy, dx)
        now = self._clock()
        delta = wrap_delta(current_angle - self._last_angle)

        dt = now - self._last_time
        if dt > 0:
            self._samples.append(VelocitySample(delta / dt, now))
            cutoff = now - self.window
            while self._samples and self._samples[0].timestamp <= cutoff:
                self._samples.popleft()

        self._last_angle = current_angle
        self._last_time = now
        return delta

    def finish(self) -> Optional[float]:
        """Stop tracking.

        Returns:
            Mean sampled velocity, or None if nothing was measured
        """
        self._active = False
        if not self._samples:
            return None
        return sum(s.velocity for s in self._samples) / len(self._samples)


def release_velocity(
    mean_velocity: float,
    damping: float = 0.8,
    max_velocity: float = 50.0,
) -> float:
    """Damp and clamp an averaged drag velocity."""
    velocity = mean_velocity * damping
    return max(-max_velocity, min(max_velocity, velocity))
