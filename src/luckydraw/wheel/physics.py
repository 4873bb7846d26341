"""Friction-decayed rotation for the wheel.

Every tick multiplies velocity by the friction coefficient and then
advances rotation by a fixed time step. The step is deliberately not
tied to wall-clock frame time, so spin duration depends only on the
release velocity and tick count.
"""

from dataclasses import dataclass
import math


@dataclass
class MotionIntegrator:
    """Exponential-decay integrator for angular motion."""

    friction: float = 0.985
    min_velocity: float = 0.001  # rad/s
    time_step: float = 0.016  # seconds per tick

    def is_moving(self, velocity: float) -> bool:
        """Check if a velocity is above the stop threshold."""
        return abs(velocity) > self.min_velocity

    def step(self, rotation: float, velocity: float) -> tuple[float, float]:
        """Advance one tick.

        Returns:
            (new_rotation, new_velocity)
        """
        velocity *= self.friction
        return rotation + velocity * self.time_step, velocity

    def ticks_to_settle(self, velocity: float) -> int:
        """Number of ticks until a velocity decays to the threshold."""
        if not self.is_moving(velocity):
            return 0
        return math.ceil(
            math.log(self.min_velocity / abs(velocity)) / math.log(self.friction)
        )

    def settle_time(self, velocity: float) -> float:
        """Approximate seconds of motion for a given start velocity."""
        if not self.is_moving(velocity):
            return 0.0
        ticks = math.log(self.min_velocity / abs(velocity)) / math.log(self.friction)
        return ticks * self.time_step
