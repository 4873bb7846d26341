import math
import random

import pytest

from luckydraw.config.settings import PhysicsSettings, Settings
from luckydraw.wheel.engine import PhysicsWheel
from luckydraw.wheel.gesture import WheelGeometry

SIX_PRIZES = ["A", "B", "C", "D", "E", "F"]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def flick(wheel, clock, rate, steps=5, dt=0.01, reach=0.6):
    """Drag the wheel at a constant angular rate (rad/s), without releasing."""
    geometry = wheel.geometry
    r = geometry.radius * reach
    angle = 0.0
    assert wheel.start(geometry.center_x + r, geometry.center_y)
    for _ in range(steps):
        clock.advance(dt)
        angle += rate * dt
        wheel.move(
            geometry.center_x + r * math.cos(angle),
            geometry.center_y + r * math.sin(angle),
        )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def geometry():
    return WheelGeometry(center_x=200, center_y=200, radius=100)


@pytest.fixture
def calm_physics():
    """Physics without the random release perturbation."""
    return PhysicsSettings(release_jitter=0.0)


@pytest.fixture
def wheel(geometry, clock):
    return PhysicsWheel(SIX_PRIZES, geometry, clock=clock, rng=random.Random(7))


@pytest.fixture
def calm_wheel(geometry, clock, calm_physics):
    return PhysicsWheel(SIX_PRIZES, geometry, settings=calm_physics, clock=clock)


@pytest.fixture
def settings(calm_physics):
    return Settings(_env_file=None, physics=calm_physics)
