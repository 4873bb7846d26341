"""
Physics wheel: drag-to-spin rotation with winner resolution.

Flow:
    1. start() on the disk grabs the wheel (IDLE -> DRAGGING)
    2. move() rotates it with the pointer and samples velocity
    3. end() releases it; a strong release spins (-> SPINNING),
       a weak one coasts back in IDLE without a result
    4. tick() integrates friction each frame and, on the tick the
       spin decays below the stop threshold, resolves the winner
       and notifies settle observers

All calls must come from one thread; the frame loop is expected to
interleave gesture calls and ticks.
"""

from typing import Callable, Optional, Sequence
import logging
import random
import time

from luckydraw.config.settings import PhysicsSettings
from luckydraw.core.state import PhaseMachine, WheelPhase
from luckydraw.wheel.gesture import GestureTracker, WheelGeometry, release_velocity
from luckydraw.wheel.outcome import (
    normalize_angle,
    resolve_winner,
    segment_angle,
)
from luckydraw.wheel.physics import MotionIntegrator

logger = logging.getLogger(__name__)

SettleCallback = Callable[[int], None]
SegmentCallback = Callable[[int], None]


class PhysicsWheel:
    """Spinning wheel state plus its gesture, motion and outcome logic."""

    def __init__(
        self,
        prizes: Sequence[str],
        geometry: WheelGeometry,
        settings: PhysicsSettings | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or PhysicsSettings()
        self.geometry = geometry
        self._prizes: list[str] = []
        self._set_prize_list(prizes)

        # Physics state
        self.rotation = 0.0
        self.angular_velocity = 0.0

        self._phases = PhaseMachine()
        self._tracker = GestureTracker(
            window=self.settings.sample_window,
            clock=clock or time.monotonic,
        )
        self._integrator = MotionIntegrator(
            friction=self.settings.friction,
            min_velocity=self.settings.min_velocity,
            time_step=self.settings.time_step,
        )
        self._rng = rng or random.Random()

        self._settle_callbacks: list[SettleCallback] = []
        self._segment_callbacks: list[SegmentCallback] = []
        self._last_segment = self.winning_index()

        logger.info(f"PhysicsWheel created with {len(self._prizes)} prizes")

    # -- State ---------------------------------------------------------

    @property
    def phase(self) -> WheelPhase:
        return self._phases.phase

    @property
    def is_dragging(self) -> bool:
        return self._phases.phase == WheelPhase.DRAGGING

    @property
    def is_spinning(self) -> bool:
        return self._phases.phase == WheelPhase.SPINNING

    @property
    def prizes(self) -> list[str]:
        return list(self._prizes)

    @property
    def segment_angle(self) -> float:
        return segment_angle(len(self._prizes))

    @property
    def phases(self) -> PhaseMachine:
        """Phase machine, for listeners interested in transitions."""
        return self._phases

    def _set_prize_list(self, prizes: Sequence[str]) -> None:
        if len(prizes) < 2:
            raise ValueError(f"Wheel needs at least 2 prizes, got {len(prizes)}")
        self._prizes = list(prizes)

    def set_prizes(self, prizes: Sequence[str]) -> bool:
        """Replace the prize sequence. Rotation is kept.

        Returns:
            False if the wheel is spinning and the list was not swapped
        """
        if self.is_spinning:
            logger.warning("Ignoring prize update while the wheel is spinning")
            return False

        self._set_prize_list(prizes)
        self._last_segment = self.winning_index()
        logger.info(f"Wheel prizes replaced ({len(self._prizes)} segments)")
        return True

    def set_geometry(self, geometry: WheelGeometry) -> None:
        """Update center and radius after a resize."""
        self.geometry = geometry

    # -- Observers -----------------------------------------------------

    def on_settle(self, callback: SettleCallback) -> Callable[[], None]:
        """Register a callback fired with the winning index on settle.

        Returns:
            Unsubscribe function
        """
        self._settle_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._settle_callbacks:
                self._settle_callbacks.remove(callback)

        return unsubscribe

    def on_segment(self, callback: SegmentCallback) -> Callable[[], None]:
        """Register a callback fired when a new segment passes the pointer."""
        self._segment_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._segment_callbacks:
                self._segment_callbacks.remove(callback)

        return unsubscribe

    # -- Gestures ------------------------------------------------------

    def start(self, x: float, y: float) -> bool:
        """Grab the wheel at a position.

        A second grab during a drag restarts tracking from the new
        position, so the next move measures from there.

        Returns:
            True if a drag started or restarted
        """
        if self.is_spinning:
            return False
        if not self.geometry.contains(x, y):
            return False

        dx, dy = self.geometry.relative(x, y)
        self._tracker.begin(dx, dy)
        self.angular_velocity = 0.0
        if self.is_dragging:
            logger.debug(f"Drag restarted at ({dx:.1f}, {dy:.1f})")
            return True

        self._phases.transition(WheelPhase.DRAGGING)
        logger.debug(f"Drag started at ({dx:.1f}, {dy:.1f})")
        return True

    def move(self, x: float, y: float) -> None:
        """Follow the pointer while dragging."""
        if not self.is_dragging:
            return

        dx, dy = self.geometry.relative(x, y)
        self.rotation += self._tracker.update(dx, dy)

    def end(self) -> None:
        """Release the wheel."""
        if not self.is_dragging:
            return

        mean = self._tracker.finish()
        if mean is None:
            self._phases.transition(WheelPhase.IDLE)
            logger.debug("Released without measurable motion")
            return

        cfg = self.settings
        self.angular_velocity = release_velocity(
            mean, cfg.release_damping, cfg.max_velocity
        )

        if abs(self.angular_velocity) > cfg.spin_threshold:
            self.angular_velocity += self._rng.uniform(
                -cfg.release_jitter, cfg.release_jitter
            )
            self._last_segment = self.winning_index()
            self._phases.transition(WheelPhase.SPINNING)
            logger.info(f"Spin started at {self.angular_velocity:.2f} rad/s")
        else:
            self._phases.transition(WheelPhase.IDLE)
            logger.debug(f"Weak release ({self.angular_velocity:.2f} rad/s), no spin")

    # -- Simulation ----------------------------------------------------

    def tick(self) -> Optional[int]:
        """Advance one fixed simulation step.

        Returns:
            Winning index on the tick the spin settles, otherwise None
        """
        if not self.is_dragging and self._integrator.is_moving(self.angular_velocity):
            self.rotation, self.angular_velocity = self._integrator.step(
                self.rotation, self.angular_velocity
            )
            if self.is_spinning:
                self._check_segment()
            return None

        if self.is_spinning:
            return self._settle()

        return None

    def _check_segment(self) -> None:
        segment = self.winning_index()
        if segment == self._last_segment:
            return
        self._last_segment = segment
        for callback in self._segment_callbacks:
            try:
                callback(segment)
            except Exception as e:
                logger.error(f"Error in segment callback: {e}")

    def _settle(self) -> int:
        self.angular_velocity = 0.0
        self._phases.transition(WheelPhase.IDLE)

        index = self.winning_index()
        logger.info(
            f"Wheel settled at {normalize_angle(self.rotation):.3f} rad: "
            f"#{index} {self._prizes[index]}"
        )

        for callback in list(self._settle_callbacks):
            try:
                callback(index)
            except Exception as e:
                logger.error(f"Error in settle callback: {e}")

        return index

    def cancel_spin(self) -> bool:
        """Stop a spin immediately without resolving a winner.

        Returns:
            True if a spin was cancelled
        """
        if not self.is_spinning:
            return False

        self.angular_velocity = 0.0
        self._phases.transition(WheelPhase.IDLE)
        logger.info("Spin cancelled")
        return True

    # -- Outcome -------------------------------------------------------

    def winning_index(self) -> int:
        """Index of the prize currently under the pointer."""
        return resolve_winner(self.rotation, len(self._prizes))

    def estimate_settle_time(self, velocity: float | None = None) -> float:
        """Seconds a spin at the given (or current) velocity will last."""
        if velocity is None:
            velocity = self.angular_velocity
        return self._integrator.settle_time(velocity)
