"""
Composition root for the lucky draw.

Owns the prize store, the draw history, the physics wheel and the
event bus, and wires them together:

    prize store change  -> wheel.set_prizes (deferred while spinning)
    wheel settle        -> history.record -> SPIN_SETTLED event
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional
import logging
import random

from luckydraw.config.settings import Settings, get_settings
from luckydraw.core.events import Event, EventBus, EventType, settled_event
from luckydraw.core.state import WheelPhase
from luckydraw.prizes.history import DrawHistory, DrawRecord
from luckydraw.prizes.store import PrizeStore
from luckydraw.wheel.engine import PhysicsWheel
from luckydraw.wheel.gesture import WheelGeometry

logger = logging.getLogger(__name__)


@dataclass
class DrawResult:
    """Outcome of one settled spin."""

    index: int
    prize: str
    record: DrawRecord


class LuckyDrawApp:
    """Lucky draw session: one wheel, its prizes and its history."""

    def __init__(
        self,
        settings: Settings | None = None,
        prizes: Optional[Iterable[str]] = None,
        geometry: WheelGeometry | None = None,
        event_bus: EventBus | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.event_bus = event_bus or EventBus()

        display = self.settings.display
        geometry = geometry or WheelGeometry(
            center_x=display.wheel_center_x,
            center_y=display.wheel_center_y,
            radius=display.wheel_radius,
        )

        self.prize_store = PrizeStore(
            prizes,
            min_prizes=self.settings.min_prizes,
            max_prizes=self.settings.max_prizes,
        )
        self.history = DrawHistory(limit=self.settings.history_limit)
        self.wheel = PhysicsWheel(
            self.prize_store.names,
            geometry,
            settings=self.settings.physics,
            clock=clock,
            rng=rng,
        )

        self.last_result: Optional[DrawResult] = None
        self._settled_result: Optional[DrawResult] = None
        self._pending_prizes: Optional[list[str]] = None

        # The names the wheel is spinning with, frozen for the spin
        self._spin_prizes = self.wheel.prizes

        self.prize_store.add_listener(self._on_prizes_changed)
        self.wheel.on_settle(self._on_settle)
        self.wheel.on_segment(self._on_segment)
        self.wheel.phases.add_listener(self._on_phase_changed)

        logger.info("LuckyDrawApp initialized")

    # -- Gesture pass-through -----------------------------------------

    def press(self, x: float, y: float) -> bool:
        return self.wheel.start(x, y)

    def drag(self, x: float, y: float) -> None:
        self.wheel.move(x, y)

    def release(self) -> None:
        self.wheel.end()

    def tick(self) -> Optional[DrawResult]:
        """Advance the wheel one frame.

        Returns:
            The draw result on the frame the wheel settles
        """
        self.wheel.tick()
        if self._pending_prizes is not None and not self.wheel.is_spinning:
            self._apply_prizes(self._pending_prizes)
        result = self._settled_result
        self._settled_result = None
        return result

    def cancel_spin(self) -> bool:
        if not self.wheel.cancel_spin():
            return False
        self.event_bus.emit(Event(EventType.SPIN_CANCELLED, source="wheel"))
        return True

    # -- History -------------------------------------------------------

    def clear_history(self) -> None:
        self.history.clear()
        self.event_bus.emit(Event(EventType.HISTORY_CLEARED, source="history"))

    # -- Wiring --------------------------------------------------------

    def _on_prizes_changed(self, names: list[str]) -> None:
        if self.wheel.is_spinning:
            logger.info("Prize change deferred until the wheel settles")
            self._pending_prizes = names
            return
        self._apply_prizes(names)

    def _apply_prizes(self, names: list[str]) -> None:
        self._pending_prizes = None
        self.wheel.set_prizes(names)
        self._spin_prizes = self.wheel.prizes
        self.event_bus.emit(Event(
            EventType.PRIZES_CHANGED,
            data={"prizes": list(names)},
            source="prizes",
        ))

    def _on_phase_changed(self, old: WheelPhase, new: WheelPhase) -> None:
        if new == WheelPhase.DRAGGING:
            self.event_bus.emit(Event(EventType.DRAG_START, source="wheel"))
        elif old == WheelPhase.DRAGGING:
            self.event_bus.emit(Event(
                EventType.DRAG_END,
                data={"velocity": self.wheel.angular_velocity},
                source="wheel",
            ))
            if new == WheelPhase.SPINNING:
                self._spin_prizes = self.wheel.prizes
                self.event_bus.emit(Event(
                    EventType.SPIN_START,
                    data={"velocity": self.wheel.angular_velocity},
                    source="wheel",
                ))

    def _on_segment(self, index: int) -> None:
        self.event_bus.emit(Event(
            EventType.SEGMENT_TICK, data={"index": index}, source="wheel"
        ))

    def _on_settle(self, index: int) -> None:
        prize = self._spin_prizes[index]
        color = self.prize_store.color_for(index)
        record = self.history.record(prize, color)

        self.last_result = DrawResult(index=index, prize=prize, record=record)
        self._settled_result = self.last_result
        self.event_bus.emit(settled_event(index, prize, color))
