import random

import pytest

from luckydraw.app import LuckyDrawApp
from luckydraw.core.events import EventType
from luckydraw.errors import PrizeValidationError
from luckydraw.prizes.palette import color_for
from luckydraw.prizes.store import DEFAULT_PRIZES
from luckydraw.wheel.outcome import resolve_winner

from conftest import flick


@pytest.fixture
def app(settings, geometry, clock):
    return LuckyDrawApp(
        settings=settings,
        prizes=["A", "B", "C", "D", "E", "F"],
        geometry=geometry,
        clock=clock,
        rng=random.Random(11),
    )


@pytest.fixture
def events(app):
    received = []
    app.event_bus.subscribe_all(received.append)
    return received


def run_until_result(app, max_ticks=5000):
    for _ in range(max_ticks):
        result = app.tick()
        if result is not None:
            return result
    return None


def types(events):
    return [e.type for e in events if e.type != EventType.SEGMENT_TICK]


def test_settle_records_history(app, clock):
    flick(app.wheel, clock, rate=12.0)
    app.release()

    result = run_until_result(app)

    assert result is not None
    assert result.index == resolve_winner(app.wheel.rotation, 6)
    assert result.prize == "ABCDEF"[result.index]
    assert app.last_result == result
    assert len(app.history) == 1
    assert app.history.latest.name == result.prize
    assert app.history.latest.color == color_for(result.index)


def test_only_one_result_per_spin(app, clock):
    flick(app.wheel, clock, rate=12.0)
    app.release()
    run_until_result(app)
    assert run_until_result(app, max_ticks=200) is None
    assert len(app.history) == 1


def test_spin_event_sequence(app, clock, events):
    flick(app.wheel, clock, rate=12.0)
    app.release()
    run_until_result(app)

    assert types(events) == [
        EventType.DRAG_START,
        EventType.DRAG_END,
        EventType.SPIN_START,
        EventType.SPIN_SETTLED,
    ]
    settled = events[-1]
    assert settled.data["prize"] == app.last_result.prize
    assert settled.data["color"] == color_for(app.last_result.index)
    assert any(e.type == EventType.SEGMENT_TICK for e in events)


def test_weak_release_records_nothing(app, clock, events):
    flick(app.wheel, clock, rate=2.0)
    app.release()
    assert run_until_result(app, max_ticks=1000) is None
    assert len(app.history) == 0
    assert types(events) == [EventType.DRAG_START, EventType.DRAG_END]


def test_second_press_keeps_one_drag(app, geometry, events):
    assert app.press(geometry.center_x + 50, geometry.center_y)
    assert app.press(geometry.center_x - 50, geometry.center_y)
    app.release()
    assert types(events) == [EventType.DRAG_START, EventType.DRAG_END]


def test_press_outside_the_wheel(app, geometry):
    assert not app.press(geometry.center_x + geometry.radius * 2, geometry.center_y)
    assert not app.wheel.is_dragging


def test_prize_edits_reach_the_wheel(app, events):
    app.prize_store.replace(["X", "Y", "Z"])
    assert app.wheel.prizes == ["X", "Y", "Z"]
    assert events[-1].type == EventType.PRIZES_CHANGED
    assert events[-1].data["prizes"] == ["X", "Y", "Z"]


def test_invalid_prize_edit_leaves_wheel_alone(app):
    with pytest.raises(PrizeValidationError):
        app.prize_store.replace(["only"])
    assert app.wheel.prizes == ["A", "B", "C", "D", "E", "F"]


def test_prize_edit_during_spin_waits_for_settle(app, clock):
    flick(app.wheel, clock, rate=12.0)
    app.release()
    assert app.wheel.is_spinning

    app.prize_store.replace(["X", "Y"])
    assert app.wheel.prizes == ["A", "B", "C", "D", "E", "F"]

    result = run_until_result(app)
    assert result.prize in "ABCDEF"
    assert app.wheel.prizes == ["X", "Y"]


def test_cancel_spin(app, clock, events):
    flick(app.wheel, clock, rate=12.0)
    app.release()

    assert app.cancel_spin()
    assert not app.wheel.is_spinning
    assert events[-1].type == EventType.SPIN_CANCELLED
    assert run_until_result(app, max_ticks=100) is None
    assert len(app.history) == 0
    assert not app.cancel_spin()


def test_clear_history(app, clock, events):
    flick(app.wheel, clock, rate=12.0)
    app.release()
    run_until_result(app)

    app.clear_history()
    assert len(app.history) == 0
    assert events[-1].type == EventType.HISTORY_CLEARED


def test_default_prizes_and_geometry(settings):
    app = LuckyDrawApp(settings=settings)
    assert len(app.prize_store) == 6
    assert app.wheel.geometry.radius == settings.display.wheel_radius


def test_headless_run_prints_a_prize(settings, capsys):
    from luckydraw.main import run_headless

    run_headless(settings)
    printed = capsys.readouterr().out.strip()
    assert printed in DEFAULT_PRIZES
