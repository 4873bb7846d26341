import pytest

from luckydraw.core.events import Event, EventBus, EventType, settled_event, tick_event


def test_emit_reaches_subscribers():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.SPIN_SETTLED, received.append)
    bus.subscribe(EventType.SPIN_START, lambda e: pytest.fail("wrong type"))

    event = settled_event(2, "Prize", "#f59e0b")
    bus.emit(event)

    assert received == [event]
    assert event.data == {"index": 2, "prize": "Prize", "color": "#f59e0b"}


def test_unsubscribe():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.TICK, received.append)
    unsubscribe()
    bus.emit(tick_event(0.016, 1))
    assert received == []


def test_global_handlers_see_everything():
    bus = EventBus()
    received = []
    bus.subscribe_all(lambda e: received.append(e.type))
    bus.emit(Event(EventType.DRAG_START))
    bus.emit(Event("custom"))
    assert received == [EventType.DRAG_START, "custom"]


def test_handler_errors_do_not_stop_dispatch():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("handler failure")

    bus.subscribe(EventType.TICK, broken)
    bus.subscribe(EventType.TICK, received.append)
    bus.emit(tick_event(0.016, 1))
    assert len(received) == 1


def test_history_is_bounded():
    bus = EventBus(history_limit=3)
    for frame in range(5):
        bus.emit(tick_event(0.016, frame))
    bus.emit(Event(EventType.SHUTDOWN))

    history = bus.get_history(limit=10)
    assert len(history) == 3
    assert [e.data.get("frame") for e in bus.get_history(EventType.TICK)] == [3, 4]

    bus.clear_history()
    assert bus.get_history() == []


def test_sync_emit_skips_async_handlers():
    bus = EventBus()
    called = []

    async def handler(event):
        called.append(event)

    bus.subscribe(EventType.TICK, handler)
    bus.emit(tick_event(0.016, 1))
    assert called == []


@pytest.mark.asyncio
async def test_emit_async_awaits_both_kinds():
    bus = EventBus()
    called = []

    async def async_handler(event):
        called.append("async")

    bus.subscribe(EventType.SPIN_SETTLED, async_handler)
    bus.subscribe(EventType.SPIN_SETTLED, lambda e: called.append("sync"))
    await bus.emit_async(settled_event(0, "A", "#3b82f6"))
    assert sorted(called) == ["async", "sync"]


@pytest.mark.asyncio
async def test_queued_events_are_processed():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.PRIZES_CHANGED, received.append)

    bus.queue_event(Event(EventType.PRIZES_CHANGED, data={"prizes": ["a", "b"]}))
    assert received == []
    await bus.process_queue()
    assert received[0].data["prizes"] == ["a", "b"]
    assert bus.get_history(EventType.PRIZES_CHANGED)
