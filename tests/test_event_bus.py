"""
Event bus tests

Publishing, priority ordering, filtering, middleware and fault tolerance.
"""

import pytest

from themesync.models.events import EventSource, EventType, IdentityChangedEvent, ThemeUpdatedEvent
from themesync.models.scope import Identity
from themesync.services.event_bus import EventBus
from themesync.services.middleware import log_middleware


@pytest.mark.asyncio
async def test_basic_pub_sub():
    bus = EventBus()
    received = []

    async def handler(event):
        received.append(event)

    bus.subscribe(EventType.THEME_UPDATED, handler)
    await bus.publish(ThemeUpdatedEvent(customization={"primaryColor": "#006064"}))

    assert len(received) == 1
    assert received[0].customization.primary_color == "#006064"
    assert received[0].source is EventSource.EDITOR


@pytest.mark.asyncio
async def test_priority_order():
    bus = EventBus()
    order = []

    bus.subscribe(EventType.IDENTITY_CHANGED, lambda e: order.append("low"), priority=0)
    bus.subscribe(EventType.IDENTITY_CHANGED, lambda e: order.append("high"), priority=10)

    await bus.publish(IdentityChangedEvent(identity=Identity("42")))

    assert order == ["high", "low"]


@pytest.mark.asyncio
async def test_filtering():
    bus = EventBus()
    signed_in = []

    bus.subscribe(
        EventType.IDENTITY_CHANGED,
        signed_in.append,
        filter_fn=lambda e: e.identity is not None,
    )
    await bus.publish(IdentityChangedEvent(identity=Identity("42")))
    await bus.publish(IdentityChangedEvent(identity=None))

    assert len(signed_in) == 1


@pytest.mark.asyncio
async def test_middleware_blocking():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.IDENTITY_CHANGED, received.append)
    bus.add_middleware(log_middleware)
    bus.add_middleware(lambda e: None if e.identity is None else e)

    await bus.publish(IdentityChangedEvent(identity=None))
    await bus.publish(IdentityChangedEvent(identity=Identity("42")))

    assert len(received) == 1
    assert len(bus.get_event_history()) == 1


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    received = []

    async def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.THEME_UPDATED, broken, priority=5)
    bus.subscribe(EventType.THEME_UPDATED, received.append)

    await bus.publish(ThemeUpdatedEvent(customization={}))

    assert len(received) == 1


@pytest.mark.asyncio
async def test_every_publish_is_delivered():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.THEME_UPDATED, received.append)

    await bus.publish(ThemeUpdatedEvent(customization={"primaryColor": "#111111"}))
    await bus.publish(ThemeUpdatedEvent(customization={"primaryColor": "#222222"}))

    assert [e.customization.primary_color for e in received] == ["#111111", "#222222"]


@pytest.mark.asyncio
async def test_unsubscribe():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.THEME_UPDATED, received.append)

    assert bus.unsubscribe(EventType.THEME_UPDATED, received.append) is True
    assert bus.unsubscribe(EventType.THEME_UPDATED, received.append) is False

    await bus.publish(ThemeUpdatedEvent(customization={}))
    assert received == []


@pytest.mark.asyncio
async def test_history_is_bounded():
    bus = EventBus(history_limit=3)
    for i in range(5):
        await bus.publish(IdentityChangedEvent(identity=Identity(str(i))))

    history = bus.get_event_history(limit=10)
    assert [e.identity.user_id for e in history] == ["2", "3", "4"]
