"""
Event system for theme synchronization

Typed events delivered through the EventBus channel.
"""

from themesync.models.events.types import EventType
from themesync.models.events.base import Event
from themesync.models.events.sources import EventSource
from themesync.models.events.theme_events import (
    ThemeUpdatedEvent,
    IdentityChangedEvent,
    ThemeResolvedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",
    "ThemeUpdatedEvent",
    "IdentityChangedEvent",
    "ThemeResolvedEvent",
]
