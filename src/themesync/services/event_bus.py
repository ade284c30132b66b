"""
Event Bus - Typed publish/subscribe channel

Implements pub-sub pattern:
- Publishers: publish(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn) / unsubscribe(...)
- Middleware: add_middleware(middleware_fn)

Events are processed in arrival order with no coalescing: two rapid
publishes run every matching handler twice.
"""

import inspect
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from themesync.models.events import Event, EventType
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Event bus passed explicitly to the components that publish or subscribe

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering
    - Middleware pipeline (logging, blocking)
    - Async/sync handler support (auto-detected)
    - Fault tolerance (one handler crash doesn't stop others)

    Example:
        bus = EventBus()
        bus.subscribe(EventType.THEME_UPDATED, orchestrator.on_theme_updated)
        await bus.publish(ThemeUpdatedEvent(customization=custom))
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._middleware: List[Callable[[Event], Optional[Event]]] = []
        self._event_history: List[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Subscribe to event type

        Args:
            event_type: Which events to listen for
            handler: Function to call (can be async or sync)
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append(EventHandler(handler, priority, filter_fn))
        handlers.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> bool:
        """
        Remove every registration of handler for event_type

        Returns:
            True if at least one registration was removed
        """
        handlers = self._handlers.get(event_type, [])
        remaining = [h for h in handlers if h.handler != handler]
        removed = len(remaining) != len(handlers)
        self._handlers[event_type] = remaining
        if removed:
            log.debug("Event handler unsubscribed", event_type=event_type.name)
        return removed

    def handler_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, []))

    def add_middleware(self, middleware: Callable[[Event], Optional[Event]]) -> None:
        """
        Add middleware to the event processing pipeline

        Middleware can modify events (return a new event), block them (return None)
        or just observe. Runs in registration order.
        """
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=getattr(middleware, "__name__", repr(middleware)))

    async def publish(self, event: Event) -> None:
        """
        Publish event to all subscribers

        Flow:
        1. Apply middleware (can modify or block event)
        2. Save to event history
        3. Execute matching handlers by priority (high -> low)
        4. Catch and log handler exceptions
        """
        for middleware in self._middleware:
            processed_event = middleware(event)
            if processed_event is None:
                return
            event = processed_event

        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

        handlers = list(self._handlers.get(event.type, []))
        if not handlers:
            log.debug("No handlers for event", event_type=event.type.name)
            return

        for handler_entry in handlers:
            if handler_entry.filter_fn and not handler_entry.filter_fn(event):
                continue

            try:
                if inspect.iscoroutinefunction(handler_entry.handler):
                    await handler_entry.handler(event)
                else:
                    handler_entry.handler(event)
            except Exception as e:
                log.error(
                    f"Event handler failed: {getattr(handler_entry.handler, '__name__', 'handler')} "
                    f"for {event.type.name}",
                    exception=e
                )

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Recent events from history (newest last)"""
        return self._event_history[-limit:]

    def clear_history(self) -> None:
        self._event_history.clear()
