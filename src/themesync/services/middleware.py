"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from themesync.models.events import Event
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = event.source.name if event.source is not None else "-"
    data = event.to_data()
    if "customization" in data:
        data_str = f"fingerprint={data['customization'].fingerprint.to_dict()}"
    else:
        data_str = str(data)

    log.debug(f"Event: {event.type.name} from {source_str} | {data_str}")
    return event
