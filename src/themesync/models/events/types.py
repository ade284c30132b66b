from enum import Enum, auto


class EventType(Enum):
    # Editing surface
    THEME_UPDATED = auto()

    # Session
    IDENTITY_CHANGED = auto()

    # Orchestrator output
    THEME_RESOLVED = auto()
