from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers"""
    EDITOR = auto()         # External theme editing surface
    SESSION = auto()        # Auth/session layer
    ORCHESTRATOR = auto()   # Theme orchestrator
    APPLICATION = auto()    # Generic application events
