"""
Enums for theme resolution and animation reconciliation
"""

from enum import Enum, auto


class ColorSpace(Enum):
    """
    Color-space transform selector

    Values match the wire representation used by stored customizations.
    """
    OFF = "Off"
    RGB = "RGB"
    HSV = "HSV"
    TMI = "TMI"

    @classmethod
    def parse(cls, value) -> "ColorSpace":
        """Lenient parse: unknown or missing values map to OFF"""
        if isinstance(value, ColorSpace):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return cls.OFF


class ScopeKind(Enum):
    """Ownership boundary of a theme document"""
    SITE = "site"
    PROFILE = "profile"
    COMMUNITY = "community"


class OrchestratorState(Enum):
    """Theme orchestrator lifecycle states"""
    UNINITIALIZED = auto()
    LOCAL_CACHE_APPLIED = auto()
    REMOTE_SYNC_PENDING = auto()
    RESOLVED = auto()


class AnimationType(Enum):
    """Motion families for decorative elements"""
    SWIMMING = "swimming"
    FLOATING = "floating"
    RISING = "rising"
    FALLING = "falling"

    @classmethod
    def parse(cls, value) -> "AnimationType":
        if isinstance(value, AnimationType):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.FLOATING


class AnimationPool(Enum):
    """Configuration pools held by the animation store"""
    CHARACTERS = "characters"
    DECORATIONS = "decorations"
    BUBBLES = "bubbles"


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for structured output"""
    CONFIG = auto()
    COLOR = auto()
    THEME = auto()
    CACHE = auto()
    SYNC = auto()
    ANIMATION = auto()
    RENDER = auto()
    EVENT = auto()
    SYSTEM = auto()
    GENERAL = auto()
