"""Domain models for theme resolution and animation reconciliation"""

from themesync.models.enums import (
    ColorSpace,
    ScopeKind,
    OrchestratorState,
    AnimationType,
    AnimationPool,
    LogLevel,
    LogCategory,
)
from themesync.models.customization import Customization, Fingerprint
from themesync.models.tokens import StyleTokenSet, REQUIRED_TOKENS
from themesync.models.scope import ThemeScope, Identity
from themesync.models.animation import (
    SizeRange,
    Position,
    AnimKind,
    BubbleKind,
    AnimationConfig,
)
from themesync.models.cache_entry import CacheEntry

__all__ = [
    "ColorSpace",
    "ScopeKind",
    "OrchestratorState",
    "AnimationType",
    "AnimationPool",
    "LogLevel",
    "LogCategory",
    "Customization",
    "Fingerprint",
    "StyleTokenSet",
    "REQUIRED_TOKENS",
    "ThemeScope",
    "Identity",
    "SizeRange",
    "Position",
    "AnimKind",
    "BubbleKind",
    "AnimationConfig",
    "CacheEntry",
]
