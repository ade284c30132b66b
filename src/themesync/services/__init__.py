"""Engine services"""

from themesync.services.event_bus import EventBus
from themesync.services.snapshot_store import SnapshotStore
from themesync.services.resolution_cache import ResolutionCache
from themesync.services.style_registry import StyleRegistry
from themesync.services.animation_config_store import AnimationConfigStore, merge_animation_config
from themesync.services.theme_store import ThemeStore, HttpThemeStore, InMemoryThemeStore
from themesync.services.theme_orchestrator import ThemeOrchestrator
from themesync.services.service_container import ServiceContainer, build_services

__all__ = [
    "EventBus",
    "SnapshotStore",
    "ResolutionCache",
    "StyleRegistry",
    "AnimationConfigStore",
    "merge_animation_config",
    "ThemeStore",
    "HttpThemeStore",
    "InMemoryThemeStore",
    "ThemeOrchestrator",
    "ServiceContainer",
    "build_services",
]
