"""Service Container - explicit wiring for every engine service"""

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from themesync.engine.animation_reconciler import AnimationReconciler
from themesync.engine.theme_composer import ThemeComposer
from themesync.managers.config_manager import ConfigManager
from themesync.rendering.surface import IRenderSurface
from themesync.rendering.virtual_surface import VirtualSurface
from themesync.services.animation_config_store import AnimationConfigStore
from themesync.services.event_bus import EventBus
from themesync.services.middleware import log_middleware
from themesync.services.resolution_cache import ResolutionCache
from themesync.services.snapshot_store import SnapshotStore
from themesync.services.style_registry import StyleRegistry
from themesync.services.theme_orchestrator import ThemeOrchestrator
from themesync.services.theme_store import HttpThemeStore, ThemeStore
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


@dataclass
class ServiceContainer:
    """
    Aggregates the engine's services so callers never reach into each other.

    Services included:
    - orchestrator: resolution lifecycle, the only writer of registry and animation store
    - registry: current StyleTokenSet for the rendering layer
    - animation_store: desired animation population, observed by the reconciler
    - reconciler: owns the live decorative elements on the surface
    - cache / store: local tiers and the remote authoritative tier
    - event_bus: update, identity and resolved channels

    Usage:
        services = build_services()
        services.orchestrator.mount()
        services.orchestrator.start()
        ...
        await services.shutdown()
    """

    config_manager: ConfigManager
    event_bus: EventBus
    composer: ThemeComposer
    cache: ResolutionCache
    store: ThemeStore
    registry: StyleRegistry
    animation_store: AnimationConfigStore
    reconciler: AnimationReconciler
    orchestrator: ThemeOrchestrator

    async def shutdown(self) -> None:
        """Unsubscribe, clear the surface and close the remote client"""
        self.orchestrator.shutdown()
        self.reconciler.teardown()
        aclose = getattr(self.store, "aclose", None)
        if aclose is not None:
            await aclose()
        log.info("Services shut down")


def build_services(
    config_manager: Optional[ConfigManager] = None,
    surface: Optional[IRenderSurface] = None,
    store: Optional[ThemeStore] = None,
    rng: Optional[random.Random] = None,
) -> ServiceContainer:
    """
    Wire the engine from configuration

    Args:
        config_manager: Loaded ConfigManager (loaded from package config when None)
        surface: Render surface for animations (VirtualSurface when None)
        store: Remote tier (HttpThemeStore from settings when None)
        rng: Random source for element placement
    """
    if config_manager is None:
        config_manager = ConfigManager()
        config_manager.load()
    settings = config_manager.settings

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    snapshot = SnapshotStore(
        path=Path(settings.cache.snapshot_path) if settings.cache.snapshot_path else None,
        version=settings.cache.version,
        max_age_seconds=settings.cache.max_age_seconds,
    )
    cache = ResolutionCache(snapshot, scope_marker_ttl_seconds=settings.cache.scope_marker_ttl_seconds)
    store = store or HttpThemeStore(settings.remote)

    composer = ThemeComposer(config_manager.preset_manager.default)
    registry = StyleRegistry()
    animation_store = AnimationConfigStore()
    reconciler = AnimationReconciler(
        surface or VirtualSurface(),
        config_manager.animation_preset_manager.assets,
        settings=settings.animation,
        rng=rng,
    )
    animation_store.subscribe(reconciler.reconcile)

    orchestrator = ThemeOrchestrator(
        composer=composer,
        cache=cache,
        store=store,
        registry=registry,
        animation_store=animation_store,
        bus=event_bus,
        presets=config_manager.preset_manager,
        animation_presets=config_manager.animation_preset_manager,
        settings=settings,
    )

    log.info("Services built", default_preset=config_manager.preset_manager.default_key)
    return ServiceContainer(
        config_manager=config_manager,
        event_bus=event_bus,
        composer=composer,
        cache=cache,
        store=store,
        registry=registry,
        animation_store=animation_store,
        reconciler=reconciler,
        orchestrator=orchestrator,
    )
