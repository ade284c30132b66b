import random

import pytest

from themesync.engine.theme_composer import ThemeComposer
from themesync.managers.config_manager import ConfigManager
from themesync.models.enums import LogLevel
from themesync.rendering.virtual_surface import VirtualSurface
from themesync.services.animation_config_store import AnimationConfigStore
from themesync.services.event_bus import EventBus
from themesync.services.resolution_cache import ResolutionCache
from themesync.services.snapshot_store import SnapshotStore
from themesync.services.style_registry import StyleRegistry
from themesync.utils.logger import configure_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep test output readable; only errors are printed."""
    configure_logger(LogLevel.ERROR, use_colors=False)
    yield
    configure_logger(LogLevel.INFO, use_colors=True)


class FakeClock:
    """Manually advanced time source"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(scope="session")
def config_manager():
    config = ConfigManager()
    config.load()
    return config


@pytest.fixture
def presets(config_manager):
    return config_manager.preset_manager


@pytest.fixture
def animation_presets(config_manager):
    return config_manager.animation_preset_manager


@pytest.fixture
def settings(config_manager):
    return config_manager.settings


@pytest.fixture
def ocean(presets):
    return presets.get("ocean")


@pytest.fixture
def composer(presets):
    return ThemeComposer(presets.default)


@pytest.fixture
def snapshot(clock):
    return SnapshotStore(version=3, max_age_seconds=3600, clock=clock)


@pytest.fixture
def cache(snapshot, clock):
    return ResolutionCache(snapshot, scope_marker_ttl_seconds=10, clock=clock)


@pytest.fixture
def registry():
    return StyleRegistry()


@pytest.fixture
def animation_store():
    return AnimationConfigStore()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def surface():
    return VirtualSurface()


@pytest.fixture
def rng():
    return random.Random(1234)
