"""Configuration loading and catalogs"""

from themesync.managers.config_manager import ConfigManager
from themesync.managers.preset_manager import PresetManager
from themesync.managers.animation_preset_manager import AnimationPresetManager
from themesync.managers.settings import ThemeSettings

__all__ = ["ConfigManager", "PresetManager", "AnimationPresetManager", "ThemeSettings"]
