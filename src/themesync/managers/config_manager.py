"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and initializes sub-managers.
"""

import yaml
from pathlib import Path
from typing import Dict, List

from themesync.managers.animation_preset_manager import AnimationPresetManager
from themesync.managers.preset_manager import PresetManager
from themesync.managers.settings import ThemeSettings
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

# Package root (themesync/); config paths are relative to it
PACKAGE_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes the include: directive to load modular YAML files.
    Initializes sub-managers (PresetManager, AnimationPresetManager) and ThemeSettings.

    Example:
        config = ConfigManager()
        config.load()

        ocean = config.preset_manager.get("ocean")
        defaults = config.animation_preset_manager.get_theme_animations("ocean-turtle")
        ttl = config.settings.cache.max_age_seconds
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Args:
            config_path: Path to main config.yaml (relative to the package, or absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}

        # Sub-managers (initialized in load())
        self.preset_manager: PresetManager
        self.animation_preset_manager: AnimationPresetManager
        self.settings: ThemeSettings

    def load(self) -> Dict:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has an 'include:' list, load and merge those files
        3. Otherwise treat it as a monolithic config
        4. Fall back to factory_defaults.yaml on failure
        5. Initialize sub-managers

        Returns:
            Merged config data dict
        """
        full_path = PACKAGE_DIR / self.config_path
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if "include" in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config["include"], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            with open(PACKAGE_DIR / self.factory_defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        self._initialize_managers()
        return self.data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from an include list

        Args:
            include_list: Filenames to load (e.g. ["theme.yaml", "presets.yaml"])
            config_dir: Directory containing the config files

        Returns:
            Merged config dict
        """
        merged = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    def _initialize_managers(self):
        """
        Initialize sub-managers with loaded config data

        A malformed section degrades to defaults instead of aborting startup.
        """
        try:
            self.settings = ThemeSettings.from_dict(self.data.get("settings") or {})
        except Exception as ex:
            log.error("Invalid settings section, using defaults", error=str(ex))
            self.settings = ThemeSettings()

        self.preset_manager = PresetManager(self.data, default_key=self.settings.default_preset)

        try:
            self.animation_preset_manager = AnimationPresetManager(
                self.data, default_key=self.preset_manager.default_key
            )
        except Exception as ex:
            log.error("Failed to initialize AnimationPresetManager", error=str(ex))
            self.animation_preset_manager = AnimationPresetManager({})

        log.info(
            "Configuration ready",
            presets=len(self.preset_manager.preset_order),
            default_preset=self.preset_manager.default_key,
        )
