"""
Animation Preset Manager - Per-preset default animation configurations

Parses 'theme_animations' and the 'assets' list from config data.
"""

from typing import Dict, FrozenSet

from themesync.models.animation import AnimationConfig
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)


class AnimationPresetManager:
    """
    Default AnimationConfig per preset plus the set of drawable kind ids

    Example:
        anim = AnimationPresetManager(data, default_key="ocean-turtle")
        anim.get_theme_animations("mountain-eagle").characters[0].id  # "eagle"
        anim.assets  # frozenset({"turtle", "eagle", ...})
    """

    def __init__(self, data: dict, default_key: str = "ocean-turtle"):
        self.default_key = default_key
        self._configs: Dict[str, AnimationConfig] = {}
        self.assets: FrozenSet[str] = frozenset(data.get("assets") or [])
        self._process_data(data)

    def _process_data(self, data: dict):
        for key, section in (data.get("theme_animations") or {}).items():
            config = AnimationConfig.from_dict(section)
            if config is None:
                log.warn("Skipping malformed animation preset", preset=key)
                continue
            self._configs[key] = config
        log.debug("Animation presets processed", count=len(self._configs), assets=len(self.assets))

    @property
    def preset_keys(self):
        return list(self._configs)

    def get_theme_animations(self, preset_key: str) -> AnimationConfig:
        """Defaults for a preset; default preset's config, then empty, when missing"""
        config = self._configs.get(preset_key)
        if config is not None:
            return config
        return self._configs.get(self.default_key, AnimationConfig.empty())
