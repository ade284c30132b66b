"""
Preset Manager - Processes theme preset definitions

Processes preset data from ConfigManager (does NOT load files).
Single responsibility: parse and provide access to theme presets.
"""

from typing import Dict, List, Optional

from themesync.errors import UnknownPresetError
from themesync.models.preset import ThemePreset
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)


class PresetManager:
    """
    Theme preset catalog (data processor only)

    Responsibilities:
    - Build ThemePreset objects (preset_defaults + per-preset tokens)
    - Resolve aliases ('ocean' -> 'ocean-turtle')
    - Fall back to the default preset for unknown keys

    Example:
        presets = PresetManager(data, default_key="ocean-turtle")
        ocean = presets.get("ocean")
        ocean.get("primaryColor")  # "#006064"
    """

    def __init__(self, data: dict, default_key: str = "ocean-turtle"):
        """
        Args:
            data: Config dict with 'presets', 'preset_defaults', 'preset_aliases', 'preset_order'
            default_key: Preset used when a lookup misses
        """
        self.data = data
        self._presets: Dict[str, ThemePreset] = {}
        self._aliases: Dict[str, str] = {}
        self._process_data()
        self.default_key = self.resolve_key(default_key) or next(iter(self._presets), default_key)

    def _process_data(self):
        shared = self.data.get("preset_defaults") or {}
        for key, preset_data in (self.data.get("presets") or {}).items():
            if not isinstance(preset_data, dict):
                log.warn("Skipping malformed preset", preset=key)
                continue
            tokens = dict(shared)
            tokens.update(preset_data.get("tokens") or {})
            self._presets[key] = ThemePreset(key=key, name=preset_data.get("name", key), tokens=tokens)

        self._aliases = {
            alias: target
            for alias, target in (self.data.get("preset_aliases") or {}).items()
            if target in self._presets
        }
        log.debug("Presets processed", count=len(self._presets), aliases=len(self._aliases))

    @property
    def preset_order(self) -> List[str]:
        order = self.data.get("preset_order") or list(self._presets)
        return [key for key in order if key in self._presets]

    @property
    def default(self) -> ThemePreset:
        return self._presets[self.default_key]

    def resolve_key(self, key: Optional[str]) -> Optional[str]:
        """Canonical preset key for a key or alias; None when unknown"""
        if not key:
            return None
        if key in self._presets:
            return key
        return self._aliases.get(key)

    def get(self, key: Optional[str]) -> ThemePreset:
        """Preset by key or alias; default preset when unknown"""
        resolved = self.resolve_key(key)
        if resolved is None:
            if key:
                log.warn("Unknown preset, using default", preset=key, default=self.default_key)
            return self.default
        return self._presets[resolved]

    def require(self, key: str) -> ThemePreset:
        """Strict lookup for callers that must not silently fall back"""
        resolved = self.resolve_key(key)
        if resolved is None:
            raise UnknownPresetError(key, self.preset_order)
        return self._presets[resolved]
