"""Cache entry - one resolved theme for one scope"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from themesync.models.animation import AnimationConfig
from themesync.models.customization import Customization, Fingerprint
from themesync.models.tokens import StyleTokenSet
from themesync.utils.serialization import as_bool, as_text


@dataclass(frozen=True)
class CacheEntry:
    """
    Resolution for a scope

    computed_colors is usable without recomputation only while its fingerprint
    matches the latest known customization (see ResolutionCache.is_fresh).
    """
    base_colors: Customization
    computed_colors: Optional[StyleTokenSet] = None
    animations: Optional[AnimationConfig] = None
    base_theme: Optional[str] = None
    animations_enabled: bool = True

    def to_record(self) -> Dict[str, Any]:
        """Snapshot record body (version/timestamp are added by the snapshot store)"""
        computed = None
        if self.computed_colors is not None:
            computed = self.computed_colors.to_dict()
        fingerprint = self.computed_colors.fingerprint if self.computed_colors is not None else None
        return {
            "baseColors": self.base_colors.to_dict(),
            "computedColors": computed,
            "computedFingerprint": fingerprint.to_dict() if fingerprint else None,
            "settings": {
                "baseTheme": self.base_theme,
                "animationsEnabled": self.animations_enabled,
            },
            "animations": self.animations.to_dict() if self.animations else None,
        }

    @classmethod
    def from_record(cls, record: Any) -> Optional["CacheEntry"]:
        """Rebuild from a snapshot record; None when the record has no base colors"""
        if not isinstance(record, dict) or not isinstance(record.get("baseColors"), dict):
            return None
        settings = record.get("settings") if isinstance(record.get("settings"), dict) else {}
        enabled = as_bool(settings.get("animationsEnabled"))
        return cls(
            base_colors=Customization.from_dict(record["baseColors"]),
            computed_colors=StyleTokenSet.from_dict(
                record.get("computedColors"),
                Fingerprint.from_dict(record.get("computedFingerprint")),
            ),
            animations=AnimationConfig.from_dict(record.get("animations")),
            base_theme=as_text(settings.get("baseTheme")),
            animations_enabled=True if enabled is None else enabled,
        )
