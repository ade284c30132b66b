"""Typed engine settings built from the 'settings' config section"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from themesync.models.customization import Customization
from themesync.models.enums import ScopeKind


@dataclass
class CacheSettings:
    version: int = 3
    max_age_seconds: float = 3600.0
    scope_marker_ttl_seconds: float = 10.0
    snapshot_path: Optional[str] = None


@dataclass
class AnimationSettings:
    base_speed: float = 15.0
    bubble_base_min: float = 15.0
    bubble_base_max: float = 25.0
    mobile: bool = False


@dataclass
class RemoteSettings:
    base_url: str = "http://localhost:3001/api"
    timeout_seconds: float = 10.0
    paths: Dict[str, str] = field(default_factory=lambda: {
        ScopeKind.SITE.value: "/users/{id}/site-theme",
        ScopeKind.PROFILE.value: "/users/{id}/profile-theme",
        ScopeKind.COMMUNITY.value: "/communities/{id}/theme",
    })

    def path_for(self, kind: ScopeKind, scope_id: str) -> str:
        return self.paths[kind.value].format(id=scope_id)


@dataclass
class ThemeSettings:
    """
    Engine settings

    Example:
        settings = ThemeSettings.from_dict(config_data.get("settings", {}))
        settings.cache.max_age_seconds  # 3600
    """
    default_preset: str = "ocean-turtle"
    cache: CacheSettings = field(default_factory=CacheSettings)
    animation: AnimationSettings = field(default_factory=AnimationSettings)
    remote: RemoteSettings = field(default_factory=RemoteSettings)
    default_customization: Customization = field(default_factory=Customization)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThemeSettings":
        data = data or {}
        remote = dict(data.get("remote") or {})
        paths = RemoteSettings().paths
        paths.update(remote.pop("paths", None) or {})
        return cls(
            default_preset=data.get("default_preset", "ocean-turtle"),
            cache=CacheSettings(**(data.get("cache") or {})),
            animation=AnimationSettings(**(data.get("animation") or {})),
            remote=RemoteSettings(paths=paths, **remote),
            default_customization=Customization.from_dict(data.get("default_customization")),
        )
