"""
Animation Configuration Store

Holds the live AnimationConfig and the master enable flag, and notifies
listeners (the reconciler) on every change. Also provides
merge_animation_config(), the only place partial persisted overrides are
combined with full preset defaults.
"""

from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from themesync.models.animation import AnimationConfig, AnimKind, BubbleKind, SizeRange
from themesync.utils.logger import get_logger, LogCategory
from themesync.utils.serialization import as_bool, as_number

log = get_logger().for_category(LogCategory.ANIMATION)

Listener = Callable[[Optional[AnimationConfig], bool], None]


def _merge_kind(default: AnimKind, override: Dict[str, Any]) -> AnimKind:
    """Override wins per field when present and valid; everything else from default"""
    changes: Dict[str, Any] = {}

    enabled = as_bool(override.get("enabled"))
    if enabled is not None:
        changes["enabled"] = enabled

    speed = as_number(override.get("speed"))
    if speed is not None and speed > 0:
        changes["speed"] = speed

    count = as_number(override.get("count"))
    if count is not None and count >= 0:
        changes["count"] = int(count)

    size = SizeRange.from_dict(override.get("size"))
    if size is not None:
        changes["size"] = size

    return replace(default, **changes) if changes else default


def _merge_pool(defaults, overrides: Any):
    if not isinstance(overrides, list):
        return defaults
    by_id: Dict[str, Dict[str, Any]] = {}
    for item in overrides:
        if isinstance(item, dict) and isinstance(item.get("id"), str):
            by_id.setdefault(item["id"], item)

    unknown = set(by_id) - {k.id for k in defaults}
    if unknown:
        log.debug("Ignoring overrides for kinds without defaults", kinds=sorted(unknown))

    return tuple(_merge_kind(k, by_id[k.id]) if k.id in by_id else k for k in defaults)


def _merge_bubbles(default: Optional[BubbleKind], override: Any) -> Optional[BubbleKind]:
    if default is None or not isinstance(override, dict):
        return default
    changes: Dict[str, Any] = {}
    enabled = as_bool(override.get("enabled"))
    if enabled is not None:
        changes["enabled"] = enabled
    speed = as_number(override.get("speed"))
    if speed is not None and speed > 0:
        changes["speed"] = speed
    count = as_number(override.get("count"))
    if count is not None and count >= 0:
        changes["count"] = int(count)
    return replace(default, **changes) if changes else default


def merge_animation_config(defaults: AnimationConfig, partial: Any) -> AnimationConfig:
    """
    Overlay persisted partial overrides onto full preset defaults

    Precedence per kind (matched by id, not array position):
    - enabled, speed, count, size: override when present and valid, else default
    - type, positions: always from defaults
    - override ids with no default kind are ignored (no definition to draw)
    - bubbles: None/absent override keeps the default pool

    Args:
        defaults: Preset default configuration
        partial: Persisted dict ({characters: [{id, enabled, speed}], ...}) or None

    Returns:
        New AnimationConfig; defaults unchanged when partial is not a dict
    """
    if not isinstance(partial, dict):
        return defaults
    return AnimationConfig(
        characters=_merge_pool(defaults.characters, partial.get("characters")),
        decorations=_merge_pool(defaults.decorations, partial.get("decorations")),
        bubbles=_merge_bubbles(defaults.bubbles, partial.get("bubbles")),
    )


class AnimationConfigStore:
    """
    Live desired animation population

    Example:
        store = AnimationConfigStore()
        store.subscribe(reconciler.reconcile)
        store.apply(config, enabled=True)
    """

    def __init__(self):
        self._config: Optional[AnimationConfig] = None
        self._enabled: bool = True
        self._listeners: List[Listener] = []

    @property
    def current(self) -> Optional[AnimationConfig]:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._enabled

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def apply(self, config: Optional[AnimationConfig], enabled: Optional[bool] = None) -> None:
        """Replace the configuration (and optionally the master flag), then notify"""
        self._config = config
        if enabled is not None:
            self._enabled = enabled
        log.debug(
            "Animation config applied",
            enabled=self._enabled,
            kinds=len(config.characters) + len(config.decorations) if config else 0,
        )
        for listener in list(self._listeners):
            try:
                listener(self._config, self._enabled)
            except Exception as e:
                log.error("Animation listener failed", exception=e)

    def set_enabled(self, enabled: bool) -> None:
        self.apply(self._config, enabled)
