"""
Resolution Cache - in-memory + persistent-local tiers

Precedence on read:
1. In-memory entry for the scope (no I/O)
2. Persistent-local snapshot (synchronous, promoted into memory)

The remote authoritative tier is fetched by the orchestrator, which writes the
recomputed entry back through write(). Writes replace the whole entry for a
scope in both tiers; there is no field-level merge here.

Also owns the short-lived page-scope marker that suppresses site-scope
application while a profile or community surface is active.
"""

import time
from typing import Callable, Dict, Optional

from themesync.models.cache_entry import CacheEntry
from themesync.models.customization import Customization
from themesync.models.enums import ScopeKind
from themesync.models.scope import ThemeScope
from themesync.services.snapshot_store import SnapshotStore
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CACHE)

_PAGE_SCOPED_KINDS = (ScopeKind.PROFILE.value, ScopeKind.COMMUNITY.value)


class ResolutionCache:
    """
    Two local tiers keyed by scope

    Example:
        cache = ResolutionCache(SnapshotStore())
        cache.write(ThemeScope.site("42"), entry)
        cache.read(ThemeScope.site("42"))  # memory hit
        ResolutionCache.is_fresh(entry, latest_customization)
    """

    def __init__(
        self,
        snapshot: SnapshotStore,
        scope_marker_ttl_seconds: float = 10.0,
        clock: Callable[[], float] = time.time,
    ):
        self.snapshot = snapshot
        self.scope_marker_ttl_seconds = scope_marker_ttl_seconds
        self._clock = clock
        self._memory: Dict[str, CacheEntry] = {}
        self.snapshot.migrate()

    # === Reads ===

    def read_memory(self, scope: ThemeScope) -> Optional[CacheEntry]:
        return self._memory.get(scope.cache_key)

    def read_local(self, scope: ThemeScope) -> Optional[CacheEntry]:
        """Persistent-local tier only"""
        entry = CacheEntry.from_record(self.snapshot.read(scope.cache_key))
        if entry is None:
            log.debug("Local snapshot miss", scope=str(scope))
        return entry

    def read(self, scope: ThemeScope) -> Optional[CacheEntry]:
        """Memory first, then local snapshot (promoted into memory on hit)"""
        entry = self.read_memory(scope)
        if entry is not None:
            return entry
        entry = self.read_local(scope)
        if entry is not None:
            self._memory[scope.cache_key] = entry
            log.debug("Local snapshot promoted to memory", scope=str(scope))
        return entry

    @staticmethod
    def is_fresh(entry: Optional[CacheEntry], customization: Customization) -> bool:
        """
        True when entry's computed tokens can be used for customization as-is

        Requires computed tokens, a matching base fingerprint, and tokens that
        were computed from that same fingerprint (untagged tokens are accepted).
        """
        if entry is None or entry.computed_colors is None:
            return False
        expected = customization.fingerprint
        if entry.base_colors.fingerprint != expected:
            return False
        computed_from = entry.computed_colors.fingerprint
        return computed_from is None or computed_from == expected

    # === Writes ===

    def write(self, scope: ThemeScope, entry: CacheEntry) -> None:
        """Replace the entry for scope in both tiers"""
        self._memory[scope.cache_key] = entry
        try:
            self.snapshot.write(scope.cache_key, entry.to_record())
        except OSError as e:
            log.error("Local snapshot write failed, memory tier kept", scope=str(scope), error=str(e))

    def invalidate(self, scope: ThemeScope) -> None:
        self._memory.pop(scope.cache_key, None)
        self.snapshot.remove(scope.cache_key)
        log.debug("Cache entry invalidated", scope=str(scope))

    def clear(self) -> None:
        """Drop every entry in both tiers"""
        self._memory.clear()
        self.snapshot.clear_all()

    # === Preset choice ===

    def last_preset_choice(self) -> Optional[str]:
        return self.snapshot.read_preset_choice()

    def remember_preset_choice(self, preset_key: str) -> None:
        try:
            self.snapshot.write_preset_choice(preset_key)
        except OSError as e:
            log.error("Failed to persist preset choice", preset=preset_key, error=str(e))

    # === Page-scope marker ===

    def mark_page_scope(self, scope: ThemeScope) -> None:
        self.snapshot.write_marker(scope.kind.value, scope.scope_id)

    def clear_page_scope(self) -> None:
        self.snapshot.clear_marker()

    def site_application_suppressed(self) -> bool:
        """
        True while a fresh profile/community marker is present

        Markers older than the TTL are ignored (and removed).
        """
        marker = self.snapshot.read_marker()
        if not marker or marker.get("type") not in _PAGE_SCOPED_KINDS:
            return False
        timestamp = marker.get("timestamp")
        if not isinstance(timestamp, (int, float)):
            return False
        if self._clock() - timestamp > self.scope_marker_ttl_seconds:
            self.snapshot.clear_marker()
            return False
        return True
