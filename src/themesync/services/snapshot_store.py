"""
Snapshot Store - persistent-local tier

Keyed JSON records, one per scope, each stamped with the cache version and a
write timestamp. Records with another version, or older than the max age, are
evicted on read. Backed by a JSON file when a path is given, otherwise held
in memory only.
"""

import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CACHE)

VERSION_KEY = "themeCacheVersion"
PRESET_CHOICE_KEY = "themePreset"
PAGE_SCOPE_KEY = "currentPageTheme"

_THEME_KEY_PREFIXES = ("siteTheme", "profileTheme_", "communityTheme_")


class SnapshotStore:
    """
    Versioned key -> record store

    Example:
        store = SnapshotStore(Path("theme_cache.json"), version=3, max_age_seconds=3600)
        store.write("siteTheme", {"baseColors": {...}, "computedColors": {...}})
        store.read("siteTheme")  # record with 'version' and 'timestamp' added
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        version: int = 3,
        max_age_seconds: float = 3600.0,
        clock: Callable[[], float] = time.time,
    ):
        self.path = Path(path) if path else None
        self.version = version
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._records: Dict[str, Any] = self._load()

    # === File backing ===

    def _load(self) -> Dict[str, Any]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warn("Unreadable snapshot file, starting empty", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            log.warn("Snapshot file is not an object, starting empty", path=str(self.path))
            return {}
        return data

    def _flush(self, strict: bool = True) -> None:
        """Write records to the file; with strict=False a failure is logged and the memory copy kept"""
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._records, f, indent=2)
        except OSError as e:
            log.error("Failed to write snapshot file", path=str(self.path), error=str(e))
            if strict:
                raise

    # === Theme records ===

    def read(self, key: str) -> Optional[Dict[str, Any]]:
        """Valid record for key, or None (stale records are evicted)"""
        record = self._records.get(key)
        if not isinstance(record, dict):
            return None

        if record.get("version") != self.version:
            log.info("Evicting snapshot with old version", key=key, version=record.get("version"))
            self.remove(key)
            return None

        timestamp = record.get("timestamp")
        if not isinstance(timestamp, (int, float)) or self._clock() - timestamp > self.max_age_seconds:
            log.info("Evicting expired snapshot", key=key)
            self.remove(key)
            return None

        return record

    def write(self, key: str, body: Dict[str, Any]) -> None:
        """Replace the record for key (last writer wins)"""
        self._records[key] = {**body, "version": self.version, "timestamp": self._clock()}
        self._flush()
        log.debug("Snapshot written", key=key)

    def remove(self, key: str) -> None:
        if self._records.pop(key, None) is not None:
            self._flush(strict=False)

    def keys(self):
        return list(self._records)

    def clear_all(self) -> int:
        """Drop every theme record and the page-scope marker; returns the number removed"""
        doomed = [
            key for key in self._records
            if key.startswith(_THEME_KEY_PREFIXES) or key == PAGE_SCOPE_KEY
        ]
        for key in doomed:
            del self._records[key]
        if doomed:
            self._flush(strict=False)
        log.info("Cleared theme snapshots", removed=len(doomed))
        return len(doomed)

    def migrate(self) -> bool:
        """
        Clear theme records written by another cache version

        Returns:
            True if a migration ran
        """
        stored = self._records.get(VERSION_KEY)
        if stored == self.version:
            return False
        log.info("Migrating theme snapshots", from_version=stored, to_version=self.version)
        self.clear_all()
        self._records[VERSION_KEY] = self.version
        self._flush(strict=False)
        return True

    # === Preset choice ===

    def read_preset_choice(self) -> Optional[str]:
        value = self._records.get(PRESET_CHOICE_KEY)
        return value if isinstance(value, str) and value else None

    def write_preset_choice(self, preset_key: str) -> None:
        self._records[PRESET_CHOICE_KEY] = preset_key
        self._flush()

    # === Page-scope marker ===

    def read_marker(self) -> Optional[Dict[str, Any]]:
        marker = self._records.get(PAGE_SCOPE_KEY)
        return marker if isinstance(marker, dict) else None

    def write_marker(self, kind: str, scope_id: Optional[str]) -> None:
        self._records[PAGE_SCOPE_KEY] = {"type": kind, "id": scope_id, "timestamp": self._clock()}
        self._flush(strict=False)

    def clear_marker(self) -> None:
        self.remove(PAGE_SCOPE_KEY)
