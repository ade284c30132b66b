"""
Error hierarchy for theme resolution

Pure functions (transform, compose, merge) never raise on malformed input.
These exceptions cover the persistence boundary and configuration lookups.
"""

from typing import Optional


class ThemeSyncError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ThemeStoreError(ThemeSyncError):
    """Remote store unreachable or returned an unusable response"""
    def __init__(self, message: str, status_code: Optional[int] = None, **details):
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(code="THEME_STORE_ERROR", message=message, details=details)
        self.status_code = status_code


class ThemeAuthorizationError(ThemeSyncError):
    """Caller does not own the scope it tried to read or write"""
    def __init__(self, scope_key: str, reason: str = "forbidden"):
        super().__init__(
            code="THEME_FORBIDDEN",
            message=f"Not authorized for theme scope '{scope_key}'",
            details={"scope": scope_key, "reason": reason}
        )


class ThemeNotFoundError(ThemeSyncError):
    """Scope owner (user or community) does not exist"""
    def __init__(self, scope_key: str):
        super().__init__(
            code="THEME_SCOPE_NOT_FOUND",
            message=f"Theme scope '{scope_key}' not found",
            details={"scope": scope_key}
        )


class UnknownPresetError(ThemeSyncError):
    """Preset key is not in the catalog"""
    def __init__(self, preset: str, valid_presets: list):
        super().__init__(
            code="UNKNOWN_PRESET",
            message=f"Preset '{preset}' is not defined",
            details={"preset": preset, "valid_presets": valid_presets}
        )
