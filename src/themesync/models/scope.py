"""Theme scopes and session identity"""

from dataclasses import dataclass
from typing import Optional

from themesync.models.enums import ScopeKind


@dataclass(frozen=True)
class ThemeScope:
    """
    Ownership boundary of a theme document

    Site scope belongs to the signed-in user (scope_id = user id);
    profile and community scopes are keyed by their own ids.
    """
    kind: ScopeKind
    scope_id: Optional[str] = None

    @classmethod
    def site(cls, user_id: Optional[str] = None) -> "ThemeScope":
        return cls(ScopeKind.SITE, user_id)

    @classmethod
    def profile(cls, user_id: str) -> "ThemeScope":
        return cls(ScopeKind.PROFILE, str(user_id))

    @classmethod
    def community(cls, community_id: str) -> "ThemeScope":
        return cls(ScopeKind.COMMUNITY, str(community_id))

    @property
    def cache_key(self) -> str:
        """Snapshot record key"""
        if self.kind is ScopeKind.SITE:
            return "siteTheme"
        return f"{self.kind.value}Theme_{self.scope_id}"

    @property
    def is_site(self) -> bool:
        return self.kind is ScopeKind.SITE

    def __str__(self) -> str:
        if self.scope_id is None:
            return self.kind.value
        return f"{self.kind.value}:{self.scope_id}"


@dataclass(frozen=True)
class Identity:
    """
    Signed-in session identity

    Only user_id participates in change detection; a refreshed token for the
    same user is not an identity change.
    """
    user_id: str
    token: Optional[str] = None
