"""
Theme Store - remote authoritative tier

ThemeStore is the persistence boundary consumed by the orchestrator:
- fetch(scope, identity) -> ThemeDocument | None   (None = scope has no theme)
- save(scope, document, identity) -> None

HttpThemeStore talks to the REST backend via httpx. InMemoryThemeStore keeps
documents in a dict and enforces the same ownership rules (self for site and
profile, owner/admin membership for community).
"""

from typing import Dict, Optional, Protocol, Set, Tuple

import httpx

from themesync.errors import ThemeAuthorizationError, ThemeNotFoundError, ThemeStoreError
from themesync.managers.settings import RemoteSettings
from themesync.models.enums import ScopeKind
from themesync.models.scope import Identity, ThemeScope
from themesync.schemas.theme import ThemeDocument
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYNC)

COMMUNITY_EDITOR_ROLES = ("owner", "admin")


class ThemeStore(Protocol):
    """Persistence boundary for scope theme documents"""

    async def fetch(self, scope: ThemeScope, identity: Optional[Identity] = None) -> Optional[ThemeDocument]:
        ...

    async def save(self, scope: ThemeScope, document: ThemeDocument, identity: Identity) -> None:
        ...


class HttpThemeStore:
    """
    REST client for scope theme documents

    Status mapping:
    - 200 with {}       -> None (no theme saved)
    - 401 / 403         -> ThemeAuthorizationError
    - 404               -> ThemeNotFoundError (scope owner does not exist)
    - other / transport -> ThemeStoreError
    """

    def __init__(self, settings: RemoteSettings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
        )

    def _url(self, scope: ThemeScope, identity: Optional[Identity]) -> str:
        scope_id = scope.scope_id
        if scope.is_site and scope_id is None and identity is not None:
            scope_id = identity.user_id
        if scope_id is None:
            raise ThemeStoreError("Scope has no id", scope=str(scope))
        return self.settings.path_for(scope.kind, scope_id)

    @staticmethod
    def _headers(identity: Optional[Identity]) -> Dict[str, str]:
        if identity is not None and identity.token:
            return {"Authorization": f"Bearer {identity.token}"}
        return {}

    def _check(self, response: httpx.Response, scope: ThemeScope) -> None:
        if response.status_code in (401, 403):
            raise ThemeAuthorizationError(str(scope), reason=f"HTTP {response.status_code}")
        if response.status_code == 404:
            raise ThemeNotFoundError(str(scope))
        if response.is_error:
            raise ThemeStoreError(
                f"Theme request failed for {scope}",
                status_code=response.status_code,
            )

    async def fetch(self, scope: ThemeScope, identity: Optional[Identity] = None) -> Optional[ThemeDocument]:
        url = self._url(scope, identity)
        try:
            response = await self._client.get(url, headers=self._headers(identity))
        except httpx.HTTPError as e:
            raise ThemeStoreError(f"Theme fetch failed for {scope}", error=str(e)) from e

        self._check(response, scope)
        try:
            document = ThemeDocument.from_payload(response.json())
        except ValueError as e:
            raise ThemeStoreError(f"Malformed theme document for {scope}", error=str(e)) from e

        log.debug("Theme fetched", scope=str(scope), empty=document is None)
        return document

    async def save(self, scope: ThemeScope, document: ThemeDocument, identity: Identity) -> None:
        url = self._url(scope, identity)
        try:
            response = await self._client.put(url, json=document.to_payload(), headers=self._headers(identity))
        except httpx.HTTPError as e:
            raise ThemeStoreError(f"Theme save failed for {scope}", error=str(e)) from e

        self._check(response, scope)
        log.info("Theme saved", scope=str(scope))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class InMemoryThemeStore:
    """
    Dict-backed store with the backend's ownership rules

    Example:
        store = InMemoryThemeStore()
        store.add_user("42")
        store.add_community("c1", members={"42": "owner"})
        await store.save(ThemeScope.community("c1"), doc, Identity("42"))
    """

    def __init__(self):
        self._documents: Dict[Tuple[ScopeKind, str], ThemeDocument] = {}
        self._users: Set[str] = set()
        self._communities: Dict[str, Dict[str, str]] = {}
        self.fetch_count = 0
        self.save_count = 0

    def add_user(self, user_id: str) -> None:
        self._users.add(str(user_id))

    def add_community(self, community_id: str, members: Optional[Dict[str, str]] = None) -> None:
        self._communities[str(community_id)] = {str(k): v for k, v in (members or {}).items()}

    def _resolve(self, scope: ThemeScope, identity: Optional[Identity]) -> Tuple[ScopeKind, str]:
        scope_id = scope.scope_id
        if scope.is_site and scope_id is None and identity is not None:
            scope_id = identity.user_id
        if scope_id is None:
            raise ThemeStoreError("Scope has no id", scope=str(scope))
        known = self._communities if scope.kind is ScopeKind.COMMUNITY else self._users
        if scope_id not in known:
            raise ThemeNotFoundError(str(scope))
        return scope.kind, scope_id

    async def fetch(self, scope: ThemeScope, identity: Optional[Identity] = None) -> Optional[ThemeDocument]:
        self.fetch_count += 1
        kind, scope_id = self._resolve(scope, identity)
        if kind is ScopeKind.SITE and (identity is None or identity.user_id != scope_id):
            raise ThemeAuthorizationError(str(scope), reason="can only view own site theme")
        return self._documents.get((kind, scope_id))

    async def save(self, scope: ThemeScope, document: ThemeDocument, identity: Identity) -> None:
        self.save_count += 1
        kind, scope_id = self._resolve(scope, identity)
        if kind is ScopeKind.COMMUNITY:
            role = self._communities[scope_id].get(identity.user_id)
            if role not in COMMUNITY_EDITOR_ROLES:
                raise ThemeAuthorizationError(str(scope), reason="owner or admin role required")
        elif identity.user_id != scope_id:
            raise ThemeAuthorizationError(str(scope), reason="can only update own theme")
        self._documents[(kind, scope_id)] = document
