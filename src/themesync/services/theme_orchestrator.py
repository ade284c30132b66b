"""
Theme Orchestrator - resolution lifecycle coordinator

States: UNINITIALIZED -> LOCAL_CACHE_APPLIED -> REMOTE_SYNC_PENDING -> RESOLVED
(RESOLVED is re-entered on every external update).

- mount(): synchronous; applies the local snapshot (or the default preset)
  before anything is fetched, so the registry is never empty after it
- on_identity_changed(): fetches the remote site document when the user id
  actually changes; token refreshes for the same user are ignored
- on_theme_updated(): recomposes and pushes immediately
- enter_scope()/leave_scope(): profile/community page themes
- save_theme(): writes through the remote store, then updates local tiers

The orchestrator is the only writer of the StyleRegistry and the
AnimationConfigStore.
"""

from typing import Any, Dict, Optional, Tuple

from themesync.engine.theme_composer import ThemeComposer
from themesync.errors import ThemeAuthorizationError, ThemeNotFoundError, ThemeSyncError
from themesync.managers.animation_preset_manager import AnimationPresetManager
from themesync.managers.preset_manager import PresetManager
from themesync.managers.settings import ThemeSettings
from themesync.models.animation import AnimationConfig
from themesync.models.cache_entry import CacheEntry
from themesync.models.customization import Customization
from themesync.models.enums import OrchestratorState
from themesync.models.events import (
    EventType,
    IdentityChangedEvent,
    ThemeResolvedEvent,
    ThemeUpdatedEvent,
)
from themesync.models.scope import Identity, ThemeScope
from themesync.models.tokens import StyleTokenSet
from themesync.schemas.theme import ThemeDocument
from themesync.services.animation_config_store import AnimationConfigStore, merge_animation_config
from themesync.services.event_bus import EventBus
from themesync.services.resolution_cache import ResolutionCache
from themesync.services.style_registry import StyleRegistry
from themesync.services.theme_store import ThemeStore
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.THEME)


class ThemeOrchestrator:
    """
    Explicitly constructed coordinator; one instance per process

    Example:
        orchestrator = ThemeOrchestrator(composer, cache, store, registry,
                                         animation_store, bus, presets,
                                         animation_presets, settings)
        orchestrator.mount()
        orchestrator.start()
        await bus.publish(IdentityChangedEvent(identity=Identity("42", "tok")))
    """

    def __init__(
        self,
        composer: ThemeComposer,
        cache: ResolutionCache,
        store: ThemeStore,
        registry: StyleRegistry,
        animation_store: AnimationConfigStore,
        bus: EventBus,
        presets: PresetManager,
        animation_presets: AnimationPresetManager,
        settings: ThemeSettings,
    ):
        self.composer = composer
        self.cache = cache
        self.store = store
        self.registry = registry
        self.animation_store = animation_store
        self.bus = bus
        self.presets = presets
        self.animation_presets = animation_presets
        self.settings = settings

        self.state = OrchestratorState.UNINITIALIZED
        self._identity: Optional[Identity] = None
        self._applied_from_cache = False
        self._active_scope = ThemeScope.site()
        self._site_entry: Optional[CacheEntry] = None
        self._started = False

    # === Properties ===

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def active_scope(self) -> ThemeScope:
        return self._active_scope

    @property
    def current_tokens(self) -> Optional[StyleTokenSet]:
        return self.registry.current

    # === Lifecycle ===

    def start(self) -> None:
        """Subscribe to the update and identity channels"""
        if self._started:
            return
        self.bus.subscribe(EventType.THEME_UPDATED, self.on_theme_updated)
        self.bus.subscribe(EventType.IDENTITY_CHANGED, self.on_identity_changed)
        self._started = True
        log.debug("Orchestrator subscribed to event bus")

    def shutdown(self) -> None:
        if not self._started:
            return
        self.bus.unsubscribe(EventType.THEME_UPDATED, self.on_theme_updated)
        self.bus.unsubscribe(EventType.IDENTITY_CHANGED, self.on_identity_changed)
        self._started = False
        log.info("Orchestrator stopped")

    def mount(self) -> Optional[StyleTokenSet]:
        """
        Apply the local snapshot (or default preset) synchronously

        Returns:
            The token set now in the registry
        """
        if self.state is not OrchestratorState.UNINITIALIZED:
            return self.registry.current

        site = ThemeScope.site()
        entry = self.cache.read(site)
        applied = False
        if entry is not None:
            preset_key = self._preset_key(entry.base_theme)
            tokens = self._tokens_for_entry(entry, preset_key)
            animations = entry.animations or self.animation_presets.get_theme_animations(preset_key)
            applied = self._apply(tokens, animations, entry.animations_enabled)
            if applied:
                self._site_entry = entry
                self._applied_from_cache = True
                log.info("Applied local snapshot", preset=preset_key)

        if not applied:
            self._apply_preset_fallback()

        self.state = OrchestratorState.LOCAL_CACHE_APPLIED
        return self.registry.current

    # === Identity ===

    async def on_identity_changed(self, event: Any) -> None:
        """
        Handle sign-in, token refresh and sign-out

        Accepts an IdentityChangedEvent or a bare Identity/None.
        """
        identity = event.identity if isinstance(event, IdentityChangedEvent) else event

        if identity is None:
            self._on_sign_out()
            return

        if self._identity is not None and identity.user_id == self._identity.user_id:
            self._identity = identity
            log.debug("Same identity, token refresh ignored", user=identity.user_id)
            return

        self._identity = identity
        await self._sync_site(identity)

    def _on_sign_out(self) -> None:
        previous = self._identity
        self._identity = None
        if previous is None and self.state is OrchestratorState.UNINITIALIZED:
            return

        if self.state is OrchestratorState.RESOLVED or self._applied_from_cache:
            log.info("Signed out, keeping current theme", state=self.state.name)
            return

        log.info("Signed out, falling back to last preset choice")
        self._apply_preset_fallback()
        if self.state is not OrchestratorState.UNINITIALIZED:
            self.state = OrchestratorState.LOCAL_CACHE_APPLIED

    async def _sync_site(self, identity: Identity) -> None:
        requested = identity.user_id
        self.state = OrchestratorState.REMOTE_SYNC_PENDING
        scope = ThemeScope.site(requested)
        log.info("Fetching site theme", user=requested)

        try:
            document = await self.store.fetch(scope, identity)
        except ThemeNotFoundError:
            log.warn("Site theme owner not found, using defaults", user=requested)
            document = None
        except ThemeSyncError as e:
            log.error("Site theme fetch failed, keeping local theme", user=requested, error=e.message)
            if self._is_current(requested):
                self.state = OrchestratorState.LOCAL_CACHE_APPLIED
            return

        if not self._is_current(requested):
            log.info("Discarding stale site theme fetch", user=requested)
            return

        if document is None:
            customization = self.settings.default_customization
            base_theme, partial, enabled = None, None, True
        else:
            customization = document.customization_record
            base_theme = document.base_theme
            partial = document.animations_partial()
            enabled = document.animations_enabled

        entry, from_cache = self._resolve(ThemeScope.site(), customization, base_theme, partial, enabled)
        self._site_entry = entry
        self.cache.remember_preset_choice(entry.base_theme)

        if self._site_suppressed():
            log.info("Site theme cached, application suppressed by page scope", user=requested)
        else:
            self._apply(entry.computed_colors, entry.animations, entry.animations_enabled)

        self.state = OrchestratorState.RESOLVED
        await self._announce(ThemeScope.site(requested), from_cache)

    def _is_current(self, user_id: str) -> bool:
        return self._identity is not None and self._identity.user_id == user_id

    # === External updates ===

    async def on_theme_updated(self, event: ThemeUpdatedEvent) -> None:
        """Recompose immediately from the event payload and push, whatever the state"""
        self._update_scope(
            event.scope or ThemeScope.site(),
            event.customization,
            event.base_theme,
            event.animations,
            event.animations_enabled,
            force_apply=True,
        )
        self.state = OrchestratorState.RESOLVED
        await self._announce(event.scope or ThemeScope.site(), False)

    async def save_theme(self, scope: ThemeScope, document: ThemeDocument) -> StyleTokenSet:
        """
        Persist a theme document, then resolve it locally

        Raises:
            ThemeAuthorizationError: not signed in, or caller does not own the scope
            UnknownPresetError: document names a preset that does not exist
            ThemeStoreError: transport failure

        No local tier, registry or animation state changes when the write is rejected.
        """
        if self._identity is None:
            raise ThemeAuthorizationError(str(scope), reason="not signed in")
        if document.base_theme:
            self.presets.require(document.base_theme)

        if scope.is_site and scope.scope_id is None:
            scope = ThemeScope.site(self._identity.user_id)
        await self.store.save(scope, document, self._identity)

        local_scope = ThemeScope.site() if scope.is_site else scope
        entry = self._update_scope(
            local_scope,
            document.customization_record,
            document.base_theme,
            document.animations_partial(),
            document.animations_enabled,
        )
        self.state = OrchestratorState.RESOLVED
        await self._announce(scope, False)
        return entry.computed_colors

    def _update_scope(
        self,
        scope: ThemeScope,
        customization: Customization,
        base_theme: Optional[str],
        partial: Optional[Dict[str, Any]],
        animations_enabled: Optional[bool],
        force_apply: bool = False,
    ) -> CacheEntry:
        """Recompose, cache and push when the scope is on screen (or force_apply is set)"""
        if base_theme is None and scope.is_site and self._site_entry is not None:
            base_theme = self._site_entry.base_theme
        preset_key = self._preset_key(base_theme)
        if animations_enabled is None:
            animations_enabled = self.animation_store.enabled

        tokens = self.composer.compose(self.presets.get(preset_key), customization.without_computed())
        animations = merge_animation_config(self.animation_presets.get_theme_animations(preset_key), partial)
        entry = CacheEntry(customization.without_computed(), tokens, animations, preset_key, animations_enabled)
        self.cache.write(scope, entry)

        if scope.is_site:
            self._site_entry = entry
            self.cache.remember_preset_choice(preset_key)

        if force_apply or self._is_active(scope):
            self._apply(tokens, animations, animations_enabled)
        else:
            log.info("Theme update cached for inactive scope", scope=str(scope))
        return entry

    # === Page scopes ===

    async def enter_scope(self, scope: ThemeScope) -> None:
        """
        Switch the active surface to a profile or community theme

        The cached scope theme (if any) is applied at once; the remote document
        is then fetched and, when it differs, recomposed and applied.
        """
        if scope.is_site:
            await self.leave_scope()
            return

        self._active_scope = scope
        self.cache.mark_page_scope(scope)

        entry = self.cache.read(scope)
        if entry is not None and entry.computed_colors is not None:
            preset_key = self._preset_key(entry.base_theme)
            self._apply(
                entry.computed_colors,
                entry.animations or self.animation_presets.get_theme_animations(preset_key),
                entry.animations_enabled,
            )

        try:
            document = await self.store.fetch(scope, self._identity)
        except ThemeNotFoundError:
            log.warn("Theme scope not found", scope=str(scope))
            document = None
        except ThemeSyncError as e:
            log.error("Scope theme fetch failed, keeping current theme", scope=str(scope), error=e.message)
            return

        if document is None:
            self.cache.invalidate(scope)
            if self._is_active(scope):
                log.info("Scope has no theme, showing site theme", scope=str(scope))
                self._reapply_site()
            return

        entry, from_cache = self._resolve(
            scope,
            document.customization_record,
            document.base_theme,
            document.animations_partial(),
            document.animations_enabled,
        )
        if not self._is_active(scope):
            log.info("Discarding stale scope theme", scope=str(scope))
            return

        self._apply(entry.computed_colors, entry.animations, entry.animations_enabled)
        self.state = OrchestratorState.RESOLVED
        await self._announce(scope, from_cache)

    async def leave_scope(self) -> None:
        """Return to the site theme"""
        self._active_scope = ThemeScope.site()
        self.cache.clear_page_scope()
        self._reapply_site()
        await self._announce(ThemeScope.site(), True)

    def _reapply_site(self) -> None:
        entry = self._site_entry or self.cache.read(ThemeScope.site())
        if entry is None:
            self._apply_preset_fallback()
            return
        preset_key = self._preset_key(entry.base_theme)
        self._apply(
            self._tokens_for_entry(entry, preset_key),
            entry.animations or self.animation_presets.get_theme_animations(preset_key),
            entry.animations_enabled,
        )

    def _is_active(self, scope: ThemeScope) -> bool:
        if scope.is_site:
            return self._active_scope.is_site
        return scope == self._active_scope

    def _site_suppressed(self) -> bool:
        return not self._active_scope.is_site or self.cache.site_application_suppressed()

    # === Resolution helpers ===

    def _preset_key(self, base_theme: Optional[str]) -> str:
        return (
            self.presets.resolve_key(base_theme)
            or self.presets.resolve_key(self.cache.last_preset_choice())
            or self.presets.default_key
        )

    def _resolve(
        self,
        scope: ThemeScope,
        customization: Customization,
        base_theme: Optional[str],
        partial: Optional[Dict[str, Any]],
        animations_enabled: bool,
    ) -> Tuple[CacheEntry, bool]:
        """
        Cached tokens when fresh, otherwise recompose; the entry is written to both local tiers

        Returns:
            (entry, reused_cached_tokens)
        """
        preset_key = self._preset_key(base_theme)
        cached = self.cache.read(scope)
        reused = (
            ResolutionCache.is_fresh(cached, customization)
            and cached.base_theme in (None, preset_key)
        )
        if reused:
            tokens = cached.computed_colors
            log.debug("Fingerprint match, reusing cached tokens", scope=str(scope))
        else:
            tokens = self.composer.compose(self.presets.get(preset_key), customization.without_computed())
            log.info("Theme recomposed", scope=str(scope), preset=preset_key,
                     color_space=customization.color_space.value)

        animations = merge_animation_config(self.animation_presets.get_theme_animations(preset_key), partial)
        entry = CacheEntry(customization.without_computed(), tokens, animations, preset_key, animations_enabled)
        self.cache.write(scope, entry)
        return entry, reused

    def _tokens_for_entry(self, entry: CacheEntry, preset_key: str) -> StyleTokenSet:
        if ResolutionCache.is_fresh(entry, entry.base_colors) and entry.computed_colors.is_complete():
            return entry.computed_colors
        return self.composer.compose(self.presets.get(preset_key), entry.base_colors.without_computed())

    def _apply_preset_fallback(self) -> None:
        preset_key = self._preset_key(None)
        tokens = self.composer.compose(self.presets.get(preset_key), Customization())
        self._apply(tokens, self.animation_presets.get_theme_animations(preset_key), True)
        log.info("Applied preset", preset=preset_key)

    def _apply(self, tokens: Optional[StyleTokenSet], animations: Optional[AnimationConfig], enabled: bool) -> bool:
        """Push tokens then animations; nothing changes when the token set is rejected"""
        if tokens is None or not self.registry.publish(tokens):
            log.error("Token set rejected, keeping previous theme")
            return False
        self.animation_store.apply(animations, enabled)
        return True

    async def _announce(self, scope: ThemeScope, from_cache: bool) -> None:
        await self.bus.publish(ThemeResolvedEvent(scope=scope, state=self.state, from_cache=from_cache))
