from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from themesync.models.customization import Customization
from themesync.models.enums import OrchestratorState
from themesync.models.events.base import Event
from themesync.models.events.sources import EventSource
from themesync.models.events.types import EventType
from themesync.models.scope import Identity, ThemeScope


@dataclass(init=False)
class ThemeUpdatedEvent(Event):
    """
    Fired by an editing surface after the user saves a theme.

    animations is the persisted partial form
    ({characters: [{id, enabled, speed}], decorations: [...], bubbles: {enabled} | None});
    it is merged with the preset defaults by the receiver.
    """

    customization: Customization
    animations: Optional[Dict[str, Any]] = None
    base_theme: Optional[str] = None
    scope: Optional[ThemeScope] = None
    animations_enabled: Optional[bool] = None

    def __init__(
        self,
        *,
        customization: Customization | Dict[str, Any],
        animations: Optional[Dict[str, Any]] = None,
        base_theme: Optional[str] = None,
        scope: Optional[ThemeScope] = None,
        animations_enabled: Optional[bool] = None,
        source: EventSource = EventSource.EDITOR,
    ):
        super().__init__(type=EventType.THEME_UPDATED, source=source)
        self.customization = Customization.from_dict(customization)
        self.animations = animations
        self.base_theme = base_theme
        self.scope = scope or ThemeScope.site()
        self.animations_enabled = animations_enabled


@dataclass(init=False)
class IdentityChangedEvent(Event):
    """Fired by the session layer on sign-in, token refresh and sign-out (identity=None)"""

    identity: Optional[Identity] = None

    def __init__(self, *, identity: Optional[Identity], source: EventSource = EventSource.SESSION):
        super().__init__(type=EventType.IDENTITY_CHANGED, source=source)
        self.identity = identity


@dataclass(init=False)
class ThemeResolvedEvent(Event):
    """Fired by the orchestrator whenever it pushes a new token set"""

    scope: ThemeScope
    state: OrchestratorState
    from_cache: bool = False

    def __init__(self, *, scope: ThemeScope, state: OrchestratorState, from_cache: bool = False):
        super().__init__(type=EventType.THEME_RESOLVED, source=EventSource.ORCHESTRATOR)
        self.scope = scope
        self.state = state
        self.from_cache = from_cache
