"""
StyleTokenSet - resolved flat map of visual parameters

Produced only by the theme composer. Instances are read-only; a new set
replaces the previous one wholesale.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional

from themesync.models.customization import Fingerprint
from themesync.utils.serialization import dumps_canonical

# Keys the rendering layer cannot do without
REQUIRED_TOKENS = (
    "textColor",
    "accentColor",
    "cardBg",
    "appBg",
    "navbarBg",
    "tabBarBg",
    "radius",
)

# Token key -> rendering-layer parameter name
CSS_VARIABLES = {
    "textColor": "--text-color",
    "accentColor": "--color-accent",
    "cardBg": "--card-bg",
    "appBg": "--app-bg",
    "navbarBg": "--navbar-bg",
    "tabBarBg": "--tab-bar-bg",
    "radius": "--radius",
    "bg1": "--bg1",
    "bg2": "--bg2",
    "auroraSpeed": "--aurora-speed",
}


class StyleTokenSet(Mapping):
    """
    Immutable token mapping tagged with the fingerprint it was computed from

    Example:
        tokens = StyleTokenSet({"textColor": "#e0f7fa", ...}, fingerprint)
        tokens["textColor"]   # "#e0f7fa"
        tokens.to_json()      # deterministic text, sorted keys
    """

    __slots__ = ("_tokens", "_fingerprint")

    def __init__(self, tokens: Dict[str, Any], fingerprint: Optional[Fingerprint] = None):
        self._tokens = MappingProxyType(dict(tokens))
        self._fingerprint = fingerprint

    def __getitem__(self, key: str) -> Any:
        return self._tokens[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"StyleTokenSet({len(self)} tokens, fingerprint={self._fingerprint})"

    @property
    def fingerprint(self) -> Optional[Fingerprint]:
        return self._fingerprint

    def is_complete(self) -> bool:
        """Every required token present and non-empty"""
        return all(self._tokens.get(key) not in (None, "") for key in REQUIRED_TOKENS)

    def missing_tokens(self) -> list:
        return [key for key in REQUIRED_TOKENS if self._tokens.get(key) in (None, "")]

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._tokens)

    def to_json(self) -> str:
        return dumps_canonical(self.to_dict())

    @classmethod
    def from_dict(cls, data: Any, fingerprint: Optional[Fingerprint] = None) -> Optional["StyleTokenSet"]:
        """None for anything that is not a non-empty dict"""
        if not isinstance(data, dict) or not data:
            return None
        return cls(data, fingerprint)
