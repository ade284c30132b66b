"""Theme preset - named base token set"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class ThemePreset:
    """
    Base token values for a named theme

    tokens uses the same camelCase keys as StyleTokenSet
    (primaryColor, appBg, navbarOpacity, cardGradientAngle, bg1, ...).
    """
    key: str
    name: str
    tokens: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "tokens", MappingProxyType(dict(self.tokens)))

    def get(self, token: str, default: Any = None) -> Any:
        return self.tokens.get(token, default)

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "name": self.name, "tokens": dict(self.tokens)}
