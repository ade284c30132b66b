"""
Customization record - user-supplied theme overrides

Immutable once submitted. A new submission replaces the previous record wholesale.
Parsing from stored/wire dictionaries is lenient: unknown keys are ignored and
malformed values are dropped rather than raising.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, TYPE_CHECKING

from themesync.models.enums import ColorSpace
from themesync.utils.serialization import as_bool, as_number, as_text, snake_to_camel

if TYPE_CHECKING:
    from themesync.models.tokens import StyleTokenSet


# Raw color overrides, in overlay order
COLOR_FIELDS = (
    "primary_color",
    "secondary_color",
    "text_color",
    "accent_color",
    "card_gradient_color1",
    "card_gradient_color2",
    "navbar_bg",
    "tab_bar_bg",
    "dropdown_color",
)

_TEXT_FIELDS = COLOR_FIELDS + ("card_bg",)

_NUMBER_FIELDS = (
    "navbar_opacity",
    "tab_bar_opacity",
    "card_opacity",
    "gradient_angle",
    "gradient_favorability",
    "gradient_strength",
    "card_gradient_angle",
    "card_gradient_favorability",
    "card_gradient_strength",
    "temperature_limit",
    "magenta_limit",
    "intensity_limit",
    "red_limit",
    "green_limit",
    "blue_limit",
    "background_saturation_limit",
    "background_brightness_limit",
    "background_contrast",
    "background_hue_gravity",
    "background_gray_saturation",
    "background_default_hue",
)

_BOOL_FIELDS = ("gradient_enabled", "card_gradient_enabled")


@dataclass(frozen=True)
class Fingerprint:
    """Subset of a customization that decides cache freshness"""
    primary_color: Optional[str]
    color_space: ColorSpace

    def to_dict(self) -> Dict[str, Any]:
        return {"primaryColor": self.primary_color, "colorSpace": self.color_space.value}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Fingerprint"]:
        if not isinstance(data, dict):
            return None
        primary = as_text(data.get("primaryColor"))
        return cls(
            primary_color=primary.lower() if primary else None,
            color_space=ColorSpace.parse(data.get("colorSpace")),
        )


@dataclass(frozen=True)
class Customization:
    """
    User-supplied overrides on top of a base preset

    Colors are CSS strings (normally '#rrggbb'). Opacities, favorability and
    strength are 0-100. Angles are degrees. Every field is optional; None means
    "not specified, use the preset value".

    Example:
        custom = Customization.from_dict({"primaryColor": "#006064", "colorSpace": "HSV"})
        custom.fingerprint  # Fingerprint(primary_color='#006064', color_space=ColorSpace.HSV)
    """

    # === Colors ===
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    text_color: Optional[str] = None
    accent_color: Optional[str] = None
    card_gradient_color1: Optional[str] = None
    card_gradient_color2: Optional[str] = None
    navbar_bg: Optional[str] = None
    tab_bar_bg: Optional[str] = None
    dropdown_color: Optional[str] = None
    card_bg: Optional[str] = None

    # === Opacities (0-100) ===
    navbar_opacity: Optional[float] = None
    tab_bar_opacity: Optional[float] = None
    card_opacity: Optional[float] = None

    # === App gradient ===
    gradient_enabled: Optional[bool] = None
    gradient_angle: Optional[float] = None
    gradient_favorability: Optional[float] = None
    gradient_strength: Optional[float] = None

    # === Card gradient ===
    card_gradient_enabled: Optional[bool] = None
    card_gradient_angle: Optional[float] = None
    card_gradient_favorability: Optional[float] = None
    card_gradient_strength: Optional[float] = None

    # === Color-space transform ===
    color_space: ColorSpace = ColorSpace.OFF
    temperature_limit: Optional[float] = None
    magenta_limit: Optional[float] = None
    intensity_limit: Optional[float] = None
    red_limit: Optional[float] = None
    green_limit: Optional[float] = None
    blue_limit: Optional[float] = None
    background_saturation_limit: Optional[float] = None
    background_brightness_limit: Optional[float] = None
    background_contrast: Optional[float] = None
    background_hue_gravity: Optional[float] = None
    background_gray_saturation: Optional[float] = None
    background_default_hue: Optional[float] = None

    # Pre-computed tokens carried along from a cache snapshot
    computed_colors: Optional["StyleTokenSet"] = None

    @property
    def fingerprint(self) -> Fingerprint:
        primary = self.primary_color.lower() if self.primary_color else None
        return Fingerprint(primary_color=primary, color_space=self.color_space)

    def without_computed(self) -> "Customization":
        """Same overrides, computed tokens stripped"""
        if self.computed_colors is None:
            return self
        return replace(self, computed_colors=None)

    def with_computed(self, tokens: Optional["StyleTokenSet"]) -> "Customization":
        return replace(self, computed_colors=tokens)

    # === Serialization ===

    def to_dict(self) -> Dict[str, Any]:
        """camelCase dict of specified fields only (computed tokens excluded)"""
        data: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "computed_colors":
                continue
            value = getattr(self, f.name)
            if f.name == "color_space":
                data["colorSpace"] = value.value
            elif value is not None:
                data[snake_to_camel(f.name)] = value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Customization":
        """
        Lenient construction from a camelCase dict

        Never raises: non-dict input yields an empty customization, and values of
        the wrong type are ignored.
        """
        if isinstance(data, Customization):
            return data
        if not isinstance(data, dict):
            return cls()

        kwargs: Dict[str, Any] = {}
        for name in _TEXT_FIELDS:
            value = as_text(data.get(snake_to_camel(name)))
            if value is not None:
                kwargs[name] = value
        for name in _NUMBER_FIELDS:
            value = as_number(data.get(snake_to_camel(name)))
            if value is not None:
                kwargs[name] = value
        for name in _BOOL_FIELDS:
            value = as_bool(data.get(snake_to_camel(name)))
            if value is not None:
                kwargs[name] = value
        kwargs["color_space"] = ColorSpace.parse(data.get("colorSpace"))
        return cls(**kwargs)

