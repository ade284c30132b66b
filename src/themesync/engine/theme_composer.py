"""
Theme Composer - base preset + customization -> resolved StyleTokenSet

Pure: no I/O, no shared state. Callers persist and publish the result.

Steps:
1. Fast path: customization already carries computed tokens whose fingerprint
   matches it -> returned verbatim
2. Overlay explicitly specified raw colors onto the preset
3. Color-space transform of every color field (colorSpace != Off)
4. Derive composites: app gradient, navbar/tab-bar RGBA, card background, dropdown
"""

from typing import Any, Dict, Optional

from themesync.engine.color_transform import TransformParams, transform_value
from themesync.models.customization import COLOR_FIELDS, Customization
from themesync.models.enums import ColorSpace, LogCategory
from themesync.models.preset import ThemePreset
from themesync.models.tokens import StyleTokenSet
from themesync.utils.colors import apply_opacity, blend_hex, clamp, hex_to_rgba
from themesync.utils.logger import get_logger
from themesync.utils.serialization import format_number, snake_to_camel

log = get_logger().for_category(LogCategory.COLOR)

# Token keys that hold colors or gradients and go through the transform
TRANSFORMED_TOKENS = tuple(snake_to_camel(name) for name in COLOR_FIELDS) + (
    "highlightColor",
    "appBg",
    "cardBg",
)

DEFAULT_NAVBAR_OPACITY = 92
DEFAULT_TAB_BAR_OPACITY = 88
DEFAULT_GRADIENT_ANGLE = 135
DEFAULT_FAVORABILITY = 50
DEFAULT_STRENGTH = 100
DEFAULT_CARD_OPACITY = 100


def _pick(*values, default=None):
    """First value that is not None"""
    for value in values:
        if value is not None:
            return value
    return default


def _two_stop_gradient(angle: Any, first: str, second: str, favorability: float) -> str:
    """
    linear-gradient(<angle>deg, <first> 0%, <second> <favorability*2>%)

    Favorability 0-100 maps onto a 0-200% stop offset for the second color.
    """
    stop = clamp(favorability, 0, 100) * 2
    return f"linear-gradient({format_number(angle)}deg, {first} 0%, {second} {format_number(stop)}%)"


def _strength_blend(first: str, second: str, strength_pct: float) -> str:
    """Blend second toward first: 0 -> first, 100 -> second unchanged"""
    strength = clamp(strength_pct, 0, 100) / 100.0
    if strength == 1:
        return second
    return blend_hex(first, second, strength)


def compose_theme(
    preset: ThemePreset,
    customization: Customization,
    fallback: Optional[ThemePreset] = None,
) -> StyleTokenSet:
    """
    Resolve a preset + customization into a complete token set

    Args:
        preset: Base preset
        customization: User overrides (may carry pre-computed tokens)
        fallback: Preset supplying colors the base preset lacks

    Returns:
        StyleTokenSet tagged with customization.fingerprint

    Example:
        tokens = compose_theme(ocean, Customization(color_space=ColorSpace.OFF))
        tokens["primaryColor"]  # "#006064"
    """
    cached = customization.computed_colors
    if cached is not None and cached.fingerprint == customization.fingerprint and cached.is_complete():
        return cached

    base: Dict[str, Any] = {}
    if fallback is not None:
        base.update(fallback.tokens)
    base.update(preset.tokens)

    # Step 2: overlay explicitly specified colors
    for name in COLOR_FIELDS:
        value = getattr(customization, name)
        if value:
            base[snake_to_camel(name)] = value

    # Step 3: color-space transform
    mode = customization.color_space
    if mode is not ColorSpace.OFF:
        params = TransformParams.from_customization(customization)
        for key in TRANSFORMED_TOKENS:
            if key in base:
                base[key] = transform_value(base[key], mode, params)
        log.debug("Applied color-space transform", mode=mode.value, preset=preset.key)

    primary = base.get("primaryColor") or base.get("accentColor")
    secondary = base.get("secondaryColor") or base.get("accentColor")
    accent = base.get("accentColor")

    # Step 4: derived composites
    tokens = dict(base)
    tokens["primaryColor"] = primary
    tokens["secondaryColor"] = secondary

    if customization.gradient_enabled:
        tokens["appBg"] = _two_stop_gradient(
            _pick(customization.gradient_angle, default=DEFAULT_GRADIENT_ANGLE),
            primary,
            _strength_blend(primary, secondary, _pick(customization.gradient_strength, default=DEFAULT_STRENGTH)),
            _pick(customization.gradient_favorability, default=DEFAULT_FAVORABILITY),
        )

    navbar_opacity = _pick(customization.navbar_opacity, base.get("navbarOpacity"), default=DEFAULT_NAVBAR_OPACITY)
    tab_bar_opacity = _pick(customization.tab_bar_opacity, base.get("tabBarOpacity"), default=DEFAULT_TAB_BAR_OPACITY)
    tokens["navbarOpacity"] = navbar_opacity
    tokens["tabBarOpacity"] = tab_bar_opacity
    tokens["navbarBg"] = apply_opacity(base.get("navbarBg") or primary, clamp(navbar_opacity, 0, 100) / 100.0)
    tokens["tabBarBg"] = apply_opacity(base.get("tabBarBg") or primary, clamp(tab_bar_opacity, 0, 100) / 100.0)

    card_opacity = clamp(_pick(customization.card_opacity, default=DEFAULT_CARD_OPACITY), 0, 100) / 100.0
    card_gradient = _pick(customization.card_gradient_enabled, base.get("cardGradientEnabled"), default=True)
    card_angle = _pick(customization.card_gradient_angle, base.get("cardGradientAngle"), default=DEFAULT_GRADIENT_ANGLE)
    if card_gradient:
        first = base.get("cardGradientColor1") or accent
        second = base.get("cardGradientColor2") or accent
        blended = _strength_blend(
            first, second, _pick(customization.card_gradient_strength, default=DEFAULT_STRENGTH)
        )
        tokens["cardBg"] = _two_stop_gradient(
            card_angle,
            hex_to_rgba(first, card_opacity),
            hex_to_rgba(blended, card_opacity),
            _pick(customization.card_gradient_favorability, default=DEFAULT_FAVORABILITY),
        )
    else:
        if customization.card_gradient_color1:
            single = base.get("cardGradientColor1")
        else:
            single = customization.card_bg or base.get("cardBg")
        tokens["cardBg"] = apply_opacity(single, card_opacity) if single else single
    tokens["cardGradientEnabled"] = bool(card_gradient)
    tokens["cardGradientAngle"] = card_angle

    tokens["dropdownColor"] = base.get("dropdownColor") or primary or accent

    return StyleTokenSet(tokens, customization.fingerprint)


class ThemeComposer:
    """
    Injectable wrapper around compose_theme()

    Holds the default preset used as the color fallback so call sites only pass
    (preset, customization).
    """

    def __init__(self, default_preset: Optional[ThemePreset] = None):
        self.default_preset = default_preset

    def compose(self, preset: ThemePreset, customization: Customization) -> StyleTokenSet:
        tokens = compose_theme(preset, customization, self.default_preset)
        if not tokens.is_complete():
            log.warn("Composed token set is incomplete", preset=preset.key, missing=tokens.missing_tokens())
        return tokens
