"""
Color transform - color-space adjustments applied to theme colors

Pure functions. transform_color() is total over 6-digit hex input and passes
anything else through unchanged. With every parameter at its neutral value
(50 for limits/contrast, 0 for hue gravity and gray saturation) the input is
returned as-is in every mode.

Modes:
- RGB: per-channel limits pull each channel toward 255 (above 50) or 0 (below 50)
- HSV: saturation limit, contrast, brightness limit, hue gravity, gray floor
- TMI: temperature (blue <-> orange), magenta (green <-> magenta), intensity
"""

from dataclasses import dataclass, fields
from typing import Any

from themesync.models.customization import Customization
from themesync.models.enums import ColorSpace
from themesync.utils.colors import (
    HEX_PATTERN,
    clamp,
    hex_to_rgb,
    hsv_to_rgb,
    hue_distance,
    is_hex,
    rgb_to_hex,
    rgb_to_hsv,
)

NEUTRAL = 50.0

# Saturation below this counts as near-gray for the gray floor
GRAY_THRESHOLD = 0.15

# Maximum channel travel for temperature/magenta at the 0/100 extremes
SHIFT_STRENGTH = 0.35


@dataclass(frozen=True)
class TransformParams:
    """
    Parameter set for all three modes (0-100 each, hue in degrees)

    Example:
        params = TransformParams(saturation_limit=100)
        transform_color("#006064", ColorSpace.HSV, params)
    """
    # RGB
    red_limit: float = NEUTRAL
    green_limit: float = NEUTRAL
    blue_limit: float = NEUTRAL

    # HSV
    saturation_limit: float = NEUTRAL
    contrast: float = NEUTRAL
    brightness_limit: float = NEUTRAL
    hue_gravity: float = 0.0
    gray_saturation: float = 0.0
    target_hue: float = 184.0

    # TMI
    temperature: float = NEUTRAL
    magenta: float = NEUTRAL
    intensity: float = NEUTRAL

    @classmethod
    def from_customization(cls, custom: Customization) -> "TransformParams":
        """Unspecified customization fields fall back to neutral values"""
        def pick(value, default):
            return default if value is None else value

        return cls(
            red_limit=pick(custom.red_limit, NEUTRAL),
            green_limit=pick(custom.green_limit, NEUTRAL),
            blue_limit=pick(custom.blue_limit, NEUTRAL),
            saturation_limit=pick(custom.background_saturation_limit, NEUTRAL),
            contrast=pick(custom.background_contrast, NEUTRAL),
            brightness_limit=pick(custom.background_brightness_limit, NEUTRAL),
            hue_gravity=pick(custom.background_hue_gravity, 0.0),
            gray_saturation=pick(custom.background_gray_saturation, 0.0),
            target_hue=pick(custom.background_default_hue, 184.0),
            temperature=pick(custom.temperature_limit, NEUTRAL),
            magenta=pick(custom.magenta_limit, NEUTRAL),
            intensity=pick(custom.intensity_limit, NEUTRAL),
        )

    def is_neutral(self, mode: ColorSpace) -> bool:
        """True when the parameters used by mode leave every color unchanged"""
        if mode is ColorSpace.RGB:
            return self.red_limit == self.green_limit == self.blue_limit == NEUTRAL
        if mode is ColorSpace.HSV:
            return (
                self.saturation_limit == NEUTRAL
                and self.contrast == NEUTRAL
                and self.brightness_limit == NEUTRAL
                and self.hue_gravity == 0
                and self.gray_saturation == 0
            )
        if mode is ColorSpace.TMI:
            return self.temperature == self.magenta == self.intensity == NEUTRAL
        return True

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


NEUTRAL_PARAMS = TransformParams()


# === Channel math ===

def _limit(value: float, limit: float, top: float) -> float:
    """
    Pull value toward top (limit > 50) or toward 0 (limit < 50)

    limit 100 reaches top, limit 0 reaches 0, 50 is identity.
    """
    limit = clamp(limit, 0.0, 100.0)
    if limit > NEUTRAL:
        return value + (top - value) * (limit - NEUTRAL) / NEUTRAL
    if limit < NEUTRAL:
        return value * (limit / NEUTRAL)
    return value


def _toward(value: float, target: float, amount: float) -> float:
    return value + (target - value) * clamp(amount, 0.0, 1.0)


def _signed(setting: float) -> float:
    """Map 0-100 around 50 onto -1..1"""
    return (clamp(setting, 0.0, 100.0) - NEUTRAL) / NEUTRAL


# === Modes ===

def _apply_rgb(r: int, g: int, b: int, params: TransformParams):
    return (
        _limit(r, params.red_limit, 255.0),
        _limit(g, params.green_limit, 255.0),
        _limit(b, params.blue_limit, 255.0),
    )


def _apply_hsv(r: int, g: int, b: int, params: TransformParams):
    h, s, v = rgb_to_hsv(r, g, b)
    achromatic = s == 0.0

    # Saturation limit: above 50 raises saturation and lets chroma grow into value;
    # below 50 washes toward gray.
    sat = _signed(params.saturation_limit)
    if sat > 0:
        s_before = s
        s = s + (1.0 - s) * sat
        v = v + (1.0 - v) * sat * s_before * 0.5
    elif sat < 0:
        s = s * (1.0 + sat)

    # Contrast: symmetric stretch of value around the midpoint
    if params.contrast != NEUTRAL:
        factor = clamp(params.contrast, 0.0, 100.0) / NEUTRAL
        v = clamp(0.5 + (v - 0.5) * factor, 0.0, 1.0)

    v = _limit(v, params.brightness_limit, 1.0)

    if params.hue_gravity and not achromatic:
        pull = clamp(params.hue_gravity, 0.0, 100.0) / 100.0
        h = (h + hue_distance(h, params.target_hue) * pull) % 360.0

    if params.gray_saturation and s < GRAY_THRESHOLD:
        floor = clamp(params.gray_saturation, 0.0, 100.0) / 100.0
        if achromatic:
            h = params.target_hue % 360.0
        s = max(s, floor)

    return hsv_to_rgb(h, s, v)


def _apply_tmi(r: int, g: int, b: int, params: TransformParams):
    rf, gf, bf = float(r), float(g), float(b)

    temp = _signed(params.temperature) * SHIFT_STRENGTH
    if temp > 0:
        rf, bf = _toward(rf, 255.0, temp), _toward(bf, 0.0, temp)
    elif temp < 0:
        rf, bf = _toward(rf, 0.0, -temp), _toward(bf, 255.0, -temp)

    tint = _signed(params.magenta) * SHIFT_STRENGTH
    if tint > 0:
        rf, gf, bf = _toward(rf, 255.0, tint), _toward(gf, 0.0, tint), _toward(bf, 255.0, tint)
    elif tint < 0:
        rf, gf, bf = _toward(rf, 0.0, -tint), _toward(gf, 255.0, -tint), _toward(bf, 0.0, -tint)

    return (
        _limit(rf, params.intensity, 255.0),
        _limit(gf, params.intensity, 255.0),
        _limit(bf, params.intensity, 255.0),
    )


_MODES = {
    ColorSpace.RGB: _apply_rgb,
    ColorSpace.HSV: _apply_hsv,
    ColorSpace.TMI: _apply_tmi,
}


# === Public API ===

def transform_color(value: Any, mode: ColorSpace, params: TransformParams = NEUTRAL_PARAMS) -> Any:
    """
    Transform one '#rrggbb' color

    Args:
        value: Hex color; anything else is returned unchanged
        mode: Color-space mode (OFF returns the input)
        params: Transform parameters

    Returns:
        Lowercase '#rrggbb', or the original value when untouched

    Example:
        transform_color("#006064", ColorSpace.RGB, TransformParams(red_limit=100))  # "#ff6064"
    """
    apply = _MODES.get(mode)
    if apply is None or not is_hex(value) or params.is_neutral(mode):
        return value
    return rgb_to_hex(*apply(*hex_to_rgb(value), params))


def transform_gradient(value: Any, mode: ColorSpace, params: TransformParams = NEUTRAL_PARAMS) -> Any:
    """
    Transform every embedded '#rrggbb' in a gradient string

    Angles, stop positions and non-hex colors are left untouched.
    """
    if not isinstance(value, str) or mode not in _MODES or params.is_neutral(mode):
        return value
    return HEX_PATTERN.sub(lambda m: transform_color(m.group(0), mode, params), value)


def transform_value(value: Any, mode: ColorSpace, params: TransformParams = NEUTRAL_PARAMS) -> Any:
    """Dispatch: plain hex -> color, gradient text -> gradient, else passthrough"""
    if is_hex(value):
        return transform_color(value, mode, params)
    if isinstance(value, str) and "gradient" in value:
        return transform_gradient(value, mode, params)
    return value
