"""
Color conversion utilities

Pure functions for hex parsing, channel math and CSS color string construction.
None of these raise on malformed strings; parsers return None instead.
"""

import colorsys
import re
from typing import Optional, Tuple

HEX_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")
_FULL_HEX = re.compile(r"^#[0-9a-fA-F]{6}$")
_RGBA_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$"
)

RGB = Tuple[int, int, int]


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]"""
    return max(low, min(high, value))


def is_hex(value) -> bool:
    """True for a 6-digit '#rrggbb' string"""
    return isinstance(value, str) and bool(_FULL_HEX.match(value))


def hex_to_rgb(value: str) -> Optional[RGB]:
    """
    Parse '#rrggbb' into an (r, g, b) tuple

    Args:
        value: Hex color string

    Returns:
        (r, g, b) with 0-255 channels, or None when value is not a 6-digit hex

    Example:
        hex_to_rgb("#006064")  # (0, 96, 100)
    """
    if not is_hex(value):
        return None
    return int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Format channels as lowercase '#rrggbb'

    Channels are rounded and clamped to 0-255.

    Example:
        rgb_to_hex(0, 96, 100)  # "#006064"
    """
    def channel(c: float) -> int:
        return int(clamp(round(c), 0, 255))
    return "#{:02x}{:02x}{:02x}".format(channel(r), channel(g), channel(b))


def rgb_to_hsv(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """
    Convert 0-255 RGB to (hue degrees 0-360, saturation 0-1, value 0-1)
    """
    h, s, v = colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)
    return h * 360.0, s, v


def hsv_to_rgb(h: float, s: float, v: float) -> Tuple[float, float, float]:
    """Convert (hue degrees, saturation 0-1, value 0-1) to 0-255 float channels"""
    r, g, b = colorsys.hsv_to_rgb((h % 360.0) / 360.0, clamp(s, 0.0, 1.0), clamp(v, 0.0, 1.0))
    return r * 255.0, g * 255.0, b * 255.0


def hue_distance(from_hue: float, to_hue: float) -> float:
    """Signed shortest angular distance from one hue to another (-180, 180]"""
    delta = (to_hue - from_hue) % 360.0
    if delta > 180.0:
        delta -= 360.0
    return delta


def blend_hex(color_a: str, color_b: str, ratio: float) -> str:
    """
    Linear blend between two hex colors

    Args:
        color_a: Color returned at ratio 0
        color_b: Color returned at ratio 1
        ratio: Blend position, clamped to 0-1

    Returns:
        Blended hex, or color_b unchanged when either input is not hex
    """
    a = hex_to_rgb(color_a)
    b = hex_to_rgb(color_b)
    if a is None or b is None:
        return color_b
    t = clamp(ratio, 0.0, 1.0)
    return rgb_to_hex(*(ca + (cb - ca) * t for ca, cb in zip(a, b)))


def format_alpha(alpha: float) -> str:
    """Compact alpha formatting: 1, 0.92, 0.2184"""
    return format(round(clamp(alpha, 0.0, 1.0), 4), "g")


def hex_to_rgba(value: str, alpha: float) -> str:
    """
    Composite a hex color with an alpha value

    Example:
        hex_to_rgba("#006064", 0.92)  # "rgba(0, 96, 100, 0.92)"
    """
    rgb = hex_to_rgb(value)
    if rgb is None:
        return value
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {format_alpha(alpha)})"


def parse_rgba(value: str) -> Optional[Tuple[int, int, int, float]]:
    """Parse 'rgb(...)' or 'rgba(...)' into (r, g, b, a); None when not parseable"""
    if not isinstance(value, str):
        return None
    match = _RGBA_PATTERN.match(value.strip())
    if not match:
        return None
    r, g, b, a = match.groups()
    return int(r), int(g), int(b), float(a) if a is not None else 1.0


def apply_opacity(value: str, opacity: float) -> str:
    """
    Composite any supported color string with an opacity (0-1)

    - hex: straight RGBA construction
    - rgba: existing alpha is multiplied by opacity
    - anything else: returned unchanged
    """
    if is_hex(value):
        return hex_to_rgba(value, opacity)
    parsed = parse_rgba(value)
    if parsed is None:
        return value
    r, g, b, a = parsed
    return f"rgba({r}, {g}, {b}, {format_alpha(a * clamp(opacity, 0.0, 1.0))})"
