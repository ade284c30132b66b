"""
Color-space transform tests

Covers neutral passthrough, malformed input, each mode's direction of travel
and gradient substitution.
"""

import pytest

from themesync.engine.color_transform import (
    TransformParams,
    transform_color,
    transform_gradient,
    transform_value,
)
from themesync.models.customization import Customization
from themesync.models.enums import ColorSpace
from themesync.utils.colors import hex_to_rgb, rgb_to_hsv


def chroma(value: str) -> int:
    r, g, b = hex_to_rgb(value)
    return max(r, g, b) - min(r, g, b)


def hue(value: str) -> float:
    return rgb_to_hsv(*hex_to_rgb(value))[0]


# === Passthrough ===

NEUTRAL_COLORS = ["#006064", "#000000", "#ffffff", "#808080", "#00FF7F", "#ff0000", "#1A2B3C"]


@pytest.mark.parametrize("mode", [ColorSpace.OFF, ColorSpace.RGB, ColorSpace.HSV, ColorSpace.TMI])
@pytest.mark.parametrize("color", NEUTRAL_COLORS)
def test_neutral_params_return_input(mode, color):
    assert transform_color(color, mode, TransformParams()) == color
    assert transform_value(color, mode, TransformParams()) == color


@pytest.mark.parametrize("mode", [ColorSpace.RGB, ColorSpace.HSV, ColorSpace.TMI])
def test_neutral_params_leave_gradient_untouched(mode):
    gradient = "linear-gradient(135deg, #000000 0%, #FFFFFF 50%, #808080 100%)"
    assert transform_gradient(gradient, mode, TransformParams()) == gradient


@pytest.mark.parametrize("value", ["red", "#fff", "#0060", "rgba(0,0,0,0.5)", "", None, 42])
def test_non_hex_input_passes_through(value):
    params = TransformParams(red_limit=100, saturation_limit=0, temperature=100)
    for mode in (ColorSpace.RGB, ColorSpace.HSV, ColorSpace.TMI):
        assert transform_color(value, mode, params) == value


def test_off_mode_ignores_params():
    assert transform_color("#006064", ColorSpace.OFF, TransformParams(red_limit=100)) == "#006064"


def test_output_is_lowercase_hex():
    assert transform_color("#00AAFF", ColorSpace.RGB, TransformParams(green_limit=60)) == transform_color(
        "#00aaff", ColorSpace.RGB, TransformParams(green_limit=60)
    )
    result = transform_color("#00AAFF", ColorSpace.RGB, TransformParams(green_limit=60))
    assert result == result.lower()


# === RGB ===

def test_rgb_red_limit_full_raises_red_channel():
    assert transform_color("#006064", ColorSpace.RGB, TransformParams(red_limit=100)) == "#ff6064"


def test_rgb_limit_zero_removes_channel():
    assert transform_color("#80ff40", ColorSpace.RGB, TransformParams(green_limit=0)) == "#800040"


def test_rgb_limits_are_clamped():
    over = transform_color("#006064", ColorSpace.RGB, TransformParams(red_limit=250))
    assert over == "#ff6064"


# === HSV ===

def test_hsv_saturation_limit_increases_chroma_and_keeps_hue():
    result = transform_color("#006064", ColorSpace.HSV, TransformParams(saturation_limit=100))
    assert chroma(result) > chroma("#006064")
    assert abs(hue(result) - hue("#006064")) < 3


def test_hsv_low_saturation_limit_washes_out():
    result = transform_color("#006064", ColorSpace.HSV, TransformParams(saturation_limit=0))
    r, g, b = hex_to_rgb(result)
    assert r == g == b


def test_hsv_brightness_zero_is_black():
    assert transform_color("#26c6da", ColorSpace.HSV, TransformParams(brightness_limit=0)) == "#000000"


def test_hsv_contrast_pushes_value_away_from_midpoint():
    dark = transform_color("#202020", ColorSpace.HSV, TransformParams(contrast=100))
    light = transform_color("#d0d0d0", ColorSpace.HSV, TransformParams(contrast=100))
    assert hex_to_rgb(dark)[0] < 0x20
    assert hex_to_rgb(light)[0] > 0xD0


def test_hsv_hue_gravity_full_moves_to_target():
    result = transform_color("#ff0000", ColorSpace.HSV, TransformParams(hue_gravity=100, target_hue=184))
    assert abs(hue(result) - 184) < 1.5


def test_hsv_hue_gravity_leaves_gray_untouched():
    assert transform_color("#808080", ColorSpace.HSV, TransformParams(hue_gravity=100)) == "#808080"


def test_hsv_gray_floor_tints_gray_toward_target_hue():
    result = transform_color("#808080", ColorSpace.HSV, TransformParams(gray_saturation=50, target_hue=184))
    assert chroma(result) > 0
    assert abs(hue(result) - 184) < 2


# === TMI ===

def test_tmi_warm_temperature_shifts_red_up_blue_down():
    r, g, b = hex_to_rgb(transform_color("#808080", ColorSpace.TMI, TransformParams(temperature=100)))
    assert r > g > b


def test_tmi_cool_temperature_shifts_blue_up():
    r, g, b = hex_to_rgb(transform_color("#808080", ColorSpace.TMI, TransformParams(temperature=0)))
    assert b > g > r


def test_tmi_magenta_lowers_green():
    r, g, b = hex_to_rgb(transform_color("#808080", ColorSpace.TMI, TransformParams(magenta=100)))
    assert g < r and g < b


def test_tmi_intensity_zero_is_black():
    assert transform_color("#26c6da", ColorSpace.TMI, TransformParams(intensity=0)) == "#000000"


# === Gradients and dispatch ===

def test_gradient_substitutes_only_hex_colors():
    gradient = "linear-gradient(135deg, #006064 0%, #0097a7 100%)"
    result = transform_gradient(gradient, ColorSpace.RGB, TransformParams(red_limit=100))
    assert result == "linear-gradient(135deg, #ff6064 0%, #ff97a7 100%)"


def test_gradient_with_non_hex_colors_is_unchanged():
    gradient = "linear-gradient(90deg, rgba(0,0,0,0.2) 0%, white 100%)"
    assert transform_gradient(gradient, ColorSpace.HSV, TransformParams(brightness_limit=0)) == gradient


def test_transform_value_dispatch():
    params = TransformParams(red_limit=100)
    assert transform_value("#006064", ColorSpace.RGB, params) == "#ff6064"
    assert transform_value("linear-gradient(1deg, #006064, #006064)", ColorSpace.RGB, params) == (
        "linear-gradient(1deg, #ff6064, #ff6064)"
    )
    assert transform_value("12px", ColorSpace.RGB, params) == "12px"


def test_params_from_customization_default_to_neutral():
    params = TransformParams.from_customization(Customization(color_space=ColorSpace.HSV))
    assert params.is_neutral(ColorSpace.HSV)
    assert params.target_hue == 184.0

    custom = Customization(color_space=ColorSpace.HSV, background_saturation_limit=70, background_default_hue=30)
    params = TransformParams.from_customization(custom)
    assert params.saturation_limit == 70
    assert params.target_hue == 30
    assert not params.is_neutral(ColorSpace.HSV)
    assert params.is_neutral(ColorSpace.RGB)
