import pytest

from themesync.errors import UnknownPresetError
from themesync.managers.config_manager import ConfigManager
from themesync.models.enums import AnimationType, ScopeKind


def test_include_files_are_merged(config_manager):
    for key in ("settings", "presets", "preset_aliases", "theme_animations", "assets"):
        assert key in config_manager.data


def test_settings_are_typed(settings):
    assert settings.default_preset == "ocean-turtle"
    assert settings.cache.version == 3
    assert settings.cache.max_age_seconds == 3600
    assert settings.animation.base_speed == 15
    assert settings.remote.path_for(ScopeKind.COMMUNITY, "c1") == "/communities/c1/theme"
    assert settings.default_customization.gradient_enabled is True
    assert settings.default_customization.navbar_opacity == 92


def test_preset_catalog(presets):
    assert presets.preset_order == ["ocean-turtle", "mountain-eagle", "sun-fire", "lightning-bolt", "air-clouds"]
    assert presets.default_key == "ocean-turtle"
    assert presets.get("ocean").get("radius") == "12px"


def test_unknown_preset_falls_back_to_default(presets):
    assert presets.get("volcano").key == "ocean-turtle"
    assert presets.resolve_key("volcano") is None


def test_require_raises_for_unknown_preset(presets):
    with pytest.raises(UnknownPresetError) as excinfo:
        presets.require("volcano")
    assert excinfo.value.details["valid_presets"][0] == "ocean-turtle"


def test_every_preset_has_animation_defaults(presets, animation_presets):
    for key in presets.preset_order:
        assert key in animation_presets.preset_keys


def test_animation_defaults_are_parsed(animation_presets):
    ocean = animation_presets.get_theme_animations("ocean-turtle")

    assert [k.id for k in ocean.characters] == ["turtle", "fish", "jellyfish"]
    assert ocean.characters[0].type is AnimationType.SWIMMING
    assert ocean.bubbles.count == 12
    assert animation_presets.get_theme_animations("mountain-eagle").bubbles is None


def test_every_configured_kind_has_an_asset(animation_presets):
    for key in animation_presets.preset_keys:
        for _, kind in animation_presets.get_theme_animations(key).iter_kinds():
            assert kind.id in animation_presets.assets, (key, kind.id)


def test_missing_config_falls_back_to_factory_defaults():
    config = ConfigManager(config_path="config/does_not_exist.yaml")
    config.load()

    assert config.preset_manager.default_key == "ocean-turtle"
    assert config.preset_manager.get("ocean").get("primaryColor") == "#006064"
    assert config.animation_preset_manager.get_theme_animations("ocean-turtle").characters


def test_absolute_config_path(tmp_path):
    main = tmp_path / "config.yaml"
    main.write_text(
        "settings:\n"
        "  default_preset: solo\n"
        "presets:\n"
        "  solo:\n"
        "    name: Solo\n"
        "    tokens: {primaryColor: '#101010'}\n",
        encoding="utf-8",
    )

    config = ConfigManager(config_path=main)
    config.load()

    assert config.preset_manager.default_key == "solo"
    assert config.animation_preset_manager.get_theme_animations("solo").characters == ()
