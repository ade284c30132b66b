"""
Animation configuration tests

merge_animation_config() precedence, model parsing, and the configuration
store's listener notifications.
"""

from themesync.models.animation import AnimationConfig, AnimKind, SizeRange
from themesync.models.enums import AnimationPool, AnimationType
from themesync.services.animation_config_store import AnimationConfigStore, merge_animation_config


def test_none_partial_returns_defaults(animation_presets):
    defaults = animation_presets.get_theme_animations("ocean-turtle")
    assert merge_animation_config(defaults, None) is defaults


def test_override_matched_by_id_not_position(animation_presets):
    defaults = animation_presets.get_theme_animations("ocean-turtle")
    partial = {
        "characters": [
            {"id": "fish", "enabled": False, "speed": 2},
            {"id": "turtle", "speed": 3},
        ],
    }

    merged = merge_animation_config(defaults, partial)

    turtle = merged.find(AnimationPool.CHARACTERS, "turtle")
    fish = merged.find(AnimationPool.CHARACTERS, "fish")
    assert (turtle.enabled, turtle.speed, turtle.count) == (True, 3, 3)
    assert (fish.enabled, fish.speed, fish.count) == (False, 2, 5)
    assert [k.id for k in merged.characters] == ["turtle", "fish", "jellyfish"]


def test_type_size_and_positions_come_from_defaults(animation_presets):
    defaults = animation_presets.get_theme_animations("ocean-turtle")
    partial = {"decorations": [{"id": "coral", "enabled": True, "speed": 1.5, "type": "falling"}]}

    coral = merge_animation_config(defaults, partial).find(AnimationPool.DECORATIONS, "coral")

    assert coral.type is AnimationType.FLOATING
    assert len(coral.positions) == 3
    assert coral.size == SizeRange(50, 80)
    assert coral.speed == 1.5


def test_invalid_override_values_are_ignored(animation_presets):
    defaults = animation_presets.get_theme_animations("mountain-eagle")
    partial = {"characters": [{"id": "eagle", "enabled": "maybe", "speed": -1, "count": "x"}]}

    eagle = merge_animation_config(defaults, partial).find(AnimationPool.CHARACTERS, "eagle")

    assert eagle == defaults.find(AnimationPool.CHARACTERS, "eagle")


def test_unknown_override_ids_are_ignored(animation_presets):
    defaults = animation_presets.get_theme_animations("mountain-eagle")
    merged = merge_animation_config(defaults, {"characters": [{"id": "dragon", "enabled": True}]})

    assert merged.signature() == defaults.signature()


def test_bubbles_merge(animation_presets):
    defaults = animation_presets.get_theme_animations("ocean-turtle")

    assert merge_animation_config(defaults, {"bubbles": None}).bubbles == defaults.bubbles
    assert merge_animation_config(defaults, {"bubbles": {"enabled": False}}).bubbles.enabled is False
    assert merge_animation_config(defaults, {"bubbles": {"enabled": False}}).bubbles.count == 12


def test_preset_without_bubbles_ignores_bubble_override(animation_presets):
    defaults = animation_presets.get_theme_animations("mountain-eagle")
    assert merge_animation_config(defaults, {"bubbles": {"enabled": True}}).bubbles is None


def test_from_dict_drops_invalid_and_duplicate_kinds():
    config = AnimationConfig.from_dict({
        "characters": [
            {"id": "eagle", "count": 2, "speed": 1, "size": {"min": 40, "max": 60}, "type": "floating"},
            {"id": "eagle", "count": 9, "speed": 1, "size": {"min": 40, "max": 60}},
            {"id": "bird", "count": 2, "speed": 0, "size": {"min": 4, "max": 6}},
            {"id": "cloud", "count": 2, "speed": 1, "size": {"min": 60, "max": 40}},
            "garbage",
        ],
    })

    assert [k.id for k in config.characters] == ["eagle"]
    assert config.characters[0].count == 2
    assert config.bubbles is None


def test_persisted_form_keeps_only_toggles(animation_presets):
    defaults = animation_presets.get_theme_animations("ocean-turtle")
    persisted = defaults.persisted()

    assert persisted["characters"][0] == {"id": "turtle", "enabled": True, "speed": 1}
    assert persisted["bubbles"] == {"enabled": True}


def test_unknown_preset_falls_back_to_default_animations(animation_presets):
    assert animation_presets.get_theme_animations("nope") == animation_presets.get_theme_animations("ocean-turtle")


def test_store_notifies_listeners():
    store = AnimationConfigStore()
    seen = []
    unsubscribe = store.subscribe(lambda config, enabled: seen.append((config, enabled)))

    config = AnimationConfig(characters=(
        AnimKind("eagle", True, 2, 1, SizeRange(40, 60), AnimationType.FLOATING),
    ))
    store.apply(config, enabled=True)
    store.set_enabled(False)
    unsubscribe()
    store.apply(AnimationConfig.empty())

    assert seen == [(config, True), (config, False)]
    assert store.enabled is False
    assert store.current == AnimationConfig.empty()


def test_store_listener_failure_does_not_stop_others():
    store = AnimationConfigStore()
    calls = []

    def broken(config, enabled):
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(lambda config, enabled: calls.append(enabled))
    store.apply(AnimationConfig.empty(), enabled=True)

    assert calls == [True]
