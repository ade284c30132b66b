from themesync.models.customization import Customization
from themesync.models.tokens import StyleTokenSet
from themesync.services.style_registry import StyleRegistry


def test_publish_complete_set(composer, ocean):
    registry = StyleRegistry()
    seen = []
    registry.subscribe(seen.append)

    tokens = composer.compose(ocean, Customization())
    assert registry.publish(tokens) is True

    assert registry.current is tokens
    assert seen == [tokens]


def test_incomplete_set_is_rejected_and_previous_kept(composer, ocean):
    registry = StyleRegistry()
    good = composer.compose(ocean, Customization())
    registry.publish(good)

    assert registry.publish(StyleTokenSet({"textColor": "#ffffff"})) is False
    assert registry.current is good
    assert registry.publish_count == 1


def test_css_variables(composer, ocean):
    registry = StyleRegistry()
    assert registry.as_css_variables() == {}

    registry.publish(composer.compose(ocean, Customization()))
    css = registry.as_css_variables()

    assert css["--text-color"] == "#e0f7fa"
    assert css["--radius"] == "12px"
    assert css["--navbar-bg"] == "rgba(0, 96, 100, 0.92)"
    assert css["--aurora-speed"] == "16s"


def test_unsubscribe_and_listener_failures(composer, ocean):
    registry = StyleRegistry()
    seen = []

    def broken(tokens):
        raise RuntimeError("renderer gone")

    registry.subscribe(broken)
    unsubscribe = registry.subscribe(seen.append)
    tokens = composer.compose(ocean, Customization())

    registry.publish(tokens)
    unsubscribe()
    registry.publish(tokens)

    assert seen == [tokens]
