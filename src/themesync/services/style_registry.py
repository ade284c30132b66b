"""
Style Registry - output parameter set consumed by the rendering layer

Only ever holds a complete StyleTokenSet. publish() replaces the whole set;
an incomplete set is rejected and the previous one stays in place.
"""

from typing import Callable, Dict, List, Optional

from themesync.models.tokens import CSS_VARIABLES, StyleTokenSet
from themesync.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.RENDER)

Listener = Callable[[StyleTokenSet], None]


class StyleRegistry:
    """
    Example:
        registry = StyleRegistry()
        registry.subscribe(lambda tokens: apply_to_renderer(tokens))
        registry.publish(tokens)
        registry.as_css_variables()["--app-bg"]
    """

    def __init__(self):
        self._current: Optional[StyleTokenSet] = None
        self._listeners: List[Listener] = []
        self.publish_count = 0

    @property
    def current(self) -> Optional[StyleTokenSet]:
        return self._current

    def publish(self, tokens: StyleTokenSet) -> bool:
        """
        Replace the current set

        Returns:
            False (and keeps the previous set) when tokens is incomplete
        """
        if tokens is None or not tokens.is_complete():
            log.warn(
                "Rejected incomplete token set",
                missing=tokens.missing_tokens() if tokens is not None else "all",
            )
            return False

        self._current = tokens
        self.publish_count += 1
        for listener in list(self._listeners):
            try:
                listener(tokens)
            except Exception as e:
                log.error("Style listener failed", exception=e)
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def as_css_variables(self) -> Dict[str, str]:
        """Current tokens as rendering-layer parameters (empty before first publish)"""
        if self._current is None:
            return {}
        return {
            var: str(self._current[key])
            for key, var in CSS_VARIABLES.items()
            if self._current.get(key) not in (None, "")
        }
