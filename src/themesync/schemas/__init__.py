"""Pydantic wire schemas"""

from themesync.schemas.theme import (
    KindToggle,
    BubbleToggle,
    AnimationsPayload,
    ThemeDocument,
)

__all__ = ["KindToggle", "BubbleToggle", "AnimationsPayload", "ThemeDocument"]
