"""
IRenderSurface Protocol
=======================
Overlay abstraction for decorative animation elements.
Minimal contract for any drawing backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from themesync.models.animation import Position
from themesync.models.enums import AnimationPool


@dataclass(frozen=True)
class ElementSpec:
    """Everything a surface needs to draw one decorative element"""
    element_id: str
    kind_id: str
    pool: AnimationPool
    index: int
    position: Position
    size: float
    animation_name: str
    duration: float
    delay: float = 0.0
    timing: str = "ease-in-out"
    reverse: bool = False
    z_index: Optional[int] = None


class IRenderSurface(Protocol):
    """
    Protocol for the overlay region the reconciler draws on.

    All implementations must provide:
    - create: draw a primitive and return its node handle
    - destroy: remove a node
    - set_duration: retime a node's running animation in place
    """

    def create(self, spec: ElementSpec) -> Any:
        """Draw a new primitive; returns an opaque node handle."""
        ...

    def destroy(self, node: Any) -> None:
        """Remove a primitive created by create()."""
        ...

    def set_duration(self, node: Any, seconds: float) -> None:
        """Change the animation duration of a live node without recreating it."""
        ...


@dataclass(eq=False)
class LiveElement:
    """
    One on-screen decorative instance, owned by the reconciler

    set_duration() is the only sanctioned direct mutation of a drawn node;
    every other change goes through destroy + create.
    """
    id: str
    node: Any
    kind_id: str
    pool: AnimationPool
    index: int
    position: Position
    size: float
    base_duration: float
    duration: float
    surface: IRenderSurface = field(repr=False)

    def set_duration(self, seconds: float) -> None:
        self.surface.set_duration(self.node, seconds)
        self.duration = seconds
