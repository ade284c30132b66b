"""Rendering surface abstraction for decorative elements"""

from themesync.rendering.surface import ElementSpec, IRenderSurface, LiveElement
from themesync.rendering.virtual_surface import VirtualSurface, VirtualNode

__all__ = ["ElementSpec", "IRenderSurface", "LiveElement", "VirtualSurface", "VirtualNode"]
