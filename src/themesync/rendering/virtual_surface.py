from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict, List, Tuple

from themesync.rendering.surface import ElementSpec, IRenderSurface


@dataclass
class VirtualNode:
    """Stand-in for a drawn primitive"""
    handle: int
    spec: ElementSpec
    duration: float


class VirtualSurface(IRenderSurface):
    """
    In-memory surface: records nodes and every operation applied to them.

    Used headless and in tests.
    """

    def __init__(self):
        self._handles = itertools.count(1)
        self.nodes: Dict[int, VirtualNode] = {}
        self.created: List[str] = []
        self.destroyed: List[str] = []
        self.retimed: List[str] = []
        self.operations: List[Tuple[str, str]] = []

    def create(self, spec: ElementSpec) -> VirtualNode:
        node = VirtualNode(next(self._handles), spec, spec.duration)
        self.nodes[node.handle] = node
        self.created.append(spec.element_id)
        self.operations.append(("create", spec.element_id))
        return node

    def destroy(self, node: VirtualNode) -> None:
        if self.nodes.pop(node.handle, None) is not None:
            self.destroyed.append(node.spec.element_id)
            self.operations.append(("destroy", node.spec.element_id))

    def set_duration(self, node: VirtualNode, seconds: float) -> None:
        node.duration = seconds
        self.retimed.append(node.spec.element_id)
        self.operations.append(("retime", node.spec.element_id))

    def element_ids(self) -> List[str]:
        return sorted(n.spec.element_id for n in self.nodes.values())

    def reset_log(self) -> None:
        self.created.clear()
        self.destroyed.clear()
        self.retimed.clear()
        self.operations.clear()
