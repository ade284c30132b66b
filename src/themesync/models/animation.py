"""
Animation configuration models

AnimationConfig describes the desired decorative population for three pools:
characters, decorations and bubbles. All models are frozen; a configuration
change always produces a new instance that the reconciler diffs against the
previous one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from themesync.models.enums import AnimationPool, AnimationType
from themesync.utils.serialization import as_bool, as_number, as_text


@dataclass(frozen=True)
class SizeRange:
    min: float
    max: float

    @classmethod
    def from_dict(cls, data: Any, default: Optional["SizeRange"] = None) -> Optional["SizeRange"]:
        if not isinstance(data, dict):
            return default
        low = as_number(data.get("min"))
        high = as_number(data.get("max"))
        if low is None or high is None or low < 0 or high < low:
            return default
        return cls(low, high)

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class Position:
    """CSS-style placement on the overlay, e.g. x='45%', y='2rem'"""
    x: str
    y: str
    anchor: str = "top"

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Position"]:
        if not isinstance(data, dict):
            return None
        x = as_text(data.get("x"))
        y = as_text(data.get("y"))
        if x is None or y is None:
            return None
        return cls(x, y)

    def to_dict(self) -> Dict[str, str]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class AnimKind:
    """One animated decorative species with its own population settings"""
    id: str
    enabled: bool
    count: int
    speed: float
    size: SizeRange
    type: AnimationType
    positions: Tuple[Position, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["AnimKind"]:
        """Full definition; None when a required field is missing or invalid"""
        if not isinstance(data, dict):
            return None
        kind_id = as_text(data.get("id"))
        count = as_number(data.get("count"))
        speed = as_number(data.get("speed"))
        size = SizeRange.from_dict(data.get("size"))
        if kind_id is None or count is None or speed is None or size is None:
            return None
        if count < 0 or speed <= 0:
            return None
        enabled = as_bool(data.get("enabled"))
        positions = tuple(
            p for p in (Position.from_dict(item) for item in data.get("positions") or []) if p
        )
        return cls(
            id=kind_id,
            enabled=True if enabled is None else enabled,
            count=int(count),
            speed=speed,
            size=size,
            type=AnimationType.parse(data.get("type")),
            positions=positions,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "enabled": self.enabled,
            "count": self.count,
            "speed": self.speed,
            "size": self.size.to_dict(),
            "type": self.type.value,
        }
        if self.positions:
            data["positions"] = [p.to_dict() for p in self.positions]
        return data

    def persisted(self) -> Dict[str, Any]:
        """Subset stored by the persistence boundary"""
        return {"id": self.id, "enabled": self.enabled, "speed": self.speed}


@dataclass(frozen=True)
class BubbleKind:
    """Ambient bubble pool settings"""
    enabled: bool
    count: int
    speed: float
    size: SizeRange

    id: str = field(default="bubble", init=False)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["BubbleKind"]:
        if not isinstance(data, dict):
            return None
        count = as_number(data.get("count"))
        speed = as_number(data.get("speed"))
        size = SizeRange.from_dict(data.get("size"))
        if count is None or speed is None or size is None or count < 0 or speed <= 0:
            return None
        enabled = as_bool(data.get("enabled"))
        return cls(True if enabled is None else enabled, int(count), speed, size)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "count": self.count,
            "speed": self.speed,
            "size": self.size.to_dict(),
        }


@dataclass(frozen=True)
class AnimationConfig:
    """
    Desired population description

    Example:
        config = AnimationConfig.from_dict({
            "characters": [{"id": "eagle", "count": 2, "speed": 1,
                            "size": {"min": 40, "max": 60}, "type": "floating"}],
            "decorations": [],
            "bubbles": None,
        })
        config.signature()  # (('eagle',), ())
    """
    characters: Tuple[AnimKind, ...] = ()
    decorations: Tuple[AnimKind, ...] = ()
    bubbles: Optional[BubbleKind] = None

    @classmethod
    def empty(cls) -> "AnimationConfig":
        return cls()

    def signature(self) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        """Sorted kind ids per pool; a change means a theme/preset switch"""
        return (
            tuple(sorted(k.id for k in self.characters)),
            tuple(sorted(k.id for k in self.decorations)),
        )

    def iter_kinds(self) -> Iterator[Tuple[AnimationPool, AnimKind]]:
        for kind in self.characters:
            yield AnimationPool.CHARACTERS, kind
        for kind in self.decorations:
            yield AnimationPool.DECORATIONS, kind

    def find(self, pool: AnimationPool, kind_id: str) -> Optional[AnimKind]:
        kinds = self.characters if pool is AnimationPool.CHARACTERS else self.decorations
        for kind in kinds:
            if kind.id == kind_id:
                return kind
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "characters": [k.to_dict() for k in self.characters],
            "decorations": [k.to_dict() for k in self.decorations],
            "bubbles": self.bubbles.to_dict() if self.bubbles else None,
        }

    def persisted(self) -> Dict[str, Any]:
        """Partial form stored by the persistence boundary"""
        return {
            "characters": [k.persisted() for k in self.characters],
            "decorations": [k.persisted() for k in self.decorations],
            "bubbles": {"enabled": self.bubbles.enabled} if self.bubbles else None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["AnimationConfig"]:
        """Full definitions only; invalid kinds are dropped, duplicate ids keep the first"""
        if not isinstance(data, dict):
            return None
        return cls(
            characters=_parse_kinds(data.get("characters")),
            decorations=_parse_kinds(data.get("decorations")),
            bubbles=BubbleKind.from_dict(data.get("bubbles")),
        )


def _parse_kinds(items: Any) -> Tuple[AnimKind, ...]:
    if not isinstance(items, list):
        return ()
    kinds: List[AnimKind] = []
    seen = set()
    for item in items:
        kind = AnimKind.from_dict(item)
        if kind is None or kind.id in seen:
            continue
        seen.add(kind.id)
        kinds.append(kind)
    return tuple(kinds)

