"""
Animation Reconciler - live decorative element lifecycle

Diffs the previous AnimationConfig against the current one and applies the
minimal set of create/destroy/retime operations to the render surface.

Per kind (matched by id), in one reconcile() call:
1. Structural: count grew -> create the missing indices; count shrank ->
   destroy the excess, highest index first; disabled -> destroy all
2. Shape: size range (or motion type / fixed positions) changed -> destroy and
   recreate every surviving element, since size is baked in at creation
3. Speed only: retime every live element in place; element identity is kept.
   Never runs for a kind that went through 1 or 2 in the same call; a speed
   change combined with a count change recreates the survivors instead.

If the set of configured kind ids changes (preset switch), every live element
in every pool is destroyed before anything else and the baseline is cleared.

Failures never propagate: a kind without a drawable asset is skipped, and any
error while reconciling one kind leaves that kind with no elements.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from themesync.managers.settings import AnimationSettings
from themesync.models.animation import AnimationConfig, AnimKind, BubbleKind, Position
from themesync.models.enums import AnimationPool, AnimationType
from themesync.rendering.surface import ElementSpec, IRenderSurface, LiveElement
from themesync.utils.logger import get_logger, LogCategory
from themesync.utils.serialization import format_number

log = get_logger().for_category(LogCategory.ANIMATION)

ANIMATION_NAMES = {
    AnimationType.SWIMMING: "swim",
    AnimationType.FLOATING: "float",
    AnimationType.RISING: "bubble",
    AnimationType.FALLING: "fall",
}

# Kinds that occasionally render above content
LAYERED_KINDS = ("cloud", "eagle", "turtle")
FOREGROUND_Z = 15


@dataclass
class ReconcileReport:
    """What one reconcile() call did"""
    created: List[str] = field(default_factory=list)
    destroyed: List[str] = field(default_factory=list)
    retimed: List[str] = field(default_factory=list)
    speed_updated_kinds: List[str] = field(default_factory=list)
    skipped_kinds: List[str] = field(default_factory=list)
    reset: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.created or self.destroyed or self.retimed)


@dataclass(frozen=True)
class _KindView:
    """Pool-independent view of an AnimKind or BubbleKind"""
    key: str
    kind_id: str
    pool: AnimationPool
    enabled: bool
    count: int
    speed: float
    shape: Tuple[Any, ...]
    source: Any


def _view_kind(pool: AnimationPool, kind: AnimKind) -> _KindView:
    return _KindView(
        key=f"{pool.value}:{kind.id}",
        kind_id=kind.id,
        pool=pool,
        enabled=kind.enabled,
        count=kind.count,
        speed=kind.speed,
        shape=(kind.size, kind.type, kind.positions),
        source=kind,
    )


def _view_bubbles(bubbles: BubbleKind) -> _KindView:
    return _KindView(
        key=f"{AnimationPool.BUBBLES.value}:{bubbles.id}",
        kind_id=bubbles.id,
        pool=AnimationPool.BUBBLES,
        enabled=bubbles.enabled,
        count=bubbles.count,
        speed=bubbles.speed,
        shape=(bubbles.size,),
        source=bubbles,
    )


def _percent(value: float) -> str:
    return f"{format_number(round(value, 2))}%"


class AnimationReconciler:
    """
    Sole owner of the live element set

    Example:
        reconciler = AnimationReconciler(VirtualSurface(), assets={"eagle"})
        reconciler.reconcile(config)             # initial population
        report = reconciler.reconcile(faster)    # speed-only -> retimed in place
        reconciler.teardown()
    """

    def __init__(
        self,
        surface: IRenderSurface,
        assets: FrozenSet[str],
        settings: Optional[AnimationSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.surface = surface
        self.assets = frozenset(assets)
        self.settings = settings or AnimationSettings()
        self.rng = rng or random.Random()
        self._previous: Optional[AnimationConfig] = None
        self._live: Dict[str, List[LiveElement]] = {}

    # === Queries ===

    @property
    def previous(self) -> Optional[AnimationConfig]:
        return self._previous

    def live_elements(self, kind_id: Optional[str] = None) -> List[LiveElement]:
        elements = [e for group in self._live.values() for e in group]
        if kind_id is not None:
            elements = [e for e in elements if e.kind_id == kind_id]
        return elements

    # === Reconciliation ===

    def reconcile(self, config: Optional[AnimationConfig], enabled: bool = True) -> ReconcileReport:
        """
        Bring the live element set in line with config

        Args:
            config: Desired population (None clears everything)
            enabled: Master toggle; False clears everything

        Returns:
            ReconcileReport (never raises)
        """
        report = ReconcileReport()

        if not enabled or config is None:
            self._destroy_all(report)
            self._previous = None
            log.debug("Animations cleared", enabled=enabled, destroyed=len(report.destroyed))
            return report

        previous = self._previous
        if previous is not None and previous.signature() != config.signature():
            log.info(
                "Kind set changed, resetting all animation pools",
                before=str(previous.signature()),
                after=str(config.signature()),
            )
            self._destroy_all(report)
            report.reset = True
            previous = None

        for pool, kind in config.iter_kinds():
            prev_kind = previous.find(pool, kind.id) if previous is not None else None
            self._reconcile_safely(
                _view_kind(pool, kind),
                _view_kind(pool, prev_kind) if prev_kind is not None else None,
                report,
            )

        self._reconcile_bubble_pool(config.bubbles, previous.bubbles if previous else None, report)

        # Drop groups for kinds no longer configured (e.g. bubbles removed)
        configured = {_view_kind(p, k).key for p, k in config.iter_kinds()}
        if config.bubbles is not None:
            configured.add(_view_bubbles(config.bubbles).key)
        for key in [k for k in self._live if k not in configured]:
            self._destroy_group(key, report)

        self._previous = config
        if report.changed:
            log.debug(
                "Reconciled animations",
                created=len(report.created),
                destroyed=len(report.destroyed),
                retimed=len(report.retimed),
            )
        return report

    def teardown(self) -> ReconcileReport:
        """Destroy every live element and forget the baseline"""
        return self.reconcile(None, enabled=False)

    def _reconcile_bubble_pool(self, bubbles, prev_bubbles, report: ReconcileReport) -> None:
        if bubbles is None:
            return
        self._reconcile_safely(
            _view_bubbles(bubbles),
            _view_bubbles(prev_bubbles) if prev_bubbles is not None else None,
            report,
        )

    def _reconcile_safely(self, view: _KindView, prev: Optional[_KindView], report: ReconcileReport) -> None:
        try:
            self._reconcile_kind(view, prev, report)
        except Exception as e:
            log.error("Failed to reconcile kind, clearing it", kind=view.kind_id, exception=e)
            report.skipped_kinds.append(view.kind_id)
            self._destroy_group(view.key, report)

    def _target_count(self, view: _KindView) -> int:
        if view.pool is AnimationPool.BUBBLES and self.settings.mobile:
            return view.count // 2
        return view.count

    def _reconcile_kind(self, view: _KindView, prev: Optional[_KindView], report: ReconcileReport) -> None:
        live = self._live.setdefault(view.key, [])
        target = self._target_count(view)

        if not view.enabled or target <= 0:
            self._destroy_group(view.key, report)
            return

        if view.kind_id not in self.assets:
            log.warn("No design asset for kind, skipping", kind=view.kind_id)
            report.skipped_kinds.append(view.kind_id)
            self._destroy_group(view.key, report)
            return

        if prev is None or not live:
            # Fresh population: first run, after a reset, or re-enabled
            self._destroy_group(view.key, report)
            self._grow(view, target, report)
            return

        reshaped = prev.shape != view.shape
        speed_changed = prev.speed != view.speed
        structural = len(live) != target

        # Pass 1a: shrink, highest index first
        while len(live) > target:
            self._destroy(live.pop(), report)

        # Pass 2: recreate survivors whose baked-in parameters are stale
        if reshaped or (structural and speed_changed):
            for position, element in enumerate(list(live)):
                replacement = self._create(view, element.index, report)
                self._destroy(element, report)
                live[position] = replacement

        # Pass 1b: grow
        if len(live) < target:
            self._grow(view, target, report)
            return

        # Pass 3: speed-only fast path
        if speed_changed and not reshaped and not structural:
            for element in live:
                element.set_duration(element.base_duration / view.speed)
                report.retimed.append(element.id)
            report.speed_updated_kinds.append(view.kind_id)

    # === Element operations ===

    def _grow(self, view: _KindView, target: int, report: ReconcileReport) -> None:
        live = self._live.setdefault(view.key, [])
        for index in range(len(live), target):
            live.append(self._create(view, index, report))

    def _destroy(self, element: LiveElement, report: ReconcileReport) -> None:
        try:
            self.surface.destroy(element.node)
        except Exception as e:
            log.error("Surface failed to destroy element", element=element.id, exception=e)
        report.destroyed.append(element.id)

    def _destroy_group(self, key: str, report: ReconcileReport) -> None:
        live = self._live.pop(key, [])
        while live:
            self._destroy(live.pop(), report)

    def _destroy_all(self, report: ReconcileReport) -> None:
        for key in list(self._live):
            self._destroy_group(key, report)

    def _create(self, view: _KindView, index: int, report: ReconcileReport) -> LiveElement:
        builder: Callable = self._bubble_spec if view.pool is AnimationPool.BUBBLES else self._kind_spec
        spec, base_duration = builder(view, index)
        node = self.surface.create(spec)
        report.created.append(spec.element_id)
        return LiveElement(
            id=spec.element_id,
            node=node,
            kind_id=view.kind_id,
            pool=view.pool,
            index=index,
            position=spec.position,
            size=spec.size,
            base_duration=base_duration,
            duration=spec.duration,
            surface=self.surface,
        )

    # === Element styling ===

    def _size(self, size_range) -> float:
        if self.settings.mobile:
            return (size_range.min + size_range.max) / 3
        return self.rng.uniform(size_range.min, size_range.max)

    def _position(self, kind: AnimKind, index: int) -> Position:
        if index < len(kind.positions):
            return kind.positions[index]
        x = _percent(self.rng.uniform(5, 95))
        if kind.type is AnimationType.FALLING:
            return Position(x, "2rem")
        if kind.id == "eagle":
            return Position(x, _percent(self.rng.uniform(15, 65)))
        return Position(x, _percent(self.rng.uniform(10, 90)))

    def _z_index(self, kind_id: str) -> Optional[int]:
        if kind_id == "sun":
            return FOREGROUND_Z
        if kind_id in LAYERED_KINDS:
            return FOREGROUND_Z if self.rng.random() < 0.1 else self.rng.randint(1, 5)
        return None

    def _delay(self, kind_type: AnimationType, index: int) -> float:
        if kind_type is AnimationType.SWIMMING:
            return index * 2.0
        if kind_type is AnimationType.FLOATING:
            return index * 1.5
        if kind_type is AnimationType.FALLING:
            return index * 0.5
        return self.rng.uniform(0, 5)

    def _kind_spec(self, view: _KindView, index: int) -> Tuple[ElementSpec, float]:
        kind: AnimKind = view.source
        base_duration = self.settings.base_speed
        if kind.type is AnimationType.FALLING:
            base_duration /= 2
        spec = ElementSpec(
            element_id=f"{kind.id}-{index}",
            kind_id=kind.id,
            pool=view.pool,
            index=index,
            position=self._position(kind, index),
            size=self._size(kind.size),
            animation_name=ANIMATION_NAMES[kind.type],
            duration=base_duration / kind.speed,
            delay=self._delay(kind.type, index),
            timing="ease-in" if kind.type is AnimationType.FALLING else "ease-in-out",
            reverse=kind.type is AnimationType.SWIMMING and index % 2 == 1,
            z_index=self._z_index(kind.id),
        )
        return spec, base_duration

    def _bubble_spec(self, view: _KindView, index: int) -> Tuple[ElementSpec, float]:
        bubbles: BubbleKind = view.source
        base_duration = self.rng.uniform(self.settings.bubble_base_min, self.settings.bubble_base_max)
        spec = ElementSpec(
            element_id=f"bubble-{index}",
            kind_id=bubbles.id,
            pool=AnimationPool.BUBBLES,
            index=index,
            position=Position(
                _percent(self.rng.uniform(0, 100)),
                _percent(self.rng.uniform(-10, 10)),
                anchor="bottom",
            ),
            size=self.rng.uniform(bubbles.size.min, bubbles.size.max),
            animation_name="bubble",
            duration=base_duration / bubbles.speed,
            delay=self.rng.uniform(0, 5),
        )
        return spec, base_duration
