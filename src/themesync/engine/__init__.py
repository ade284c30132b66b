"""Pure computation: color transforms, token composition, animation reconciliation"""

from themesync.engine.color_transform import TransformParams, transform_color, transform_gradient
from themesync.engine.theme_composer import ThemeComposer, compose_theme
from themesync.engine.animation_reconciler import AnimationReconciler, ReconcileReport

__all__ = [
    "TransformParams",
    "transform_color",
    "transform_gradient",
    "ThemeComposer",
    "compose_theme",
    "AnimationReconciler",
    "ReconcileReport",
]
