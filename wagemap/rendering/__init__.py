"""Rendering layer: paint-rule compiler and the renderer boundary."""

from .compiler import PaintRuleCache, compile_paint_rule
from .models import (
    Bounds,
    FitBoundsRequest,
    FitPadding,
    PaintRule,
    RenderedFeature,
    collect_bounds,
)
from .recording import RecordingRenderer
from .renderer import MapRenderer

__all__ = [
    "compile_paint_rule",
    "PaintRuleCache",
    "PaintRule",
    "MapRenderer",
    "RecordingRenderer",
    "RenderedFeature",
    "Bounds",
    "FitPadding",
    "FitBoundsRequest",
    "collect_bounds",
]
