# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Vector layer → standalone SVG.

Works on raw decoder records, since the canonical tree keeps no geometry
beyond bounds. The emitted SVG has the document's pixel size and viewBox,
so the outline sits exactly where it sits in the design.

Fill and stroke are approximations: only solid colors are carried over.
A gradient fill becomes ``fill="none"`` and a gradient stroke is omitted.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional
from xml.sax.saxutils import escape

from psdscope.analyze.colorspace import normalize
from psdscope.analyze.paths import mask_paths, paths_to_data
from psdscope.analyze.tree import has_field
from psdscope.errors import VectorDataMissing
from psdscope.schema import VectorLayerSummary
from psdscope.traversal import raw_children, walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SvgOptions:
    """Configuration for SVG emission."""

    # Digits after the decimal point in path coordinates
    decimals: int = 2

    # Fill used when a solid fill is present but its color cannot be read
    default_fill: str = "#000000"


@dataclass(frozen=True, slots=True)
class StrokeStyle:
    """Resolved outline stroke of a vector layer."""
    color: str
    width: float
    cap: Optional[str] = None
    join: Optional[str] = None


# =============================================================================
# Layer Lookup (raw tree)
# =============================================================================


def _name(raw: Any) -> Optional[str]:
    name = raw.get("name") if isinstance(raw, Mapping) else None
    return name if isinstance(name, str) else None


def _name_contains(raw: Any, query: str) -> bool:
    name = _name(raw)
    return bool(name) and query.lower() in name.lower()


def has_vector_mask(raw: Any) -> bool:
    return isinstance(raw, Mapping) and has_field(raw, "vectorMask")


def all_vector_layers(raw_layers: Iterable[Any]) -> list[Mapping]:
    """Every raw layer carrying a vector mask, in document order."""
    return [node for node, _ in walk(raw_layers, raw_children) if has_vector_mask(node)]


def find_vector_layer(raw_layers: Iterable[Any], query: str) -> Optional[Mapping]:
    """First vector layer whose name contains ``query`` (case-insensitive)."""
    for node, _ in walk(raw_layers, raw_children):
        if has_vector_mask(node) and _name_contains(node, query):
            return node
    return None


def find_raw_group(raw_layers: Iterable[Any], query: str) -> Optional[Mapping]:
    """First raw layer with children whose name contains ``query``."""
    for node, _ in walk(raw_layers, raw_children):
        if raw_children(node) and _name_contains(node, query):
            return node
    return None


def list_vector_layers(raw_layers: Iterable[Any]) -> list[VectorLayerSummary]:
    """Summaries of every exportable vector layer."""
    summaries = []
    for raw in all_vector_layers(raw_layers):
        stroke = raw.get("vectorStroke")
        summaries.append(VectorLayerSummary(
            name=_name(raw) or "Unnamed",
            has_fill=has_field(raw, "vectorFill"),
            has_stroke=isinstance(stroke, Mapping) and bool(stroke.get("strokeEnabled")),
        ))
    return summaries


# =============================================================================
# Fill / Stroke Resolution
# =============================================================================


def _solid_color(content: Any) -> Optional[str]:
    """Canonical hex of solid vector content; None for gradients or absence."""
    if not isinstance(content, Mapping) or isinstance(content.get("colorStops"), (list, tuple)):
        return None
    return normalize(content.get("color"))


def resolve_fill(raw: Mapping, options: Optional[SvgOptions] = None) -> str:
    """
    SVG fill value for a vector layer.

    Returns:
        Canonical hex for a solid fill, ``options.default_fill`` for a solid
        fill with an unreadable color, "none" for no fill or a gradient fill.
    """
    options = options or SvgOptions()
    content = raw.get("vectorFill")
    if not isinstance(content, Mapping):
        return "none"
    if isinstance(content.get("colorStops"), (list, tuple)):
        return "none"
    return _solid_color(content) or options.default_fill


def _line_width(stroke: Mapping) -> float:
    width = stroke.get("lineWidth")
    if isinstance(width, Mapping):
        width = width.get("value")
    if isinstance(width, (int, float)) and not isinstance(width, bool) and math.isfinite(width):
        return float(width)
    return 0.0


def resolve_stroke(raw: Mapping) -> Optional[StrokeStyle]:
    """
    Stroke of a vector layer, or None when there is nothing to draw.

    A stroke is absent when ``strokeEnabled`` is explicitly False, when its
    width is zero, or when its content is not a readable solid color.
    """
    stroke = raw.get("vectorStroke")
    if not isinstance(stroke, Mapping):
        return None
    width = _line_width(stroke)
    if stroke.get("strokeEnabled") is False or width <= 0:
        return None
    color = _solid_color(stroke.get("content"))
    if color is None:
        return None
    cap = stroke.get("lineCapType")
    join = stroke.get("lineJoinType")
    return StrokeStyle(
        color=color,
        width=width,
        cap=cap if isinstance(cap, str) else None,
        join=join if isinstance(join, str) else None,
    )


# =============================================================================
# SVG Emission
# =============================================================================


def _attr(value: Any) -> str:
    """Escape a value for a double-quoted XML attribute."""
    return escape(str(value), {'"': "&quot;"})


def vector_layer_to_svg(
    raw: Mapping,
    width: int,
    height: int,
    options: Optional[SvgOptions] = None,
) -> str:
    """
    Render one vector layer as a self-contained SVG document.

    Args:
        raw: Raw layer record carrying ``vectorMask``
        width: Document width in pixels
        height: Document height in pixels
        options: Emission settings (uses defaults if None)

    Raises:
        VectorDataMissing: If the layer has no vector mask.

    Example output::

        <?xml version="1.0" encoding="UTF-8"?>
        <svg xmlns="http://www.w3.org/2000/svg" width="100" height="50" viewBox="0 0 100 50">
          <path d="M 10.00 10.00 C ... Z"
                fill="#FF0000"
          />
        </svg>
    """
    options = options or SvgOptions()
    if not has_vector_mask(raw):
        raise VectorDataMissing(_name(raw))

    paths = mask_paths(raw["vectorMask"])
    if not paths:
        logger.warning("Vector mask of %r has no readable paths", _name(raw))
    data = paths_to_data(paths, width, height, decimals=options.decimals)
    w, h = _attr(width), _attr(height)
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">',
        f'  <path d="{data}"',
        f'        fill="{_attr(resolve_fill(raw, options))}"',
    ]

    stroke = resolve_stroke(raw)
    if stroke is not None:
        lines.append(f'        stroke="{stroke.color}"')
        lines.append(f'        stroke-width="{stroke.width:g}"')
        if stroke.cap:
            lines.append(f'        stroke-linecap="{_attr(stroke.cap)}"')
        if stroke.join:
            lines.append(f'        stroke-linejoin="{_attr(stroke.join)}"')

    lines.append("  />")
    lines.append("</svg>")
    return "\n".join(lines)
