# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Whole-tree color and gradient harvesting.

Every layer is visited in document order. On each layer, contributions are
read in a fixed order:

    text fill → vector fill → vector stroke → drop shadows → inner shadows
    → outer glow → inner glow → color overlays → stroke effects → satin
    → gradient overlays

An effect contributes only if it is present and not explicitly disabled
(``enabled`` absent means enabled). Solid colors that fail to normalize and
gradients with no normalizable stop are skipped without error.

Array effects are tagged by position: the first entry gets the bare tag
("drop-shadow"), later ones a 1-based suffix ("drop-shadow-2").
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from psdscope.analyze.colorspace import normalize
from psdscope.schema import ColorPalette, ExtractedColor, GradientInfo, Layer, RGB
from psdscope.traversal import raw_children, walk

logger = logging.getLogger(__name__)

Node = Union[Layer, Mapping]


def _entries(value: Any) -> list[Mapping]:
    """Effect slots may hold a single record or a list of records."""
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, (list, tuple)):
        return [v for v in value if isinstance(v, Mapping)]
    return []


def _enabled(entry: Mapping) -> bool:
    return entry.get("enabled") is not False


def _tag(base: str, index: int) -> str:
    return base if index == 0 else f"{base}-{index + 1}"


class _LayerCollector:
    """Accumulates the contributions of a single layer."""

    def __init__(self, layer_name: str) -> None:
        self.layer_name = layer_name
        self.colors: list[ExtractedColor] = []
        self.gradients: list[GradientInfo] = []

    def add_color(self, color: Any, source: str) -> None:
        hex_color = normalize(color)
        if hex_color is not None:
            self.colors.append(ExtractedColor.from_hex(hex_color, source, self.layer_name))

    def add_gradient(self, gradient: Any, source: str) -> None:
        if not isinstance(gradient, Mapping):
            return
        stops = gradient.get("colorStops")
        if not isinstance(stops, (list, tuple)):
            return
        colors = [
            hex_color
            for hex_color in (normalize(s.get("color")) for s in stops if isinstance(s, Mapping))
            if hex_color is not None
        ]
        if colors:
            name = gradient.get("name")
            self.gradients.append(GradientInfo(
                colors=tuple(colors),
                source=source,
                layer_name=self.layer_name,
                name=name if isinstance(name, str) else None,
            ))

    def add_content(self, content: Any, source: str) -> None:
        """Vector fill/stroke content: a gradient if it has stops, else solid."""
        if not isinstance(content, Mapping):
            return
        if isinstance(content.get("colorStops"), (list, tuple)):
            self.add_gradient(content, f"{source}-gradient")
        elif content.get("color") is not None:
            self.add_color(content["color"], source)


def _collect_effects(effects: Mapping, out: _LayerCollector) -> None:
    for i, shadow in enumerate(_entries(effects.get("dropShadow"))):
        if _enabled(shadow) and shadow.get("color"):
            out.add_color(shadow["color"], _tag("drop-shadow", i))

    for i, shadow in enumerate(_entries(effects.get("innerShadow"))):
        if _enabled(shadow) and shadow.get("color"):
            out.add_color(shadow["color"], _tag("inner-shadow", i))

    for key, source in (("outerGlow", "outer-glow"), ("innerGlow", "inner-glow")):
        glow = effects.get(key)
        if isinstance(glow, Mapping) and _enabled(glow) and glow.get("color"):
            out.add_color(glow["color"], source)

    for i, fill in enumerate(_entries(effects.get("solidFill"))):
        if _enabled(fill) and fill.get("color"):
            out.add_color(fill["color"], _tag("color-overlay", i))

    for i, stroke in enumerate(_entries(effects.get("stroke"))):
        if not _enabled(stroke):
            continue
        if stroke.get("color"):
            out.add_color(stroke["color"], _tag("stroke-effect", i))
        if stroke.get("gradient"):
            out.add_gradient(stroke["gradient"], _tag("stroke-gradient", i))

    satin = effects.get("satin")
    if isinstance(satin, Mapping) and _enabled(satin) and satin.get("color"):
        out.add_color(satin["color"], "satin")

    for i, overlay in enumerate(_entries(effects.get("gradientOverlay"))):
        if _enabled(overlay) and overlay.get("gradient"):
            out.add_gradient(overlay["gradient"], _tag("gradient-overlay", i))


def _raw_fields(node: Node) -> Mapping:
    """
    View a node as a raw record.

    Canonical layers only retain their text color, which is re-expressed
    as an integer RGB record so it flows through the same normalizer.
    """
    if not isinstance(node, Layer):
        return node if isinstance(node, Mapping) else {}
    fields: dict = {"name": node.name}
    if node.text is not None and node.text.color is not None:
        fields["text"] = {"style": {"fillColor": RGB.from_hex(node.text.color).to_dict()}}
    return fields


def _children(node: Node) -> Any:
    if isinstance(node, Layer):
        return node.children
    return raw_children(node)


def collect_layer(node: Node, layer_name: Optional[str] = None) -> tuple[list[ExtractedColor], list[GradientInfo]]:
    """
    Harvest a single layer (not its children).

    Returns:
        (solid colors, gradients) in contribution order
    """
    raw = _raw_fields(node)
    if layer_name is None:
        name = raw.get("name")
        layer_name = name if isinstance(name, str) and name else "Unnamed"
    out = _LayerCollector(layer_name)

    text = raw.get("text")
    if isinstance(text, Mapping):
        style = text.get("style")
        if isinstance(style, Mapping) and style.get("fillColor"):
            out.add_color(style["fillColor"], "text")

    out.add_content(raw.get("vectorFill"), "vector-fill")

    stroke = raw.get("vectorStroke")
    if isinstance(stroke, Mapping):
        out.add_content(stroke.get("content"), "vector-stroke")

    effects = raw.get("effects")
    if isinstance(effects, Mapping):
        _collect_effects(effects, out)

    return out.colors, out.gradients


def harvest(layers: Iterable[Node]) -> ColorPalette:
    """
    Collect every solid color and gradient reachable from a layer tree.

    Args:
        layers: Top-level raw layer records or canonical Layers

    Returns:
        ColorPalette with entries in document order and a sorted set of
        unique solid hexes. Never raises on uninterpretable color data.
    """
    solid: list[ExtractedColor] = []
    gradients: list[GradientInfo] = []
    visited = 0

    for node, _ in walk(layers, _children):
        colors, grads = collect_layer(node)
        solid.extend(colors)
        gradients.extend(grads)
        visited += 1

    palette = ColorPalette.from_entries(solid, gradients)
    logger.debug(
        "Harvested %d colors (%d unique) and %d gradients from %d layers",
        len(solid), len(palette.unique_colors), len(gradients), visited,
    )
    return palette
