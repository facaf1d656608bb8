# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Layer tree construction.

Turns the decoder's raw records into the canonical :class:`Document`.
One pass, bottom-up: children are built before their parent because a
layer's kind depends on whether it has children.

Nothing here fails per layer. Missing or malformed fields fall back to
defaults ("Unnamed", opacity 1.0, zero bounds) so that one odd record
never costs the caller the rest of the document.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from psdscope.analyze.colorspace import normalize
from psdscope.schema import Bounds, ColorMode, Document, Layer, LayerKind, TextStyle
from psdscope.traversal import fold, raw_children

logger = logging.getLogger(__name__)

UNNAMED = "Unnamed"


def _number(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return value
    return None


def has_field(raw: Mapping, key: str) -> bool:
    """
    True if a raw record carries ``key``.

    Any record or list counts as present, even an empty one: decoders dump
    raster data and vector masks as ``{}`` when their payload is binary.
    Scalars count when truthy, so ``False``, ``0`` and ``""`` are absent.
    """
    value = raw.get(key)
    if isinstance(value, (Mapping, list, tuple)):
        return True
    return bool(value)


def _mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


# =============================================================================
# Per-Layer Derivations
# =============================================================================


def classify_kind(raw: Mapping, has_children: Optional[bool] = None) -> LayerKind:
    """
    Assign exactly one kind by strict precedence.

    TEXT (has text) ≻ GROUP (has children) ≻ IMAGE (has raster data)
    ≻ SHAPE (has vector mask or vector stroke) ≻ UNKNOWN.

    Args:
        raw: Raw layer record
        has_children: Override for child presence (defaults to the record's
            own ``children`` list)
    """
    if has_children is None:
        has_children = bool(raw_children(raw))
    if has_field(raw, "text"):
        return LayerKind.TEXT
    if has_children:
        return LayerKind.GROUP
    if has_field(raw, "canvas"):
        return LayerKind.IMAGE
    if has_field(raw, "vectorMask") or has_field(raw, "vectorStroke"):
        return LayerKind.SHAPE
    return LayerKind.UNKNOWN


def resolve_bounds(raw: Mapping) -> Bounds:
    """
    Convert left/top/right/bottom into left/top/width/height.

    Negative sizes from inverted source geometry are passed through.
    """
    left = int(_number(raw.get("left")) or 0)
    top = int(_number(raw.get("top")) or 0)
    right = int(_number(raw.get("right")) or 0)
    bottom = int(_number(raw.get("bottom")) or 0)
    return Bounds(left=left, top=top, width=right - left, height=bottom - top)


def resolve_opacity(raw: Mapping) -> float:
    """Raw 0-255 opacity byte → [0, 1]; absent means fully opaque."""
    value = _number(raw.get("opacity"))
    if value is None:
        return 1.0
    return min(1.0, max(0.0, value / 255.0))


def resolve_text_style(raw_text: Any) -> TextStyle:
    """Flatten a raw text record into TextStyle, normalizing the fill color."""
    text = _mapping(raw_text)
    style = _mapping(text.get("style"))
    font = _mapping(style.get("font"))

    content = text.get("text")
    font_name = font.get("name")
    return TextStyle(
        content=content if isinstance(content, str) else "",
        font=font_name if isinstance(font_name, str) else None,
        font_size=_number(style.get("fontSize")),
        color=normalize(style.get("fillColor")),
        line_height=_number(style.get("leading")),
        letter_spacing=_number(style.get("tracking")),
    )


def _build_layer(raw: Any, depth: int, children: Optional[list[Layer]]) -> Layer:
    if not isinstance(raw, Mapping):
        logger.warning("Skipping malformed layer record at depth %d: %r", depth, type(raw).__name__)
        return Layer(name=UNNAMED, kind=LayerKind.UNKNOWN)

    children = children or []
    kind = classify_kind(raw, has_children=bool(children))
    name = raw.get("name")

    return Layer(
        name=name if isinstance(name, str) and name else UNNAMED,
        kind=kind,
        visible=not raw.get("hidden", False),
        opacity=resolve_opacity(raw),
        bounds=resolve_bounds(raw),
        text=resolve_text_style(raw["text"]) if kind is LayerKind.TEXT else None,
        children=tuple(children),
    )


# =============================================================================
# Public API
# =============================================================================


def build_layers(raw_layers: Sequence[Any]) -> tuple[Layer, ...]:
    """Build canonical layers (with subtrees) from raw layer records."""
    return tuple(fold(raw_layers, _build_layer, raw_children))


def build_document(raw: Mapping) -> Document:
    """
    Build a canonical Document from a decoded raw document.

    Args:
        raw: Mapping with ``width``, ``height``, ``colorMode`` (numeric code),
            ``bitsPerChannel`` and ``children`` (raw layer records)

    Returns:
        A new immutable Document. Calling this twice on the same input
        yields two equal, independent trees.
    """
    code = raw.get("colorMode")
    bits = _number(raw.get("bitsPerChannel"))
    layers = build_layers(raw_children(raw))

    document = Document(
        width=int(_number(raw.get("width")) or 0),
        height=int(_number(raw.get("height")) or 0),
        color_mode=ColorMode.from_code(code if isinstance(code, int) else None),
        bits_per_channel=int(bits) if bits is not None else 8,
        layers=layers,
    )
    logger.debug(
        "Built %dx%d %s document with %d top-level layers",
        document.width, document.height, document.color_mode.value, len(layers),
    )
    return document
