# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Hero section heuristic.

Assigns structural roles to the text of a scope (a named group, or the
whole document):

- heading / subheading: the two largest text layers by font size
- body: every other text layer, largest first
- cta: direct scope layers whose names contain a call-to-action keyword

Ordering is by font size only; ties keep document order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from psdscope.analyze.index import flatten_by_kind
from psdscope.schema import Document, HeroSection, Layer, LayerKind
from psdscope.traversal import walk


@dataclass(frozen=True)
class HeroConfig:
    """Configuration for hero classification."""

    # Matched case-insensitively as substrings of direct scope layer names
    cta_keywords: tuple[str, ...] = ("button", "cta", "btn", "action", "click", "submit")


def resolve_scope(layers: Sequence[Layer], group_name: Optional[str] = None) -> tuple[Layer, ...]:
    """
    Layers the classifier should look at.

    With a ``group_name``, the first layer (pre-order) whose name contains it
    case-insensitively is the scope root: its children, or the layer itself
    when it has none. Without a name, or when nothing matches, the whole
    document is the scope.
    """
    if group_name:
        query = group_name.lower()
        for layer, _ in walk(layers):
            if query in layer.name.lower():
                return layer.children or (layer,)
    return tuple(layers)


def _font_size(layer: Layer) -> float:
    if layer.text is None or layer.text.font_size is None:
        return 0
    return layer.text.font_size


def classify(
    scope: Sequence[Layer],
    text_layers: Optional[Sequence[Layer]] = None,
    *,
    config: Optional[HeroConfig] = None,
) -> tuple[Optional[Layer], Optional[Layer], tuple[Layer, ...], tuple[Layer, ...]]:
    """
    Split a scope into heading, subheading, body and call-to-action layers.

    Args:
        scope: Scope layers (only these are checked for CTA names)
        text_layers: Text layers of the scope; flattened from ``scope`` if None
        config: Keyword settings (uses defaults if None)

    Returns:
        (heading, subheading, body, cta)
    """
    config = config or HeroConfig()
    if text_layers is None:
        text_layers = flatten_by_kind(scope, LayerKind.TEXT)

    # sorted() is stable, so equal sizes keep document order
    ranked = sorted(text_layers, key=_font_size, reverse=True)
    heading = ranked[0] if len(ranked) > 0 else None
    subheading = ranked[1] if len(ranked) > 1 else None
    body = tuple(ranked[2:])

    keywords = [kw.lower() for kw in config.cta_keywords]
    cta = tuple(
        layer for layer in scope
        if any(kw in layer.name.lower() for kw in keywords)
    )
    return heading, subheading, body, cta


def extract_hero(
    document: Document,
    group_name: Optional[str] = None,
    *,
    config: Optional[HeroConfig] = None,
) -> HeroSection:
    """Resolve the scope and classify it in one call."""
    scope = resolve_scope(document.layers, group_name)
    heading, subheading, body, cta = classify(scope, config=config)
    return HeroSection(
        document_width=document.width,
        document_height=document.height,
        heading=heading,
        subheading=subheading,
        body=body,
        cta=cta,
    )
