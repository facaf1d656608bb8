# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Read-only queries over a built layer tree.

All searches walk the tree in pre-order, depth-first (see
:func:`psdscope.traversal.walk`), so "first match" always means first in
document order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Optional

from psdscope.schema import Bounds, Document, Layer, LayerKind
from psdscope.traversal import fold, walk


def _contains(name: str, query: str) -> bool:
    return query.lower() in name.lower()


def find_by_name(
    layers: Iterable[Layer],
    query: str,
    exact: bool = False,
) -> Optional[Layer]:
    """
    Return the first layer whose name matches, or None.

    Args:
        layers: Top-level layers to search (with their subtrees)
        query: Name or name fragment
        exact: If True, require case-sensitive full equality. Otherwise a
            case-insensitive substring match is enough.
    """
    for layer, _ in walk(layers):
        if (layer.name == query) if exact else _contains(layer.name, query):
            return layer
    return None


def search_by_name(layers: Iterable[Layer], query: str) -> list[Layer]:
    """Every layer whose name contains ``query`` (case-insensitive), in document order."""
    return [layer for layer, _ in walk(layers) if _contains(layer.name, query)]


def flatten_by_kind(layers: Iterable[Layer], kind: LayerKind = LayerKind.TEXT) -> list[Layer]:
    """Every layer of ``kind`` anywhere in the tree, in document order."""
    return [layer for layer, _ in walk(layers) if layer.kind is kind]


def find_group(layers: Iterable[Layer], query: str) -> Optional[Layer]:
    """First layer with children whose name contains ``query`` (case-insensitive)."""
    for layer, _ in walk(layers):
        if layer.children and _contains(layer.name, query):
            return layer
    return None


def suggest(layers: Iterable[Layer], query: str, limit: int = 5) -> list[str]:
    """
    Names to offer when a lookup misses.

    Uses the first three characters of the query as a looser search.
    """
    return [layer.name for layer in search_by_name(layers, query[:3])[:limit]]


def placeholder(hidden_children: int) -> Layer:
    """Stand-in node for children elided by :func:`limit_depth`."""
    return Layer(
        name=f"... ({hidden_children} children)",
        kind=LayerKind.UNKNOWN,
        visible=True,
        opacity=1.0,
        bounds=Bounds(),
    )


def limit_depth(layers: Sequence[Layer], max_depth: int) -> tuple[Layer, ...]:
    """
    Truncate a tree for display.

    Layers at depth ``max_depth`` (top level is 0) keep their own fields
    but have their children replaced by a single placeholder reporting how
    many children were elided. Shallower layers are copied with their
    (truncated) children; a limit at or beyond the tree's depth returns an
    equal tree.
    """

    def truncate(layer: Layer, depth: int, children: Optional[list[Layer]]) -> Layer:
        if children is None:
            if not layer.children:
                return layer
            return replace(layer, children=(placeholder(len(layer.children)),))
        return replace(layer, children=tuple(children))

    return tuple(fold(layers, truncate, stop_depth=max_depth))


def text_layers(document: Document) -> dict:
    """Text layers of a document, with the document size, ready for JSON."""
    return {
        "documentSize": {"width": document.width, "height": document.height},
        "textLayers": [layer.to_dict() for layer in flatten_by_kind(document.layers)],
    }
