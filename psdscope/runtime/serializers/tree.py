# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
ASCII layer tree.

Example::

    ├── Header (group)
    │   ├── Logo (shape)
    │   └── Title (text)
    └── Background (image) [hidden]
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from psdscope.runtime.serializers.base import ChildrenFormat
from psdscope.schema import Document, Layer, LayerKind
from psdscope.schema.document import layers_to_dicts

_KIND_LABELS = {
    LayerKind.GROUP: "(group)",
    LayerKind.TEXT: "(text)",
    LayerKind.IMAGE: "(image)",
    LayerKind.SHAPE: "(shape)",
    LayerKind.UNKNOWN: "",
}


def format_tree(layers: Sequence[Layer], prefix: str = "") -> str:
    """Render layers and their subtrees with box-drawing connectors."""
    lines: list[str] = []
    # (layer, prefix, is_last) in pre-order
    stack = [
        (layer, prefix, i == len(layers) - 1)
        for i, layer in reversed(list(enumerate(layers)))
    ]
    while stack:
        layer, indent, is_last = stack.pop()
        connector = "└── " if is_last else "├── "
        hidden = "" if layer.visible else " [hidden]"
        lines.append(f"{indent}{connector}{layer.name} {_KIND_LABELS[layer.kind]}{hidden}")

        child_indent = indent + ("    " if is_last else "│   ")
        children = layer.children
        stack.extend(
            (child, child_indent, i == len(children) - 1)
            for i, child in reversed(list(enumerate(children)))
        )
    return "\n".join(lines)


def to_tree_text(document: Document, layers: Sequence[Layer] | None = None) -> str:
    """Document header plus tree, e.g. ``PSD: 1440x900`` then the tree."""
    shown = document.layers if layers is None else layers
    return f"PSD: {document.width}x{document.height}\n\n{format_tree(shown)}"


def to_children_text(
    group: Layer,
    *,
    format: ChildrenFormat = ChildrenFormat.TREE,
) -> str:
    """Describe a group's direct children (with subtrees)."""
    if not group.children:
        return f'"{group.name}" has no children (type: {group.kind.value})'
    if format == ChildrenFormat.TREE:
        body = format_tree(group.children)
    else:
        body = json.dumps(layers_to_dicts(group.children), indent=2, ensure_ascii=False)
    return f'Children of "{group.name}" ({len(group.children)} items):\n\n{body}'
