# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Delivery runtime for psdscope.

Formatting and export of derived results for callers:

1. Serializers -- palette renderings, ASCII trees, group listings
2. Export -- batch SVG rendering with filesystem-safe names

The delivery layer never modifies the results it is given.
"""

from psdscope.runtime.export import VectorBatch, export_vectors, sanitize_filename
from psdscope.runtime.serializers import (
    ChildrenFormat,
    PaletteFormat,
    format_tree,
    to_children_text,
    to_palette_text,
    to_tree_text,
)

__all__ = [
    "to_palette_text",
    "to_tree_text",
    "to_children_text",
    "format_tree",
    "PaletteFormat",
    "ChildrenFormat",
    "export_vectors",
    "sanitize_filename",
    "VectorBatch",
]
