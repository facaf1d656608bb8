# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Serializers for psdscope results.

Each serializer formats an already-derived result for a human or a
downstream tool. None of them alters the data it is given.
"""

from psdscope.runtime.serializers.base import ChildrenFormat, PaletteFormat
from psdscope.runtime.serializers.palette import to_css, to_detailed, to_palette_text, to_summary
from psdscope.runtime.serializers.tree import format_tree, to_children_text, to_tree_text

__all__ = [
    "PaletteFormat",
    "ChildrenFormat",
    "to_palette_text",
    "to_summary",
    "to_detailed",
    "to_css",
    "format_tree",
    "to_tree_text",
    "to_children_text",
]
