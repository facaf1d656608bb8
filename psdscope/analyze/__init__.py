# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Analysis core for psdscope.

Turns a raw decoded layer tree into queryable, derived artifacts: the
canonical layer tree, a harvested color palette, vector outlines and hero
section roles. Every function here is pure over its input tree.
"""

from psdscope.analyze.colorspace import ColorEncoding, classify_color, normalize, to_rgb
from psdscope.analyze.harvest import harvest
from psdscope.analyze.hero import HeroConfig, classify, extract_hero, resolve_scope
from psdscope.analyze.index import (
    find_by_name,
    find_group,
    flatten_by_kind,
    limit_depth,
    search_by_name,
    suggest,
    text_layers,
)
from psdscope.analyze.paths import BezierPath, Knot, paths_to_data, to_path
from psdscope.analyze.tree import build_document, build_layers, classify_kind
from psdscope.analyze.vectors import (
    SvgOptions,
    all_vector_layers,
    find_raw_group,
    find_vector_layer,
    list_vector_layers,
    vector_layer_to_svg,
)

__all__ = [
    # Colors
    "ColorEncoding",
    "classify_color",
    "normalize",
    "to_rgb",
    "harvest",
    # Layer tree
    "build_document",
    "build_layers",
    "classify_kind",
    # Queries
    "find_by_name",
    "search_by_name",
    "flatten_by_kind",
    "find_group",
    "limit_depth",
    "suggest",
    "text_layers",
    # Vectors
    "Knot",
    "BezierPath",
    "to_path",
    "paths_to_data",
    "SvgOptions",
    "all_vector_layers",
    "find_vector_layer",
    "find_raw_group",
    "list_vector_layers",
    "vector_layer_to_svg",
    # Hero
    "HeroConfig",
    "resolve_scope",
    "classify",
    "extract_hero",
]
