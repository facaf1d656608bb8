# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Schema definitions for decoded design documents.

All types in this module are immutable (frozen dataclasses).
A built Document is a snapshot of one request; nothing is cached or mutated.
"""

from psdscope.schema.document import (
    Bounds,
    ColorMode,
    Document,
    HeroSection,
    Layer,
    LayerKind,
    TextStyle,
    VectorLayerSummary,
)
from psdscope.schema.palette import (
    RGB,
    ColorPalette,
    ExtractedColor,
    GradientInfo,
    is_canonical_hex,
)

__all__ = [
    # Layer tree
    "Document",
    "Layer",
    "LayerKind",
    "ColorMode",
    "Bounds",
    "TextStyle",
    # Derived views
    "HeroSection",
    "VectorLayerSummary",
    # Colors
    "RGB",
    "ExtractedColor",
    "GradientInfo",
    "ColorPalette",
    "is_canonical_hex",
]
