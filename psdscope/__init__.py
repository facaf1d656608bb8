# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
psdscope -- Structured metadata from layered design documents.

Turns a decoded layer tree into data that design-to-code tooling can use:
a canonical layer tree, a color palette, SVG outlines of vector layers and
the text roles of a hero section.

Quick start::

    from psdscope import load, harvest, extract_hero

    doc = load("landing.json")
    doc.to_json()                    # Canonical layer tree
    extract_hero(doc, "hero")        # heading / subheading / body / cta
"""

from __future__ import annotations

__version__ = "1.0.0"

from pathlib import Path
from typing import Optional, Union

from psdscope.analyze import (
    build_document,
    extract_hero,
    find_by_name,
    flatten_by_kind,
    harvest,
    limit_depth,
    normalize,
    search_by_name,
    vector_layer_to_svg,
)
from psdscope.decode import Decoder, JsonDecoder, load_raw_document
from psdscope.errors import DecodeFailure, PsdScopeError, SourceNotFound, VectorDataMissing
from psdscope.schema import (
    ColorPalette,
    Document,
    HeroSection,
    Layer,
    LayerKind,
)


def load(path: Union[str, Path], decoder: Optional[Decoder] = None) -> Document:
    """Decode a source file and build its canonical Document."""
    return build_document(load_raw_document(path, decoder))


__all__ = [
    # Core API
    "load",
    "build_document",
    "harvest",
    "normalize",
    "extract_hero",
    "vector_layer_to_svg",
    "find_by_name",
    "search_by_name",
    "flatten_by_kind",
    "limit_depth",
    # Decoding
    "Decoder",
    "JsonDecoder",
    "load_raw_document",
    # Types (commonly needed)
    "Document",
    "Layer",
    "LayerKind",
    "ColorPalette",
    "HeroSection",
    # Errors
    "PsdScopeError",
    "SourceNotFound",
    "DecodeFailure",
    "VectorDataMissing",
    # Version
    "__version__",
]
