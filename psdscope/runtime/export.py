# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Batch vector export.

Renders every vector layer of a document (or of one group) to SVG text,
keyed by a filesystem-safe file name. A layer that fails to render is
logged and skipped; it never aborts the rest of the batch.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from psdscope.analyze.vectors import (
    SvgOptions,
    all_vector_layers,
    find_raw_group,
    vector_layer_to_svg,
)
from psdscope.errors import PsdScopeError
from psdscope.traversal import raw_children

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")


def sanitize_filename(name: str) -> str:
    """
    Make a layer name safe to use as a file name.

    Replaces ``< > : " / \\ | ? *`` and every run of whitespace with "_".
    Applying it twice gives the same result as applying it once.
    """
    return _WHITESPACE.sub("_", _UNSAFE_CHARS.sub("_", name))


@dataclass(frozen=True, slots=True)
class VectorBatch:
    """
    Result of a batch export.

    Attributes:
        files: (file name, SVG text) pairs in document order
        skipped: Names of layers that could not be rendered
    """
    files: tuple[tuple[str, str], ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.files)

    @property
    def filenames(self) -> list[str]:
        return [name for name, _ in self.files]


def export_vectors(
    raw_document: Mapping[str, Any],
    group_name: Optional[str] = None,
    *,
    options: Optional[SvgOptions] = None,
) -> VectorBatch:
    """
    Render vector layers of a raw document to SVG.

    Args:
        raw_document: Decoded raw document (needs width/height/children)
        group_name: If given, only vector layers inside the first group whose
            name contains it (case-insensitive); an unmatched name yields an
            empty batch
        options: SVG emission settings

    Returns:
        VectorBatch with one ``<sanitized name>.svg`` entry per rendered layer.
    """
    top = raw_children(raw_document)
    if group_name:
        group = find_raw_group(top, group_name)
        layers = all_vector_layers(raw_children(group)) if group is not None else []
    else:
        layers = all_vector_layers(top)

    width = raw_document.get("width", 0)
    height = raw_document.get("height", 0)

    files: list[tuple[str, str]] = []
    skipped: list[str] = []
    for raw in layers:
        name = raw.get("name") or "unnamed"
        try:
            svg = vector_layer_to_svg(raw, width, height, options)
        except (PsdScopeError, ValueError, TypeError) as e:
            logger.warning("Skipping vector layer %r: %s", name, e)
            skipped.append(str(name))
            continue
        files.append((sanitize_filename(str(name)) + ".svg", svg))

    logger.info("Rendered %d of %d vector layer(s)", len(files), len(layers))
    return VectorBatch(files=tuple(files), skipped=tuple(skipped))
