# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Decoder boundary.

Reading the proprietary binary container is not psdscope's job. A decoder
turns source bytes into a raw document mapping::

    {"width": 1440, "height": 900, "colorMode": 3, "bitsPerChannel": 8,
     "children": [ {raw layer}, ... ]}

where raw layers follow the ag-psd record shape (``name``, ``hidden``,
``opacity``, ``left``/``top``/``right``/``bottom``, ``text``, ``children``,
``canvas``, ``vectorMask``, ``vectorFill``, ``vectorStroke``, ``effects``).

:class:`JsonDecoder` reads that mapping from a JSON dump, which is how
trees produced by an external decoder reach this package.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Protocol, Union

from psdscope.errors import DecodeFailure, SourceNotFound

logger = logging.getLogger(__name__)


class Decoder(Protocol):
    """Anything that turns source bytes into a raw document mapping."""

    def decode(self, data: bytes) -> Mapping[str, Any]:
        ...


class JsonDecoder:
    """
    Decode a raw tree serialized as UTF-8 JSON.

    A top-level list is accepted as a bare layer list with no canvas size.
    """

    def decode(self, data: bytes) -> Mapping[str, Any]:
        tree = json.loads(data.decode("utf-8"))
        if isinstance(tree, list):
            return {"width": 0, "height": 0, "children": tree}
        if not isinstance(tree, Mapping):
            raise ValueError(f"Expected a JSON object or array, got {type(tree).__name__}")
        return tree


def load_raw_document(
    path: Union[str, Path],
    decoder: Optional[Decoder] = None,
) -> Mapping[str, Any]:
    """
    Read and decode a source document.

    Args:
        path: Source file (resolved to an absolute path)
        decoder: Decoder to use (JsonDecoder if None)

    Raises:
        SourceNotFound: If the file does not exist.
        DecodeFailure: If the decoder rejects the bytes; the decoder's own
            exception is chained as the cause.
    """
    source = Path(path).resolve()
    if not source.is_file():
        raise SourceNotFound(f"File not found: {source}")

    decoder = decoder or JsonDecoder()
    data = source.read_bytes()
    try:
        raw = decoder.decode(data)
    except Exception as e:
        raise DecodeFailure(f"Failed to decode {source}: {e}") from e

    if not isinstance(raw, Mapping):
        raise DecodeFailure(f"Decoder returned {type(raw).__name__}, expected a mapping")
    logger.debug("Decoded %s (%d bytes)", source, len(data))
    return raw
