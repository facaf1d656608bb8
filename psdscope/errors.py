# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Error taxonomy for psdscope.

Only failures that stop an operation are exceptions. A name lookup that
finds nothing is a normal outcome (None plus suggestions), and color data
that cannot be interpreted is silently dropped.
"""

from __future__ import annotations


class PsdScopeError(Exception):
    """Base class for all psdscope errors."""


class SourceNotFound(PsdScopeError, FileNotFoundError):
    """The source document could not be located."""


class DecodeFailure(PsdScopeError):
    """The decoder could not turn the source bytes into a raw tree."""


class VectorDataMissing(PsdScopeError, ValueError):
    """Vector export was requested on a layer without a vector mask."""

    def __init__(self, layer_name: str | None = None) -> None:
        self.layer_name = layer_name
        if layer_name:
            super().__init__(f'Layer "{layer_name}" does not have vector data')
        else:
            super().__init__("Layer does not have vector data")
