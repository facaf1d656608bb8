# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""Base types for serializers."""

from enum import Enum


class PaletteFormat(Enum):
    """Textual renderings of a ColorPalette."""

    SUMMARY = "summary"
    DETAILED = "detailed"
    CSS = "css"


class ChildrenFormat(Enum):
    """Renderings of a group's children."""

    TREE = "tree"
    DETAILED = "detailed"
