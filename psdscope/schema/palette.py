# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Color palette schema.

Every color here is already canonical: a ``#``-prefixed, six-digit,
uppercase hex string. Source attribution (which layer, which fill or
effect) travels with each entry so downstream tooling can trace a color
back to where it was used.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Optional


_HEX_RE = re.compile(r"^#[0-9A-F]{6}$")


def is_canonical_hex(value: str) -> bool:
    """True for strings like "#1A1A1A"."""
    return bool(_HEX_RE.match(value))


# =============================================================================
# Core Color Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGB:
    """A 24-bit sRGB color with integer channels in [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate channels are within 0-255."""
        for channel, value in (("r", self.r), ("g", self.g), ("b", self.b)):
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {channel} must be 0-255, got {value}")

    @property
    def hex(self) -> str:
        """Canonical hex string, e.g. "#FF0000"."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @classmethod
    def from_hex(cls, hex_color: str) -> RGB:
        """Parse "#RRGGBB" or "RRGGBB" (any case)."""
        hex_color = hex_color.lstrip("#")
        return cls(
            r=int(hex_color[0:2], 16),
            g=int(hex_color[2:4], 16),
            b=int(hex_color[4:6], 16),
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"r": self.r, "g": self.g, "b": self.b}


@dataclass(frozen=True, slots=True)
class ExtractedColor:
    """
    A solid color found somewhere in the layer tree.

    Attributes:
        hex: Canonical hex value
        rgb: The same color as integer channels
        source: Where on the layer it came from (e.g. "text", "drop-shadow-2")
        layer_name: Name of the contributing layer
    """
    hex: str
    rgb: RGB
    source: str
    layer_name: str

    def __post_init__(self) -> None:
        """Validate hex is canonical and agrees with rgb."""
        if not is_canonical_hex(self.hex):
            raise ValueError(f"Hex must be #RRGGBB uppercase, got {self.hex!r}")
        if self.rgb.hex != self.hex:
            raise ValueError(f"RGB {self.rgb} does not match hex {self.hex}")

    @classmethod
    def from_hex(cls, hex_color: str, source: str, layer_name: str) -> ExtractedColor:
        """Build an entry from a canonical hex value."""
        return cls(hex=hex_color, rgb=RGB.from_hex(hex_color), source=source, layer_name=layer_name)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "hex": self.hex,
            "rgb": self.rgb.to_dict(),
            "source": self.source,
            "layerName": self.layer_name,
        }


@dataclass(frozen=True, slots=True)
class GradientInfo:
    """
    A gradient found somewhere in the layer tree.

    Attributes:
        colors: Canonical hex of every stop that could be normalized, in stop order
        source: Where on the layer it came from (e.g. "gradient-overlay")
        layer_name: Name of the contributing layer
        name: Gradient preset name, if the source carries one
    """
    colors: tuple[str, ...]
    source: str
    layer_name: str
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the gradient has at least one canonical color."""
        if not self.colors:
            raise ValueError("Gradient must have at least one color")
        for c in self.colors:
            if not is_canonical_hex(c):
                raise ValueError(f"Hex must be #RRGGBB uppercase, got {c!r}")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        d: dict = {}
        if self.name is not None:
            d["name"] = self.name
        d.update({
            "colors": list(self.colors),
            "source": self.source,
            "layerName": self.layer_name,
        })
        return d


# =============================================================================
# Top-Level Container
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorPalette:
    """
    Every color and gradient harvested from a layer tree.

    ``solid_colors`` and ``gradients`` keep insertion (document) order so
    each entry stays attributable. ``unique_colors`` is the sorted,
    duplicate-free set of solid hexes.
    """
    solid_colors: tuple[ExtractedColor, ...] = ()
    gradients: tuple[GradientInfo, ...] = ()
    unique_colors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate unique_colors is sorted, duplicate-free and attributable."""
        if list(self.unique_colors) != sorted(set(self.unique_colors)):
            raise ValueError("unique_colors must be sorted and duplicate-free")
        known = {c.hex for c in self.solid_colors}
        missing = [h for h in self.unique_colors if h not in known]
        if missing:
            raise ValueError(f"unique_colors not found in solid_colors: {missing}")

    @classmethod
    def from_entries(
        cls,
        solid_colors: tuple[ExtractedColor, ...] | list[ExtractedColor],
        gradients: tuple[GradientInfo, ...] | list[GradientInfo],
    ) -> ColorPalette:
        """Build a palette, deriving unique_colors from the solid entries."""
        solid = tuple(solid_colors)
        return cls(
            solid_colors=solid,
            gradients=tuple(gradients),
            unique_colors=tuple(sorted({c.hex for c in solid})),
        )

    @property
    def is_empty(self) -> bool:
        """True if nothing at all was harvested."""
        return not self.unique_colors and not self.gradients

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "solidColors": [c.to_dict() for c in self.solid_colors],
            "gradients": [g.to_dict() for g in self.gradients],
            "uniqueColors": list(self.unique_colors),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
