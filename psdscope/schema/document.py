# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Canonical layer-tree schema.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same raw tree → same Document
- Total: Every layer gets exactly one kind, every field has a default
- Serializable: JSON-ready for downstream design-to-code tooling

The dictionary shape produced by ``to_dict`` is the wire format consumed by
downstream tools, so its keys are camelCase (``colorMode``, ``fontSize``)
rather than Python attribute names.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from psdscope.traversal import fold


# =============================================================================
# Enumerations
# =============================================================================


class ColorMode(Enum):
    """Document color mode as reported by the decoder."""
    BITMAP = "Bitmap"
    GRAYSCALE = "Grayscale"
    INDEXED = "Indexed"
    RGB = "RGB"
    CMYK = "CMYK"
    MULTICHANNEL = "Multichannel"
    DUOTONE = "Duotone"
    LAB = "Lab"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: Optional[int]) -> ColorMode:
        """Map the decoder's numeric color mode (absent → RGB)."""
        if code is None:
            return cls.RGB
        return _COLOR_MODE_CODES.get(code, cls.UNKNOWN)


_COLOR_MODE_CODES = {
    0: ColorMode.BITMAP,
    1: ColorMode.GRAYSCALE,
    2: ColorMode.INDEXED,
    3: ColorMode.RGB,
    4: ColorMode.CMYK,
    7: ColorMode.MULTICHANNEL,
    8: ColorMode.DUOTONE,
    9: ColorMode.LAB,
}


class LayerKind(Enum):
    """
    Derived layer classification.

    Assigned by strict precedence: TEXT ≻ GROUP ≻ IMAGE ≻ SHAPE ≻ UNKNOWN.
    """
    TEXT = "text"
    IMAGE = "image"
    SHAPE = "shape"
    GROUP = "group"
    UNKNOWN = "unknown"


# =============================================================================
# Leaf Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class Bounds:
    """
    Layer rectangle in document pixels.

    ``width`` and ``height`` are ``right - left`` and ``bottom - top`` and are
    passed through as-is: degenerate source geometry yields negative values.
    """
    left: int = 0
    top: int = 0
    width: int = 0
    height: int = 0

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Bounds:
        """Deserialize from dictionary."""
        return cls(
            left=data.get("left", 0),
            top=data.get("top", 0),
            width=data.get("width", 0),
            height=data.get("height", 0),
        )


@dataclass(frozen=True, slots=True)
class TextStyle:
    """
    Resolved styling of a text layer.

    Attributes:
        content: The text itself (empty string when the layer has none)
        font: PostScript font name
        font_size: Font size in points
        color: Canonical hex of the text fill (e.g. "#1A1A1A")
        line_height: Leading
        letter_spacing: Tracking
    """
    content: str = ""
    font: Optional[str] = None
    font_size: Optional[float] = None
    color: Optional[str] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None

    def to_dict(self) -> dict:
        """Serialize to dictionary, omitting unset fields."""
        d: dict = {"content": self.content}
        optional = {
            "font": self.font,
            "fontSize": self.font_size,
            "color": self.color,
            "lineHeight": self.line_height,
            "letterSpacing": self.letter_spacing,
        }
        d.update({k: v for k, v in optional.items() if v is not None})
        return d

    @classmethod
    def from_dict(cls, data: dict) -> TextStyle:
        """Deserialize from dictionary."""
        return cls(
            content=data.get("content", ""),
            font=data.get("font"),
            font_size=data.get("fontSize"),
            color=data.get("color"),
            line_height=data.get("lineHeight"),
            letter_spacing=data.get("letterSpacing"),
        )


# =============================================================================
# Layer Tree
# =============================================================================


@dataclass(frozen=True, slots=True)
class Layer:
    """
    A single node of the canonical layer tree.

    A layer with children is a container and owns them exclusively; the
    structure is a strict tree mirroring the decoder's hierarchy.

    Attributes:
        name: Layer name ("Unnamed" when the source has none)
        kind: Derived classification (see LayerKind)
        visible: False for hidden layers
        opacity: Normalized opacity in [0, 1]
        bounds: Geometry in document pixels
        text: Text styling, only for TEXT layers
        children: Child layers in document order (empty for leaves)
    """
    name: str
    kind: LayerKind
    visible: bool = True
    opacity: float = 1.0
    bounds: Bounds = field(default_factory=Bounds)
    text: Optional[TextStyle] = None
    children: tuple[Layer, ...] = ()

    def __post_init__(self) -> None:
        """Validate layer invariants."""
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"Opacity must be 0-1, got {self.opacity}")
        if self.kind is LayerKind.GROUP and self.text is not None:
            raise ValueError("Group layers cannot carry text styling")

    @property
    def is_container(self) -> bool:
        """True if the layer has at least one child."""
        return bool(self.children)

    def to_dict(self) -> dict:
        """Serialize the layer and its whole subtree."""
        return fold([self], _layer_to_dict)[0]

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> Layer:
        """Deserialize a layer and its subtree from dictionary."""
        return fold([data], _layer_from_dict, _dict_children)[0]


def _layer_to_dict(layer: Layer, depth: int, children: Optional[list[dict]]) -> dict:
    d = {
        "name": layer.name,
        "type": layer.kind.value,
        "visible": layer.visible,
        "opacity": layer.opacity,
        "bounds": layer.bounds.to_dict(),
    }
    if layer.text is not None:
        d["text"] = layer.text.to_dict()
    if children:
        d["children"] = children
    return d


def _dict_children(data: dict) -> list:
    return data.get("children") or []


def _layer_from_dict(data: dict, depth: int, children: Optional[list[Layer]]) -> Layer:
    text = data.get("text")
    return Layer(
        name=data.get("name", "Unnamed"),
        kind=LayerKind(data.get("type", "unknown")),
        visible=data.get("visible", True),
        opacity=data.get("opacity", 1.0),
        bounds=Bounds.from_dict(data.get("bounds", {})),
        text=TextStyle.from_dict(text) if text else None,
        children=tuple(children or ()),
    )


def layers_to_dicts(layers: tuple[Layer, ...] | list[Layer]) -> list[dict]:
    """Serialize a sequence of layers (each with its subtree)."""
    return fold(layers, _layer_to_dict)


# =============================================================================
# Top-Level Containers
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document:
    """
    A decoded design document reduced to its canonical layer tree.

    Built once per request and discarded afterwards; there is no cache.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        color_mode: Document color mode
        bits_per_channel: Channel depth (8 when the decoder does not say)
        layers: Top-level layers in document order
    """
    width: int
    height: int
    color_mode: ColorMode = ColorMode.RGB
    bits_per_channel: int = 8
    layers: tuple[Layer, ...] = ()

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        return {
            "width": self.width,
            "height": self.height,
            "colorMode": self.color_mode.value,
            "bitsPerChannel": self.bits_per_channel,
            "layers": layers_to_dicts(self.layers),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> Document:
        """Deserialize from dictionary."""
        return cls(
            width=data["width"],
            height=data["height"],
            color_mode=ColorMode(data.get("colorMode", "RGB")),
            bits_per_channel=data.get("bitsPerChannel", 8),
            layers=tuple(fold(data.get("layers", []), _layer_from_dict, _dict_children)),
        )

    @classmethod
    def from_json(cls, json_str: str) -> Document:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))


@dataclass(frozen=True, slots=True)
class HeroSection:
    """
    Structural roles assigned to the text of a hero section.

    Attributes:
        document_width: Canvas width of the source document
        document_height: Canvas height of the source document
        heading: Largest text layer in scope
        subheading: Second largest text layer in scope
        body: Remaining text layers, largest first
        cta: Direct scope layers whose names look like calls to action
    """
    document_width: int
    document_height: int
    heading: Optional[Layer] = None
    subheading: Optional[Layer] = None
    body: tuple[Layer, ...] = ()
    cta: tuple[Layer, ...] = ()

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "documentSize": {"width": self.document_width, "height": self.document_height},
            "heading": self.heading.to_dict() if self.heading is not None else None,
            "subheading": self.subheading.to_dict() if self.subheading is not None else None,
            "body": layers_to_dicts(self.body),
            "cta": layers_to_dicts(self.cta),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class VectorLayerSummary:
    """One exportable vector layer, as listed for the caller."""
    name: str
    has_fill: bool
    has_stroke: bool

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"name": self.name, "hasFill": self.has_fill, "hasStroke": self.has_stroke}
