# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Palette serializers.

Three renderings of a ColorPalette for design-to-code workflows:

- summary: the sorted unique hex list (plus gradients)
- detailed: every solid color grouped by hex, with the sources and layers
  that use it
- css: ``:root`` custom properties, one per unique color and gradient

No rendering changes the palette; they only format it.
"""

from __future__ import annotations

from psdscope.runtime.serializers.base import PaletteFormat
from psdscope.schema import ColorPalette

# Layers listed per color before collapsing into "(+N more)"
MAX_LAYERS_LISTED = 3


def to_palette_text(
    palette: ColorPalette,
    *,
    format: PaletteFormat = PaletteFormat.SUMMARY,
) -> str:
    """Render a palette in the requested format."""
    if format == PaletteFormat.CSS:
        return to_css(palette)
    elif format == PaletteFormat.DETAILED:
        return to_detailed(palette)
    else:
        return to_summary(palette)


def _gradient_name(name: str | None) -> str:
    return name or "Unnamed"


def to_summary(palette: ColorPalette) -> str:
    """
    Unique colors, then gradients.

    Example::

        Found 2 unique color(s) and 1 gradient(s)

        ## Colors
        - #1A1A1A
        - #FF0000

        ## Gradients
        - Sunset: #FF0000 → #0000FF
    """
    lines = [
        f"Found {len(palette.unique_colors)} unique color(s) "
        f"and {len(palette.gradients)} gradient(s)",
        "",
        "## Colors",
    ]
    lines.extend(f"- {hex_color}" for hex_color in palette.unique_colors)

    if palette.gradients:
        lines.append("")
        lines.append("## Gradients")
        for grad in palette.gradients:
            lines.append(f"- {_gradient_name(grad.name)}: {' → '.join(grad.colors)}")

    return "\n".join(lines)


def to_detailed(palette: ColorPalette) -> str:
    """
    Solid colors grouped by hex (first-seen order), then gradients.

    Example::

        ## Solid Colors

        **#1A1A1A**
          Sources: text, drop-shadow
          Layers: Title, Subtitle
    """
    grouped: dict[str, tuple[list[str], list[str]]] = {}
    for color in palette.solid_colors:
        sources, layers = grouped.setdefault(color.hex, ([], []))
        if color.source not in sources:
            sources.append(color.source)
        if color.layer_name not in layers:
            layers.append(color.layer_name)

    lines = ["## Solid Colors\n"]
    for hex_color, (sources, layers) in grouped.items():
        extra = len(layers) - MAX_LAYERS_LISTED
        more = f" (+{extra} more)" if extra > 0 else ""
        lines.append(f"**{hex_color}**")
        lines.append(f"  Sources: {', '.join(sources)}")
        lines.append(f"  Layers: {', '.join(layers[:MAX_LAYERS_LISTED])}{more}")
        lines.append("")

    if palette.gradients:
        lines.append("\n## Gradients\n")
        for grad in palette.gradients:
            lines.append(f"**{_gradient_name(grad.name)}** ({grad.source})")
            lines.append(f"  Colors: {' → '.join(grad.colors)}")
            lines.append(f"  Layer: {grad.layer_name}")
            lines.append("")

    return "\n".join(lines)


def to_css(palette: ColorPalette) -> str:
    """
    CSS custom properties.

    Gradients are emitted as left-to-right linear gradients; stop positions
    are not carried over.
    """
    lines = [":root {"]
    for i, hex_color in enumerate(palette.unique_colors, start=1):
        lines.append(f"  --color-{i}: {hex_color};")
    lines.append("")
    for i, grad in enumerate(palette.gradients, start=1):
        lines.append(f"  --gradient-{i}: linear-gradient(90deg, {', '.join(grad.colors)});")
    lines.append("}")
    return "\n".join(lines)
