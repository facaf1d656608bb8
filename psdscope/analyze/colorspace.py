# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Color normalization.

The decoder reports colors in six shapes and never tags which one it used.
Detection is by field presence, checked in a fixed priority order:

    1. Fractional RGB   {fr, fg, fb}     channels in [0, 1]
    2. Integer RGB      {r, g, b}        channels in [0, 255]
    3. Grayscale        {k}, no "c"      k in [0, 1], 1 = black
    4. HSB              {h, s, b}        h in degrees, s/b in [0, 1]
    5. Lab              {l, a, b}        CIE L*a*b*, D65
    6. CMYK             {c, m, y, k}     all in [0, 1]

:func:`classify_color` performs that detection once, at the boundary;
:func:`normalize` turns any recognised shape into canonical hex.
Unrecognised or absent input yields None, never an exception.

Channel rounding is half-up (``floor(x + 0.5)``), not NumPy's
round-half-to-even, so 127.5 becomes 128.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from psdscope.schema import RGB


class ColorEncoding(Enum):
    """Source color shapes, in detection priority order."""
    FRACTIONAL_RGB = "frgb"
    INTEGER_RGB = "rgb"
    GRAYSCALE = "grayscale"
    HSB = "hsb"
    LAB = "lab"
    CMYK = "cmyk"


# =============================================================================
# Detection
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.number)) and not isinstance(value, bool)


def _has_numbers(color: Mapping, *keys: str) -> bool:
    return all(_is_number(color.get(k)) for k in keys)


def classify_color(color: Any) -> Optional[ColorEncoding]:
    """
    Identify which encoding a raw color record uses.

    Grayscale and CMYK both carry ``k``; a record is grayscale only when it
    has no ``c`` key at all.

    Returns:
        The detected encoding, or None if the record matches no shape.
    """
    if not isinstance(color, Mapping):
        return None
    if _has_numbers(color, "fr", "fg", "fb"):
        return ColorEncoding.FRACTIONAL_RGB
    if _has_numbers(color, "r", "g", "b"):
        return ColorEncoding.INTEGER_RGB
    if _has_numbers(color, "k") and "c" not in color:
        return ColorEncoding.GRAYSCALE
    if _has_numbers(color, "h", "s", "b"):
        return ColorEncoding.HSB
    if _has_numbers(color, "l", "a", "b"):
        return ColorEncoding.LAB
    if _has_numbers(color, "c", "m", "y", "k"):
        return ColorEncoding.CMYK
    return None


# =============================================================================
# Per-Encoding Conversions (to unclamped 0-255 floats)
# =============================================================================


def _fractional_rgb(color: Mapping) -> NDArray[np.float64]:
    return np.array([color["fr"], color["fg"], color["fb"]], dtype=np.float64) * 255.0


def _integer_rgb(color: Mapping) -> NDArray[np.float64]:
    return np.array([color["r"], color["g"], color["b"]], dtype=np.float64)


def _grayscale(color: Mapping) -> NDArray[np.float64]:
    gray = (1.0 - float(color["k"])) * 255.0
    return np.array([gray, gray, gray], dtype=np.float64)


def _hsb(color: Mapping) -> NDArray[np.float64]:
    """
    HSB (a.k.a. HSV) to RGB using the six 60° sector formula.
    """
    h = float(color["h"]) / 360.0
    s = float(color["s"])
    v = float(color["b"])
    if not math.isfinite(h):
        return np.full(3, np.nan)

    i = math.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector = {
        0: (v, t, p),
        1: (q, v, p),
        2: (p, v, t),
        3: (p, q, v),
        4: (t, p, v),
        5: (v, p, q),
    }[i % 6]
    return np.array(sector, dtype=np.float64) * 255.0


# D65 reference white
_D65_WHITE = np.array([0.95047, 1.0, 1.08883], dtype=np.float64)

# Linear XYZ to RGB (no gamma companding)
_XYZ_TO_RGB = np.array([
    [3.2406, -1.5372, -0.4986],
    [-0.9689, 1.8758, 0.0415],
    [0.0557, -0.204, 1.057],
], dtype=np.float64)

_LAB_EPSILON = 0.008856
_LAB_KAPPA = 7.787
_LAB_OFFSET = 16.0 / 116.0


def _lab(color: Mapping) -> NDArray[np.float64]:
    """
    Simplified Lab → XYZ → RGB.

    This is a best-effort approximation: the result is linear RGB scaled to
    0-255, clamped, with no sRGB gamma applied.
    """
    y = (float(color["l"]) + 16.0) / 116.0
    x = float(color["a"]) / 500.0 + y
    z = y - float(color["b"]) / 200.0

    f = np.array([x, y, z], dtype=np.float64)
    cubed = f ** 3
    linear = np.where(cubed > _LAB_EPSILON, cubed, (f - _LAB_OFFSET) / _LAB_KAPPA)
    xyz = linear * _D65_WHITE

    rgb = _XYZ_TO_RGB @ xyz * 255.0
    return np.clip(rgb, 0.0, 255.0)


def _cmyk(color: Mapping) -> NDArray[np.float64]:
    cmy = np.array([color["c"], color["m"], color["y"]], dtype=np.float64)
    return 255.0 * (1.0 - cmy) * (1.0 - float(color["k"]))


_CONVERTERS = {
    ColorEncoding.FRACTIONAL_RGB: _fractional_rgb,
    ColorEncoding.INTEGER_RGB: _integer_rgb,
    ColorEncoding.GRAYSCALE: _grayscale,
    ColorEncoding.HSB: _hsb,
    ColorEncoding.LAB: _lab,
    ColorEncoding.CMYK: _cmyk,
}


# =============================================================================
# Public API
# =============================================================================


def round_half_up(values: NDArray[np.float64]) -> NDArray[np.float64]:
    """Round to nearest integer, ties away from zero for positive values."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def to_rgb(color: Any) -> Optional[RGB]:
    """
    Convert any supported raw color record to integer RGB.

    Each channel is rounded half-up and then clamped to [0, 255].

    Returns:
        RGB, or None if the record is absent, unrecognised or non-finite.
    """
    encoding = classify_color(color)
    if encoding is None:
        return None

    channels = _CONVERTERS[encoding](color)
    if not np.all(np.isfinite(channels)):
        return None

    r, g, b = np.clip(round_half_up(channels), 0, 255).astype(int)
    return RGB(int(r), int(g), int(b))


def normalize(color: Any) -> Optional[str]:
    """
    Convert any supported raw color record to canonical hex.

    Args:
        color: Raw color mapping in one of the six encodings

    Returns:
        Hex string like "#1A1A1A", or None for unsupported/absent input

    Example:
        >>> normalize({"r": 26, "g": 26, "b": 26})
        '#1A1A1A'
        >>> normalize({"c": 0, "m": 0, "y": 0, "k": 1})
        '#000000'
    """
    rgb = to_rgb(color)
    return rgb.hex if rgb is not None else None
