# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Vector mask geometry → path commands.

Vector masks store each sub-path as a list of knots. A knot packs three
2D points, all normalized to [0, 1] document space:

    (prevAnchorX, prevAnchorY, anchorX, anchorY, nextAnchorX, nextAnchorY)

Each segment between knot i and its successor is a cubic curve whose
first control point is knot i's "next" point, whose second control point
is the successor's "prev" point, and which ends on the successor's anchor.
Closed paths wrap around from the last knot to the first and end with Z;
open paths drop that last segment and the Z.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


# =============================================================================
# Geometry Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class Knot:
    """One bezier knot in normalized [0, 1] document coordinates."""
    points: tuple[float, float, float, float, float, float]

    def __post_init__(self) -> None:
        """Validate the knot carries exactly three 2D points."""
        if len(self.points) != 6:
            raise ValueError(f"Knot needs 6 coordinates, got {len(self.points)}")

    @property
    def prev(self) -> tuple[float, float]:
        return self.points[0], self.points[1]

    @property
    def anchor(self) -> tuple[float, float]:
        return self.points[2], self.points[3]

    @property
    def next(self) -> tuple[float, float]:
        return self.points[4], self.points[5]

    @classmethod
    def from_raw(cls, raw: Any) -> Optional[Knot]:
        """Accept ``{"points": [...]}`` or a bare 6-number sequence."""
        points = raw.get("points") if isinstance(raw, Mapping) else raw
        if not isinstance(points, (list, tuple)) or len(points) != 6:
            return None
        if not all(isinstance(p, (int, float)) and not isinstance(p, bool) for p in points):
            return None
        return cls(points=tuple(float(p) for p in points))


@dataclass(frozen=True, slots=True)
class BezierPath:
    """A single sub-path of a vector mask."""
    knots: tuple[Knot, ...]
    open: bool = False

    @classmethod
    def from_raw(cls, raw: Any) -> BezierPath:
        """Read ``{"knots": [...], "open": bool}``; malformed knots are dropped."""
        if not isinstance(raw, Mapping):
            return cls(knots=())
        raw_knots = raw.get("knots")
        if not isinstance(raw_knots, (list, tuple)):
            raw_knots = []
        knots = tuple(k for k in (Knot.from_raw(r) for r in raw_knots) if k is not None)
        if len(knots) != len(raw_knots):
            logger.warning("Dropped %d malformed knot(s)", len(raw_knots) - len(knots))
        return cls(knots=knots, open=bool(raw.get("open", False)))


def mask_paths(vector_mask: Any) -> list[BezierPath]:
    """All sub-paths of a raw vector mask record, in stored order."""
    if not isinstance(vector_mask, Mapping):
        return []
    paths = vector_mask.get("paths")
    if not isinstance(paths, (list, tuple)):
        return []
    return [BezierPath.from_raw(p) for p in paths]


# =============================================================================
# Path Commands
# =============================================================================


def _scaled(knots: Sequence[Knot], width: float, height: float) -> NDArray[np.float64]:
    """Knot coordinates as an (N, 6) array in document pixels."""
    points = np.array([k.points for k in knots], dtype=np.float64)
    return points * np.array([width, height] * 3, dtype=np.float64)


def to_path(
    knots: Sequence[Knot],
    width: float,
    height: float,
    *,
    open: bool = False,
    decimals: int = 2,
) -> list[str]:
    """
    Convert one knot sequence to path commands.

    Args:
        knots: Knots in path order
        width: Document width used to scale x coordinates
        height: Document height used to scale y coordinates
        open: If True, omit the closing segment and the Z command
        decimals: Digits after the decimal point in coordinates

    Returns:
        Commands like ``["M 10.00 20.00", "C ...", "Z"]``; empty for no knots.
    """
    if not knots:
        return []

    pts = _scaled(knots, width, height)
    n = len(pts)

    def fmt(x: float, y: float) -> str:
        return f"{x:.{decimals}f} {y:.{decimals}f}"

    commands = [f"M {fmt(pts[0, 2], pts[0, 3])}"]
    segments = n - 1 if open else n
    for i in range(segments):
        current = pts[i]
        following = pts[(i + 1) % n]
        commands.append(
            f"C {fmt(current[4], current[5])}, "
            f"{fmt(following[0], following[1])}, "
            f"{fmt(following[2], following[3])}"
        )
    if not open:
        commands.append("Z")
    return commands


def paths_to_data(
    paths: Sequence[BezierPath],
    width: float,
    height: float,
    *,
    decimals: int = 2,
) -> str:
    """
    Path data for every sub-path of a mask, concatenated in order.

    Sub-paths are converted independently; empty ones contribute nothing.
    """
    commands: list[str] = []
    for path in paths:
        commands.extend(to_path(path.knots, width, height, open=path.open, decimals=decimals))
    return " ".join(commands)
