# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""Tests for color normalization across the six source encodings."""

import re

import numpy as np
import pytest

from psdscope.analyze.colorspace import (
    ColorEncoding,
    classify_color,
    normalize,
    round_half_up,
    to_rgb,
)

_HEX = re.compile(r"^#[0-9A-F]{6}$")


class TestClassification:
    """Shape detection follows the fixed priority order."""

    def test_fractional_rgb(self):
        assert classify_color({"fr": 1, "fg": 0, "fb": 0}) is ColorEncoding.FRACTIONAL_RGB

    def test_fractional_wins_over_integer(self):
        color = {"fr": 1.0, "fg": 0.0, "fb": 0.0, "r": 10, "g": 10, "b": 10}
        assert classify_color(color) is ColorEncoding.FRACTIONAL_RGB

    def test_integer_rgb(self):
        assert classify_color({"r": 26, "g": 26, "b": 26}) is ColorEncoding.INTEGER_RGB

    def test_grayscale(self):
        assert classify_color({"k": 0.3}) is ColorEncoding.GRAYSCALE

    def test_cmyk_not_grayscale(self):
        """A "c" key, even zero-valued, rules out grayscale."""
        assert classify_color({"c": 0, "m": 0, "y": 0, "k": 0.3}) is ColorEncoding.CMYK

    def test_hsb(self):
        assert classify_color({"h": 120, "s": 1, "b": 1}) is ColorEncoding.HSB

    def test_lab(self):
        assert classify_color({"l": 50, "a": 10, "b": -10}) is ColorEncoding.LAB

    def test_unrecognised(self):
        assert classify_color({"x": 1}) is None
        assert classify_color(None) is None
        assert classify_color("#FF0000") is None

    def test_booleans_are_not_numbers(self):
        assert classify_color({"r": True, "g": False, "b": True}) is None


class TestIntegerAndFractionalRGB:

    def test_dark_gray(self):
        assert normalize({"r": 26, "g": 26, "b": 26}) == "#1A1A1A"

    def test_fractional_red(self):
        assert normalize({"fr": 1, "fg": 0, "fb": 0}) == "#FF0000"

    def test_half_rounds_up(self):
        """0.5 * 255 = 127.5 rounds to 128, not to even."""
        assert normalize({"fr": 0.5, "fg": 0, "fb": 0}) == "#800000"

    def test_fractional_channels_rounded(self):
        assert normalize({"r": 12.4, "g": 12.5, "b": 12.6}) == "#0C0D0D"

    def test_out_of_range_clamped(self):
        assert normalize({"r": 300, "g": -5, "b": 12}) == "#FF000C"

    def test_non_finite_is_none(self):
        assert normalize({"r": float("nan"), "g": 0, "b": 0}) is None
        assert normalize({"fr": float("inf"), "fg": 0, "fb": 0}) is None


class TestGrayscale:

    def test_black(self):
        assert normalize({"k": 1}) == "#000000"

    def test_white(self):
        assert normalize({"k": 0}) == "#FFFFFF"

    def test_mid(self):
        assert normalize({"k": 0.5}) == "#808080"


class TestHSB:

    def test_red(self):
        assert normalize({"h": 0, "s": 1, "b": 1}) == "#FF0000"

    def test_green(self):
        assert normalize({"h": 120, "s": 1, "b": 1}) == "#00FF00"

    def test_blue(self):
        assert normalize({"h": 240, "s": 1, "b": 1}) == "#0000FF"

    def test_full_turn_wraps(self):
        assert normalize({"h": 360, "s": 1, "b": 1}) == "#FF0000"

    def test_unsaturated_is_gray(self):
        assert normalize({"h": 200, "s": 0, "b": 0.5}) == "#808080"

    def test_black(self):
        assert normalize({"h": 90, "s": 0.7, "b": 0}) == "#000000"


class TestLab:

    def test_white(self):
        assert normalize({"l": 100, "a": 0, "b": 0}) == "#FFFFFF"

    def test_black(self):
        assert normalize({"l": 0, "a": 0, "b": 0}) == "#000000"

    def test_channels_clamped(self):
        rgb = to_rgb({"l": 60, "a": 120, "b": -120})
        assert rgb is not None
        for channel in (rgb.r, rgb.g, rgb.b):
            assert 0 <= channel <= 255


class TestCMYK:

    def test_black(self):
        assert normalize({"c": 0, "m": 0, "y": 0, "k": 1}) == "#000000"

    def test_white(self):
        assert normalize({"c": 0, "m": 0, "y": 0, "k": 0}) == "#FFFFFF"

    def test_cyan(self):
        assert normalize({"c": 1, "m": 0, "y": 0, "k": 0}) == "#00FFFF"


class TestOutputShape:
    """normalize always yields canonical hex or None."""

    @pytest.mark.parametrize("color", [
        {"fr": 0.2, "fg": 0.4, "fb": 0.6},
        {"r": 1, "g": 2, "b": 3},
        {"k": 0.9},
        {"h": 300, "s": 0.5, "b": 0.75},
        {"l": 40, "a": -20, "b": 30},
        {"c": 0.1, "m": 0.9, "y": 0.5, "k": 0.2},
    ])
    def test_canonical_hex(self, color):
        result = normalize(color)
        assert result is not None
        assert _HEX.match(result)

    def test_deterministic(self):
        color = {"h": 33, "s": 0.8, "b": 0.9}
        assert normalize(color) == normalize(color)

    def test_absent(self):
        assert normalize(None) is None
        assert normalize({}) is None


class TestRounding:

    def test_half_up(self):
        np.testing.assert_array_equal(round_half_up(np.array([0.5, 1.5, 2.5, 2.4])), [1, 2, 3, 2])


class TestMalformedInput:

    @pytest.mark.parametrize("color", [
        {"h": float("nan"), "s": 1, "b": 1},
        {"h": float("inf"), "s": 1, "b": 1},
        {"l": float("nan"), "a": 0, "b": 0},
        {"c": 0, "m": 0, "y": float("inf"), "k": 0},
        {"r": "26", "g": 26, "b": 26},
    ])
    def test_never_raises(self, color):
        assert normalize(color) is None
