# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""Tests for building the canonical layer tree from raw records."""

import pytest

from psdscope.analyze.index import flatten_by_kind, limit_depth
from psdscope.analyze.tree import (
    UNNAMED,
    build_document,
    build_layers,
    classify_kind,
    resolve_bounds,
    resolve_opacity,
    resolve_text_style,
)
from psdscope.decode import JsonDecoder
from psdscope.schema import ColorMode, Document, LayerKind
from psdscope.traversal import walk


def _text(content="Hello", size=24, fill=None):
    style = {"fontSize": size, "font": {"name": "Inter-Bold"}}
    if fill is not None:
        style["fillColor"] = fill
    return {"text": content, "style": style}


def _raw_document(*children, **fields):
    doc = {"width": 1440, "height": 900, "colorMode": 3, "children": list(children)}
    doc.update(fields)
    return doc


class TestClassifyKind:
    """Kinds follow TEXT > GROUP > IMAGE > SHAPE > UNKNOWN."""

    def test_text(self):
        assert classify_kind({"text": _text()}) is LayerKind.TEXT

    def test_text_wins_over_children(self):
        raw = {"text": _text(), "children": [{"name": "x"}]}
        assert classify_kind(raw) is LayerKind.TEXT

    def test_group(self):
        raw = {"children": [{"name": "x"}], "canvas": True, "vectorMask": {}}
        assert classify_kind(raw) is LayerKind.GROUP

    def test_image(self):
        assert classify_kind({"canvas": True, "vectorMask": {"paths": []}}) is LayerKind.IMAGE

    def test_shape_from_mask(self):
        assert classify_kind({"vectorMask": {"paths": []}}) is LayerKind.SHAPE

    def test_shape_from_stroke(self):
        assert classify_kind({"vectorStroke": {"strokeEnabled": True}}) is LayerKind.SHAPE

    def test_unknown(self):
        assert classify_kind({"name": "Adjustment"}) is LayerKind.UNKNOWN

    def test_empty_children_is_not_group(self):
        assert classify_kind({"children": []}) is LayerKind.UNKNOWN

    def test_empty_records_count_as_present(self):
        """Decoders dump binary payloads as empty records."""
        assert classify_kind({"canvas": {}}) is LayerKind.IMAGE
        assert classify_kind({"vectorMask": {}}) is LayerKind.SHAPE
        assert classify_kind({"vectorStroke": {}}) is LayerKind.SHAPE
        assert classify_kind({"text": {}}) is LayerKind.TEXT

    def test_false_flags_are_absent(self):
        assert classify_kind({"canvas": False, "vectorMask": None}) is LayerKind.UNKNOWN


class TestFieldResolution:

    def test_opacity_scaled(self):
        assert resolve_opacity({"opacity": 128}) == pytest.approx(128 / 255)

    def test_opacity_default(self):
        assert resolve_opacity({}) == 1.0

    def test_opacity_clamped(self):
        assert resolve_opacity({"opacity": 400}) == 1.0
        assert resolve_opacity({"opacity": -3}) == 0.0

    def test_bounds(self):
        bounds = resolve_bounds({"left": 10, "top": 20, "right": 110, "bottom": 70})
        assert (bounds.left, bounds.top, bounds.width, bounds.height) == (10, 20, 100, 50)

    def test_bounds_default_zero(self):
        bounds = resolve_bounds({})
        assert (bounds.left, bounds.top, bounds.width, bounds.height) == (0, 0, 0, 0)

    def test_negative_size_passed_through(self):
        bounds = resolve_bounds({"left": 50, "top": 50, "right": 40, "bottom": 10})
        assert bounds.width == -10
        assert bounds.height == -40

    def test_text_style(self):
        style = resolve_text_style(_text("Title", 48, {"fr": 1, "fg": 0, "fb": 0}))
        assert style.content == "Title"
        assert style.font == "Inter-Bold"
        assert style.font_size == 48
        assert style.color == "#FF0000"

    def test_text_style_uninterpretable_color(self):
        style = resolve_text_style(_text(fill={"q": 1}))
        assert style.color is None

    def test_text_style_missing_content(self):
        assert resolve_text_style({"style": {}}).content == ""


class TestBuildDocument:

    def test_document_fields(self):
        doc = build_document(_raw_document(bitsPerChannel=16))
        assert doc.width == 1440
        assert doc.height == 900
        assert doc.color_mode is ColorMode.RGB
        assert doc.bits_per_channel == 16
        assert doc.layers == ()

    @pytest.mark.parametrize("code, mode", [
        (0, ColorMode.BITMAP),
        (1, ColorMode.GRAYSCALE),
        (4, ColorMode.CMYK),
        (9, ColorMode.LAB),
        (5, ColorMode.UNKNOWN),
    ])
    def test_color_mode_codes(self, code, mode):
        assert build_document(_raw_document(colorMode=code)).color_mode is mode

    def test_color_mode_absent_is_rgb(self):
        raw = _raw_document()
        del raw["colorMode"]
        assert build_document(raw).color_mode is ColorMode.RGB

    def test_bits_default(self):
        assert build_document(_raw_document()).bits_per_channel == 8

    def test_layer_fields(self):
        doc = build_document(_raw_document(
            {"name": "Hero", "hidden": True, "opacity": 51, "children": [
                {"name": "Title", "text": _text("Welcome", 64, {"r": 26, "g": 26, "b": 26})},
                {"name": "Photo", "canvas": True, "left": 0, "top": 0, "right": 800, "bottom": 600},
            ]},
        ))
        hero = doc.layers[0]
        assert hero.kind is LayerKind.GROUP
        assert hero.visible is False
        assert hero.opacity == pytest.approx(0.2)
        assert [c.name for c in hero.children] == ["Title", "Photo"]

        title, photo = hero.children
        assert title.kind is LayerKind.TEXT
        assert title.text.color == "#1A1A1A"
        assert photo.kind is LayerKind.IMAGE
        assert photo.text is None
        assert photo.bounds.width == 800

    def test_unnamed(self):
        doc = build_document(_raw_document({}, {"name": ""}))
        assert [layer.name for layer in doc.layers] == [UNNAMED, UNNAMED]

    def test_malformed_record(self):
        layers = build_layers(["not a layer", {"name": "ok"}])
        assert layers[0].name == UNNAMED
        assert layers[0].kind is LayerKind.UNKNOWN
        assert layers[1].name == "ok"

    def test_deterministic(self):
        raw = _raw_document(
            {"name": "G", "children": [{"name": "T", "text": _text()}]},
            {"name": "S", "vectorMask": {"paths": []}},
        )
        first = build_document(raw)
        second = build_document(raw)
        assert first == second
        assert first is not second

    def test_json_round_trip(self):
        doc = build_document(_raw_document(
            {"name": "G", "children": [{"name": "T", "text": _text(fill={"k": 1})}]},
        ))
        assert Document.from_json(doc.to_json()) == doc

    def test_deep_tree(self):
        """Trees deeper than the interpreter's recursion limit still build."""
        raw = {"name": "leaf", "text": _text()}
        for i in range(5000):
            raw = {"name": f"g{i}", "children": [raw]}
        doc = build_document(_raw_document(raw))

        assert sum(1 for _ in walk(doc.layers)) == 5001
        assert [layer.name for layer in flatten_by_kind(doc.layers)] == ["leaf"]

        shallow = limit_depth(doc.layers, 1)
        assert shallow[0].children[0].children[0].name == "... (1 children)"

    def test_non_finite_numbers_fall_back(self):
        raw = JsonDecoder().decode(
            b'{"width": 1e400, "height": 10, "children": [{"name": "a", "left": NaN,'
            b' "right": 1e400, "bottom": -Infinity, "opacity": Infinity,'
            b' "text": {"text": "x", "style": {"fontSize": NaN}}}]}'
        )
        doc = build_document(raw)
        layer = doc.layers[0]
        assert doc.width == 0
        assert (layer.bounds.left, layer.bounds.width, layer.bounds.height) == (0, 0, 0)
        assert layer.opacity == 1.0
        assert layer.text.font_size is None

    def test_image_layer_from_json_dump(self):
        raw = JsonDecoder().decode(b'{"width": 10, "height": 10, "children": [{"name": "Photo", "canvas": {}}]}')
        assert build_document(raw).layers[0].kind is LayerKind.IMAGE
