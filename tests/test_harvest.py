# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""Tests for whole-tree color and gradient harvesting."""

from psdscope.analyze.harvest import collect_layer, harvest
from psdscope.schema import Layer, LayerKind, TextStyle

RED = {"r": 255, "g": 0, "b": 0}
GREEN = {"r": 0, "g": 255, "b": 0}
BLUE = {"r": 0, "g": 0, "b": 255}
DARK = {"fr": 26 / 255, "fg": 26 / 255, "fb": 26 / 255}


def _stops(*colors):
    return [{"color": c, "location": i} for i, c in enumerate(colors)]


def _sources(colors):
    return [c.source for c in colors]


class TestLayerContributions:

    def test_text_fill(self):
        colors, _ = collect_layer({"name": "Title", "text": {"style": {"fillColor": DARK}}})
        assert [(c.hex, c.source, c.layer_name) for c in colors] == [("#1A1A1A", "text", "Title")]

    def test_vector_fill_solid(self):
        colors, _ = collect_layer({"name": "Box", "vectorFill": {"color": RED}})
        assert _sources(colors) == ["vector-fill"]

    def test_vector_fill_gradient(self):
        colors, gradients = collect_layer({
            "name": "Box",
            "vectorFill": {"name": "Sunset", "colorStops": _stops(RED, BLUE)},
        })
        assert colors == []
        assert gradients[0].source == "vector-fill-gradient"
        assert gradients[0].colors == ("#FF0000", "#0000FF")
        assert gradients[0].name == "Sunset"

    def test_vector_stroke(self):
        colors, gradients = collect_layer({
            "name": "Ring",
            "vectorStroke": {"content": {"color": GREEN}},
        })
        assert _sources(colors) == ["vector-stroke"]

        _, gradients = collect_layer({
            "name": "Ring",
            "vectorStroke": {"content": {"colorStops": _stops(GREEN)}},
        })
        assert gradients[0].source == "vector-stroke-gradient"

    def test_contribution_order(self):
        raw = {
            "name": "Busy",
            "text": {"style": {"fillColor": RED}},
            "vectorFill": {"color": GREEN},
            "vectorStroke": {"content": {"color": BLUE}},
            "effects": {
                "gradientOverlay": [{"gradient": {"colorStops": _stops(RED)}}],
                "satin": {"color": RED},
                "stroke": [{"color": GREEN}],
                "solidFill": [{"color": BLUE}],
                "innerGlow": {"color": RED},
                "outerGlow": {"color": GREEN},
                "innerShadow": [{"color": BLUE}],
                "dropShadow": [{"color": RED}],
            },
        }
        colors, gradients = collect_layer(raw)
        assert _sources(colors) == [
            "text",
            "vector-fill",
            "vector-stroke",
            "drop-shadow",
            "inner-shadow",
            "outer-glow",
            "inner-glow",
            "color-overlay",
            "stroke-effect",
            "satin",
        ]
        assert [g.source for g in gradients] == ["gradient-overlay"]

    def test_array_effects_tagged_by_position(self):
        raw = {"name": "L", "effects": {"dropShadow": [{"color": RED}, {"color": GREEN}, {"color": BLUE}]}}
        colors, _ = collect_layer(raw)
        assert _sources(colors) == ["drop-shadow", "drop-shadow-2", "drop-shadow-3"]

    def test_single_record_effect(self):
        colors, _ = collect_layer({"name": "L", "effects": {"dropShadow": {"color": RED}}})
        assert _sources(colors) == ["drop-shadow"]

    def test_disabled_effects_skipped(self):
        raw = {"name": "L", "effects": {
            "dropShadow": [{"color": RED, "enabled": False}, {"color": GREEN}],
            "satin": {"color": BLUE, "enabled": False},
        }}
        colors, _ = collect_layer(raw)
        assert [(c.hex, c.source) for c in colors] == [("#00FF00", "drop-shadow-2")]

    def test_enabled_absent_counts_as_enabled(self):
        colors, _ = collect_layer({"name": "L", "effects": {"outerGlow": {"color": RED}}})
        assert _sources(colors) == ["outer-glow"]

    def test_stroke_effect_color_and_gradient(self):
        raw = {"name": "L", "effects": {"stroke": [
            {"color": RED},
            {"color": GREEN, "gradient": {"colorStops": _stops(RED, GREEN)}},
        ]}}
        colors, gradients = collect_layer(raw)
        assert _sources(colors) == ["stroke-effect", "stroke-effect-2"]
        assert [g.source for g in gradients] == ["stroke-gradient-2"]

    def test_uninterpretable_colors_skipped(self):
        raw = {"name": "L", "text": {"style": {"fillColor": {"q": 1}}}, "effects": {
            "dropShadow": [{"color": {"nope": True}}, {"color": RED}],
        }}
        colors, _ = collect_layer(raw)
        assert _sources(colors) == ["drop-shadow-2"]

    def test_gradient_stops_filtered(self):
        raw = {"name": "L", "effects": {"gradientOverlay": [
            {"gradient": {"colorStops": _stops(RED, {"bad": 1}, BLUE)}},
            {"gradient": {"colorStops": _stops({"bad": 1})}},
        ]}}
        _, gradients = collect_layer(raw)
        assert len(gradients) == 1
        assert gradients[0].colors == ("#FF0000", "#0000FF")
        assert gradients[0].name is None

    def test_unnamed_layer(self):
        colors, _ = collect_layer({"vectorFill": {"color": RED}})
        assert colors[0].layer_name == "Unnamed"


class TestHarvest:

    def _tree(self):
        return [
            {"name": "Header", "children": [
                {"name": "Title", "text": {"style": {"fillColor": BLUE}}},
                {"name": "Logo", "vectorFill": {"color": RED}},
            ]},
            {"name": "Button", "vectorFill": {"color": RED},
             "effects": {"dropShadow": [{"color": DARK}]}},
            {"name": "Bg", "effects": {"gradientOverlay": {"gradient": {"colorStops": _stops(RED, GREEN)}}}},
        ]

    def test_document_order(self):
        palette = harvest(self._tree())
        assert [c.layer_name for c in palette.solid_colors] == ["Title", "Logo", "Button", "Button"]

    def test_unique_sorted(self):
        palette = harvest(self._tree())
        assert palette.unique_colors == ("#0000FF", "#1A1A1A", "#FF0000")

    def test_gradients(self):
        palette = harvest(self._tree())
        assert [(g.layer_name, g.colors) for g in palette.gradients] == [("Bg", ("#FF0000", "#00FF00"))]

    def test_empty(self):
        palette = harvest([])
        assert palette.is_empty
        assert palette.unique_colors == ()

    def test_canonical_layers(self):
        layers = (
            Layer(name="Group", kind=LayerKind.GROUP, children=(
                Layer(name="Title", kind=LayerKind.TEXT, text=TextStyle(content="Hi", color="#1A1A1A")),
                Layer(name="Plain", kind=LayerKind.TEXT, text=TextStyle(content="No color")),
            )),
        )
        palette = harvest(layers)
        assert [(c.hex, c.source, c.layer_name) for c in palette.solid_colors] == [
            ("#1A1A1A", "text", "Title"),
        ]

    def test_deep_tree(self):
        raw = {"name": "leaf", "vectorFill": {"color": RED}}
        for i in range(3000):
            raw = {"name": f"g{i}", "children": [raw]}
        assert harvest([raw]).unique_colors == ("#FF0000",)
