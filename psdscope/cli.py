# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Command-line front-end.

Every subcommand decodes the source from scratch, derives one result and
prints it. Nothing is cached between invocations.

Examples::

    psdscope layers landing.json --depth 2
    psdscope layer landing.json "hero"
    psdscope colors landing.json --format css
    psdscope svgs landing.json out/icons --group icons
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from psdscope import __version__
from psdscope.analyze import (
    all_vector_layers,
    build_document,
    extract_hero,
    find_by_name,
    find_vector_layer,
    harvest,
    limit_depth,
    list_vector_layers,
    suggest,
    text_layers,
    vector_layer_to_svg,
)
from psdscope.analyze.vectors import SvgOptions
from psdscope.decode import load_raw_document
from psdscope.errors import PsdScopeError
from psdscope.runtime import (
    ChildrenFormat,
    PaletteFormat,
    export_vectors,
    to_children_text,
    to_palette_text,
    to_tree_text,
)
from psdscope.traversal import raw_children

MAX_SUGGESTIONS = 5


def _document(args: argparse.Namespace):
    return build_document(load_raw_document(args.path))


# =============================================================================
# Subcommands
# =============================================================================


def cmd_parse(args: argparse.Namespace) -> str:
    return _document(args).to_json()


def cmd_layers(args: argparse.Namespace) -> str:
    document = _document(args)
    layers = document.layers
    if args.depth is not None:
        layers = limit_depth(layers, args.depth)
    return to_tree_text(document, layers)


def cmd_layer(args: argparse.Namespace) -> str:
    document = _document(args)
    layer = find_by_name(document.layers, args.name, exact=args.exact)
    if layer is None:
        similar = suggest(document.layers, args.name, MAX_SUGGESTIONS)
        return f'Layer "{args.name}" not found.\n\nSimilar layers: {", ".join(similar) or "none"}'
    return layer.to_json()


def cmd_children(args: argparse.Namespace) -> str:
    document = _document(args)
    group = find_by_name(document.layers, args.group)
    if group is None:
        return f'Group "{args.group}" not found.'
    return to_children_text(group, format=ChildrenFormat(args.format))


def cmd_text(args: argparse.Namespace) -> str:
    return json.dumps(text_layers(_document(args)), indent=2, ensure_ascii=False)


def cmd_hero(args: argparse.Namespace) -> str:
    return extract_hero(_document(args), args.group).to_json()


def cmd_colors(args: argparse.Namespace) -> str:
    raw = load_raw_document(args.path)
    palette = harvest(raw_children(raw))
    if args.format == "json":
        return palette.to_json()
    if palette.is_empty:
        return "No colors found in this document."
    return to_palette_text(palette, format=PaletteFormat(args.format))


def cmd_vectors(args: argparse.Namespace) -> str:
    summaries = list_vector_layers(raw_children(load_raw_document(args.path)))
    if not summaries:
        return "No vector layers found in this document."
    lines = [
        f"- {s.name} (fill: {'yes' if s.has_fill else 'no'}, "
        f"stroke: {'yes' if s.has_stroke else 'no'})"
        for s in summaries
    ]
    return f"Found {len(summaries)} vector layer(s):\n\n" + "\n".join(lines)


def cmd_svg(args: argparse.Namespace) -> str:
    raw = load_raw_document(args.path)
    layers = raw_children(raw)
    layer = find_vector_layer(layers, args.layer)
    if layer is None:
        names = [str(v.get("name")) for v in all_vector_layers(layers)[:MAX_SUGGESTIONS]]
        return (
            f'Vector layer "{args.layer}" not found.\n\n'
            f'Available vector layers: {", ".join(names) or "none"}'
        )

    svg = vector_layer_to_svg(
        layer, raw.get("width", 0), raw.get("height", 0), SvgOptions(decimals=args.decimals)
    )
    if args.output:
        output = Path(args.output).resolve()
        output.write_text(svg, encoding="utf-8")
        return f"SVG saved to: {output}"
    return svg


def cmd_svgs(args: argparse.Namespace) -> str:
    raw = load_raw_document(args.path)
    batch = export_vectors(raw, args.group, options=SvgOptions(decimals=args.decimals))
    if not batch.files and not batch.skipped:
        if args.group:
            return f'No vector layers found in group "{args.group}".'
        return "No vector layers found in this document."

    output_dir = Path(args.output_dir).resolve()
    output_dir.mkdir(parents=True, exist_ok=True)
    for filename, svg in batch.files:
        (output_dir / filename).write_text(svg, encoding="utf-8")

    listing = "\n".join(f"- {name}" for name in batch.filenames)
    return f"Exported {batch.count} SVG file(s) to {output_dir}:\n\n{listing}"


# =============================================================================
# Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="psdscope",
        description="Inspect decoded layered design documents.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add(name: str, handler, help: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help)
        p.add_argument("path", help="Decoded source document (JSON raw tree)")
        p.set_defaults(handler=handler)
        return p

    add("parse", cmd_parse, "Print the canonical document as JSON")

    p = add("layers", cmd_layers, "Print the layer tree")
    p.add_argument("--depth", type=int, default=None, help="Maximum depth to display (default: unlimited)")

    p = add("layer", cmd_layer, "Find a layer by name")
    p.add_argument("name", help="Layer name (partial, case-insensitive)")
    p.add_argument("--exact", action="store_true", help="Require an exact, case-sensitive match")

    p = add("children", cmd_children, "List the children of a group")
    p.add_argument("group", help="Group name (partial, case-insensitive)")
    p.add_argument("--format", choices=[f.value for f in ChildrenFormat], default="tree")

    add("text", cmd_text, "Print text layers as JSON")

    p = add("hero", cmd_hero, "Classify hero section text roles")
    p.add_argument("--group", default=None, help="Hero group name (default: whole document)")

    p = add("colors", cmd_colors, "Extract colors and gradients")
    p.add_argument(
        "--format",
        choices=[f.value for f in PaletteFormat] + ["json"],
        default="summary",
        help="Output format (default: summary)",
    )

    add("vectors", cmd_vectors, "List vector layers")

    p = add("svg", cmd_svg, "Export one vector layer as SVG")
    p.add_argument("layer", help="Vector layer name (partial, case-insensitive)")
    p.add_argument("-o", "--output", default=None, help="Write to this file instead of stdout")
    p.add_argument("--decimals", type=int, default=2)

    p = add("svgs", cmd_svgs, "Export all vector layers as SVG files")
    p.add_argument("output_dir", help="Directory for the SVG files")
    p.add_argument("--group", default=None, help="Only export vectors inside this group")
    p.add_argument("--decimals", type=int, default=2)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    try:
        output = args.handler(args)
    except (PsdScopeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(output)
    return 0
