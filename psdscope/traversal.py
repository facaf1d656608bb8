# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

"""
Explicit-stack tree traversal.

Layer trees come from outside the process and have no depth bound, so
nothing in psdscope recurses over them. Every tree walk goes through the
two helpers here:

- :func:`walk` yields ``(node, depth)`` in pre-order, depth-first. This is
  the "document order" that every first-match-wins lookup relies on.
- :func:`fold` rebuilds a tree bottom-up, handing each node the already
  folded results of its children.

Both work on canonical :class:`~psdscope.schema.Layer` objects and on raw
decoder records; the caller supplies ``children_of``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from typing import Any, Optional, TypeVar

N = TypeVar("N")
R = TypeVar("R")


def layer_children(node: Any) -> Sequence[Any]:
    """Children accessor for canonical layers."""
    return node.children


def raw_children(node: Any) -> Sequence[Any]:
    """Children accessor for raw decoder records (missing or malformed → empty)."""
    if not isinstance(node, Mapping):
        return ()
    children = node.get("children")
    if isinstance(children, (list, tuple)):
        return children
    return ()


def walk(
    nodes: Iterable[N],
    children_of: Callable[[N], Sequence[N]] = layer_children,
) -> Iterator[tuple[N, int]]:
    """
    Yield every node of a forest in pre-order, depth-first.

    Top-level nodes have depth 0. A parent is always yielded before its
    children, and siblings keep their stored order.
    """
    stack = [(node, 0) for node in reversed(list(nodes))]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        children = children_of(node)
        if children:
            stack.extend((child, depth + 1) for child in reversed(children))


def fold(
    nodes: Iterable[N],
    fn: Callable[[N, int, Optional[list[R]]], R],
    children_of: Callable[[N], Sequence[N]] = layer_children,
    *,
    stop_depth: Optional[int] = None,
) -> list[R]:
    """
    Rebuild a forest bottom-up without recursion.

    ``fn(node, depth, folded_children)`` is called once per visited node,
    after all of its children. Nodes at ``stop_depth`` are not expanded:
    ``fn`` receives ``None`` for their children and nothing below them is
    visited.

    Returns:
        Folded results for the top-level nodes, in order.
    """
    roots: list[R] = []
    # (node, depth, sink for the folded result, collected child results)
    stack: list[tuple[N, int, list[R], Optional[list[R]]]] = [
        (node, 0, roots, None) for node in reversed(list(nodes))
    ]
    while stack:
        node, depth, sink, collected = stack.pop()
        if collected is not None:
            sink.append(fn(node, depth, collected))
            continue
        if stop_depth is not None and depth >= stop_depth:
            sink.append(fn(node, depth, None))
            continue
        collected = []
        stack.append((node, depth, sink, collected))
        children = children_of(node)
        if children:
            stack.extend((child, depth + 1, collected, None) for child in reversed(children))
    return roots
