#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/markup/__init__.py
"""Markup node model, parser and serialization helpers."""

from markupdiff.markup.nodes import (
    AlignedForest,
    AlignedNode,
    AlignmentStatus,
    ElementNode,
    Forest,
    MarkupNode,
    NodeKind,
    RootNode,
    TextNode,
    get_node_children,
    iter_nodes,
    walk_aligned,
)
from markupdiff.markup.parser import parse_document, parse_markup
from markupdiff.markup.serialization import aligned_to_dict, dict_to_node, node_to_dict

__all__ = [
    "AlignedForest",
    "AlignedNode",
    "AlignmentStatus",
    "ElementNode",
    "Forest",
    "MarkupNode",
    "NodeKind",
    "RootNode",
    "TextNode",
    "aligned_to_dict",
    "dict_to_node",
    "get_node_children",
    "iter_nodes",
    "node_to_dict",
    "parse_document",
    "parse_markup",
    "walk_aligned",
]
