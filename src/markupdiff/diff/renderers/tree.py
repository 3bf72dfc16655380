#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/renderers/tree.py
"""Indented outline renderer for aligned markup forests."""

from __future__ import annotations

from typing import Iterator, Sequence

from markupdiff.markup.nodes import AlignedNode, AlignmentStatus, NodeKind, walk_aligned

_MARKERS = {
    AlignmentStatus.ADDED: "+",
    AlignmentStatus.REMOVED: "-",
    AlignmentStatus.UPDATED: "~",
    AlignmentStatus.UNCHANGED: " ",
}

_COLORS = {
    AlignmentStatus.ADDED: "\033[32m",
    AlignmentStatus.REMOVED: "\033[31m",
    AlignmentStatus.UPDATED: "\033[33m",
}
RESET = "\033[0m"


def describe_node(node: AlignedNode) -> str:
    """Return a one-line label such as ``<li key="1">`` or ``"Item 1"``."""
    if node.kind is NodeKind.TEXT:
        return repr(node.text_content)
    if node.kind is NodeKind.ROOT:
        return "#root"
    attrs = "".join(f' {name}="{value}"' for name, value in sorted(node.attributes.items()))
    return f"<{node.tag_name}{attrs}>"


class TreeDiffRenderer:
    """Render an aligned forest as an indented outline.

    Each node takes one line: a status marker (``+`` added, ``-`` removed,
    ``~`` updated, space unchanged), indentation by depth, and a short label.

    Parameters
    ----------
    use_color : bool, default = True
        If True, color added/removed/updated lines
    indent : int, default = 2
        Spaces per depth level
    skip_blank_text : bool, default = True
        Omit unchanged text nodes made only of whitespace

    """

    def __init__(self, use_color: bool = True, indent: int = 2, skip_blank_text: bool = True):
        self.use_color = use_color
        self.indent = indent
        self.skip_blank_text = skip_blank_text

    def _skipped(self, node: AlignedNode) -> bool:
        return (
            self.skip_blank_text
            and node.kind is NodeKind.TEXT
            and node.status is AlignmentStatus.UNCHANGED
            and not (node.text_content or "").strip()
        )

    def render(self, forest: Sequence[AlignedNode]) -> Iterator[str]:
        """Yield one line per aligned node in depth-first order."""
        for depth, node in walk_aligned(forest):
            if self._skipped(node):
                continue
            line = f"{_MARKERS[node.status]} {' ' * (self.indent * depth)}{describe_node(node)}"
            color = _COLORS.get(node.status)
            if self.use_color and color:
                yield f"{color}{line}{RESET}"
            else:
                yield line
