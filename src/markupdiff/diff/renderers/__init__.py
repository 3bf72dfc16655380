#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/renderers/__init__.py
"""Diff renderers for terminal and structured output.

Available Renderers
-------------------
- UnifiedLineRenderer: ``+``/``-`` prefixed line diff, optional ANSI colors
- TreeDiffRenderer: indented outline of an aligned markup forest
- JsonDiffRenderer: structured JSON for line and tree diffs

Examples
--------
Render a line diff for the terminal:
    >>> from markupdiff.diff.renderers import UnifiedLineRenderer
    >>> for line in UnifiedLineRenderer(use_color=True).render(document):
    ...     print(line)

"""

from markupdiff.diff.renderers.json import JsonDiffRenderer
from markupdiff.diff.renderers.tree import TreeDiffRenderer
from markupdiff.diff.renderers.unified import UnifiedLineRenderer

__all__ = [
    "JsonDiffRenderer",
    "TreeDiffRenderer",
    "UnifiedLineRenderer",
]
