#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/__init__.py
"""Line and tree diff computation.

Key Features
------------
- Line diffs through Python's difflib with optional whitespace/case folding
- Context windowing that keeps a bounded number of unchanged lines
- Keyed alignment of markup forests (explicit ``key`` attribute or position)
- Summary counts and statistics for both kinds of diff

Examples
--------
Line diff with one line of context:
    >>> from markupdiff.diff import apply_context, line_diff
    >>> document = apply_context(line_diff("a\\nb\\nc\\n", "a\\nx\\nc\\n"), 1)
    >>> [(c.classification, c.text) for c in document]
    [('unchanged', 'a'), ('removed', 'b'), ('added', 'x'), ('unchanged', 'c')]

Tree diff:
    >>> from markupdiff.diff import align_forest
    >>> from markupdiff.markup import parse_markup
    >>> aligned = align_forest(parse_markup("<p>a</p>"), parse_markup("<p>b</p>"))

"""

from markupdiff.diff.context import DiffDocument, LineChange, apply_context, build_diff_document, expand_runs
from markupdiff.diff.line_diff import DiffRun, diff_lines, line_diff, normalize_text, normalize_whitespace
from markupdiff.diff.stats import ChangeSummary, DiffStatistics, TreeSummary, compute_statistics, summarize_tree
from markupdiff.diff.tree_align import align_forest, alignment_key, compare_nodes

__all__ = [
    "ChangeSummary",
    "DiffDocument",
    "DiffRun",
    "DiffStatistics",
    "LineChange",
    "TreeSummary",
    "align_forest",
    "alignment_key",
    "apply_context",
    "build_diff_document",
    "compare_nodes",
    "compute_statistics",
    "diff_lines",
    "expand_runs",
    "line_diff",
    "normalize_text",
    "normalize_whitespace",
    "summarize_tree",
]
