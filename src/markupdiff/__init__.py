#  Copyright (c) 2025 Tom Villani, Ph.D.
"""markupdiff - line and tree diffs for text and markup documents.

markupdiff compares two documents in two complementary ways:

- a line diff that classifies every line as added, removed or unchanged and
  keeps only a bounded number of unchanged context lines around changes;
- a tree diff that parses both documents as markup and aligns sibling nodes
  by their ``key`` attribute (or position), tagging each node added, removed,
  updated or unchanged.

:class:`DiffSession` ties both together with persisted settings and a
history of saved comparisons.

Examples
--------
    >>> from markupdiff import DiffSession
    >>> session = DiffSession()
    >>> session.set_before_code('<ul><li key="1">Item 1</li></ul>')
    >>> session.set_after_code('<ul><li key="1">Item 1 updated</li></ul>')
    >>> session.compute_diff()
    >>> session.diffed_tree[0].children[0].status.value
    'updated'

"""

from markupdiff.diff import (
    ChangeSummary,
    DiffDocument,
    LineChange,
    align_forest,
    apply_context,
    build_diff_document,
    compare_nodes,
    line_diff,
)
from markupdiff.exceptions import (
    DiffComputationError,
    MarkupDiffError,
    ParsingError,
    StorageError,
    ValidationError,
)
from markupdiff.history import HistoryEntry
from markupdiff.markup import AlignedNode, AlignmentStatus, parse_markup
from markupdiff.session import DiffSession
from markupdiff.settings import DiffSettings
from markupdiff.storage import InMemoryStore, JsonFileStore, KeyValueStore

__version__ = "0.1.0"

__all__ = [
    "AlignedNode",
    "AlignmentStatus",
    "ChangeSummary",
    "DiffComputationError",
    "DiffDocument",
    "DiffSession",
    "DiffSettings",
    "HistoryEntry",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "LineChange",
    "MarkupDiffError",
    "ParsingError",
    "StorageError",
    "ValidationError",
    "__version__",
    "align_forest",
    "apply_context",
    "build_diff_document",
    "compare_nodes",
    "line_diff",
    "parse_markup",
]
