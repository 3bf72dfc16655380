#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/renderers/json.py
"""JSON diff renderer for structured output.

Produces machine-readable JSON for a line diff, a tree diff, or both, with
summary counts attached to each.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence

from markupdiff.diff.context import DiffDocument
from markupdiff.diff.stats import summarize_tree
from markupdiff.markup.nodes import AlignedNode
from markupdiff.markup.serialization import aligned_to_dict


class JsonDiffRenderer:
    """Render diffs as structured JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)

    Examples
    --------
    Render both diffs of a session:
        >>> renderer = JsonDiffRenderer()
        >>> output = renderer.render(session.diff_document, session.diffed_tree)

    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = 2,
    ):
        """Initialize the JSON diff renderer."""
        self.pretty_print = pretty_print
        self.indent = indent

    def to_data(
        self,
        document: Optional[DiffDocument] = None,
        tree: Optional[Sequence[AlignedNode]] = None,
    ) -> Dict[str, Any]:
        """Build the JSON-ready structure without encoding it.

        Parameters
        ----------
        document : DiffDocument, optional
            Line diff to include under ``"lines"``
        tree : sequence of AlignedNode, optional
            Aligned forest to include under ``"tree"``

        Returns
        -------
        dict
            Structured diff data

        """
        data: Dict[str, Any] = {"type": "markupdiff"}

        if document is not None:
            data["lines"] = {
                "context_lines": document.context_lines,
                "changes": [
                    {
                        "type": change.classification,
                        "content": change.text,
                        "line_number": change.line_number,
                    }
                    for change in document
                ],
                "statistics": document.summary().to_dict(),
            }

        if tree is not None:
            data["tree"] = {
                "nodes": [aligned_to_dict(node) for node in tree],
                "statistics": summarize_tree(tree).to_dict(),
            }

        return data

    def render(
        self,
        document: Optional[DiffDocument] = None,
        tree: Optional[Sequence[AlignedNode]] = None,
    ) -> str:
        """Render a line diff and/or tree diff to a JSON string."""
        data = self.to_data(document, tree)
        if self.pretty_print:
            return json.dumps(data, indent=self.indent, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)


def render_to_file(
    output_path: str,
    document: Optional[DiffDocument] = None,
    tree: Optional[Sequence[AlignedNode]] = None,
    **kwargs: Any,
) -> None:
    """Render diffs to a JSON file.

    Parameters
    ----------
    output_path : str
        Destination path for the generated JSON file.
    document : DiffDocument, optional
        Line diff to include.
    tree : sequence of AlignedNode, optional
        Aligned forest to include.
    **kwargs
        Additional keyword arguments forwarded to :class:`JsonDiffRenderer`.

    """
    renderer = JsonDiffRenderer(**kwargs)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(renderer.render(document, tree))
