#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/markup/serialization.py
"""JSON-friendly dictionaries for markup and aligned nodes.

Only the fields valid for a node's kind are emitted, so a text node never
carries ``children`` and an element never carries ``textContent``.

Examples
--------
    >>> from markupdiff.markup.nodes import ElementNode, TextNode
    >>> node_to_dict(ElementNode("li", {"key": "1"}, (TextNode("Item 1"),)))
    {'kind': 'element', 'tagName': 'li', 'attributes': {'key': '1'}, 'children': [{'kind': 'text', 'textContent': 'Item 1'}]}

"""

from __future__ import annotations

from typing import Any

from markupdiff.exceptions import ValidationError
from markupdiff.markup.nodes import (
    AlignedNode,
    ElementNode,
    MarkupNode,
    NodeKind,
    RootNode,
    TextNode,
)


def node_to_dict(node: MarkupNode) -> dict[str, Any]:
    """Convert a markup node (and its subtree) to a plain dictionary."""
    if isinstance(node, TextNode):
        return {"kind": NodeKind.TEXT.value, "textContent": node.text_content}
    if isinstance(node, ElementNode):
        return {
            "kind": NodeKind.ELEMENT.value,
            "tagName": node.tag_name,
            "attributes": dict(node.attributes),
            "children": [node_to_dict(child) for child in node.children],
        }
    return {
        "kind": NodeKind.ROOT.value,
        "children": [node_to_dict(child) for child in node.children],
    }


def dict_to_node(data: dict[str, Any]) -> MarkupNode:
    """Rebuild a markup node from :func:`node_to_dict` output.

    Raises
    ------
    ValidationError
        If ``kind`` is missing or unknown

    """
    kind = data.get("kind")
    if kind == NodeKind.TEXT.value:
        return TextNode(text_content=str(data.get("textContent", "")))
    children = tuple(dict_to_node(child) for child in data.get("children", []))
    if kind == NodeKind.ELEMENT.value:
        attributes = {str(k): str(v) for k, v in (data.get("attributes") or {}).items()}
        return ElementNode(tag_name=str(data["tagName"]), attributes=attributes, children=children)
    if kind == NodeKind.ROOT.value:
        return RootNode(children=children)
    raise ValidationError(f"Unknown node kind: {kind!r}", parameter_name="kind", parameter_value=kind)


def aligned_to_dict(node: AlignedNode) -> dict[str, Any]:
    """Convert an aligned node (and its subtree) to a plain dictionary."""
    result: dict[str, Any] = {
        "kind": node.kind.value,
        "key": node.key,
        "status": node.status.value,
    }
    if node.kind is NodeKind.TEXT:
        result["textContent"] = node.text_content
        return result
    if node.kind is NodeKind.ELEMENT:
        result["tagName"] = node.tag_name
        result["attributes"] = dict(node.attributes)
    result["children"] = [aligned_to_dict(child) for child in node.children]
    return result
