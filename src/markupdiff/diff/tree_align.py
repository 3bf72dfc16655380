#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/diff/tree_align.py
"""Keyed alignment of two markup forests.

Siblings are matched the way keyed-list reconciliation in a virtual DOM
matches them: by an explicit ``key`` attribute when one is present, by
position otherwise. Every key found in either forest yields exactly one
:class:`~markupdiff.markup.nodes.AlignedNode`:

- key on both sides: ``updated`` or ``unchanged`` (see :func:`compare_nodes`),
  children aligned recursively;
- key only in the before forest: ``removed``;
- key only in the after forest: ``added``.

Only a node's own tag, attributes and direct text decide between
``updated`` and ``unchanged``. Changes further down show up on the
descendants.

Examples
--------
    >>> from markupdiff.markup import parse_markup
    >>> aligned = align_forest(parse_markup('<li key="1">Item 1</li>'),
    ...                        parse_markup('<li key="1">Item 1 updated</li>'))
    >>> aligned[0].status.value, aligned[0].children[0].status.value
    ('updated', 'updated')

"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from markupdiff.constants import KEY_ATTRIBUTE, POSITIONAL_KEY_PREFIX
from markupdiff.markup.nodes import (
    AlignedNode,
    AlignmentStatus,
    ElementNode,
    MarkupNode,
    TextNode,
    get_node_children,
    has_children_slot,
)

logger = logging.getLogger(__name__)


def alignment_key(node: MarkupNode, index: int) -> str:
    """Return the identity of ``node`` at ``index`` within its sibling list.

    An element's non-empty ``key`` attribute wins; otherwise the key is
    positional (``"index-<index>"``).
    """
    if isinstance(node, ElementNode):
        explicit = node.attributes.get(KEY_ATTRIBUTE)
        if explicit:
            return explicit
    return f"{POSITIONAL_KEY_PREFIX}{index}"


def _tag_name(node: MarkupNode) -> Optional[str]:
    return node.tag_name if isinstance(node, ElementNode) else None


def _attributes(node: MarkupNode) -> Mapping[str, str]:
    return node.attributes if isinstance(node, ElementNode) else {}


def _text_content(node: MarkupNode) -> Optional[str]:
    return node.text_content if isinstance(node, TextNode) else None


def own_text(node: MarkupNode) -> Optional[str]:
    """Return the text a node carries itself.

    For a text node that is its content; for an element it is the
    concatenation of its direct text children (``None`` when it has none),
    so ``<li>Item 1</li>`` owns the text ``"Item 1"``.
    """
    if isinstance(node, TextNode):
        return node.text_content
    parts = [child.text_content for child in get_node_children(node) if isinstance(child, TextNode)]
    return "".join(parts) if parts else None


def compare_nodes(before: MarkupNode, after: MarkupNode) -> AlignmentStatus:
    """Classify a matched pair of nodes, ignoring their child elements.

    The pair is ``updated`` when the kind, tag name, attribute count, any
    attribute value or the node's own text (see :func:`own_text`) differs,
    and ``unchanged`` otherwise. Attribute order does not matter, but values
    compare exactly (``class="a b"`` and ``class="b a"`` differ).
    """
    if before.kind is not after.kind or _tag_name(before) != _tag_name(after):
        return AlignmentStatus.UPDATED

    before_attrs = _attributes(before)
    after_attrs = _attributes(after)
    if len(before_attrs) != len(after_attrs):
        return AlignmentStatus.UPDATED
    for name, value in before_attrs.items():
        if after_attrs.get(name) != value:
            return AlignmentStatus.UPDATED

    if own_text(before) != own_text(after):
        return AlignmentStatus.UPDATED

    return AlignmentStatus.UNCHANGED


def carry_subtree(node: MarkupNode, status: AlignmentStatus, key: str) -> AlignedNode:
    """Copy a subtree unaligned, tagging every node with ``status``.

    Used for nodes that exist on one side only: their descendants are never
    compared, they simply come along with the root.
    """
    children = tuple(
        carry_subtree(child, status, alignment_key(child, index))
        for index, child in enumerate(get_node_children(node))
    )
    return _build(node, status, key, children)


def _build(node: MarkupNode, status: AlignmentStatus, key: str, children: tuple[AlignedNode, ...]) -> AlignedNode:
    return AlignedNode(
        kind=node.kind,
        status=status,
        key=key,
        tag_name=_tag_name(node),
        attributes=dict(_attributes(node)),
        text_content=_text_content(node),
        children=children,
    )


def _keyed(forest: Sequence[MarkupNode]) -> dict[str, MarkupNode]:
    keyed: dict[str, MarkupNode] = {}
    for index, node in enumerate(forest):
        key = alignment_key(node, index)
        if key in keyed:
            logger.debug("Duplicate alignment key %r; keeping the later node", key)
        keyed[key] = node
    return keyed


def align_forest(before: Sequence[MarkupNode], after: Sequence[MarkupNode]) -> tuple[AlignedNode, ...]:
    """Align two forests into one forest of status-tagged nodes.

    Parameters
    ----------
    before : sequence of MarkupNode
        Top-level nodes of the original document
    after : sequence of MarkupNode
        Top-level nodes of the modified document

    Returns
    -------
    tuple of AlignedNode
        One node per distinct key, in before-forest key order followed by
        keys that only exist in the after forest

    """
    before_map = _keyed(before)
    after_map = _keyed(after)

    result: list[AlignedNode] = []
    for key in dict.fromkeys([*before_map, *after_map]):
        before_node = before_map.get(key)
        after_node = after_map.get(key)

        if before_node is not None and after_node is not None:
            status = compare_nodes(before_node, after_node)
            if has_children_slot(before_node) and has_children_slot(after_node):
                children = align_forest(get_node_children(before_node), get_node_children(after_node))
            else:
                children = tuple(
                    carry_subtree(child, AlignmentStatus.ADDED, alignment_key(child, index))
                    for index, child in enumerate(get_node_children(after_node))
                )
            result.append(_build(after_node, status, key, children))
        elif before_node is not None:
            result.append(carry_subtree(before_node, AlignmentStatus.REMOVED, key))
        elif after_node is not None:
            result.append(carry_subtree(after_node, AlignmentStatus.ADDED, key))

    return tuple(result)
