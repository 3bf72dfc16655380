#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/markup/nodes.py
"""Node classes for parsed and aligned markup trees.

A parsed markup document is a *forest*: the ordered top-level nodes of the
document. Every node is one of three variants, each carrying only the fields
it needs:

    - ElementNode: tag name, attributes and children
    - TextNode: text content, never any children
    - RootNode: children only (a whole document)

Nodes are immutable and hashable; attribute maps are exposed read-only.
Tree alignment never edits nodes, it builds new AlignedNode objects that
copy the relevant fields and add a status.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence, Union


def _freeze(attributes: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(attributes))


class NodeKind(str, Enum):
    """Variant tag of a markup node."""

    ELEMENT = "element"
    TEXT = "text"
    ROOT = "root"


class AlignmentStatus(str, Enum):
    """Outcome of aligning a node key across the before and after forests."""

    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class ElementNode:
    """A markup element such as ``<li key="1">``.

    Parameters
    ----------
    tag_name : str
        Lowercased tag name
    attributes : mapping of str to str, default = empty mapping
        Attribute values keyed by name, stored as a read-only copy. Order is
        irrelevant for comparison and attributes do not take part in hashing.
    children : tuple of MarkupNode, default = ()
        Child nodes in document order

    """

    tag_name: str
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: tuple[MarkupNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ELEMENT


@dataclass(frozen=True)
class TextNode:
    """A text leaf.

    Parameters
    ----------
    text_content : str
        Raw text, whitespace preserved

    """

    text_content: str

    @property
    def kind(self) -> NodeKind:
        return NodeKind.TEXT


@dataclass(frozen=True)
class RootNode:
    """A document root holding a forest of top-level nodes."""

    children: tuple[MarkupNode, ...] = ()

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ROOT


MarkupNode = Union[ElementNode, TextNode, RootNode]
Forest = Sequence[MarkupNode]


@dataclass(frozen=True)
class AlignedNode:
    """A markup node tagged with its alignment status.

    ``tag_name`` and ``attributes`` are only meaningful for elements and
    ``text_content`` only for text nodes; the other fields stay at their
    empty defaults.

    Parameters
    ----------
    kind : NodeKind
        Variant of the node this was built from
    status : AlignmentStatus
        How the node compares across the two forests
    key : str
        Alignment key that matched this node within its sibling list
    tag_name : str or None, default = None
        Element tag name
    attributes : mapping of str to str, default = empty mapping
        Element attributes, stored read-only
    text_content : str or None, default = None
        Text of a text node
    children : tuple of AlignedNode, default = ()
        Aligned (or carried-over) children

    """

    kind: NodeKind
    status: AlignmentStatus
    key: str
    tag_name: Optional[str] = None
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    text_content: Optional[str] = None
    children: tuple[AlignedNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", _freeze(self.attributes))


AlignedForest = tuple[AlignedNode, ...]


def get_node_children(node: MarkupNode) -> tuple[MarkupNode, ...]:
    """Return the children of a node, or an empty tuple for text leaves."""
    if isinstance(node, TextNode):
        return ()
    return node.children


def has_children_slot(node: MarkupNode) -> bool:
    """Return True for variants that can hold children (elements and roots)."""
    return not isinstance(node, TextNode)


def iter_nodes(forest: Forest, depth: int = 0) -> Iterator[tuple[int, MarkupNode]]:
    """Yield ``(depth, node)`` pairs of a forest in depth-first pre-order."""
    for node in forest:
        yield depth, node
        yield from iter_nodes(get_node_children(node), depth + 1)


def walk_aligned(forest: Sequence[AlignedNode], depth: int = 0) -> Iterator[tuple[int, AlignedNode]]:
    """Yield ``(depth, node)`` pairs of an aligned forest in depth-first pre-order."""
    for node in forest:
        yield depth, node
        yield from walk_aligned(node.children, depth + 1)
