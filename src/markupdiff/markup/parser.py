#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/markup/parser.py
"""Markup parsing into immutable node forests.

This module wraps BeautifulSoup so the rest of the package only ever sees
:mod:`markupdiff.markup.nodes` objects. Parsing is lenient: malformed markup
(unclosed tags, stray end tags) is repaired by the ``html.parser`` backend
rather than rejected. Only failures of the backend itself surface as
:class:`~markupdiff.exceptions.ParsingError`.
"""

from __future__ import annotations

import logging
from typing import Any

from markupdiff.exceptions import ParsingError
from markupdiff.markup.nodes import ElementNode, MarkupNode, RootNode, TextNode

logger = logging.getLogger(__name__)

DEFAULT_PARSER_BACKEND = "html.parser"


def _attribute_value(value: Any) -> str:
    # multi_valued_attributes is disabled, but be tolerant of list values
    if isinstance(value, (list, tuple)):
        return " ".join(str(part) for part in value)
    return str(value)


def _convert_children(parent: Any) -> tuple[MarkupNode, ...]:
    from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

    converted: list[MarkupNode] = []
    for child in parent.children:
        if isinstance(child, Tag):
            attributes = {name: _attribute_value(value) for name, value in child.attrs.items()}
            converted.append(
                ElementNode(
                    tag_name=child.name,
                    attributes=attributes,
                    children=_convert_children(child),
                )
            )
        elif isinstance(child, (Comment, Declaration, Doctype, ProcessingInstruction)):
            # Comments, doctypes and processing instructions carry no diffable content
            continue
        elif isinstance(child, NavigableString):
            converted.append(TextNode(text_content=str(child)))
    return tuple(converted)


def parse_markup(markup: str, parser_backend: str = DEFAULT_PARSER_BACKEND) -> tuple[MarkupNode, ...]:
    """Parse markup text into a forest of top-level nodes.

    Whitespace-only text between elements is kept as text nodes, so two
    documents that differ only in indentation produce forests of different
    shapes.

    Parameters
    ----------
    markup : str
        HTML or XML-like markup. May be empty or malformed.
    parser_backend : str, default "html.parser"
        BeautifulSoup tree builder to use

    Returns
    -------
    tuple of MarkupNode
        Top-level nodes in document order

    Raises
    ------
    ParsingError
        If the backend is unavailable or fails on the input

    """
    from bs4 import BeautifulSoup
    from bs4.exceptions import FeatureNotFound

    try:
        soup = BeautifulSoup(markup, parser_backend, multi_valued_attributes=None)
    except FeatureNotFound as e:
        raise ParsingError(
            f"Markup parser backend not available: {parser_backend}",
            parsing_stage="setup",
            original_error=e,
        ) from e
    except Exception as e:
        raise ParsingError(f"Failed to parse markup: {e}", original_error=e) from e

    forest = _convert_children(soup)
    logger.debug("Parsed markup into %d top-level nodes", len(forest))
    return forest


def parse_document(markup: str, parser_backend: str = DEFAULT_PARSER_BACKEND) -> RootNode:
    """Parse markup text and wrap the resulting forest in a :class:`RootNode`."""
    return RootNode(children=parse_markup(markup, parser_backend))
