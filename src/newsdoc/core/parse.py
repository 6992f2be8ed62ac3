"""Rich-text markup parsing into an owned MarkupNode tree"""

import logging

from bs4 import (
    BeautifulSoup,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ParserRejectedMarkup,
    ProcessingInstruction,
)

from newsdoc.core.models import MAX_DEPTH, Element, MarkupNode, Tag, Text, tag_for
from newsdoc.errors import ContentTooComplex, MalformedInput


logger = logging.getLogger(__name__)
PARSER_BACKEND = "html.parser"

_SKIPPED = (Comment, Declaration, Doctype, ProcessingInstruction)


def _to_node(soup_node, depth: int, max_depth: int) -> MarkupNode | None:
    """Convert one BeautifulSoup node; returns None for comments and declarations."""
    if isinstance(soup_node, _SKIPPED):
        return None
    if isinstance(soup_node, NavigableString):
        return Text(str(soup_node))
    if depth > max_depth:
        raise ContentTooComplex(depth, max_depth)
    children = tuple(
        node for node in (_to_node(c, depth + 1, max_depth) for c in soup_node.children)
        if node is not None
    )
    name = soup_node.name.lower()
    tag = tag_for(name)
    if tag == Tag.transparent:
        logger.debug("Unrecognized tag <%s> treated as transparent", name)
    return Element(tag=tag, children=children, name=name)


def parse_markup(html: str, max_depth: int = MAX_DEPTH) -> Element:
    """Parse an HTML-like fragment into a root Element whose children are the top-level nodes."""
    if not isinstance(html, str):
        raise MalformedInput(f"Markup must be a string, got {type(html).__name__}")
    try:
        soup = BeautifulSoup(html, PARSER_BACKEND)
    except ParserRejectedMarkup as e:
        raise MalformedInput(f"Markup could not be parsed: {e}") from e

    children = tuple(
        node for node in (_to_node(c, 1, max_depth) for c in soup.children)
        if node is not None
    )
    return Element(tag=Tag.root, children=children, name="")
