"""Block classification: map block-level markup nodes to styled DocumentBlocks"""

import logging
from typing import Callable

from newsdoc.core.convert.runs import extract_runs
from newsdoc.core.models import (
    BLANK_RUN,
    MAX_DEPTH,
    BlockKind,
    BlockStyle,
    DocumentBlock,
    Element,
    Tag,
)
from newsdoc.errors import ContentTooComplex


logger = logging.getLogger(__name__)

QUOTE_COLOR = "666666"

BLOCK_STYLES: dict[Tag, BlockStyle] = {
    Tag.heading_1:      BlockStyle(size=32, spacing_before=400, spacing_after=200),
    Tag.heading_2:      BlockStyle(size=28, spacing_before=300, spacing_after=150),
    Tag.heading_3:      BlockStyle(size=24, spacing_before=250, spacing_after=125),
    Tag.paragraph:      BlockStyle(size=22, spacing_after=200),
    Tag.blockquote:     BlockStyle(size=22, spacing_before=200, spacing_after=200, italic=True, color=QUOTE_COLOR),
    Tag.unordered_list: BlockStyle(size=22, spacing_after=150),
    Tag.ordered_list:   BlockStyle(size=22, spacing_after=150),
    Tag.line_break:     BlockStyle(size=22, spacing_after=100),
}

HEADING_LEVELS: dict[Tag, int] = {Tag.heading_1: 1, Tag.heading_2: 2, Tag.heading_3: 3}

Handler = Callable[[Element, int, int], list[DocumentBlock]]


def _heading(node: Element, depth: int, max_depth: int) -> list[DocumentBlock]:
    """Headings without text are dropped."""
    runs = extract_runs(node, max_depth=max_depth, depth=depth)
    if not runs:
        return []
    return [DocumentBlock(
        kind=BlockKind.heading,
        runs=tuple(runs),
        style=BLOCK_STYLES[node.tag],
        level=HEADING_LEVELS[node.tag],
    )]


def _paragraph(node: Element, depth: int, max_depth: int) -> list[DocumentBlock]:
    """Paragraphs without text still emit one blank paragraph to keep the author's spacing."""
    runs = extract_runs(node, max_depth=max_depth, depth=depth)
    return [DocumentBlock(
        kind=BlockKind.paragraph,
        runs=tuple(runs) or (BLANK_RUN,),
        style=BLOCK_STYLES[Tag.paragraph],
    )]


def _quote(node: Element, depth: int, max_depth: int) -> list[DocumentBlock]:
    runs = extract_runs(node, max_depth=max_depth, depth=depth)
    if not runs:
        return []
    return [DocumentBlock(kind=BlockKind.quote, runs=tuple(runs), style=BLOCK_STYLES[Tag.blockquote])]


def _list(node: Element, depth: int, max_depth: int) -> list[DocumentBlock]:
    """One item per direct `li` child; ordinals count every `li`, including empty ones that are skipped."""
    ordered = node.tag == Tag.ordered_list
    style = BLOCK_STYLES[node.tag]
    blocks: list[DocumentBlock] = []
    position = 0
    for child in node.children:
        if not isinstance(child, Element) or child.tag != Tag.list_item:
            if isinstance(child, Element):
                logger.debug("Skipping non-item <%s> inside list", child.name)
            continue
        position += 1
        runs = extract_runs(child, max_depth=max_depth, depth=depth + 1)
        if not runs:
            continue
        blocks.append(DocumentBlock(
            kind=BlockKind.list_item,
            runs=tuple(runs),
            style=style,
            ordinal=position if ordered else None,
            bullet=not ordered,
        ))
    return blocks


def _line_break(node: Element, depth: int, max_depth: int) -> list[DocumentBlock]:
    return [DocumentBlock(kind=BlockKind.line_break, runs=(BLANK_RUN,), style=BLOCK_STYLES[Tag.line_break])]


def _transparent(node: Element, depth: int, max_depth: int) -> list[DocumentBlock]:
    """Process child elements in place as if the tag were absent; loose text is not a block."""
    blocks: list[DocumentBlock] = []
    for child in node.children:
        if isinstance(child, Element):
            blocks.extend(classify_node(child, depth + 1, max_depth))
    return blocks


# Every Tag must have an entry; inline and stray tags fall back to _transparent.
HANDLERS: dict[Tag, Handler] = {
    Tag.root:           _transparent,
    Tag.bold:           _transparent,
    Tag.italic:         _transparent,
    Tag.underline:      _transparent,
    Tag.strike:         _transparent,
    Tag.heading_1:      _heading,
    Tag.heading_2:      _heading,
    Tag.heading_3:      _heading,
    Tag.paragraph:      _paragraph,
    Tag.blockquote:     _quote,
    Tag.unordered_list: _list,
    Tag.ordered_list:   _list,
    Tag.list_item:      _transparent,
    Tag.line_break:     _line_break,
    Tag.transparent:    _transparent,
}


def classify_node(node: Element, depth: int = 1, max_depth: int = MAX_DEPTH) -> list[DocumentBlock]:
    """Classify one block-level node into zero or more DocumentBlocks."""
    if depth > max_depth:
        raise ContentTooComplex(depth, max_depth)
    return HANDLERS[node.tag](node, depth, max_depth)


def classify_blocks(root: Element, max_depth: int = MAX_DEPTH) -> list[DocumentBlock]:
    """Classify each top-level element of root in document order.

    Top-level text outside any element contributes no block here; it only
    surfaces through the whole-tree fallback in convert_tree.
    """
    return _transparent(root, 0, max_depth)
