"""Assemble classified blocks into a document and convert markup end to end"""

import logging
from typing import Iterable

from newsdoc.core.convert.blocks import BLOCK_STYLES, classify_blocks
from newsdoc.core.convert.runs import plain_text
from newsdoc.core.models import MAX_DEPTH, AssembledDoc, BlockKind, DocumentBlock, Element, Run, Tag
from newsdoc.core.parse import parse_markup


logger = logging.getLogger(__name__)


def assemble(blocks: Iterable[DocumentBlock]) -> AssembledDoc:
    """Concatenate blocks in input order; no reordering, deduplication, or filtering."""
    return AssembledDoc(blocks=tuple(blocks))


def fallback_block(root: Element, max_depth: int = MAX_DEPTH) -> DocumentBlock | None:
    """Single paragraph holding all text of the tree, or None if the tree has no text."""
    text = plain_text(root, max_depth)
    if not text.strip():
        return None
    return DocumentBlock(kind=BlockKind.paragraph, runs=(Run(text),), style=BLOCK_STYLES[Tag.paragraph])


def convert_tree(root: Element, max_depth: int = MAX_DEPTH) -> AssembledDoc:
    """Classify a parsed tree and assemble its blocks, falling back to plain text when no block is found."""
    blocks = classify_blocks(root, max_depth)
    if not blocks:
        fallback = fallback_block(root, max_depth)
        if fallback is not None:
            logger.debug("No block-level markup found; using plain-text fallback")
            blocks = [fallback]
    return assemble(blocks)


def convert_markup(html: str, max_depth: int = MAX_DEPTH) -> AssembledDoc:
    """Parse rich-text markup and convert it into an assembled block document."""
    doc = convert_tree(parse_markup(html, max_depth), max_depth)
    logger.debug("Converted %d chars of markup into %d block(s)", len(html), len(doc))
    return doc
