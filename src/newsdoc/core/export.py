"""Export pipeline: interleave collection and article metadata with converted article bodies"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from newsdoc.core.convert.convert import assemble, convert_markup
from newsdoc.core.models import (
    MAX_DEPTH,
    ArticleDoc,
    AssembledDoc,
    BlockKind,
    BlockStyle,
    CollectionDoc,
    DocumentBlock,
    Run,
)
from newsdoc.core.render import render_docx
from newsdoc.core.utils.slug import export_filename
from newsdoc.errors import PackagingFailed


logger = logging.getLogger(__name__)

MUTED = "666666"
SEPARATOR = "─" * 50

TITLE_STYLE       = BlockStyle(size=32, spacing_after=200, bold=True)
DESCRIPTION_STYLE = BlockStyle(size=24, spacing_after=400, italic=True)
GENERATED_STYLE   = BlockStyle(size=20, spacing_after=600, color=MUTED)
HEADING_STYLE     = BlockStyle(size=28, spacing_before=400, spacing_after=200, bold=True)
SUBHEADING_STYLE  = BlockStyle(size=22, spacing_after=200, bold=True, color="333333")
BYLINE_STYLE      = BlockStyle(size=18, spacing_after=300, italic=True, color=MUTED)
SOURCE_STYLE      = BlockStyle(size=18, spacing_after=200, italic=True, color=MUTED)
SEPARATOR_STYLE   = BlockStyle(size=22, spacing_before=400, spacing_after=400, color="CCCCCC")


def _text_block(text: str, style: BlockStyle, kind: BlockKind = BlockKind.paragraph, level: Optional[int] = None) -> DocumentBlock:
    return DocumentBlock(kind=kind, runs=(Run(text),), style=style, level=level)


def source_line(article: ArticleDoc) -> str | None:
    """Return the 'Source: ...' attribution, or None when the article has no media info."""
    if article.media_name:
        suffix = f" - {article.media_url}" if article.media_url else ""
        return f"Source: {article.media_name}{suffix}"
    if article.media_url:
        return f"Source: {article.media_url}"
    return None


def article_blocks(article: ArticleDoc, date_format: str = "%Y-%m-%d", max_depth: int = MAX_DEPTH) -> list[DocumentBlock]:
    """Heading, subheading, byline, optional source, then the converted body."""
    blocks = [
        _text_block(article.heading, HEADING_STYLE, BlockKind.heading, level=1),
        _text_block(article.subheading, SUBHEADING_STYLE),
        _text_block(f"By {article.author} • {article.date.strftime(date_format)}", BYLINE_STYLE),
    ]
    source = source_line(article)
    if source:
        blocks.append(_text_block(source, SOURCE_STYLE))
    blocks.extend(convert_markup(article.body, max_depth))
    return blocks


def build_collection_doc(
    collection: CollectionDoc,
    generated_at: datetime | None = None,
    date_format: str = "%Y-%m-%d",
    max_depth: int = MAX_DEPTH,
    ) -> AssembledDoc:
    """Assemble the full export document for a collection.

    Order: title, optional description, generation date, then per article its
    metadata blocks and body, with a separator between consecutive articles.
    Articles are emitted in list order, which is the stored display order.
    """
    generated_at = generated_at or datetime.now()
    blocks = [_text_block(collection.title, TITLE_STYLE, BlockKind.title)]
    if collection.description:
        blocks.append(_text_block(collection.description, DESCRIPTION_STYLE))
    blocks.append(_text_block(f"Generated on {generated_at.strftime(date_format)}", GENERATED_STYLE))

    last = len(collection.articles) - 1
    for index, article in enumerate(collection.articles):
        blocks.extend(article_blocks(article, date_format, max_depth))
        if index < last:
            blocks.append(_text_block(SEPARATOR, SEPARATOR_STYLE))

    logger.debug("Built %d block(s) for collection '%s'", len(blocks), collection.title)
    return assemble(blocks)


def write_docx(
    collection: CollectionDoc,
    output_dir: Path,
    generated_at: datetime | None = None,
    date_format: str = "%Y-%m-%d",
    max_depth: int = MAX_DEPTH,
    ) -> Path:
    """Write the collection as output_dir/<slug>.docx and return the path."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Cannot create output directory %s: %s", output_dir, e)
        raise PackagingFailed(f"Cannot create output directory {output_dir}: {e}") from e
    doc = build_collection_doc(collection, generated_at, date_format, max_depth)
    path = output_dir / export_filename(collection.title, "docx")
    render_docx(doc, path, title=collection.title)
    logger.info("Exported collection '%s' to %s", collection.title, path)
    return path
