"""Document packaging: serialize assembled blocks into a .docx file with python-docx"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

from docx import Document
from docx.shared import Pt, RGBColor, Twips

from newsdoc.core.models import PLAIN, AssembledDoc, BlockKind, BlockStyle, DocumentBlock, FormattingState
from newsdoc.errors import PackagingFailed


logger = logging.getLogger(__name__)


def _paragraph_style(block: DocumentBlock) -> str:
    """Word built-in paragraph style name for a block."""
    if block.kind == BlockKind.title:
        return "Title"
    if block.kind == BlockKind.heading:
        return f"Heading {block.level}"
    return "Normal"


def _add_run(paragraph, text: str, formatting: FormattingState, style: BlockStyle) -> None:
    """Append a run whose flags are the union of run formatting and block overrides."""
    run = paragraph.add_run(text)
    # None inherits from the paragraph style instead of forcing the flag off
    run.bold = True if formatting.bold or style.bold else None
    run.italic = True if formatting.italic or style.italic else None
    run.underline = True if formatting.underline else None
    run.font.strike = True if formatting.strike else None
    run.font.size = Pt(style.size / 2)
    if style.color:
        run.font.color.rgb = RGBColor.from_string(style.color)


def build_docx(doc: AssembledDoc, title: str | None = None):
    """Build an in-memory python-docx Document with one paragraph per block."""
    document = Document()
    if title:
        document.core_properties.title = title

    for block in doc:
        paragraph = document.add_paragraph(style=_paragraph_style(block))
        paragraph.paragraph_format.space_before = Twips(block.style.spacing_before)
        paragraph.paragraph_format.space_after = Twips(block.style.spacing_after)
        if block.prefix:
            _add_run(paragraph, block.prefix, PLAIN, block.style)
        for run in block.runs:
            _add_run(paragraph, run.text, run.formatting, block.style)
    return document


def render_docx(doc: AssembledDoc, target: Union[str, Path, BinaryIO], title: str | None = None) -> None:
    """Write doc as .docx to a path or binary stream. Raises PackagingFailed on any error."""
    if isinstance(target, Path):
        target = str(target)
    try:
        build_docx(doc, title).save(target)
    except Exception as e:
        logger.error("Failed to package %d block(s) into .docx: %s", len(doc), e)
        raise PackagingFailed(f"Failed to build .docx document: {e}") from e


def render_docx_bytes(doc: AssembledDoc, title: str | None = None) -> bytes:
    """Return the .docx package for doc as bytes."""
    buffer = io.BytesIO()
    render_docx(doc, buffer, title)
    return buffer.getvalue()
