"""Unit tests for core/export.py"""

from datetime import datetime

import docx
import pytest

from newsdoc.core.export import (
    SEPARATOR,
    article_blocks,
    build_collection_doc,
    source_line,
    write_docx,
)
from newsdoc.core.models import ArticleDoc, BlockKind, CollectionDoc
from newsdoc.errors import PackagingFailed


GENERATED = datetime(2026, 3, 4, 9, 30)


def test_collection_doc_block_order(collection):
    """Header, then each article's metadata and body, separated between articles."""
    doc = build_collection_doc(collection, generated_at=GENERATED)
    assert [b.text for b in doc] == [
        "Weekly Brief",
        "Top stories",
        "Generated on 2026-03-04",
        "Markets wrap",
        "A calm week",
        "By Dana Reyes • 2026-03-02",
        "Source: The Ledger - https://ledger.example/markets",
        "Markets",
        "Stocks rallied on Monday.",
        "Tech up",
        "Energy down",
        "Quiet optimism.",
        SEPARATOR,
        "Weather",
        "",
        "By Sam Ito • 2026-03-03",
        "Rain.",
    ]


def test_header_block_kinds(collection):
    blocks = list(build_collection_doc(collection, generated_at=GENERATED))
    assert blocks[0].kind == BlockKind.title
    assert blocks[3].kind == BlockKind.heading
    assert blocks[3].level == 1


def test_single_article_has_no_separator(collection):
    single = collection.model_copy(update={"articles": collection.articles[:1]})
    doc = build_collection_doc(single, generated_at=GENERATED)
    assert SEPARATOR not in [b.text for b in doc]


def test_separator_count(collection):
    """n articles produce n - 1 separators."""
    third = ArticleDoc(heading="Sport", date=datetime(2026, 3, 5))
    triple = collection.model_copy(update={"articles": [*collection.articles, third]})
    texts = [b.text for b in build_collection_doc(triple, generated_at=GENERATED)]
    assert texts.count(SEPARATOR) == 2


def test_description_is_optional():
    empty = CollectionDoc(title="Empty")
    doc = build_collection_doc(empty, generated_at=GENERATED)
    assert [b.text for b in doc] == ["Empty", "Generated on 2026-03-04"]


def test_custom_date_format(collection):
    doc = build_collection_doc(collection, generated_at=GENERATED, date_format="%d/%m/%Y")
    texts = [b.text for b in doc]
    assert "Generated on 04/03/2026" in texts
    assert "By Dana Reyes • 02/03/2026" in texts


@pytest.mark.parametrize("name,url,expected", [
    ("The Ledger", "https://l.example", "Source: The Ledger - https://l.example"),
    ("The Ledger", None, "Source: The Ledger"),
    (None, "https://l.example", "Source: https://l.example"),
    (None, None, None),
    ("", "", None),
])
def test_source_line(name, url, expected):
    article = ArticleDoc(heading="h", media_name=name, media_url=url)
    assert source_line(article) == expected


def test_article_blocks_without_source_or_body():
    article = ArticleDoc(heading="Bare", author="Al", date=datetime(2026, 1, 2))
    assert [b.text for b in article_blocks(article)] == ["Bare", "", "By Al • 2026-01-02"]


def test_article_body_fallback_paragraph():
    """A body with no block markup still contributes its text."""
    article = ArticleDoc(heading="h", body="just text", date=datetime(2026, 1, 2))
    assert article_blocks(article)[-1].text == "just text"


def test_write_docx(collection, tmp_path):
    path = write_docx(collection, tmp_path / "out", generated_at=GENERATED)
    assert path == tmp_path / "out" / "weekly_brief.docx"
    document = docx.Document(str(path))
    assert document.paragraphs[0].text == "Weekly Brief"
    assert document.core_properties.title == "Weekly Brief"
    assert len(document.paragraphs) == 17


def test_write_docx_output_dir_is_a_file(tmp_path):
    """A blocked output directory raises PackagingFailed instead of an OS error."""
    blocker = tmp_path / "dist"
    blocker.write_text("not a directory")
    with pytest.raises(PackagingFailed):
        write_docx(CollectionDoc(title="A"), blocker, generated_at=GENERATED)
