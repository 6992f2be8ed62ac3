"""Unit tests for core/convert/blocks.py"""

import pytest

from newsdoc.core.convert.blocks import BLOCK_STYLES, HANDLERS, classify_blocks, classify_node
from newsdoc.core.models import BLANK_RUN, PLAIN, BlockKind, Element, FormattingState, Run, Tag, Text
from newsdoc.errors import ContentTooComplex


def _el(tag: Tag, *children) -> Element:
    return Element(tag=tag, children=tuple(Text(c) if isinstance(c, str) else c for c in children))


def _root(*children) -> Element:
    return _el(Tag.root, *children)


def test_every_tag_has_a_handler():
    """The dispatch table covers the whole tag vocabulary."""
    assert set(HANDLERS) == set(Tag)


# --- headings ---

@pytest.mark.parametrize("tag,level,size,before,after", [
    (Tag.heading_1, 1, 32, 400, 200),
    (Tag.heading_2, 2, 28, 300, 150),
    (Tag.heading_3, 3, 24, 250, 125),
])
def test_heading_block_and_style(tag, level, size, before, after):
    """Each heading tag maps to its level and fixed style."""
    [block] = classify_node(_el(tag, "Title"))
    assert block.kind == BlockKind.heading
    assert block.level == level
    assert (block.style.size, block.style.spacing_before, block.style.spacing_after) == (size, before, after)
    assert block.runs == (Run("Title", PLAIN),)


def test_empty_heading_is_omitted():
    """A heading without text produces no block."""
    assert classify_node(_el(Tag.heading_1)) == []
    assert classify_node(_el(Tag.heading_2, _el(Tag.bold))) == []


# --- paragraphs ---

def test_paragraph_scenario():
    """<p>Hello <b>world</b></p> is one paragraph with a plain and a bold run."""
    [block] = classify_node(_el(Tag.paragraph, "Hello ", _el(Tag.bold, "world")))
    assert block.kind == BlockKind.paragraph
    assert block.runs == (Run("Hello ", PLAIN), Run("world", FormattingState(bold=True)))
    assert block.style == BLOCK_STYLES[Tag.paragraph]
    assert (block.style.size, block.style.spacing_before, block.style.spacing_after) == (22, 0, 200)


def test_empty_paragraph_emits_blank_block():
    """A paragraph without text still yields exactly one blank paragraph."""
    blocks = classify_node(_el(Tag.paragraph))
    assert len(blocks) == 1
    assert blocks[0].kind == BlockKind.paragraph
    assert blocks[0].runs == (BLANK_RUN,)


def test_whitespace_paragraph_keeps_whitespace():
    """A whitespace-only paragraph yields one block whose text is the whitespace."""
    blocks = classify_node(_el(Tag.paragraph, "   "))
    assert len(blocks) == 1
    assert blocks[0].text == "   "


def test_paragraph_with_empty_emphasis_is_blank():
    """Emphasis without text leaves the paragraph blank but present."""
    [block] = classify_node(_el(Tag.paragraph, _el(Tag.italic)))
    assert block.runs == (BLANK_RUN,)


# --- quotes ---

def test_quote_style_is_italic_and_muted():
    """Blockquotes carry italic and a muted color at block level."""
    [block] = classify_node(_el(Tag.blockquote, "wise words"))
    assert block.kind == BlockKind.quote
    assert block.style.italic is True
    assert block.style.color == "666666"
    assert (block.style.spacing_before, block.style.spacing_after) == (200, 200)


def test_empty_quote_is_omitted():
    assert classify_node(_el(Tag.blockquote)) == []


# --- lists ---

def test_unordered_list_scenario():
    """Each li becomes a bullet ListItem with no ordinal."""
    blocks = classify_node(_el(Tag.unordered_list, _el(Tag.list_item, "a"), _el(Tag.list_item, "b")))
    assert [b.kind for b in blocks] == [BlockKind.list_item, BlockKind.list_item]
    assert [b.ordinal for b in blocks] == [None, None]
    assert all(b.bullet for b in blocks)
    assert [b.runs for b in blocks] == [(Run("a"),), (Run("b"),)]
    assert [b.prefix for b in blocks] == ["• ", "• "]
    assert all(b.style.spacing_after == 150 for b in blocks)


@pytest.mark.parametrize("count", [1, 3, 7])
def test_ordered_list_numbering(count):
    """Ordinals are exactly 1..N in source order."""
    items = [_el(Tag.list_item, f"item {i}") for i in range(count)]
    blocks = classify_node(_el(Tag.ordered_list, *items))
    assert [b.ordinal for b in blocks] == list(range(1, count + 1))
    assert [b.prefix for b in blocks] == [f"{n}. " for n in range(1, count + 1)]
    assert not any(b.bullet for b in blocks)


def test_list_ignores_non_item_children():
    """Whitespace and stray elements between items are not list items."""
    node = _el(Tag.ordered_list, "\n", _el(Tag.list_item, "a"), _el(Tag.paragraph, "stray"), _el(Tag.list_item, "b"))
    blocks = classify_node(node)
    assert [b.text for b in blocks] == ["a", "b"]
    assert [b.ordinal for b in blocks] == [1, 2]


def test_list_item_keeps_inline_formatting():
    [block] = classify_node(_el(Tag.unordered_list, _el(Tag.list_item, _el(Tag.strike, "gone"))))
    assert block.runs == (Run("gone", FormattingState(strike=True)),)


# --- line breaks ---

def test_line_break_block():
    """A top-level line break is one blank LineBreak block."""
    [block] = classify_node(_el(Tag.line_break))
    assert block.kind == BlockKind.line_break
    assert block.runs == (BLANK_RUN,)
    assert block.style.spacing_after == 100


# --- transparent containers ---

def test_transparent_container_processes_children_in_place():
    """An unrecognized wrapper yields its children's blocks in order."""
    root = _root(_el(Tag.transparent, _el(Tag.heading_1, "T"), _el(Tag.paragraph, "p")))
    blocks = classify_blocks(root)
    assert [b.kind for b in blocks] == [BlockKind.heading, BlockKind.paragraph]


def test_top_level_text_is_not_a_block():
    """Loose text at block level contributes no block."""
    assert classify_blocks(_root("loose", _el(Tag.bold, "also loose"))) == []


def test_classify_preserves_document_order():
    root = _root(
        _el(Tag.paragraph, "one"),
        _el(Tag.heading_2, "two"),
        _el(Tag.blockquote, "three"),
        _el(Tag.line_break),
    )
    blocks = classify_blocks(root)
    assert [b.kind for b in blocks] == [
        BlockKind.paragraph, BlockKind.heading, BlockKind.quote, BlockKind.line_break,
    ]


def test_empty_root_yields_no_blocks():
    assert classify_blocks(_root()) == []


def test_classify_depth_limit():
    """Deeply nested transparent wrappers raise ContentTooComplex."""
    node = _el(Tag.paragraph, "x")
    for _ in range(10):
        node = _el(Tag.transparent, node)
    with pytest.raises(ContentTooComplex):
        classify_blocks(_root(node), max_depth=5)
