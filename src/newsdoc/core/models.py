"""Data models for the markup tree, conversion output, and collection exchange"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


MAX_DEPTH = 200     # default markup nesting limit for parsing and conversion


class Tag(str, Enum):
    """Closed vocabulary of markup tags the converter understands."""
    root = "root"
    bold = "bold"
    italic = "italic"
    underline = "underline"
    strike = "strike"
    heading_1 = "heading-1"
    heading_2 = "heading-2"
    heading_3 = "heading-3"
    paragraph = "paragraph"
    blockquote = "blockquote"
    unordered_list = "unordered-list"
    ordered_list = "ordered-list"
    list_item = "list-item"
    line_break = "line-break"
    transparent = "transparent"     # unrecognized tag; children processed in place


TAG_NAMES: dict[str, Tag] = {
    'strong':     Tag.bold,
    'b':          Tag.bold,
    'em':         Tag.italic,
    'i':          Tag.italic,
    'u':          Tag.underline,
    'strike':     Tag.strike,
    's':          Tag.strike,
    'h1':         Tag.heading_1,
    'h2':         Tag.heading_2,
    'h3':         Tag.heading_3,
    'p':          Tag.paragraph,
    'blockquote': Tag.blockquote,
    'ul':         Tag.unordered_list,
    'ol':         Tag.ordered_list,
    'li':         Tag.list_item,
    'br':         Tag.line_break,
}


def tag_for(name: str) -> Tag:
    """Map an HTML tag name onto the Tag vocabulary; unknown names are transparent."""
    return TAG_NAMES.get(name.lower(), Tag.transparent)


@dataclass(frozen=True)
class Text:
    """Leaf node holding literal characters, whitespace included."""
    text: str


@dataclass(frozen=True)
class Element:
    """Tagged container node; `name` keeps the source tag name for diagnostics."""
    tag: Tag
    children: tuple["MarkupNode", ...] = ()
    name: str = ""


MarkupNode = Union[Text, Element]


@dataclass(frozen=True)
class FormattingState:
    """Inline style flags in effect at one tree position."""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False

    def with_tag(self, tag: Tag) -> "FormattingState":
        """Return a copy extended with the flag `tag` introduces, or self if none."""
        flag = EMPHASIS_FLAGS.get(tag)
        if flag is None or getattr(self, flag):
            return self
        return replace(self, **{flag: True})


EMPHASIS_FLAGS: dict[Tag, str] = {
    Tag.bold:      "bold",
    Tag.italic:    "italic",
    Tag.underline: "underline",
    Tag.strike:    "strike",
}

PLAIN = FormattingState()


@dataclass(frozen=True)
class Run:
    """A contiguous span of text sharing one formatting state."""
    text: str
    formatting: FormattingState = PLAIN


BLANK_RUN = Run("")


class BlockKind(str, Enum):
    title = "title"
    heading = "heading"
    paragraph = "paragraph"
    quote = "quote"
    list_item = "list_item"
    line_break = "line_break"


@dataclass(frozen=True)
class BlockStyle:
    """Block-level style: size in half-points, spacing in twentieths of a point."""
    size: int = 22
    spacing_before: int = 0
    spacing_after: int = 0
    bold: bool = False
    italic: bool = False
    color: Optional[str] = None     # hex RGB, e.g. '666666'


@dataclass(frozen=True)
class DocumentBlock:
    """One document-level unit; never mutated after the classifier creates it."""
    kind: BlockKind
    runs: tuple[Run, ...]
    style: BlockStyle
    level: Optional[int] = None     # heading level (1-3); None for non-headings
    ordinal: Optional[int] = None   # 1-based number for ordered list items
    bullet: bool = False            # unordered list item

    @property
    def prefix(self) -> str:
        if self.kind != BlockKind.list_item:
            return ""
        if self.ordinal is not None:
            return f"{self.ordinal}. "
        return "• " if self.bullet else ""

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


@dataclass(frozen=True)
class AssembledDoc:
    """Ordered, terminal sequence of blocks handed to the packaging step."""
    blocks: tuple[DocumentBlock, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[DocumentBlock]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    @property
    def text(self) -> str:
        """All run text in document order, list prefixes excluded."""
        return "".join(b.text for b in self.blocks)


class ArticleDoc(BaseModel):
    """Public exchange contract for one article; `body` is rich-text markup."""
    id: UUID = Field(default_factory=uuid4)
    heading: str
    subheading: str = ""
    media_name: Optional[str] = None
    media_url: Optional[str] = None
    author: str = ""
    body: str = ""
    date: datetime = Field(default_factory=datetime.now)
    order: Optional[int] = None     # None appends after existing articles


class CollectionDoc(BaseModel):
    """Public exchange contract for a collection; articles are in display order."""
    id: UUID = Field(default_factory=uuid4)
    title: str
    description: Optional[str] = None
    articles: list[ArticleDoc] = []
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
