#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/ast/nodes.py
"""AST node classes for Markdown document trees.

The tree mirrors the block and inline structure produced by a CommonMark
parser. Text-bearing nodes do not copy their text: they hold ``Segment``
offsets into the raw source buffer the document was parsed from, and the
renderer resolves them against that buffer. ``String`` is the exception and
carries its own bytes.

Node Hierarchy
--------------
Block-level nodes:
    - Document, Heading, Blockquote, CodeBlock, FencedCodeBlock
    - HTMLBlock, List, ListItem, Paragraph, TextBlock, ThematicBreak

Inline nodes:
    - AutoLink, CodeSpan, Emphasis, Image, Link, RawHTML, Text, String

Every node knows its parent and siblings; the renderer uses them for
spacing decisions but never changes the tree.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, Optional


class NodeKind(Enum):
    """Tag identifying the syntactic category of a node."""

    DOCUMENT = "document"
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "code_block"
    FENCED_CODE_BLOCK = "fenced_code_block"
    HTML_BLOCK = "html_block"
    LIST = "list"
    LIST_ITEM = "list_item"
    PARAGRAPH = "paragraph"
    TEXT_BLOCK = "text_block"
    THEMATIC_BREAK = "thematic_break"
    AUTO_LINK = "auto_link"
    CODE_SPAN = "code_span"
    EMPHASIS = "emphasis"
    IMAGE = "image"
    LINK = "link"
    RAW_HTML = "raw_html"
    TEXT = "text"
    STRING = "string"


class AutoLinkType(Enum):
    """Kind of target an autolink points at."""

    URL = "url"
    EMAIL = "email"


@dataclass(frozen=True)
class Segment:
    """Half-open byte range ``[start, stop)`` into a source buffer.

    Parameters
    ----------
    start : int
        Offset of the first byte
    stop : int
        Offset one past the last byte

    """

    start: int
    stop: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.stop < self.start:
            raise ValueError(f"Invalid segment bounds: [{self.start}, {self.stop})")

    def __len__(self) -> int:
        return self.stop - self.start

    def value(self, source: bytes) -> bytes:
        """Return the bytes this segment covers in ``source``."""
        return source[self.start : self.stop]


@dataclass(eq=False)
class Node:
    """Base class for all tree nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Ordered child nodes. Their ``parent`` is set on construction.

    """

    kind: ClassVar[NodeKind]

    children: list[Node] = field(default_factory=list)
    parent: Optional[Node] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def append_child(self, child: Node) -> Node:
        """Append ``child`` and take ownership of it. Returns the child."""
        child.parent = self
        self.children.append(child)
        return child

    @property
    def first_child(self) -> Optional[Node]:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> Optional[Node]:
        return self.children[-1] if self.children else None

    def _sibling(self, step: int) -> Optional[Node]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        for index, sibling in enumerate(siblings):
            if sibling is self:
                target = index + step
                if 0 <= target < len(siblings):
                    return siblings[target]
                return None
        return None

    @property
    def next_sibling(self) -> Optional[Node]:
        return self._sibling(1)

    @property
    def previous_sibling(self) -> Optional[Node]:
        return self._sibling(-1)

    def iter_descendants(self) -> Iterator[Node]:
        """Yield all descendants in document order."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass(eq=False)
class Document(Node):
    """Root node of a parsed document."""

    kind: ClassVar[NodeKind] = NodeKind.DOCUMENT


@dataclass(eq=False)
class Heading(Node):
    """ATX or setext heading.

    Parameters
    ----------
    level : int, default = 1
        Heading level, 1-based (1-6 for CommonMark input)

    """

    kind: ClassVar[NodeKind] = NodeKind.HEADING

    level: int = 1

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.level < 1:
            raise ValueError(f"Heading level must be positive, got {self.level}")


@dataclass(eq=False)
class Blockquote(Node):
    """Block quotation containing block children."""

    kind: ClassVar[NodeKind] = NodeKind.BLOCKQUOTE


@dataclass(eq=False)
class CodeBlock(Node):
    """Indented code block.

    Parameters
    ----------
    lines : list of Segment
        Source lines of the block body, each including its line ending

    """

    kind: ClassVar[NodeKind] = NodeKind.CODE_BLOCK

    lines: list[Segment] = field(default_factory=list)


@dataclass(eq=False)
class FencedCodeBlock(CodeBlock):
    """Fenced code block with an optional info string.

    Parameters
    ----------
    info : Segment or None
        Info string following the opening fence

    """

    kind: ClassVar[NodeKind] = NodeKind.FENCED_CODE_BLOCK

    info: Optional[Segment] = None

    def language(self, source: bytes) -> Optional[bytes]:
        """Return the first word of the info string, or None when absent."""
        if self.info is None:
            return None
        words = self.info.value(source).split(maxsplit=1)
        return words[0] if words else None


@dataclass(eq=False)
class HTMLBlock(Node):
    """Raw HTML block."""

    kind: ClassVar[NodeKind] = NodeKind.HTML_BLOCK

    lines: list[Segment] = field(default_factory=list)


@dataclass(eq=False)
class List(Node):
    """Ordered or bullet list.

    Parameters
    ----------
    ordered : bool, default = False
        Whether the list is numbered
    start : int, default = 1
        First number of an ordered list

    """

    kind: ClassVar[NodeKind] = NodeKind.LIST

    ordered: bool = False
    start: int = 1

    @property
    def is_ordered(self) -> bool:
        return self.ordered


@dataclass(eq=False)
class ListItem(Node):
    """Item of a list."""

    kind: ClassVar[NodeKind] = NodeKind.LIST_ITEM


@dataclass(eq=False)
class Paragraph(Node):
    """Paragraph of inline content."""

    kind: ClassVar[NodeKind] = NodeKind.PARAGRAPH


@dataclass(eq=False)
class TextBlock(Node):
    """Inline run that is not wrapped in a paragraph (tight list items)."""

    kind: ClassVar[NodeKind] = NodeKind.TEXT_BLOCK


@dataclass(eq=False)
class ThematicBreak(Node):
    """Horizontal rule."""

    kind: ClassVar[NodeKind] = NodeKind.THEMATIC_BREAK


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass(eq=False)
class AutoLink(Node):
    """Autolink such as ``<https://example.com>`` or ``<me@example.com>``.

    Parameters
    ----------
    auto_link_type : AutoLinkType
        Whether the target is a URL or an email address
    value : Segment
        Link target as written in the source

    """

    kind: ClassVar[NodeKind] = NodeKind.AUTO_LINK

    auto_link_type: AutoLinkType = AutoLinkType.URL
    value: Segment = field(default_factory=lambda: Segment(0, 0))

    def url(self, source: bytes) -> bytes:
        return self.value.value(source)

    def label(self, source: bytes) -> bytes:
        return self.value.value(source)


@dataclass(eq=False)
class CodeSpan(Node):
    """Inline code; children are ``Text`` nodes."""

    kind: ClassVar[NodeKind] = NodeKind.CODE_SPAN


@dataclass(eq=False)
class Emphasis(Node):
    """Emphasis of a given strength (1 emphasis, 2 strong)."""

    kind: ClassVar[NodeKind] = NodeKind.EMPHASIS

    level: int = 1


@dataclass(eq=False)
class Link(Node):
    """Inline link; children form the label.

    Parameters
    ----------
    destination : bytes
        Link target
    title : bytes
        Optional link title, empty when absent

    """

    kind: ClassVar[NodeKind] = NodeKind.LINK

    destination: bytes = b""
    title: bytes = b""


@dataclass(eq=False)
class Image(Node):
    """Inline image; children form the alternative text."""

    kind: ClassVar[NodeKind] = NodeKind.IMAGE

    destination: bytes = b""
    title: bytes = b""


@dataclass(eq=False)
class RawHTML(Node):
    """Inline raw HTML."""

    kind: ClassVar[NodeKind] = NodeKind.RAW_HTML

    segments: list[Segment] = field(default_factory=list)


@dataclass(eq=False)
class Text(Node):
    """Run of text located in the source buffer.

    Parameters
    ----------
    segment : Segment
        Where the text lives in the source buffer
    soft_line_break : bool, default = False
        Text is followed by a soft line break
    hard_line_break : bool, default = False
        Text is followed by a hard line break
    raw : bool, default = False
        Text must be written without escaping

    """

    kind: ClassVar[NodeKind] = NodeKind.TEXT

    segment: Segment = field(default_factory=lambda: Segment(0, 0))
    soft_line_break: bool = False
    hard_line_break: bool = False
    raw: bool = False

    def value(self, source: bytes) -> bytes:
        return self.segment.value(source)


@dataclass(eq=False)
class String(Node):
    """Text that carries its own bytes instead of a source segment.

    Parameters
    ----------
    value : bytes
        The text itself
    code : bool, default = False
        Text is code and must not be escaped
    raw : bool, default = False
        Text must be written without escaping

    """

    kind: ClassVar[NodeKind] = NodeKind.STRING

    value: bytes = b""
    code: bool = False
    raw: bool = False
