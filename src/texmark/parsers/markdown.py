#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/parsers/markdown.py
"""Markdown to texmark tree parser.

This module parses Markdown with mistune and converts its token stream
into the texmark node tree. Text nodes must point into a source buffer, so
every piece of text a token carries is looked up in the source, scanning
forward in document order:

- inline text that is found becomes a ``Text`` segment, otherwise a
  ``String`` node carrying its own bytes. Escapes are decoded by mistune,
  character references by ``decode_entities``; either way the text no longer
  matches the source,
- code and HTML lines that are not found verbatim (for example after tab
  expansion) are appended to the end of the buffer and pointed at there.

The buffer returned with the tree is therefore the normalized input,
possibly followed by such appended text.

"""

from __future__ import annotations

import html
import logging
import re
from typing import Any, Optional

from texmark.ast import (
    AutoLink,
    AutoLinkType,
    Blockquote,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    HTMLBlock,
    Image,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    RawHTML,
    Segment,
    SourceBuilder,
    String,
    Text,
    TextBlock,
    ThematicBreak,
)
from texmark.exceptions import ParsingError
from texmark.options.markdown import MarkdownParserOptions
from texmark.parsers.base import BaseParser, ParsedDocument
from texmark.utils.decorators import debug_timer, requires_dependencies
from texmark.utils.io_utils import InputSource

logger = logging.getLogger(__name__)

DEPS_MARKDOWN = ["mistune>=3.0.0"]

MAILTO = "mailto:"

# Named, decimal and hex character references; the semicolon is required
ENTITY_PATTERN = re.compile(r"&(?:#[0-9]{1,7}|#[xX][0-9a-fA-F]{1,6}|[A-Za-z][A-Za-z0-9]{0,31});")


def normalize_source(data: bytes) -> bytes:
    """Convert CRLF and CR line endings to LF."""
    return data.replace(b"\r\n", b"\n").replace(b"\r", b"\n")


def decode_entities(text: str) -> str:
    """Replace HTML character references in ``text`` with the characters they name.

    Unknown names are left as they are.
    """
    return ENTITY_PATTERN.sub(lambda match: html.unescape(match.group(0)), text)


class _TokenConverter:
    """Convert one mistune token stream, tracking the source scan position."""

    def __init__(self, source: bytes, options: MarkdownParserOptions):
        self._original = source
        self._builder = SourceBuilder(source)
        self._cursor = 0
        self._options = options

    @property
    def source(self) -> bytes:
        return self._builder.source

    def _locate(self, data: bytes) -> Optional[Segment]:
        """Find ``data`` at or after the cursor and move the cursor past it."""
        if not data:
            return Segment(self._cursor, self._cursor)
        position = self._original.find(data, self._cursor)
        if position < 0:
            return None
        self._cursor = position + len(data)
        return Segment(position, self._cursor)

    def _segment(self, data: bytes) -> Segment:
        """Locate ``data``, appending it to the buffer when it is not in the source."""
        segment = self._locate(data)
        if segment is None:
            logger.debug("Text not found in source, appending %d bytes", len(data))
            segment = self._builder.segment(data)
        return segment

    def _lines(self, raw: str) -> list[Segment]:
        return [self._segment(line) for line in raw.encode("utf-8").splitlines(keepends=True)]

    def _text(self, raw: str, code: bool = False) -> Node:
        data = raw.encode("utf-8")
        segment = self._locate(data)
        decoded = raw if code else decode_entities(raw)
        if decoded != raw:
            return String(value=decoded.encode("utf-8"))
        if segment is None:
            return String(value=data, code=code)
        return Text(segment=segment)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def blocks(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self.block(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def block(self, token: dict[str, Any]) -> Node | None:
        token_type = token.get("type", "")
        attrs = token.get("attrs") or {}
        children = token.get("children") or []

        if token_type == "heading":
            return Heading(level=max(1, int(attrs.get("level", 1))), children=self.inlines(children))
        elif token_type == "paragraph":
            return Paragraph(children=self.inlines(children))
        elif token_type == "block_text":
            return TextBlock(children=self.inlines(children))
        elif token_type == "block_code":
            return self._code_block(token, attrs)
        elif token_type == "block_quote":
            return Blockquote(children=self.blocks(children))
        elif token_type == "list":
            return List(
                ordered=bool(attrs.get("ordered", False)),
                start=int(attrs.get("start", 1)),
                children=[self.block(child) or ListItem() for child in children],
            )
        elif token_type == "list_item":
            return ListItem(children=self.blocks(children))
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(lines=self._lines(token.get("raw", "")))
        elif token_type == "blank_line":
            return None

        logger.debug("Skipping unsupported block token: %s", token_type)
        return None

    def _code_block(self, token: dict[str, Any], attrs: dict[str, Any]) -> CodeBlock:
        info = attrs.get("info")
        if token.get("style") == "fenced" or info:
            # The info string precedes the body in the source
            info_segment = self._segment(info.encode("utf-8")) if info else None
            return FencedCodeBlock(lines=self._lines(token.get("raw", "")), info=info_segment)
        return CodeBlock(lines=self._lines(token.get("raw", "")))

    # ------------------------------------------------------------------
    # Inlines
    # ------------------------------------------------------------------

    def inlines(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            token_type = token.get("type", "")
            if token_type == "softbreak":
                self._mark_break(nodes, soft=True)
            elif token_type == "linebreak":
                self._mark_break(nodes, soft=False)
            else:
                node = self.inline(token)
                if node is not None:
                    nodes.append(node)
        return nodes

    def _mark_break(self, nodes: list[Node], soft: bool) -> None:
        """Flag the preceding text with a line break, adding an empty text if needed."""
        last = nodes[-1] if nodes else None
        if not isinstance(last, Text) or last.raw or last.soft_line_break or last.hard_line_break:
            last = Text(segment=Segment(self._cursor, self._cursor))
            nodes.append(last)
        if soft:
            last.soft_line_break = True
        else:
            last.hard_line_break = True

    def inline(self, token: dict[str, Any]) -> Node | None:
        token_type = token.get("type", "")
        attrs = token.get("attrs") or {}
        children = token.get("children") or []

        if token_type == "text":
            return self._text(token.get("raw", ""))
        elif token_type == "emphasis":
            return Emphasis(level=1, children=self.inlines(children))
        elif token_type == "strong":
            return Emphasis(level=2, children=self.inlines(children))
        elif token_type == "codespan":
            return CodeSpan(children=[self._text(token.get("raw", ""), code=True)])
        elif token_type == "link":
            return self._link(attrs, children)
        elif token_type == "image":
            return Image(
                destination=str(attrs.get("url", "")).encode("utf-8"),
                title=str(attrs.get("title") or "").encode("utf-8"),
                children=self.inlines(children),
            )
        elif token_type == "inline_html":
            raw = token.get("raw", "")
            if not self._options.parse_inline_html:
                return self._text(raw)
            return RawHTML(segments=[self._segment(raw.encode("utf-8"))])

        logger.debug("Skipping unsupported inline token: %s", token_type)
        return None

    def _link(self, attrs: dict[str, Any], children: list[dict[str, Any]]) -> Node:
        url = str(attrs.get("url", ""))
        if len(children) == 1 and children[0].get("type") == "text":
            label = children[0].get("raw", "")
            if label and url in (label, MAILTO + label):
                link_type = AutoLinkType.EMAIL if url == MAILTO + label else AutoLinkType.URL
                return AutoLink(auto_link_type=link_type, value=self._segment(label.encode("utf-8")))

        return Link(
            destination=url.encode("utf-8"),
            title=str(attrs.get("title") or "").encode("utf-8"),
            children=self.inlines(children),
        )


class MarkdownParser(BaseParser):
    r"""Parse Markdown into a texmark document tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> parsed = MarkdownParser().parse("# Hello\n\nThis is **bold**.")
        >>> parsed.document.children[0].level
        1

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, input_data: InputSource) -> ParsedDocument:
        """Parse Markdown input into a document tree.

        Parameters
        ----------
        input_data : str, Path, IO or bytes
            Markdown input to parse

        Returns
        -------
        ParsedDocument
            Tree and the source buffer its segments point into

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        source = normalize_source(self._load_source(input_data, self.options.encoding))

        import mistune

        markdown = mistune.create_markdown(renderer=None)
        with debug_timer(logger, "Parsing (markdown)"):
            try:
                tokens, _state = markdown.parse(source.decode("utf-8", errors="replace"))
            except Exception as e:
                raise ParsingError(f"Failed to parse Markdown: {e}", stage="tokenize", original_error=e) from e

            converter = _TokenConverter(source, self.options)
            children = converter.blocks(tokens if isinstance(tokens, list) else [])

        logger.debug("Parsed %d top-level blocks", len(children))
        return ParsedDocument(document=Document(children=children), source=converter.source)
