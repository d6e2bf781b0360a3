#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/ast/builder.py
"""Builder helper for constructing source-backed trees.

Text nodes only hold offsets into a source buffer, so building a tree by
hand means keeping a buffer and the offsets in step. ``SourceBuilder``
does that bookkeeping: every call appends bytes to the buffer and returns
a node pointing at them.

"""

from __future__ import annotations

from typing import Optional, Union

from texmark.ast.nodes import AutoLink, AutoLinkType, CodeBlock, FencedCodeBlock, RawHTML, Segment, Text

TextLike = Union[str, bytes]


def _as_bytes(text: TextLike) -> bytes:
    return text.encode("utf-8") if isinstance(text, str) else text


class SourceBuilder:
    r"""Accumulate a source buffer while creating nodes that point into it.

    Examples
    --------
    >>> from texmark.ast import Document, Heading
    >>> from texmark.renderers import LatexRenderer
    >>> sb = SourceBuilder()
    >>> heading = Heading(level=1, children=[sb.text("Title")])
    >>> doc = Document(children=[heading])
    >>> LatexRenderer().render_to_bytes(doc, sb.source).count(b"\\section{Title}")
    1

    """

    def __init__(self, initial: TextLike = b""):
        """Initialize the builder with an optional buffer prefix."""
        self._buffer = bytearray(_as_bytes(initial))

    @property
    def source(self) -> bytes:
        """Snapshot of the buffer accumulated so far."""
        return bytes(self._buffer)

    def segment(self, text: TextLike) -> Segment:
        """Append ``text`` to the buffer and return its segment."""
        data = _as_bytes(text)
        start = len(self._buffer)
        self._buffer.extend(data)
        return Segment(start, start + len(data))

    def text(
        self,
        text: TextLike,
        soft_line_break: bool = False,
        hard_line_break: bool = False,
        raw: bool = False,
    ) -> Text:
        """Create a ``Text`` node for ``text``."""
        return Text(
            segment=self.segment(text),
            soft_line_break=soft_line_break,
            hard_line_break=hard_line_break,
            raw=raw,
        )

    def lines(self, body: TextLike) -> list[Segment]:
        """Split ``body`` into line segments that keep their line endings."""
        return [self.segment(line) for line in _as_bytes(body).splitlines(keepends=True)]

    def code_block(self, body: TextLike) -> CodeBlock:
        """Create an indented code block with ``body`` as its lines."""
        return CodeBlock(lines=self.lines(body))

    def fenced_code_block(self, body: TextLike, info: Optional[TextLike] = None) -> FencedCodeBlock:
        """Create a fenced code block with an optional info string."""
        info_segment = self.segment(info) if info is not None else None
        return FencedCodeBlock(lines=self.lines(body), info=info_segment)

    def auto_link(self, target: TextLike, email: bool = False) -> AutoLink:
        """Create an autolink whose target and label are ``target``."""
        link_type = AutoLinkType.EMAIL if email else AutoLinkType.URL
        return AutoLink(auto_link_type=link_type, value=self.segment(target))

    def raw_html(self, html: TextLike) -> RawHTML:
        """Create an inline raw HTML node."""
        return RawHTML(segments=[self.segment(html)])
