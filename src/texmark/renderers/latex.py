#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/renderers/latex.py
r"""LaTeX rendering from a Markdown document tree.

This module provides the LatexRenderer class which streams LaTeX source
for a document tree into a binary writer. Every node kind has one handler,
called by the walk driver when the node is entered and again when it is
left. Handlers write straight to the output; nothing is buffered or
revisited.

Content the renderer cannot or will not translate (HTML, dangerous code
lines, malformed image attributes) is never an error. It is replaced by a
LaTeX line comment starting with ``% texmark:`` so the document always
compiles to a matched ``\begin{document}``/``\end{document}`` pair.

"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import IO, Callable, Mapping

from texmark.ast import (
    AutoLink,
    AutoLinkType,
    CodeBlock,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    Image,
    Link,
    List,
    Node,
    NodeKind,
    String,
    Text,
    WalkStatus,
    walk,
)
from texmark.constants import (
    BEGIN_DOCUMENT,
    BLOCKQUOTE_END,
    BLOCKQUOTE_START,
    CODE_SPAN_START,
    COMMENT_PREFIX,
    DEFAULT_PREAMBLE,
    EMPHASIS_COMMANDS,
    END_DOCUMENT,
    FIGURE_TEMPLATE,
    HARD_BREAK,
    HEADING_COMMANDS,
    HREF_START,
    HRULE_COMMAND,
    INDENTED_CODE_LANGUAGE,
    ITEM_COMMAND,
    MAILTO_PREFIX,
    MAKE_TITLE,
    MAX_HEADING_INDEX,
    MAX_LANGUAGE_TAG_LENGTH,
    SUPPORTED_LANGUAGES,
    VERBATIM_BEGIN,
    VERBATIM_END,
)
from texmark.options.latex import LatexRendererOptions
from texmark.renderers.base import BaseRenderer
from texmark.utils.escape import escape_latex, escape_latex_bytes
from texmark.utils.images import parse_image_destination
from texmark.utils.security import contains_verbatim_terminator, has_lower_prefix, is_dangerous_url
from texmark.utils.unicode import format_unicode_declaration, iter_unicode_declarations

logger = logging.getLogger(__name__)

NodeHandler = Callable[[IO[bytes], bytes, Node, bool], WalkStatus]

_HTML_UNSUPPORTED = b"HTML block rendering unsupported, skipped"
_RAW_HTML_UNSUPPORTED = b"raw HTML rendering unsupported"
_UNSAFE_LINE_NOTICE = COMMENT_PREFIX + b"Skipped following line due to possibly unsafe content:\n%"


def default_preamble() -> bytes:
    r"""Return the built-in preamble.

    It does not include ``\begin{document}``; the renderer writes that
    marker after whichever preamble is in use.
    """
    return bytes(DEFAULT_PREAMBLE)


def heading_index(level: int, offset: int = 0) -> int:
    """Return the row of the heading command table for a heading.

    Parameters
    ----------
    level : int
        1-based heading level
    offset : int, default 0
        Level shift, may be negative

    Returns
    -------
    int
        ``level - 1 + offset`` clamped to ``[0, MAX_HEADING_INDEX]``

    Examples
    --------
        >>> heading_index(1), heading_index(7), heading_index(1, -5)
        (0, 5, 0)

    """
    return max(0, min(MAX_HEADING_INDEX, level - 1 + offset))


def heading_command(level: int, offset: int = 0, no_numbering: bool = False) -> bytes:
    r"""Return the opening sectioning command for a heading, e.g. ``b"\section{"``."""
    return HEADING_COMMANDS[heading_index(level, offset)][int(no_numbering)]


def write_comment(writer: IO[bytes], message: bytes) -> None:
    """Write a diagnostic line comment on its own line.

    Line breaks in ``message`` are flattened so the text cannot leave the
    comment.
    """
    flat = message.replace(b"\r", b" ").replace(b"\n", b" ")
    writer.write(b"\n" + COMMENT_PREFIX + flat + b"\n")


class LatexRenderer(BaseRenderer):
    r"""Render a Markdown document tree to LaTeX bytes.

    The renderer holds no per-pass state, so one instance can render any
    number of documents.

    Parameters
    ----------
    options : LatexRendererOptions or None, default = None
        LaTeX rendering options

    Examples
    --------
    Basic usage:

        >>> from texmark.ast import Document, Heading, SourceBuilder
        >>> sb = SourceBuilder()
        >>> doc = Document(children=[Heading(level=1, children=[sb.text("Title")])])
        >>> latex = LatexRenderer().render_to_bytes(doc, sb.source)
        >>> b"\\section{Title}" in latex
        True

    """

    def __init__(self, options: LatexRendererOptions | None = None):
        """Initialize the LaTeX renderer with options."""
        BaseRenderer._validate_options_type(options, LatexRendererOptions, "latex")
        options = options or LatexRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: LatexRendererOptions = options
        self.handlers: Mapping[NodeKind, NodeHandler] = MappingProxyType(
            {
                # blocks
                NodeKind.DOCUMENT: self.render_document,
                NodeKind.HEADING: self.render_heading,
                NodeKind.BLOCKQUOTE: self.render_blockquote,
                NodeKind.CODE_BLOCK: self.render_code_block,
                NodeKind.FENCED_CODE_BLOCK: self.render_fenced_code_block,
                NodeKind.HTML_BLOCK: self.render_html_block,
                NodeKind.LIST: self.render_list,
                NodeKind.LIST_ITEM: self.render_list_item,
                NodeKind.PARAGRAPH: self.render_paragraph,
                NodeKind.TEXT_BLOCK: self.render_text_block,
                NodeKind.THEMATIC_BREAK: self.render_thematic_break,
                # inlines
                NodeKind.AUTO_LINK: self.render_auto_link,
                NodeKind.CODE_SPAN: self.render_code_span,
                NodeKind.EMPHASIS: self.render_emphasis,
                NodeKind.IMAGE: self.render_image,
                NodeKind.LINK: self.render_link,
                NodeKind.RAW_HTML: self.render_raw_html,
                NodeKind.TEXT: self.render_text,
                NodeKind.STRING: self.render_string,
            }
        )

    def write(self, doc: Document, source: bytes, writer: IO[bytes]) -> None:
        """Walk ``doc`` and stream its LaTeX rendering into ``writer``."""
        handlers = self.handlers

        def dispatch(node: Node, entering: bool) -> WalkStatus:
            return handlers[node.kind](writer, source, node, entering)

        walk(doc, dispatch)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def render_document(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Write the document envelope: preamble, declarations and body markers."""
        if not entering:
            writer.write(END_DOCUMENT)
            logger.debug("End of document")
            return WalkStatus.STOP

        logger.debug("Start of document")
        if self.options.preamble is None:
            logger.debug("Using default preamble")
            writer.write(DEFAULT_PREAMBLE)
        else:
            logger.debug("Using custom preamble (%d bytes)", len(self.options.preamble))
            writer.write(self.options.preamble)

        mapper = self.options.declare_unicode
        if mapper is not None:
            writer.write(b"\n")
            for char, replacement in iter_unicode_declarations(source, mapper):
                writer.write(format_unicode_declaration(char, replacement))

        writer.write(BEGIN_DOCUMENT)
        if self.options.make_title:
            writer.write(MAKE_TITLE)
        return WalkStatus.CONTINUE

    def render_heading(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Open and close a sectioning command at the leveled heading depth.

        Parameters
        ----------
        writer : IO[bytes]
            Output stream
        source : bytes
            Buffer the tree's segments point into
        node : Heading
            Heading being entered or left
        entering : bool
            True before the children are visited, False after

        Returns
        -------
        WalkStatus
            Always ``CONTINUE``

        """
        assert isinstance(node, Heading)
        if entering:
            index = heading_index(node.level, self.options.heading_level_offset)
            command = HEADING_COMMANDS[index][int(self.options.no_heading_numbering)]
            logger.debug("Heading level %d rendered at index %d as %r", node.level, index, command)
            writer.write(command)
            if index >= MAX_HEADING_INDEX:
                writer.write(b"\n")
        else:
            writer.write(b"}\n")
        return WalkStatus.CONTINUE

    def render_blockquote(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Wrap the quoted blocks in a framed ``quote`` environment."""
        writer.write(BLOCKQUOTE_START if entering else BLOCKQUOTE_END)
        return WalkStatus.CONTINUE

    def render_code_block(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Render an indented code block as a ``minted`` environment with a fixed language."""
        assert isinstance(node, CodeBlock)
        if entering:
            writer.write(VERBATIM_BEGIN + b"{" + INDENTED_CODE_LANGUAGE + b"}\n")
            self._write_verbatim_lines(writer, source, node)
        else:
            writer.write(VERBATIM_END)
        return WalkStatus.CONTINUE

    def render_fenced_code_block(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Render a fenced code block, taking the minted language from its info string."""
        assert isinstance(node, FencedCodeBlock)
        if entering:
            writer.write(VERBATIM_BEGIN)
            language = node.language(source)
            if language:
                tag = language[:MAX_LANGUAGE_TAG_LENGTH]
                if tag.decode("utf-8", errors="replace") in SUPPORTED_LANGUAGES:
                    writer.write(b"{" + tag + b"}")
                else:
                    logger.debug("Unsupported code language %r, rendering without highlighting", tag)
            writer.write(b"\n")
            self._write_verbatim_lines(writer, source, node)
        else:
            writer.write(VERBATIM_END)
        return WalkStatus.CONTINUE

    def _write_verbatim_lines(self, writer: IO[bytes], source: bytes, node: CodeBlock) -> None:
        r"""Write code lines unescaped, commenting out lines that contain ``\end``."""
        for segment in node.lines:
            line = segment.value(source)
            if self.options.unsafe or not contains_verbatim_terminator(line):
                writer.write(line)
            else:
                logger.warning("Skipped code line with possibly unsafe content: %r", line)
                writer.write(_UNSAFE_LINE_NOTICE)
                writer.write(line)
            # The closing marker must start on a fresh line
            if not line.endswith(b"\n"):
                writer.write(b"\n")

    def render_html_block(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Replace an HTML block with a comment."""
        if entering:
            write_comment(writer, _HTML_UNSUPPORTED)
        return WalkStatus.SKIP_CHILDREN

    def render_list(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Open ``itemize`` or ``enumerate`` and close it after the items."""
        assert isinstance(node, List)
        environment = b"enumerate" if node.is_ordered else b"itemize"
        if entering:
            writer.write(b"\n\\begin{" + environment + b"}\n")
        else:
            writer.write(b"\\end{" + environment + b"}\n")
        return WalkStatus.CONTINUE

    def render_list_item(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Start an item."""
        writer.write(ITEM_COMMAND if entering else b"\n")
        return WalkStatus.CONTINUE

    def render_paragraph(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Separate paragraphs with a blank line, except directly inside lists."""
        if entering:
            parent = node.parent
            if parent is None or parent.kind not in (NodeKind.LIST, NodeKind.LIST_ITEM):
                writer.write(b"\n")
        else:
            writer.write(b"\n")
        return WalkStatus.CONTINUE

    def render_text_block(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Break the line after a tight list item's text when more content follows."""
        if not entering and node.next_sibling is not None and node.first_child is not None:
            writer.write(b"\n")
        return WalkStatus.CONTINUE

    def render_thematic_break(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Draw a horizontal rule."""
        if entering:
            writer.write(HRULE_COMMAND + b"\n")
        return WalkStatus.CONTINUE

    # ------------------------------------------------------------------
    # Inlines
    # ------------------------------------------------------------------

    def render_auto_link(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Render an autolink as ``\\href``, adding ``mailto:`` to bare email addresses."""
        assert isinstance(node, AutoLink)
        if not entering:
            return WalkStatus.CONTINUE

        url = node.url(source)
        writer.write(HREF_START)
        if self.options.unsafe or not is_dangerous_url(url):
            if node.auto_link_type is AutoLinkType.EMAIL and not has_lower_prefix(
                url.decode("utf-8", errors="replace"), MAILTO_PREFIX
            ):
                writer.write(MAILTO_PREFIX.encode("ascii"))
            escape_latex(writer, url)
        else:
            logger.warning("Dropped dangerous autolink destination: %r", url)
        writer.write(b"}{")
        escape_latex(writer, node.label(source))
        writer.write(b"}")
        return WalkStatus.CONTINUE

    def render_code_span(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Typeset inline code in ``\\texttt``; its children are written here, not walked."""
        if not entering:
            writer.write(b"}")
            return WalkStatus.CONTINUE

        writer.write(CODE_SPAN_START)
        for child in node.children:
            if isinstance(child, Text):
                value = child.value(source)
            elif isinstance(child, String):
                value = child.value
            else:
                continue
            if value.endswith(b"\n"):
                escape_latex(writer, value[:-1])
                writer.write(b" ")
            else:
                escape_latex(writer, value)
        return WalkStatus.SKIP_CHILDREN

    def render_emphasis(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Wrap the children in the command ``EMPHASIS_COMMANDS`` gives for the level."""
        assert isinstance(node, Emphasis)
        if entering:
            writer.write(EMPHASIS_COMMANDS.get(node.level, EMPHASIS_COMMANDS[1]))
        else:
            writer.write(b"}")
        return WalkStatus.CONTINUE

    def render_image(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Emit a figure built from the attributes in the image destination.

        Invalid attributes are reported in comments; the figure is still written.
        """
        assert isinstance(node, Image)
        if not entering:
            return WalkStatus.CONTINUE

        write_comment(writer, b"destination: " + node.destination + b", title: " + node.title + b" ")
        spec = parse_image_destination(node.destination)
        for problem in spec.problems:
            write_comment(
                writer,
                b"image " + spec.path + b" has " + problem.reason.encode("ascii") + b" attribute " + problem.token,
            )

        writer.write(
            FIGURE_TEMPLATE
            % (
                escape_latex_bytes(spec.width),
                escape_latex_bytes(spec.path),
                escape_latex_bytes(spec.caption),
                escape_latex_bytes(spec.label),
            )
        )
        return WalkStatus.SKIP_CHILDREN

    def render_link(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Render a link as ``\\href``, dropping dangerous destinations unless unsafe."""
        assert isinstance(node, Link)
        if entering:
            writer.write(HREF_START)
            if self.options.unsafe or not is_dangerous_url(node.destination):
                escape_latex(writer, node.destination)
            else:
                logger.warning("Dropped dangerous link destination: %r", node.destination)
            writer.write(b"}{")
        else:
            writer.write(b"}")
        return WalkStatus.CONTINUE

    def render_raw_html(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Replace inline HTML with a comment."""
        if entering:
            write_comment(writer, _RAW_HTML_UNSUPPORTED)
        return WalkStatus.SKIP_CHILDREN

    def render_text(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Write a raw text segment as is, any other escaped and followed by its line break."""
        assert isinstance(node, Text)
        if not entering:
            return WalkStatus.CONTINUE

        value = node.value(source)
        if node.raw:
            writer.write(value)
        else:
            escape_latex(writer, value)
            if node.hard_line_break:
                writer.write(HARD_BREAK)
            elif node.soft_line_break:
                writer.write(b"\n")
        return WalkStatus.CONTINUE

    def render_string(self, writer: IO[bytes], source: bytes, node: Node, entering: bool) -> WalkStatus:
        """Write a string node's own bytes, escaped unless code or raw."""
        assert isinstance(node, String)
        if not entering:
            return WalkStatus.CONTINUE

        if node.code or node.raw:
            writer.write(node.value)
        else:
            escape_latex(writer, node.value)
        return WalkStatus.CONTINUE
