#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_markdown_parser.py
"""Unit tests for the Markdown parser.

Tests cover:
- Block structure (headings, paragraphs, lists, quotes, code, HTML)
- Inline structure (emphasis, code spans, links, autolinks, images)
- Segments resolving into the returned source buffer
- Line break flags
- Options handling

"""

import pytest

from texmark.ast import (
    AutoLink,
    AutoLinkType,
    Blockquote,
    CodeBlock,
    CodeSpan,
    Emphasis,
    FencedCodeBlock,
    Heading,
    HTMLBlock,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    RawHTML,
    String,
    Text,
    TextBlock,
    ThematicBreak,
)
from texmark.exceptions import InvalidOptionsError
from texmark.options import LatexRendererOptions, MarkdownParserOptions
from texmark.parsers import MarkdownParser, normalize_source
from texmark.parsers.markdown import decode_entities


def parse(markdown, **option_changes):
    return MarkdownParser(MarkdownParserOptions(**option_changes)).parse(markdown)


def inline_text(node, source):
    """Concatenate the text of all Text and String descendants."""
    parts = []
    for child in node.iter_descendants():
        if isinstance(child, Text):
            parts.append(child.value(source))
        elif isinstance(child, String):
            parts.append(child.value)
    return b"".join(parts)


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level structure."""

    def test_heading_levels(self):
        """Test ATX headings keep their level."""
        parsed = parse("# One\n\n### Three\n")
        first, second = parsed.document.children
        assert isinstance(first, Heading) and first.level == 1
        assert isinstance(second, Heading) and second.level == 3
        assert inline_text(first, parsed.source) == b"One"

    def test_paragraph_segments_point_into_source(self):
        """Test plain text becomes Text nodes resolving into the buffer."""
        parsed = parse("Hello world\n")
        paragraph = parsed.document.children[0]
        assert isinstance(paragraph, Paragraph)
        text = paragraph.children[0]
        assert isinstance(text, Text)
        assert text.value(parsed.source) == b"Hello world"

    def test_fenced_code_block(self):
        """Test fenced code keeps its info string and lines."""
        parsed = parse("```python\nprint(1)\nx = 2\n```\n")
        block = parsed.document.children[0]
        assert isinstance(block, FencedCodeBlock)
        assert block.language(parsed.source) == b"python"
        assert b"".join(line.value(parsed.source) for line in block.lines) == b"print(1)\nx = 2\n"

    def test_fence_without_info(self):
        """Test a bare fence is still a fenced block."""
        parsed = parse("```\nplain\n```\n")
        block = parsed.document.children[0]
        assert isinstance(block, FencedCodeBlock)
        assert block.language(parsed.source) is None

    def test_indented_code_block(self):
        """Test indented code becomes a plain code block."""
        parsed = parse("Intro\n\n    code line\n")
        block = parsed.document.children[-1]
        assert type(block) is CodeBlock
        assert b"".join(line.value(parsed.source) for line in block.lines) == b"code line\n"

    def test_tight_list(self):
        """Test tight list items hold text blocks."""
        parsed = parse("- one\n- two\n")
        lst = parsed.document.children[0]
        assert isinstance(lst, List)
        assert not lst.is_ordered
        assert len(lst.children) == 2
        item = lst.children[0]
        assert isinstance(item, ListItem)
        assert isinstance(item.children[0], TextBlock)
        assert inline_text(item, parsed.source) == b"one"

    def test_ordered_list(self):
        """Test numbered lists are ordered."""
        lst = parse("1. first\n2. second\n").document.children[0]
        assert isinstance(lst, List)
        assert lst.is_ordered

    def test_blockquote(self):
        """Test block quotes contain paragraphs."""
        parsed = parse("> quoted text\n")
        quote = parsed.document.children[0]
        assert isinstance(quote, Blockquote)
        assert isinstance(quote.children[0], Paragraph)
        assert inline_text(quote, parsed.source) == b"quoted text"

    def test_thematic_break(self):
        """Test a rule between paragraphs."""
        children = parse("above\n\n---\n\nbelow\n").document.children
        assert [type(child) for child in children] == [Paragraph, ThematicBreak, Paragraph]

    def test_html_block(self):
        """Test block HTML keeps its lines."""
        parsed = parse("<div>\nhello\n</div>\n")
        block = parsed.document.children[0]
        assert isinstance(block, HTMLBlock)
        assert b"<div>" in b"".join(line.value(parsed.source) for line in block.lines)

    def test_blank_lines_are_dropped(self):
        """Test blank lines produce no nodes."""
        children = parse("a\n\n\n\nb\n").document.children
        assert len(children) == 2

    def test_parents_are_linked(self):
        """Test parsed children know their parent."""
        doc = parse("# Title\n").document
        heading = doc.children[0]
        assert heading.parent is doc
        assert heading.children[0].parent is heading


@pytest.mark.unit
class TestInlines:
    """Tests for inline structure."""

    def test_emphasis_levels(self):
        """Test single and double delimiters."""
        paragraph = parse("*a* **b**\n").document.children[0]
        emphasis = [child for child in paragraph.children if isinstance(child, Emphasis)]
        assert [e.level for e in emphasis] == [1, 2]

    def test_code_span(self):
        """Test code spans keep their raw content."""
        parsed = parse("Use `a_b` here\n")
        span = next(n for n in parsed.document.iter_descendants() if isinstance(n, CodeSpan))
        assert inline_text(span, parsed.source) == b"a_b"

    def test_link(self):
        """Test inline links carry destination and label."""
        parsed = parse("[label](https://example.com \"Title\")\n")
        link = next(n for n in parsed.document.iter_descendants() if isinstance(n, Link))
        assert link.destination == b"https://example.com"
        assert link.title == b"Title"
        assert inline_text(link, parsed.source) == b"label"

    def test_dangerous_link_is_kept_in_tree(self):
        """Test filtering happens at render time, not parse time."""
        parsed = parse("[a](javascript:alert)\n")
        link = next(n for n in parsed.document.iter_descendants() if isinstance(n, Link))
        assert link.destination == b"javascript:alert"

    def test_url_autolink(self):
        """Test angle-bracket URLs become URL autolinks."""
        parsed = parse("See <https://example.org>\n")
        link = next(n for n in parsed.document.iter_descendants() if isinstance(n, AutoLink))
        assert link.auto_link_type is AutoLinkType.URL
        assert link.url(parsed.source) == b"https://example.org"

    def test_email_autolink(self):
        """Test angle-bracket addresses become email autolinks without the scheme."""
        parsed = parse("Mail <me@example.com>\n")
        link = next(n for n in parsed.document.iter_descendants() if isinstance(n, AutoLink))
        assert link.auto_link_type is AutoLinkType.EMAIL
        assert link.url(parsed.source) == b"me@example.com"

    def test_link_with_different_label_is_not_autolink(self):
        """Test a regular link whose label differs from its target."""
        parsed = parse("[home](https://example.org)\n")
        assert not any(isinstance(n, AutoLink) for n in parsed.document.iter_descendants())

    def test_image(self):
        """Test images keep the raw destination with attributes."""
        parsed = parse("![alt](pic.png?width=0.5 \"T\")\n")
        image = next(n for n in parsed.document.iter_descendants() if isinstance(n, Image))
        assert image.destination == b"pic.png?width=0.5"
        assert image.title == b"T"

    def test_soft_break_flag(self):
        """Test a newline inside a paragraph flags the preceding text."""
        parsed = parse("line one\nline two\n")
        texts = [n for n in parsed.document.children[0].children if isinstance(n, Text)]
        assert texts[0].soft_line_break
        assert not texts[-1].soft_line_break

    def test_hard_break_flag(self):
        """Test a backslash line ending becomes a hard break."""
        parsed = parse("line one\\\nline two\n")
        texts = [n for n in parsed.document.children[0].children if isinstance(n, Text)]
        assert any(text.hard_line_break for text in texts)

    def test_inline_html(self):
        """Test inline HTML becomes RawHTML nodes."""
        parsed = parse("a <b>bold</b> c\n")
        raw = [n for n in parsed.document.iter_descendants() if isinstance(n, RawHTML)]
        assert len(raw) == 2
        assert raw[0].segments[0].value(parsed.source) == b"<b>"

    def test_inline_html_as_text(self):
        """Test inline HTML is kept as text when HTML parsing is off."""
        parsed = parse("a <b>bold</b> c\n", parse_inline_html=False)
        assert not any(isinstance(n, RawHTML) for n in parsed.document.iter_descendants())
        assert b"<b>" in inline_text(parsed.document, parsed.source)

    @pytest.mark.parametrize(
        "markdown,decoded",
        [
            ("AT&amp;T\n", "AT&T"),
            ("&copy; 2025\n", "© 2025"),
            ("caf&#233;\n", "café"),
            ("caf&#xe9;\n", "café"),
        ],
    )
    def test_character_references_decoded(self, markdown, decoded):
        """Test character references become String nodes holding the character."""
        parsed = parse(markdown)
        strings = [n for n in parsed.document.iter_descendants() if isinstance(n, String)]
        assert strings
        assert inline_text(parsed.document, parsed.source) == decoded.encode("utf-8")

    def test_unknown_reference_kept(self):
        """Test text that is not a character reference stays a source segment."""
        parsed = parse("a &nosuchentity; & b\n")
        assert inline_text(parsed.document, parsed.source) == b"a &nosuchentity; & b"

    def test_decode_entities(self):
        """Test references without a semicolon are left alone."""
        assert decode_entities("&lt;x&gt; &amp &#65;") == "<x> &amp A"


@pytest.mark.unit
class TestSourceHandling:
    """Tests for input normalization and the returned buffer."""

    def test_normalize_source(self):
        """Test CRLF and lone CR become LF."""
        assert normalize_source(b"a\r\nb\rc\n") == b"a\nb\nc\n"

    def test_crlf_input(self):
        """Test CRLF input parses like LF input."""
        parsed = parse(b"# T\r\n\r\npara\r\n")
        assert b"\r" not in parsed.source
        assert isinstance(parsed.document.children[0], Heading)
        assert isinstance(parsed.document.children[1], Paragraph)

    def test_bytes_and_str_agree(self):
        """Test bytes input and text input give the same buffer."""
        assert parse(b"# T\n").source == parse("# T\n").source

    def test_file_input(self, markdown_file):
        """Test a path is read from disk."""
        parsed = MarkdownParser().parse(markdown_file)
        assert isinstance(parsed.document.children[0], Heading)
        assert parsed.source.startswith(b"# Notes")

    def test_tab_expanded_code_lines_resolve(self):
        """Test every code line resolves to real content even when rewritten."""
        parsed = parse("```\n\tindented\n```\n")
        block = parsed.document.children[0]
        lines = [line.value(parsed.source) for line in block.lines]
        assert len(lines) == 1
        assert lines[0].endswith(b"indented\n")

    def test_empty_input(self):
        """Test empty input gives an empty document."""
        parsed = parse("")
        assert parsed.document.children == []


@pytest.mark.unit
class TestParserOptions:
    """Tests for parser construction."""

    def test_wrong_options_type(self):
        """Test renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownParser(LatexRendererOptions())  # type: ignore[arg-type]

    def test_default_options(self):
        """Test default options are created when none are given."""
        assert MarkdownParser().options == MarkdownParserOptions()
