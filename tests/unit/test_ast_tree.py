#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_tree.py
"""Unit tests for tree nodes, the source builder and the walk driver.

Tests cover:
- Segment bounds and values
- Parent and sibling navigation
- SourceBuilder bookkeeping
- Enter/exit order and WalkStatus handling

"""

import doctest

import pytest

from texmark.ast import (
    AutoLinkType,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    List,
    ListItem,
    NodeKind,
    Paragraph,
    Segment,
    SourceBuilder,
    String,
    Text,
    WalkStatus,
    walk,
)


@pytest.mark.unit
class TestSegment:
    """Tests for Segment."""

    def test_value_and_length(self):
        """Test a segment slices the source buffer."""
        segment = Segment(2, 5)
        assert segment.value(b"abcdefg") == b"cde"
        assert len(segment) == 3

    def test_invalid_bounds(self):
        """Test negative or reversed bounds are rejected."""
        with pytest.raises(ValueError):
            Segment(3, 1)
        with pytest.raises(ValueError):
            Segment(-1, 2)


@pytest.mark.unit
class TestNodeNavigation:
    """Tests for parent and sibling links."""

    def test_children_get_parent(self):
        """Test constructing a node sets the parent of its children."""
        first, second = String(value=b"a"), String(value=b"b")
        paragraph = Paragraph(children=[first, second])
        assert first.parent is paragraph
        assert paragraph.first_child is first
        assert paragraph.last_child is second

    def test_siblings(self):
        """Test next and previous siblings."""
        first, second = String(value=b"a"), String(value=b"b")
        Paragraph(children=[first, second])
        assert first.next_sibling is second
        assert second.previous_sibling is first
        assert second.next_sibling is None
        assert first.previous_sibling is None

    def test_root_has_no_siblings(self):
        """Test a parentless node has no siblings."""
        doc = Document()
        assert doc.next_sibling is None
        assert doc.first_child is None

    def test_append_child(self):
        """Test append_child links the child."""
        doc = Document()
        paragraph = doc.append_child(Paragraph())
        assert paragraph.parent is doc
        assert doc.children == [paragraph]

    def test_kind_tags(self):
        """Test each node class reports its kind."""
        assert Document().kind is NodeKind.DOCUMENT
        assert Text().kind is NodeKind.TEXT
        assert FencedCodeBlock().kind is NodeKind.FENCED_CODE_BLOCK

    def test_heading_level_must_be_positive(self):
        """Test heading levels start at 1."""
        with pytest.raises(ValueError):
            Heading(level=0)

    def test_iter_descendants_in_document_order(self):
        """Test descendants are yielded depth-first."""
        a, b, c = String(value=b"a"), String(value=b"b"), String(value=b"c")
        doc = Document(children=[Paragraph(children=[a, Emphasis(children=[b])]), Paragraph(children=[c])])
        strings = [n.value for n in doc.iter_descendants() if isinstance(n, String)]
        assert strings == [b"a", b"b", b"c"]


@pytest.mark.unit
class TestSourceBuilder:
    """Tests for SourceBuilder."""

    def test_text_segments_point_into_source(self, sb):
        """Test text nodes resolve against the built source."""
        hello = sb.text("Hello ")
        world = sb.text("wörld")
        source = sb.source
        assert hello.value(source) == b"Hello "
        assert world.value(source) == "wörld".encode("utf-8")

    def test_initial_buffer(self):
        """Test segments are placed after the initial content."""
        builder = SourceBuilder(b"prefix")
        segment = builder.segment("x")
        assert segment == Segment(6, 7)

    def test_lines_keep_line_endings(self, sb):
        """Test code lines keep their newline."""
        block = sb.code_block("a\nb\n")
        assert [line.value(sb.source) for line in block.lines] == [b"a\n", b"b\n"]

    def test_fenced_code_block_language(self, sb):
        """Test the language is the first word of the info string."""
        block = sb.fenced_code_block("x\n", info="python linenos")
        assert block.language(sb.source) == b"python"

    def test_fenced_code_block_without_info(self, sb):
        """Test a block without info has no language."""
        assert sb.fenced_code_block("x\n").language(sb.source) is None

    def test_auto_link(self, sb):
        """Test autolink type and target."""
        link = sb.auto_link("me@example.com", email=True)
        assert link.auto_link_type is AutoLinkType.EMAIL
        assert link.url(sb.source) == b"me@example.com"
        assert link.label(sb.source) == b"me@example.com"

    def test_docstring_example_runs(self):
        """Test the usage example in the class docstring is self-contained."""
        runner = doctest.DocTestRunner()
        for example in doctest.DocTestFinder().find(SourceBuilder):
            runner.run(example)
        assert runner.tries > 0
        assert runner.failures == 0


@pytest.mark.unit
class TestWalk:
    """Tests for the walk driver."""

    @staticmethod
    def build_tree():
        items = [ListItem(children=[String(value=b"one")]), ListItem(children=[String(value=b"two")])]
        return Document(children=[List(children=items)])

    def test_enter_exit_order(self):
        """Test each node is entered before its children and left after them."""
        events = []

        def handler(node, entering):
            events.append((node.kind, entering))
            return WalkStatus.CONTINUE

        status = walk(self.build_tree(), handler)
        assert status is WalkStatus.CONTINUE
        assert events == [
            (NodeKind.DOCUMENT, True),
            (NodeKind.LIST, True),
            (NodeKind.LIST_ITEM, True),
            (NodeKind.STRING, True),
            (NodeKind.STRING, False),
            (NodeKind.LIST_ITEM, False),
            (NodeKind.LIST_ITEM, True),
            (NodeKind.STRING, True),
            (NodeKind.STRING, False),
            (NodeKind.LIST_ITEM, False),
            (NodeKind.LIST, False),
            (NodeKind.DOCUMENT, False),
        ]

    def test_skip_children_still_exits(self):
        """Test SKIP_CHILDREN skips the subtree but the node is still left."""
        events = []

        def handler(node, entering):
            events.append((node.kind, entering))
            if node.kind is NodeKind.LIST and entering:
                return WalkStatus.SKIP_CHILDREN
            return WalkStatus.CONTINUE

        walk(self.build_tree(), handler)
        assert events == [
            (NodeKind.DOCUMENT, True),
            (NodeKind.LIST, True),
            (NodeKind.LIST, False),
            (NodeKind.DOCUMENT, False),
        ]

    def test_stop_ends_walk(self):
        """Test STOP prevents any further handler calls."""
        events = []

        def handler(node, entering):
            events.append((node.kind, entering))
            if node.kind is NodeKind.LIST_ITEM:
                return WalkStatus.STOP
            return WalkStatus.CONTINUE

        assert walk(self.build_tree(), handler) is WalkStatus.STOP
        assert events[-1] == (NodeKind.LIST_ITEM, True)
        assert (NodeKind.DOCUMENT, False) not in events
