#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/ast/__init__.py
"""Document tree model and traversal.

- nodes: node classes, ``NodeKind`` and source ``Segment``
- walk: enter/exit traversal driver with ``WalkStatus`` directives
- builder: ``SourceBuilder`` for creating source-backed trees by hand

Examples
--------
    >>> from texmark.ast import Document, Paragraph, SourceBuilder
    >>> sb = SourceBuilder()
    >>> doc = Document(children=[Paragraph(children=[sb.text("Hello")])])
    >>> source = sb.source

"""

from __future__ import annotations

from texmark.ast.builder import SourceBuilder
from texmark.ast.nodes import (
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
    NodeKind,
    Paragraph,
    RawHTML,
    Segment,
    String,
    Text,
    TextBlock,
    ThematicBreak,
)
from texmark.ast.walk import WalkHandler, WalkStatus, walk

__all__ = [
    "AutoLink",
    "AutoLinkType",
    "Blockquote",
    "CodeBlock",
    "CodeSpan",
    "Document",
    "Emphasis",
    "FencedCodeBlock",
    "Heading",
    "HTMLBlock",
    "Image",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeKind",
    "Paragraph",
    "RawHTML",
    "Segment",
    "SourceBuilder",
    "String",
    "Text",
    "TextBlock",
    "ThematicBreak",
    "WalkHandler",
    "WalkStatus",
    "walk",
]
