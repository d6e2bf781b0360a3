"""texmark - Markdown to LaTeX rendering.

texmark parses Markdown into a document tree and streams it out as a
complete LaTeX document. The renderer escapes every piece of user text,
drops dangerous link destinations, and comments out code lines that could
close their verbatim environment early, so untrusted Markdown still yields
a well-formed document.

Requirements
------------
- Python 3.10+
- mistune 3 for Markdown parsing

Examples
--------
Basic usage:

    >>> from texmark import to_latex
    >>> latex = to_latex("# Title\\n\\nSome *text*.")

With options:

    >>> from texmark import LatexRendererOptions, to_latex
    >>> options = LatexRendererOptions().with_heading_level_offset(1).with_make_title()
    >>> to_latex("notes.md", options=options, output="notes.tex")

Rendering a hand-built tree:

    >>> from texmark import LatexRenderer
    >>> from texmark.ast import Document, Paragraph, SourceBuilder
    >>> sb = SourceBuilder()
    >>> doc = Document(children=[Paragraph(children=[sb.text("50% off")])])
    >>> latex = LatexRenderer().render_to_bytes(doc, sb.source)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

from texmark.api import to_latex
from texmark.exceptions import (
    DependencyError,
    FileError,
    InvalidOptionsError,
    OutputWriteError,
    ParsingError,
    PreambleLoadError,
    RenderingError,
    TexmarkError,
    ValidationError,
)
from texmark.options import LatexRendererOptions, MarkdownParserOptions
from texmark.parsers import MarkdownParser, ParsedDocument
from texmark.renderers import LatexRenderer, default_preamble
from texmark.utils.unicode import default_unicode_mapper

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # API
    "to_latex",
    "default_preamble",
    "default_unicode_mapper",
    # Classes
    "LatexRenderer",
    "LatexRendererOptions",
    "MarkdownParser",
    "MarkdownParserOptions",
    "ParsedDocument",
    # Exceptions
    "TexmarkError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "PreambleLoadError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
    "DependencyError",
]
