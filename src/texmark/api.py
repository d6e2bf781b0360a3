#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/api.py
"""High-level conversion API.

``to_latex`` parses Markdown and renders it to LaTeX in one call. Use the
parser and renderer classes directly to reuse them across documents or to
render hand-built trees.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from texmark.options.latex import LatexRendererOptions
from texmark.options.markdown import MarkdownParserOptions
from texmark.parsers.markdown import MarkdownParser
from texmark.renderers.latex import LatexRenderer
from texmark.utils.decorators import debug_timer
from texmark.utils.io_utils import InputSource, OutputTarget

logger = logging.getLogger(__name__)


def to_latex(
    source: InputSource,
    options: Optional[LatexRendererOptions] = None,
    output: Optional[OutputTarget] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> Union[bytes, None]:
    r"""Convert Markdown to a LaTeX document.

    Parameters
    ----------
    source : str, Path, IO or bytes
        Markdown input. A ``str`` naming an existing file is read from disk;
        any other ``str`` is Markdown text.
    options : LatexRendererOptions or None, default None
        Rendering options
    output : str, Path, IO or None, default None
        Where to write the result. When None the LaTeX is returned.
    parser_options : MarkdownParserOptions or None, default None
        Parsing options

    Returns
    -------
    bytes or None
        LaTeX source when ``output`` is None, otherwise None

    Raises
    ------
    DependencyError
        If mistune is not installed
    ParsingError
        If the Markdown cannot be parsed
    OutputWriteError
        If ``output`` is a path that cannot be written

    Examples
    --------
        >>> latex = to_latex("# Title\n\nSome *text*.")
        >>> b"\\section{Title}" in latex
        True

    """
    parsed = MarkdownParser(parser_options).parse(source)
    renderer = LatexRenderer(options)

    with debug_timer(logger, "Rendering (latex)"):
        if output is None:
            return renderer.render_to_bytes(parsed.document, parsed.source)
        renderer.render(parsed.document, parsed.source, output)
    return None
