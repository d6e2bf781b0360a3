#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for texmark parsing and rendering.

Options are frozen dataclasses. Use ``create_updated`` (or the ``with_*``
helpers on ``LatexRendererOptions``) to derive a modified copy.
"""

from __future__ import annotations

from texmark.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from texmark.options.latex import LatexRendererOptions
from texmark.options.markdown import MarkdownParserOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "LatexRendererOptions",
    "MarkdownParserOptions",
]
