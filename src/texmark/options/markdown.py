#  Copyright (c) 2025 Tom Villani, Ph.D.

# texmark/options/markdown.py
"""Configuration options for Markdown parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from texmark.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-tree parsing.

    Parameters
    ----------
    encoding : str or None, default None
        Encoding of byte input. Detected automatically when None.
    parse_inline_html : bool, default True
        Keep inline HTML as raw HTML nodes. When False, inline HTML is
        treated as plain text.

    """

    encoding: str | None = field(
        default=None,
        metadata={"help": "Encoding of the Markdown input (detected when omitted)", "importance": "advanced"},
    )
    parse_inline_html: bool = field(
        default=True,
        metadata={
            "help": "Keep inline HTML as raw HTML nodes",
            "cli_name": "no-parse-inline-html",
            "importance": "advanced",
        },
    )
