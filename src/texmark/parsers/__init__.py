#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers that build a document tree from source text."""

from texmark.parsers.base import BaseParser, ParsedDocument
from texmark.parsers.markdown import MarkdownParser, normalize_source

__all__ = ["BaseParser", "MarkdownParser", "ParsedDocument", "normalize_source"]
