#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/parsers/base.py
"""Parser interface.

A parser turns some input into a texmark document tree. Text nodes point
into a source buffer, so a parser returns the buffer together with the tree.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from texmark.ast import Document
from texmark.exceptions import InvalidOptionsError
from texmark.options.base import BaseParserOptions
from texmark.utils.io_utils import InputSource, read_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedDocument:
    """A document tree and the source buffer its segments point into.

    Parameters
    ----------
    document : Document
        Root of the parsed tree
    source : bytes
        Buffer to pass to the renderer alongside ``document``

    """

    document: Document
    source: bytes


class BaseParser(ABC):
    """Turns input into a ``ParsedDocument``.

    Parameters
    ----------
    options : BaseParserOptions or None
        Parser settings; each subclass checks for its own options type

    Examples
    --------
        >>> class EmptyParser(BaseParser):
        ...     def parse(self, input_data):
        ...         return ParsedDocument(Document(), b"")

    """

    def __init__(self, options: BaseParserOptions | None = None):
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Raise ``InvalidOptionsError`` unless ``options`` is None or an ``expected_type``."""
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(parser_name, expected_type, type(options))

    @abstractmethod
    def parse(self, input_data: InputSource) -> ParsedDocument:
        """Parse input into a document tree.

        Parameters
        ----------
        input_data : str, Path, IO or bytes
            Document to parse. A ``str`` naming an existing file is read from
            disk, any other ``str`` is the document text itself.

        Returns
        -------
        ParsedDocument
            Tree and source buffer

        Raises
        ------
        ParsingError
            If parsing fails

        """

    @staticmethod
    def _load_source(input_data: InputSource, encoding: str | None = None) -> bytes:
        """Load any supported input as a UTF-8 byte buffer."""
        return read_source(input_data, encoding)
