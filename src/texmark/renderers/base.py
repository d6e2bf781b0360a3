#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/renderers/base.py
"""Renderer interface.

Renderers stream bytes into a binary writer while a document tree is
walked; ``BaseRenderer`` provides the output plumbing around that.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import IO, Union

from texmark.ast import Document
from texmark.exceptions import InvalidOptionsError, OutputWriteError
from texmark.options.base import BaseRendererOptions
from texmark.utils.io_utils import OutputTarget, is_binary_stream, write_content

logger = logging.getLogger(__name__)


class BaseRenderer(ABC):
    """Writes a document tree and its source buffer as bytes.

    Subclasses implement ``write``; ``render`` and ``render_to_bytes`` route
    its output to paths and streams.

    Examples
    --------
        >>> class PlainRenderer(BaseRenderer):
        ...     def write(self, doc, source, writer):
        ...         writer.write(b"rendered output")

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        self.options = options

    @abstractmethod
    def write(self, doc: Document, source: bytes, writer: IO[bytes]) -> None:
        """Stream the rendered document into ``writer``.

        Parameters
        ----------
        doc : Document
            Root of the tree to render
        source : bytes
            Raw source buffer the tree's segments point into
        writer : IO[bytes]
            Binary stream to append to

        """

    def render(self, doc: Document, source: bytes, output: OutputTarget) -> None:
        """Render the document to a file path or file-like object.

        Parameters
        ----------
        doc : Document
            Root of the tree to render
        source : bytes
            Raw source buffer the tree's segments point into
        output : str, Path, IO[bytes] or IO[str]
            Output destination. Binary streams are written to directly,
            text streams receive the UTF-8 decoded result.

        Raises
        ------
        OutputWriteError
            If the output file cannot be written

        """
        if isinstance(output, (str, Path)):
            try:
                with open(output, "wb") as writer:
                    self.write(doc, source, writer)
            except OSError as e:
                raise OutputWriteError(str(output), original_error=e) from e
            logger.debug("Wrote output to %s", output)
            return

        if is_binary_stream(output):
            self.write(doc, source, output)  # type: ignore[arg-type]
        else:
            self.write_text_output(self.render_to_bytes(doc, source), output)

    def render_to_bytes(self, doc: Document, source: bytes) -> bytes:
        """Render the document and return the bytes."""
        buffer = BytesIO()
        self.write(doc, source, buffer)
        return buffer.getvalue()

    def render_to_string(self, doc: Document, source: bytes) -> str:
        """Render the document and return it decoded as UTF-8.

        Bytes that are not valid UTF-8 are replaced rather than rejected.
        """
        return self.render_to_bytes(doc, source).decode("utf-8", errors="replace")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Raise ``InvalidOptionsError`` unless ``options`` is None or an ``expected_type``."""
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(renderer_name, expected_type, type(options))

    @staticmethod
    def write_text_output(content: Union[str, bytes], output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write rendered output to a file or stream of either mode."""
        write_content(content, output)
