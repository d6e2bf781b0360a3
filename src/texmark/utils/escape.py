#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/utils/escape.py
"""LaTeX escaping primitive.

``escape_latex`` is the only function in texmark that turns user text into
LaTeX-safe text. It must only ever see original, unescaped input: feeding
its own output back through it would escape the backslashes of the
substitutions it emitted.

"""

from __future__ import annotations

import re
from io import BytesIO
from typing import IO

from texmark.constants import LATEX_ESCAPES

_RESERVED = re.compile(b"[" + b"".join(re.escape(bytes([char])) for char in LATEX_ESCAPES) + b"]")


def escape_latex(writer: IO[bytes], data: bytes) -> None:
    r"""Write ``data`` to ``writer`` with LaTeX special characters escaped.

    The scan keeps a copy-from cursor: unescaped runs are flushed in one
    write, each reserved byte is replaced by its escape sequence, and the
    tail is flushed at the end.

    Parameters
    ----------
    writer : IO[bytes]
        Binary stream to append to
    data : bytes
        Text to escape

    Examples
    --------
        >>> buffer = BytesIO()
        >>> escape_latex(buffer, b"50% off_now")
        >>> buffer.getvalue()
        b'50\\% off\\_now'

    """
    start = 0
    for match in _RESERVED.finditer(data):
        position = match.start()
        if position > start:
            writer.write(data[start:position])
        writer.write(LATEX_ESCAPES[data[position]])
        start = position + 1
    if start < len(data):
        writer.write(data[start:])


def escape_latex_bytes(data: bytes) -> bytes:
    """Return ``data`` escaped, for callers that template the result."""
    buffer = BytesIO()
    escape_latex(buffer, data)
    return buffer.getvalue()
