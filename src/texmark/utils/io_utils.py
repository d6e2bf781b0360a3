#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/utils/io_utils.py
"""I/O utilities for inputs, outputs and preamble files."""

from __future__ import annotations

import io
import logging
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from texmark.exceptions import PreambleLoadError
from texmark.utils.encoding import normalize_stream_to_bytes, normalize_to_utf8

logger = logging.getLogger(__name__)

InputSource = Union[str, Path, IO[bytes], IO[str], bytes]
OutputTarget = Union[str, Path, IO[bytes], IO[str]]


def is_binary_stream(output: object) -> bool:
    """Guess whether a file-like object expects bytes.

    Concrete ``BytesIO``/``StringIO`` types are checked first, then the
    ``io`` base classes, then the ``mode`` attribute. Unknown objects are
    treated as text streams.
    """
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO):
        return False
    if isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(content: Union[str, bytes], output: OutputTarget) -> None:
    """Write content to a file path or file-like object.

    Parameters
    ----------
    content : str or bytes
        Content to write
    output : str, Path, IO[bytes] or IO[str]
        Destination

    Raises
    ------
    TypeError
        If output type is not supported

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        if isinstance(content, str):
            output_path.write_text(content, encoding="utf-8")
        else:
            output_path.write_bytes(content)
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if is_binary_stream(output):
        binary_output = cast(IO[bytes], output)
        binary_output.write(content.encode("utf-8") if isinstance(content, str) else content)
    else:
        text_output = cast(IO[str], output)
        text_output.write(content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content)


def read_source(input_data: InputSource, encoding: str | None = None) -> bytes:
    """Load Markdown input as a UTF-8 source buffer.

    Parameters
    ----------
    input_data : str, Path, IO or bytes
        A path, a file-like object, raw bytes, or Markdown text. A ``str``
        is treated as a path only when it names an existing file.
    encoding : str or None, default None
        Known input encoding; detected when None

    Returns
    -------
    bytes
        UTF-8 source buffer

    """
    if isinstance(input_data, bytes):
        return normalize_to_utf8(input_data, encoding)
    if isinstance(input_data, Path):
        return normalize_to_utf8(input_data.read_bytes(), encoding)
    if isinstance(input_data, str):
        # Path components over 255 chars make exists() raise
        if len(input_data) <= 260 and "\n" not in input_data:
            try:
                path = Path(input_data)
                if path.is_file():
                    return normalize_to_utf8(path.read_bytes(), encoding)
            except OSError:
                pass
        return input_data.encode("utf-8")
    return normalize_to_utf8(normalize_stream_to_bytes(input_data), encoding)


def load_preamble(path: Union[str, Path]) -> bytes:
    """Read a custom preamble file.

    The preamble is used verbatim and must not contain ``\\begin{document}``;
    the renderer writes that marker itself.

    Raises
    ------
    PreambleLoadError
        If the file does not exist or cannot be read

    """
    preamble_path = Path(path)
    try:
        data = preamble_path.read_bytes()
    except OSError as e:
        raise PreambleLoadError(str(preamble_path), original_error=e) from e
    logger.debug("Loaded preamble from %s (%d bytes)", preamble_path, len(data))
    return data


__all__ = ["InputSource", "OutputTarget", "is_binary_stream", "load_preamble", "read_source", "write_content"]
