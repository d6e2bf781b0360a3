#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/utils/encoding.py
"""Source encoding normalization.

Segments and the unicode pre-scan both assume the source buffer is UTF-8.
Input in another encoding is transcoded once, before parsing, so every
offset refers to the same bytes the renderer later reads.

"""

from __future__ import annotations

import logging
from typing import IO

from texmark.exceptions import ValidationError

logger = logging.getLogger(__name__)


DETECTION_SAMPLE_BYTES = 8192
MIN_DETECTION_CONFIDENCE = 0.7


def detect_encoding(data: bytes, min_confidence: float = MIN_DETECTION_CONFIDENCE) -> str | None:
    """Guess the encoding of non-UTF-8 input with chardet.

    Only the leading ``DETECTION_SAMPLE_BYTES`` bytes are examined. A guess
    below ``min_confidence`` counts as no guess.
    """
    try:
        import chardet
    except ImportError:
        return None

    guess = chardet.detect(data[:DETECTION_SAMPLE_BYTES]) or {}
    name = guess.get("encoding")
    confidence = guess.get("confidence") or 0.0
    if name is None or confidence < min_confidence:
        logger.debug("No usable encoding guess (%s, %.2f)", name, confidence)
        return None

    logger.debug("Input looks like %s (%.2f)", name, confidence)
    return name


def normalize_to_utf8(data: bytes, encoding: str | None = None) -> bytes:
    """Return ``data`` as UTF-8 bytes.

    Parameters
    ----------
    data : bytes
        Raw input
    encoding : str or None, default None
        Known source encoding. When None, valid UTF-8 is returned unchanged
        and anything else goes through detection, then latin-1.

    Returns
    -------
    bytes
        UTF-8 encoded text without a byte order mark

    Raises
    ------
    ValidationError
        If an explicit encoding is unknown or does not fit the data

    """
    if encoding is not None:
        try:
            return data.decode(encoding).encode("utf-8")
        except (UnicodeDecodeError, LookupError) as e:
            raise ValidationError(
                f"Cannot decode input as {encoding}: {e}",
                parameter="encoding",
                value=encoding,
                original_error=e,
            ) from e

    if data.startswith(b"\xef\xbb\xbf"):
        data = data[3:]

    try:
        data.decode("utf-8")
        return data
    except UnicodeDecodeError:
        pass

    detected = detect_encoding(data)
    if detected:
        try:
            return data.decode(detected).encode("utf-8")
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("Guessed encoding %s does not fit the input: %s", detected, e)

    logger.warning("Input is not valid UTF-8, decoding as latin-1")
    return data.decode("latin-1").encode("utf-8")


def normalize_stream_to_bytes(stream: IO[bytes] | IO[str], encoding: str = "utf-8") -> bytes:
    """Drain a binary or text stream into bytes, encoding text with ``encoding``.

    Raises
    ------
    TypeError
        If the stream yields neither bytes nor str

    """
    content = stream.read()
    if isinstance(content, str):
        content = content.encode(encoding)
    if not isinstance(content, bytes):
        raise TypeError(f"Cannot read {type(content).__name__} from an input stream")
    return content
