#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Security filters used by the LaTeX renderer.

Functions
---------
- has_lower_prefix: case-insensitive prefix test without building a lowered copy
- is_dangerous_url: flag link destinations with script-executing or local schemes
- contains_verbatim_terminator: detect lines that could close a verbatim environment
"""

from __future__ import annotations

import logging
from typing import Union

from texmark.constants import DANGEROUS_SCHEMES, SAFE_DATA_IMAGE_PREFIXES, VERBATIM_TERMINATOR

logger = logging.getLogger(__name__)


def has_lower_prefix(text: str, prefix: str) -> bool:
    """Check whether ``text`` starts with ``prefix``, ignoring case.

    Code points are compared one at a time under Unicode lower-casing, so
    neither string is copied.

    Parameters
    ----------
    text : str
        Text to test
    prefix : str
        Expected prefix

    Returns
    -------
    bool
        True if the first ``len(prefix)`` code points of ``text`` match

    Examples
    --------
    >>> has_lower_prefix("MAILTO:me@example.com", "mailto:")
    True
    >>> has_lower_prefix("mailto2:me", "mailto:")
    False

    """
    if len(text) < len(prefix):
        return False
    for index in range(len(prefix)):
        a = text[index]
        b = prefix[index]
        if a != b and a.lower() != b.lower():
            return False
    return True


def is_dangerous_url(url: Union[str, bytes]) -> bool:
    """Check if a link destination uses a dangerous scheme.

    ``javascript:``, ``vbscript:``, ``file:`` and ``data:`` destinations are
    dangerous, except ``data:`` URLs carrying a PNG, GIF, JPEG or WebP image.

    Parameters
    ----------
    url : str or bytes
        Destination to check

    Returns
    -------
    bool
        True if the destination must not be emitted in safe mode

    Examples
    --------
    >>> is_dangerous_url("https://example.com")
    False
    >>> is_dangerous_url("JavaScript:alert(1)")
    True
    >>> is_dangerous_url("data:image/png;base64,AAAA")
    False

    """
    if isinstance(url, bytes):
        url = url.decode("utf-8", errors="replace")
    url = url.lstrip()

    if has_lower_prefix(url, "data:image/"):
        return not any(has_lower_prefix(url, safe) for safe in SAFE_DATA_IMAGE_PREFIXES)

    return any(has_lower_prefix(url, scheme) for scheme in DANGEROUS_SCHEMES)


def contains_verbatim_terminator(line: bytes) -> bool:
    r"""Check whether a verbatim line contains the ``\end`` token.

    This is a plain substring search; the embedded language is not parsed.
    """
    return VERBATIM_TERMINATOR in line
