#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/utils/unicode.py
r"""Unicode character declarations for the LaTeX preamble.

A document may contain characters the chosen LaTeX engine has no glyph
for. ``iter_unicode_declarations`` scans the raw source once and yields a
``\DeclareUnicodeCharacter`` directive for every distinct non-ASCII code
point a mapper chooses to replace, in first-occurrence order.

"""

from __future__ import annotations

import logging
import unicodedata
from typing import Callable, Iterator

from texmark.constants import UNICODE_DECLARATION, UNICODE_HEX_WIDTH

logger = logging.getLogger(__name__)

UnicodeMapper = Callable[[str], "tuple[str, bool]"]

# Combining marks and the LaTeX accent command that produces them.
_ACCENT_COMMANDS = {
    chr(0x0300): "\\`",
    chr(0x0301): "\\'",
    chr(0x0302): "\\^",
    chr(0x0303): "\\~",
    chr(0x0304): "\\=",
    chr(0x0306): "\\u",
    chr(0x0307): "\\.",
    chr(0x0308): '\\"',
    chr(0x030A): "\\r",
    chr(0x030B): "\\H",
    chr(0x030C): "\\v",
    chr(0x0327): "\\c",
    chr(0x0328): "\\k",
}

_SYMBOL_COMMANDS = {
    chr(0x00A0): "~",
    chr(0x00A9): "\\textcopyright{}",
    chr(0x00AB): "\\guillemotleft{}",
    chr(0x00AE): "\\textregistered{}",
    chr(0x00B0): "\\textdegree{}",
    chr(0x00BB): "\\guillemotright{}",
    chr(0x00C6): "\\AE{}",
    chr(0x00D8): "\\O{}",
    chr(0x00DF): "\\ss{}",
    chr(0x00E6): "\\ae{}",
    chr(0x00F8): "\\o{}",
    chr(0x0152): "\\OE{}",
    chr(0x0153): "\\oe{}",
    chr(0x2013): "--",
    chr(0x2014): "---",
    chr(0x2018): "`",
    chr(0x2019): "'",
    chr(0x201C): "``",
    chr(0x201D): "''",
    chr(0x2026): "\\ldots{}",
    chr(0x20AC): "\\texteuro{}",
    chr(0x2122): "\\texttrademark{}",
}


def default_unicode_mapper(char: str) -> tuple[str, bool]:
    r"""Map a character to a LaTeX replacement.

    Known symbols use a fixed table. Letters with a single accent are
    rebuilt from their NFD decomposition (``é`` becomes ``\'{e}``).
    Anything else is left alone.

    Parameters
    ----------
    char : str
        Single character

    Returns
    -------
    tuple[str, bool]
        Replacement text and whether the character should be declared

    """
    if char in _SYMBOL_COMMANDS:
        return _SYMBOL_COMMANDS[char], True

    decomposed = unicodedata.normalize("NFD", char)
    if len(decomposed) == 2 and decomposed[0].isascii() and decomposed[1] in _ACCENT_COMMANDS:
        return f"{_ACCENT_COMMANDS[decomposed[1]]}{{{decomposed[0]}}}", True

    return "", False


def iter_unicode_declarations(source: bytes, mapper: UnicodeMapper) -> Iterator[tuple[str, str]]:
    """Yield ``(char, replacement)`` pairs for characters to declare.

    The mapper is queried at most once per distinct code point. Bytes that
    are not valid UTF-8 are skipped.

    Parameters
    ----------
    source : bytes
        Raw document source
    mapper : callable
        Returns ``(replacement, replaced)`` for a character

    """
    declared: set[str] = set()
    for char in source.decode("utf-8", errors="ignore"):
        if char.isascii() or char in declared:
            continue
        declared.add(char)
        replacement, replaced = mapper(char)
        if not replaced:
            logger.debug("No unicode declaration for U+%04X", ord(char))
            continue
        yield char, replacement


def format_unicode_declaration(char: str, replacement: str) -> bytes:
    r"""Format a ``\DeclareUnicodeCharacter`` line for ``char``."""
    code = format(ord(char), f"0{UNICODE_HEX_WIDTH}x").encode("ascii")
    return UNICODE_DECLARATION + code + b"}{" + replacement.encode("utf-8") + b"}\n"
