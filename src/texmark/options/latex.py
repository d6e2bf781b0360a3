#  Copyright (c) 2025 Tom Villani, Ph.D.

# texmark/options/latex.py
"""Configuration options for LaTeX rendering.

This module defines options for Markdown-to-LaTeX rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from texmark.constants import (
    DEFAULT_HEADING_LEVEL_OFFSET,
    DEFAULT_MAKE_TITLE,
    DEFAULT_NO_HEADING_NUMBERING,
    DEFAULT_UNSAFE,
)
from texmark.options.base import BaseRendererOptions
from texmark.utils.io_utils import load_preamble

UnicodeMapperType = Callable[[str], "tuple[str, bool]"]


@dataclass(frozen=True)
class LatexRendererOptions(BaseRendererOptions):
    r"""Configuration options for tree-to-LaTeX rendering.

    Parameters
    ----------
    heading_level_offset : int, default 0
        Added to every heading level before the sectioning command is
        chosen. The result is clamped, so any value is accepted.
    no_heading_numbering : bool, default False
        Use starred (unnumbered) sectioning commands.
    preamble : bytes or None, default None
        Custom preamble written verbatim before ``\begin{document}``.
        A ``str`` is encoded as UTF-8. The built-in preamble is used
        when None.
    unsafe : bool, default False
        Emit dangerous link destinations and code lines containing
        ``\end`` as-is.
    declare_unicode : callable or None, default None
        Maps a non-ASCII character to ``(replacement, replaced)``. When set,
        every replaced character found in the source is declared with
        ``\DeclareUnicodeCharacter`` in the preamble.
    make_title : bool, default False
        Emit ``\maketitle`` right after ``\begin{document}``.

    Examples
    --------
        >>> options = LatexRendererOptions().with_heading_level_offset(1).with_unsafe()
        >>> options.heading_level_offset, options.unsafe
        (1, True)

    """

    heading_level_offset: int = field(
        default=DEFAULT_HEADING_LEVEL_OFFSET,
        metadata={
            "help": "Shift every heading level by this amount",
            "cli_name": "heading-offset",
            "type": int,
            "importance": "core",
        },
    )
    no_heading_numbering: bool = field(
        default=DEFAULT_NO_HEADING_NUMBERING,
        metadata={"help": "Use unnumbered sectioning commands", "cli_name": "no-numbering", "importance": "core"},
    )
    preamble: Optional[bytes] = field(
        default=None,
        metadata={
            "help": "Custom preamble used instead of the built-in one",
            "cli_name": "preamble",
            "importance": "core",
        },
    )
    unsafe: bool = field(
        default=DEFAULT_UNSAFE,
        metadata={
            "help": "Emit dangerous link destinations and code lines containing \\end unchanged",
            "cli_name": "unsafe",
            "importance": "security",
        },
    )
    declare_unicode: Optional[UnicodeMapperType] = field(
        default=None,
        compare=False,
        metadata={"help": "Mapper used to declare non-ASCII characters in the preamble", "importance": "advanced"},
    )
    make_title: bool = field(
        default=DEFAULT_MAKE_TITLE,
        metadata={"help": "Emit \\maketitle after \\begin{document}", "cli_name": "make-title", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate option types and normalize the preamble to bytes.

        Raises
        ------
        ValueError
            If any field value has an unusable type.

        """
        super().__post_init__()

        if isinstance(self.heading_level_offset, bool) or not isinstance(self.heading_level_offset, int):
            raise ValueError(f"heading_level_offset must be an int, got {self.heading_level_offset!r}")

        if isinstance(self.preamble, str):
            object.__setattr__(self, "preamble", self.preamble.encode("utf-8"))
        elif self.preamble is not None and not isinstance(self.preamble, bytes):
            raise ValueError(f"preamble must be bytes, str or None, got {type(self.preamble).__name__}")

        if self.declare_unicode is not None and not callable(self.declare_unicode):
            raise ValueError("declare_unicode must be callable or None")

    def with_heading_level_offset(self, offset: int) -> LatexRendererOptions:
        """Return a copy with a different heading level offset."""
        return self.create_updated(heading_level_offset=offset)

    def with_no_heading_numbering(self, no_numbering: bool = True) -> LatexRendererOptions:
        """Return a copy with heading numbering switched off (or back on)."""
        return self.create_updated(no_heading_numbering=no_numbering)

    def with_preamble(self, preamble: Union[bytes, str, None]) -> LatexRendererOptions:
        """Return a copy using ``preamble``; None restores the built-in one."""
        return self.create_updated(preamble=preamble)

    def with_preamble_file(self, path: Union[str, Path]) -> LatexRendererOptions:
        """Return a copy whose preamble is read from ``path``.

        Raises
        ------
        PreambleLoadError
            If the file cannot be read

        """
        return self.create_updated(preamble=load_preamble(path))

    def with_unsafe(self, unsafe: bool = True) -> LatexRendererOptions:
        """Return a copy with unsafe mode switched on (or off)."""
        return self.create_updated(unsafe=unsafe)

    def with_unicode_mapper(self, mapper: Optional[UnicodeMapperType]) -> LatexRendererOptions:
        """Return a copy that declares unicode characters through ``mapper``."""
        return self.create_updated(declare_unicode=mapper)

    def with_make_title(self, make_title: bool = True) -> LatexRendererOptions:
        """Return a copy with ``\\maketitle`` emission switched on (or off)."""
        return self.create_updated(make_title=make_title)
