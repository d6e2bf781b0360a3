#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared behavior of the parser and renderer option dataclasses.

Options are frozen: a parser or renderer reads them for its whole lifetime
and nothing may change them underneath it. Variants are derived with
``create_updated`` or the ``with_*`` helpers of the concrete classes.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-on-write updates for frozen option dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        ``__post_init__`` runs again on the copy, so updated values are
        validated the same way constructor arguments are.

        Examples
        --------
            >>> LatexRendererOptions().create_updated(unsafe=True).unsafe
            True

        """
        return replace(self, **kwargs)

    @classmethod
    def field_help(cls, name: str) -> str:
        """Return the ``help`` text recorded in a field's metadata.

        Raises
        ------
        KeyError
            If the class has no field called ``name``

        """
        for option_field in fields(cls):  # type: ignore[arg-type]
            if option_field.name == name:
                return str(option_field.metadata.get("help", ""))
        raise KeyError(f"{cls.__name__} has no option {name!r}")


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class of renderer options."""

    def __post_init__(self) -> None:
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class of parser options."""

    def __post_init__(self) -> None:
        pass
