#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/utils/decorators.py
"""Dependency guards and timing helpers for parsers and renderers."""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from importlib import metadata
from typing import Any, Callable, Iterator, Optional, Sequence

from packaging.requirements import Requirement

from texmark.exceptions import DependencyError


def installed_version(distribution: str) -> Optional[str]:
    """Return the installed version of ``distribution``, or None when unknown."""
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return None


def requires_dependencies(component: str, requirements: Sequence[str]) -> Callable:
    """Refuse to run the decorated method unless its packages are usable.

    Each requirement is a PEP 508 string whose name is also the import
    name, e.g. ``"mistune>=3.0.0"``. A package that imports but has no
    distribution metadata is accepted.

    Parameters
    ----------
    component : str
        Feature name used in the error message
    requirements : sequence of str
        Requirement strings to check on every call

    Raises
    ------
    DependencyError
        If a package cannot be imported or its version is outside the
        requirement

    Examples
    --------
        >>> @requires_dependencies("markdown", ["mistune>=3.0.0"])
        ... def parse(self, source):
        ...     import mistune

    """
    parsed = [Requirement(requirement) for requirement in requirements]

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing: list[str] = []
            mismatched: list[tuple[str, str]] = []
            first_error: Optional[ImportError] = None

            for requirement in parsed:
                try:
                    importlib.import_module(requirement.name)
                except ImportError as e:
                    missing.append(str(requirement))
                    first_error = first_error or e
                    continue
                version = installed_version(requirement.name)
                if version is not None and not requirement.specifier.contains(version, prereleases=True):
                    mismatched.append((str(requirement), version))

            if missing or mismatched:
                raise DependencyError(component, missing, mismatched, original_error=first_error) from first_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Iterator[None]:
    """Log how long the block took, only when DEBUG is enabled on ``logger``."""
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    started = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("%s took %.1f ms", operation, (time.perf_counter() - started) * 1000)
