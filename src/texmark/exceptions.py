#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Errors raised by texmark.

Rendering a tree never fails: content the renderer will not translate ends
up as a ``% texmark:`` comment in the output. Everything here belongs to the
code around the renderer, where a failure means no document can be
produced at all.

Exception Hierarchy
-------------------
- TexmarkError

  - ValidationError (rejected option or argument value)
    - InvalidOptionsError (options object of the wrong class)

  - FileError (input or preamble file problems)
    - PreambleLoadError

  - ParsingError (mistune failed on the input)

  - RenderingError
    - OutputWriteError (the .tex file could not be written)

  - DependencyError (mistune or rich missing or too old)

"""

from __future__ import annotations

from typing import Any, Sequence


class TexmarkError(Exception):
    """Root of every error raised by texmark.

    Parameters
    ----------
    message : str
        Text shown to the user, e.g. by the command line
    original_error : Exception, optional
        Lower-level exception this one wraps

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(TexmarkError):
    """A value handed to texmark was rejected.

    Parameters
    ----------
    message : str
        What was wrong with the value
    parameter : str, optional
        Option or argument the value was given for, e.g. ``"encoding"``
    value : any, optional
        The rejected value
    original_error : Exception, optional
        Lower-level exception this one wraps

    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter = parameter
        self.value = value


class InvalidOptionsError(ValidationError):
    """A parser or renderer was given an options object of the wrong class.

    Passing ``MarkdownParserOptions`` to ``LatexRenderer`` is the typical
    mistake.
    """

    def __init__(self, component: str, expected_type: type, received_type: type):
        super().__init__(
            f"The {component} component takes {expected_type.__name__}, not {received_type.__name__}",
            parameter="options",
            value=received_type,
        )
        self.component = component
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(TexmarkError):
    """A file texmark needs to read does not exist or cannot be read."""

    def __init__(self, message: str, path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.path = path


class PreambleLoadError(FileError):
    """A custom preamble file could not be read.

    Raised while options are assembled, before anything is rendered.
    """

    def __init__(self, path: str, original_error: Exception | None = None):
        super().__init__(f"Cannot load preamble file: {path}", path=path, original_error=original_error)


class ParsingError(TexmarkError):
    """The Markdown parser failed on the input.

    Parameters
    ----------
    message : str
        Description of the failure
    stage : str, optional
        Parser step that failed, e.g. ``"tokenize"``
    original_error : Exception, optional
        Exception raised by mistune

    """

    def __init__(self, message: str, stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.stage = stage


class RenderingError(TexmarkError):
    """Rendered output could not be delivered."""

    def __init__(self, message: str, stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.stage = stage


class OutputWriteError(RenderingError):
    """The output file could not be opened or written."""

    def __init__(self, path: str, original_error: Exception | None = None):
        super().__init__(f"Failed to write output file: {path}", stage="write", original_error=original_error)
        self.path = path


class DependencyError(TexmarkError):
    """A required package is not installed or its version is too old.

    Parameters
    ----------
    component : str
        Feature that needs the packages, e.g. ``"markdown"``
    missing : sequence of str
        Requirement strings of packages that cannot be imported,
        e.g. ``"mistune>=3.0.0"``
    mismatched : sequence of (str, str), optional
        ``(requirement, installed_version)`` pairs for installed packages
        that do not satisfy their requirement
    message : str, optional
        Replaces the generated message
    original_error : ImportError, optional
        First import failure encountered

    """

    def __init__(
        self,
        component: str,
        missing: Sequence[str],
        mismatched: Sequence[tuple[str, str]] = (),
        message: str | None = None,
        original_error: ImportError | None = None,
    ):
        self.component = component
        self.missing = list(missing)
        self.mismatched = list(mismatched)
        if message is None:
            message = self._describe(component, self.missing, self.mismatched)
        super().__init__(message, original_error=original_error)

    @staticmethod
    def _describe(component: str, missing: list[str], mismatched: list[tuple[str, str]]) -> str:
        lines = []
        if missing:
            lines.append(f"{component} support requires {', '.join(missing)}")
        for requirement, installed in mismatched:
            lines.append(f"{component} support requires {requirement}, but {installed} is installed")
        wanted = missing + [requirement for requirement, _ in mismatched]
        if wanted:
            lines.append("Install with: pip install --upgrade " + " ".join(f"'{r}'" for r in wanted))
        return "\n".join(lines)
