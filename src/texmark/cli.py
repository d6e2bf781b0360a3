#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/cli.py
"""Command-line interface for texmark.

Usage
-----
    texmark notes.md -o notes.tex
    texmark notes.md --heading-offset 1 --no-numbering --make-title
    cat notes.md | texmark - > notes.tex

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from texmark.exceptions import (
    DependencyError,
    FileError,
    ParsingError,
    RenderingError,
    TexmarkError,
    ValidationError,
)
from texmark.logging_utils import configure_logging
from texmark.options import LatexRendererOptions, MarkdownParserOptions
from texmark.utils.unicode import default_unicode_mapper

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, (FileError, OSError)):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the texmark command."""
    from texmark import __version__

    parser = argparse.ArgumentParser(
        prog="texmark",
        description="Render Markdown as a complete LaTeX document.",
    )
    parser.add_argument("input", help="Markdown file to convert, or '-' to read standard input")
    parser.add_argument("-o", "--output", help="Output .tex file (default: standard output)")
    parser.add_argument("--version", action="version", version=f"texmark {__version__}")

    rendering = parser.add_argument_group("rendering options")
    rendering.add_argument(
        "--heading-offset",
        type=int,
        default=0,
        metavar="N",
        help="Shift every heading level by N (negative values allowed)",
    )
    rendering.add_argument(
        "--no-numbering", action="store_true", help=LatexRendererOptions.field_help("no_heading_numbering")
    )
    rendering.add_argument("--preamble", metavar="FILE", help="Use FILE as the preamble instead of the built-in one")
    rendering.add_argument(
        "--unsafe",
        action="store_true",
        help=LatexRendererOptions.field_help("unsafe"),
    )
    rendering.add_argument("--make-title", action="store_true", help=LatexRendererOptions.field_help("make_title"))
    rendering.add_argument(
        "--declare-unicode",
        action="store_true",
        help="Declare accented letters and typographic symbols found in the input",
    )

    parsing = parser.add_argument_group("parsing options")
    parsing.add_argument("--input-encoding", metavar="ENCODING", help="Encoding of the input (detected by default)")
    parsing.add_argument(
        "--no-parse-inline-html",
        action="store_true",
        help="Treat inline HTML as plain text instead of skipping it",
    )

    output = parser.add_argument_group("output and logging")
    output.add_argument("--rich", action="store_true", help="Highlight output and status messages with rich")
    output.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    output.add_argument("--log-file", help="Also write log messages to this file")
    output.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    # --trace takes precedence over --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    use_rich = parsed_args.rich and check_rich_available() and sys.stderr.isatty()
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace, use_rich=use_rich)


def check_rich_available() -> bool:
    """Check if the rich library is available."""
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream: Optional[TextIO] = None) -> bool:
    """Determine if rich output should be used.

    Rich output is used when ``--rich`` is set, the target stream is a TTY
    and rich is installed.

    Raises
    ------
    DependencyError
        If ``--rich`` is set but rich is not installed

    """
    if not args.rich:
        return False

    if not check_rich_available():
        raise DependencyError("rich output", ["rich>=13.0.0"])

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def build_renderer_options(parsed_args: argparse.Namespace) -> LatexRendererOptions:
    """Assemble renderer options from parsed arguments.

    Raises
    ------
    PreambleLoadError
        If ``--preamble`` names a file that cannot be read

    """
    options = (
        LatexRendererOptions()
        .with_heading_level_offset(parsed_args.heading_offset)
        .with_no_heading_numbering(parsed_args.no_numbering)
        .with_unsafe(parsed_args.unsafe)
        .with_make_title(parsed_args.make_title)
    )
    if parsed_args.preamble:
        options = options.with_preamble_file(parsed_args.preamble)
    if parsed_args.declare_unicode:
        options = options.with_unicode_mapper(default_unicode_mapper)
    return options


def _read_input(input_arg: str) -> bytes:
    if input_arg == "-":
        return sys.stdin.buffer.read()

    path = Path(input_arg)
    if not path.is_file():
        raise FileError(f"Input file not found: {input_arg}", path=input_arg)
    return path.read_bytes()


def _write_stdout(latex: bytes, use_rich: bool) -> None:
    if use_rich:
        from rich.console import Console
        from rich.syntax import Syntax

        Console().print(Syntax(latex.decode("utf-8", errors="replace"), "latex"))
        return

    sys.stdout.buffer.write(latex)
    sys.stdout.flush()


def main(args: list[str] | None = None) -> int:
    """Run the texmark command line and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    from texmark.api import to_latex

    try:
        options = build_renderer_options(parsed_args)
        parser_options = MarkdownParserOptions(
            encoding=parsed_args.input_encoding,
            parse_inline_html=not parsed_args.no_parse_inline_html,
        )
        source = _read_input(parsed_args.input)

        if parsed_args.output:
            to_latex(source, options=options, output=parsed_args.output, parser_options=parser_options)
            if should_use_rich_output(parsed_args, stream=sys.stderr):
                from rich.console import Console

                Console(stderr=True).print(f"[green]Wrote[/green] {parsed_args.output}")
            else:
                logger.info("Wrote %s", parsed_args.output)
        else:
            latex = to_latex(source, options=options, parser_options=parser_options)
            _write_stdout(latex, should_use_rich_output(parsed_args))
    except (TexmarkError, OSError) as e:
        exit_code = get_exit_code_for_exception(e)
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return exit_code

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
