#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_cli_integration.py
"""Integration tests for the texmark command line."""

import argparse
import io
import sys

import pytest

from texmark.cli import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_renderer_options,
    create_parser,
    get_exit_code_for_exception,
    main,
    should_use_rich_output,
)
from texmark.exceptions import (
    DependencyError,
    FileError,
    InvalidOptionsError,
    OutputWriteError,
    ParsingError,
    PreambleLoadError,
    TexmarkError,
)
from texmark.utils.unicode import default_unicode_mapper


@pytest.mark.integration
@pytest.mark.cli
class TestMain:
    """Tests for running the command end to end."""

    def test_output_file(self, markdown_file, tmp_path):
        """Test converting a file to a .tex file."""
        target = tmp_path / "notes.tex"
        assert main([str(markdown_file), "-o", str(target)]) == EXIT_SUCCESS
        latex = target.read_bytes()
        assert b"\\section{Notes}" in latex
        assert latex.endswith(b"\\end{document}\n")

    def test_stdout(self, markdown_file, capsysbinary):
        """Test LaTeX goes to standard output without -o."""
        assert main([str(markdown_file)]) == EXIT_SUCCESS
        captured = capsysbinary.readouterr()
        assert b"\\begin{document}" in captured.out
        assert b"\\section{Notes}" in captured.out

    def test_stdin(self, monkeypatch, capsysbinary):
        """Test '-' reads standard input."""
        fake_stdin = io.TextIOWrapper(io.BytesIO(b"# From stdin\n"), encoding="utf-8")
        monkeypatch.setattr(sys, "stdin", fake_stdin)
        assert main(["-"]) == EXIT_SUCCESS
        assert b"\\section{From stdin}" in capsysbinary.readouterr().out

    def test_rendering_flags(self, markdown_file, tmp_path):
        """Test rendering flags reach the output."""
        target = tmp_path / "out.tex"
        code = main(
            [str(markdown_file), "-o", str(target), "--heading-offset", "2", "--no-numbering", "--make-title"]
        )
        assert code == EXIT_SUCCESS
        latex = target.read_bytes()
        assert b"\\subsubsection*{Notes}" in latex
        assert b"\\maketitle\n" in latex

    def test_declare_unicode(self, tmp_path):
        """Test --declare-unicode adds declarations before the body."""
        source = tmp_path / "accents.md"
        source.write_text("Café crème\n", encoding="utf-8")
        target = tmp_path / "accents.tex"
        assert main([str(source), "-o", str(target), "--declare-unicode"]) == EXIT_SUCCESS
        latex = target.read_bytes()
        assert b"\\DeclareUnicodeCharacter{00e9}" in latex
        assert b"\\DeclareUnicodeCharacter{00e8}" in latex

    def test_custom_preamble(self, markdown_file, tmp_path):
        """Test --preamble replaces the default preamble."""
        preamble = tmp_path / "preamble.tex"
        preamble.write_bytes(b"\\documentclass{report}\n")
        target = tmp_path / "out.tex"
        assert main([str(markdown_file), "-o", str(target), "--preamble", str(preamble)]) == EXIT_SUCCESS
        assert target.read_bytes().startswith(b"\\documentclass{report}\n\n\\begin{document}\n")

    def test_missing_input(self, tmp_path, capsys):
        """Test a missing input file exits with the file error code."""
        assert main([str(tmp_path / "missing.md")]) == EXIT_FILE_ERROR
        assert "Input file not found" in capsys.readouterr().err

    def test_missing_preamble(self, markdown_file, tmp_path, capsys):
        """Test a missing preamble file exits with the file error code."""
        code = main([str(markdown_file), "--preamble", str(tmp_path / "nope.tex")])
        assert code == EXIT_FILE_ERROR
        assert "Cannot load preamble file" in capsys.readouterr().err

    def test_unwritable_output(self, markdown_file, tmp_path):
        """Test an output path in a missing directory exits with the rendering error code."""
        code = main([str(markdown_file), "-o", str(tmp_path / "missing" / "out.tex")])
        assert code == EXIT_RENDERING_ERROR

    def test_bad_input_encoding(self, markdown_file):
        """Test an unknown input encoding exits with the validation error code."""
        assert main([str(markdown_file), "--input-encoding", "no-such-codec"]) == EXIT_VALIDATION_ERROR

    def test_version(self, capsys):
        """Test --version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "texmark" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestCliHelpers:
    """Tests for argument handling helpers."""

    @pytest.mark.parametrize(
        "exception,expected",
        [
            (DependencyError("markdown", ["mistune>=3.0.0"]), EXIT_DEPENDENCY_ERROR),
            (ImportError("x"), EXIT_DEPENDENCY_ERROR),
            (InvalidOptionsError("latex", int, str), EXIT_VALIDATION_ERROR),
            (FileError("x"), EXIT_FILE_ERROR),
            (PreambleLoadError("p.tex"), EXIT_FILE_ERROR),
            (OSError("x"), EXIT_FILE_ERROR),
            (ParsingError("x"), EXIT_PARSING_ERROR),
            (OutputWriteError("out.tex"), EXIT_RENDERING_ERROR),
            (TexmarkError("x"), EXIT_ERROR),
            (RuntimeError("x"), EXIT_ERROR),
        ],
    )
    def test_exit_codes(self, exception, expected):
        """Test each error family maps to its exit code."""
        assert get_exit_code_for_exception(exception) == expected

    def test_defaults(self):
        """Test default arguments give default options."""
        args = create_parser().parse_args(["in.md"])
        options = build_renderer_options(args)
        assert options.heading_level_offset == 0
        assert options.preamble is None
        assert options.declare_unicode is None
        assert not options.unsafe

    def test_negative_offset(self):
        """Test negative heading offsets are accepted."""
        args = create_parser().parse_args(["in.md", "--heading-offset", "-1", "--unsafe", "--declare-unicode"])
        options = build_renderer_options(args)
        assert options.heading_level_offset == -1
        assert options.unsafe
        assert options.declare_unicode is default_unicode_mapper

    def test_rich_off_by_default(self):
        """Test plain output is used without --rich."""
        assert not should_use_rich_output(argparse.Namespace(rich=False))

    def test_rich_requires_tty(self):
        """Test --rich falls back to plain output when not writing to a terminal."""
        assert not should_use_rich_output(argparse.Namespace(rich=True), stream=io.StringIO())
