#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and static tables for the texmark library.

This module centralizes the fixed data the renderer works from. Every table
here is built once at import time and exposed read-only (bytes, tuples,
frozensets or mapping proxies).

Constants are organized by category:
1. Option defaults
2. Document envelope
3. Escaping
4. Headings and block markers
5. Verbatim code
6. Security
"""

from __future__ import annotations

from types import MappingProxyType

# =============================================================================
# Option defaults
# =============================================================================

DEFAULT_HEADING_LEVEL_OFFSET = 0
DEFAULT_NO_HEADING_NUMBERING = False
DEFAULT_UNSAFE = False
DEFAULT_MAKE_TITLE = False

# =============================================================================
# Document envelope
# =============================================================================

# Prefix of every diagnostic line comment written into the output.
COMMENT_PREFIX = b"% texmark: "

DEFAULT_PREAMBLE = b"""\\documentclass{article}
\\usepackage[utf8]{inputenc}
\\usepackage[T1]{fontenc}
\\usepackage{lmodern}
\\usepackage{textcomp}
\\usepackage{graphicx}
\\usepackage{framed}
\\usepackage{minted}
\\usepackage[normalem]{ulem}
\\usepackage{hyperref}
"""

BEGIN_DOCUMENT = b"\n\\begin{document}\n"
END_DOCUMENT = b"\n\\end{document}\n"
MAKE_TITLE = b"\\maketitle\n"
UNICODE_DECLARATION = b"\\DeclareUnicodeCharacter{"
UNICODE_HEX_WIDTH = 4

# =============================================================================
# Escaping
# =============================================================================

LATEX_ESCAPES: MappingProxyType[int, bytes] = MappingProxyType(
    {
        ord("\\"): b"\\textbackslash{}",
        ord("~"): b"\\textasciitilde{}",
        ord("^"): b"\\textasciicircum{}",
        ord("&"): b"\\&",
        ord("%"): b"\\%",
        ord("$"): b"\\$",
        ord("#"): b"\\#",
        ord("_"): b"\\_",
        ord("{"): b"\\{",
        ord("}"): b"\\}",
    }
)

# =============================================================================
# Headings and block markers
# =============================================================================

MAX_HEADING_INDEX = 5

# Indexed by [effective level][numbering suppressed]. The deepest level has
# no starred form in LaTeX and renders as bold text either way.
HEADING_COMMANDS: tuple[tuple[bytes, bytes], ...] = (
    (b"\\section{", b"\\section*{"),
    (b"\\subsection{", b"\\subsection*{"),
    (b"\\subsubsection{", b"\\subsubsection*{"),
    (b"\\paragraph{", b"\\paragraph*{"),
    (b"\\subparagraph{", b"\\subparagraph*{"),
    (b"\\textbf{", b"\\textbf{"),
)

BLOCKQUOTE_START = b"\n\\begin{framed}\n\\begin{quote}\n"
BLOCKQUOTE_END = b"\\end{quote}\n\\end{framed}\n"
ITEM_COMMAND = b"\\item~ "
HRULE_COMMAND = b"\n\\hrulefill\n"
HARD_BREAK = b"\\\\\n\n"
HREF_START = b"\\href{"
CODE_SPAN_START = b"\\texttt{"
MAILTO_PREFIX = "mailto:"

EMPHASIS_COMMANDS: MappingProxyType[int, bytes] = MappingProxyType(
    {
        1: b"\\textit{",
        2: b"\\textbf{",
        3: b"\\emph{",
    }
)

FIGURE_TEMPLATE = (
    b"\\begin{figure}[h]\n"
    b"\t\\centering\n"
    b"\t\\includegraphics[width=%s\\textwidth]{%s}\n"
    b"\t\\caption{%s}\n"
    b"\t\\label{%s}\n"
    b"\\end{figure}\n"
)

# =============================================================================
# Verbatim code
# =============================================================================

VERBATIM_BEGIN = b"\\begin{minted}"
VERBATIM_END = b"\\end{minted}\n"
INDENTED_CODE_LANGUAGE = b"text"

# Any occurrence of this token inside a verbatim body could close the
# environment early.
VERBATIM_TERMINATOR = b"\\end"

MAX_LANGUAGE_TAG_LENGTH = 10

# Language names known to the listings/minted drivers.
SUPPORTED_LANGUAGES: frozenset[str] = frozenset(
    {
        "abap", "acm", "acmscript", "acsl", "ada", "algol", "assembler", "awk",
        "basic", "clean", "idl", "c", "caml", "cil", "cobol", "comsol", "csh",
        "bash", "sh", "delphi", "eiffel", "elan", "erlang", "euphoria",
        "fortran", "gap", "go", "gcl", "gnuplot", "hansl", "haskell", "html",
        "inform", "java", "jvmis", "scala", "ksh", "lingo", "lisp", "elisp",
        "llvm", "logo", "lua", "make", "matlab", "mathematica", "mercury",
        "metapost", "miranda", "mizar", "ml", "mupad", "nastran", "ocl",
        "octave", "oz", "pascal", "perl", "php", "plasm", "postscript", "pov",
        "prolog", "promela", "pstricks", "python", "rexx", "oorexx", "reduce",
        "rsl", "ruby", "scilab", "shelxl", "simula", "sparql", "sql", "swift",
        "tcl", "s", "r", "sas", "tex", "vbscript", "verilog", "vhdl", "vrml",
        "xslt", "ant", "xml",
    }
)  # fmt: skip

# =============================================================================
# Security
# =============================================================================

DANGEROUS_SCHEMES: frozenset[str] = frozenset({"javascript:", "vbscript:", "file:", "data:"})

# data: URLs that only carry an image payload are allowed through.
SAFE_DATA_IMAGE_PREFIXES: tuple[str, ...] = (
    "data:image/png",
    "data:image/gif",
    "data:image/jpeg",
    "data:image/webp",
)
