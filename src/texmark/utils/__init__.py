#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility modules for texmark.

- escape: the LaTeX escaping primitive
- security: dangerous URL and verbatim terminator checks
- images: image destination attribute parsing
- unicode: unicode character declarations
- encoding, io_utils: input loading and output writing
- decorators: dependency checks and timing
"""
