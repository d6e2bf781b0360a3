#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that turn a document tree into output bytes."""

from texmark.renderers.base import BaseRenderer
from texmark.renderers.latex import LatexRenderer, default_preamble, heading_command, heading_index

__all__ = ["BaseRenderer", "LatexRenderer", "default_preamble", "heading_command", "heading_index"]
