"""Pytest configuration and shared fixtures for the texmark test suite.

This module provides shared fixtures and test configuration used across
the unit and integration tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from texmark.ast import SourceBuilder
from texmark.renderers.latex import LatexRenderer

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sb() -> SourceBuilder:
    """Provide a fresh source builder for hand-built trees."""
    return SourceBuilder()


@pytest.fixture
def renderer() -> LatexRenderer:
    """Provide a LaTeX renderer with default options."""
    return LatexRenderer()


@pytest.fixture
def markdown_file(tmp_path):
    """Write a small Markdown document and return its path."""
    path = tmp_path / "notes.md"
    path.write_text(
        "# Notes\n\nSome *emphasis* and 50% of `code_span`.\n\n- one\n- two\n\n```python\nprint('hi')\n```\n",
        encoding="utf-8",
    )
    return path
