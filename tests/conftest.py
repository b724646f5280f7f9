"""
Pytest configuration for the jsmods test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Paths to the fixture sources in tests/test_files
- A fake formatter so format/is_formatted run without prettier
"""

import os
import shutil
from pathlib import Path

import pytest

from jsmods.logging_config import setup_logging
from jsmods.mutation import CodeFormatter
from jsmods.exceptions import FormatterError


TEST_FILES = Path(__file__).parent / "test_files"


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Keep log output off the console during test runs."""
    os.environ.setdefault("JSMODS_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)


# ============================================================================
# SOURCE FIXTURES
# ============================================================================

@pytest.fixture
def test_files_dir():
    return TEST_FILES


@pytest.fixture
def app_js():
    """Phoenix app.js with a LiveSocket that already has hooks."""
    return (TEST_FILES / "app.js").read_text(encoding="utf-8")


@pytest.fixture
def stats_js():
    """1 function, 1 class, 2 debugger statements, 2 imports."""
    return (TEST_FILES / "stats.js").read_text(encoding="utf-8")


@pytest.fixture
def app_css():
    return (TEST_FILES / "app.css").read_text(encoding="utf-8")


@pytest.fixture
def project_copy(tmp_path):
    """
    Copy the fixture sources into a temp directory.

    Returns:
        Path to the temp directory; tests may write to the copies.
    """
    for source in TEST_FILES.iterdir():
        shutil.copy(source, tmp_path / source.name)
    return tmp_path


# ============================================================================
# FORMATTER FIXTURES
# ============================================================================

class FakeFormatter(CodeFormatter):
    """
    Stand-in for prettier: strips trailing whitespace on every line and ends
    the text with exactly one newline. Idempotent like the real formatter.
    """

    def format(self, text: str, language: str = "javascript") -> str:
        self.command_for(language)
        lines = [line.rstrip() for line in text.strip("\n").split("\n")]
        return "\n".join(lines) + "\n"


class BrokenFormatter(CodeFormatter):
    """Formatter whose binary is never available."""

    def format(self, text: str, language: str = "javascript") -> str:
        raise FormatterError("Formatter 'prettier' not found in PATH")


@pytest.fixture
def fake_formatter():
    return FakeFormatter()


@pytest.fixture
def broken_formatter():
    return BrokenFormatter()

