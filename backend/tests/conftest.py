"""
SassWatch Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from compiler.base import CompileResult
from utils.config import get_settings


VALID_SCSS = """$accent: #336699;

.button {
  color: $accent;
  .icon { margin: 0 4px; }
}
"""

INVALID_SCSS = """.button {
  color: ;
  {
"""

FAKE_TRACEUR = """#!/bin/sh
# Stand-in for traceur: fake-traceur --script IN --out OUT
if grep -q "SYNTAX ERROR" "$2"; then
  echo "$2:1:1: Unexpected token" >&2
  exit 1
fi
cp "$2" "$4"
"""


class RecordingCompiler:
    """Compiler double that records every source it is asked to compile."""

    def __init__(self, output: str | None = "compiled\n", diagnostic: str | None = None) -> None:
        self.output = output
        self.diagnostic = diagnostic
        self.calls: list[Path] = []

    def compile(self, source: Path) -> CompileResult:
        self.calls.append(source)
        if self.diagnostic is not None:
            return CompileResult.failure(source, self.diagnostic)
        return CompileResult.success(source, self.output)


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Re-read settings and reset logging around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project with empty styles/ and scripts/ directories."""
    (tmp_path / "styles").mkdir()
    (tmp_path / "scripts").mkdir()
    return tmp_path


@pytest.fixture
def styles_dir(project_dir: Path) -> Path:
    return project_dir / "styles"


@pytest.fixture
def scripts_dir(project_dir: Path) -> Path:
    return project_dir / "scripts"


@pytest.fixture
def valid_scss(styles_dir: Path) -> Path:
    """A style source that compiles."""
    path = styles_dir / "a.scss"
    path.write_text(VALID_SCSS)
    return path


@pytest.fixture
def invalid_scss(styles_dir: Path) -> Path:
    """A style source with a syntax error."""
    path = styles_dir / "broken.scss"
    path.write_text(INVALID_SCSS)
    return path


@pytest.fixture
def fake_traceur(tmp_path: Path) -> str:
    """An executable that behaves like the traceur command line."""
    path = tmp_path / "bin" / "fake-traceur"
    path.parent.mkdir()
    path.write_text(FAKE_TRACEUR)
    path.chmod(0o755)
    return str(path)


@pytest.fixture
def style_double() -> RecordingCompiler:
    return RecordingCompiler(output=".a { color: red; }\n")


@pytest.fixture
def script_double() -> RecordingCompiler:
    return RecordingCompiler(output=None)
