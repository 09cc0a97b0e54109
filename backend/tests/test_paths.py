"""
Tests for the Path Classifier.

Requires Python 3.11+.
"""

from pathlib import Path

import pytest

from compiler.paths import SourceKind, classify, derive_output_path, source_roots


class TestClassify:
    """Test cases for classify."""

    @pytest.mark.parametrize(
        "path",
        ["styles/a.scss", "/abs/styles/site.scss", Path("styles/nested.name.scss")],
    )
    def test_style_sources(self, path):
        assert classify(path) is SourceKind.STYLE

    @pytest.mark.parametrize("path", ["scripts/app.js6", Path("/abs/scripts/x.js6")])
    def test_script_sources(self, path):
        assert classify(path) is SourceKind.SCRIPT

    @pytest.mark.parametrize(
        "path",
        ["styles/a.css", "scripts/app.js", "styles/a.scss.bak", "styles/a.scss~", "README"],
    )
    def test_unrelated(self, path):
        assert classify(path) is SourceKind.UNRELATED


class TestDeriveOutputPath:
    """Test cases for derive_output_path."""

    def test_style_output(self):
        assert derive_output_path("styles/a.scss") == Path("styles/a.css")

    def test_script_output(self):
        assert derive_output_path("scripts/app.js6") == Path("scripts/app.js")

    def test_only_trailing_suffix_replaced(self):
        """Directory names containing the suffix text are left alone."""
        assert derive_output_path("theme.scss.d/a.scss") == Path("theme.scss.d/a.css")
        assert derive_output_path("lib.js6/app.js6") == Path("lib.js6/app.js")

    def test_explicit_kind(self):
        assert derive_output_path(Path("a.scss"), SourceKind.STYLE) == Path("a.css")

    def test_kind_mismatch(self):
        with pytest.raises(ValueError):
            derive_output_path("a.scss", SourceKind.SCRIPT)

    def test_unrelated_path(self):
        with pytest.raises(ValueError):
            derive_output_path("styles/a.css")


def test_source_roots(tmp_path: Path):
    assert source_roots(tmp_path) == [tmp_path / "styles", tmp_path / "scripts"]
