"""
Tests for the sasswatch command line.

Requires Python 3.11+.
"""

from pathlib import Path

import pytest

from cli.main import build_parser, main
from conftest import VALID_SCSS


class TestArguments:
    """Test cases for argument parsing."""

    def test_default_is_build_then_watch(self):
        assert build_parser().parse_args([]).command is None

    @pytest.mark.parametrize("command", ["build", "watch"])
    def test_known_commands(self, command: str):
        assert build_parser().parse_args([command]).command == command

    def test_unknown_command_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["deploy"])

        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err


class TestBuildCommand:
    """Test cases for `sasswatch build`."""

    def test_build_writes_css(self, project_dir: Path, valid_scss: Path):
        assert main(["build", "--root", str(project_dir), "--no-scripts"]) == 0
        assert "#336699" in (project_dir / "styles" / "a.css").read_text()

    def test_build_uses_root_from_settings(self, monkeypatch, project_dir: Path, valid_scss: Path):
        monkeypatch.setenv("BUILD_ROOT_DIR", str(project_dir))
        monkeypatch.setenv("BUILD_SCRIPTS_ENABLED", "false")

        assert main(["build"]) == 0
        assert (project_dir / "styles" / "a.css").exists()

    def test_build_without_source_dirs(self, tmp_path: Path):
        assert main(["build", "--root", str(tmp_path)]) == 0

    def test_compile_failure_exits_nonzero(self, project_dir: Path, invalid_scss: Path, capsys):
        assert main(["build", "--root", str(project_dir)]) == 1
        assert "error:" in capsys.readouterr().err

    def test_missing_script_compiler(self, monkeypatch, scripts_dir: Path, capsys):
        monkeypatch.setenv("SCRIPT_COMPILER_COMMAND", "sasswatch-missing-compiler")
        (scripts_dir / "c.js6").write_text("let c = 3;\n")

        assert main(["build", "--root", str(scripts_dir.parent)]) == 1

        err = capsys.readouterr().err
        assert "error:" in err
        assert "npm install -g traceur" in err

    def test_keep_going_reports_failures(self, project_dir: Path, styles_dir: Path, invalid_scss: Path, capsys):
        (styles_dir / "good.scss").write_text(VALID_SCSS)

        assert main(["build", "--root", str(project_dir), "--keep-going"]) == 1

        assert (styles_dir / "good.css").exists()
        assert "1 file(s) failed to compile" in capsys.readouterr().err

    def test_script_build(self, monkeypatch, scripts_dir: Path, fake_traceur: str):
        monkeypatch.setenv("SCRIPT_COMPILER_COMMAND", fake_traceur)
        (scripts_dir / "app.js6").write_text("let x = 1;\n")

        assert main(["build", "--root", str(scripts_dir.parent)]) == 0
        assert (scripts_dir / "app.js").read_text() == "let x = 1;\n"


def test_interrupt_exits_cleanly(monkeypatch, project_dir: Path):
    def interrupted(self):
        raise KeyboardInterrupt

    monkeypatch.setattr("watcher.file_watcher.ChangeWatcher.run", interrupted)

    assert main(["watch", "--root", str(project_dir)]) == 0
