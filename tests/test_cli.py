"""Tests for the courseboard command-line interface."""

import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from courseboard.board import CourseBoard
from courseboard.cli import main


def _run(home: str, caller: str, *args: str):
    runner = CliRunner()
    return runner.invoke(main, ["--home", home, "--as", caller, *args])


def test_add_get_and_list():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "u1", "course", "add", "--title", "Algebra", "--creator-name", "U1", "--body", "Intro")
        assert result.exit_code == 0, result.output
        assert "Created course" in result.output

        result = _run(tmpdir, "u1", "course", "get", "1")
        assert result.exit_code == 0
        assert "Algebra" in result.output

        result = _run(tmpdir, "u1", "course", "list")
        assert "Algebra" in result.output


def test_add_from_yaml_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        payload = Path(tmpdir) / "course.yaml"
        payload.write_text(yaml.dump({"title": "Geometry", "creator_name": "U1", "body": "Shapes", "category": "math"}))

        result = _run(tmpdir, "u1", "course", "add", "--file", str(payload))
        assert result.exit_code == 0, result.output
        assert CourseBoard(base_dir=tmpdir).get_course(1).category == "math"


def test_empty_fields_exit_non_zero():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "u1", "course", "add", "--title", "Only title")
        assert result.exit_code == 1
        assert "empty_fields" in result.output


def test_missing_caller_is_a_usage_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = CliRunner().invoke(main, ["--home", tmpdir, "--as", "", "course", "purge-mine"])
        assert result.exit_code == 2


def test_roles_and_ban_flow():
    with tempfile.TemporaryDirectory() as tmpdir:
        assert _run(tmpdir, "root", "admin", "set", "root").exit_code == 0
        assert _run(tmpdir, "root", "moderator", "add", "mod").exit_code == 0
        assert _run(tmpdir, "x", "course", "add", "--title", "T", "--creator-name", "X", "--body", "B").exit_code == 0

        refused = _run(tmpdir, "x", "admin", "set", "x")
        assert refused.exit_code == 1
        assert "unauthorized" in refused.output

        result = _run(tmpdir, "mod", "ban", "add", "x")
        assert result.exit_code == 0
        assert "1 course(s) deleted" in result.output

        result = _run(tmpdir, "x", "course", "add", "--title", "T", "--creator-name", "X", "--body", "B")
        assert result.exit_code == 1
        assert "banned_user" in result.output

        assert "x" in _run(tmpdir, "root", "ban", "list").output
        assert "mod" in _run(tmpdir, "root", "moderator", "list").output


def test_filter_command():
    with tempfile.TemporaryDirectory() as tmpdir:
        _run(tmpdir, "u1", "course", "add", "--title", "A", "--creator-name", "U1", "--body", "B", "--category", "math")
        _run(tmpdir, "u2", "course", "add", "--title", "C", "--creator-name", "U2", "--body", "B", "--category", "cs")

        result = _run(tmpdir, "u1", "course", "filter", "--category", "math")
        assert "Matches (1, AND)" in result.output

        result = _run(tmpdir, "u1", "course", "filter", "--mode", "or")
        assert "No matching courses" in result.output


def test_audit_command_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        _run(tmpdir, "root", "admin", "set", "root")
        result = _run(tmpdir, "root", "audit", "--format", "json")
        assert result.exit_code == 0
        assert '"set_admin"' in result.output


def test_markup_like_user_text_is_printed_literally():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(
            tmpdir, "u[/]", "course", "add", "--title", "Intro [/]", "--creator-name", "[bold]U1", "--body", "Use [red]x[/red]"
        )
        assert result.exit_code == 0, result.output
        assert "Intro [/]" in result.output

        result = _run(tmpdir, "u1", "course", "list")
        assert result.exit_code == 0, result.output
        assert "Intro [/]" in result.output

        result = _run(tmpdir, "u1", "course", "get", "1")
        assert result.exit_code == 0, result.output
        assert "Use [red]x[/red]" in result.output
        assert "[bold]U1" in result.output

        result = _run(tmpdir, "u1", "course", "delete", "1")
        assert result.exit_code == 1
        assert "unauthorized" in result.output


def test_missing_payload_file_is_a_usage_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        missing = str(Path(tmpdir) / "nope.yaml")
        result = _run(tmpdir, "u1", "course", "add", "--file", missing)
        assert result.exit_code == 2
        assert CourseBoard(base_dir=tmpdir).list_courses() == []

        result = _run(tmpdir, "u1", "course", "add", "--file", tmpdir)
        assert result.exit_code == 2
