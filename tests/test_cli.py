"""
test_cli.py - Testes da interface de linha de comando

Propósito:
    Validar os comandos parse/check/credits e os codigos de saida.
"""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from todoflow.cli import VERSION, main


def _invoke(*args: str):
    return CliRunner().invoke(main, list(args))


def test_parse_renders_projects(fixtures_dir: Path):
    result = _invoke("parse", "--file", str(fixtures_dir / "parser.todo"))
    assert result.exit_code == 0
    assert "Project: Parser" in result.output
    assert "Total: 3 tasks (2 active, 1 completed)" in result.output


def test_parse_tree_mode(fixtures_dir: Path):
    result = _invoke("parse", "-f", str(fixtures_dir / "parser.todo"), "--tree")
    assert result.exit_code == 0
    assert result.output.startswith("Syntax tree:")
    assert "todo_task" in result.output
    assert "Total:" not in result.output


def test_parse_syntax_error_exits_non_zero(fixtures_dir: Path):
    result = _invoke("parse", "--file", str(fixtures_dir / "invalid_syntax" / "unclosed_block.todo"))
    assert result.exit_code == 1
    assert "Syntax error" in result.output


def test_parse_missing_file_exits_non_zero(tmp_path: Path):
    result = _invoke("parse", "--file", str(tmp_path / "nope.todo"))
    assert result.exit_code == 1
    assert "I/O error" in result.output


def test_parse_semantic_error_exits_non_zero(tmp_path: Path):
    path = tmp_path / "bad_date.todo"
    path.write_text('project "T" { todo: "X", due:2025-02-30, }\n', encoding="utf-8")
    result = _invoke("parse", "--file", str(path))
    assert result.exit_code == 1
    assert "2025-02-30" in result.output


def test_parse_requires_file_option():
    result = _invoke("parse")
    assert result.exit_code != 0


def test_check_ok(fixtures_dir: Path):
    result = _invoke("check", str(fixtures_dir / "multi.todo"))
    assert result.exit_code == 0
    assert "OK" in result.output


def test_check_reports_location(fixtures_dir: Path):
    result = _invoke("check", str(fixtures_dir / "invalid_syntax" / "missing_comma.todo"))
    assert result.exit_code == 1
    assert "missing_comma.todo:3:5" in result.output


def test_credits():
    result = _invoke("credits")
    assert result.exit_code == 0
    assert "Author:" in result.output
    assert "Project: ToDo Parser" in result.output


def test_version():
    result = _invoke("--version")
    assert result.exit_code == 0
    assert VERSION in result.output


def test_no_command_prints_help():
    result = _invoke()
    assert result.exit_code == 0
    assert "Usage:" in result.output
