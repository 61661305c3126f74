"""
test_api.py - Testes para a API em memoria do todoflow

Proposito:
    Validar load()/load_file() e as variantes que lancam excecao.

Componentes testados:
    - load(): pipeline completo a partir de strings
    - load_file(): pipeline a partir do disco, com erros de I/O
    - ParseResult: renderizacao e estatisticas
"""

from __future__ import annotations

from pathlib import Path

import pytest

import todoflow
from todoflow.api import ParseResult, load, load_file, parse_projects, parse_projects_file


def test_load_success(example_text: str):
    result = load(example_text, "example.todo")
    assert isinstance(result, ParseResult)
    assert result.success
    assert result.error is None
    assert len(result.projects) == 1
    assert result.tree is not None
    assert result.render().endswith("Total: 3 tasks (2 active, 1 completed)")


def test_load_stats(fixtures_dir: Path):
    result = load_file(fixtures_dir / "multi.todo")
    assert result.success
    assert result.stats.project_count == 2
    assert result.stats.task_count == 3
    assert result.stats.active_count == 2
    assert result.stats.completed_count == 1


def test_load_syntax_error_has_no_partial_projects():
    result = load('project "A" { todo: "ok", }\nproject "B" { todo: "broken" }')
    assert not result.success
    assert result.projects == ()
    assert result.error.kind == "syntax"
    assert result.error.line == 2
    assert result.render() == ""
    assert result.render_tree() == ""


def test_load_semantic_error_keeps_tree():
    result = load('project "A" { todo: "x", due:2025-04-31, }')
    assert not result.success
    assert result.error.kind == "invalid_date"
    assert result.tree is not None
    assert "due_date" in result.render_tree()


def test_load_missing_file(tmp_path: Path):
    result = load_file(tmp_path / "missing.todo")
    assert not result.success
    assert result.error.kind == "io"
    assert "missing.todo" in result.get_diagnostics()


def test_load_file_uses_path_in_locations(fixtures_dir: Path):
    result = load_file(fixtures_dir / "invalid_syntax" / "missing_comma.todo")
    assert not result.success
    assert "missing_comma.todo:3:5" in result.get_diagnostics()


def test_parse_projects_raises():
    with pytest.raises(todoflow.TodoSyntaxError):
        parse_projects("")


def test_parse_projects_file(fixtures_dir: Path):
    projects = parse_projects_file(fixtures_dir / "parser.todo")
    assert projects[0].name == "Parser"
    assert projects[0].tasks[0].location.file == fixtures_dir / "parser.todo"


def test_parse_projects_file_io_error(tmp_path: Path):
    with pytest.raises(todoflow.TodoIoError):
        parse_projects_file(tmp_path)


def test_all_errors_share_base_type():
    for error_type in (
        todoflow.TodoSyntaxError,
        todoflow.TodoIoError,
        todoflow.InvalidDateError,
        todoflow.EmptyValueError,
    ):
        assert issubclass(error_type, todoflow.TodoParseError)


def test_to_dict(example_text: str):
    data = load(example_text).projects[0].to_dict()
    assert data["name"] == "Parser"
    first = data["tasks"][0]
    assert first["status"] == "TODO"
    assert first["priority"] == "High"
    assert first["due_date"] == "2025-11-15"
    assert first["tags"] == ["core"]
    assert first["location"]["line"] == 2


def test_public_exports():
    result = todoflow.load('project "Demo" { todo: "Write docs", @high, }')
    assert result.success
    assert todoflow.render(result.projects).startswith("Project: Demo")
    assert todoflow.match("priority", "@low").is_ok()
