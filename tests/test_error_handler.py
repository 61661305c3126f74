"""
test_error_handler.py - Testes para mensagens de erro legiveis

Valida que o TodoErrorHandler detecta padroes comuns e gera
mensagens com contexto de origem.
"""

from pathlib import Path

from todoflow.ast.nodes import SourceLocation
from todoflow.parser.error_handler import (
    END_OF_INPUT,
    TodoErrorHandler,
    describe_terminals,
)


def _handler() -> TodoErrorHandler:
    return TodoErrorHandler("test.todo")


def test_describe_terminals_humanizes_and_sorts():
    assert describe_terminals(["_RBRACE", "_TODO", "_RBRACE", "DATE"]) == [
        '"todo:"',
        '"}"',
        "date (YYYY-MM-DD)",
    ]


def test_unknown_terminal_falls_back_to_name():
    assert describe_terminals(["SOMETHING"]) == ["SOMETHING"]


def test_generic_message_lists_expected():
    message = _handler().describe(['"{"'], "todo:")
    assert message == "Unexpected 'todo:'. Expected: \"{\""


def test_missing_comma_message():
    message = _handler().describe(['","'], "}")
    assert "Missing ','" in message


def test_unknown_priority_message():
    message = _handler().describe(['"@high"', '"@low"', '"@medium"'], "@urgent")
    assert "@high, @medium or @low" in message


def test_unknown_keyword_message_lists_attributes():
    message = _handler().describe(['"@high"', '"@tag:"', '"due:"'], "@tags:")
    assert "@tag:" in message
    assert "Priority must be" not in message


def test_malformed_date_message():
    message = _handler().describe(["date (YYYY-MM-DD)"], "15.11.2025")
    assert "YYYY-MM-DD" in message


def test_unclosed_project_message():
    message = _handler().describe(['"todo:"', '"}"'], END_OF_INPUT)
    assert message.startswith("Unclosed project block")


def test_format_context_pointer():
    source = 'project "T" {\n\ttodo: "X" }\n'
    location = SourceLocation(file=Path("test.todo"), line=2, column=12)
    context = _handler().format_context(source, location, span=1)
    assert context == '    \ttodo: "X" }\n    \t          ^'


def test_format_context_out_of_range_line():
    location = SourceLocation(file=Path("test.todo"), line=10, column=1)
    assert _handler().format_context("one line", location) == ""
