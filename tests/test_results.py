"""
test_results.py - Testes dos tipos Ok/Err

Valida o encadeamento de resultados retornados por match().
"""

from __future__ import annotations

import pytest

from todoflow.ast.nodes import Priority
from todoflow.ast.results import Err, Ok
from todoflow.parser.lexer import TodoSyntaxError, match


def _keyword(tree) -> str:
    return str(tree.children[0])


def test_map_transforms_ok_value():
    result = match("priority", "@low").map(_keyword).map(Priority.from_keyword)
    assert result == Ok(Priority.LOW)


def test_and_then_chains_matches():
    result = match("date", "2025-11-15").and_then(
        lambda tree: match("due_date", f"due:{_keyword(tree)}")
    )
    assert result.is_ok()
    assert result.unwrap().data == "due_date"


def test_and_then_stops_at_first_err():
    calls = []
    result = match("priority", "@urgent").and_then(lambda tree: calls.append(tree) or Ok(tree))
    assert result.is_err()
    assert calls == []


def test_err_map_returns_same_err():
    failed = match("priority", "@urgent")
    assert failed.map(_keyword) is failed
    assert isinstance(failed.error, TodoSyntaxError)


def test_unwrap_or():
    assert match("identifier", "tanya").map(_keyword).unwrap_or("nobody") == "tanya"
    assert match("identifier", "@tanya").map(_keyword).unwrap_or("nobody") == "nobody"


def test_err_unwrap_raises_error():
    with pytest.raises(TodoSyntaxError):
        match("quoted", "no quotes").unwrap()


def test_err_unwrap_non_exception():
    with pytest.raises(ValueError):
        Err("boom").unwrap()
