"""
conftest.py - Fixtures compartilhadas para testes do todoflow

Propósito:
    Fornecer fixtures comuns para parsing, renderizacao e CLI.

Componentes principais:
    - paths para fixtures
    - texto do exemplo documentado

Dependências críticas:
    - pytest: gerenciamento de fixtures
"""

from __future__ import annotations

from pathlib import Path

import pytest

from todoflow.ast.nodes import SourceLocation


EXAMPLE_TEXT = """project "Parser" {
  todo: "Design grammar", @high, due:2025-11-15, assign:@tanya, @tag:"core",
  todo: "Write parser", depends_on:"Design grammar", assign:@oleksii,
  done: "Initialize project", @low, @tag:"setup",
}
"""


@pytest.fixture()
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture()
def base_location() -> SourceLocation:
    return SourceLocation(file=Path("test.todo"), line=1, column=1)


@pytest.fixture()
def example_text() -> str:
    return EXAMPLE_TEXT
