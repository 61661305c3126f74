"""
error_handler.py - Mensagens de erro legiveis para o parser todoflow

Proposito:
    Gerar mensagens de erro claras para falhas de parsing.
    Detecta padroes comuns de uso incorreto e sugere correcoes.

Componentes principais:
    - TodoErrorHandler: detector de padroes e formatador de erros
    - describe_terminals: nomes amigaveis para terminais da gramatica

Dependencias criticas:
    - todoflow.ast.nodes: SourceLocation para localizacao precisa

Exemplo de uso:
    handler = TodoErrorHandler("tasks.todo")
    msg = handler.describe(expected=['","'], found="todo:")

Notas de implementacao:
    - Nao tenta corrigir; apenas sugere.
    - Recebe terminais ja humanizados pelo lexer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from todoflow.ast.nodes import SourceLocation

TERMINAL_DESCRIPTIONS = {
    "_PROJECT": '"project"',
    "_TODO": '"todo:"',
    "_DONE": '"done:"',
    "_DUE": '"due:"',
    "_ASSIGN": '"assign:"',
    "_DEPENDS_ON": '"depends_on:"',
    "_TAG": '"@tag:"',
    "_AT": '"@"',
    "_LBRACE": '"{"',
    "_RBRACE": '"}"',
    "_COMMA": '","',
    "HIGH": '"@high"',
    "MEDIUM": '"@medium"',
    "LOW": '"@low"',
    "DATE": "date (YYYY-MM-DD)",
    "IDENTIFIER": "identifier",
    "QUOTED": "quoted string",
}

END_OF_INPUT = "end of input"


def describe_terminals(names: Iterable[str]) -> List[str]:
    """Converte nomes de terminais Lark em descricoes amigaveis, ordenadas."""
    return sorted({TERMINAL_DESCRIPTIONS.get(name, name) for name in names})


@dataclass(frozen=True)
class TodoErrorHandler:
    filename: str | Path

    def describe(self, expected: List[str], found: str) -> str:
        found_repr = found if found == END_OF_INPUT else f"'{found}'"
        message = self._generic_message(expected, found_repr)

        if self._is_missing_task_comma(expected, found):
            message = f"Missing ',' after task before {found_repr}. Every task line ends with a comma"
        elif self._is_unknown_priority(expected, found):
            message = f"Unknown attribute {found_repr}. Priority must be @high, @medium or @low"
        elif self._is_unknown_keyword(expected, found):
            message = (
                f"Unknown attribute {found_repr}. "
                "Expected one of @tag:, due:, assign:, depends_on: or a priority"
            )
        elif self._is_malformed_date(expected):
            message = f"Invalid date {found_repr}. Dates use the form YYYY-MM-DD"
        elif self._is_unclosed_project(expected, found):
            message = "Unclosed project block: expected '}' before end of input"

        return message

    def format_context(self, source: str, location: SourceLocation, span: int = 1) -> str:
        line_text = self._get_line(source, location.line)
        if not line_text:
            return ""
        pointer = self._pointer_line(line_text, location.column, span)
        return f"    {line_text}\n    {pointer}"

    def _is_missing_task_comma(self, expected: List[str], found: str) -> bool:
        return '","' in expected and found.startswith(("todo:", "done:", "}"))

    def _is_unknown_priority(self, expected: List[str], found: str) -> bool:
        return '"@high"' in expected and found.startswith("@") and not found.endswith(":")

    def _is_unknown_keyword(self, expected: List[str], found: str) -> bool:
        return '"@tag:"' in expected and found.startswith("@") and found.endswith(":")

    def _is_malformed_date(self, expected: List[str]) -> bool:
        return expected == [TERMINAL_DESCRIPTIONS["DATE"]]

    def _is_unclosed_project(self, expected: List[str], found: str) -> bool:
        return found == END_OF_INPUT and '"}"' in expected

    def _get_line(self, source: str, line_number: int) -> str:
        lines = source.splitlines()
        if 1 <= line_number <= len(lines):
            return lines[line_number - 1]
        return ""

    def _pointer_line(self, line_text: str, column: int, span: int = 1) -> str:
        # Preserva tabs para o marcador alinhar com a linha original
        prefix = "".join(ch if ch == "\t" else " " for ch in line_text[: max(column, 1) - 1])
        if span <= 1:
            return prefix + "^"
        return prefix + "~" * span

    def _generic_message(self, expected: List[str], found_repr: str) -> str:
        if not expected:
            return f"Unexpected {found_repr}"
        return f"Unexpected {found_repr}. Expected: {', '.join(expected)}"
