"""
lexer.py - Carregamento e execucao do parser Lark

Proposito:
    Ler a gramatica todoflow e expor funcoes de parsing para arquivos e strings.
    Centraliza a criacao do parser Earley e a localizacao de erros de sintaxe.

Componentes principais:
    - load_grammar: leitura do arquivo todoflow.lark do pacote
    - create_parser: construcao do parser Lark (cacheado)
    - match: casa texto contra qualquer regra nomeada, retornando Result
    - parse_string/parse_file: parsing do arquivo completo com excecoes

Dependencias criticas:
    - lark: parser Earley e excecoes de sintaxe
    - importlib.resources: acesso a dados do pacote

Exemplo de uso:
    from todoflow.parser.lexer import parse_file
    tree = parse_file("sprint.todo")

Notas de implementacao:
    - A virgula que termina cada tarefa torna a linguagem nao LALR(1);
      por isso o parser e Earley com lexer dinamico.
    - Erros de fim de entrada do Earley nao trazem posicao; sao localizados
      no fim do conteudo, ignorando espacos e comentarios // finais.
    - O Earley dinamico e superlinear: ~1.4s para 500 tarefas com 5 atributos,
      ~23s para 5000. O lexer "basic" nao serve: IDENTIFIER e DATE colidem
      com as palavras-chave fora de contexto.
    - Linha/coluna sao calculadas uma unica vez via LineIndex (bisect).
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import ClassVar, List, Tuple

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput

from todoflow.ast.nodes import SourceLocation
from todoflow.ast.results import Err, Ok, Result, TodoIoError, TodoParseError
from todoflow.parser.error_handler import END_OF_INPUT, TodoErrorHandler, describe_terminals

logger = logging.getLogger(__name__)

START_RULES: Tuple[str, ...] = (
    "file",
    "project",
    "task",
    "todo_task",
    "done_task",
    "attribute_list",
    "attribute",
    "priority",
    "due_date",
    "date",
    "assignee",
    "identifier",
    "depends_on",
    "tag",
    "quoted",
)

_FOUND_PATTERN = re.compile(r'"[^"\n]*"?|[^\s,{}"]+|\S')


@dataclass
class TodoSyntaxError(TodoParseError):
    """
    Erro de sintaxe com localizacao precisa.

    Attributes:
        message: descricao curta do erro
        location: localizacao no arquivo fonte
        expected: descricoes dos tokens esperados
        found: texto encontrado na posicao do erro (ou "end of input")
        offset: deslocamento (em caracteres) do erro no texto
        context: linha de origem com marcador de posicao
    """

    expected: List[str] = field(default_factory=list)
    found: str = ""
    offset: int = 0
    context: str = ""
    KIND: ClassVar[str] = "syntax"

    @property
    def line(self) -> int:
        return self.location.line if self.location else 0

    @property
    def column(self) -> int:
        return self.location.column if self.location else 0

    def to_diagnostic(self) -> str:
        header = super().to_diagnostic()
        if self.context:
            return f"{header}\n{self.context}"
        return header


class LineIndex:
    """Tabela de inicios de linha para converter offset em linha/coluna."""

    def __init__(self, text: str):
        self._starts = [0] + [m.end() for m in re.finditer("\n", text)]

    def position(self, offset: int) -> Tuple[int, int]:
        line = bisect_right(self._starts, offset)
        return line, offset - self._starts[line - 1] + 1


@lru_cache(maxsize=1)
def load_grammar() -> str:
    """Carrega o arquivo todoflow.lark a partir do pacote todoflow."""
    grammar_path = resources.files("todoflow").joinpath("grammar/todoflow.lark")
    return grammar_path.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def create_parser() -> Lark:
    """Cria o parser Earley aceitando qualquer regra de START_RULES como inicio."""
    logger.debug("Compiling todoflow grammar (%d start rules)", len(START_RULES))
    return Lark(
        load_grammar(),
        parser="earley",
        lexer="dynamic",
        start=list(START_RULES),
        maybe_placeholders=False,
        propagate_positions=True,
    )


def match(rule: str, text: str, filename: str = "<string>") -> Result[Tree, TodoSyntaxError]:
    """Casa `text` inteiro contra a regra `rule`, sem lancar para entradas invalidas."""
    if rule not in START_RULES:
        raise ValueError(f"Unknown grammar rule '{rule}'")
    parser = create_parser()
    try:
        tree = parser.parse(text, start=rule)
    except UnexpectedInput as exc:
        error = _syntax_error(exc, text, filename)
        error.__cause__ = exc
        logger.debug("Rule '%s' failed: %s", rule, error.message)
        return Err(error)
    return Ok(tree)


def parse_string(content: str, filename: str = "<string>") -> Tree:
    """Parseia um arquivo todoflow completo a partir de uma string."""
    result = match("file", content, filename)
    if result.is_err():
        raise result.error
    return result.value


def read_source(path: Path | str) -> str:
    """Le o arquivo como UTF-8, embrulhando falhas de I/O em TodoIoError."""
    file_path = Path(path)
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TodoIoError(message=str(exc), path=str(file_path)) from exc


def parse_file(path: Path | str) -> Tree:
    """Parseia um arquivo todoflow a partir do disco."""
    file_path = Path(path)
    return parse_string(read_source(file_path), str(file_path))


def _syntax_error(exc: UnexpectedInput, text: str, filename: str) -> TodoSyntaxError:
    if isinstance(exc, UnexpectedEOF) or getattr(exc, "pos_in_stream", None) in (None, -1):
        offset = end_of_content(text)
        found = END_OF_INPUT
        raw_expected = getattr(exc, "expected", None) or []
    else:
        offset = exc.pos_in_stream
        found = _found_at(text, offset)
        if isinstance(exc, UnexpectedCharacters):
            raw_expected = exc.allowed or []
        else:
            raw_expected = getattr(exc, "expected", None) or []

    line, column = LineIndex(text).position(offset)
    location = SourceLocation(file=Path(filename), line=line, column=column)
    expected = describe_terminals(raw_expected)
    handler = TodoErrorHandler(filename)
    span = 1 if found == END_OF_INPUT else len(found)
    return TodoSyntaxError(
        message=handler.describe(expected, found),
        location=location,
        expected=expected,
        found=found,
        offset=offset,
        context=handler.format_context(text, location, span),
    )


def _found_at(text: str, offset: int) -> str:
    if offset >= len(text):
        return END_OF_INPUT
    found = _FOUND_PATTERN.match(text, offset)
    return found.group(0) if found else text[offset]


def end_of_content(text: str) -> int:
    """Offset logo apos o ultimo token, ignorando espacos e comentarios // finais."""
    end = len(text.rstrip())
    while end:
        line_start = text.rfind("\n", 0, end) + 1
        comment = _comment_start(text[line_start:end])
        if comment < 0:
            break
        end = len(text[: line_start + comment].rstrip())
    return end


def _comment_start(line: str) -> int:
    in_quote = False
    for index, char in enumerate(line):
        if char == '"':
            in_quote = not in_quote
        elif not in_quote and line.startswith("//", index):
            return index
    return -1
