"""
results.py - Tipos de resultado e taxonomia de erros do todoflow

Proposito:
    Definir Result/Ok/Err inspirados em Elm para fluxo de erros tipado.
    Unificar erros de sintaxe, de I/O e semanticos em um unico tipo base.

Componentes principais:
    - Result, Ok, Err: tipos genericos para sucesso/erro
    - TodoParseError: base de todos os erros reportaveis
    - TodoIoError, InvalidDateError, EmptyValueError: erros concretos

Dependencias criticas:
    - todoflow.ast.nodes: SourceLocation para localizacao precisa
    - dataclasses/typing: estrutura e tipagem

Exemplo de uso:
    from todoflow.ast.results import Ok, Err
    result = Ok(123)

Notas de implementacao:
    - Um unico erro aborta o parse inteiro; nao ha sucesso parcial.
    - TodoSyntaxError vive em todoflow.parser.lexer, junto do parser Lark.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Generic, Optional, TypeVar, Union

from todoflow.ast.nodes import SourceLocation

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Representa sucesso com valor."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return fn(self.value)


@dataclass(frozen=True)
class Err(Generic[E]):
    """Representa falha com erro tipado."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(f"unwrap() called on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        return self

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return self


Result = Union[Ok[T], Err[E]]


@dataclass
class TodoParseError(Exception):
    """
    Erro reportavel que aborta o parse.

    Attributes:
        message: descricao curta do erro
        location: localizacao no arquivo fonte (quando conhecida)
    """

    message: str
    location: Optional[SourceLocation] = None
    KIND: ClassVar[str] = "error"

    @property
    def kind(self) -> str:
        return self.KIND

    def to_diagnostic(self) -> str:
        if self.location is not None:
            return f"{self.location}: {self.message}"
        return self.message

    def __str__(self) -> str:
        return self.to_diagnostic()


@dataclass
class TodoIoError(TodoParseError):
    """Falha ao ler o arquivo de entrada, propagada sem reinterpretacao."""

    path: str = ""
    KIND: ClassVar[str] = "io"

    def to_diagnostic(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


@dataclass
class InvalidDateError(TodoParseError):
    """Data com formato valido mas inexistente no calendario (ex.: 2025-02-30)."""

    value: str = ""
    KIND: ClassVar[str] = "invalid_date"


@dataclass
class EmptyValueError(TodoParseError):
    """Nome de projeto ou descricao de tarefa vazios ("")."""

    field_name: str = ""
    KIND: ClassVar[str] = "empty_value"
