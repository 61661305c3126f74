"""
transformer.py - Conversao de parse tree para o modelo de dominio todoflow

Proposito:
    Transformar a arvore concreta do Lark em Project/Task imutaveis.
    Remove aspas, converte datas e aplica os atributos de cada tarefa.

Componentes principais:
    - TodoTransformer: Transformer principal do Lark
    - PriorityAttr/DueDateAttr/AssigneeAttr/DependsOnAttr/TagAttr: atributos tipados
    - build: ponto de entrada (arvore da regra file -> tupla de Project)

Dependencias criticas:
    - lark: Transformer, Token, v_args e VisitError
    - todoflow.ast.nodes: definicoes do modelo

Exemplo de uso:
    from todoflow.parser.transformer import build
    projects = build(parse_string(text), "sprint.todo")

Notas de implementacao:
    - Atributos de valor unico repetidos: o ultimo vence. Tags acumulam.
    - Datas sao validadas no calendario (InvalidDateError).
    - Nome de projeto e descricao de tarefa vazios geram EmptyValueError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from lark import Token, Transformer, Tree, v_args
from lark.exceptions import VisitError

from todoflow.ast.nodes import Priority, Project, SourceLocation, Task, TaskStatus
from todoflow.ast.results import EmptyValueError, InvalidDateError, TodoParseError


def _source_location(file_path: Path, meta: Any) -> SourceLocation:
    return SourceLocation(file=file_path, line=meta.line, column=meta.column)


def _strip_quotes(value: str) -> str:
    if value.startswith('"') and value.endswith('"') and len(value) >= 2:
        return value[1:-1]
    return value


def _ensure_non_empty(value: str, location: SourceLocation, field_name: str) -> str:
    if value == "":
        raise EmptyValueError(
            message=f"Empty value for {field_name}",
            location=location,
            field_name=field_name,
        )
    return value


@dataclass(frozen=True)
class PriorityAttr:
    value: Priority


@dataclass(frozen=True)
class DueDateAttr:
    value: date


@dataclass(frozen=True)
class AssigneeAttr:
    value: str


@dataclass(frozen=True)
class DependsOnAttr:
    value: str


@dataclass(frozen=True)
class TagAttr:
    value: str


Attribute = Union[PriorityAttr, DueDateAttr, AssigneeAttr, DependsOnAttr, TagAttr]


def apply_attributes(attributes: List[Attribute]) -> Dict[str, Any]:
    """Acumula atributos na ordem de origem em kwargs de Task."""
    fields: Dict[str, Any] = {}
    tags: List[str] = []
    for attribute in attributes:
        match attribute:
            case PriorityAttr(value):
                fields["priority"] = value
            case DueDateAttr(value):
                fields["due_date"] = value
            case AssigneeAttr(value):
                fields["assignee"] = value
            case DependsOnAttr(value):
                fields["depends_on"] = value
            case TagAttr(value):
                tags.append(value)
            case _:
                raise AssertionError(f"Unhandled attribute {attribute!r}")
    fields["tags"] = tuple(tags)
    return fields


class TodoTransformer(Transformer):
    def __init__(self, filename: str | Path = "<string>"):
        super().__init__()
        self.file_path = Path(filename)

    def file(self, items: List[Project]) -> Tuple[Project, ...]:
        return tuple(items)

    @v_args(meta=True)
    def project(self, meta: Any, items: List[Any]) -> Project:
        name, *tasks = items
        location = _source_location(self.file_path, meta)
        return Project(
            name=_ensure_non_empty(name, location, "project name"),
            tasks=tuple(tasks),
            location=location,
        )

    def task(self, items: List[Task]) -> Task:
        return items[0]

    @v_args(meta=True)
    def todo_task(self, meta: Any, items: List[Any]) -> Task:
        return self._build_task(TaskStatus.TODO, meta, items)

    @v_args(meta=True)
    def done_task(self, meta: Any, items: List[Any]) -> Task:
        return self._build_task(TaskStatus.DONE, meta, items)

    def attribute_list(self, items: List[Attribute]) -> List[Attribute]:
        return list(items)

    def attribute(self, items: List[Attribute]) -> Attribute:
        return items[0]

    def priority(self, items: List[Token]) -> PriorityAttr:
        return PriorityAttr(Priority.from_keyword(items[0].value))

    def due_date(self, items: List[date]) -> DueDateAttr:
        return DueDateAttr(items[0])

    @v_args(meta=True)
    def date(self, meta: Any, items: List[Token]) -> date:
        value = items[0].value
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise InvalidDateError(
                message=f"Invalid calendar date '{value}': {exc}",
                location=_source_location(self.file_path, meta),
                value=value,
            ) from exc

    def assignee(self, items: List[str]) -> AssigneeAttr:
        return AssigneeAttr(items[0])

    def identifier(self, items: List[Token]) -> str:
        return items[0].value

    def depends_on(self, items: List[str]) -> DependsOnAttr:
        return DependsOnAttr(items[0])

    def tag(self, items: List[str]) -> TagAttr:
        return TagAttr(items[0])

    def quoted(self, items: List[Token]) -> str:
        return _strip_quotes(items[0].value)

    def _build_task(self, status: TaskStatus, meta: Any, items: List[Any]) -> Task:
        description, attributes = items
        location = _source_location(self.file_path, meta)
        return Task(
            description=_ensure_non_empty(description, location, "task description"),
            status=status,
            location=location,
            **apply_attributes(attributes),
        )


def build(tree: Tree, filename: str | Path = "<string>") -> Tuple[Project, ...]:
    """Constroi a tupla de projetos a partir da arvore da regra `file`."""
    if tree.data != "file":
        raise ValueError(f"Expected a 'file' parse tree, got '{tree.data}'")
    try:
        return TodoTransformer(filename).transform(tree)
    except VisitError as exc:
        # Lark embrulha excecoes dos callbacks; erros de dominio sobem intactos
        if isinstance(exc.orig_exc, TodoParseError):
            raise exc.orig_exc
        raise
