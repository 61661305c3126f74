"""
todoflow: Parser para arquivos de projetos e tarefas .todo

Transforma texto na linguagem .todo em projetos e tarefas tipados e
imutaveis, e os renderiza como texto legivel.

API em Memoria (todoflow.load):
    >>> import todoflow
    >>> result = todoflow.load('project "Demo" { todo: "Write docs", @high, }')
    >>> if result.success:
    ...     print(result.render())

Pipeline explicito:
    >>> from todoflow.parser.lexer import parse_string
    >>> from todoflow.parser.transformer import build
    >>> projects = build(parse_string(text))
"""

# API em memoria
from todoflow.api import (
    load,
    load_file,
    parse_projects,
    parse_projects_file,
    ParseResult,
    ParseStats,
)

# Modelo de dominio
from todoflow.ast.nodes import (
    Priority,
    Project,
    SourceLocation,
    Task,
    TaskStatus,
)

# Resultados e erros
from todoflow.ast.results import (
    Ok,
    Err,
    TodoParseError,
    TodoIoError,
    InvalidDateError,
    EmptyValueError,
)
from todoflow.parser.lexer import TodoSyntaxError, match

# Renderizacao
from todoflow.exporters.text_export import render, render_tree

__version__ = "1.0.0"
__all__ = [
    # API em memoria
    "load",
    "load_file",
    "parse_projects",
    "parse_projects_file",
    "ParseResult",
    "ParseStats",
    # Modelo
    "Priority",
    "Project",
    "SourceLocation",
    "Task",
    "TaskStatus",
    # Resultados e erros
    "Ok",
    "Err",
    "TodoParseError",
    "TodoIoError",
    "InvalidDateError",
    "EmptyValueError",
    "TodoSyntaxError",
    "match",
    # Renderizacao
    "render",
    "render_tree",
]
