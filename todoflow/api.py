"""
api.py - API publica para parsing em memoria

Proposito:
    Expoe funcoes para parsear arquivos todoflow a partir de strings ou do
    disco, retornando projetos prontos e a parse tree crua.

Componentes principais:
    - load(): executa o pipeline completo a partir de uma string
    - load_file(): idem, lendo o arquivo do disco
    - parse_projects()/parse_projects_file(): variantes que lancam excecao
    - ParseResult/ParseStats: resultado com metodos de renderizacao

Dependencias criticas:
    - todoflow.parser: parse_string, read_source, build
    - todoflow.exporters: render, render_tree

Exemplo de uso:
    import todoflow
    result = todoflow.load('project "Demo" { todo: "Write docs", }')
    if result.success:
        print(result.render())

Notas de implementacao:
    - Um unico erro aborta o parse; result.projects fica vazio.
    - Cada chamada e independente; nao ha estado compartilhado mutavel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from lark import Tree

from todoflow.ast.nodes import Project
from todoflow.ast.results import TodoParseError
from todoflow.exporters.text_export import render, render_tree
from todoflow.parser.lexer import parse_string, read_source
from todoflow.parser.transformer import build

logger = logging.getLogger(__name__)


@dataclass
class ParseStats:
    """Estatisticas do parse."""

    project_count: int = 0
    task_count: int = 0
    active_count: int = 0
    completed_count: int = 0


@dataclass
class ParseResult:
    """
    Resultado do parse em memoria.

    Attributes:
        success: True se o parse completou sem erros
        projects: Projetos na ordem do arquivo (vazio se erro)
        error: Erro que abortou o parse (None se sucesso)
        tree: Parse tree crua (None se erro de sintaxe ou I/O)
        source: Texto original
        stats: Contagens de projetos e tarefas

    Example:
        >>> result = todoflow.load(text)
        >>> if not result.success:
        ...     print(result.error.to_diagnostic())
    """

    success: bool
    projects: Tuple[Project, ...] = ()
    error: Optional[TodoParseError] = None
    tree: Optional[Tree] = None
    source: str = ""
    stats: ParseStats = field(default_factory=ParseStats)

    def render(self) -> str:
        """Retorna o texto de exibicao dos projetos ("" se erro)."""
        if not self.success:
            return ""
        return render(self.projects)

    def render_tree(self) -> str:
        """Retorna o dump da parse tree crua ("" se nao houver arvore)."""
        if self.tree is None:
            return ""
        return render_tree(self.tree, self.source)

    def get_diagnostics(self) -> str:
        return self.error.to_diagnostic() if self.error else ""


def parse_projects(content: str, filename: str = "<string>") -> Tuple[Project, ...]:
    """Parseia e constroi os projetos, lancando TodoParseError em falha."""
    tree = parse_string(content, filename)
    return build(tree, filename)


def parse_projects_file(path: Path | str) -> Tuple[Project, ...]:
    """Le e parseia um arquivo, lancando TodoParseError (inclusive TodoIoError)."""
    file_path = Path(path)
    return parse_projects(read_source(file_path), str(file_path))


def load(content: str, filename: str = "<string>") -> ParseResult:
    """
    Executa o pipeline completo sem lancar excecao para entradas invalidas.

    Args:
        content: Texto do arquivo .todo
        filename: Nome usado nas localizacoes de erro

    Returns:
        ParseResult com projetos, arvore e estatisticas, ou com o erro
    """
    tree: Optional[Tree] = None
    try:
        tree = parse_string(content, filename)
        projects = build(tree, filename)
    except TodoParseError as exc:
        logger.debug("Parse of %s failed: %s", filename, exc.message)
        return ParseResult(success=False, error=exc, tree=tree, source=content)

    stats = _compute_stats(projects)
    logger.debug(
        "Parsed %s: %d projects, %d tasks",
        filename,
        stats.project_count,
        stats.task_count,
    )
    return ParseResult(
        success=True,
        projects=projects,
        tree=tree,
        source=content,
        stats=stats,
    )


def load_file(path: Path | str) -> ParseResult:
    """Le o arquivo e executa load(); falhas de leitura viram TodoIoError no resultado."""
    file_path = Path(path)
    try:
        content = read_source(file_path)
    except TodoParseError as exc:
        logger.debug("Could not read %s: %s", file_path, exc.message)
        return ParseResult(success=False, error=exc)
    return load(content, str(file_path))


def _compute_stats(projects: Tuple[Project, ...]) -> ParseStats:
    return ParseStats(
        project_count=len(projects),
        task_count=sum(len(project.tasks) for project in projects),
        active_count=sum(project.active_count for project in projects),
        completed_count=sum(project.completed_count for project in projects),
    )
