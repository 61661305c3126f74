"""
text_export.py - Renderizacao textual de projetos todoflow

Proposito:
    Gerar o texto de exibicao canonico dos projetos e o dump de depuracao
    da parse tree crua (modo --tree do CLI).

Componentes principais:
    - render: renderiza uma sequencia de projetos
    - render_project: bloco de um projeto com resumo de totais
    - render_tree: dump da arvore Lark com regra e intervalo casado

Dependencias criticas:
    - lark: Tree/Token para o dump da arvore
    - todoflow.ast.nodes: Project, Task

Exemplo de uso:
    from todoflow.exporters.text_export import render
    print(render(projects))

Notas de implementacao:
    - Atributos sempre na ordem Priority, Due, Depends on, Assigned to, Tags,
      independente da ordem no arquivo.
    - O resumo "Total" e calculado por projeto.
"""

from __future__ import annotations

from typing import Iterable, List

from lark import Token, Tree

from todoflow.ast.nodes import Project, Task

SEPARATOR = "-" * 40
TASK_INDENT = "  "
ATTRIBUTE_INDENT = "      "
TREE_INDENT = "  "
SNIPPET_WIDTH = 40


def render(projects: Iterable[Project]) -> str:
    """Renderiza todos os projetos, separados por linha em branco."""
    return "\n\n".join(render_project(project) for project in projects)


def render_project(project: Project) -> str:
    lines: List[str] = [f"Project: {project.name}"]
    for task in project.tasks:
        lines.extend(_task_lines(task))
    lines.append(SEPARATOR)
    lines.append(_summary_line(project))
    return "\n".join(lines)


def _task_lines(task: Task) -> List[str]:
    marker = "[DONE]" if task.is_done else "[TODO]"
    lines = [f"{TASK_INDENT}{marker} {task.description}"]

    attributes: List[str] = []
    if task.priority is not None:
        attributes.append(f"Priority: {task.priority.value}")
    if task.due_date is not None:
        attributes.append(f"Due: {task.due_date.isoformat()}")
    if task.depends_on is not None:
        attributes.append(f"Depends on: {task.depends_on}")
    if task.assignee is not None:
        attributes.append(f"Assigned to: @{task.assignee}")
    if task.tags:
        label = "Tag" if len(task.tags) == 1 else "Tags"
        attributes.append(f"{label}: {', '.join(task.tags)}")

    lines.extend(f"{ATTRIBUTE_INDENT}{attribute}" for attribute in attributes)
    return lines


def _summary_line(project: Project) -> str:
    total = len(project.tasks)
    noun = "task" if total == 1 else "tasks"
    return (
        f"Total: {total} {noun} "
        f"({project.active_count} active, {project.completed_count} completed)"
    )


def render_tree(tree: Tree, text: str) -> str:
    """
    Renderiza a parse tree crua, uma linha por no.

    Regras aparecem como `nome [inicio..fim]: "trecho"` e tokens mantidos
    como `TIPO [inicio..fim]: "valor"`, indentados pela profundidade.
    Regras vazias (ex.: attribute_list sem atributos) nao tem intervalo.
    """
    lines: List[str] = []
    _walk(tree, text, 0, lines)
    return "\n".join(lines)


def _walk(node: Tree | Token, text: str, depth: int, lines: List[str]) -> None:
    indent = TREE_INDENT * depth
    if isinstance(node, Token):
        end = node.start_pos + len(node.value)
        lines.append(f"{indent}{node.type} [{node.start_pos}..{end}]: {_snippet(node.value)}")
        return

    if node.meta.empty:
        lines.append(f"{indent}{node.data}")
    else:
        start, end = node.meta.start_pos, node.meta.end_pos
        lines.append(f"{indent}{node.data} [{start}..{end}]: {_snippet(text[start:end])}")
    for child in node.children:
        _walk(child, text, depth + 1, lines)


def _snippet(value: str) -> str:
    flat = " ".join(value.split())
    if len(flat) > SNIPPET_WIDTH:
        flat = flat[: SNIPPET_WIDTH - 3] + "..."
    return f'"{flat}"'
