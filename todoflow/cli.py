"""
cli.py - Interface de linha de comando do todoflow

Proposito:
    Expor comandos de parsing, verificacao e creditos.
    Gerencia saida de diagnosticos e codigos de retorno.

Componentes principais:
    - main: grupo principal Click
    - parse/check/credits: comandos CLI

Dependencias criticas:
    - click: CLI
    - todoflow.api: pipeline principal
    - todoflow.exporters.text_export: renderizacao

Exemplo de uso:
    todoflow parse --file sprint.todo --tree

Notas de implementacao:
    - Qualquer TodoParseError (sintaxe, I/O, semantico) sai com codigo 1.
    - --verbose ativa logging DEBUG do pacote.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from todoflow.api import parse_projects
from todoflow.ast.results import TodoParseError
from todoflow.exporters.text_export import render, render_tree
from todoflow.parser.lexer import parse_file, parse_string, read_source

VERSION = "1.0.0"


HELP_EPILOG = (
    "Examples:\n"
    "  todoflow parse --file sprint.todo\n"
    "  todoflow parse --file sprint.todo --tree\n"
    "  todoflow check sprint.todo\n"
)


@click.group(invoke_without_command=True, epilog=HELP_EPILOG)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, version: bool, verbose: bool) -> None:
    """todoflow - Parser for .todo project files"""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    if version:
        click.echo(f"todoflow v{VERSION}")
        raise SystemExit(0)
    if ctx.invoked_subcommand is None:
        _print_help()


@main.command()
@click.option("--file", "-f", "file_path", required=True, type=click.Path(), help="Path to the .todo file")
@click.option("--tree", is_flag=True, help="Dump the raw parse tree instead of the projects")
def parse(file_path: str, tree: bool) -> None:
    """Parse a .todo file and display its projects."""
    try:
        content = read_source(Path(file_path))
        if tree:
            parse_tree = parse_string(content, file_path)
            click.echo("Syntax tree:\n")
            click.echo(render_tree(parse_tree, content))
        else:
            projects = parse_projects(content, file_path)
            click.echo(render(projects))
    except TodoParseError as exc:
        _print_error(exc)
        raise SystemExit(1)


@main.command()
@click.argument("file", type=click.Path())
def check(file: str) -> None:
    """Validate the syntax of a single .todo file."""
    try:
        parse_file(Path(file))
        click.echo(click.style("OK", fg="green"))
        raise SystemExit(0)
    except TodoParseError as exc:
        _print_error(exc)
        raise SystemExit(1)


@main.command()
def credits() -> None:
    """Show author information."""
    click.echo("Author: Tetiana Khaimyk")
    click.echo("Project: ToDo Parser")
    click.echo("Language: Python")


def _print_error(error: TodoParseError) -> None:
    label = {
        "syntax": "Syntax error",
        "io": "I/O error",
    }.get(error.kind, "Parsing error")
    lines = error.to_diagnostic().split("\n")
    click.echo(click.style(f"{label}: {lines[0]}", fg="red"), err=True)
    for line in lines[1:]:
        click.echo(click.style(line, fg="red"), err=True)


def _print_help() -> None:
    """Print help message with examples when no command is provided."""
    click.echo(click.style(f"todoflow v{VERSION}", fg="cyan", bold=True))
    click.echo(click.style("Parser for .todo project files", fg="cyan"))
    click.echo()
    click.echo(click.style("Usage:", fg="yellow", bold=True))
    click.echo("  todoflow [COMMAND] [OPTIONS]")
    click.echo()
    click.echo(click.style("Commands:", fg="yellow", bold=True))
    click.echo("  parse    Parse a .todo file and display its projects")
    click.echo("  check    Validate the syntax of a .todo file")
    click.echo("  credits  Show author information")
    click.echo()
    click.echo(click.style("Examples:", fg="yellow", bold=True))
    click.echo("  # Display projects and task summaries")
    click.echo("  todoflow parse --file sprint.todo")
    click.echo()
    click.echo("  # Dump the raw parse tree")
    click.echo("  todoflow parse --file sprint.todo --tree")
    click.echo()
    click.echo(click.style("For more information on a command:", fg="yellow", bold=True))
    click.echo("  todoflow [COMMAND] --help")
    click.echo()


if __name__ == "__main__":
    main()
