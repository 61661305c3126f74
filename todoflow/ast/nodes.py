"""
nodes.py - Modelo de dominio tipado do todoflow

Proposito:
    Definir as entidades produzidas pelo parser: projetos, tarefas e seus
    atributos opcionais. Todas as entidades sao imutaveis apos construidas.

Componentes principais:
    - Project, Task: nos do modelo de dominio
    - TaskStatus, Priority: enums de status e prioridade
    - SourceLocation: localizacao no arquivo fonte

Dependencias criticas:
    - dataclasses: estruturacao dos nos (frozen)
    - enum: status e prioridade
    - datetime: datas de entrega

Exemplo de uso:
    from todoflow.ast.nodes import Project, Task, TaskStatus
    task = Task(description="Write parser", status=TaskStatus.TODO)
    project = Project(name="Parser", tasks=(task,))

Notas de implementacao:
    - Colecoes sao tuplas para garantir imutabilidade.
    - Todos os nos expõem to_dict() para consumo programatico.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


class TaskStatus(Enum):
    TODO = "TODO"
    DONE = "DONE"


class Priority(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def from_keyword(cls, keyword: str) -> "Priority":
        """Converte '@high' / '@medium' / '@low' no enum correspondente."""
        mapping = {
            "@high": cls.HIGH,
            "@medium": cls.MEDIUM,
            "@low": cls.LOW,
        }
        return mapping[keyword]


@dataclass(frozen=True)
class SourceLocation:
    file: Path
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": str(self.file),
            "line": self.line,
            "column": self.column,
        }


@dataclass(frozen=True)
class Task:
    description: str
    status: TaskStatus
    priority: Optional[Priority] = None
    due_date: Optional[date] = None
    assignee: Optional[str] = None
    depends_on: Optional[str] = None
    tags: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value if self.priority else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "assignee": self.assignee,
            "depends_on": self.depends_on,
            "tags": list(self.tags),
            "location": self.location.to_dict() if self.location else None,
        }


@dataclass(frozen=True)
class Project:
    name: str
    tasks: Tuple[Task, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)

    @property
    def active_count(self) -> int:
        return sum(1 for task in self.tasks if not task.is_done)

    @property
    def completed_count(self) -> int:
        return sum(1 for task in self.tasks if task.is_done)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "tasks": [task.to_dict() for task in self.tasks],
            "location": self.location.to_dict() if self.location else None,
        }
