"""Checklists attached to projects or tasks, and their items."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Checklist:
    """A checklist belonging to a project or a task."""

    title: str
    description: str = ""
    id: int = 0
    task_id: int | None = None
    project_id: int | None = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass
class ChecklistItem:
    """A single entry of a checklist."""

    checklist_id: int
    title: str
    description: str = ""
    completed: bool = False
    order: int = 0
    id: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


def new_checklist(title: str, description: str) -> Checklist:
    """Create a checklist whose creation and update times are the same instant."""
    now = datetime.now()
    return Checklist(
        title=title,
        description=description,
        created_at=now,
        updated_at=now,
    )


def new_checklist_item(
    checklist_id: int, title: str, description: str, order: int
) -> ChecklistItem:
    """Create an uncompleted checklist item."""
    now = datetime.now()
    return ChecklistItem(
        checklist_id=checklist_id,
        title=title,
        description=description,
        completed=False,
        order=order,
        created_at=now,
        updated_at=now,
    )