"""Task filtering for tdreport.

A task passes a filter when it satisfies every enabled criterion. Label and
project criteria are given by name on the command line; they are resolved to ids
against the catalogs first, and an unknown name is an error rather than an
empty report.
"""

import logging
from typing import FrozenSet, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from tdreport.errors import ResolutionError
from tdreport.models.constants import DISPLAY_PRIORITIES, display_priority
from tdreport.models.project import Label, Project
from tdreport.models.task import Task

logger = logging.getLogger(__name__)


class TaskFilter(BaseModel):
    """Structured filter criteria. Unset criteria always pass."""

    model_config = ConfigDict(frozen=True)

    label_id: Optional[str] = Field(None, description="Keep tasks carrying this label")
    project_id: Optional[str] = Field(None, description="Keep tasks in this project")
    priorities: FrozenSet[int] = Field(
        default_factory=frozenset,
        description="Keep tasks whose display priority is in this set",
    )


def _enabled(criterion_id: Optional[str]) -> bool:
    return criterion_id not in (None, "", "0")


def matches_filter(task: Task, criteria: TaskFilter) -> bool:
    """Check whether a task satisfies every enabled criterion."""
    if _enabled(criteria.label_id) and criteria.label_id not in task.label_ids:
        return False
    if _enabled(criteria.project_id) and criteria.project_id != task.project_id:
        return False
    if criteria.priorities and display_priority(task.priority) not in criteria.priorities:
        return False
    return True


def filter_tasks(tasks: Iterable[Task], criteria: TaskFilter) -> List[Task]:
    """Keep the tasks that pass the filter, in their original order."""
    return [task for task in tasks if matches_filter(task, criteria)]


def _resolve_name(kind: str, name: str, catalog: Mapping[str, BaseModel]) -> str:
    resolved = None
    for entity_id, entity in catalog.items():
        if entity.name == name:
            resolved = entity_id
    if resolved is None:
        raise ResolutionError(kind, name)
    logger.debug(f"Resolved {kind} {name!r} to id {resolved}")
    return resolved


def resolve_label_id(name: str, labels: Mapping[str, Label]) -> str:
    """Find the id of the label with this exact name.

    Raises:
        ResolutionError: If no label has this name
    """
    return _resolve_name("label", name, labels)


def resolve_project_id(name: str, projects: Mapping[str, Project]) -> str:
    """Find the id of the project with this exact name.

    Raises:
        ResolutionError: If no project has this name
    """
    return _resolve_name("project", name, projects)


def parse_priorities(text: str) -> FrozenSet[int]:
    """Parse a comma-separated list of display priorities such as "1,2".

    Raises:
        ValueError: If a value is not an integer between 1 and 4
    """
    priorities = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            value = int(part)
        except ValueError:
            raise ValueError(f"Invalid priority {part!r}: expected a number from 1 to 4") from None
        if value not in DISPLAY_PRIORITIES:
            raise ValueError(f"Invalid priority {value}: expected a number from 1 to 4")
        priorities.add(value)
    return frozenset(priorities)


def build_filter(
    labels: Mapping[str, Label],
    projects: Mapping[str, Project],
    label_name: Optional[str] = None,
    project_name: Optional[str] = None,
    priorities: Optional[Iterable[int]] = None,
) -> TaskFilter:
    """Build a TaskFilter from user-facing criteria.

    Args:
        labels: Label catalog
        projects: Project catalog
        label_name: Label name to filter on (None or "" to disable)
        project_name: Project name to filter on (None or "" to disable)
        priorities: Display priorities to keep (None or empty to disable)

    Raises:
        ResolutionError: If label_name or project_name does not exist
        ValueError: If a priority is outside 1..4
    """
    label_id = resolve_label_id(label_name, labels) if label_name else None
    project_id = resolve_project_id(project_name, projects) if project_name else None
    wanted = frozenset(priorities or ())
    invalid = wanted - DISPLAY_PRIORITIES
    if invalid:
        raise ValueError(f"Invalid priorities {sorted(invalid)}: expected numbers from 1 to 4")
    return TaskFilter(label_id=label_id, project_id=project_id, priorities=wanted)
