"""Display projection for tdreport.

Turns filtered, sorted tasks into the display model: every id resolved to a
name and a color, tasks grouped into project sections, and sections optionally
nested by project hierarchy. Nothing here does I/O.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from tdreport.engine.catalog import labels_in_order
from tdreport.engine.hierarchy import ensure_acyclic, orphan_parent_ids, sorted_children
from tdreport.errors import HierarchyCycleError
from tdreport.models.constants import DEFAULT_PALETTE, ROOT_PROJECT_ID, Palette, display_priority
from tdreport.models.display import DisplayLabel, DisplayProject, DisplayTask
from tdreport.models.project import Label, Project
from tdreport.models.task import Task

logger = logging.getLogger(__name__)


def project_task(
    task: Task,
    projects: Mapping[str, Project],
    labels: Mapping[str, Label],
    palette: Palette = DEFAULT_PALETTE,
    ordered_labels: Optional[Sequence[Label]] = None,
) -> DisplayTask:
    """Resolve a task into a display record.

    Labels are listed in label order, not in the order stored on the task.
    Label ids that are not in the catalog are left out. Pass ordered_labels
    (the catalog already sorted by labels_in_order) to skip sorting per task.
    """
    if ordered_labels is None:
        ordered_labels = labels_in_order(labels)
    project = projects.get(task.project_id)
    task_label_ids = set(task.label_ids)
    task_labels = [
        DisplayLabel(name=label.name, color=palette.color_hex(label.color))
        for label in ordered_labels
        if label.id in task_label_ids
    ]
    priority = display_priority(task.priority)
    due = ""
    if task.due:
        due = task.due.string or task.due.date or ""

    return DisplayTask(
        id=task.id,
        project_id=task.project_id,
        project_name=project.name if project else "",
        project_color=palette.color_hex(project.color) if project else "",
        content=task.content,
        description=task.description,
        priority=priority,
        priority_color=palette.priority_hex(priority),
        due=due,
        labels=task_labels,
    )


def project_tasks(
    tasks: Iterable[Task],
    projects: Mapping[str, Project],
    labels: Mapping[str, Label],
    palette: Palette = DEFAULT_PALETTE,
) -> List[DisplayTask]:
    ordered_labels = labels_in_order(labels)
    return [project_task(task, projects, labels, palette, ordered_labels) for task in tasks]


def _section(
    project_id: str,
    projects: Mapping[str, Project],
    palette: Palette,
    depth: int = 0,
) -> DisplayProject:
    project = projects.get(project_id)
    if project is None:
        return DisplayProject(id=project_id, name=project_id, depth=depth)
    return DisplayProject(
        id=project.id,
        name=project.name,
        color=palette.color_hex(project.color),
        depth=depth,
    )


def group_by_project(
    display_tasks: Iterable[DisplayTask],
    projects: Mapping[str, Project],
    palette: Palette = DEFAULT_PALETTE,
) -> List[DisplayProject]:
    """Group consecutive tasks of the same project into sections.

    Sections appear in the order they are first met in the (sorted) task list.
    """
    sections: List[DisplayProject] = []
    current: Optional[DisplayProject] = None
    for display_task in display_tasks:
        if current is None or current.id != display_task.project_id:
            current = _section(display_task.project_id, projects, palette)
            sections.append(current)
        current.tasks.append(display_task)
    return sections


def project_tree(
    display_tasks: Iterable[DisplayTask],
    projects: Mapping[str, Project],
    children: Mapping[str, List[str]],
    palette: Palette = DEFAULT_PALETTE,
) -> List[DisplayProject]:
    """Nest project sections by project hierarchy.

    Each project lists its own tasks before its sub-projects. Siblings appear in
    project order. Projects with no tasks anywhere in their subtree are left out.
    Projects under an unknown parent become extra top-level sections, and tasks
    of projects missing from the catalog get trailing sections of their own, so
    every task ends up somewhere.

    Args:
        display_tasks: Tasks in report order
        projects: Project catalog
        children: Parent -> children map from child_project_ids()
        palette: Color lookups

    Returns:
        Top-level sections

    Raises:
        HierarchyCycleError: If the project parent graph contains a cycle
    """
    ensure_acyclic(projects)

    tasks_by_project: Dict[str, List[DisplayTask]] = {}
    for display_task in display_tasks:
        tasks_by_project.setdefault(display_task.project_id, []).append(display_task)

    visited = set()

    def build(project_id: str, depth: int) -> Optional[DisplayProject]:
        if project_id in visited:
            raise HierarchyCycleError([project_id])
        visited.add(project_id)

        section = _section(project_id, projects, palette, depth)
        section.tasks.extend(tasks_by_project.get(project_id, []))
        for child_id in sorted_children(project_id, children, projects):
            child = build(child_id, depth + 1)
            if child is not None:
                section.children.append(child)
        if not section.tasks and not section.children:
            return None
        return section

    top_level_ids = list(sorted_children(ROOT_PROJECT_ID, children, projects))
    for orphan_parent in orphan_parent_ids(children, projects):
        logger.warning(f"Parent project {orphan_parent} not found; listing its children at top level")
        top_level_ids.extend(sorted_children(orphan_parent, children, projects))

    sections = []
    for project_id in top_level_ids:
        section = build(project_id, 0)
        if section is not None:
            sections.append(section)

    for project_id, unplaced in tasks_by_project.items():
        if project_id not in visited:
            logger.warning(f"Project {project_id} not found; listing its {len(unplaced)} tasks separately")
            section = _section(project_id, projects, palette)
            section.tasks.extend(unplaced)
            sections.append(section)

    return sections
