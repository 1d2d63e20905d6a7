"""Project hierarchy resolution for tdreport.

Todoist returns projects as a flat list where each project points at its parent.
This module turns that list into a parent -> children map and guards every
traversal of it against malformed (cyclic) input.
"""

from typing import Dict, Iterable, List, Mapping, Optional

from tdreport.errors import HierarchyCycleError
from tdreport.models.constants import ROOT_PROJECT_ID
from tdreport.models.project import Project


def parent_key(project: Project) -> str:
    """Key under which a project is listed: its parent id, or the root sentinel."""
    return project.parent_id or ROOT_PROJECT_ID


def child_project_ids(projects: Iterable[Project]) -> Dict[str, List[str]]:
    """Map each parent id to the ids of its direct children.

    Children keep the order of the input. Sorting siblings by ``order`` is left
    to the display projection. A parent id that matches no project is still used
    as a key; nothing is validated here.

    Args:
        projects: Projects in API order (or the values of a project catalog)

    Returns:
        Mapping from parent id (``ROOT_PROJECT_ID`` for top-level) to child ids
    """
    children: Dict[str, List[str]] = {}
    for project in projects:
        children.setdefault(parent_key(project), []).append(project.id)
    return children


def find_cycle(projects: Mapping[str, Project]) -> Optional[List[str]]:
    """Find a cycle in the parent chains of a project catalog.

    Args:
        projects: Project catalog (id -> project)

    Returns:
        Ids forming the first cycle found (child first), or None if acyclic
    """
    finished = set()
    for start_id in projects:
        if start_id in finished:
            continue
        chain: List[str] = []
        position: Dict[str, int] = {}
        current: Optional[str] = start_id
        while current is not None and current in projects and current not in finished:
            if current in position:
                return chain[position[current]:]
            position[current] = len(chain)
            chain.append(current)
            current = projects[current].parent_id
        finished.update(chain)
    return None


def ensure_acyclic(projects: Mapping[str, Project]) -> None:
    """Raise HierarchyCycleError if any project is its own ancestor."""
    cycle = find_cycle(projects)
    if cycle:
        raise HierarchyCycleError(cycle)


def orphan_parent_ids(children: Mapping[str, List[str]], projects: Mapping[str, Project]) -> List[str]:
    """Parent keys that are neither the root sentinel nor a known project."""
    return [key for key in children if key != ROOT_PROJECT_ID and key not in projects]


def sorted_children(
    parent_id: str,
    children: Mapping[str, List[str]],
    projects: Mapping[str, Project],
) -> List[str]:
    """Direct children of a parent, by ascending project order (ties keep input order)."""
    child_ids = children.get(parent_id, [])
    return sorted(child_ids, key=lambda child_id: projects[child_id].order if child_id in projects else 0)


def format_tree(
    children: Mapping[str, List[str]],
    projects: Mapping[str, Project],
    indent: str = "  ",
) -> List[str]:
    """Render the project hierarchy as indented lines of project names."""
    ensure_acyclic(projects)
    lines: List[str] = []
    visited = set()

    def visit(project_id: str, depth: int) -> None:
        if project_id in visited:
            raise HierarchyCycleError([project_id])
        visited.add(project_id)
        project = projects.get(project_id)
        lines.append(f"{indent * depth}{project.name if project else project_id}")
        for child_id in sorted_children(project_id, children, projects):
            visit(child_id, depth + 1)

    for top_id in sorted_children(ROOT_PROJECT_ID, children, projects):
        visit(top_id, 0)
    for orphan_parent in orphan_parent_ids(children, projects):
        for top_id in sorted_children(orphan_parent, children, projects):
            visit(top_id, 0)
    return lines
