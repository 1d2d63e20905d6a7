"""Task ordering for tdreport.

Sorts tasks by project order, then urgency, then due date, then task order.
This produces a deterministic ordering for report output.
"""

import sys
from typing import Iterable, List, Mapping, Optional

from tdreport.models.constants import MISSING_DUE_DATE
from tdreport.models.project import Project
from tdreport.models.task import Task

# Tasks whose project is not in the catalog go after every known project
UNKNOWN_PROJECT_ORDER = sys.maxsize


def sort_tasks(tasks: Iterable[Task], projects: Optional[Mapping[str, Project]] = None) -> List[Task]:
    """Sort tasks into report order.

    Tasks are sorted:
    1. By the order of their project (only when ``projects`` is given)
    2. By urgency, most urgent first (Todoist priority 4 = P1 first)
    3. By due date, earliest first; tasks without a due date go last
    4. By their order within the project

    The sort is stable: tasks equal on every key keep their input order, and
    sorting an already sorted list returns it unchanged.

    Args:
        tasks: Tasks to sort
        projects: Project catalog; pass it to group tasks by project order

    Returns:
        New list of tasks in report order
    """
    return sorted(tasks, key=lambda task: task_sort_key(task, projects))


def task_sort_key(task: Task, projects: Optional[Mapping[str, Project]] = None) -> tuple:
    """Get the sort key for a task.

    Args:
        task: Task to get sort key for
        projects: Project catalog, or None when not grouping by project

    Returns:
        Tuple for sorting
    """
    key = ()
    if projects is not None:
        key += (_project_sort_key(task, projects),)
    return key + (_priority_sort_key(task), _due_sort_key(task), task.order)


def _project_sort_key(task: Task, projects: Mapping[str, Project]) -> int:
    project = projects.get(task.project_id)
    if project is None:
        return UNKNOWN_PROJECT_ORDER
    return project.order


def _priority_sort_key(task: Task) -> int:
    # Raw priority 4 is the most urgent, so negate for ascending sort
    return -task.priority


def _due_sort_key(task: Task) -> str:
    # YYYY-MM-DD strings compare in calendar order
    return task.due_date or MISSING_DUE_DATE
