"""Report pipeline for tdreport.

fetch -> index -> resolve names -> filter -> sort -> project
"""

import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from tdreport.engine.catalog import attach_label_ids, labels_by_id, projects_by_id
from tdreport.engine.filtering import TaskFilter, build_filter, filter_tasks
from tdreport.engine.hierarchy import child_project_ids
from tdreport.engine.projection import group_by_project, project_tasks, project_tree
from tdreport.engine.ranking import sort_tasks
from tdreport.integrations.todoist import TaskQuery, TodoistClient
from tdreport.models.constants import DEFAULT_PALETTE, Palette
from tdreport.models.display import DisplayReport
from tdreport.models.project import Label, Project
from tdreport.models.task import Task

logger = logging.getLogger(__name__)


class ReportOptions(BaseModel):
    """What the user asked to see."""

    label: Optional[str] = Field(None, description="Only tasks with this label name")
    project: Optional[str] = Field(None, description="Only tasks in the project with this name")
    priorities: List[int] = Field(default_factory=list, description="Display priorities to keep (empty = all)")
    grouped: bool = Field(True, description="Group tasks into project sections, ordered by project order")
    tree: bool = Field(False, description="Nest project sections by project hierarchy")
    query: Optional[TaskQuery] = Field(None, description="Server-side task selection, passed through untouched")


def _options_filter(labels, projects, options: ReportOptions) -> TaskFilter:
    return build_filter(
        labels,
        projects,
        label_name=options.label,
        project_name=options.project,
        priorities=options.priorities,
    )

def organize(
    projects: Sequence[Project],
    labels: Sequence[Label],
    tasks: Sequence[Task],
    options: ReportOptions,
    palette: Palette = DEFAULT_PALETTE,
    criteria: Optional[TaskFilter] = None,
) -> DisplayReport:
    """Build a report from already fetched entities.

    Args:
        projects: All projects
        labels: All labels
        tasks: Active tasks
        options: Filter and layout options
        palette: Color lookups
        criteria: Already resolved filter; built from options when None

    Returns:
        The display model

    Raises:
        ResolutionError: If options.label or options.project names nothing
        HierarchyCycleError: If tree output is requested and projects form a cycle
    """
    project_catalog = projects_by_id(projects)
    label_catalog = labels_by_id(labels)
    if criteria is None:
        criteria = _options_filter(label_catalog, project_catalog, options)

    selected = filter_tasks(attach_label_ids(tasks, label_catalog), criteria)
    group = options.grouped or options.tree
    ordered = sort_tasks(selected, project_catalog if group else None)
    logger.info(f"Selected {len(ordered)} of {len(tasks)} tasks")

    display_tasks = project_tasks(ordered, project_catalog, label_catalog, palette)
    if options.tree:
        children = child_project_ids(project_catalog.values())
        sections = project_tree(display_tasks, project_catalog, children, palette)
    elif group:
        sections = group_by_project(display_tasks, project_catalog, palette)
    else:
        sections = []

    return DisplayReport(tasks=display_tasks, sections=sections, grouped=group, tree=options.tree)


def build_report(
    client: TodoistClient,
    options: ReportOptions,
    palette: Palette = DEFAULT_PALETTE,
) -> DisplayReport:
    """Fetch everything from Todoist and build the report.

    Label and project names are checked against the catalogs before tasks are
    fetched, so a typo fails fast.

    Raises:
        TodoistAPIError: If any fetch fails
        ResolutionError: If options.label or options.project names nothing
        HierarchyCycleError: If tree output is requested and projects form a cycle
    """
    projects = client.get_all_projects()
    labels = client.get_all_labels()
    logger.info(f"Fetched {len(projects)} projects and {len(labels)} labels")

    criteria = _options_filter(labels_by_id(labels), projects_by_id(projects), options)

    tasks = client.get_active_tasks(options.query)
    logger.info(f"Fetched {len(tasks)} active tasks")
    return organize(projects, labels, tasks, options, palette, criteria)
