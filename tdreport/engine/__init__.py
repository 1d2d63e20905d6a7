"""Task organization engine for tdreport."""

from tdreport.engine.catalog import build_catalog, projects_by_id, labels_by_id, attach_label_ids
from tdreport.engine.hierarchy import child_project_ids, find_cycle, ensure_acyclic
from tdreport.engine.filtering import TaskFilter, matches_filter, filter_tasks, build_filter, parse_priorities
from tdreport.engine.ranking import sort_tasks, task_sort_key
from tdreport.engine.projection import project_task, group_by_project, project_tree

__all__ = [
    "build_catalog",
    "projects_by_id",
    "labels_by_id",
    "attach_label_ids",
    "child_project_ids",
    "find_cycle",
    "ensure_acyclic",
    "TaskFilter",
    "matches_filter",
    "filter_tasks",
    "build_filter",
    "parse_priorities",
    "sort_tasks",
    "task_sort_key",
    "project_task",
    "group_by_project",
    "project_tree",
]
