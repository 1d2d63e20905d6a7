"""Identity-indexed catalogs of projects and labels."""

import logging
from typing import Dict, Iterable, List, Mapping, TypeVar

from tdreport.models.project import Label, Project
from tdreport.models.task import Task

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", Project, Label)


def build_catalog(entities: Iterable[EntityT]) -> Dict[str, EntityT]:
    """Index entities by id.

    Duplicate ids are not an error: the last occurrence wins.

    Args:
        entities: Projects or labels, in API order

    Returns:
        Mapping from id to entity
    """
    catalog: Dict[str, EntityT] = {}
    for entity in entities:
        catalog[entity.id] = entity
    return catalog


def projects_by_id(projects: Iterable[Project]) -> Dict[str, Project]:
    return build_catalog(projects)


def labels_by_id(labels: Iterable[Label]) -> Dict[str, Label]:
    return build_catalog(labels)


def labels_in_order(labels: Mapping[str, Label]) -> List[Label]:
    """Labels sorted by their display order (ties keep catalog order)."""
    return sorted(labels.values(), key=lambda label: label.order)


def attach_label_ids(tasks: Iterable[Task], labels: Mapping[str, Label]) -> List[Task]:
    """Fill in label ids for tasks that only carry label names.

    REST v2 lists a task's labels by name. Names are matched exactly against the
    label catalog and, when several labels share a name, the last one in catalog
    order wins. Tasks that already carry label ids are returned unchanged.

    Args:
        tasks: Active tasks, in any order
        labels: Label catalog

    Returns:
        The tasks in input order, each with label_ids set
    """
    ids_by_name = {label.name: label.id for label in labels.values()}
    resolved = []
    for task in tasks:
        if task.labels and not task.label_ids:
            unknown = [name for name in task.labels if name not in ids_by_name]
            if unknown:
                logger.debug(f"Task {task.id} has labels missing from the catalog: {unknown}")
            label_ids = [ids_by_name[name] for name in task.labels if name in ids_by_name]
            task = task.model_copy(update={"label_ids": label_ids})
        resolved.append(task)
    return resolved
