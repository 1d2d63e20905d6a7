"""Data models for tdreport."""

from tdreport.models.project import Project, Label
from tdreport.models.task import Task, Due
from tdreport.models.comment import Comment, Attachment
from tdreport.models.display import DisplayLabel, DisplayTask, DisplayProject, DisplayReport
from tdreport.models.constants import Palette, DEFAULT_PALETTE, display_priority

__all__ = [
    "Project",
    "Label",
    "Task",
    "Due",
    "Comment",
    "Attachment",
    "DisplayLabel",
    "DisplayTask",
    "DisplayProject",
    "DisplayReport",
    "Palette",
    "DEFAULT_PALETTE",
    "display_priority",
]
