"""Display model for tdreport.

Renderer-neutral structures produced by the display projection. Renderers
(text, HTML, JSON) read these and never go back to the raw Todoist models.
"""

from typing import List

from pydantic import BaseModel, Field


class DisplayLabel(BaseModel):
    """A label as shown next to a task."""
    name: str
    color: str = ""


class DisplayTask(BaseModel):
    """A task with every reference resolved to display text."""

    id: str = Field(..., description="Task identifier")
    project_id: str = Field(..., description="Id of the task's project")
    project_name: str = Field("", description="Resolved project name (empty if unknown)")
    project_color: str = Field("", description="Hex color of the project (empty if unknown)")
    content: str = Field("", description="Task content")
    description: str = Field("", description="Task description")
    priority: int = Field(..., description="Display priority, 1 (urgent) .. 4 (normal)")
    priority_color: str = Field("", description="Hex color for the display priority")
    due: str = Field("", description="Due text (empty if the task has no due date)")
    labels: List[DisplayLabel] = Field(default_factory=list, description="Labels in label order")


class DisplayProject(BaseModel):
    """A report section: one project with its tasks and, in tree mode, its sub-projects."""

    id: str = Field(..., description="Project identifier")
    name: str = Field("", description="Project name")
    color: str = Field("", description="Hex color of the project")
    depth: int = Field(0, description="Nesting depth, 0 for top-level sections")
    tasks: List[DisplayTask] = Field(default_factory=list)
    children: List["DisplayProject"] = Field(default_factory=list)


class DisplayReport(BaseModel):
    """Everything a renderer needs to print a report."""

    tasks: List[DisplayTask] = Field(default_factory=list, description="All tasks, in report order")
    sections: List[DisplayProject] = Field(
        default_factory=list,
        description="Project sections (empty when the report is not grouped)",
    )
    grouped: bool = Field(True, description="Whether tasks are grouped into project sections")
    tree: bool = Field(False, description="Whether sections are nested by project hierarchy")


DisplayProject.model_rebuild()
