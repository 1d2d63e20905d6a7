"""Task data model for tdreport."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from tdreport.models._ids import normalize_id, normalize_optional_id


class Due(BaseModel):
    """Due date information attached to a task."""

    model_config = ConfigDict(frozen=True)

    date: Optional[str] = Field(None, description="Date in YYYY-MM-DD format, in the user's timezone")
    string: Optional[str] = Field(None, description="Human defined date in arbitrary format")
    datetime: Optional[str] = Field(None, description="RFC3339 date and time, only for tasks with a due time")
    timezone: Optional[str] = Field(None, description="User timezone, only for tasks with a due time")
    is_recurring: bool = Field(
        False,
        validation_alias=AliasChoices("is_recurring", "recurring"),
        description="Whether the task has a recurring due date",
    )


class Task(BaseModel):
    """An active Todoist task."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Task identifier")
    project_id: str = Field(..., description="Id of the project the task belongs to")
    section_id: Optional[str] = Field(None, description="Id of the section the task belongs to")
    parent_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("parent_id", "parent"),
        description="Id of the parent task; absent for top-level tasks",
    )
    content: str = Field("", description="Task content")
    description: str = Field("", description="Task description")
    priority: int = Field(1, ge=1, le=4, description="Raw priority from 1 (normal) to 4 (urgent)")
    order: int = Field(0, description="Position under the same parent or project (ascending)")
    label_ids: List[str] = Field(default_factory=list, description="Ids of labels attached to the task")
    labels: List[str] = Field(default_factory=list, description="Names of labels attached to the task (REST v2)")
    due: Optional[Due] = Field(None, description="Due date, if any")
    url: Optional[str] = Field(None, description="Link to the task in the Todoist web app")
    comment_count: int = Field(0, description="Number of task comments")
    created_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("created_at", "created"),
        description="Task creation timestamp",
    )

    @field_validator("id", "project_id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return normalize_id(value)

    @field_validator("section_id", "parent_id", mode="before")
    @classmethod
    def _coerce_optional_id(cls, value):
        return normalize_optional_id(value)

    @field_validator("label_ids", mode="before")
    @classmethod
    def _coerce_label_ids(cls, value):
        if value is None:
            return []
        return [normalize_id(label_id) for label_id in value]

    @field_validator("labels", mode="before")
    @classmethod
    def _none_as_no_labels(cls, value):
        return value or []

    @field_validator("content", "description", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or ""

    @property
    def due_date(self) -> Optional[str]:
        """Calendar due date, or None when the task has no dated due."""
        if self.due and self.due.date:
            return self.due.date
        return None
