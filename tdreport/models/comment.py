"""Comment data model for tdreport."""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from tdreport.models._ids import normalize_id, normalize_optional_id


class Attachment(BaseModel):
    """File or link attached to a comment."""

    model_config = ConfigDict(frozen=True)

    resource_type: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_url: Optional[str] = None
    file_size: Optional[int] = None
    upload_state: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None


class Comment(BaseModel):
    """A comment on a task or a project."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Comment identifier")
    task_id: Optional[str] = Field(None, description="Task id, for task comments")
    project_id: Optional[str] = Field(None, description="Project id, for project comments")
    posted_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("posted_at", "posted"),
        description="When the comment was added",
    )
    content: str = Field("", description="Comment content")
    attachment: Optional[Attachment] = Field(None, description="Attached file, if any")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return normalize_id(value)

    @field_validator("task_id", "project_id", mode="before")
    @classmethod
    def _coerce_optional_id(cls, value):
        return normalize_optional_id(value)
