"""Project and Label data models for tdreport."""

from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from tdreport.models._ids import normalize_id, normalize_optional_id

ColorKey = Union[int, str]


class Project(BaseModel):
    """A Todoist project as returned by the REST API."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Project identifier")
    name: str = Field(..., description="Project name")
    order: int = Field(0, description="Position among sibling projects (ascending)")
    color: Optional[ColorKey] = Field(None, description="Color name (v2) or numeric color id (v1)")
    parent_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("parent_id", "parent"),
        description="Parent project id; absent for top-level projects",
    )
    comment_count: int = Field(0, description="Number of project comments")
    is_favorite: bool = Field(False, description="Whether the project is a favorite")
    url: Optional[str] = Field(None, description="Link to the project in the Todoist web app")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return normalize_id(value)

    @field_validator("parent_id", mode="before")
    @classmethod
    def _coerce_parent_id(cls, value):
        return normalize_optional_id(value)


class Label(BaseModel):
    """A Todoist personal label."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Label identifier")
    name: str = Field(..., description="Label name")
    order: int = Field(0, description="Number used by clients to sort labels (ascending)")
    color: Optional[ColorKey] = Field(None, description="Color name (v2) or numeric color id (v1)")
    is_favorite: bool = Field(False, description="Whether the label is a favorite")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return normalize_id(value)
