"""
Project API schemas and the project entity.

A project row is one wide table: identity (name, owner), collaborators stored
as JSON text, and the project description questionnaire. Here the
questionnaire is its own value object so the wide row stays readable.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProjectDescription(BaseModel):
    """
    The project description questionnaire.

    Attribute names are the storage columns; the API speaks camelCase
    (`colleague_address1` <-> `colleagueAddress1`).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    project_title: str | None = None
    notes: str | None = None
    colleague_name: str | None = None
    colleague_phone: str | None = None
    colleague_email: str | None = None
    colleague_address1: str | None = None
    colleague_address2: str | None = None
    colleague_address3: str | None = None
    your_name: str | None = None
    your_phone: str | None = None
    your_email: str | None = None
    your_address1: str | None = None
    your_address2: str | None = None
    your_address3: str | None = None
    objectives: str | None = None
    timeline: str | None = None
    primary_audience: str | None = None
    secondary_audience: str | None = None
    call_action: str | None = None
    competition: str | None = None
    graphics: str | None = None
    photography: str | None = None
    multimedia: str | None = None
    other_info: str | None = None
    client_name: str | None = None
    client_comments: str | None = None
    approval_date: str | None = None
    approval_signature: str | None = None
    # Added to existing databases by the additive column patch.
    idea: str | None = None
    career_goals: str | None = None
    future_work: str | None = None
    deadlines: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> ProjectDescription:
        return cls.model_validate({name: row.get(name) for name in DESCRIPTION_COLUMNS})

    def to_columns(self) -> dict[str, str | None]:
        return self.model_dump(by_alias=False)

    def to_external(self) -> dict[str, str | None]:
        return self.model_dump(by_alias=True)


DESCRIPTION_COLUMNS: tuple[str, ...] = tuple(ProjectDescription.model_fields)

# Columns that older databases lack; created by ALTER TABLE at startup.
# `notes` is also in the CREATE TABLE statement, so it is expected to exist already.
PATCHED_COLUMNS: tuple[str, ...] = ("idea", "notes", "career_goals", "future_work", "deadlines")


class Project(BaseModel):
    id: int
    name: str | None = None
    owner_email: str | None = None
    colleagues: list[str] = Field(default_factory=list)
    description: ProjectDescription = Field(default_factory=ProjectDescription)


class CreateProjectRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = Field(default=None, max_length=500)
    owner_email: str | None = Field(default=None, max_length=320)
    # Either a list of emails or JSON text encoding one.
    colleagues: list[str] | str | None = None


class UpdateProjectRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = Field(default=None, max_length=500)
    colleagues: list[str] | str | None = None
