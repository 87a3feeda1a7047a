from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.meeting import CalendarEvent


class PersonRoleCreate(BaseModel):
    """
    Payload for assigning a role to an attendee (POST /people).
    """

    person_email: str = Field(
        ...,
        description="Attendee email the role applies to.",
        examples=["dana@acme.com"],
    )
    role: str = Field(
        ...,
        description="Role name from the hourly rate table, or 'default'.",
        examples=["manager"],
    )


class PersonRoleRead(BaseModel):
    """
    Public representation of a stored role assignment.
    """

    model_config = ConfigDict(from_attributes=True)

    person_email: str = Field(..., examples=["dana@acme.com"])
    role: str = Field(..., examples=["manager"])
    updated_at: datetime | None = Field(
        None,
        description="Timestamp of the last change to this assignment.",
    )


class PersonRoleList(BaseModel):
    roles: list[PersonRoleRead] = Field(
        ...,
        description="Role assignments of the current owner, newest first.",
    )


class SaveResult(BaseModel):
    ok: bool = Field(True, examples=[True])


class DetectPeopleRequest(BaseModel):
    events: list[CalendarEvent] = Field(
        ...,
        description="Events whose attendees should be listed.",
    )


class DetectedPeople(BaseModel):
    """
    Attendees found in a set of events, with those still missing a role.
    """

    emails: list[str] = Field(
        ...,
        description="Distinct attendee emails in first-seen order.",
        examples=[["a@acme.com", "b@acme.com"]],
    )
    unassigned: list[str] = Field(
        ...,
        description="Subset of `emails` without a stored role.",
        examples=[["b@acme.com"]],
    )
