from datetime import datetime
from typing import Union

from pydantic import BaseModel, Field


class CalendarEvent(BaseModel):
    """
    A single normalized calendar event, as supplied by the event source.

    `start` and `end` are kept as given (datetime or string) and parsed by the
    cost calculator, so that unparsable timestamps can be skipped instead of
    failing the whole request.
    """

    start: Union[datetime, str] = Field(
        ...,
        description="Start instant of the event (ISO-8601 string or datetime).",
        examples=["2026-02-01T10:00:00Z"],
    )
    end: Union[datetime, str] = Field(
        ...,
        description="End instant of the event (ISO-8601 string or datetime).",
        examples=["2026-02-01T11:00:00Z"],
    )
    attendees: list[str] = Field(
        default_factory=list,
        description=(
            "Attendee emails. Order is irrelevant and duplicates are billed "
            "as separate attendees."
        ),
        examples=[["a@acme.com", "b@acme.com"]],
    )


class MeetingCostResult(BaseModel):
    """
    Cost breakdown of one billable event.
    """

    duration_hours: float = Field(
        ...,
        description="Event duration in hours (unrounded).",
        examples=[1.0],
    )
    attendee_count: int = Field(
        ...,
        description=(
            "Number of billed attendees. Always at least 1: an event without "
            "attendees is billed as one default-rate person."
        ),
        examples=[2],
    )
    people_hours: float = Field(
        ...,
        description="duration_hours * attendee_count (unrounded).",
        examples=[2.0],
    )
    cost_usd: float = Field(
        ...,
        description="Estimated cost of the event in USD, rounded to 2 decimals.",
        examples=[140.0],
    )
    unassigned_emails: set[str] = Field(
        default_factory=set,
        description="Attendee emails without a role assignment.",
    )
