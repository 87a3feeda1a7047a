from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.meeting import CalendarEvent
from app.schemas.weekly_report import InsightMetrics, InsightOutput, WeeklySummary
from app.services.plan import Plan


class AnalyzeRequest(BaseModel):
    """
    Body of POST /agent/analyze.
    """

    events: list[CalendarEvent] = Field(
        ...,
        description="Normalized events, already filtered to the desired window.",
    )
    role_by_person_email: dict[str, str] | None = Field(
        None,
        description="Optional attendee email -> role mapping.",
        examples=[{"a@acme.com": "manager"}],
    )
    days: float | None = Field(
        None,
        description="Window length label in days (defaults to 30).",
        examples=[30],
    )


class AnalyzeResponse(BaseModel):
    request_id: str = Field(
        ...,
        description="Unique identifier of this analysis.",
        examples=["0b6f4f4e-4a0e-4d43-9d59-0f0c2d8f8b8e"],
    )
    event_count: int = Field(
        ...,
        description="Number of events received (billable or not).",
        examples=[1],
    )
    summary: WeeklySummary
    insights: InsightOutput


class WeeklyReportRequest(BaseModel):
    """
    Body of POST /reports/weekly.
    """

    events: list[CalendarEvent] = Field(
        ...,
        description="The owner's events, already filtered to the desired window.",
    )
    days: float | None = Field(
        None,
        description="Requested window length in days; clamped to the plan's limit.",
        examples=[30],
    )


class WeeklyReportResponse(BaseModel):
    """
    Plan-aware spend report for the calling user.
    """

    plan: Plan = Field(..., examples=["pro"])
    days: int = Field(..., examples=[30])
    summary: WeeklySummary
    insight_text: str
    bullets: list[str]
    metrics: InsightMetrics | None = Field(
        None,
        description="Derived metrics (pro plan only).",
    )
