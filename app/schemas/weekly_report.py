from pydantic import BaseModel, ConfigDict, Field


class SpendByDay(BaseModel):
    """
    Accumulated meeting spend for a single UTC calendar day.
    """

    model_config = ConfigDict(frozen=True)

    date: str = Field(
        ...,
        description="UTC date of the meetings' start instants (YYYY-MM-DD).",
        examples=["2026-02-02"],
    )
    cost_usd: float = Field(
        ...,
        description="Meeting cost for the day, rounded to 2 decimals after every addition.",
        examples=[150.5],
    )
    people_hours: float = Field(
        ...,
        description="People-hours spent in meetings on the day.",
        examples=[3.5],
    )
    meetings: int = Field(
        ...,
        description="Number of billable meetings that started on the day.",
        examples=[2],
    )


class WeeklySummary(BaseModel):
    """
    Meeting spend aggregated over a reporting window.
    """

    model_config = ConfigDict(frozen=True)

    days: int = Field(
        ...,
        description=(
            "Length of the reporting window in days. This is a label only; "
            "events are not filtered by it."
        ),
        examples=[30],
    )
    total_meetings: int = Field(
        ...,
        description="Number of billable meetings in the window.",
        examples=[12],
    )
    total_people_hours: float = Field(
        ...,
        description="Total people-hours across all meetings, rounded to 2 decimals.",
        examples=[27.5],
    )
    total_cost_usd: float = Field(
        ...,
        description="Total meeting cost in USD, rounded to 2 decimals.",
        examples=[1925.0],
    )
    unassigned_people_count: int = Field(
        ...,
        description="Number of distinct attendee emails without a role assignment.",
        examples=[3],
    )
    spend_by_day: list[SpendByDay] = Field(
        ...,
        description="One row per day with meetings, sorted ascending by date.",
    )


class InsightMetrics(BaseModel):
    """
    Secondary metrics derived from a WeeklySummary.
    """

    avg_cost_per_meeting: float = Field(0.0, examples=[160.42])
    avg_people_hours_per_meeting: float = Field(0.0, examples=[2.29])
    cost_per_people_hour: float = Field(0.0, examples=[70.0])
    work_days_lost: float = Field(
        0.0,
        description="People-hours expressed as 8-hour workdays.",
        examples=[3.44],
    )
    peak_day_date: str | None = Field(
        None,
        description="Date with the highest meeting cost, if any day had spend.",
        examples=["2026-02-03"],
    )
    peak_day_cost_usd: float = Field(0.0, examples=[420.0])
    peak_day_meetings: int = Field(0, examples=[4])


class InsightOutput(BaseModel):
    """
    Executive-style narrative and observations for one WeeklySummary.
    """

    insight_text: str = Field(
        ...,
        description="Short narrative describing the window's meeting spend.",
    )
    bullets: list[str] = Field(
        ...,
        description="Up to five observations in fixed priority order.",
    )
    metrics: InsightMetrics = Field(
        ...,
        description="Derived metrics backing the narrative.",
    )
