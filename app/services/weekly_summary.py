# app/services/weekly_summary.py
from __future__ import annotations

import math
from typing import Dict, Iterable, Mapping, Optional

import structlog

from app.core.money import round2
from app.core.rates import DEFAULT_RATE_TABLE, RoleRateTable
from app.schemas.meeting import CalendarEvent
from app.schemas.weekly_report import SpendByDay, WeeklySummary
from app.services.meeting_cost import CostCalculator, parse_instant

logger = structlog.get_logger(__name__)

DEFAULT_WINDOW_DAYS = 30


def normalize_days(days: float | int | None) -> int:
    """
    Window length used as summary metadata.

    Anything that is not a finite number >= 1 falls back to 30 days;
    otherwise the value is floored.
    """
    if days is None or isinstance(days, bool):
        return DEFAULT_WINDOW_DAYS
    try:
        value = float(days)
    except (TypeError, ValueError):
        return DEFAULT_WINDOW_DAYS
    if not math.isfinite(value) or value < 1:
        return DEFAULT_WINDOW_DAYS
    return int(math.floor(value))


def build_weekly_summary(
    events: Iterable[CalendarEvent],
    role_by_person_email: Optional[Mapping[str, str]] = None,
    days: float | int | None = None,
    rate_table: RoleRateTable = DEFAULT_RATE_TABLE,
) -> WeeklySummary:
    """
    Aggregate meeting costs for a collection of events into a WeeklySummary.

    Steps
    -----
    1) Cost every event with CostCalculator; skip events that are not billable.
    2) Bucket billable events by the UTC date of their start instant.
       Per-day cost and people-hours are rounded to 2 decimals after
       every addition.
    3) Window totals are accumulated unrounded and rounded once at the end.
    4) Unassigned attendee emails are collected in a set, so an email counts
       once no matter how many meetings it appears in.

    Events are not filtered by date: `days` is carried through as metadata.
    """
    calculator = CostCalculator(rate_table)

    total_meetings = 0
    total_people_hours = 0.0
    total_cost_usd = 0.0
    skipped = 0
    unassigned_emails: set[str] = set()
    spend_by_day: Dict[str, Dict[str, float]] = {}

    for event in events:
        cost = calculator.calculate(event, role_by_person_email)
        if cost is None:
            skipped += 1
            continue

        total_meetings += 1
        total_people_hours += cost.people_hours
        total_cost_usd += cost.cost_usd
        unassigned_emails.update(cost.unassigned_emails)

        # Billable events always have a parseable start.
        date_key = parse_instant(event.start).date().isoformat()  # type: ignore[union-attr]

        day = spend_by_day.get(date_key)
        if day is None:
            spend_by_day[date_key] = {
                "cost_usd": round2(cost.cost_usd),
                "people_hours": round2(cost.people_hours),
                "meetings": 1,
            }
        else:
            day["cost_usd"] = round2(day["cost_usd"] + cost.cost_usd)
            day["people_hours"] = round2(day["people_hours"] + cost.people_hours)
            day["meetings"] += 1

    if skipped:
        logger.debug("weekly_summary.skipped_events", skipped=skipped)

    rows = [
        SpendByDay(
            date=date_key,
            cost_usd=data["cost_usd"],
            people_hours=data["people_hours"],
            meetings=int(data["meetings"]),
        )
        for date_key, data in sorted(spend_by_day.items())
    ]

    return WeeklySummary(
        days=normalize_days(days),
        total_meetings=total_meetings,
        total_people_hours=round2(total_people_hours),
        total_cost_usd=round2(total_cost_usd),
        unassigned_people_count=len(unassigned_emails),
        spend_by_day=rows,
    )
