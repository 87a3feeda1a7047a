from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping, Optional

from app.core.money import round2
from app.core.rates import DEFAULT_RATE_TABLE, RoleRateTable
from app.schemas.meeting import CalendarEvent, MeetingCostResult


def parse_instant(value: datetime | str | None) -> Optional[datetime]:
    """
    Parse an ISO-8601 datetime string (or datetime) and normalize to UTC.

    Naive values are taken as UTC. Returns None if parsing fails or the
    instant falls outside the representable UTC range.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return None


class CostCalculator:
    """
    Estimates the cost of a single calendar event.

    Rules
    -----
    1) Unparsable start/end, or end <= start  => not billable (None)
    2) Attendees are trimmed; empty entries are dropped
    3) No attendees left                      => billed as 1 default-rate person
    4) Attendee without a role assignment     => default rate + flagged unassigned
    5) cost = duration_hours * sum(hourly rates), rounded to 2 decimals

    The rate table is injected; the calculator never reads ambient settings.
    """

    def __init__(self, rate_table: RoleRateTable = DEFAULT_RATE_TABLE) -> None:
        self.rate_table = rate_table

    def calculate(
        self,
        event: CalendarEvent,
        role_by_person_email: Optional[Mapping[str, str]] = None,
    ) -> Optional[MeetingCostResult]:
        start = parse_instant(event.start)
        end = parse_instant(event.end)
        if start is None or end is None or end <= start:
            return None

        duration_hours = (end - start).total_seconds() / 3600.0

        attendee_emails = [
            email.strip()
            for email in (event.attendees or [])
            if isinstance(email, str) and email.strip()
        ]

        roles = role_by_person_email or {}
        unassigned: set[str] = set()
        total_hourly_rate = 0.0

        if attendee_emails:
            for email in attendee_emails:
                role = roles.get(email)
                if not role:
                    unassigned.add(email)
                total_hourly_rate += self.rate_table.rate_for(role)
            attendee_count = len(attendee_emails)
        else:
            # A meeting always costs at least one person's time.
            total_hourly_rate = self.rate_table.default_rate
            attendee_count = 1

        return MeetingCostResult(
            duration_hours=duration_hours,
            attendee_count=attendee_count,
            people_hours=duration_hours * attendee_count,
            cost_usd=round2(duration_hours * total_hourly_rate),
            unassigned_emails=unassigned,
        )


def calculate_meeting_cost(
    event: CalendarEvent,
    role_by_person_email: Optional[Mapping[str, str]] = None,
    rate_table: RoleRateTable = DEFAULT_RATE_TABLE,
) -> Optional[MeetingCostResult]:
    """
    Convenience wrapper around CostCalculator for one-off calculations.
    """
    return CostCalculator(rate_table).calculate(event, role_by_person_email)
