from datetime import datetime, timedelta, timezone

import pytest

from app.core.rates import DEFAULT_RATE_TABLE, RoleRateTable
from app.schemas.meeting import CalendarEvent, MeetingCostResult
from app.services.meeting_cost import CostCalculator, calculate_meeting_cost, parse_instant


def _event(
    start: str = "2026-02-02T10:00:00Z",
    end: str = "2026-02-02T11:00:00Z",
    attendees: list[str] | None = None,
) -> CalendarEvent:
    return CalendarEvent(start=start, end=end, attendees=attendees or [])


def test_two_unassigned_attendees_billed_at_default_rate():
    """
    One hour, two attendees, no role mapping: both billed at the default
    engineer rate (70/h) and both flagged as unassigned.
    """
    result = calculate_meeting_cost(_event(attendees=["a@x.com", "b@x.com"]))

    assert isinstance(result, MeetingCostResult)
    assert result.duration_hours == 1.0
    assert result.attendee_count == 2
    assert result.people_hours == 2.0
    assert result.cost_usd == 140.00
    assert result.unassigned_emails == {"a@x.com", "b@x.com"}


def test_event_without_attendees_bills_one_person():
    result = calculate_meeting_cost(
        _event(start="2026-02-02T09:00:00Z", end="2026-02-02T09:30:00Z")
    )

    assert result is not None
    assert result.attendee_count == 1
    assert result.duration_hours == 0.5
    assert result.cost_usd == 35.00
    assert result.people_hours == 0.5
    # Nobody to flag when there are no recorded attendees.
    assert result.unassigned_emails == set()


def test_blank_attendees_are_dropped_before_billing():
    result = calculate_meeting_cost(_event(attendees=["  ", "", "  a@x.com  "]))

    assert result is not None
    assert result.attendee_count == 1
    assert result.unassigned_emails == {"a@x.com"}


def test_only_blank_attendees_still_bills_one_person():
    result = calculate_meeting_cost(_event(attendees=["   ", ""]))

    assert result is not None
    assert result.attendee_count == 1
    assert result.cost_usd == 70.00


def test_duplicate_attendees_are_billed_separately():
    result = calculate_meeting_cost(_event(attendees=["a@x.com", "a@x.com"]))

    assert result is not None
    assert result.attendee_count == 2
    assert result.cost_usd == 140.00
    assert result.unassigned_emails == {"a@x.com"}


def test_assigned_roles_use_their_rates():
    roles = {"exec@x.com": "Executive", "intern@x.com": " intern "}
    result = calculate_meeting_cost(
        _event(attendees=["exec@x.com", "intern@x.com", "new@x.com"]),
        role_by_person_email=roles,
    )

    assert result is not None
    # 120 + 20 + 70 (default for unassigned)
    assert result.cost_usd == 210.00
    assert result.unassigned_emails == {"new@x.com"}


def test_unknown_role_falls_back_to_default_rate_but_is_assigned():
    result = calculate_meeting_cost(
        _event(attendees=["a@x.com"]),
        role_by_person_email={"a@x.com": "astronaut"},
    )

    assert result is not None
    assert result.cost_usd == 70.00
    assert result.unassigned_emails == set()


def test_empty_role_string_counts_as_unassigned():
    result = calculate_meeting_cost(
        _event(attendees=["a@x.com"]),
        role_by_person_email={"a@x.com": ""},
    )

    assert result is not None
    assert result.unassigned_emails == {"a@x.com"}


def test_fractional_duration_is_not_rounded_but_cost_is():
    # 20 minutes, 1 engineer: 70 / 3 = 23.333...
    result = calculate_meeting_cost(
        _event(start="2026-02-02T10:00:00Z", end="2026-02-02T10:20:00Z", attendees=["a@x.com"])
    )

    assert result is not None
    assert result.duration_hours == pytest.approx(1 / 3)
    assert result.people_hours == pytest.approx(1 / 3)
    assert result.cost_usd == 23.33


@pytest.mark.parametrize(
    "start,end",
    [
        ("2026-02-02T11:00:00Z", "2026-02-02T10:00:00Z"),
        ("2026-02-02T10:00:00Z", "2026-02-02T10:00:00Z"),
        ("not-a-date", "2026-02-02T10:00:00Z"),
        ("2026-02-02T10:00:00Z", ""),
        # Valid ISO strings whose UTC conversion leaves the datetime range.
        ("0001-01-01T00:00:00+01:00", "0001-01-01T02:00:00+01:00"),
        ("9999-12-31T22:00:00-05:00", "9999-12-31T23:00:00-05:00"),
    ],
)
def test_non_billable_events_return_none(start, end):
    assert calculate_meeting_cost(_event(start=start, end=end, attendees=["a@x.com"])) is None


def test_datetime_inputs_and_offsets_are_supported():
    event = CalendarEvent(
        start=datetime(2026, 2, 2, 10, 0, tzinfo=timezone.utc),
        end="2026-02-02T12:00:00+02:00",  # 10:00 UTC
        attendees=["a@x.com"],
    )
    assert calculate_meeting_cost(event) is None

    event = CalendarEvent(
        start=datetime(2026, 2, 2, 10, 0, tzinfo=timezone.utc),
        end="2026-02-02T13:00:00+02:00",  # 11:00 UTC
        attendees=["a@x.com"],
    )
    result = calculate_meeting_cost(event)
    assert result is not None
    assert result.duration_hours == 1.0


def test_parse_instant_treats_naive_values_as_utc():
    parsed = parse_instant("2026-02-02T10:00:00")
    assert parsed == datetime(2026, 2, 2, 10, 0, tzinfo=timezone.utc)
    assert parse_instant("2026-02-02") == datetime(2026, 2, 2, tzinfo=timezone.utc)
    assert parse_instant("garbage") is None
    assert parse_instant(None) is None


def test_parse_instant_accepts_compact_offsets_and_short_fractions():
    assert parse_instant("2026-02-02T15:30:00+0530") == datetime(
        2026, 2, 2, 10, 0, tzinfo=timezone.utc
    )
    assert parse_instant("2026-02-02T10:00:00.5Z") == datetime(
        2026, 2, 2, 10, 0, 0, 500000, tzinfo=timezone.utc
    )


def test_parse_instant_out_of_range_returns_none():
    assert parse_instant("0001-01-01T00:00:00+01:00") is None
    late = datetime(9999, 12, 31, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert parse_instant(late) is None


def test_calculator_uses_injected_rate_table():
    table = RoleRateTable(rates={"staff": 100, "lead": 150}, default_role="staff")
    calculator = CostCalculator(table)

    result = calculator.calculate(
        _event(attendees=["a@x.com", "b@x.com"]),
        role_by_person_email={"b@x.com": "lead"},
    )

    assert result is not None
    assert result.cost_usd == 250.00
    assert calculator.rate_table is not DEFAULT_RATE_TABLE
