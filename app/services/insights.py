from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from app.core.money import round2
from app.schemas.weekly_report import InsightMetrics, InsightOutput, SpendByDay, WeeklySummary

MAX_BULLETS = 5
WORKDAY_HOURS = 8


def _fmt(value: float) -> str:
    """
    Render a number the way it reads: 140.0 -> "140", 150.5 -> "150.5".
    """
    value = round2(value)
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


def _avg(total: float, count: float) -> float:
    if count <= 0:
        return 0.0
    return round2(total / count)


def find_peak_day(spend_by_day: List[SpendByDay]) -> Optional[SpendByDay]:
    """
    Day with the highest cost; the earliest date wins ties.

    Days with zero cost never count as a peak.
    """
    peak: Optional[SpendByDay] = None
    for day in spend_by_day:
        if day.cost_usd > (peak.cost_usd if peak else 0.0):
            peak = day
    return peak


def build_metrics(summary: WeeklySummary) -> InsightMetrics:
    peak = find_peak_day(summary.spend_by_day)
    return InsightMetrics(
        avg_cost_per_meeting=_avg(summary.total_cost_usd, summary.total_meetings),
        avg_people_hours_per_meeting=_avg(summary.total_people_hours, summary.total_meetings),
        cost_per_people_hour=_avg(summary.total_cost_usd, summary.total_people_hours),
        work_days_lost=round2(summary.total_people_hours / WORKDAY_HOURS),
        peak_day_date=peak.date if peak else None,
        peak_day_cost_usd=round2(peak.cost_usd) if peak else 0.0,
        peak_day_meetings=peak.meetings if peak else 0,
    )


_Rule = Tuple[
    Callable[[WeeklySummary, InsightMetrics], bool],
    Callable[[WeeklySummary, InsightMetrics], str],
]

# Evaluated in order; the order is the bullets' priority.
BULLET_RULES: List[_Rule] = [
    (
        lambda s, m: m.peak_day_date is not None,
        lambda s, m: (
            f"Peak spend was ${_fmt(m.peak_day_cost_usd)} on {m.peak_day_date} "
            f"({m.peak_day_meetings} meetings). Review what drove that day and "
            "replicate high-value patterns while cutting low-value blocks."
        ),
    ),
    (
        lambda s, m: s.total_meetings > 0,
        lambda s, m: (
            f"Average meeting cost is ~${_fmt(m.avg_cost_per_meeting)}. Cutting one "
            f"similar low-value meeting saves about ${_fmt(m.avg_cost_per_meeting)}. "
            "Cancel or shorten the next recurring meeting without a clear outcome."
        ),
    ),
    (
        lambda s, m: s.total_people_hours > 0,
        lambda s, m: (
            f"Meetings consumed {_fmt(s.total_people_hours)} people-hours "
            f"(~{_fmt(m.work_days_lost)} workdays at {WORKDAY_HOURS}h/day). Protect "
            "focus time with a recurring no-meeting block each week."
        ),
    ),
    (
        lambda s, m: s.unassigned_people_count > 0,
        lambda s, m: (
            f"{s.unassigned_people_count} people have no assigned role, so cost "
            "estimates may be understated. Assign missing roles to tighten spend accuracy."
        ),
    ),
    (
        lambda s, m: s.total_people_hours > 0,
        lambda s, m: (
            f"Cost is ~${_fmt(m.cost_per_people_hour)} per people-hour. Reduce this by "
            "defaulting to 25-minute meetings and capping attendees to required "
            "decision-makers."
        ),
    ),
]


def build_pro_insights(summary: WeeklySummary) -> InsightOutput:
    """
    Derive metrics, a narrative and prioritized bullets from a summary.
    """
    metrics = build_metrics(summary)

    if summary.total_meetings == 0:
        return InsightOutput(
            insight_text=(
                f"In the last {summary.days} days, no meetings were recorded, so total "
                "meeting cost remained $0 across 0 meetings and 0 people-hours. Keep "
                "role assignments current so new activity is measured accurately."
            ),
            bullets=[
                "No meetings detected in the selected window; no meeting-spend action "
                "is required this week.",
                "Keep calendars and role mappings current to ensure future reporting "
                "remains accurate.",
            ],
            metrics=metrics,
        )

    bullets = [
        render(summary, metrics)
        for applies, render in BULLET_RULES
        if applies(summary, metrics)
    ]

    return InsightOutput(
        insight_text=(
            f"In the last {summary.days} days, meetings cost ${_fmt(summary.total_cost_usd)} "
            f"across {summary.total_meetings} meetings and "
            f"{_fmt(summary.total_people_hours)} people-hours. Spend concentration and "
            "per-meeting cost indicate where time is being converted into avoidable "
            "expense. Prioritize reducing low-value recurring meetings and tightening "
            "attendance in the next cycle."
        ),
        bullets=bullets[:MAX_BULLETS],
        metrics=metrics,
    )


def build_free_insights(summary: WeeklySummary) -> tuple[str, list[str]]:
    """
    Reduced single-point insight for free-plan users.
    """
    if summary.total_meetings == 0:
        return (
            f"In the last {summary.days} days, no meetings were recorded, so spend "
            "remained $0. Keep tracking enabled to capture future activity.",
            [
                "No meetings detected in this period. Keep your calendar connected "
                "for future reporting."
            ],
        )

    avg_cost = _avg(summary.total_cost_usd, summary.total_meetings)
    return (
        f"In the last {summary.days} days, meetings cost ${_fmt(summary.total_cost_usd)} "
        f"across {summary.total_meetings} meetings and "
        f"{_fmt(summary.total_people_hours)} people-hours. Focus first on trimming "
        "low-value recurring meetings.",
        [
            f"Average cost per meeting is ~${_fmt(avg_cost)}. Upgrade to Pro for "
            "deeper multi-point insights."
        ],
    )
