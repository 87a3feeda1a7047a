from http import HTTPStatus

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.owner import get_owner_email
from app.core.rates import RoleRateTable, get_rate_table
from app.db.session import get_db
from app.schemas.analyze import WeeklyReportRequest, WeeklyReportResponse
from app.services.insights import build_free_insights, build_pro_insights
from app.services.people_roles import get_people_role_map
from app.services.plan import Plan, get_user_plan, resolve_days
from app.services.weekly_summary import build_weekly_summary

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
)


@router.post(
    "/weekly",
    response_model=WeeklyReportResponse,
    status_code=HTTPStatus.OK,
    summary="Get the meeting spend report for the current user",
    description=(
        "Cost the caller's events using their stored role assignments and return "
        "a spend summary with insights.\n\n"
        "- `days` is clamped to the plan limit (30 days free, 90 days pro) and "
        "defaults to 30.\n"
        "- Pro users get the full insight set with derived metrics; free users get "
        "a single-point insight.\n\n"
        "Events are not filtered by date; send only the events of the window."
    ),
    responses={
        200: {
            "description": "Report successfully computed.",
            "content": {
                "application/json": {
                    "example": {
                        "plan": "free",
                        "days": 7,
                        "summary": {
                            "days": 7,
                            "total_meetings": 2,
                            "total_people_hours": 3.0,
                            "total_cost_usd": 215.0,
                            "unassigned_people_count": 1,
                            "spend_by_day": [
                                {
                                    "date": "2026-02-02",
                                    "cost_usd": 215.0,
                                    "people_hours": 3.0,
                                    "meetings": 2,
                                }
                            ],
                        },
                        "insight_text": "In the last 7 days, meetings cost $215 ...",
                        "bullets": ["Average cost per meeting is ~$107.5. ..."],
                        "metrics": None,
                    }
                }
            },
        },
        401: {"description": "Missing X-User-Email header."},
        422: {"description": "Validation error (e.g. malformed events)."},
    },
)
async def get_weekly_report(
    payload: WeeklyReportRequest,
    owner_email: str = Depends(get_owner_email),
    db: AsyncSession = Depends(get_db),
    rate_table: RoleRateTable = Depends(get_rate_table),
) -> WeeklyReportResponse:
    """
    Compute and return the caller's spend report.
    """
    plan = get_user_plan(owner_email)
    days = resolve_days(payload.days, plan)
    roles = await get_people_role_map(db, owner_email)

    summary = build_weekly_summary(
        payload.events,
        role_by_person_email=roles,
        days=days,
        rate_table=rate_table,
    )

    logger.info(
        "reports.weekly",
        owner_email=owner_email,
        plan=plan.value,
        days=days,
        total_meetings=summary.total_meetings,
    )

    if plan == Plan.FREE:
        insight_text, bullets = build_free_insights(summary)
        return WeeklyReportResponse(
            plan=plan,
            days=summary.days,
            summary=summary,
            insight_text=insight_text,
            bullets=bullets,
            metrics=None,
        )

    insights = build_pro_insights(summary)
    return WeeklyReportResponse(
        plan=plan,
        days=summary.days,
        summary=summary,
        insight_text=insights.insight_text,
        bullets=insights.bullets,
        metrics=insights.metrics,
    )
