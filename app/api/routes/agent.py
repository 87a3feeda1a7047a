import uuid
from http import HTTPStatus

import structlog
from fastapi import APIRouter, Depends

from app.api.dependencies.agent_auth import verify_agent_api_key
from app.core.rates import RoleRateTable, get_rate_table
from app.schemas.analyze import AnalyzeRequest, AnalyzeResponse
from app.services.insights import build_pro_insights
from app.services.weekly_summary import build_weekly_summary

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/agent",
    tags=["Agent"],
    dependencies=[Depends(verify_agent_api_key)],
)


@router.get(
    "/health",
    status_code=HTTPStatus.OK,
    summary="Check agent credentials",
    description="Returns `{\"ok\": true}` when the `Authorization: Api-Key` header is valid.",
)
async def agent_health() -> dict:
    return {"ok": True}


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    status_code=HTTPStatus.OK,
    summary="Analyze meeting cost for a batch of events",
    description=(
        "Computes a spend summary and pro-level insights for the given events.\n\n"
        "Events are **not** filtered by date: the caller sends exactly the events "
        "of the window it wants analyzed, and `days` is used as a label.\n\n"
        "Events with unparsable timestamps or a non-positive duration are skipped. "
        "Attendees missing from `role_by_person_email` are billed at the default "
        "rate and reported as unassigned."
    ),
    responses={
        200: {
            "description": "Analysis computed.",
            "content": {
                "application/json": {
                    "example": {
                        "request_id": "0b6f4f4e-4a0e-4d43-9d59-0f0c2d8f8b8e",
                        "event_count": 1,
                        "summary": {
                            "days": 30,
                            "total_meetings": 1,
                            "total_people_hours": 2.0,
                            "total_cost_usd": 140.0,
                            "unassigned_people_count": 2,
                            "spend_by_day": [
                                {
                                    "date": "2026-02-01",
                                    "cost_usd": 140.0,
                                    "people_hours": 2.0,
                                    "meetings": 1,
                                }
                            ],
                        },
                        "insights": {
                            "insight_text": "In the last 30 days, meetings cost $140 ...",
                            "bullets": ["Peak spend was $140 on 2026-02-01 (1 meetings). ..."],
                            "metrics": {
                                "avg_cost_per_meeting": 140.0,
                                "avg_people_hours_per_meeting": 2.0,
                                "cost_per_people_hour": 70.0,
                                "work_days_lost": 0.25,
                                "peak_day_date": "2026-02-01",
                                "peak_day_cost_usd": 140.0,
                                "peak_day_meetings": 1,
                            },
                        },
                    }
                }
            },
        },
        401: {"description": "Missing or invalid agent API key."},
        422: {"description": "Malformed events or role mapping."},
    },
)
async def analyze(
    payload: AnalyzeRequest,
    rate_table: RoleRateTable = Depends(get_rate_table),
) -> AnalyzeResponse:
    summary = build_weekly_summary(
        payload.events,
        role_by_person_email=payload.role_by_person_email,
        days=payload.days,
        rate_table=rate_table,
    )
    insights = build_pro_insights(summary)
    request_id = str(uuid.uuid4())

    logger.info(
        "agent.analyze",
        request_id=request_id,
        event_count=len(payload.events),
        total_meetings=summary.total_meetings,
    )

    return AnalyzeResponse(
        request_id=request_id,
        event_count=len(payload.events),
        summary=summary,
        insights=insights,
    )
