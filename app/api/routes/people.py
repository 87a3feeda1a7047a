from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.owner import get_owner_email
from app.core.rates import RoleRateTable, get_rate_table
from app.db.session import get_db
from app.schemas.people import (
    DetectedPeople,
    DetectPeopleRequest,
    PersonRoleCreate,
    PersonRoleList,
    PersonRoleRead,
    SaveResult,
)
from app.services.people_roles import (
    detect_attendee_emails,
    get_people_role_map,
    list_people_roles,
    upsert_person_role,
)

router = APIRouter(prefix="/people", tags=["People"])


@router.get(
    "",
    response_model=PersonRoleList,
    summary="List role assignments of the current user",
    description=(
        "Return every attendee -> role assignment owned by the caller, "
        "most recently updated first."
    ),
    responses={401: {"description": "Missing X-User-Email header."}},
)
async def list_roles(
    owner_email: str = Depends(get_owner_email),
    db: AsyncSession = Depends(get_db),
) -> PersonRoleList:
    rows = await list_people_roles(db, owner_email)
    return PersonRoleList(roles=[PersonRoleRead.model_validate(row) for row in rows])


@router.post(
    "",
    response_model=SaveResult,
    status_code=HTTPStatus.OK,
    summary="Assign a role to an attendee",
    description=(
        "Create or replace the role of `person_email` for the caller.\n\n"
        "`role` must be one of the hourly rate table roles, or `default` to bill "
        "the attendee at the default rate while marking them as assigned."
    ),
    responses={
        400: {
            "description": "Invalid email or unknown role.",
            "content": {"application/json": {"example": {"detail": "Invalid role"}}},
        },
        401: {"description": "Missing X-User-Email header."},
    },
)
async def save_role(
    payload: PersonRoleCreate,
    owner_email: str = Depends(get_owner_email),
    db: AsyncSession = Depends(get_db),
    rate_table: RoleRateTable = Depends(get_rate_table),
) -> SaveResult:
    try:
        await upsert_person_role(
            db,
            owner_email=owner_email,
            person_email=payload.person_email,
            role=payload.role,
            rate_table=rate_table,
        )
    except ValueError as exc:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=str(exc))
    return SaveResult(ok=True)


@router.post(
    "/detected",
    response_model=DetectedPeople,
    summary="List attendees found in a batch of events",
    description=(
        "Return the distinct attendee emails of the given events, plus the ones "
        "the caller has not assigned a role to yet."
    ),
    responses={401: {"description": "Missing X-User-Email header."}},
)
async def detect_people(
    payload: DetectPeopleRequest,
    owner_email: str = Depends(get_owner_email),
    db: AsyncSession = Depends(get_db),
) -> DetectedPeople:
    emails = detect_attendee_emails(payload.events)
    roles = await get_people_role_map(db, owner_email)
    return DetectedPeople(
        emails=emails,
        unassigned=[email for email in emails if not roles.get(email)],
    )
