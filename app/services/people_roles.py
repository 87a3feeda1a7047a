from __future__ import annotations

import re
from typing import Dict, Iterable, List

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.rates import RoleRateTable, normalize_role
from app.models.person_role import PersonRole
from app.schemas.meeting import CalendarEvent

logger = structlog.get_logger(__name__)

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Explicit "use the default rate" role, accepted alongside the rate table roles.
DEFAULT_ROLE_ALIAS = "default"


async def get_people_role_map(db: AsyncSession, owner_email: str) -> Dict[str, str]:
    """
    Role assignment for the owner: attendee email -> role name.

    Attendees without a row are simply absent (unassigned).
    """
    stmt = select(PersonRole.person_email, PersonRole.role).where(
        PersonRole.owner_email == owner_email
    )
    result = await db.execute(stmt)
    return {person_email: role for person_email, role in result.all()}


async def list_people_roles(db: AsyncSession, owner_email: str) -> List[PersonRole]:
    stmt = (
        select(PersonRole)
        .where(PersonRole.owner_email == owner_email)
        .order_by(PersonRole.updated_at.desc(), PersonRole.id.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def upsert_person_role(
    db: AsyncSession,
    owner_email: str,
    person_email: str,
    role: str,
    rate_table: RoleRateTable,
) -> PersonRole:
    """
    Create or update the role of `person_email` for `owner_email`.

    Raises
    ------
    ValueError
        If the email is malformed or the role is not a known role.
    """
    person_email = (person_email or "").strip()
    if not EMAIL_REGEX.match(person_email):
        raise ValueError("Invalid person_email")

    role_key = normalize_role(role)
    if role_key != DEFAULT_ROLE_ALIAS and not rate_table.has_role(role_key):
        raise ValueError("Invalid role")

    stmt = select(PersonRole).where(
        PersonRole.owner_email == owner_email,
        PersonRole.person_email == person_email,
    )
    result = await db.execute(stmt)
    row = result.scalar_one_or_none()

    if row is None:
        row = PersonRole(owner_email=owner_email, person_email=person_email)
        db.add(row)

    row.role = role_key

    await db.commit()
    await db.refresh(row)

    logger.info(
        "people_roles.saved",
        owner_email=owner_email,
        person_email=person_email,
        role=role_key,
    )
    return row


def detect_attendee_emails(events: Iterable[CalendarEvent]) -> List[str]:
    """
    Distinct trimmed attendee emails across `events`, in first-seen order.
    """
    seen: Dict[str, None] = {}
    for event in events:
        for email in event.attendees or []:
            email = email.strip()
            if email:
                seen.setdefault(email, None)
    return list(seen)
