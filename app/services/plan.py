from __future__ import annotations

import math
from enum import Enum
from typing import Set

from app.core.config import get_settings
from app.services.weekly_summary import DEFAULT_WINDOW_DAYS


class Plan(str, Enum):
    FREE = "free"
    PRO = "pro"


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _pro_users() -> Set[str]:
    raw = get_settings().PRO_USERS or ""
    return {_normalize_email(e) for e in raw.split(",") if e.strip()}


def get_user_plan(email: str) -> Plan:
    """
    A user is on the pro plan iff their email is listed in PRO_USERS.
    """
    return Plan.PRO if _normalize_email(email) in _pro_users() else Plan.FREE


def max_days_for(plan: Plan) -> int:
    settings = get_settings()
    if plan == Plan.PRO:
        return settings.PRO_PLAN_MAX_DAYS
    return settings.FREE_PLAN_MAX_DAYS


def resolve_days(requested: float | int | None, plan: Plan) -> int:
    """
    Clamp a requested window length to what the plan allows.

    Missing, non-finite or < 1 values fall back to 30 days.
    """
    if requested is None or isinstance(requested, bool):
        return DEFAULT_WINDOW_DAYS
    value = float(requested)
    if not math.isfinite(value) or value < 1:
        return DEFAULT_WINDOW_DAYS
    return min(max_days_for(plan), int(math.floor(value)))
