from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.config import get_settings

# Hourly rates in USD per role.
DEFAULT_HOURLY_RATES: Dict[str, float] = {
    "executive": 120.0,
    "director": 95.0,
    "manager": 75.0,
    "engineer": 70.0,
    "designer": 65.0,
    "product": 70.0,
    "sales": 55.0,
    "marketing": 55.0,
    "finance": 60.0,
    "hr": 50.0,
    "support": 35.0,
    "operations": 50.0,
    "analyst": 55.0,
    "intern": 20.0,
}

DEFAULT_ROLE = "engineer"


def normalize_role(role: str | None) -> str:
    return (role or "").strip().lower()


class RoleRateTable(BaseModel):
    """
    Immutable mapping of role name -> hourly rate.

    Role names are matched case-insensitively. `default_role` must be one of
    the configured roles; its rate is used whenever a role is missing or
    unknown.
    """

    model_config = ConfigDict(frozen=True)

    rates: Mapping[str, float] = Field(
        ...,
        description="Hourly rate per normalized role name.",
    )
    default_role: str = Field(
        DEFAULT_ROLE,
        description="Role used for attendees without a known role.",
    )

    @field_validator("rates")
    @classmethod
    def _normalize_rates(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        normalized: Dict[str, float] = {}
        for role, rate in value.items():
            key = normalize_role(role)
            if not key:
                raise ValueError("role names must not be empty")
            if rate < 0:
                raise ValueError(f"hourly rate for '{key}' must be non-negative")
            normalized[key] = float(rate)
        return MappingProxyType(normalized)

    @field_validator("default_role")
    @classmethod
    def _normalize_default_role(cls, value: str) -> str:
        return normalize_role(value)

    @model_validator(mode="after")
    def _check_default_role(self) -> "RoleRateTable":
        if self.default_role not in self.rates:
            raise ValueError(
                f"default role '{self.default_role}' is missing from the rate table"
            )
        return self

    @property
    def default_rate(self) -> float:
        return self.rates[self.default_role]

    def has_role(self, role: str | None) -> bool:
        return normalize_role(role) in self.rates

    def rate_for(self, role: str | None) -> float:
        """
        Hourly rate for `role`, falling back to the default role's rate.
        """
        return self.rates.get(normalize_role(role), self.default_rate)


DEFAULT_RATE_TABLE = RoleRateTable(rates=DEFAULT_HOURLY_RATES, default_role=DEFAULT_ROLE)


@lru_cache()
def get_rate_table() -> RoleRateTable:
    """
    Process-wide rate table: built-in rates merged with HOURLY_RATE_OVERRIDES.

    Loaded once; callers pass the returned table explicitly into the
    cost pipeline.
    """
    settings = get_settings()
    rates = dict(DEFAULT_HOURLY_RATES)
    for role, rate in settings.HOURLY_RATE_OVERRIDES.items():
        rates[normalize_role(role)] = rate
    return RoleRateTable(rates=rates, default_role=settings.DEFAULT_ROLE)
