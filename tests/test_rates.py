import pytest
from pydantic import ValidationError

from app.core import rates as rates_module
from app.core.money import round2
from app.core.rates import DEFAULT_RATE_TABLE, RoleRateTable


def test_default_table_uses_engineer_as_default():
    assert DEFAULT_RATE_TABLE.default_role == "engineer"
    assert DEFAULT_RATE_TABLE.default_rate == 70.0


def test_rate_lookup_is_case_insensitive_and_falls_back():
    assert DEFAULT_RATE_TABLE.rate_for("Executive") == 120.0
    assert DEFAULT_RATE_TABLE.rate_for("  SUPPORT ") == 35.0
    assert DEFAULT_RATE_TABLE.rate_for("astronaut") == 70.0
    assert DEFAULT_RATE_TABLE.rate_for(None) == 70.0


def test_default_role_must_exist():
    with pytest.raises(ValidationError):
        RoleRateTable(rates={"staff": 50}, default_role="engineer")


def test_negative_rates_are_rejected():
    with pytest.raises(ValidationError):
        RoleRateTable(rates={"staff": -1}, default_role="staff")


def test_table_is_immutable():
    with pytest.raises(ValidationError):
        DEFAULT_RATE_TABLE.default_role = "intern"  # type: ignore[misc]

    with pytest.raises(TypeError):
        DEFAULT_RATE_TABLE.rates["engineer"] = 0  # type: ignore[index]
    with pytest.raises(TypeError):
        del DEFAULT_RATE_TABLE.rates["engineer"]  # type: ignore[attr-defined]

    assert DEFAULT_RATE_TABLE.rate_for("engineer") == 70.0


def test_table_does_not_track_source_mapping():
    source = {"staff": 50.0}
    table = RoleRateTable(rates=source, default_role="staff")

    source["staff"] = 0.0
    source["lead"] = 90.0

    assert table.default_rate == 50.0
    assert not table.has_role("lead")


class DummySettings:
    DEFAULT_ROLE = "Contractor"
    HOURLY_RATE_OVERRIDES = {"Contractor": 45, "engineer": 80}


def test_get_rate_table_merges_overrides(monkeypatch):
    monkeypatch.setattr(rates_module, "get_settings", lambda: DummySettings())
    rates_module.get_rate_table.cache_clear()
    try:
        table = rates_module.get_rate_table()
        assert table.default_role == "contractor"
        assert table.default_rate == 45.0
        assert table.rate_for("engineer") == 80.0
        assert table.rate_for("executive") == 120.0
    finally:
        rates_module.get_rate_table.cache_clear()


@pytest.mark.parametrize(
    "value,expected",
    [
        (2.675, 2.68),
        (0.125, 0.13),
        (-0.125, -0.13),
        (23.333333, 23.33),
        (140.0, 140.0),
    ],
)
def test_round2_rounds_half_away_from_zero(value, expected):
    assert round2(value) == expected
