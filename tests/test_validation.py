"""Tests for admissibility checks."""

from __future__ import annotations

import math
from unittest.mock import MagicMock

import pytest

from idle_advisor.config.loader import SnapshotConfig
from idle_advisor.core.validation import (
    is_admissible_building,
    is_admissible_candidate,
    is_admissible_payback_time,
    is_admissible_rate_delta,
    is_admissible_snapshot,
    is_admissible_upgrade,
    is_affordable,
    is_enumerable,
    is_integer_like,
    is_reasonably_affordable,
)
from idle_advisor.models.candidates import Candidate, CandidateKind


def _candidate_dict(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "id": "cursor",
        "kind": "building",
        "name": "Cursor",
        "cost": 15.0,
        "rate_delta": 0.1,
        "payback_time": 150.0,
    }
    data.update(overrides)
    return data


class TestSnapshotAdmissibility:
    """Top-level snapshot checks."""

    def test_accepts_generic_mapping(self) -> None:
        """A mapping with all four fields is admissible."""
        raw = {"currency": 10, "rate": 1.5, "buildings": [], "upgrades": []}
        assert is_admissible_snapshot(raw)

    def test_accepts_cookie_clicker_field_names(self) -> None:
        """Default aliases cover the Cookie Clicker names."""
        raw = {"cookies": 10, "cookiesPs": 2, "Objects": {}, "UpgradesInStore": []}
        assert is_admissible_snapshot(raw)

    def test_accepts_accessor_for_currency(self) -> None:
        """A zero-argument accessor counts as a numeric field."""
        raw = {"currency": lambda: 10, "rate": 1, "buildings": [], "upgrades": []}
        assert is_admissible_snapshot(raw)

    def test_accepts_object_snapshot(self) -> None:
        """Fields are also read by attribute."""
        raw = MagicMock(spec=["currency", "rate", "buildings", "upgrades"])
        raw.currency = 5.0
        raw.rate = 1.0
        raw.buildings = []
        raw.upgrades = []
        assert is_admissible_snapshot(raw)

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            {},
            {"currency": 10, "buildings": [], "upgrades": []},
            {"currency": True, "rate": 1, "buildings": [], "upgrades": []},
            {"currency": "10", "rate": 1, "buildings": [], "upgrades": []},
            {"currency": 10, "rate": 1, "buildings": "abc", "upgrades": []},
            {"currency": 10, "rate": 1, "buildings": [], "upgrades": None},
        ],
    )
    def test_rejects_incomplete_snapshots(self, raw: object) -> None:
        """Missing or non-numeric fields make the snapshot inadmissible."""
        assert not is_admissible_snapshot(raw)

    def test_respects_custom_aliases(self) -> None:
        """Alias lists come from the snapshot config."""
        fields = SnapshotConfig(currency=["gold"], rate=["gold_per_second"])
        raw = {"gold": 100, "gold_per_second": 3, "buildings": [], "upgrades": []}
        assert is_admissible_snapshot(raw, fields)
        assert not is_admissible_snapshot(raw)


class TestBuildingAdmissibility:
    """Raw building checks."""

    def test_accepts_valid_building(self) -> None:
        building = {"name": "Cursor", "owned": 0, "cost": 15, "unit_rate": 0.1}
        assert is_admissible_building(building)

    def test_accepts_float_owned_without_fraction(self) -> None:
        building = {"name": "Farm", "amount": 3.0, "price": 1100, "cps": 8}
        assert is_admissible_building(building)

    @pytest.mark.parametrize(
        "building",
        [
            None,
            {"name": "", "owned": 0, "cost": 15, "unit_rate": 0.1},
            {"name": "   ", "owned": 0, "cost": 15, "unit_rate": 0.1},
            {"name": "Cursor", "owned": 1.5, "cost": 15, "unit_rate": 0.1},
            {"name": "Cursor", "owned": True, "cost": 15, "unit_rate": 0.1},
            {"name": "Cursor", "owned": -1, "cost": 15, "unit_rate": 0.1},
            {"name": "Cursor", "owned": 0, "cost": -1, "unit_rate": 0.1},
            {"name": "Cursor", "owned": 0, "cost": 15, "unit_rate": -0.1},
            {"name": "Cursor", "owned": 0, "cost": 15},
        ],
    )
    def test_rejects_invalid_buildings(self, building: object) -> None:
        assert not is_admissible_building(building)

    def test_does_not_invoke_rate_accessor(self) -> None:
        """Validation never calls accessors; that is left to normalization."""
        accessor = MagicMock(return_value=-5)
        building = {"name": "Cursor", "owned": 0, "cost": 15, "cps": accessor}

        assert is_admissible_building(building)
        accessor.assert_not_called()


class TestUpgradeAdmissibility:
    """Raw upgrade checks."""

    def test_accepts_stored_cost(self) -> None:
        assert is_admissible_upgrade({"name": "Reinforced index finger", "cost": 100})

    def test_accepts_accessor_cost(self) -> None:
        assert is_admissible_upgrade({"name": "Forwards from grandma", "getPrice": lambda: 1000})

    @pytest.mark.parametrize(
        "upgrade",
        [
            None,
            {"cost": 100},
            {"name": "", "cost": 100},
            {"name": "Lucky day"},
            {"name": "Lucky day", "cost": "100"},
        ],
    )
    def test_rejects_invalid_upgrades(self, upgrade: object) -> None:
        assert not is_admissible_upgrade(upgrade)


class TestNumericChecks:
    """Payback, rate delta and affordability predicates."""

    @pytest.mark.parametrize("value", [0.5, 150, 3600.0])
    def test_admissible_payback_times(self, value: float) -> None:
        assert is_admissible_payback_time(value)

    @pytest.mark.parametrize("value", [0, -1, math.inf, math.nan, True, "5", None])
    def test_inadmissible_payback_times(self, value: object) -> None:
        assert not is_admissible_payback_time(value)

    @pytest.mark.parametrize("value", [0, -0.5, math.inf, math.nan, False, "1"])
    def test_inadmissible_rate_deltas(self, value: object) -> None:
        assert not is_admissible_rate_delta(value)

    def test_admissible_rate_delta(self) -> None:
        assert is_admissible_rate_delta(1e-12)

    def test_affordability(self) -> None:
        assert is_affordable(10, 10)
        assert not is_affordable(11, 10)
        assert not is_affordable("10", 100)
        assert not is_affordable(10, None)

    def test_reasonable_affordability(self) -> None:
        assert is_reasonably_affordable(100, 10)
        assert not is_reasonably_affordable(101, 10)
        assert is_reasonably_affordable(20, 10, factor=2)
        assert not is_reasonably_affordable(True, 10)

    def test_integer_like(self) -> None:
        assert is_integer_like(3)
        assert is_integer_like(3.0)
        assert not is_integer_like(3.5)
        assert not is_integer_like(math.inf)
        assert not is_integer_like(False)

    def test_enumerable(self) -> None:
        assert is_enumerable([])
        assert is_enumerable(())
        assert is_enumerable({})
        assert not is_enumerable("abc")
        assert not is_enumerable(42)


class TestCandidateAdmissibility:
    """Structural checks on candidates."""

    def test_accepts_candidate_model(self) -> None:
        candidate = Candidate(
            id="cursor",
            kind=CandidateKind.BUILDING,
            name="Cursor",
            cost=15,
            rate_delta=0.1,
            payback_time=150,
        )
        assert is_admissible_candidate(candidate)

    def test_accepts_candidate_mapping(self) -> None:
        assert is_admissible_candidate(_candidate_dict())

    @pytest.mark.parametrize(
        "overrides",
        [
            {"kind": "booster"},
            {"cost": 0},
            {"cost": -5},
            {"cost": "15"},
            {"rate_delta": "fast"},
            {"payback_time": None},
        ],
    )
    def test_rejects_malformed_candidates(self, overrides: dict[str, object]) -> None:
        assert not is_admissible_candidate(_candidate_dict(**overrides))

    def test_rejects_missing_field(self) -> None:
        data = _candidate_dict()
        del data["name"]
        assert not is_admissible_candidate(data)

    def test_rejects_none(self) -> None:
        assert not is_admissible_candidate(None)
