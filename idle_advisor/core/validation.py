"""Admissibility checks applied before values enter the economic model.

Every function returns a boolean and never raises, whatever it is handed.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from idle_advisor.config.loader import SnapshotConfig
from idle_advisor.interfaces.state_provider import (
    MISSING,
    StoredValue,
    is_number,
    lookup_field,
    value_source,
)
from idle_advisor.models.candidates import CandidateKind

_DEFAULT_FIELDS = SnapshotConfig()

_CANDIDATE_FIELDS = ("id", "kind", "name", "cost", "rate_delta", "payback_time")


def is_enumerable(value: Any) -> bool:
    """Check for a mapping or a non-string sequence."""
    if isinstance(value, (str, bytes)):
        return False
    return isinstance(value, (Mapping, Sequence))


def is_integer_like(value: Any) -> bool:
    """Check for an int, or a float with no fractional part."""
    if not is_number(value):
        return False
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    return True


def is_admissible_snapshot(raw: Any, fields: SnapshotConfig | None = None) -> bool:
    """Check that a raw snapshot exposes the four top-level fields.

    Currency and rate must be numbers or zero-argument accessors; buildings and
    upgrades must be enumerable collections.
    """
    fields = fields or _DEFAULT_FIELDS
    if raw is None:
        return False
    if value_source(raw, fields.currency) is None:
        return False
    if value_source(raw, fields.rate) is None:
        return False
    if not is_enumerable(lookup_field(raw, fields.buildings)):
        return False
    return is_enumerable(lookup_field(raw, fields.upgrades))


def is_admissible_building(building: Any, fields: SnapshotConfig | None = None) -> bool:
    """Check a raw building for name, owned count, cost and a unit rate."""
    fields = fields or _DEFAULT_FIELDS
    if building is None:
        return False

    name = lookup_field(building, fields.building_name)
    if not isinstance(name, str) or not name.strip():
        return False

    owned = lookup_field(building, fields.building_owned)
    if not is_integer_like(owned) or owned < 0:
        return False

    cost = lookup_field(building, fields.building_cost)
    if not is_number(cost) or cost < 0:
        return False

    unit_rate = value_source(building, fields.building_unit_rate)
    if unit_rate is None:
        return False
    # Accessors are only invoked by the normalizer
    if isinstance(unit_rate, StoredValue) and unit_rate.value < 0:
        return False
    return True


def is_admissible_upgrade(upgrade: Any, fields: SnapshotConfig | None = None) -> bool:
    """Check a raw upgrade for a name and an obtainable cost."""
    fields = fields or _DEFAULT_FIELDS
    if upgrade is None:
        return False

    name = lookup_field(upgrade, fields.upgrade_name)
    if not isinstance(name, str) or not name.strip():
        return False

    return value_source(upgrade, fields.upgrade_cost) is not None


def is_admissible_payback_time(payback_time: Any) -> bool:
    """Payback time must be a finite, positive number."""
    return is_number(payback_time) and math.isfinite(payback_time) and payback_time > 0


def is_admissible_rate_delta(rate_delta: Any) -> bool:
    """Rate delta must be a finite, positive number."""
    return is_number(rate_delta) and math.isfinite(rate_delta) and rate_delta > 0


def is_affordable(cost: Any, currency: Any) -> bool:
    """Check if a purchase can be made with the currency on hand."""
    if not is_number(cost) or not is_number(currency):
        return False
    return cost <= currency


def is_reasonably_affordable(cost: Any, currency: Any, factor: float = 10.0) -> bool:
    """Check if a purchase costs at most ``factor`` times the currency on hand.

    Income keeps flowing while the player waits, so slightly out-of-reach
    purchases are still worth showing.
    """
    if not is_number(cost) or not is_number(currency):
        return False
    return cost <= currency * factor


def is_admissible_candidate(candidate: Any) -> bool:
    """Structural check on a candidate-like object or mapping."""
    if candidate is None:
        return False

    values: dict[str, Any] = {}
    for field_name in _CANDIDATE_FIELDS:
        value = lookup_field(candidate, (field_name,))
        if value is MISSING:
            return False
        values[field_name] = value

    if values["kind"] not in (CandidateKind.BUILDING.value, CandidateKind.UPGRADE.value):
        return False
    if not is_number(values["rate_delta"]) or not is_number(values["payback_time"]):
        return False
    return is_number(values["cost"]) and values["cost"] > 0
