"""State normalizer: raw snapshot in, :class:`NormalizedState` out.

Extraction is read-only and forgiving. A building or upgrade that fails
validation is skipped with a warning and the rest of the snapshot is still
used. Only a snapshot missing one of its top-level fields is rejected.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from idle_advisor.config.loader import SnapshotConfig
from idle_advisor.core.validation import (
    is_admissible_building,
    is_admissible_snapshot,
    is_admissible_upgrade,
)
from idle_advisor.interfaces.errors import InvalidSnapshotError
from idle_advisor.interfaces.state_provider import (
    MISSING,
    ValueResolutionError,
    lookup_field,
    value_source,
)
from idle_advisor.models.state import Building, NormalizedState, Upgrade

logger = logging.getLogger(__name__)


class StateNormalizer:
    """Builds a fresh :class:`NormalizedState` from a raw snapshot on every call."""

    def __init__(self, fields: SnapshotConfig | None = None) -> None:
        self._fields = fields or SnapshotConfig()

    def normalize(self, raw: Any) -> NormalizedState:
        """Extract currency, rate, buildings and upgrades.

        Args:
            raw: Snapshot object or mapping from the state provider.

        Returns:
            Normalized state; skipped items are listed in ``skipped``.

        Raises:
            InvalidSnapshotError: If a required top-level field is missing or
                does not resolve to a non-negative number.
        """
        if not is_admissible_snapshot(raw, self._fields):
            raise InvalidSnapshotError(
                "Snapshot must expose numeric currency and rate fields "
                "plus building and upgrade collections"
            )

        currency = self._resolve_total(raw, self._fields.currency, "currency")
        rate = self._resolve_total(raw, self._fields.rate, "rate")

        skipped: list[str] = []
        buildings = self._extract_buildings(lookup_field(raw, self._fields.buildings), skipped)
        upgrades = self._extract_upgrades(lookup_field(raw, self._fields.upgrades), skipped)

        logger.debug(
            "Normalized snapshot: %d buildings, %d upgrades, %d skipped",
            len(buildings),
            len(upgrades),
            len(skipped),
        )
        return NormalizedState(
            currency=currency,
            rate=rate,
            buildings=buildings,
            upgrades=upgrades,
            skipped=skipped,
        )

    def _resolve_total(self, raw: Any, names: list[str], label: str) -> float:
        source = value_source(raw, names)
        if source is None:
            raise InvalidSnapshotError(f"Snapshot has no {label} field")
        try:
            value = source.resolve()
        except ValueResolutionError as exc:
            raise InvalidSnapshotError(f"Snapshot {label} is unreadable: {exc}") from exc
        if not math.isfinite(value) or value < 0:
            raise InvalidSnapshotError(
                f"Snapshot {label} must be a non-negative number, got {value}"
            )
        return value

    # Buildings

    def _extract_buildings(self, collection: Any, skipped: list[str]) -> list[Building]:
        buildings: list[Building] = []
        seen_ids: set[str] = set()

        for key, raw_building in _iter_items(collection):
            label = (
                str(key)
                if key is not None
                else _name_or_unknown(raw_building, self._fields.building_name)
            )
            if not is_admissible_building(raw_building, self._fields):
                _skip(skipped, f"Invalid building skipped: {label}")
                continue

            try:
                building = self._extract_building(raw_building, key)
            except (ValueResolutionError, ValidationError) as exc:
                _skip(skipped, f"Building {label} skipped: {_short_error(exc)}")
                continue

            if building.id in seen_ids:
                _skip(skipped, f"Duplicate building id skipped: {building.id}")
                continue
            seen_ids.add(building.id)
            buildings.append(building)

        return buildings

    def _extract_building(self, raw_building: Any, key: Any) -> Building:
        fields = self._fields
        name = str(lookup_field(raw_building, fields.building_name)).strip()

        unit_rate_source = value_source(raw_building, fields.building_unit_rate)
        if unit_rate_source is None:
            raise ValueResolutionError("unit rate is missing")
        unit_rate = unit_rate_source.resolve()

        total_rate = 0.0
        total_source = value_source(raw_building, fields.building_total_rate)
        if total_source is not None:
            try:
                total_rate = total_source.resolve()
            except ValueResolutionError as exc:
                logger.debug("Aggregate rate for %s unreadable, using 0: %s", name, exc)

        unlocked = lookup_field(raw_building, ("unlocked",))
        return Building(
            id=str(key) if key is not None else name,
            name=name,
            owned=int(lookup_field(raw_building, fields.building_owned)),
            acquisition_cost=float(lookup_field(raw_building, fields.building_cost)),
            unit_rate=unit_rate,
            total_rate=total_rate,
            unlocked=bool(unlocked) if unlocked is not MISSING else True,
        )

    # Upgrades

    def _extract_upgrades(self, collection: Any, skipped: list[str]) -> list[Upgrade]:
        upgrades: list[Upgrade] = []

        for index, (_, raw_upgrade) in enumerate(_iter_items(collection)):
            label = _name_or_unknown(raw_upgrade, self._fields.upgrade_name)
            if not is_admissible_upgrade(raw_upgrade, self._fields):
                _skip(skipped, f"Invalid upgrade skipped: {label}")
                continue

            if _already_owned_or_locked(raw_upgrade):
                _skip(skipped, f"Unavailable upgrade skipped: {label}")
                continue

            try:
                upgrades.append(self._extract_upgrade(raw_upgrade, index))
            except (ValueResolutionError, ValidationError) as exc:
                _skip(skipped, f"Upgrade {label} skipped: {_short_error(exc)}")

        return upgrades

    def _extract_upgrade(self, raw_upgrade: Any, index: int) -> Upgrade:
        fields = self._fields
        cost_source = value_source(raw_upgrade, fields.upgrade_cost)
        if cost_source is None:
            raise ValueResolutionError("cost is missing")

        pool = lookup_field(raw_upgrade, ("pool",))
        return Upgrade(
            id=f"upgrade_{index}",
            name=str(lookup_field(raw_upgrade, fields.upgrade_name)).strip(),
            acquisition_cost=cost_source.resolve(),
            description_text=self._description_text(raw_upgrade),
            available=True,
            pool=pool if isinstance(pool, str) and pool else "standard",
        )

    def _description_text(self, raw_upgrade: Any) -> str:
        for names in (self._fields.upgrade_detail, self._fields.upgrade_description):
            text = lookup_field(raw_upgrade, names)
            if isinstance(text, str) and text.strip():
                return text
        return ""


def _iter_items(collection: Any) -> Iterator[tuple[Any, Any]]:
    """Yield (key, item) pairs; key is None for sequences."""
    if isinstance(collection, Mapping):
        yield from collection.items()
    else:
        for item in collection:
            yield None, item


def _already_owned_or_locked(raw_upgrade: Any) -> bool:
    unlocked = lookup_field(raw_upgrade, ("unlocked",))
    if unlocked is not MISSING and not unlocked:
        return True
    bought = lookup_field(raw_upgrade, ("bought",))
    return bought is not MISSING and bool(bought)


def _name_or_unknown(raw: Any, names: list[str]) -> str:
    name = lookup_field(raw, names)
    return name if isinstance(name, str) and name else "unknown"


def _short_error(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            return f"{location}: {first.get('msg', 'invalid value')}"
    return str(exc)


def _skip(skipped: list[str], message: str) -> None:
    logger.warning(message)
    skipped.append(message)
