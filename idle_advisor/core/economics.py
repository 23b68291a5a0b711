"""Economic model: turns a normalized state into payback-time candidates.

ROI time = cost / rate_delta. Lower means the purchase pays for itself sooner.
Buildings are exact, reconstructing the per-unit multiplier from the observed
aggregate rate. Upgrades go through :class:`UpgradeEstimator`.

Everything here is pure. ``compute_candidates`` never raises; an item whose
candidate cannot be built is dropped.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from pydantic import ValidationError

from idle_advisor.config.loader import EstimationConfig
from idle_advisor.core.estimation import UpgradeEstimator
from idle_advisor.core.validation import is_admissible_payback_time, is_affordable
from idle_advisor.models.candidates import Candidate, CandidateKind, EstimateBasis
from idle_advisor.models.state import Building, NormalizedState, Upgrade

logger = logging.getLogger(__name__)


def payback_time(cost: float, rate_delta: float, min_meaningful_delta: float = 0.001) -> float:
    """Seconds until a purchase has paid for itself.

    Returns ``math.inf`` when the delta is below ``min_meaningful_delta`` or the
    quotient is not a finite, non-negative number. Never returns NaN.
    """
    if math.isnan(rate_delta) or rate_delta < min_meaningful_delta:
        return math.inf
    result = cost / rate_delta
    if not math.isfinite(result) or result < 0:
        return math.inf
    return result


class EconomicModel:
    """Computes purchase candidates for buildings and upgrades."""

    def __init__(self, config: EstimationConfig | None = None) -> None:
        self._config = config or EstimationConfig()
        self._estimator = UpgradeEstimator(self._config)

    def compute_candidates(self, state: NormalizedState) -> list[Candidate]:
        """All buildings then all upgrades, in extraction order."""
        candidates: list[Candidate] = []

        for building in state.buildings:
            candidate = self._guarded(building, state)
            if candidate is not None:
                candidates.append(candidate)

        for upgrade in state.upgrades:
            candidate = self._guarded(upgrade, state)
            if candidate is not None:
                candidates.append(candidate)

        return candidates

    def compute_candidate(
        self,
        item: Building | Upgrade,
        state: NormalizedState,
    ) -> Candidate | None:
        """Compute a single candidate for a building or an upgrade."""
        if isinstance(item, Building):
            return self.compute_building_candidate(item)
        return self.compute_upgrade_candidate(item, state)

    def compute_building_candidate(self, building: Building) -> Candidate | None:
        """Candidate for buying one more unit of a building.

        The next unit is assumed to receive the same net multiplier as the
        units already owned. With nothing owned the multiplier is 1.0.
        """
        cost = building.acquisition_cost
        if cost <= 0 or building.unit_rate < 0:
            return None

        rate_delta = building.unit_rate * building.effective_multiplier
        return Candidate(
            id=building.id,
            kind=CandidateKind.BUILDING,
            name=building.name,
            cost=cost,
            rate_delta=rate_delta,
            payback_time=payback_time(cost, rate_delta, self._config.min_meaningful_delta),
            owned_count=building.owned,
            estimate_basis=EstimateBasis.BUILDING_MULTIPLIER,
        )

    def compute_upgrade_candidate(
        self,
        upgrade: Upgrade,
        state: NormalizedState,
    ) -> Candidate | None:
        """Candidate for an upgrade, valued from its description text."""
        cost = upgrade.acquisition_cost
        if cost <= 0:
            return None

        estimate = self._estimator.estimate(upgrade, state)
        return Candidate(
            id=upgrade.id,
            kind=CandidateKind.UPGRADE,
            name=upgrade.name,
            cost=cost,
            rate_delta=estimate.rate_delta,
            payback_time=payback_time(cost, estimate.rate_delta, self._config.min_meaningful_delta),
            estimate_basis=estimate.basis,
        )

    def _guarded(self, item: Building | Upgrade, state: NormalizedState) -> Candidate | None:
        try:
            return self.compute_candidate(item, state)
        except (ValidationError, ArithmeticError) as exc:
            logger.warning("Dropping %s %s: %s", type(item).__name__.lower(), item.name, exc)
            return None


def find_candidate(candidates: Iterable[Candidate], candidate_id: str) -> Candidate | None:
    """Get a candidate by id."""
    for candidate in candidates:
        if candidate.id == candidate_id:
            return candidate
    return None


def candidates_by_kind(candidates: Iterable[Candidate], kind: CandidateKind) -> list[Candidate]:
    """Filter candidates by kind."""
    return [candidate for candidate in candidates if candidate.kind == kind]


def affordable_candidates(candidates: Iterable[Candidate], currency: float) -> list[Candidate]:
    """Candidates that can be bought right now."""
    return [candidate for candidate in candidates if is_affordable(candidate.cost, currency)]


def viable_candidates(
    candidates: Iterable[Candidate],
    max_payback_time: float | None = None,
) -> list[Candidate]:
    """Candidates with a usable payback time, optionally within a ceiling."""
    return [
        candidate
        for candidate in candidates
        if is_admissible_payback_time(candidate.payback_time)
        and (max_payback_time is None or candidate.payback_time <= max_payback_time)
    ]
