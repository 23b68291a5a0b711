"""Purchase candidate models."""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import BaseModel, Field


class CandidateKind(StrEnum):
    """What kind of purchase a candidate represents."""

    BUILDING = "building"
    UPGRADE = "upgrade"


class EstimateBasis(StrEnum):
    """Which rule produced a candidate's rate delta."""

    BUILDING_MULTIPLIER = "building_multiplier"
    EXPLICIT_MULTIPLIER = "explicit_multiplier"
    PERCENTAGE_BOOST = "percentage_boost"
    FLAT_CLICK_BONUS = "flat_click_bonus"
    BUILDING_SYNERGY = "building_synergy"
    CLICK_KEYWORD = "click_keyword"
    UNKNOWN = "unknown"


class Candidate(BaseModel):
    """A purchasable option annotated with cost, benefit and payback time.

    Candidates are derived on every call and never persisted. ``payback_time``
    is ``math.inf`` when the purchase never meaningfully pays for itself.
    """

    id: str = Field(..., min_length=1, description="Id of the building or upgrade")
    kind: CandidateKind = Field(..., description="Building or upgrade")
    name: str = Field(..., min_length=1, description="Display name")
    cost: float = Field(..., gt=0, description="Acquisition cost")
    rate_delta: float = Field(..., description="Estimated rate gained if purchased")
    payback_time: float = Field(..., description="cost / rate_delta, or inf")
    owned_count: int | None = Field(default=None, ge=0, description="Units held (buildings only)")
    estimate_basis: EstimateBasis = Field(
        default=EstimateBasis.UNKNOWN, description="Rule that produced rate_delta"
    )

    model_config = {"frozen": True}

    @property
    def display_name(self) -> str:
        """Name used when presenting the candidate."""
        if self.kind == CandidateKind.BUILDING:
            return f"{self.name} (#{(self.owned_count or 0) + 1})"
        return f"[Upgrade] {self.name}"

    @property
    def has_finite_payback(self) -> bool:
        """Check whether the payback time is a usable number."""
        return math.isfinite(self.payback_time) and self.payback_time > 0
