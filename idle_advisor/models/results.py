"""Analysis outcome models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, Field

from idle_advisor.models.candidates import Candidate
from idle_advisor.models.state import NormalizedState


class FailureKind(StrEnum):
    """Typed reasons an analysis call can fail."""

    INVALID_SOURCE = "invalid_source"
    NO_CANDIDATES = "no_candidates"
    POLICY_FAILURE = "policy_failure"


class Recommendation(BaseModel):
    """The best purchase plus ranked alternatives."""

    top: Candidate = Field(..., description="Best-ranked candidate")
    alternatives: list[Candidate] = Field(
        default_factory=list, description="Next-best candidates, in rank order"
    )
    state: NormalizedState = Field(..., description="State the ranking was computed from")
    policy_name: str = Field(..., min_length=1, description="Policy that produced the ranking")

    model_config = {"frozen": True}

    @property
    def ranked(self) -> list[Candidate]:
        """Top candidate followed by alternatives."""
        return [self.top, *self.alternatives]


@dataclass(frozen=True)
class AnalysisFailure:
    """Why an analysis call produced no recommendation."""

    kind: FailureKind
    message: str


@dataclass(frozen=True)
class AnalysisResult:
    """Result of a single analysis call.

    Exactly one of ``recommendation`` and ``failure`` is set.
    """

    recommendation: Recommendation | None = None
    failure: AnalysisFailure | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def success(self) -> bool:
        """Check whether a recommendation was produced."""
        return self.recommendation is not None

    @classmethod
    def ok(cls, recommendation: Recommendation, warnings: tuple[str, ...] = ()) -> AnalysisResult:
        return cls(recommendation=recommendation, warnings=warnings)

    @classmethod
    def failed(
        cls,
        kind: FailureKind,
        message: str,
        warnings: tuple[str, ...] = (),
    ) -> AnalysisResult:
        return cls(failure=AnalysisFailure(kind=kind, message=message), warnings=warnings)
