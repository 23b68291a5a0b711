"""Shared data models for the idle advisor.

Records use Pydantic for validation and are frozen once built.
"""

from idle_advisor.models.candidates import Candidate, CandidateKind, EstimateBasis
from idle_advisor.models.results import (
    AnalysisFailure,
    AnalysisResult,
    FailureKind,
    Recommendation,
)
from idle_advisor.models.state import Building, NormalizedState, Upgrade

__all__ = [
    "AnalysisFailure",
    "AnalysisResult",
    "Building",
    "Candidate",
    "CandidateKind",
    "EstimateBasis",
    "FailureKind",
    "NormalizedState",
    "Recommendation",
    "Upgrade",
]
