"""Idle-game purchase advisor.

Ranks every purchase in an idle-game snapshot by payback time and recommends
the one that pays for itself fastest.
"""

__version__ = "0.1.0"

from idle_advisor.core.advisor import Advisor
from idle_advisor.interfaces.errors import AdvisorError, InvalidSnapshotError, PolicyFailureError
from idle_advisor.models.candidates import Candidate, CandidateKind
from idle_advisor.models.results import (
    AnalysisFailure,
    AnalysisResult,
    FailureKind,
    Recommendation,
)
from idle_advisor.models.state import NormalizedState

__all__ = [
    "Advisor",
    "AdvisorError",
    "AnalysisFailure",
    "AnalysisResult",
    "Candidate",
    "CandidateKind",
    "FailureKind",
    "InvalidSnapshotError",
    "NormalizedState",
    "PolicyFailureError",
    "Recommendation",
    "__version__",
]
