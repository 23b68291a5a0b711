"""Interfaces between the advisor core and its collaborators."""

from idle_advisor.interfaces.errors import AdvisorError, InvalidSnapshotError, PolicyFailureError
from idle_advisor.interfaces.presentation import Presenter
from idle_advisor.interfaces.ranking import RankingPolicy
from idle_advisor.interfaces.state_provider import (
    MISSING,
    ComputedValue,
    StoredValue,
    ValueResolutionError,
    ValueSource,
    lookup_field,
    value_source,
)

__all__ = [
    "MISSING",
    "AdvisorError",
    "ComputedValue",
    "InvalidSnapshotError",
    "PolicyFailureError",
    "Presenter",
    "RankingPolicy",
    "StoredValue",
    "ValueResolutionError",
    "ValueSource",
    "lookup_field",
    "value_source",
]
