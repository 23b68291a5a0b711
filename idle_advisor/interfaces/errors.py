"""Exception hierarchy shared across the advisor packages."""

from __future__ import annotations


class AdvisorError(Exception):
    """Base class for errors raised inside the advisor pipeline."""

    pass


class InvalidSnapshotError(AdvisorError):
    """Raised when a snapshot lacks a required top-level field."""

    pass


class PolicyFailureError(AdvisorError):
    """Raised when neither the active policy nor the greedy fallback can rank."""

    pass
