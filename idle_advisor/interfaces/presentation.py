"""Presentation interface: where ranked results are handed over for display."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from idle_advisor.models.candidates import Candidate
from idle_advisor.models.state import NormalizedState


@runtime_checkable
class Presenter(Protocol):
    """Consumes a recommendation; rendering target is up to the implementation."""

    def present(
        self,
        top: Candidate | None,
        alternatives: Sequence[Candidate],
        state: NormalizedState,
    ) -> None:
        """Display the best candidate and its alternatives.

        Args:
            top: Best candidate, or None when nothing qualified.
            alternatives: Next-best candidates in rank order.
            state: State used for the ranking, for affordability context.
        """
        ...
