"""Ranking policy interface.

Any object with a ``name`` and a ``rank`` method qualifies as a policy; no base
class is required. Implementations must:

- accept any iterable of candidates, including an empty one,
- return a new list and leave the input untouched,
- only return candidates taken from the input.

Lookahead, synergy-aware or diversification policies plug in through the same
signature. The ranking engine guards every call: a policy that raises or
returns malformed output is replaced by the greedy policy for that call.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from idle_advisor.models.candidates import Candidate


@runtime_checkable
class RankingPolicy(Protocol):
    """Turns an unordered set of candidates into a recommendation order."""

    name: str

    def rank(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        """Filter and order candidates, best first.

        Args:
            candidates: Candidates produced by the economic model.

        Returns:
            A new list holding the admissible candidates in rank order.
        """
        ...
