"""Ranking engine: runs the selected policy with a greedy safety net."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from idle_advisor.core.validation import is_admissible_candidate
from idle_advisor.interfaces.errors import PolicyFailureError
from idle_advisor.interfaces.ranking import RankingPolicy
from idle_advisor.models.candidates import Candidate
from idle_advisor.strategy.ranking import DEFAULT_MAX_PAYBACK_TIME, GreedyRankingPolicy

logger = logging.getLogger(__name__)


class RankingEngine:
    """Orchestrates policy execution; the policy can be swapped at any time.

    If the active policy raises or returns malformed output, the call is
    retried once with the greedy policy and a warning is recorded. The active
    policy itself is left in place.
    """

    def __init__(
        self,
        policy: RankingPolicy | None = None,
        fallback_max_payback_time: float = DEFAULT_MAX_PAYBACK_TIME,
    ) -> None:
        self._fallback_max_payback_time = fallback_max_payback_time
        self._policy: RankingPolicy = policy or GreedyRankingPolicy(fallback_max_payback_time)
        self.last_warnings: list[str] = []
        self.last_policy_name = policy_name(self._policy)

    @property
    def policy(self) -> RankingPolicy:
        """The currently selected policy."""
        return self._policy

    @property
    def policy_name(self) -> str:
        return policy_name(self._policy)

    def set_policy(self, policy: RankingPolicy) -> None:
        """Change the active policy.

        Raises:
            TypeError: If the object has no ``rank`` method.
        """
        if not isinstance(policy, RankingPolicy) or not callable(getattr(policy, "rank", None)):
            raise TypeError(f"Ranking policy must provide name and rank(); got {policy!r}")
        self._policy = policy
        logger.info("Ranking policy changed to: %s", policy_name(policy))

    def rank(
        self,
        candidates: Sequence[Candidate],
        policy: RankingPolicy | None = None,
    ) -> list[Candidate]:
        """Rank candidates with ``policy`` (or the active policy).

        Raises:
            PolicyFailureError: If the greedy fallback fails as well.
        """
        self.last_warnings = []
        active = policy or self._policy
        self.last_policy_name = policy_name(active)
        snapshot = tuple(candidates)

        try:
            return _checked(active.rank(snapshot))
        except Exception as exc:
            if isinstance(active, GreedyRankingPolicy):
                raise PolicyFailureError(f"Greedy ranking failed: {exc}") from exc
            message = (
                f"Ranking policy {policy_name(active)} failed ({exc}); falling back to greedy"
            )
            logger.warning(message)
            self.last_warnings.append(message)

        greedy = GreedyRankingPolicy(self._fallback_max_payback_time)
        self.last_policy_name = greedy.name
        try:
            return _checked(greedy.rank(snapshot))
        except Exception as exc:
            raise PolicyFailureError(f"Greedy fallback failed: {exc}") from exc

    def top(self, candidates: Sequence[Candidate], count: int = 5) -> list[Candidate]:
        """The first ``count`` ranked candidates."""
        return self.rank(candidates)[: max(count, 0)]


def policy_name(policy: Any) -> str:
    """Human-readable name of a policy object."""
    name = getattr(policy, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(policy).__name__


def _checked(result: Any) -> list[Candidate]:
    if not isinstance(result, (list, tuple)):
        raise TypeError(f"rank() must return a list, got {type(result).__name__}")
    for item in result:
        if not isinstance(item, Candidate) or not is_admissible_candidate(item):
            raise TypeError(f"rank() returned a malformed candidate: {item!r}")
    return list(result)
