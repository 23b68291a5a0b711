"""Payback-time ranking policies.

Greedy and relaxed ranking share one implementation parameterized by an
optional payback ceiling:

1) drop candidates without a finite, positive payback time
2) drop candidates above the ceiling (greedy only)
3) drop structurally invalid candidates
4) sort by payback time ascending, larger rate delta first on ties

Greedy is optimal for a single-purchase horizon. It does not consider synergies
or look ahead.
"""

from __future__ import annotations

from collections.abc import Iterable

from idle_advisor.core.validation import is_admissible_candidate, is_admissible_payback_time
from idle_advisor.models.candidates import Candidate

DEFAULT_MAX_PAYBACK_TIME = 3600.0

GREEDY = "greedy"
RELAXED = "relaxed"


class PaybackRankingPolicy:
    """Lowest payback time first, with an optional ceiling."""

    def __init__(self, max_payback_time: float | None = None, name: str | None = None) -> None:
        if max_payback_time is not None and max_payback_time <= 0:
            raise ValueError(f"max_payback_time must be positive, got {max_payback_time}")
        self.max_payback_time = max_payback_time
        self.name = name or (GREEDY if max_payback_time is not None else RELAXED)

    def rank(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        """Filter and sort candidates into a new list, best first."""
        ceiling = self.max_payback_time
        kept = [
            candidate
            for candidate in candidates
            if is_admissible_payback_time(getattr(candidate, "payback_time", None))
            and (ceiling is None or candidate.payback_time <= ceiling)
            and is_admissible_candidate(candidate)
        ]
        return sorted(kept, key=lambda c: (c.payback_time, -c.rate_delta))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_payback_time={self.max_payback_time!r})"


class GreedyRankingPolicy(PaybackRankingPolicy):
    """Default policy: pays back fastest, within the ceiling (one hour by default)."""

    def __init__(self, max_payback_time: float = DEFAULT_MAX_PAYBACK_TIME) -> None:
        super().__init__(max_payback_time=max_payback_time, name=GREEDY)


class RelaxedRankingPolicy(PaybackRankingPolicy):
    """Greedy ordering without the ceiling; every finite payback is kept."""

    def __init__(self) -> None:
        super().__init__(max_payback_time=None, name=RELAXED)


def resolve_policy(
    name: str,
    max_payback_time: float = DEFAULT_MAX_PAYBACK_TIME,
) -> PaybackRankingPolicy:
    """Build a policy from its name.

    Raises:
        ValueError: If the name is not a known policy.
    """
    normalized = name.strip().lower()
    if normalized == GREEDY:
        return GreedyRankingPolicy(max_payback_time)
    if normalized == RELAXED:
        return RelaxedRankingPolicy()
    raise ValueError(f"Unknown ranking policy: {name!r} (expected {GREEDY!r} or {RELAXED!r})")
