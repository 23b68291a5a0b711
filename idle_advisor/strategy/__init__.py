"""Strategy package: candidate ranking policies and the engine that runs them."""

from idle_advisor.strategy.engine import RankingEngine, policy_name
from idle_advisor.strategy.ranking import (
    DEFAULT_MAX_PAYBACK_TIME,
    GreedyRankingPolicy,
    PaybackRankingPolicy,
    RelaxedRankingPolicy,
    resolve_policy,
)

__all__ = [
    "DEFAULT_MAX_PAYBACK_TIME",
    "GreedyRankingPolicy",
    "PaybackRankingPolicy",
    "RankingEngine",
    "RelaxedRankingPolicy",
    "policy_name",
    "resolve_policy",
]
