"""Core pipeline package.

This package provides:
- StateNormalizer: Raw snapshot to normalized state
- EconomicModel: Normalized state to payback-time candidates
- UpgradeEstimator: Description-text heuristics for upgrade value
- payback_time: Shared cost / rate delta calculation with sentinel handling

The orchestrating Advisor lives in ``idle_advisor.core.advisor``.
"""

from idle_advisor.core.economics import EconomicModel, payback_time
from idle_advisor.core.estimation import UpgradeEstimate, UpgradeEstimator
from idle_advisor.core.normalizer import StateNormalizer

__all__ = [
    "EconomicModel",
    "StateNormalizer",
    "UpgradeEstimate",
    "UpgradeEstimator",
    "payback_time",
]
