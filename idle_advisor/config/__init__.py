"""Configuration management for the idle advisor."""

from idle_advisor.config.loader import (
    AdvisorConfig,
    EstimationConfig,
    LoggingConfig,
    RankingConfig,
    SnapshotConfig,
    get_default_config,
    load_config,
)

__all__ = [
    "AdvisorConfig",
    "EstimationConfig",
    "LoggingConfig",
    "RankingConfig",
    "SnapshotConfig",
    "get_default_config",
    "load_config",
]
