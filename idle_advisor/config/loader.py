"""Configuration loader for the idle advisor.

Loads configuration from YAML files and environment variables.
Environment variables override YAML values using the IDLEADVISOR_ prefix.
Nested keys use double underscores: IDLEADVISOR_RANKING__MAX_PAYBACK_TIME=7200
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

ENV_PREFIX = "IDLEADVISOR_"


class EstimationConfig(BaseModel):
    """Tunable constants for the economic model.

    The upgrade factors are rough estimates, not derived from the game's real
    mechanics. They only need to rank options sensibly.
    """

    assumed_clicks_per_second: float = Field(default=1.5, ge=0.0, le=100.0)
    synergy_factor: float = Field(default=0.5, ge=0.0, le=10.0)
    click_weight_factor: float = Field(default=0.01, ge=0.0, le=1.0)
    conservative_boost_factor: float = Field(default=0.02, ge=0.0, le=1.0)
    min_meaningful_delta: float = Field(default=0.001, gt=0.0)
    click_keywords: list[str] = Field(default_factory=lambda: ["click", "cursor"])


class RankingConfig(BaseModel):
    """Ranking policy settings."""

    policy: str = Field(default="greedy", pattern="^(greedy|relaxed)$")
    max_payback_time: float = Field(default=3600.0, gt=0.0, description="Greedy ceiling in seconds")
    alternatives_count: int = Field(default=5, ge=0, le=50)
    reasonable_cost_factor: float = Field(default=10.0, ge=1.0)


class SnapshotConfig(BaseModel):
    """Field aliases used to read raw snapshots, tried in order."""

    currency: list[str] = Field(default_factory=lambda: ["currency", "cookies"])
    rate: list[str] = Field(default_factory=lambda: ["rate", "cookiesPs", "cookies_ps"])
    buildings: list[str] = Field(default_factory=lambda: ["buildings", "Objects"])
    upgrades: list[str] = Field(default_factory=lambda: ["upgrades", "UpgradesInStore"])
    building_name: list[str] = Field(default_factory=lambda: ["name"])
    building_owned: list[str] = Field(default_factory=lambda: ["owned", "amount"])
    building_cost: list[str] = Field(
        default_factory=lambda: ["acquisition_cost", "cost", "price"]
    )
    building_unit_rate: list[str] = Field(default_factory=lambda: ["unit_rate", "cps"])
    building_total_rate: list[str] = Field(
        default_factory=lambda: ["total_rate", "storedCps", "stored_cps"]
    )
    upgrade_name: list[str] = Field(default_factory=lambda: ["name"])
    upgrade_cost: list[str] = Field(
        default_factory=lambda: ["acquisition_cost", "cost", "getPrice", "basePrice"]
    )
    upgrade_detail: list[str] = Field(
        default_factory=lambda: ["description_detail", "ddesc"]
    )
    upgrade_description: list[str] = Field(default_factory=lambda: ["description", "desc"])


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="readable", pattern="^(readable|json)$")


class AdvisorConfig(BaseModel):
    """Root configuration model."""

    estimation: EstimationConfig = Field(default_factory=EstimationConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _get_env_value(key: str) -> str | None:
    """Get environment variable with IDLEADVISOR_ prefix."""
    env_key = f"{ENV_PREFIX}{key.upper()}"
    return os.environ.get(env_key)


def _apply_env_overrides(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Apply environment variable overrides to config data.

    Example: IDLEADVISOR_ESTIMATION__SYNERGY_FACTOR=0.25 sets
    estimation.synergy_factor to 0.25. List values are comma separated.
    """
    result = data.copy()

    for key, value in result.items():
        env_key = f"{prefix}__{key}" if prefix else key

        if isinstance(value, dict):
            result[key] = _apply_env_overrides(value, env_key)
        else:
            env_value = _get_env_value(env_key)
            if env_value is not None:
                # Coerce to the type of the value being overridden
                if isinstance(value, bool):
                    result[key] = env_value.lower() in ("true", "1", "yes")
                elif isinstance(value, int):
                    result[key] = int(env_value)
                elif isinstance(value, float):
                    result[key] = float(env_value)
                elif isinstance(value, list):
                    result[key] = [item.strip() for item in env_value.split(",") if item.strip()]
                else:
                    result[key] = env_value

    return result


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """Deep merge updates into a copy of base."""
    result = base.copy()
    for key, value in updates.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def default_config_path() -> Path:
    """Location of the bundled default.yaml."""
    project_root = Path(__file__).parent.parent.parent
    return project_root / "configs" / "default.yaml"


def load_config(config_path: str | Path | None = None) -> AdvisorConfig:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to YAML config file. If None, uses configs/default.yaml
            when present and built-in defaults otherwise.

    Returns:
        Validated AdvisorConfig object.

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist.
        ValidationError: If config values are invalid.
    """
    if config_path is None:
        config_path = default_config_path()
        if not config_path.exists():
            data: dict[str, Any] = {}
        else:
            data = _read_yaml(config_path)
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        data = _read_yaml(config_path)

    # Start from defaults so environment overrides reach keys the file omits
    merged = _deep_merge(AdvisorConfig().model_dump(), data)
    merged = _apply_env_overrides(merged)

    return AdvisorConfig.model_validate(merged)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Config file is not valid YAML: {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return loaded


def get_default_config() -> AdvisorConfig:
    """Get default configuration without loading from file."""
    return AdvisorConfig()
