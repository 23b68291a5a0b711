"""Shared helper utilities for CLI commands."""

from __future__ import annotations

import argparse
import json
import logging

from idle_advisor.cli.options import LogFormat
from idle_advisor.config.loader import AdvisorConfig, load_config

logger = logging.getLogger(__name__)


class _JSONLogFormatter(logging.Formatter):
    """Compact JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=True)


def _configure_logging(level: str = "INFO", log_format: str = LogFormat.READABLE.value) -> None:
    """Install a single stderr handler on the root logger."""
    resolved_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.handlers = [h for h in root.handlers if not getattr(h, "_idle_advisor_handler", False)]

    handler = logging.StreamHandler()
    handler._idle_advisor_handler = True  # type: ignore[attr-defined]
    if log_format == LogFormat.JSON.value:
        formatter: logging.Formatter = _JSONLogFormatter(datefmt="%Y-%m-%dT%H:%M:%S")
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(resolved_level)


def _load_cli_config(args: argparse.Namespace) -> AdvisorConfig:
    """Load configuration and apply per-run CLI overrides.

    Raises:
        FileNotFoundError: If ``--config`` names a missing file.
        ValueError: If the configuration is malformed or an override is out of range.
    """
    config = load_config(getattr(args, "config", None))

    ranking_updates: dict[str, object] = {}
    policy = getattr(args, "policy", None)
    if policy:
        ranking_updates["policy"] = policy
    alternatives = getattr(args, "alternatives", None)
    if alternatives is not None:
        if alternatives < 0:
            raise ValueError(f"--alternatives must be >= 0, got {alternatives}")
        ranking_updates["alternatives_count"] = alternatives

    if ranking_updates:
        ranking = config.ranking.model_copy(update=ranking_updates)
        config = config.model_copy(update={"ranking": ranking})
    return config


def _resolve_logging_options(args: argparse.Namespace, config: AdvisorConfig) -> tuple[str, str]:
    """CLI flags win over configured logging settings."""
    level = getattr(args, "log_level", None) or config.logging.level
    log_format = getattr(args, "log_format", None) or config.logging.format
    return str(level), str(log_format)
