"""CLI entrypoint for the idle advisor."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from idle_advisor import __version__
from idle_advisor.cli.helpers import (
    _configure_logging,
    _load_cli_config,
    _resolve_logging_options,
)
from idle_advisor.cli.options import ExitCode, LogFormat, build_arg_parser
from idle_advisor.config.loader import AdvisorConfig
from idle_advisor.core.advisor import Advisor
from idle_advisor.core.economics import affordable_candidates, candidates_by_kind
from idle_advisor.interfaces.errors import InvalidSnapshotError
from idle_advisor.models.candidates import CandidateKind
from idle_advisor.models.results import AnalysisFailure, AnalysisResult, FailureKind
from idle_advisor.presentation.console import ConsoleRenderer
from idle_advisor.providers.file import SnapshotFileError, load_snapshot
from idle_advisor.strategy.ranking import RELAXED

logger = logging.getLogger(__name__)


def _renderer(config: AdvisorConfig, title: str = "IDLE ROI ADVISOR") -> ConsoleRenderer:
    factor = config.ranking.reasonable_cost_factor
    return ConsoleRenderer(title=title, reasonable_cost_factor=factor)


def _report(result: AnalysisResult, renderer: ConsoleRenderer) -> int:
    """Render an analysis result and map it to an exit code."""
    rec = result.recommendation
    if rec is not None:
        renderer.present(rec.top, rec.alternatives, rec.state)
        return ExitCode.OK

    if result.failure is not None:
        renderer.present_failure(result.failure)
    return ExitCode.ANALYSIS_FAILED


def analyze_command(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """Recommend the best purchase for a snapshot file."""
    raw = load_snapshot(args.snapshot)
    return _report(Advisor(config).analyze(raw), _renderer(config))


def show_all_command(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """Recommend using the relaxed policy."""
    raw = load_snapshot(args.snapshot)
    result = Advisor(config).show_all(raw)
    return _report(result, _renderer(config, title=f"IDLE ROI ADVISOR ({RELAXED.upper()})"))


def candidates_command(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """List candidates, optionally filtered by kind and affordability."""
    raw = load_snapshot(args.snapshot)
    advisor = Advisor(config)
    renderer = _renderer(config)
    try:
        state = advisor.normalize(raw)
    except InvalidSnapshotError as exc:
        renderer.present_failure(AnalysisFailure(FailureKind.INVALID_SOURCE, str(exc)))
        return ExitCode.ANALYSIS_FAILED

    candidates = advisor.candidates_for(state)
    if args.kind:
        candidates = candidates_by_kind(candidates, CandidateKind(args.kind))
    if args.affordable:
        candidates = affordable_candidates(candidates, state.currency)
    renderer.present_candidates(candidates)
    return ExitCode.OK


def debug_command(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """Print diagnostics followed by the full candidate table."""
    raw = load_snapshot(args.snapshot)
    advisor = Advisor(config)
    renderer = _renderer(config)
    info = advisor.diagnostics(raw)
    renderer.present_diagnostics(info)
    if not info.get("valid_source"):
        return ExitCode.ANALYSIS_FAILED
    renderer.present_candidates(advisor.list_candidates(raw))
    return ExitCode.OK


_COMMANDS: dict[str, Any] = {
    "analyze": analyze_command,
    "show-all": show_all_command,
    "candidates": candidates_command,
    "debug": debug_command,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint function."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return ExitCode.USAGE

    if args.command == "version":
        print(f"idle-advisor {__version__}")
        return ExitCode.OK

    # Bootstrap logger so config errors are reported in the requested format.
    _configure_logging(
        level=str(args.log_level or "INFO"),
        log_format=str(args.log_format or LogFormat.READABLE.value),
    )

    try:
        config = _load_cli_config(args)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return ExitCode.USAGE

    level, log_format = _resolve_logging_options(args, config)
    _configure_logging(level=level, log_format=log_format)

    command = _COMMANDS.get(args.command)
    if command is None:
        logger.error("Unsupported command: %s", args.command)
        return ExitCode.USAGE

    try:
        return command(args, config)
    except SnapshotFileError as exc:
        logger.error("%s", exc)
        return ExitCode.USAGE


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
