"""CLI option models and parser helpers."""

from __future__ import annotations

import argparse
from enum import StrEnum

from idle_advisor.models.candidates import CandidateKind
from idle_advisor.strategy.ranking import GREEDY, RELAXED


class LogFormat(StrEnum):
    """CLI log formatter mode."""

    READABLE = "readable"
    JSON = "json"


class ExitCode:
    """Process exit codes."""

    OK = 0
    ANALYSIS_FAILED = 1
    USAGE = 2


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _add_snapshot_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("snapshot", type=str, help="Snapshot file (.json, .yaml or .yml)")


def build_arg_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="idle-advisor",
        description="Recommend the idle-game purchase that pays back fastest",
    )
    parser.add_argument("--config", type=str, default=None, help="Configuration YAML file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=_LOG_LEVELS,
        help="Log level (defaults to the configured level)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        choices=[fmt.value for fmt in LogFormat],
        help="Terminal log format (defaults to the configured format)",
    )
    subparsers = parser.add_subparsers(dest="command")

    analyze_parser = subparsers.add_parser("analyze", help="Recommend the best purchase")
    _add_snapshot_argument(analyze_parser)
    analyze_parser.add_argument(
        "--policy",
        type=str,
        default=None,
        choices=[GREEDY, RELAXED],
        help="Ranking policy for this run",
    )
    analyze_parser.add_argument(
        "--alternatives",
        type=int,
        default=None,
        help="Number of alternatives to show",
    )

    show_all_parser = subparsers.add_parser(
        "show-all",
        help="Recommend without the payback ceiling",
    )
    _add_snapshot_argument(show_all_parser)

    candidates_parser = subparsers.add_parser("candidates", help="List every purchase candidate")
    _add_snapshot_argument(candidates_parser)
    candidates_parser.add_argument(
        "--kind",
        type=str,
        default=None,
        choices=[kind.value for kind in CandidateKind],
        help="Only list candidates of this kind",
    )
    candidates_parser.add_argument(
        "--affordable",
        action="store_true",
        help="Only list candidates affordable right now",
    )

    debug_parser = subparsers.add_parser("debug", help="Show pipeline diagnostics")
    _add_snapshot_argument(debug_parser)

    subparsers.add_parser("version", help="Print the version")
    return parser
