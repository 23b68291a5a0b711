"""Console rendering of recommendations.

Formats numbers with K/M/B/T/Qa suffixes and durations in a compact
``1h 23m`` form. Output goes to any text stream, stdout by default.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Mapping, Sequence
from typing import Any, TextIO

from idle_advisor.core.validation import is_affordable, is_reasonably_affordable
from idle_advisor.models.candidates import Candidate
from idle_advisor.models.results import AnalysisFailure, FailureKind
from idle_advisor.models.state import NormalizedState

_NUMBER_SUFFIXES: tuple[tuple[float, str], ...] = (
    (1e15, "Qa"),
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)
_WIDTH = 51
_DOUBLE_LINE = "═" * _WIDTH
_SINGLE_LINE = "━" * _WIDTH
_THIN_LINE = "─" * _WIDTH

_FAILURE_HINTS: dict[FailureKind, str] = {
    FailureKind.INVALID_SOURCE: "The snapshot is missing currency, rate, buildings or upgrades.",
    FailureKind.NO_CANDIDATES: (
        "Every purchase may take too long to pay back, or nothing is unlocked yet. "
        "Try show-all to drop the payback ceiling."
    ),
    FailureKind.POLICY_FAILURE: "The ranking policy failed and the greedy fallback failed too.",
}


def format_number(amount: float, precision: int = 2) -> str:
    """Format a number with a magnitude suffix (e.g. ``1.23M``)."""
    if math.isnan(amount):
        return "n/a"
    if math.isinf(amount):
        return "inf" if amount > 0 else "-inf"
    if amount == 0:
        return "0"
    magnitude = abs(amount)
    for threshold, suffix in _NUMBER_SUFFIXES:
        if magnitude >= threshold:
            return f"{amount / threshold:.{precision}f}{suffix}"
    return f"{amount:.{precision}f}"


def format_duration(seconds: float) -> str:
    """Format seconds as ``45s``, ``2m 5s``, ``1h 23m`` or ``3d 4h``."""
    if not math.isfinite(seconds) or seconds < 0:
        return "never"
    if seconds < 1:
        return "<1s"
    total = round(seconds)
    if total < 60:
        return f"{total}s"

    if total >= 86_400:
        days = total // 86_400
        hours = (total % 86_400) // 3600
        return f"{days}d {hours}h" if hours else f"{days}d"

    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    # Seconds only matter below an hour
    if secs > 0 and hours == 0:
        parts.append(f"{secs}s")
    return " ".join(parts) or "0s"


def time_to_afford(cost: float, state: NormalizedState) -> float:
    """Seconds of passive income needed before ``cost`` is affordable."""
    if is_affordable(cost, state.currency):
        return 0.0
    if state.rate <= 0:
        return math.inf
    return (cost - state.currency) / state.rate


def summarize(candidate: Candidate | None) -> str:
    """One-line summary of a candidate."""
    if candidate is None:
        return "No recommendation available"
    return (
        f"{candidate.display_name}: cost {format_number(candidate.cost)}, "
        f"+{format_number(candidate.rate_delta)}/s, "
        f"payback {format_duration(candidate.payback_time)}"
    )


class ConsoleRenderer:
    """Writes recommendations as a readable text report."""

    def __init__(
        self,
        stream: TextIO | None = None,
        title: str = "IDLE ROI ADVISOR",
        reasonable_cost_factor: float = 10.0,
    ) -> None:
        self._stream = stream
        self._title = title
        self._reasonable_cost_factor = reasonable_cost_factor

    def present(
        self,
        top: Candidate | None,
        alternatives: Sequence[Candidate],
        state: NormalizedState,
    ) -> None:
        self._header()
        self._status(state)
        if top is not None:
            self._best_choice(top, state)
        else:
            self._no_recommendation()
        if alternatives:
            self._alternatives(alternatives)
        self._write(_THIN_LINE)
        self._write("Run analyze again after purchasing.")
        self._write(_THIN_LINE)

    def present_failure(self, failure: AnalysisFailure) -> None:
        """Explain which kind of failure occurred."""
        self._write(f"Analysis failed [{failure.kind.value}]: {failure.message}")
        hint = _FAILURE_HINTS.get(failure.kind)
        if hint:
            self._write(f"  {hint}")

    def present_candidates(self, candidates: Sequence[Candidate]) -> None:
        """Table of candidates sorted by payback time."""
        if not candidates:
            self._write("No candidates available.")
            return

        self._write("All candidates (sorted by payback time):")
        self._write(_THIN_LINE)
        self._write(f"{'Rank':<6}{'Name':<25}{'Cost':<12}{'Rate':<12}{'Payback':<10}")
        self._write(_THIN_LINE)
        ordered = sorted(candidates, key=lambda c: (c.payback_time, -c.rate_delta))
        for index, candidate in enumerate(ordered, start=1):
            self._write(
                f"{index:<6}"
                f"{candidate.name[:22]:<25}"
                f"{format_number(candidate.cost):<12}"
                f"{'+' + format_number(candidate.rate_delta):<12}"
                f"{format_duration(candidate.payback_time):<10}"
            )
        self._write(_THIN_LINE)

    def present_diagnostics(self, info: Mapping[str, Any]) -> None:
        """Key/value dump of pipeline diagnostics."""
        self._write(_DOUBLE_LINE)
        self._write("  DEBUG INFO")
        self._write(_DOUBLE_LINE)
        for key, value in info.items():
            shown = format_number(value) if isinstance(value, float) else value
            self._write(f"  {key}: {shown}")

    def _header(self) -> None:
        self._write(_DOUBLE_LINE)
        self._write(f"  {self._title}")
        self._write(_DOUBLE_LINE)
        self._write("")

    def _status(self, state: NormalizedState) -> None:
        self._write("Current status:")
        self._write(f"  Currency: {format_number(state.currency)}")
        self._write(f"  Rate: {format_number(state.rate)}/sec")
        self._write("")

    def _best_choice(self, choice: Candidate, state: NormalizedState) -> None:
        self._write(_SINGLE_LINE)
        self._write("BEST INVESTMENT")
        self._write(_SINGLE_LINE)
        self._write("")
        self._write(f"  -> {choice.display_name}")
        self._write(f"    Cost: {format_number(choice.cost)}")
        self._write(f"    Benefit: +{format_number(choice.rate_delta)}/sec")
        self._write(f"    Payback: {format_duration(choice.payback_time)}")

        wait = time_to_afford(choice.cost, state)
        if wait == 0:
            self._write("    Status: affordable now")
        elif wait < 3600:
            self._write(f"    Wait: {format_duration(wait)} until affordable")
        elif is_reasonably_affordable(choice.cost, state.currency, self._reasonable_cost_factor):
            self._write(f"    Status: within reach ({format_duration(wait)} of income)")
        else:
            self._write("    Status: not yet affordable")
        self._write("")

    def _no_recommendation(self) -> None:
        self._write(_SINGLE_LINE)
        self._write("No recommendations available.")
        self._write("")

    def _alternatives(self, alternatives: Sequence[Candidate]) -> None:
        self._write(_SINGLE_LINE)
        self._write(f"TOP {len(alternatives)} ALTERNATIVES")
        self._write(_SINGLE_LINE)
        self._write("")
        for rank, alt in enumerate(alternatives, start=1):
            self._write(f"{rank}. {alt.display_name}")
            self._write(
                f"   Cost: {format_number(alt.cost)} | +{format_number(alt.rate_delta)}/sec"
                f" | Payback: {format_duration(alt.payback_time)}"
            )
        self._write("")

    def _write(self, line: str) -> None:
        print(line, file=self._stream if self._stream is not None else sys.stdout)
