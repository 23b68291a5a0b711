"""Presentation layer: turns ranked candidates into human-readable output."""

from idle_advisor.presentation.console import (
    ConsoleRenderer,
    format_duration,
    format_number,
    summarize,
    time_to_afford,
)

__all__ = [
    "ConsoleRenderer",
    "format_duration",
    "format_number",
    "summarize",
    "time_to_afford",
]
