"""State providers that produce raw snapshots for the advisor."""

from idle_advisor.providers.file import SUPPORTED_SUFFIXES, SnapshotFileError, load_snapshot

__all__ = ["SUPPORTED_SUFFIXES", "SnapshotFileError", "load_snapshot"]
