"""File-backed state provider: reads exported snapshots from JSON or YAML."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from idle_advisor.interfaces.errors import AdvisorError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


class SnapshotFileError(AdvisorError):
    """Raised when a snapshot file is missing or cannot be parsed."""

    pass


def load_snapshot(path: str | Path) -> dict[str, Any]:
    """Load a raw snapshot mapping from disk.

    The format is picked from the suffix; anything else is parsed as YAML,
    which also accepts JSON.

    Args:
        path: Snapshot file path.

    Returns:
        The parsed top-level mapping.

    Raises:
        SnapshotFileError: If the file is missing, unparseable, or not a mapping.
    """
    snapshot_path = Path(path)
    if not snapshot_path.is_file():
        raise SnapshotFileError(f"Snapshot file not found: {snapshot_path}")

    try:
        text = snapshot_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SnapshotFileError(f"Cannot read snapshot file {snapshot_path}: {exc}") from exc

    suffix = snapshot_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        logger.debug("Unrecognized suffix %r; parsing %s as YAML", suffix, snapshot_path)

    try:
        if suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SnapshotFileError(f"Cannot parse snapshot file {snapshot_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise SnapshotFileError(
            f"Snapshot file {snapshot_path} must contain a mapping at the top level"
        )
    logger.debug("Loaded snapshot from %s", snapshot_path)
    return data
