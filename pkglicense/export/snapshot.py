"""JSON snapshot export and verification for collected licenses."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pkglicense.errors import SnapshotMismatch, WriteError

logger = logging.getLogger("pkglicense.export.snapshot")

DEFAULT_SNAPSHOT_NAME = "package-license.json"
SNAPSHOT_INDENT = 4


def render_snapshot(results: Dict[str, Any]) -> str:
    """Serialize results with sorted keys and fixed indentation.

    Args:
        results: Normalized licenses keyed by relative directory.

    Returns:
        The snapshot document, ending with a newline.
    """
    return (
        json.dumps(results, indent=SNAPSHOT_INDENT, sort_keys=True, ensure_ascii=False)
        + "\n"
    )


def write_snapshot(output_path: Path, document: str) -> None:
    """Write the snapshot, replacing any existing file.

    Raises:
        WriteError: If the file cannot be written.
    """
    logger.info("Writing license snapshot: %s", output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(document.encode("utf-8"))
    except OSError as exc:
        raise WriteError(output_path, exc) from exc


def verify_snapshot(output_path: Path, document: str) -> None:
    """Compare the committed snapshot byte-for-byte with document.

    The file is only read, never written.

    Raises:
        SnapshotMismatch: If the file is missing, unreadable, or different.
    """
    logger.info("Verifying license snapshot: %s", output_path)
    try:
        existing = output_path.read_bytes()
    except FileNotFoundError as exc:
        raise SnapshotMismatch(output_path, "does not exist") from exc
    except OSError as exc:
        raise SnapshotMismatch(output_path, f"could not be read ({exc})") from exc

    if existing != document.encode("utf-8"):
        raise SnapshotMismatch(output_path)

    logger.debug("Snapshot %s matches (%d bytes)", output_path, len(existing))
