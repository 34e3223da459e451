"""Error types raised while checking package licenses.

Every failure below the CLI boundary is raised as a subclass of
LicenseCheckError and handled once in pkglicense.cli.check.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================

class LicenseCheckError(Exception):
    """Base class for fatal license check failures."""

    pass


class FilesystemAccessError(LicenseCheckError):
    """A required file (allow-list, exclusion list, config) could not be read.

    Stat failures during directory scanning are not raised; the scanner
    skips those entries instead.
    """

    pass


class CollectionError(LicenseCheckError):
    """License metadata could not be collected for a package directory."""

    def __init__(self, directory: Path, message: str) -> None:
        super().__init__(f"Some error occurred while processing {directory}: {message}")
        self.directory = directory


class LicenseViolation(LicenseCheckError):
    """One or more dependencies failed the license allow-list.

    Attributes:
        directory: Package directory whose dependencies were rejected.
        violations: Human-readable message per rejected dependency.
    """

    def __init__(self, directory: Path, violations: List[str]) -> None:
        super().__init__(
            f"{len(violations)} dependency license violation(s) in {directory}"
        )
        self.directory = directory
        self.violations = list(violations)


class WriteError(LicenseCheckError):
    """The snapshot file could not be written."""

    def __init__(self, target: Path, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause else ""
        super().__init__(f"some error when writing to {target}{detail}")
        self.target = target


class SnapshotMismatch(LicenseCheckError):
    """CI mode found a snapshot that differs from the computed licenses."""

    def __init__(self, target: Path, reason: str = "has changed") -> None:
        super().__init__(
            f"License snapshot {target} {reason}. Run pkglicense without "
            f"--ci and commit {target.name} before merging."
        )
        self.target = target


__all__ = [
    "LicenseCheckError",
    "FilesystemAccessError",
    "CollectionError",
    "LicenseViolation",
    "WriteError",
    "SnapshotMismatch",
]
