"""License check orchestration.

A run moves through fixed phases:

    SCAN -> COLLECT (per package directory) -> FILTER -> NORMALIZE
         -> SERIALIZE -> WRITE | VERIFY

Package directories are processed one at a time and folded into a single
result mapping. The first failure of any phase propagates to the caller;
nothing is retried and no partial snapshot is written.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pkglicense.config.schema import CheckConfig
from pkglicense.errors import (
    CollectionError,
    FilesystemAccessError,
    LicenseCheckError,
    LicenseViolation,
)
from pkglicense.export.snapshot import render_snapshot, verify_snapshot, write_snapshot
from pkglicense.parsers.npm.collector import NpmLicenseCollector
from pkglicense.runtime.policies.whitelist import compile_patterns, find_violations
from pkglicense.runtime.protocols import LicenseCollector
from pkglicense.utils.path_utils import normalize_paths, relative_dir_key
from pkglicense.utils.scanner import find_package_dirs

logger = logging.getLogger("pkglicense.runtime.checker")


class CheckPhase(Enum):
    """Phases of a license check run."""

    SCAN = "scan"
    COLLECT = "collect"
    FILTER = "filter"
    NORMALIZE = "normalize"
    SERIALIZE = "serialize"
    WRITE = "write"
    VERIFY = "verify"
    DONE = "done"


@dataclass
class CheckResult:
    """Outcome of a successful license check run."""

    message: str
    target: Path
    snapshot: Dict[str, Any] = field(default_factory=dict)
    directories: List[Path] = field(default_factory=list)
    package_count: int = 0
    verified: bool = False
    elapsed: float = 0.0


class LicenseCheck:
    """Run a license check over every package directory below a root.

    Args:
        config: Run settings.
        collector: License collector; defaults to the npm collector.
    """

    def __init__(
        self,
        config: CheckConfig,
        collector: Optional[LicenseCollector] = None,
    ) -> None:
        self.config = config
        self.collector: LicenseCollector = collector or NpmLicenseCollector(
            include_dev=config.include_dev
        )
        self.phase = CheckPhase.SCAN
        self._patterns = compile_patterns(config.allow_only)
        self._root = Path(config.root).resolve()

    def run(self) -> CheckResult:
        """Execute the check.

        Returns:
            CheckResult describing the written or verified snapshot.

        Raises:
            LicenseCheckError: On the first failure of any phase.
        """
        start_time = time.time()
        target = self.config.target_path

        self.phase = CheckPhase.SCAN
        if not self._root.is_dir():
            raise FilesystemAccessError(
                f"Project root {self._root} does not exist or is not a directory"
            )
        directories = find_package_dirs(
            self._root,
            manifest_name=self.config.manifest_name,
            skip_dirs=self.config.skip_dirs,
            max_depth=self.config.max_depth,
        )

        combined: Dict[str, Any] = {}
        package_count = 0
        for directory in directories:
            packages = self._check_directory(directory)
            combined[relative_dir_key(directory, self._root)] = packages
            package_count += len(packages)

        self.phase = CheckPhase.NORMALIZE
        snapshot = normalize_paths(combined, self._root)

        self.phase = CheckPhase.SERIALIZE
        document = render_snapshot(snapshot)

        if self.config.ci:
            self.phase = CheckPhase.VERIFY
            verify_snapshot(target, document)
            message = "Licenses unchanged"
        else:
            self.phase = CheckPhase.WRITE
            write_snapshot(target, document)
            message = f"Saved license info to {target}"

        self.phase = CheckPhase.DONE
        elapsed = time.time() - start_time
        logger.info(
            "License check completed in %.2fs: %d director(ies), %d package(s)",
            elapsed,
            len(directories),
            package_count,
        )

        return CheckResult(
            message=message,
            target=target,
            snapshot=snapshot,
            directories=directories,
            package_count=package_count,
            verified=self.config.ci,
            elapsed=elapsed,
        )

    def _check_directory(self, directory: Path) -> Dict[str, Dict[str, Any]]:
        """Collect and filter licenses of one package directory."""
        self.phase = CheckPhase.COLLECT
        logger.debug("Collecting licenses for %s", directory)
        try:
            packages = self.collector.collect(directory, direct=self.config.direct)
        except LicenseCheckError:
            raise
        except (OSError, ValueError) as exc:
            raise CollectionError(directory, str(exc)) from exc

        self.phase = CheckPhase.FILTER
        violations = find_violations(packages, self._patterns, self.config.excluded)
        if violations:
            raise LicenseViolation(directory, violations)
        return packages


def run_check(
    config: CheckConfig, collector: Optional[LicenseCollector] = None
) -> CheckResult:
    """Convenience wrapper running a LicenseCheck once."""
    return LicenseCheck(config, collector=collector).run()


__all__ = ["CheckPhase", "CheckResult", "LicenseCheck", "run_check"]
