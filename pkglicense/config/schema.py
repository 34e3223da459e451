"""Configuration schema definitions using Pydantic for validation.

CheckConfig holds every setting of a license check run. Values come from
built-in defaults, an optional config file, and command-line flags, in
that order of precedence.
"""

import re
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, field_validator

from pkglicense.export.snapshot import DEFAULT_SNAPSHOT_NAME
from pkglicense.utils.scanner import DEFAULT_MANIFEST, DEFAULT_MAX_DEPTH, DEFAULT_SKIP_DIRS


class CheckConfig(BaseModel):
    """Settings for one license check run.

    Attributes:
        root: Project root to scan.
        allow_only: License patterns (regular expressions, case-insensitive).
            Empty means no allow-list is enforced.
        excluded: Package names exempt from the allow-list.
        target: Snapshot file path, relative to root unless absolute.
        ci: Verify the snapshot instead of writing it.
        direct: Only inspect directly declared dependencies.
        include_dev: Follow devDependencies of each scanned package.
        manifest_name: File marking a package root.
        skip_dirs: Directory names the scanner never enters.
        max_depth: Maximum directory depth below root.
    """

    root: Path = Field(default_factory=Path.cwd)
    allow_only: List[str] = Field(default_factory=list)
    excluded: List[str] = Field(default_factory=list)
    target: Path = Path(DEFAULT_SNAPSHOT_NAME)
    ci: bool = False
    direct: bool = True
    include_dev: bool = False
    manifest_name: str = DEFAULT_MANIFEST
    skip_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=1000)

    model_config = {"extra": "forbid"}

    @field_validator("allow_only")
    @classmethod
    def validate_patterns(cls, v: List[str]) -> List[str]:
        """Validate that every allow-list entry is a regular expression."""
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"Invalid license pattern '{pattern}': {exc}") from exc
        return v

    @field_validator("manifest_name")
    @classmethod
    def validate_manifest_name(cls, v: str) -> str:
        """Validate that the manifest name is a bare file name."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid manifest file name: {v!r}")
        return v

    @property
    def target_path(self) -> Path:
        """Snapshot path resolved against the project root."""
        return self.target if self.target.is_absolute() else self.root / self.target
