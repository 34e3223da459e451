"""Shared fixtures for pkglicense tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest


def write_package(
    directory: Path,
    name: str,
    version: str = "1.0.0",
    license: Optional[Any] = None,
    dependencies: Optional[Dict[str, str]] = None,
    license_text: Optional[str] = None,
    **extra: Any,
) -> Path:
    """Create a package directory with a package.json (and optional LICENSE)."""
    directory.mkdir(parents=True, exist_ok=True)
    manifest: Dict[str, Any] = {"name": name, "version": version}
    if license is not None:
        manifest["license"] = license
    if dependencies:
        manifest["dependencies"] = dependencies
    manifest.update(extra)
    (directory / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
    if license_text is not None:
        (directory / "LICENSE").write_text(license_text, encoding="utf-8")
    return directory


@pytest.fixture
def make_package() -> Callable[..., Path]:
    """Factory writing npm package directories."""
    return write_package


@pytest.fixture
def two_package_project(tmp_path: Path) -> Path:
    """Project with pkgA (MIT) and pkgB (GPL-3.0) side by side."""
    root = tmp_path / "project"
    write_package(root / "pkgA", "pkgA", license="MIT")
    write_package(root / "pkgB", "pkgB", license="GPL-3.0")
    return root


@pytest.fixture
def json_file() -> Callable[[Path, Any], Path]:
    """Factory writing a JSON document to a path."""

    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
