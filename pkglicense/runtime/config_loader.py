"""Helpers for building a CheckConfig from files and command-line flags.

This module provides:

* load_config_file: read a TOML/JSON settings file (a pyproject.toml is
  read from its [tool.pkglicense] table)
* load_list_file: read a JSON array of strings (allow-list, exclusions)
* build_check_config: merge defaults, config file and CLI flags
"""

from __future__ import annotations

import json
import logging
import tomllib
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from pkglicense.config.schema import CheckConfig
from pkglicense.errors import FilesystemAccessError

logger = logging.getLogger("pkglicense.runtime.config_loader")

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off", ""}

_STRING_LIST = TypeAdapter(List[str])


def str2bool(value: Union[str, bool, None]) -> bool:
    """Interpret a command-line value as a boolean.

    Raises:
        ValueError: If the value is not a recognised truthy/falsy word.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean value, got {value!r}")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FilesystemAccessError(f"Cannot read {path}: {exc}") from exc


def load_list_file(path: Path) -> List[str]:
    """Load a JSON array of strings.

    Args:
        path: File holding e.g. ["MIT", "ISC", "BSD.*"].

    Returns:
        The list of strings.

    Raises:
        FilesystemAccessError: If the file cannot be read or is not a
            JSON array of strings.
    """
    text = _read_text(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FilesystemAccessError(f"Invalid JSON in {path}: {exc}") from exc

    try:
        values = _STRING_LIST.validate_python(data)
    except ValidationError as exc:
        raise FilesystemAccessError(
            f"{path} must contain a JSON array of strings: {exc}"
        ) from exc

    logger.debug("Loaded %d entr(ies) from %s", len(values), path)
    return values


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load settings from a .toml or .json file.

    Keys mirror CheckConfig fields. For pyproject.toml only the
    [tool.pkglicense] table is used.

    Raises:
        FilesystemAccessError: If the file cannot be read or parsed.
        ValueError: If the top-level value is not a mapping.
    """
    text = _read_text(path)
    suffix = path.suffix.lower()

    try:
        if suffix in {".toml", ".tml"}:
            data: Any = tomllib.loads(text)
        elif suffix == ".json":
            data = json.loads(text)
        else:
            # Fallback: guess from content
            stripped = text.lstrip()
            data = json.loads(text) if stripped.startswith("{") else tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise FilesystemAccessError(f"Cannot parse configuration {path}: {exc}") from exc

    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("pkglicense", {})

    if not isinstance(data, dict):
        raise ValueError("Top-level configuration must be a mapping/dict")

    logger.info("Loaded configuration from file: %s", path)
    return data


def build_check_config(args: Namespace, cwd: Optional[Path] = None) -> CheckConfig:
    """Build the run configuration from parsed command-line arguments.

    Relative file arguments are resolved against the project root, which
    itself defaults to the current working directory.

    Args:
        args: Namespace produced by pkglicense.main's argument parser.
        cwd: Directory used in place of Path.cwd() (for tests).

    Returns:
        Validated CheckConfig.
    """
    base = cwd or Path.cwd()
    root_arg = getattr(args, "root", None)
    root = (base / root_arg if root_arg else base).resolve()

    settings: Dict[str, Any] = {}
    config_arg = getattr(args, "config", None)
    if config_arg:
        settings.update(load_config_file(root / config_arg))

    allow_only = getattr(args, "allow_only", None)
    if allow_only:
        settings["allow_only"] = load_list_file(root / allow_only)

    excluded = getattr(args, "excluded", None)
    if excluded:
        settings["excluded"] = load_list_file(root / excluded)

    target = getattr(args, "target", None)
    if target:
        settings["target"] = Path(target)

    for flag in ("ci", "direct"):
        value = getattr(args, flag, None)
        if value is not None:
            settings[flag] = str2bool(value)

    if getattr(args, "dev", False):
        settings["include_dev"] = True

    settings["root"] = root
    config = CheckConfig(**settings)
    logger.debug("Effective configuration: %s", config.model_dump())
    return config


__all__ = ["build_check_config", "load_config_file", "load_list_file", "str2bool"]
