"""Path normalization utilities for portable license snapshots."""

import os
from pathlib import Path
from typing import Any, Union


def relative_dir_key(directory: Union[Path, str], root_path: Union[Path, str]) -> str:
    """
    Build the snapshot key for a package directory.

    Keys are root-relative, use forward slashes, and start and end with
    a separator so the root itself maps to "/".

    Examples:
        >>> relative_dir_key(Path("/work/proj/packages/a"), Path("/work/proj"))
        '/packages/a/'
        >>> relative_dir_key(Path("/work/proj"), Path("/work/proj"))
        '/'
    """
    directory = Path(directory)
    root_path = Path(root_path)
    try:
        rel = directory.relative_to(root_path)
    except ValueError:
        raise ValueError(f"{directory} is not inside {root_path}") from None

    rel_str = rel.as_posix()
    if rel_str in ("", "."):
        return "/"
    return "/" + rel_str.strip("/") + "/"


def normalize_paths(data: Any, root_path: Union[Path, str]) -> Any:
    """
    Replace the absolute root prefix in every string leaf of data.

    The prefix is swapped for the root's base name, so
    "/work/proj/node_modules/a/LICENSE" becomes "proj/node_modules/a/LICENSE".
    Mappings and lists are rebuilt recursively; other values are returned
    as they are. Applying this twice with the same root is a no-op.

    Args:
        data: Collected license structure (dicts, lists, scalars).
        root_path: Absolute project root.

    Returns:
        A normalized copy of data.
    """
    root_str = str(root_path).rstrip("/\\")
    base_name = Path(root_str).name
    if not root_str or not base_name:
        return data
    return _normalize(data, root_str, base_name)


def _normalize(value: Any, root_str: str, base_name: str) -> Any:
    if isinstance(value, str):
        if value == root_str:
            return base_name
        for sep in ("/", os.sep):
            if value.startswith(root_str + sep):
                rest = value[len(root_str) + 1:]
                return base_name + "/" + rest.replace(os.sep, "/")
        return value
    if isinstance(value, dict):
        return {key: _normalize(item, root_str, base_name) for key, item in value.items()}
    if isinstance(value, list):
        return [_normalize(item, root_str, base_name) for item in value]
    return value
