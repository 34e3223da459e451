"""Package directory scanner using scandir and an explicit stack."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Set

logger = logging.getLogger("pkglicense.utils.scanner")

DEFAULT_MANIFEST = "package.json"
DEFAULT_SKIP_DIRS = ("node_modules",)
VCS_DIRS = (".git", ".hg", ".svn")
DEFAULT_MAX_DEPTH = 64


def find_package_dirs(
    root_path: Path,
    manifest_name: str = DEFAULT_MANIFEST,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[Path]:
    """Find every directory under root_path that directly holds a manifest.

    Directories named in skip_dirs (and VCS metadata folders) are never
    entered. Entries that cannot be stat'ed are skipped silently, symlink
    loops are cut by tracking visited real paths, and recursion stops at
    max_depth.

    Args:
        root_path: Directory to start from (included when it has a manifest).
        manifest_name: File name marking a package root.
        skip_dirs: Directory names not to descend into.
        max_depth: Maximum directory depth below root_path.

    Returns:
        Package directories in depth-first, name-sorted order.
    """
    root_path = Path(root_path).resolve()
    skipped = set(skip_dirs) | set(VCS_DIRS)
    visited: Set[str] = set()
    found: List[Path] = []

    stack = [(root_path, 0)]

    while stack:
        current_dir, depth = stack.pop()

        try:
            real = os.path.realpath(current_dir)
        except OSError:
            continue
        if real in visited:
            logger.debug("Skipping already visited directory %s", current_dir)
            continue
        visited.add(real)

        try:
            # Sort for deterministic order
            entries = sorted(os.scandir(current_dir), key=lambda e: e.name)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", current_dir, exc)
            continue

        has_manifest = False
        dirs = []

        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError:
                continue

            if is_dir:
                if entry.name in skipped:
                    continue
                if depth >= max_depth:
                    logger.warning(
                        "Maximum scan depth %d reached at %s", max_depth, entry.path
                    )
                    continue
                dirs.append(Path(entry.path))
            elif is_file and entry.name == manifest_name:
                has_manifest = True

        if has_manifest:
            found.append(current_dir)

        # Reversed to keep name order when popping
        stack.extend((d, depth + 1) for d in reversed(dirs))

    logger.info("Found %d package director(ies) under %s", len(found), root_path)
    return found
