"""License extraction from npm manifests and license files.

Declared licenses are read from the manifest first:

* "license": "MIT" or an SPDX expression
* "license": {"type": "MIT", "url": ...} (deprecated object form)
* "licenses": [{"type": "MIT"}, "ISC"] (deprecated array form)
* "license": "SEE LICENSE IN <file>"

When nothing is declared, the package's license file is matched against
anchor phrases and the guessed identifier is marked with a trailing "*".
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger("pkglicense.parsers.npm.license_detect")

UNKNOWN_LICENSE = "UNKNOWN"
GUESSED_SUFFIX = "*"
MAX_LICENSE_BYTES = 128 * 1024

LICENSE_FILE_PREFIXES = ("license", "licence", "copying")

# Checked in order; more specific texts come before the ones they contain.
ANCHOR_PHRASES: List[Tuple[str, Tuple[str, ...]]] = [
    ("AGPL-3.0", ("gnu affero general public license version 3",)),
    ("LGPL-3.0", ("gnu lesser general public license version 3",)),
    ("LGPL-2.1", ("gnu lesser general public license version 2.1",)),
    ("GPL-3.0", ("gnu general public license version 3",)),
    ("GPL-2.0", ("gnu general public license version 2",)),
    ("Apache-2.0", ("apache license version 2.0",)),
    ("MPL-2.0", ("mozilla public license version 2.0",)),
    ("BSD-3-Clause", ("redistribution and use in source and binary forms", "neither the name")),
    ("BSD-2-Clause", ("redistribution and use in source and binary forms",)),
    ("ISC", ("permission to use, copy, modify, and/or distribute this software",)),
    ("MIT", ("permission is hereby granted, free of charge",)),
    ("Unlicense", ("this is free and unencumbered software released into the public domain",)),
    ("CC0-1.0", ("cc0 1.0 universal",)),
    ("WTFPL", ("do what the fuck you want to",)),
]

_SEE_LICENSE_RE = re.compile(r"^see licen[cs]e in\s+(.+)$", re.IGNORECASE)


def find_license_file(package_dir: Path) -> Optional[Path]:
    """Return the first LICENSE/LICENCE/COPYING file in package_dir."""
    try:
        names = sorted(entry.name for entry in package_dir.iterdir() if entry.is_file())
    except OSError as exc:
        logger.debug("Cannot list %s: %s", package_dir, exc)
        return None

    for name in names:
        if name.lower().startswith(LICENSE_FILE_PREFIXES):
            return package_dir / name
    return None


def guess_license_from_text(text: str) -> Optional[str]:
    """Match license text against anchor phrases.

    Returns:
        SPDX identifier of the first matching license, or None.
    """
    normalized = " ".join(text.lower().split())
    for spdx, phrases in ANCHOR_PHRASES:
        if all(phrase in normalized for phrase in phrases):
            return spdx
    return None


def _read_text(path: Path) -> Optional[str]:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read(MAX_LICENSE_BYTES)
    except OSError as exc:
        logger.debug("Cannot read license file %s: %s", path, exc)
        return None


def _declared_licenses(manifest: Dict[str, Any]) -> List[str]:
    declared = manifest.get("license")
    if isinstance(declared, str) and declared.strip():
        return [declared.strip()]
    if isinstance(declared, dict) and isinstance(declared.get("type"), str):
        return [declared["type"].strip()]

    legacy = manifest.get("licenses")
    found: List[str] = []
    if isinstance(legacy, list):
        for item in legacy:
            if isinstance(item, str) and item.strip():
                found.append(item.strip())
            elif isinstance(item, dict) and isinstance(item.get("type"), str):
                found.append(item["type"].strip())
    elif isinstance(legacy, str) and legacy.strip():
        found.append(legacy.strip())
    return found


def detect_licenses(
    manifest: Dict[str, Any], package_dir: Path
) -> Tuple[List[str], Optional[Path]]:
    """Determine the licenses of an installed package.

    Args:
        manifest: Parsed package.json content.
        package_dir: Directory holding the package.

    Returns:
        A (licenses, license_file) pair. licenses is never empty; it holds
        "UNKNOWN" when nothing could be determined.
    """
    license_file = find_license_file(package_dir)
    declared = _declared_licenses(manifest)

    if len(declared) == 1:
        match = _SEE_LICENSE_RE.match(declared[0])
        if match:
            target = match.group(1).strip()
            candidate = package_dir / target
            if candidate.is_file():
                license_file = candidate
            return [f"Custom: {target}"], license_file

    if declared:
        return declared, license_file

    if license_file is not None:
        text = _read_text(license_file)
        guessed = guess_license_from_text(text) if text else None
        if guessed:
            logger.debug("Guessed %s for %s from %s", guessed, package_dir, license_file.name)
            return [guessed + GUESSED_SUFFIX], license_file

    return [UNKNOWN_LICENSE], license_file


__all__ = [
    "UNKNOWN_LICENSE",
    "detect_licenses",
    "find_license_file",
    "guess_license_from_text",
]
