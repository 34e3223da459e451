"""Allow-list policy for collected dependency licenses."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping

logger = logging.getLogger("pkglicense.runtime.policies.whitelist")


def compile_patterns(patterns: Iterable[str]) -> List[re.Pattern[str]]:
    """Compile allow-list entries into case-insensitive regular expressions.

    Raises:
        ValueError: If an entry is not a valid regular expression.
    """
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as exc:
            raise ValueError(f"Invalid license pattern {pattern!r}: {exc}") from exc
    return compiled


def package_name(package_id: str) -> str:
    """Strip the version from a "name@version" key, keeping npm scopes.

    >>> package_name("@babel/core@7.24.0")
    '@babel/core'
    """
    name, sep, _version = package_id.rpartition("@")
    if not sep or not name:
        return package_id
    return name


def license_string(licenses: Any) -> str:
    """Render a record's licenses the way they appear in messages."""
    if isinstance(licenses, (list, tuple)):
        return ", ".join(str(item) for item in licenses)
    if licenses is None:
        return ""
    return str(licenses)


def find_violations(
    packages: Mapping[str, Dict[str, Any]],
    patterns: List[re.Pattern[str]],
    excluded: Iterable[str] = (),
) -> List[str]:
    """Return a message for every dependency not covered by the allow-list.

    An empty pattern list means no allow-list is configured, so nothing
    is reported.

    Args:
        packages: Collected records keyed by "name@version".
        patterns: Compiled allow-list patterns.
        excluded: Package names exempt from the check.

    Returns:
        Messages of the form "(name@version) Invalid License: <licenses>".
    """
    if not patterns:
        return []

    excluded_names = set(excluded)
    violations: List[str] = []

    for package_id, record in packages.items():
        if package_name(package_id) in excluded_names:
            logger.debug("Skipping excluded package %s", package_id)
            continue
        licenses = license_string((record or {}).get("licenses"))
        if not any(regex.search(licenses) for regex in patterns):
            violations.append(f"({package_id}) Invalid License: {licenses}")

    return violations


__all__ = ["compile_patterns", "find_violations", "license_string", "package_name"]
