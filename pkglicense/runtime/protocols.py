"""
Protocol definitions for runtime components.

Protocols provide abstract interfaces for dependency injection,
keeping the orchestrator independent of any one ecosystem and
improving testability.
"""

from pathlib import Path
from typing import Any, Dict, Protocol


class LicenseCollector(Protocol):
    """
    Collector protocol for license metadata of one package directory.

    Example:
        collector = NpmLicenseCollector()
        packages = collector.collect(Path("packages/web"), direct=True)
        # {"react@18.2.0": {"licenses": ["MIT"], "path": "...", ...}}
    """

    def collect(self, directory: Path, direct: bool = True) -> Dict[str, Dict[str, Any]]:
        """
        Collect license records for the package rooted at directory.

        Args:
            directory: Package root holding the manifest file
            direct: Restrict to directly declared dependencies

        Returns:
            Mapping of "name@version" to the dependency's license record

        Raises:
            CollectionError: If metadata cannot be collected
        """
        ...
