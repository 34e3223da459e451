"""NPM license collector.

Reads the installed dependency tree of a package directory from its
node_modules folders and reports each package's license metadata, keyed
by "name@version". Resolution follows Node's lookup rules: a dependency
required by a package is searched for in that package's node_modules and
then in every ancestor's node_modules.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import networkx as nx

from pkglicense.errors import CollectionError
from pkglicense.parsers.npm.license_detect import detect_licenses

logger = logging.getLogger("pkglicense.parsers.npm.collector")

MANIFEST_NAME = "package.json"
NODE_MODULES = "node_modules"


class NpmLicenseCollector:
    """Collect license records for an npm package and its dependencies.

    Attributes:
        include_dev: Also follow the root package's devDependencies.
    """

    def __init__(self, include_dev: bool = False) -> None:
        self.include_dev = include_dev

    def collect(self, directory: Path, direct: bool = True) -> Dict[str, Dict[str, Any]]:
        """Collect license records for the package rooted at directory.

        Args:
            directory: Directory holding package.json.
            direct: Only report the package and its declared dependencies
                when True; report the whole installed graph when False.

        Returns:
            Dict mapping "name@version" to the package's license record.

        Raises:
            CollectionError: If the root manifest is missing or malformed.
        """
        directory = Path(directory)
        logger.info("NpmLicenseCollector: collecting %s (direct=%s)", directory, direct)

        root_manifest = self._read_manifest(directory / MANIFEST_NAME)
        if root_manifest is None:
            raise CollectionError(directory, f"{MANIFEST_NAME} not found")

        graph = self._build_graph(directory, root_manifest, direct)
        root_id = graph.graph["root"]

        if direct:
            selected = [root_id] + sorted(graph.successors(root_id))
        else:
            selected = [root_id] + sorted(nx.descendants(graph, root_id))

        packages: Dict[str, Dict[str, Any]] = {}
        for node_id in selected:
            attrs = graph.nodes[node_id]
            packages[node_id] = self._make_record(attrs["manifest"], attrs["path"])

        logger.info(
            "NpmLicenseCollector: %d package(s) collected for %s", len(packages), directory
        )
        return packages

    def _build_graph(
        self, directory: Path, root_manifest: Dict[str, Any], direct: bool
    ) -> nx.DiGraph:
        """Build the installed dependency graph starting at directory."""
        graph = nx.DiGraph()
        root_id = self._package_id(root_manifest, directory)
        graph.graph["root"] = root_id
        graph.add_node(root_id, manifest=root_manifest, path=directory)

        queue: List[Tuple[str, Path, Dict[str, Any], bool]] = [
            (root_id, directory, root_manifest, True)
        ]
        seen_dirs = {directory.resolve()}

        while queue:
            parent_id, parent_dir, manifest, is_root = queue.pop(0)

            for dep_name, optional in self._declared_dependencies(manifest, is_root):
                dep_dir = self._resolve(dep_name, parent_dir)
                if dep_dir is None:
                    log = logger.debug if optional else logger.warning
                    log(
                        "NpmLicenseCollector: %s required by %s is not installed",
                        dep_name,
                        parent_id,
                    )
                    continue

                dep_manifest = self._read_manifest(dep_dir / MANIFEST_NAME)
                if dep_manifest is None:
                    continue

                dep_id = self._package_id(dep_manifest, dep_dir, fallback_name=dep_name)
                if not graph.has_node(dep_id):
                    graph.add_node(dep_id, manifest=dep_manifest, path=dep_dir)
                graph.add_edge(parent_id, dep_id)

                # Node resolves a linked package from its real location
                real_dir = dep_dir.resolve()
                if not direct and real_dir not in seen_dirs:
                    seen_dirs.add(real_dir)
                    queue.append((dep_id, real_dir, dep_manifest, False))

        return graph

    def _declared_dependencies(
        self, manifest: Dict[str, Any], is_root: bool
    ) -> Iterator[Tuple[str, bool]]:
        """Yield (name, optional) for each dependency worth following."""
        fields = [("dependencies", False), ("optionalDependencies", True)]
        if is_root and self.include_dev:
            fields.append(("devDependencies", False))

        seen = set()
        for field_name, optional in fields:
            deps = manifest.get(field_name, {})
            if not isinstance(deps, dict):
                continue
            for dep_name in sorted(deps):
                if dep_name in seen:
                    continue
                seen.add(dep_name)
                yield dep_name, optional

    def _resolve(self, dep_name: str, start_dir: Path) -> Optional[Path]:
        """Find the installed directory of dep_name as seen from start_dir.

        The walk goes up through every ancestor, so hoisted packages of an
        enclosing workspace are found as well.
        """
        current = start_dir
        while True:
            if current.name != NODE_MODULES:
                candidate = current / NODE_MODULES / dep_name
                if (candidate / MANIFEST_NAME).is_file():
                    return candidate
            if current.parent == current:
                return None
            current = current.parent

    def _read_manifest(self, path: Path) -> Optional[Dict[str, Any]]:
        """Read and parse a package.json file.

        Returns:
            Parsed manifest, or None when the file does not exist.

        Raises:
            CollectionError: If the file cannot be read or is not a JSON object.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CollectionError(path.parent, f"Cannot read {path}: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise CollectionError(path.parent, f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise CollectionError(path.parent, f"{path} is not a JSON object")
        return data

    @staticmethod
    def _package_id(
        manifest: Dict[str, Any], package_dir: Path, fallback_name: Optional[str] = None
    ) -> str:
        name = manifest.get("name") or fallback_name or package_dir.name
        version = manifest.get("version") or "0.0.0"
        return f"{name}@{version}"

    @staticmethod
    def _make_record(manifest: Dict[str, Any], package_dir: Path) -> Dict[str, Any]:
        """Build the license record reported for one package."""
        licenses, license_file = detect_licenses(manifest, package_dir)
        record: Dict[str, Any] = {"licenses": licenses}

        repository = manifest.get("repository")
        if isinstance(repository, dict):
            repository = repository.get("url")
        if isinstance(repository, str) and repository:
            record["repository"] = repository

        author = manifest.get("author")
        if isinstance(author, dict):
            if author.get("name"):
                record["publisher"] = str(author["name"])
            if author.get("email"):
                record["email"] = str(author["email"])
            if author.get("url"):
                record["url"] = str(author["url"])
        elif isinstance(author, str) and author:
            record["publisher"] = author

        if manifest.get("private") is True:
            record["private"] = True

        record["path"] = str(package_dir)
        if license_file is not None:
            record["licenseFile"] = str(license_file)
        return record


__all__ = ["NpmLicenseCollector"]
