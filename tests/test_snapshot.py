"""Snapshot writer and CI verification tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pkglicense.errors import SnapshotMismatch, WriteError
from pkglicense.export.snapshot import render_snapshot, verify_snapshot, write_snapshot

RESULTS = {
    "/pkgB/": {"pkgB@1.0.0": {"licenses": ["MIT"], "path": "project/pkgB"}},
    "/pkgA/": {"pkgA@1.0.0": {"path": "project/pkgA", "licenses": ["MIT"]}},
}


def test_render_is_sorted_indented_and_stable() -> None:
    """Key order of the input does not change the output."""
    document = render_snapshot(RESULTS)
    reordered = render_snapshot(dict(reversed(list(RESULTS.items()))))

    assert document == reordered
    assert document.endswith("}\n")
    assert document.index('"/pkgA/"') < document.index('"/pkgB/"')
    assert '\n    "/pkgA/": {\n        "pkgA@1.0.0"' in document
    assert json.loads(document) == RESULTS


def test_render_keeps_non_ascii_text() -> None:
    document = render_snapshot({"/": {"a@1": {"publisher": "Jürgen"}}})

    assert "Jürgen" in document


def test_write_overwrites_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "out" / "package-license.json"
    target.parent.mkdir()
    target.write_text("stale", encoding="utf-8")

    write_snapshot(target, render_snapshot(RESULTS))

    assert target.read_text(encoding="utf-8") == render_snapshot(RESULTS)


def test_write_failure_raises_write_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(WriteError, match="some error when writing to"):
        write_snapshot(blocker / "package-license.json", "{}\n")


def test_verify_accepts_identical_bytes(tmp_path: Path) -> None:
    target = tmp_path / "package-license.json"
    document = render_snapshot(RESULTS)
    target.write_bytes(document.encode("utf-8"))

    verify_snapshot(target, document)


def test_verify_rejects_difference_without_touching_file(tmp_path: Path) -> None:
    """A mismatch fails and leaves the committed snapshot as it was."""
    target = tmp_path / "package-license.json"
    target.write_text("{}\n", encoding="utf-8")
    before = target.stat().st_mtime_ns

    with pytest.raises(SnapshotMismatch, match="before merging"):
        verify_snapshot(target, render_snapshot(RESULTS))

    assert target.read_text(encoding="utf-8") == "{}\n"
    assert target.stat().st_mtime_ns == before


def test_verify_missing_snapshot_is_a_mismatch(tmp_path: Path) -> None:
    target = tmp_path / "package-license.json"

    with pytest.raises(SnapshotMismatch, match="does not exist"):
        verify_snapshot(target, "{}\n")

    assert not target.exists()
