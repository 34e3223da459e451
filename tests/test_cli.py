"""Tests for the pkglicense CLI entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import pkglicense.main as main


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)


def test_violation_exits_non_zero_and_prints_message(
    two_package_project: Path, json_file, capsys: pytest.CaptureFixture[str]
) -> None:
    json_file(two_package_project / "allow.json", ["MIT"])

    exit_code = main.main(["-r", str(two_package_project), "-a", "allow.json"])

    assert exit_code == 1
    err = capsys.readouterr().err
    assert "(pkgB@1.0.0) Invalid License: GPL-3.0" in err


def test_excluded_package_succeeds(
    two_package_project: Path, json_file, capsys: pytest.CaptureFixture[str]
) -> None:
    json_file(two_package_project / "allow.json", ["MIT"])
    json_file(two_package_project / "excluded.json", ["pkgB"])

    exit_code = main.main(
        [
            "--root",
            str(two_package_project),
            "--allowOnly",
            "allow.json",
            "--excluded",
            "excluded.json",
        ]
    )

    assert exit_code == 0
    assert "Saved license info to" in capsys.readouterr().out
    snapshot = json.loads(
        (two_package_project / "package-license.json").read_text(encoding="utf-8")
    )
    assert "pkgA@1.0.0" in snapshot["/pkgA/"]
    assert "pkgB@1.0.0" in snapshot["/pkgB/"]


def test_ci_round_trip(
    two_package_project: Path, make_package, capsys: pytest.CaptureFixture[str]
) -> None:
    """A CI run passes on an unchanged tree and fails after a version bump."""
    root = str(two_package_project)
    assert main.main(["-r", root, "-t", "licenses.json"]) == 0
    capsys.readouterr()

    assert main.main(["-r", root, "-t", "licenses.json", "--ci"]) == 0
    assert "Licenses unchanged" in capsys.readouterr().out

    make_package(two_package_project / "pkgB", "pkgB", version="2.0.0", license="GPL-3.0")
    before = (two_package_project / "licenses.json").read_bytes()

    assert main.main(["-r", root, "-t", "licenses.json", "-c", "true"]) == 1
    assert "before merging" in capsys.readouterr().err
    assert (two_package_project / "licenses.json").read_bytes() == before


def test_ci_false_writes(two_package_project: Path) -> None:
    assert main.main(["-r", str(two_package_project), "--ci", "false"]) == 0
    assert (two_package_project / "package-license.json").exists()


def test_missing_allow_list_is_fatal(
    two_package_project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main.main(["-r", str(two_package_project), "-a", "nope.json"])

    assert exit_code == 1
    assert "Cannot read" in capsys.readouterr().err


def test_bad_boolean_is_reported(
    two_package_project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main.main(["-r", str(two_package_project), "--direct", "perhaps"])

    assert exit_code == 1
    assert "Expected a boolean value" in capsys.readouterr().err


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.main(["--version"])

    assert excinfo.value.code == 0
    assert "pkglicense" in capsys.readouterr().out


def test_main_dispatches_check_command(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify that `main` parses args and hands them to check_command."""
    captured = {}

    def fake_check_command(args) -> int:
        captured["args"] = args
        return 0

    monkeypatch.setattr(main, "check_command", fake_check_command)

    assert main.main(["-a", "allow.json", "-d", "false", "--dev"]) == 0
    parsed = captured["args"]
    assert parsed.allow_only == "allow.json"
    assert parsed.direct == "false"
    assert parsed.dev is True
    assert parsed.ci is None


def test_keyboard_interrupt_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def interrupted(args) -> int:
        raise KeyboardInterrupt

    monkeypatch.setattr(main, "check_command", interrupted)

    assert main.main([]) == 130


def test_missing_root_is_fatal_and_writes_nothing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A root that does not exist fails instead of checking an empty project."""
    root = tmp_path / "typo"

    exit_code = main.main(["-r", str(root)])

    assert exit_code == 1
    assert "does not exist or is not a directory" in capsys.readouterr().err
    assert not root.exists()


def test_root_pointing_at_a_file_is_fatal(tmp_path: Path) -> None:
    """--root must name a directory."""
    root = tmp_path / "package.json"
    root.write_text("{}", encoding="utf-8")

    assert main.main(["-r", str(root)]) == 1
