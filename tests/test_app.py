"""CLI tests for :mod:`srcpm.cli.app`.

The end-to-end cases drive real recipe steps (``python -c`` one-liners)
against a local index file in ``tmp_path``. Nothing touches the network or any state
outside the temporary directory.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from srcpm.cli import app as app_module
from srcpm.cli import exit_codes
from srcpm.cli.app import cli, main
from srcpm.exceptions import IndexLoadError, PackageNotFoundError

MAKEDIR = [sys.executable, "-c", "import os, sys; os.makedirs(sys.argv[1])"]
FAIL = [sys.executable, "-c", "raise SystemExit(1)"]


def _step(command: list[str], *args: str) -> dict[str, Any]:
    return {"program": command[0], "args": [*command[1:], *args]}


def _entry(name: str, version: str = "1.0", *deps: str, **extra: Any) -> dict[str, Any]:
    return {
        "name": name,
        "version": version,
        "source": f"https://example.org/{name}.tar.gz",
        "archive": "",
        "dirname": f"{name}-{version}",
        "dependencies": list(deps),
        **extra,
    }


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A srcpm root with a global recipe that creates ``{dirname}``."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "binary.json").write_text(json.dumps({"steps": [_step(MAKEDIR, "{dirname}")]}))
    monkeypatch.setenv("SRCPM_ROOT", str(root))
    monkeypatch.delenv("SRCPM_INDEX", raising=False)
    return root


def _write_index(root: Path, *entries: dict[str, Any]) -> list[str]:
    path = root.parent / "packages.json"
    path.write_text(json.dumps({"packages": list(entries)}))
    return ["--index", str(path)]


def _ledger_names(root: Path) -> list[str]:
    document = json.loads((root / "installed.json").read_text())
    return [entry["name"] for entry in document["packages"]]


# ---------------------------------------------------------------------------
# Routing basics
# ---------------------------------------------------------------------------

class TestRouting:
    def test_no_packages_is_error(self, workspace: Path) -> None:
        assert main([]) == exit_codes.GENERAL_ERROR

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_modes_are_exclusive(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["-r", "-u", "zlib"])
        assert exc_info.value.code == 2

    def test_edit_opens_target(self, workspace: Path) -> None:
        with patch("srcpm.infra.editor.edit_file") as mock_edit:
            assert main(["--edit", "remove"]) == exit_codes.SUCCESS
        mock_edit.assert_called_once()
        assert mock_edit.call_args.args[0] == workspace / "remove.json"

    @patch("srcpm.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor(self, mock_doctor: MagicMock, workspace: Path) -> None:
        assert main(["--doctor"]) == exit_codes.SUCCESS
        assert mock_doctor.call_args.args[0].root == workspace


# ---------------------------------------------------------------------------
# Install / remove / update end to end
# ---------------------------------------------------------------------------

class TestLifecycle:
    def test_install_then_remove(self, workspace: Path) -> None:
        index = _write_index(workspace, _entry("app", "1.0", "lib"), _entry("lib"))
        build = workspace / "build"

        assert main([*index, "app"]) == exit_codes.SUCCESS
        assert _ledger_names(workspace) == ["lib", "app"]
        assert (build / "lib-1.0").is_dir()
        assert (build / "app-1.0").is_dir()

        assert main(["-r", "app"]) == exit_codes.SUCCESS
        assert _ledger_names(workspace) == []
        assert not (build / "lib-1.0").exists()
        assert not (build / "app-1.0").exists()

    def test_second_install_is_noop(
        self, workspace: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        index = _write_index(workspace, _entry("lib"))
        assert main([*index, "lib"]) == exit_codes.SUCCESS
        assert main([*index, "lib"]) == exit_codes.SUCCESS
        assert "already installed" in capsys.readouterr().err
        assert _ledger_names(workspace) == ["lib"]

    def test_failure_does_not_stop_later_names(
        self, workspace: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        index = _write_index(
            workspace,
            _entry("bad", recipe={"steps": [_step(FAIL)]}),
            _entry("good"),
        )

        assert main([*index, "bad", "good"]) == exit_codes.GENERAL_ERROR

        assert _ledger_names(workspace) == ["good"]
        assert "Error:" in capsys.readouterr().err

    def test_unknown_package(self, workspace: Path) -> None:
        index = _write_index(workspace, _entry("lib"))
        assert main([*index, "ghost"]) == exit_codes.GENERAL_ERROR

    def test_remove_not_installed(self, workspace: Path) -> None:
        assert main(["-r", "ghost"]) == exit_codes.GENERAL_ERROR

    def test_update_rebuilds_changed_version(self, workspace: Path) -> None:
        assert main([*_write_index(workspace, _entry("lib", "1.0")), "lib"]) == 0

        index = _write_index(workspace, _entry("lib", "2.0"))
        assert main([*index, "-u", "lib"]) == exit_codes.SUCCESS

        ledger = json.loads((workspace / "installed.json").read_text())
        assert [entry["version"] for entry in ledger["packages"]] == ["2.0"]
        assert not (workspace / "build" / "lib-1.0").exists()
        assert (workspace / "build" / "lib-2.0").is_dir()

    def test_update_up_to_date(
        self, workspace: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        index = _write_index(workspace, _entry("lib"))
        main([*index, "lib"])
        capsys.readouterr()

        assert main([*index, "-u", "lib"]) == exit_codes.SUCCESS
        assert "up to date" in capsys.readouterr().err

    def test_bad_index_location_reaches_boundary(self, workspace: Path) -> None:
        with pytest.raises(IndexLoadError, match="not found"):
            main(["--index", str(workspace / "missing.json"), "lib"])


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

class TestSearch:
    def test_term(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        index = _write_index(workspace, _entry("libpng"), _entry("zlib"), _entry("curl"))
        assert main([*index, "--search", "lib"]) == exit_codes.SUCCESS
        err = capsys.readouterr().err
        assert "package found: libpng" in err
        assert "package found: zlib" in err
        assert "curl" not in err

    def test_no_match(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        index = _write_index(workspace, _entry("zlib"))
        main([*index, "--search", "qt"])
        assert "no packages match 'qt'" in capsys.readouterr().err

    def test_explicit_names(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        index = _write_index(workspace, _entry("zlib"))
        assert main([*index, "zlib", "qt", "--search"]) == exit_codes.SUCCESS
        err = capsys.readouterr().err
        assert "package exists: zlib" in err
        assert "package doesn't exist: qt" in err


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def test_known_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        def boom() -> int:
            raise PackageNotFoundError("nope", hint="try again")

        monkeypatch.setattr(app_module, "main", boom)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "nope" in err
        assert "try again" in err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def interrupted() -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_module, "main", interrupted)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def crash() -> int:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "main", crash)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
