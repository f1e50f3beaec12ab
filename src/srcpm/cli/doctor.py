"""``srcpm --doctor`` — environment diagnostics command.

Gathers the state of the srcpm root (ledger, recipe documents), the
configured editor and index location, and renders a Rich table summarising
whether the runtime environment is usable.

This module lives in the CLI layer — it may import from ``infra`` and
``core``, and it renders via Rich.  It never touches the network.
"""

from __future__ import annotations

import platform
import shlex
import shutil
import sys
from pathlib import Path

from srcpm.cli import exit_codes
from srcpm.cli.console import console
from srcpm.config import Settings
from srcpm.exceptions import LedgerCorruptError
from srcpm.infra.index_source import is_remote
from srcpm.infra.json_ledger_store import JsonLedgerStore
from srcpm.infra.recipe_store import load_recipe
from srcpm.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _srcpm_version_check() -> tuple[str, str, str]:
    return "srcpm", __version__, OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _root_check(settings: Settings) -> tuple[str, str, str]:
    if settings.root.is_dir():
        return "Root", str(settings.root), OK
    return "Root", f"{settings.root} (created on first install)", WARN


def _ledger_check(settings: Settings) -> tuple[str, str, str]:
    """Strictly parse the ledger; a corrupt file would otherwise read as empty."""
    path = settings.ledger_path
    if not path.exists():
        return "Ledger", "no packages installed yet", OK
    try:
        ledger = JsonLedgerStore(path).read()
    except LedgerCorruptError:
        return "Ledger", f"{path} is unreadable", FAIL
    return "Ledger", f"{len(ledger)} package(s) installed", OK


def _recipe_check(label: str, path: Path, *, missing: str) -> tuple[str, str, str]:
    if not path.exists():
        return label, "not configured", missing
    recipe = load_recipe(path)
    if recipe is None:
        return label, f"{path} is unreadable", FAIL
    return label, f"{len(recipe)} step(s)", OK


def _editor_check(settings: Settings) -> tuple[str, str, str]:
    parts = shlex.split(settings.editor) or [settings.editor]
    found = shutil.which(parts[0])
    if found is None:
        return "Editor", f"{settings.editor} not found", WARN
    return "Editor", found, OK


def _index_check(settings: Settings) -> tuple[str, str, str]:
    location = settings.index_location
    if is_remote(location) or Path(location).expanduser().is_file():
        return "Index", location, OK
    return "Index", f"{location} not found", FAIL


def collect_checks(settings: Settings) -> list[tuple[str, str, str]]:
    return [
        _srcpm_version_check(),
        _python_version_check(),
        _root_check(settings),
        _ledger_check(settings),
        _recipe_check("Binary recipe", settings.binary_recipe_path, missing=WARN),
        _recipe_check("Source recipe", settings.source_recipe_path, missing=OK),
        _recipe_check("Remove recipe", settings.removal_recipe_path, missing=OK),
        _editor_check(settings),
        _index_check(settings),
    ]


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nsrcpm doctor", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<48} {'Status':<8}", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<48} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = collect_checks(settings)
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="srcpm doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=14)
    table.add_column("Value", min_width=24)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
