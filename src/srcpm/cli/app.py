"""CLI application entry point and command routing for srcpm.

This module is the **sole error boundary** for the entire application.
It catches :class:`~srcpm.exceptions.SrcpmError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core
  engines, wired to the infrastructure adapters below.
* Each requested package is handled independently: a failure aborts that
  package's dependency tree, is reported, and the next name is tried.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from srcpm.cli import exit_codes
from srcpm.cli.console import configure_logging, console, report_error
from srcpm.config import EDIT_TARGETS, Settings
from srcpm.core.install_engine import InstallEngine
from srcpm.core.models import PackageIndex
from srcpm.core.recipe_executor import RecipeExecutor
from srcpm.core.removal_engine import RemovalEngine
from srcpm.core.update_service import UpdateOutcome, UpdateService
from srcpm.exceptions import ConfigError, SrcpmError
from srcpm.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``srcpm <pkg>...``            — install packages and their dependencies
    * ``srcpm -r <pkg>...``         — remove packages (and orphaned dependencies)
    * ``srcpm -u <pkg>...``         — update packages whose index version changed
    * ``srcpm -s [TERM] [<pkg>...]`` — search the index / check names exist
    * ``srcpm -e binary|source|remove`` — edit a global recipe document
    * ``srcpm --doctor``            — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="srcpm",
        description="Minimal source/binary package manager.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "packages",
        nargs="*",
        metavar="PACKAGE",
        help="Package names to act on.",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-r", "--remove", action="store_true", help="Remove package(s).")
    mode.add_argument("-u", "--update", action="store_true", help="Update package(s).")
    mode.add_argument(
        "-s",
        "--search",
        nargs="?",
        const="",
        default=None,
        metavar="TERM",
        help="Search index names for TERM, or check that the given packages exist.",
    )
    mode.add_argument(
        "-e",
        "--edit",
        choices=EDIT_TARGETS,
        default=None,
        help="Open a global recipe document in $EDITOR.",
    )
    mode.add_argument("--doctor", action="store_true", help="Run environment diagnostics.")

    parser.add_argument(
        "--from-source",
        action="store_true",
        help="Use the source recipe instead of the binary recipe as the global fallback.",
    )
    parser.add_argument("--root", default=None, help="State directory (default: $SRCPM_ROOT or ~/.srcpm).")
    parser.add_argument("--index", default=None, help="Package index URL or path (default: $SRCPM_INDEX).")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors.")
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Services:
    """Engines wired to the production adapters for one invocation."""

    installer: InstallEngine
    remover: RemovalEngine
    updater: UpdateService


def build_services(settings: Settings, index: PackageIndex, *, from_source: bool = False) -> Services:
    from srcpm.infra.filesystem import LocalFileSystem
    from srcpm.infra.json_ledger_store import JsonLedgerStore
    from srcpm.infra.recipe_store import load_recipe
    from srcpm.infra.subprocess_runner import SubprocessRunner

    try:
        settings.build_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(
            f"Cannot create build directory {settings.build_root}: {exc}",
            hint="Pass a writable state directory with --root.",
        ) from exc
    store = JsonLedgerStore(settings.ledger_path)
    filesystem = LocalFileSystem(settings.build_root)
    executor = RecipeExecutor(SubprocessRunner(), cwd=str(settings.build_root))
    global_recipe = load_recipe(
        settings.source_recipe_path if from_source else settings.binary_recipe_path,
    )

    installer = InstallEngine(index, store, executor, filesystem, global_recipe=global_recipe)
    remover = RemovalEngine(
        store,
        filesystem,
        executor=executor,
        removal_recipe=load_recipe(settings.removal_recipe_path),
    )
    return Services(
        installer=installer,
        remover=remover,
        updater=UpdateService(index, store, installer, remover),
    )


def _load_index(settings: Settings) -> PackageIndex:
    from srcpm.infra.index_source import load_index

    return load_index(settings.index_location)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _for_each(names: Sequence[str], action: Callable[[str], None]) -> int:
    """Run *action* per name; report failures and keep going."""
    failed = False
    for name in names:
        try:
            action(name)
        except SrcpmError as exc:
            report_error(exc)
            failed = True
    return exit_codes.GENERAL_ERROR if failed else exit_codes.SUCCESS


def _handle_install(services: Services, names: Sequence[str]) -> int:
    def install(name: str) -> None:
        if services.installer.install(name):
            console.print(f"[bold green]Installed[/bold green] {name}")
        else:
            console.print(f"{name} is already installed")

    return _for_each(names, install)


def _handle_remove(services: Services, names: Sequence[str]) -> int:
    def remove(name: str) -> None:
        record = services.remover.remove_package(name)
        console.print(f"[bold green]Removed[/bold green] {record.name}")

    return _for_each(names, remove)


def _handle_update(services: Services, names: Sequence[str]) -> int:
    messages = {
        UpdateOutcome.INSTALLED: "[bold green]Installed[/bold green] {name}",
        UpdateOutcome.UP_TO_DATE: "{name} is up to date",
        UpdateOutcome.UPDATED: "[bold green]Updated[/bold green] {name}",
    }

    def update(name: str) -> None:
        outcome = services.updater.update(name)
        console.print(messages[outcome].format(name=name))

    return _for_each(names, update)


def _handle_search(index: PackageIndex, term: str, names: Sequence[str]) -> int:
    from srcpm.core.search import check_names, search_index

    if names:
        for name, exists in check_names(index, names):
            if exists:
                console.print(f"package exists: {name}")
            else:
                console.print(f"package doesn't exist: {name}")
        return exit_codes.SUCCESS

    matches = search_index(index, term)
    if not matches:
        console.print(f"no packages match '{term}'")
    for package in matches:
        console.print(f"package found: {package.name} {package.version}")
    return exit_codes.SUCCESS


def _handle_edit(settings: Settings, target: str) -> int:
    from srcpm.infra.editor import edit_file

    edit_file(settings.edit_target_path(target), settings.editor)
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    from srcpm.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the srcpm CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(-1 if args.quiet else (1 if args.verbose else 0))

    settings = Settings.from_env(root=args.root, index_location=args.index)

    if args.edit is not None:
        return _handle_edit(settings, args.edit)
    if args.doctor:
        return _handle_doctor(settings)
    if args.search is not None:
        return _handle_search(_load_index(settings), args.search, args.packages)

    if not args.packages:
        console.print("[bold red]Error:[/bold red] no package names provided")
        parser.print_usage(sys.stderr)
        return exit_codes.GENERAL_ERROR

    if args.remove:
        # Removal only consults the ledger; the index is never fetched.
        services = build_services(settings, PackageIndex(), from_source=args.from_source)
        return _handle_remove(services, args.packages)

    services = build_services(settings, _load_index(settings), from_source=args.from_source)
    if args.update:
        return _handle_update(services, args.packages)
    return _handle_install(services, args.packages)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except SrcpmError as exc:
        report_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
