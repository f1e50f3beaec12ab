"""Custom exception hierarchy for srcpm.

All exceptions that cross layer boundaries must inherit from
:class:`SrcpmError`.  Raw OS and third-party exceptions (``OSError``,
``requests`` errors, JSON decode errors) must NEVER propagate beyond the
infrastructure layer; they are caught there and re-raised as a typed
subclass defined here.

Hierarchy
---------
SrcpmError
├── PackageNotFoundError
├── DependencyCycleError
├── NoRecipeError
├── StepFailedError
├── LedgerError
│   ├── LedgerCorruptError
│   └── LedgerWriteError
├── InvalidDocumentError
├── IndexLoadError
├── ConfigError
├── EditorError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class SrcpmError(Exception):
    """Base exception for all srcpm errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Resolution ------------------------------------------------------------

class PackageNotFoundError(SrcpmError):
    """Raised when a package is in neither the index nor the ledger."""


class DependencyCycleError(SrcpmError):
    """Raised when a package (or install key) reappears while still in progress."""

    def __init__(self, key: str, path: Sequence[str] = ()) -> None:
        chain = " -> ".join([*path, key]) if path else key
        super().__init__(
            f"Dependency cycle detected: {chain}",
            hint="Break the cycle in the package index and re-run.",
        )
        self.key: str = key
        self.path: tuple[str, ...] = tuple(path)


# --- Recipes ---------------------------------------------------------------

class NoRecipeError(SrcpmError):
    """Raised when neither a package recipe nor a global recipe exists."""

    def __init__(self, package: str) -> None:
        super().__init__(
            f"No recipe for package {package} and no global recipe",
            hint="Add a recipe to the index entry or create one with: srcpm --edit binary",
        )
        self.package: str = package


class StepFailedError(SrcpmError):
    """Raised when a recipe step cannot be launched or exits non-zero."""

    def __init__(
        self,
        program: str,
        args: Sequence[str],
        *,
        returncode: int | None = None,
        reason: str | None = None,
    ) -> None:
        command = " ".join([program, *args])
        if returncode is None:
            message = f"Failed to run {program}: {reason or 'could not launch'}"
        else:
            message = f"Command failed with exit status {returncode}: {command}"
        super().__init__(message, hint="Fix the recipe step and re-run.")
        self.program: str = program
        self.step_args: tuple[str, ...] = tuple(args)
        self.returncode: int | None = returncode


# --- Ledger ----------------------------------------------------------------

class LedgerError(SrcpmError):
    """Base class for installed-package ledger failures."""


class LedgerCorruptError(LedgerError):
    """Raised internally when the ledger file cannot be parsed.

    The ledger store recovers from this by treating the ledger as empty;
    it never reaches the CLI boundary.
    """


class LedgerWriteError(LedgerError):
    """Raised when the ledger snapshot cannot be persisted."""


# --- Documents / configuration --------------------------------------------

class InvalidDocumentError(SrcpmError):
    """Raised when a package, recipe or ledger document is malformed."""


class IndexLoadError(SrcpmError):
    """Raised when the package index cannot be fetched or parsed."""


class ConfigError(SrcpmError):
    """Raised for invalid settings or command-line combinations."""


class EditorError(SrcpmError):
    """Raised when the text editor cannot be launched."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(SrcpmError):
    """Raised when a required runtime dependency is not available."""
