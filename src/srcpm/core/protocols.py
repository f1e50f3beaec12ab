"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so the engines can be driven by in-memory fakes in
tests and by the JSON/subprocess/filesystem adapters in production.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from srcpm.core.models import Ledger


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Structured result of one external process launch."""

    returncode: int | None
    """Exit status, or ``None`` when the process could not be launched."""

    error: str | None = None
    """Launch failure description, if any."""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class LedgerStore(Protocol):
    """Whole-snapshot persistence for the installed-package ledger."""

    def load(self) -> Ledger:
        """Return the current ledger, or an empty one on first run.

        An unreadable snapshot must degrade to an empty ledger rather
        than raise.
        """
        ...  # pragma: no cover

    def save(self, ledger: Ledger) -> None:
        """Overwrite the persisted snapshot with *ledger*.

        A subsequent :meth:`load` must never observe a partial write.

        Raises
        ------
        LedgerWriteError
            When the snapshot cannot be persisted.
        """
        ...  # pragma: no cover


class ProcessRunner(Protocol):
    """Launch one external program and wait for it to finish."""

    def run(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: str | None = None,
    ) -> ProcessOutcome:
        """Run *program* with *args*, inheriting stdio.

        Launch failures are reported through :class:`ProcessOutcome`,
        never raised.
        """
        ...  # pragma: no cover


class FileSystem(Protocol):
    """Deletion primitives used for best-effort cleanup."""

    def remove_tree(self, path: str) -> None:
        """Recursively delete the directory at *path*; raise ``OSError`` on failure."""
        ...  # pragma: no cover

    def remove_file(self, path: str) -> None:
        """Delete the file at *path*; raise ``OSError`` on failure."""
        ...  # pragma: no cover
