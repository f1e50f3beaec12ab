"""Shared pytest fixtures and configuration for the srcpm test suite.

Guidelines
----------
* No internet access in any test; ``requests`` is mocked at the infra
  boundary.
* Core engine tests run against the in-memory fakes below; no real
  processes are launched and no files are touched.
* Fakes record into one shared ``events`` list so tests can assert on
  the relative order of recipe steps, cleanup and ledger writes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

import pytest

from srcpm.core.models import Ledger
from srcpm.core.protocols import ProcessOutcome


class InMemoryLedgerStore:
    """LedgerStore fake that counts loads and saves."""

    def __init__(self, events: list[tuple[str, ...]], ledger: Ledger | None = None) -> None:
        self.ledger: Ledger = ledger or Ledger()
        self.events = events
        self.loads = 0
        self.saves = 0

    def load(self) -> Ledger:
        self.loads += 1
        return self.ledger

    def save(self, ledger: Ledger) -> None:
        self.saves += 1
        self.ledger = ledger
        self.events.append(("save", *(p.name for p in ledger.packages)))

    def names(self) -> list[str]:
        return [p.name for p in self.ledger.packages]


class FakeProcessRunner:
    """ProcessRunner fake; exit statuses are scripted per program name."""

    def __init__(self, events: list[tuple[str, ...]]) -> None:
        self.events = events
        self.calls: list[tuple[str, tuple[str, ...], str | None]] = []
        self.returncodes: dict[str, int] = {}
        self.unlaunchable: set[str] = set()

    def run(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: str | None = None,
    ) -> ProcessOutcome:
        self.calls.append((program, tuple(args), cwd))
        self.events.append(("run", program, *args))
        if program in self.unlaunchable:
            return ProcessOutcome(returncode=None, error=f"No such file: {program}")
        return ProcessOutcome(returncode=self.returncodes.get(program, 0))


class FakeFileSystem:
    """FileSystem fake; paths listed in ``failing`` raise ``OSError``."""

    def __init__(self, events: list[tuple[str, ...]]) -> None:
        self.events = events
        self.failing: set[str] = set()

    def remove_tree(self, path: str) -> None:
        self.events.append(("rmtree", path))
        if path in self.failing:
            raise OSError(f"permission denied: {path}")

    def remove_file(self, path: str) -> None:
        self.events.append(("unlink", path))
        if path in self.failing:
            raise OSError(f"permission denied: {path}")


@pytest.fixture
def events() -> list[tuple[str, ...]]:
    return []


@pytest.fixture
def store(events: list[tuple[str, ...]]) -> InMemoryLedgerStore:
    return InMemoryLedgerStore(events)


@pytest.fixture
def runner(events: list[tuple[str, ...]]) -> FakeProcessRunner:
    return FakeProcessRunner(events)


@pytest.fixture
def filesystem(events: list[tuple[str, ...]]) -> FakeFileSystem:
    return FakeFileSystem(events)


@pytest.fixture(autouse=True)
def _reset_srcpm_logger() -> Iterator[None]:
    """Undo ``configure_logging`` so caplog keeps seeing engine records."""
    yield
    logger = logging.getLogger("srcpm")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
