"""Removal engine — reference-aware recursive uninstall.

The walk tracks cycles by install key (the extracted directory name, or
the package name when a package has none), but once a ledger record is
located every later step acts on that exact record, so a second record
sharing the key is never touched.

Before a dependency is removed along with its consumer, the live ledger
is scanned for any *other* record that still lists it; if one does, the
dependency stays.

Filesystem cleanup is best-effort: deletion failures are logged as
warnings and the ledger is updated regardless.
"""

from __future__ import annotations

import logging

from srcpm.core.models import Package, Recipe
from srcpm.core.protocols import FileSystem, LedgerStore
from srcpm.core.recipe_executor import RecipeExecutor
from srcpm.core.visiting import VisitTracker
from srcpm.exceptions import PackageNotFoundError, StepFailedError

logger = logging.getLogger(__name__)


class RemovalEngine:
    """Recursive remover mirroring :class:`~srcpm.core.install_engine.InstallEngine`.

    Parameters
    ----------
    store:
        Ledger persistence; read before every decision.
    filesystem:
        Deletes the extracted directory and archive.
    executor, removal_recipe:
        Optional hook run for every removed package before the
        filesystem cleanup.  Its failures are warnings.
    """

    def __init__(
        self,
        store: LedgerStore,
        filesystem: FileSystem,
        *,
        executor: RecipeExecutor | None = None,
        removal_recipe: Recipe | None = None,
    ) -> None:
        self._store = store
        self._filesystem = filesystem
        self._executor = executor
        self._removal_recipe = removal_recipe

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def remove_package(self, name: str) -> Package:
        """Remove the installed package called *name* (top-level entry).

        Returns the ledger record that was removed.

        Raises
        ------
        PackageNotFoundError
            If no installed record has this name.
        """
        record = self._store.load().find(name)
        if record is None:
            raise PackageNotFoundError(
                f"Installed package not found: {name}",
                hint="List what is installed in the ledger file.",
            )
        self.remove_record(record)
        return record

    def remove(self, key: str, tracker: VisitTracker | None = None) -> bool:
        """Remove the first record with install key *key*.

        Returns ``False`` when no record has that key.
        """
        record = self._store.load().find_by_key(key)
        if record is None:
            logger.info("%s not installed; skipping", key)
            return False
        return self.remove_record(record, tracker)

    def remove_record(self, record: Package, tracker: VisitTracker | None = None) -> bool:
        """Remove exactly *record* and its orphaned dependencies.

        Only this record is dropped from the ledger, even when another
        record shares its install key.  Returns ``True`` when this call
        removed it, ``False`` when it was already gone.

        Raises
        ------
        DependencyCycleError
            If the record's install key is reached again while it is
            still being removed.
        """
        if tracker is None:
            tracker = VisitTracker()
        key = record.install_key
        tracker.check(key)

        if not self._store.load().has_record(record):
            logger.info("%s not installed; skipping", key)
            return False

        tracker.enter(key)
        for dependency in record.dependencies:
            self._remove_dependency(record, dependency, tracker)

        if not self._store.load().has_record(record):
            logger.info("%s already removed by dependency cleanup", key)
            tracker.leave(key)
            return False

        logger.info("removing %s", record.name)
        self._run_removal_recipe(record)
        self._cleanup(record)
        self._store.save(self._store.load().without_record(record))
        tracker.leave(key)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _remove_dependency(
        self,
        record: Package,
        dependency: str,
        tracker: VisitTracker,
    ) -> None:
        ledger = self._store.load()
        if ledger.is_required_by_other(dependency, record):
            logger.info(
                "dependency '%s' is still required by another package; skipping",
                dependency,
            )
            return

        dependency_record = ledger.find(dependency)
        if dependency_record is None:
            logger.warning("dependency '%s' not installed; skipping", dependency)
            return
        self.remove_record(dependency_record, tracker)

    def _run_removal_recipe(self, record: Package) -> None:
        if self._executor is None or self._removal_recipe is None:
            return
        try:
            self._executor.run_recipe(record, self._removal_recipe)
        except StepFailedError as exc:
            logger.warning("removal step failed for %s: %s", record.name, exc)

    def _cleanup(self, record: Package) -> None:
        if record.dirname:
            try:
                self._filesystem.remove_tree(record.dirname)
            except OSError as exc:
                logger.warning("could not delete directory %s: %s", record.dirname, exc)
        if record.archive:
            try:
                self._filesystem.remove_file(record.archive)
            except OSError as exc:
                logger.warning("could not delete archive %s: %s", record.archive, exc)
