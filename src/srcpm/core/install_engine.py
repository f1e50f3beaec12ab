"""Dependency resolver / install engine.

Depth-first, on-demand resolution: each requested name first installs
its dependencies in declared order, then runs its own recipe and is
appended to the ledger.

The ledger is re-read from the :class:`~srcpm.core.protocols.LedgerStore`
at every decision point rather than cached, because a sibling branch of
the same walk may install a shared dependency (diamond shape) before the
pending caller gets to it.  Two checks guard against double installs:

* **pre-check** — before resolving, skip if ``name`` is already recorded;
* **post-check** — after the dependencies are done, skip if one of them
  installed ``name`` as a side effect.
"""

from __future__ import annotations

import logging

from srcpm.core.models import Package, PackageIndex, Recipe
from srcpm.core.protocols import FileSystem, LedgerStore
from srcpm.core.recipe_executor import RecipeExecutor
from srcpm.core.visiting import VisitTracker
from srcpm.exceptions import PackageNotFoundError

logger = logging.getLogger(__name__)


class InstallEngine:
    """Recursive installer with cycle detection and the recheck protocol.

    Parameters
    ----------
    index:
        Read-only package index.
    store:
        Ledger persistence; read before every decision.
    executor:
        Runs the selected recipe for a package.
    filesystem:
        Used to discard the archive after a successful install.
    global_recipe:
        Fallback recipe for packages without their own.
    """

    def __init__(
        self,
        index: PackageIndex,
        store: LedgerStore,
        executor: RecipeExecutor,
        filesystem: FileSystem,
        *,
        global_recipe: Recipe | None = None,
    ) -> None:
        self._index = index
        self._store = store
        self._executor = executor
        self._filesystem = filesystem
        self._global_recipe = global_recipe

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def install(self, name: str, tracker: VisitTracker | None = None) -> bool:
        """Install *name* and, first, everything it depends on.

        Returns ``True`` when this call ran the recipe for *name*, and
        ``False`` when it was already installed.

        Raises
        ------
        DependencyCycleError
            If *name* is reached again while its own dependencies are
            still being installed.
        PackageNotFoundError
            If *name* is in neither the index nor the ledger.
        NoRecipeError, StepFailedError
            From the recipe executor; the ledger is left untouched for
            the failing package.
        """
        if tracker is None:
            tracker = VisitTracker()
        tracker.check(name)

        if self._store.load().is_installed(name):
            logger.info("%s already installed; skipping", name)
            return False

        package = self._resolve(name)
        if package is None:
            return False

        tracker.enter(name)
        for dependency in package.dependencies:
            self.install(dependency, tracker)

        if self._store.load().is_installed(name):
            logger.info("%s installed by dependency step; skipping", name)
            tracker.leave(name)
            return False

        logger.info("installing %s %s", name, package.version)
        self._executor.run(package, self._global_recipe)
        self._store.save(self._store.load().with_package(package))
        self._discard_archive(package)
        tracker.leave(name)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, name: str) -> Package | None:
        """Look *name* up in the index, falling back to the ledger.

        A ledger-only hit is already satisfied and yields ``None``.
        """
        package = self._index.find(name)
        if package is not None:
            return package
        if self._store.load().is_installed(name):
            logger.info("%s not in package index but recorded as installed", name)
            return None
        raise PackageNotFoundError(
            f"Package not found in package index or ledger: {name}",
            hint="Check the name with: srcpm --search <term>",
        )

    def _discard_archive(self, package: Package) -> None:
        if not package.archive:
            return
        try:
            self._filesystem.remove_file(package.archive)
        except OSError as exc:
            logger.warning("could not delete archive %s: %s", package.archive, exc)
