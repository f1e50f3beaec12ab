"""Recipe executor — runs a package's build/install steps.

Steps are handed to a :class:`~srcpm.core.protocols.ProcessRunner`
injected at construction time, one after another, in declared order.
The first step that cannot be launched or exits non-zero aborts the
rest.

Guarantees
----------
* Never touches the ledger; recording the install is the caller's job.
* Only :class:`~srcpm.exceptions.SrcpmError` subclasses escape.
"""

from __future__ import annotations

import logging

from srcpm.core.models import Package, Recipe
from srcpm.core.protocols import ProcessRunner
from srcpm.core.substitution import substitute_args
from srcpm.exceptions import NoRecipeError, StepFailedError

logger = logging.getLogger(__name__)


def select_recipe(package: Package, global_recipe: Recipe | None) -> Recipe:
    """Return the package's own recipe, else the global one.

    Raises
    ------
    NoRecipeError
        If neither is available.
    """
    if package.recipe is not None:
        return package.recipe
    if global_recipe is not None:
        return global_recipe
    raise NoRecipeError(package.name)


class RecipeExecutor:
    """Fail-fast, in-order step runner.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`ProcessRunner` protocol.
    cwd:
        Working directory handed to every step, or ``None`` to inherit.
    """

    def __init__(self, runner: ProcessRunner, *, cwd: str | None = None) -> None:
        self._runner: ProcessRunner = runner
        self._cwd: str | None = cwd

    def run(self, package: Package, global_recipe: Recipe | None = None) -> None:
        """Select the recipe for *package* and execute it.

        Raises
        ------
        NoRecipeError
            If no recipe applies.
        StepFailedError
            On the first step that fails to launch or exits non-zero.
        """
        self.run_recipe(package, select_recipe(package, global_recipe))

    def run_recipe(self, package: Package, recipe: Recipe) -> None:
        """Execute *recipe* with *package*'s placeholders substituted."""
        for step in recipe.steps:
            args = substitute_args(step.args, package)
            logger.info("run: %s", " ".join([step.program, *args]))
            outcome = self._runner.run(step.program, args, cwd=self._cwd)
            if outcome.returncode is None:
                raise StepFailedError(step.program, args, reason=outcome.error)
            if not outcome.ok:
                raise StepFailedError(step.program, args, returncode=outcome.returncode)
