"""Core / service layer — package lifecycle logic.

Rules
-----
* No ``print()`` calls; progress is reported through ``logging``.
* No direct filesystem, network or process access, only protocols.
* No imports from ``cli`` or ``infra``.
"""

from srcpm.core.install_engine import InstallEngine
from srcpm.core.models import Ledger, Package, PackageIndex, Recipe, Step
from srcpm.core.protocols import FileSystem, LedgerStore, ProcessOutcome, ProcessRunner
from srcpm.core.recipe_executor import RecipeExecutor, select_recipe
from srcpm.core.removal_engine import RemovalEngine
from srcpm.core.update_service import UpdateOutcome, UpdateService
from srcpm.core.visiting import Color, VisitTracker

__all__: list[str] = [
    "Color",
    "FileSystem",
    "InstallEngine",
    "Ledger",
    "LedgerStore",
    "Package",
    "PackageIndex",
    "ProcessOutcome",
    "ProcessRunner",
    "Recipe",
    "RecipeExecutor",
    "RemovalEngine",
    "Step",
    "UpdateOutcome",
    "UpdateService",
    "VisitTracker",
    "select_recipe",
]
