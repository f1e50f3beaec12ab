"""Update orchestration — version check, then destroy-and-rebuild.

Versions are opaque strings compared by exact equality; any difference,
downgrades included, removes the installed copy and installs the index
version afresh.  There is no in-place upgrade path.
"""

from __future__ import annotations

import enum
import logging

from srcpm.core.install_engine import InstallEngine
from srcpm.core.models import PackageIndex
from srcpm.core.protocols import LedgerStore
from srcpm.core.removal_engine import RemovalEngine
from srcpm.exceptions import PackageNotFoundError

logger = logging.getLogger(__name__)


class UpdateOutcome(enum.Enum):
    INSTALLED = "installed"
    """The package was not installed; a fresh install ran."""

    UP_TO_DATE = "up-to-date"
    """Installed version equals the index version; nothing ran."""

    UPDATED = "updated"
    """The installed copy was removed and the index version installed."""


class UpdateService:
    """Compose :class:`RemovalEngine` and :class:`InstallEngine` per package."""

    def __init__(
        self,
        index: PackageIndex,
        store: LedgerStore,
        installer: InstallEngine,
        remover: RemovalEngine,
    ) -> None:
        self._index = index
        self._store = store
        self._installer = installer
        self._remover = remover

    def update(self, name: str) -> UpdateOutcome:
        """Bring *name* to the version listed in the index.

        Raises
        ------
        PackageNotFoundError
            If *name* is not in the index.
        """
        target = self._index.find(name)
        if target is None:
            raise PackageNotFoundError(f"Package not found in package index: {name}")

        installed = self._store.load().find(name)
        if installed is None:
            logger.info("%s not installed; installing", name)
            self._installer.install(name)
            return UpdateOutcome.INSTALLED

        if installed.version == target.version:
            logger.info("%s is up to date", name)
            return UpdateOutcome.UP_TO_DATE

        logger.info("updating %s from %s to %s", name, installed.version, target.version)
        self._remover.remove_record(installed)
        self._installer.install(name)
        return UpdateOutcome.UPDATED
