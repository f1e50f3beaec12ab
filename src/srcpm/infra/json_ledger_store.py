"""JSON-file implementation of :class:`~srcpm.core.protocols.LedgerStore`.

The ledger is persisted as a whole-file snapshot in the same shape as the
package index (``{"packages": [...]}``), so it can be inspected or edited
by hand between runs.

* A missing file is the first run and yields an empty ledger.
* An unreadable or unparsable file also yields an empty ledger, with a
  warning; install history is lost rather than the run aborted.
* Writes go to a temporary sibling file that is then renamed over the
  target, so :meth:`load` never sees a half-written snapshot.

No locking: concurrent invocations against one ledger are last-writer-wins.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from srcpm.core.codec import document_from_packages, packages_from_document
from srcpm.core.models import Ledger
from srcpm.exceptions import InvalidDocumentError, LedgerCorruptError, LedgerWriteError

logger = logging.getLogger(__name__)


class JsonLedgerStore:
    """Concrete :class:`LedgerStore` backed by one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def load(self) -> Ledger:
        if not self._path.exists():
            return Ledger()
        try:
            return self.read()
        except LedgerCorruptError as exc:
            logger.warning("%s; treating ledger as empty", exc)
            return Ledger()

    def save(self, ledger: Ledger) -> None:
        payload = json.dumps(document_from_packages(ledger.packages), indent=2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                    handle.write("\n")
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise LedgerWriteError(
                f"Could not write ledger {self._path}: {exc}",
                hint="Check permissions on the srcpm root directory.",
            ) from exc

    # ------------------------------------------------------------------
    # Strict read
    # ------------------------------------------------------------------

    def read(self) -> Ledger:
        """Parse the ledger file; raise :class:`LedgerCorruptError` on any failure."""
        try:
            text = self._path.read_text(encoding="utf-8")
            document = json.loads(text)
            return Ledger(packages=packages_from_document(document))
        except (OSError, UnicodeDecodeError, ValueError, InvalidDocumentError) as exc:
            raise LedgerCorruptError(f"Unreadable ledger {self._path}: {exc}") from exc
