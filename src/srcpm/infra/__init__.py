"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem, child processes,
the network and the user's editor.  Raw OS and third-party exceptions
are caught here and re-raised as :class:`~srcpm.exceptions.SrcpmError`
subclasses, except for the cleanup primitives of
:class:`~srcpm.infra.filesystem.LocalFileSystem` (``remove_tree`` and
``remove_file``), which raise :class:`OSError` as the
:class:`~srcpm.core.protocols.FileSystem` protocol documents; the core
engines turn those into warnings.
:class:`~srcpm.infra.subprocess_runner.SubprocessRunner` reports a
program that cannot be launched as a failed
:class:`~srcpm.core.protocols.ProcessOutcome` instead of raising.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from srcpm.infra.editor import edit_file
from srcpm.infra.filesystem import LocalFileSystem
from srcpm.infra.index_source import load_index
from srcpm.infra.json_ledger_store import JsonLedgerStore
from srcpm.infra.recipe_store import load_recipe
from srcpm.infra.subprocess_runner import SubprocessRunner

__all__: list[str] = [
    "JsonLedgerStore",
    "LocalFileSystem",
    "SubprocessRunner",
    "edit_file",
    "load_index",
    "load_recipe",
]
