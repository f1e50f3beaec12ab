"""srcpm — minimal source/binary package manager.

Resolves dependency graphs from a declarative package index, drives
external recipe steps, and records results in an installed-package
ledger.
"""

from srcpm.version import __version__

__all__: list[str] = ["__version__"]
