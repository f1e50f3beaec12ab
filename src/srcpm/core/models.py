"""Domain models for srcpm.

All models are **frozen** dataclasses, i.e. immutable value objects.  The
:class:`Ledger` snapshot carries a handful of pure query and copy-on-write
helpers so that every install/removal decision is a function of one
snapshot, re-read at each decision point.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Step:
    """One external command of a recipe."""

    program: str
    """Executable name or path handed to the OS."""

    args: tuple[str, ...] = ()
    """Argument templates; may contain ``{name}``-style placeholders."""


@dataclass(frozen=True, slots=True)
class Recipe:
    """Ordered sequence of :class:`Step` entries, executed fail-fast."""

    steps: tuple[Step, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)


# ---------------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Package:
    """Identity and build facts for one installable unit."""

    name: str
    """Unique key within an index and within the ledger."""

    version: str
    """Opaque version string; compared by exact equality only."""

    source: str = ""
    """Fetch URL or path."""

    archive: str = ""
    """Local archive path, deleted after a successful install."""

    dirname: str | None = None
    """Extracted-source directory, used for removal."""

    dependencies: tuple[str, ...] = ()
    """Names of packages that must be installed first, in order."""

    recipe: Recipe | None = None
    """Package-specific recipe; the global recipe applies when absent."""

    @property
    def install_key(self) -> str:
        """Identity used by the removal engine (``dirname``, else ``name``)."""
        return self.dirname or self.name


# ---------------------------------------------------------------------------
# Package index (read-only reference data)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PackageIndex:
    """Ordered, read-only list of packages that could be installed."""

    packages: tuple[Package, ...] = ()

    def __len__(self) -> int:
        return len(self.packages)

    def find(self, name: str) -> Package | None:
        return next((p for p in self.packages if p.name == name), None)

    def search(self, term: str) -> list[Package]:
        """Return packages whose name contains *term*, in index order."""
        return [p for p in self.packages if term in p.name]


# ---------------------------------------------------------------------------
# Installed-package ledger
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ledger:
    """Immutable snapshot of the installed-package list.

    Mutating helpers return a new snapshot; records themselves are never
    changed in place.
    """

    packages: tuple[Package, ...] = ()

    def __len__(self) -> int:
        return len(self.packages)

    def __bool__(self) -> bool:
        return len(self.packages) > 0

    # -- queries ------------------------------------------------------------

    def find(self, name: str) -> Package | None:
        return next((p for p in self.packages if p.name == name), None)

    def find_by_key(self, key: str) -> Package | None:
        return next((p for p in self.packages if p.install_key == key), None)

    def is_installed(self, name: str) -> bool:
        return self.find(name) is not None

    def has_record(self, record: Package) -> bool:
        return record in self.packages

    def is_required_by_other(self, dependency: str, excluding: Package) -> bool:
        """Whether any record other than *excluding* lists *dependency*.

        Linear scan over the snapshot, not a maintained reference count.
        """
        return any(
            p != excluding and dependency in p.dependencies
            for p in self.packages
        )

    # -- copy-on-write ------------------------------------------------------

    def with_package(self, package: Package) -> Ledger:
        return Ledger(packages=(*self.packages, package))

    def without_record(self, record: Package) -> Ledger:
        """Drop the first record equal to *record*.

        Other records sharing its name or install key are kept.
        """
        if record not in self.packages:
            return self
        position = self.packages.index(record)
        return Ledger(packages=self.packages[:position] + self.packages[position + 1:])
