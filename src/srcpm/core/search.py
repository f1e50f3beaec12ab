"""Index lookups for the ``--search`` command (pure)."""

from __future__ import annotations

from collections.abc import Iterable

from srcpm.core.models import Package, PackageIndex


def search_index(index: PackageIndex, term: str) -> list[Package]:
    """Return index packages whose name contains *term*."""
    return index.search(term)


def check_names(index: PackageIndex, names: Iterable[str]) -> list[tuple[str, bool]]:
    """Report, per name and in request order, whether the index lists it."""
    return [(name, index.find(name) is not None) for name in names]
