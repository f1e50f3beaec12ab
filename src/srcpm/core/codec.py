"""Raw-document ↔ domain-model conversion (pure).

The package index, the ledger file and the recipe documents all share
one JSON shape::

    {"packages": [{"name": ..., "version": ..., "source": ...,
                   "archive": ..., "dirname": ...,
                   "dependencies": [...],
                   "recipe": {"steps": [{"program": ..., "args": [...]}]}}]}

Guarantees
----------
* No I/O: callers hand in already-decoded objects.
* Malformed input raises :class:`~srcpm.exceptions.InvalidDocumentError`.
"""

from __future__ import annotations

from typing import Any

from srcpm.core.models import Package, PackageIndex, Recipe, Step
from srcpm.exceptions import InvalidDocumentError


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _require_str(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidDocumentError(f"{where}: field '{key}' must be a non-empty string")
    return value


def _optional_str(raw: dict[str, Any], key: str, where: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidDocumentError(f"{where}: field '{key}' must be a string")
    return value


def _str_list(raw: dict[str, Any], key: str, where: str) -> tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidDocumentError(f"{where}: field '{key}' must be a list of strings")
    return tuple(value)


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------

def recipe_from_dict(raw: object, *, where: str = "recipe") -> Recipe:
    """Convert ``{"steps": [...]}`` into a :class:`Recipe`."""
    if not isinstance(raw, dict):
        raise InvalidDocumentError(f"{where}: expected an object with 'steps'")
    raw_steps = raw.get("steps")
    if not isinstance(raw_steps, list):
        raise InvalidDocumentError(f"{where}: field 'steps' must be a list")

    steps: list[Step] = []
    for position, entry in enumerate(raw_steps):
        step_where = f"{where}.steps[{position}]"
        if not isinstance(entry, dict):
            raise InvalidDocumentError(f"{step_where}: expected an object")
        steps.append(
            Step(
                program=_require_str(entry, "program", step_where),
                args=_str_list(entry, "args", step_where),
            )
        )
    return Recipe(steps=tuple(steps))


def recipe_to_dict(recipe: Recipe) -> dict[str, Any]:
    return {
        "steps": [
            {"program": step.program, "args": list(step.args)}
            for step in recipe.steps
        ],
    }


# ---------------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------------

def package_from_dict(raw: object, *, where: str = "package") -> Package:
    """Convert one raw package dict into a :class:`Package`."""
    if not isinstance(raw, dict):
        raise InvalidDocumentError(f"{where}: expected an object")

    name = _require_str(raw, "name", where)
    where = f"{where} '{name}'"
    raw_recipe = raw.get("recipe")
    return Package(
        name=name,
        version=_require_str(raw, "version", where),
        source=_optional_str(raw, "source", where) or "",
        archive=_optional_str(raw, "archive", where) or "",
        dirname=_optional_str(raw, "dirname", where) or None,
        dependencies=_str_list(raw, "dependencies", where),
        recipe=(
            recipe_from_dict(raw_recipe, where=f"{where}.recipe")
            if raw_recipe is not None
            else None
        ),
    )


def package_to_dict(package: Package) -> dict[str, Any]:
    return {
        "name": package.name,
        "version": package.version,
        "source": package.source,
        "archive": package.archive,
        "dirname": package.dirname,
        "dependencies": list(package.dependencies),
        "recipe": recipe_to_dict(package.recipe) if package.recipe else None,
    }


# ---------------------------------------------------------------------------
# Whole documents
# ---------------------------------------------------------------------------

def packages_from_document(document: object) -> tuple[Package, ...]:
    """Parse ``{"packages": [...]}`` (or a bare list) into packages."""
    raw_list: object = document
    if isinstance(document, dict):
        raw_list = document.get("packages", [])
    if not isinstance(raw_list, list):
        raise InvalidDocumentError("document: 'packages' must be a list")
    return tuple(
        package_from_dict(entry, where=f"packages[{position}]")
        for position, entry in enumerate(raw_list)
    )


def document_from_packages(packages: tuple[Package, ...]) -> dict[str, Any]:
    return {"packages": [package_to_dict(p) for p in packages]}


def index_from_document(document: object) -> PackageIndex:
    """Parse and validate a package index document.

    Rejects duplicate names, duplicate install keys (a ``dirname`` equal
    to another package's ``dirname``, or to the name of a package that
    has none) and packages that list themselves as a dependency.  Deeper
    cycles are only detected while resolving.
    """
    packages = packages_from_document(document)
    seen: set[str] = set()
    keys: dict[str, str] = {}
    for package in packages:
        if package.name in seen:
            raise InvalidDocumentError(f"Duplicate package name in index: {package.name}")
        seen.add(package.name)
        owner = keys.setdefault(package.install_key, package.name)
        if owner != package.name:
            raise InvalidDocumentError(
                f"Packages {owner} and {package.name} share the install key "
                f"{package.install_key!r}",
            )
        if package.name in package.dependencies:
            raise InvalidDocumentError(
                f"Package {package.name} lists itself as a dependency",
            )
    return PackageIndex(packages=packages)
