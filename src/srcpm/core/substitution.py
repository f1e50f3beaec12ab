"""Placeholder substitution for recipe step arguments.

Recognised tokens are replaced literally, in a fixed order; anything
else in braces (unknown names, unbalanced braces) is left verbatim.
"""

from __future__ import annotations

from srcpm.core.models import Package

PLACEHOLDERS: tuple[str, ...] = ("archive", "source", "dirname", "version", "name")


def placeholder_values(package: Package) -> dict[str, str]:
    """Map each placeholder name to its value for *package*."""
    return {
        "archive": package.archive,
        "source": package.source,
        "dirname": package.dirname or "",
        "version": package.version,
        "name": package.name,
    }


def substitute(arg: str, package: Package) -> str:
    """Return *arg* with every known ``{placeholder}`` replaced."""
    values = placeholder_values(package)
    for key in PLACEHOLDERS:
        arg = arg.replace("{" + key + "}", values[key])
    return arg


def substitute_args(args: tuple[str, ...], package: Package) -> tuple[str, ...]:
    return tuple(substitute(arg, package) for arg in args)
