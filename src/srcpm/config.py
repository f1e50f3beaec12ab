"""Runtime settings for srcpm.

Settings come from the environment, optionally overridden by CLI flags:

* ``SRCPM_ROOT`` — state directory holding the ledger and recipe
  documents (default ``~/.srcpm``).
* ``SRCPM_INDEX`` — package index URL or local path.
* ``EDITOR`` — editor used by ``--edit`` (default ``nano``).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from srcpm.exceptions import ConfigError

DEFAULT_ROOT: str = "~/.srcpm"
DEFAULT_INDEX: str = (
    "https://raw.githubusercontent.com/Arthur4567321/packages-mtr/refs/heads/main/packages.json"
)
DEFAULT_EDITOR: str = "nano"

LEDGER_FILE: str = "installed.json"
BINARY_RECIPE_FILE: str = "binary.json"
SOURCE_RECIPE_FILE: str = "source.json"
REMOVAL_RECIPE_FILE: str = "remove.json"
BUILD_DIR: str = "build"

EDIT_TARGETS: tuple[str, ...] = ("binary", "source", "remove")


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved paths and locations for one invocation."""

    root: Path
    index_location: str = DEFAULT_INDEX
    editor: str = DEFAULT_EDITOR

    @property
    def ledger_path(self) -> Path:
        return self.root / LEDGER_FILE

    @property
    def binary_recipe_path(self) -> Path:
        return self.root / BINARY_RECIPE_FILE

    @property
    def source_recipe_path(self) -> Path:
        return self.root / SOURCE_RECIPE_FILE

    @property
    def removal_recipe_path(self) -> Path:
        return self.root / REMOVAL_RECIPE_FILE

    @property
    def build_root(self) -> Path:
        """Working directory for recipe steps; relative archive/dirname paths resolve here."""
        return self.root / BUILD_DIR

    def edit_target_path(self, target: str) -> Path:
        """Map an ``--edit`` target name to its recipe document."""
        paths = {
            "binary": self.binary_recipe_path,
            "source": self.source_recipe_path,
            "remove": self.removal_recipe_path,
        }
        try:
            return paths[target]
        except KeyError:
            raise ConfigError(
                f"Unknown edit target: {target}",
                hint=f"Use one of: {', '.join(EDIT_TARGETS)}",
            ) from None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        root: str | Path | None = None,
        index_location: str | None = None,
    ) -> Settings:
        """Build settings from *environ* (``os.environ`` by default).

        Explicit keyword arguments win over environment variables.
        """
        env = os.environ if environ is None else environ
        raw_root = root if root is not None else env.get("SRCPM_ROOT") or DEFAULT_ROOT
        return cls(
            root=Path(raw_root).expanduser(),
            index_location=index_location or env.get("SRCPM_INDEX") or DEFAULT_INDEX,
            editor=env.get("EDITOR") or DEFAULT_EDITOR,
        )
