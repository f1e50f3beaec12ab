"""Local implementation of :class:`~srcpm.core.protocols.FileSystem`.

Relative paths (archives, extracted directories) are resolved against a
root directory, the build root where recipe steps run.  Deleting a path
that is already gone is not an error.
"""

from __future__ import annotations

import shutil
from pathlib import Path


class LocalFileSystem:
    """Concrete :class:`FileSystem` rooted at *root*."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def resolve(self, path: str) -> Path:
        candidate = Path(path).expanduser()
        return candidate if candidate.is_absolute() else self._root / candidate

    def remove_tree(self, path: str) -> None:
        if not path:
            return
        target = self.resolve(path)
        if not target.exists() and not target.is_symlink():
            return
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()

    def remove_file(self, path: str) -> None:
        if not path:
            return
        target = self.resolve(path)
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
            return
        target.unlink(missing_ok=True)
