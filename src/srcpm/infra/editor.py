"""Launch the user's text editor on a recipe document."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from srcpm.exceptions import EditorError

logger = logging.getLogger(__name__)


def edit_file(path: str | Path, editor: str) -> int:
    """Open *path* in *editor* and wait for it to exit.

    *editor* may carry its own arguments (``"code --wait"``).  Returns the
    editor's exit status; a non-zero status is only logged.

    Raises
    ------
    EditorError
        If the editor cannot be launched.
    """
    path = Path(path)
    command = [*shlex.split(editor), str(path)]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        completed = subprocess.run(command, check=False)
    except OSError as exc:
        raise EditorError(
            f"Failed to launch editor {editor!r}: {exc}",
            hint="Set the EDITOR environment variable to an installed editor.",
        ) from exc

    if completed.returncode != 0:
        logger.warning("editor exited with non-zero status %s", completed.returncode)
    return completed.returncode
