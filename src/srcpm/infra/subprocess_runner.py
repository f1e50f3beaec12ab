"""``subprocess``-backed implementation of :class:`~srcpm.core.protocols.ProcessRunner`.

This module is the **only** place in the codebase that launches recipe
steps.  Child processes inherit stdin/stdout/stderr so build output is
visible live; no timeout is imposed.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from srcpm.core.protocols import ProcessOutcome


class SubprocessRunner:
    """Concrete :class:`ProcessRunner` using :func:`subprocess.run`."""

    def run(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: str | None = None,
    ) -> ProcessOutcome:
        """Run *program* with *args* and wait for it.

        A program that cannot be started (missing binary, permission
        denied, bad working directory) yields an outcome with
        ``returncode=None`` instead of raising.
        """
        try:
            completed = subprocess.run(
                [program, *args],
                cwd=cwd,
                check=False,
            )
        except OSError as exc:
            return ProcessOutcome(returncode=None, error=str(exc))
        return ProcessOutcome(returncode=completed.returncode)
