"""Process exit statuses returned by :func:`srcpm.cli.app.main` and ``cli()``."""

from __future__ import annotations

SUCCESS: int = 0
"""Every requested package was installed, removed, updated or skipped."""

GENERAL_ERROR: int = 1
"""At least one name failed with a reported :class:`~srcpm.exceptions.SrcpmError`,
or the invocation itself was incomplete (no package names)."""

UNEXPECTED_ERROR: int = 2
"""A non-srcpm exception reached the ``cli()`` boundary."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""
