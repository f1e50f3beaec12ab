"""Allow ``python -m srcpm`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m srcpm`` behaves identically to the ``srcpm`` console
script.
"""

from __future__ import annotations

from srcpm.cli.app import cli

if __name__ == "__main__":
    cli()
