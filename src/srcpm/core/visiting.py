"""Graph-colouring tracker for cycle detection during recursive walks.

A node is WHITE until entered, GRAY while its dependencies are being
walked, and BLACK once finished.  Re-entering a GRAY node means the walk
has looped back onto its own path.  One tracker is scoped to a single
top-level call tree and discarded afterwards.
"""

from __future__ import annotations

import enum

from srcpm.exceptions import DependencyCycleError


class Color(enum.Enum):
    WHITE = "white"
    GRAY = "gray"
    BLACK = "black"


class VisitTracker:
    """Explicit white/gray/black colouring passed down a recursive walk."""

    def __init__(self) -> None:
        self._colors: dict[str, Color] = {}
        self._stack: list[str] = []

    def color(self, key: str) -> Color:
        return self._colors.get(key, Color.WHITE)

    @property
    def path(self) -> tuple[str, ...]:
        """Keys currently in progress, outermost first."""
        return tuple(self._stack)

    def check(self, key: str) -> None:
        """Raise :class:`DependencyCycleError` if *key* is in progress."""
        if self.color(key) is Color.GRAY:
            raise DependencyCycleError(key, self.path)

    def enter(self, key: str) -> None:
        self.check(key)
        self._colors[key] = Color.GRAY
        self._stack.append(key)

    def leave(self, key: str) -> None:
        self._colors[key] = Color.BLACK
        if self._stack and self._stack[-1] == key:
            self._stack.pop()
        elif key in self._stack:
            self._stack.remove(key)
