"""Loading of the global recipe documents (``binary``, ``source``, ``remove``).

A missing document is not an error: the engines simply have no fallback.
An unparsable document is treated the same way, with a warning.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from srcpm.core.codec import recipe_from_dict
from srcpm.core.models import Recipe
from srcpm.exceptions import InvalidDocumentError

logger = logging.getLogger(__name__)


def load_recipe(path: str | Path) -> Recipe | None:
    """Return the recipe stored at *path*, or ``None``."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
        return recipe_from_dict(document, where=str(path))
    except (OSError, UnicodeDecodeError, ValueError, InvalidDocumentError) as exc:
        logger.warning("ignoring unreadable recipe %s: %s", path, exc)
        return None
