"""Package index loading (remote or local).

``http://`` and ``https://`` locations are fetched with requests; any
other location is read as a local JSON file.  All failures are re-raised
as :class:`~srcpm.exceptions.IndexLoadError`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from srcpm.core.codec import index_from_document
from srcpm.core.models import PackageIndex
from srcpm.exceptions import EnvironmentError, IndexLoadError, InvalidDocumentError

DEFAULT_TIMEOUT: float = 30.0


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_index(location: str, *, timeout: float = DEFAULT_TIMEOUT) -> PackageIndex:
    """Fetch and parse the package index at *location*.

    Raises
    ------
    IndexLoadError
        When the index cannot be fetched, decoded or validated.
    """
    document = _fetch_remote(location, timeout) if is_remote(location) else _read_local(location)
    try:
        return index_from_document(document)
    except InvalidDocumentError as exc:
        raise IndexLoadError(f"Invalid package index from {location}: {exc}") from exc


def _fetch_remote(url: str, timeout: float) -> Any:
    try:
        import requests
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "requests is not installed. Install with: pip install requests",
        ) from exc

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "an error"
        raise IndexLoadError(
            f"Package index server returned {status} for {url}",
            hint="Check the index URL (--index or SRCPM_INDEX).",
        ) from exc
    except requests.RequestException as exc:
        raise IndexLoadError(
            f"Failed to fetch package index from {url}: {exc}",
            hint="Check your network connection or use a local index with --index.",
        ) from exc

    try:
        return response.json()
    except ValueError as exc:
        raise IndexLoadError(f"Invalid package index from {url}: {exc}") from exc


def _read_local(location: str) -> Any:
    path = Path(location).expanduser()
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise IndexLoadError(
            f"Package index not found: {path}",
            hint="Pass a URL or an existing file with --index.",
        ) from exc
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise IndexLoadError(f"Invalid package index from {path}: {exc}") from exc
