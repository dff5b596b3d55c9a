"""Validation helpers for requested roots."""

from __future__ import annotations

import os
import stat
from collections import Counter
from pathlib import Path
from typing import Sequence

from schedcopy.errors import (
    DuplicateInputError,
    InvalidDestinationError,
    MissingSourceError,
    map_os_error,
)


def normalize_path(path: Path | str) -> Path:
    """Absolute, lexically normalized path (symlinks are NOT resolved)."""
    return Path(os.path.normpath(os.path.abspath(os.fspath(path))))


def validate_no_duplicates(sources: Sequence[Path]) -> None:
    counts = Counter(normalize_path(p) for p in sources)
    dups = sorted(str(p) for p, n in counts.items() if n > 1)
    if dups:
        raise DuplicateInputError(
            f"duplicated paths: {[str(p) for p in sources]}",
            details={"duplicates": dups},
        )


def validate_source_exists(source: Path) -> None:
    """
    Raises:
        MissingSourceError: source is absent or cannot be examined at all
            (e.g. name too long, permission denied on a parent).
    """
    try:
        source.stat()
    except FileNotFoundError as exc:
        raise MissingSourceError(
            f"path {source} does not exist",
            details={"path": str(source)},
            cause=exc,
        ) from exc
    except OSError as exc:
        message, details = map_os_error(exc, path=source, operation="access source")
        raise MissingSourceError(message, details=details, cause=exc) from exc


def validate_destination(destination: Path) -> bool:
    """
    Reject an existing destination that is not a directory.

    Returns:
        True if the destination already exists (as a directory).
    """
    try:
        st = destination.stat()
    except FileNotFoundError:
        return False
    except OSError as exc:
        message, details = map_os_error(exc, path=destination, operation="access destination")
        raise InvalidDestinationError(message, details=details, cause=exc) from exc

    if not stat.S_ISDIR(st.st_mode):
        raise InvalidDestinationError(
            f"directory {destination} does not exist, please create a directory",
            details={"path": str(destination)},
        )
    return True
