"""Canonicalization of source and destination roots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from schedcopy.errors import (
    InputError,
    InvalidDestinationError,
    MissingSourceError,
    map_os_error,
)
from schedcopy.util.log import TRACE

from .validators import (
    normalize_path,
    validate_destination,
    validate_no_duplicates,
    validate_source_exists,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedRoots:
    """Canonical (absolute, symlink-resolved) roots for one invocation."""

    sources: tuple[Path, ...]
    destination: Path


def resolve_roots(
    sources: Sequence[Path | str],
    destination: Path | str,
) -> ResolvedRoots:
    """
    Validate and canonicalize the requested roots.

    Order matters: every source check runs before the destination is touched,
    so a rejected invocation never creates the destination.

    Raises:
        DuplicateInputError: a source appears twice after normalization.
        MissingSourceError: a source does not exist.
        InvalidDestinationError: destination exists but is not a directory,
            or cannot be examined or created.
    """
    requested = [normalize_path(p) for p in sources]
    dest = normalize_path(destination)

    validate_no_duplicates(requested)
    for source in requested:
        validate_source_exists(source)

    if not validate_destination(dest):
        logger.info("creating to target path: %s", dest)
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            message, details = map_os_error(exc, path=dest, operation="create directory")
            raise InvalidDestinationError(message, details=details, cause=exc) from exc

    resolved = ResolvedRoots(
        sources=tuple(_canonical(p, MissingSourceError) for p in requested),
        destination=_canonical(dest, InvalidDestinationError),
    )
    logger.log(TRACE, "resolved roots: %s -> %s", resolved.sources, resolved.destination)
    return resolved


def _canonical(path: Path, error_cls: type[InputError]) -> Path:
    try:
        return path.resolve(strict=True)
    except OSError as exc:
        message, details = map_os_error(exc, path=path, operation="resolve path")
        raise error_cls(message, details=details, cause=exc) from exc
