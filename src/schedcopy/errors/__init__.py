"""Public error exports for schedcopy."""

from __future__ import annotations

from .exceptions import (
    ConfigError,
    CopyTaskError,
    DuplicateInputError,
    InputError,
    InvalidDestinationError,
    MissingSourceError,
    PathMappingError,
    SchedCopyError,
    TraversalError,
    map_os_error,
)

__all__ = [
    "SchedCopyError",
    "InputError",
    "DuplicateInputError",
    "MissingSourceError",
    "InvalidDestinationError",
    "TraversalError",
    "PathMappingError",
    "CopyTaskError",
    "ConfigError",
    "map_os_error",
]
