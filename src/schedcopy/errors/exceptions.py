"""Exception hierarchy and OS error mapping for schedcopy."""

from __future__ import annotations

import errno
from pathlib import Path
from typing import Any, Optional


class SchedCopyError(Exception):
    """
    Base exception for schedcopy.

    Attributes:
        details: Optional structured information (e.g., path, errno).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InputError(SchedCopyError):
    """Raised when the requested roots are rejected before any work begins."""


class DuplicateInputError(InputError):
    """Raised when the same source root is given more than once."""


class MissingSourceError(InputError):
    """Raised when a source root does not exist."""


class InvalidDestinationError(InputError):
    """Raised when the destination exists but is not a directory."""


class TraversalError(SchedCopyError):
    """Raised when a root directory itself cannot be read."""


class PathMappingError(SchedCopyError):
    """Raised when a discovered file is not inside the root it was attributed to."""


class CopyTaskError(SchedCopyError):
    """Raised for a failed copy task when the caller asks for an exception."""


class ConfigError(SchedCopyError):
    """Raised for invalid configuration (worker counts, verbosity, cron)."""


_ERRNO_MESSAGES: dict[int, str] = {
    errno.EACCES: "permission denied",
    errno.EPERM: "operation not permitted",
    errno.ENOENT: "no such file or directory",
    errno.ENOTDIR: "not a directory",
    errno.EISDIR: "is a directory",
    errno.EEXIST: "file exists",
    errno.ENOSPC: "no space left on device",
    errno.EROFS: "read-only file system",
    errno.ELOOP: "too many levels of symbolic links",
    errno.ENAMETOOLONG: "file name too long",
}


def map_os_error(
    exc: OSError,
    *,
    path: Path | str,
    operation: str,
) -> tuple[str, dict[str, Any]]:
    """
    Turn an OSError into a readable message and a details dict.

    Policy:
        - Known errno values get a short fixed description.
        - Otherwise the OS-provided strerror (or str(exc)) is used.
    """
    reason = _ERRNO_MESSAGES.get(exc.errno) if exc.errno is not None else None
    if reason is None:
        reason = exc.strerror or str(exc)

    details: dict[str, Any] = {
        "path": str(path),
        "operation": operation,
        "errno": exc.errno,
    }
    if exc.filename is not None and str(exc.filename) != str(path):
        details["filename"] = str(exc.filename)

    return f"failed to {operation} `{path}`: {reason}", details
