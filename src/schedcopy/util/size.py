from __future__ import annotations

from typing import Iterable

from schedcopy.models import FileEntry

_MB: int = 1024 * 1024


def format_mb(num_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals (e.g. "1.50MB")."""
    return f"{num_bytes / _MB:.2f}MB"


def total_size(entries: Iterable[FileEntry]) -> int:
    """Sum entry sizes; entries whose size cannot be read count as 0."""
    return sum(entry.size() or 0 for entry in entries)
