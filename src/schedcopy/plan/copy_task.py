"""CopyTask model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schedcopy.models import FileEntry


@dataclass(frozen=True, slots=True)
class CopyTask:
    """
    One pending copy.

    Invariant:
        destination == destination_root / source.path.relative_to(source_root)
    """

    source: FileEntry
    destination: Path
    source_root: Path
