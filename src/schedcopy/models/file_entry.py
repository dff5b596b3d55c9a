"""Data model for discovered files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True, slots=True)
class FileEntry:
    """
    A regular file discovered under some root.

    Notes:
        - `path` is absolute and lives under the canonical root it was found in.
        - No metadata is captured at discovery time; size() stats lazily and is
          meant for reporting only.
    """

    path: Path

    def size(self) -> Optional[int]:
        """Return the current size in bytes, or None if it cannot be read."""
        try:
            return os.stat(self.path).st_size
        except OSError:
            return None

    def relative_to(self, root: Path) -> Path:
        """Return the path relative to root. Raises ValueError if outside."""
        return self.path.relative_to(root)
