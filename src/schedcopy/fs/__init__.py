"""Filesystem-facing helpers: root resolution and walking."""

from __future__ import annotations

from .roots import ResolvedRoots, resolve_roots
from .validators import normalize_path
from .walker import WalkResult, WalkWarning, walk_files

__all__ = [
    "ResolvedRoots",
    "resolve_roots",
    "normalize_path",
    "WalkResult",
    "WalkWarning",
    "walk_files",
]
