"""Public plan exports for schedcopy."""

from __future__ import annotations

from .copy_plan import CopyPlan
from .copy_task import CopyTask
from .planner import build_copy_plan

__all__ = [
    "CopyTask",
    "CopyPlan",
    "build_copy_plan",
]
