from .ids import new_plan_id, new_uuid
from .log import TRACE, configure_logging, level_for_verbosity
from .size import format_mb, total_size
from .time import format_duration, now_local, now_utc

__all__ = [
    "new_uuid",
    "new_plan_id",
    "TRACE",
    "configure_logging",
    "level_for_verbosity",
    "now_utc",
    "now_local",
    "format_duration",
    "format_mb",
    "total_size",
]
