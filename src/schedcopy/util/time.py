from __future__ import annotations

from datetime import datetime, timedelta, timezone


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """Return current time as tz-aware datetime in the local zone."""
    return datetime.now().astimezone()


def format_duration(delta: timedelta) -> str:
    """
    Format a timedelta for humans.

    Examples:
      - 0:00:01.5 -> "1.500s"
      - 0:02:03   -> "2m 3.000s"
      - 1 day, 3h -> "1d 3h 0m 0.000s"
    """
    total = delta.total_seconds()
    sign = "-" if total < 0 else ""
    total = abs(total)

    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, seconds = divmod(rem, 60)

    parts: list[str] = []
    if days:
        parts.append(f"{int(days)}d")
    if days or hours:
        parts.append(f"{int(hours)}h")
    if days or hours or minutes:
        parts.append(f"{int(minutes)}m")
    parts.append(f"{seconds:.3f}s")
    return sign + " ".join(parts)
