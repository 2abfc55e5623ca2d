"""UTC time helpers shared by the store and the analytics layer."""
from __future__ import annotations

import re
from datetime import datetime, timezone

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_month(month: str) -> tuple[int, int]:
    match = _MONTH_RE.match(month.strip())
    if match is None:
        raise ValueError(f"invalid month '{month}', expected YYYY-MM")
    year, month_number = int(match.group(1)), int(match.group(2))
    if not 1 <= month_number <= 12:
        raise ValueError(f"invalid month '{month}', expected YYYY-MM")
    return year, month_number


def month_bounds(month: str) -> tuple[datetime, datetime]:
    """Return ``[start, end)`` of a ``YYYY-MM`` month in UTC."""
    year, month_number = parse_month(month)
    start = datetime(year, month_number, 1, tzinfo=timezone.utc)
    if month_number == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month_number + 1, 1, tzinfo=timezone.utc)
    return start, end


def format_month(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def trailing_months(count: int, now: datetime) -> list[str]:
    """``count`` month labels ending with the month of ``now``, oldest first."""
    anchor = now.year * 12 + (now.month - 1)
    labels: list[str] = []
    for offset in range(count - 1, -1, -1):
        index = anchor - offset
        labels.append(f"{index // 12:04d}-{index % 12 + 1:02d}")
    return labels
