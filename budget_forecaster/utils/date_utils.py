"""Date manipulation utilities"""

from datetime import datetime, timezone
from typing import Iterable, Optional


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps, convert aware ones"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_key(value: datetime) -> str:
    """Calendar month of a timestamp as YYYY-MM (naive values are taken as UTC)"""
    return as_utc(value).strftime("%Y-%m")


def previous_month_key(month: str, months: Iterable[str]) -> Optional[str]:
    """Latest key in months strictly before month, or None"""
    earlier = [m for m in months if m < month]
    return max(earlier) if earlier else None
