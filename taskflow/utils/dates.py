from collections.abc import Callable
from datetime import date, datetime
from typing import Literal
from zoneinfo import ZoneInfo

from ..config import settings


def local_today() -> date:
    """Current calendar date in the configured timezone (host local time if unset)."""
    if settings.timezone:
        return datetime.now(ZoneInfo(settings.timezone)).date()
    return date.today()


def is_overdue(due: date | None, today: date) -> bool:
    return due is not None and due < today


def is_due_today(due: date | None, today: date) -> bool:
    return due is not None and due == today


def is_due_soon(due: date | None, today: date, days: int = 3) -> bool:
    if due is None:
        return False
    return 0 <= (due - today).days <= days


DueFilter = Literal["today", "overdue", "soon"]

DUE_CHECKS: dict[str, Callable[[date | None, date], bool]] = {
    "today": is_due_today,
    "overdue": is_overdue,
    "soon": is_due_soon,
}
