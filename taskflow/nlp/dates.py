import re
from datetime import date, timedelta

OFFSET_PAT = re.compile(r"^\+(\d+)d$", re.ASCII)
ISO_DATE_PAT = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


def resolve_due(value: str, today: date) -> str | None:
    """
    Resolve the value of a ``due:`` token to an ISO date string.

    Accepts today, tomorrow/tom, +Nd and a literal YYYY-MM-DD (passed through
    without a calendar check). Anything else resolves to None.
    """
    value = value.lower()
    if value == "today":
        return today.isoformat()
    if value in ("tomorrow", "tom"):
        return (today + timedelta(days=1)).isoformat()
    offset = OFFSET_PAT.match(value)
    if offset:
        try:
            return (today + timedelta(days=int(offset.group(1)))).isoformat()
        except OverflowError:
            # past date.max
            return None
    if ISO_DATE_PAT.match(value):
        return value
    return None
