from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from taskflow.config import settings
from taskflow.nlp.dates import resolve_due
from taskflow.utils.dates import is_due_soon, is_due_today, is_overdue, local_today

TODAY = date(2024, 2, 28)


def test_resolve_due_handles_leap_day():
    assert resolve_due("tomorrow", TODAY) == "2024-02-29"
    assert resolve_due("+2d", TODAY) == "2024-03-01"


def test_resolve_due_ignores_unknown_words():
    assert resolve_due("someday", TODAY) is None
    assert resolve_due("", TODAY) is None


def test_resolve_due_offset_past_calendar_end():
    assert resolve_due("+99999999d", TODAY) is None


def test_resolve_due_passes_iso_literal_through():
    assert resolve_due("2024-13-45", TODAY) == "2024-13-45"


def test_local_today_uses_configured_timezone(monkeypatch):
    monkeypatch.setattr(settings, "timezone", "Pacific/Kiritimati")
    assert local_today() == datetime.now(ZoneInfo("Pacific/Kiritimati")).date()


def test_local_today_falls_back_to_host_date(monkeypatch):
    monkeypatch.setattr(settings, "timezone", "")
    assert local_today() == date.today()


@pytest.mark.parametrize(
    "due, overdue, today, soon",
    [
        (None, False, False, False),
        (date(2024, 2, 27), True, False, False),
        (date(2024, 2, 28), False, True, True),
        (date(2024, 3, 2), False, False, True),
        (date(2024, 3, 3), False, False, False),
    ],
)
def test_due_windows(due, overdue, today, soon):
    assert is_overdue(due, TODAY) is overdue
    assert is_due_today(due, TODAY) is today
    assert is_due_soon(due, TODAY) is soon
