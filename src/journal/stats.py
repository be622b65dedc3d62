"""Pure aggregation over a user's entries: totals, averages, streak, monthly chart, calendar.

Nothing here performs I/O or validation; callers hand in entries that already
satisfy the Entry invariants. Every function recomputes from its input.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from journal.models import Entry
from shared_types import SortOrder

NOT_APPLICABLE = "N/A"


def _day_bucket(entry: Entry) -> date:
    """Calendar day (local) an entry falls on."""
    return entry.created_at.date()


def round_half_up(value: float, places: int) -> float:
    """Round like a fixed-point display: ties go away from zero, not to even."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _today(today: Optional[Union[date, datetime]]) -> date:
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


def total_count(entries: list[Entry]) -> int:
    return len(entries)


def average_mood(entries: list[Entry]) -> Union[float, str]:
    """Mean mood over all entries, one decimal; "N/A" when empty."""
    if not entries:
        return NOT_APPLICABLE
    return round_half_up(sum(e.mood for e in entries) / len(entries), 1)


def current_streak(entries: Iterable[Entry], today: Optional[Union[date, datetime]] = None) -> int:
    """Consecutive days with at least one entry, counting back from today.

    Entries are collapsed to one bucket per calendar day before the walk, so
    several entries on the same day count once. No entry today means 0, even
    if yesterday has one. Days after today are ignored.
    """
    anchor = _today(today)
    days = sorted({d for d in map(_day_bucket, entries) if d <= anchor}, reverse=True)

    streak = 0
    for day in days:
        day_diff = (anchor - day).days
        if day_diff == streak:
            streak += 1
        else:
            break
    return streak


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months. Month is 1-based."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_label(year: int, month: int) -> str:
    """Short month+year label, e.g. "Jan 2025"."""
    return f"{calendar.month_abbr[month]} {year}"


def monthly_averages(
    entries: list[Entry],
    reference_date: Union[date, datetime],
    months_back: int = 12,
) -> dict[str, list]:
    """Per-month mean mood for the months_back months ending at reference_date.

    Returns:
        {"labels": [...], "values": [...]} oldest month first. A month with no
        entries has value None (a gap, not zero); others are rounded to 2 places.
    """
    if months_back < 1:
        raise ValueError(f"months_back must be >= 1, got {months_back}")

    by_month: dict[tuple[int, int], list[int]] = {}
    for e in entries:
        key = (e.created_at.year, e.created_at.month)
        by_month.setdefault(key, []).append(e.mood)

    labels: list[str] = []
    values: list[Optional[float]] = []
    for offset in range(months_back - 1, -1, -1):
        year, month = shift_month(reference_date.year, reference_date.month, -offset)
        labels.append(month_label(year, month))
        moods = by_month.get((year, month))
        if not moods:
            values.append(None)
        else:
            values.append(round_half_up(sum(moods) / len(moods), 2))

    return {"labels": labels, "values": values}


def compute_stats(entries: list[Entry], today: Optional[Union[date, datetime]] = None) -> dict:
    """Stats panel: total entries, average mood, current streak."""
    return {
        "total_entries": total_count(entries),
        "average_mood": average_mood(entries),
        "streak": current_streak(entries, today=today),
    }


def sort_entries(entries: list[Entry], order: str = SortOrder.DESC) -> list[Entry]:
    """Entries by created_at; newest first for "desc", oldest first for "asc"."""
    if order not in (SortOrder.DESC, SortOrder.ASC):
        raise ValueError(f"Invalid sort order: {order}. Use: desc, asc")
    return sorted(entries, key=lambda e: e.created_at, reverse=order == SortOrder.DESC)


def entries_on_day(entries: list[Entry], day: date) -> list[Entry]:
    """Entries whose day bucket is `day`, newest first."""
    return sort_entries([e for e in entries if _day_bucket(e) == day])


def today_entries(entries: list[Entry], today: Optional[Union[date, datetime]] = None) -> list[Entry]:
    return entries_on_day(entries, _today(today))


def backdated_timestamp(day: date) -> datetime:
    """Timestamp used when an entry is filed under a selected calendar day (noon)."""
    return datetime.combine(day, time(12, 0))


# --- Calendar ---


CALENDAR_CELLS = 42  # 6 weeks


@dataclass
class CalendarDay:
    date: date
    day: int
    in_month: bool
    has_entries: bool = False
    entry_count: int = 0


@dataclass
class CalendarMonth:
    year: int
    month: int
    title: str
    days: list[CalendarDay] = field(default_factory=list)

    def weeks(self) -> list[list[CalendarDay]]:
        return [self.days[i : i + 7] for i in range(0, len(self.days), 7)]


def calendar_month(entries: list[Entry], year: int, month: int) -> CalendarMonth:
    """6-week grid (Sunday first) for a month, marking days that have entries.

    Leading/trailing cells come from the neighbouring months.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1-12, got {month}")

    counts: dict[date, int] = {}
    for e in entries:
        d = _day_bucket(e)
        counts[d] = counts.get(d, 0) + 1

    first = date(year, month, 1)
    # date.weekday(): Monday=0 ... Sunday=6; grid starts on Sunday
    lead = (first.weekday() + 1) % 7
    start = first - timedelta(days=lead)

    days = []
    for i in range(CALENDAR_CELLS):
        d = start + timedelta(days=i)
        n = counts.get(d, 0)
        days.append(
            CalendarDay(
                date=d,
                day=d.day,
                in_month=d.month == month and d.year == year,
                has_entries=n > 0,
                entry_count=n,
            )
        )

    return CalendarMonth(
        year=year,
        month=month,
        title=f"{calendar.month_name[month]} {year}",
        days=days,
    )
