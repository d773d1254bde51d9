"""Period windows and summary statistics for the insights view.

A window is a ``(kind, offset)`` pair anchored on "now". It resolves to a
half-open ``[start, end)`` pair of ISO date strings, and every label, filter
and statistic below is derived from that same pair.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Optional

from daylog.constants import (
    DAY_LABELS,
    MONTH_LABELS,
    MONTH_NAMES,
    VIEW_KINDS,
    YEAR_WINDOW_DAYS,
)
from daylog.datemath import (
    add_days,
    days_between,
    days_in_month,
    first_of_month,
    format_local_date,
    parse_local_date,
    shift_month,
    today_local_string,
    weekday_of_iso,
)


def _check_kind(kind: str) -> None:
    if kind not in VIEW_KINDS:
        raise ValueError(f"Unknown view: {kind}")


@dataclass(frozen=True)
class ViewWindow:
    kind: str = "week"
    offset: int = 0
    start: Optional[str] = None
    end: Optional[str] = None

    def __post_init__(self):
        _check_kind(self.kind)
        if self.kind == "custom":
            if not self.start or not self.end:
                raise ValueError("Custom range needs a start and an end date")
            parse_local_date(self.start)
            parse_local_date(self.end)
            if self.end < self.start:
                raise ValueError("Custom range ends before it starts")

    def switch(self, kind: str, start: Optional[str] = None, end: Optional[str] = None) -> "ViewWindow":
        return ViewWindow(kind=kind, offset=0, start=start, end=end)

    def shift(self, delta: int) -> "ViewWindow":
        if self.kind == "custom":
            return self
        return replace(self, offset=self.offset + delta)

    def previous(self) -> "ViewWindow":
        return self.shift(-1)

    def next(self) -> "ViewWindow":
        return self.shift(1)


def resolve_window(kind, offset=0, now=None, start=None, end=None) -> tuple[str, str]:
    _check_kind(kind)
    now = now or today_local_string()
    year, month0, _day = parse_local_date(now)

    if kind == "week":
        # Rolling seven days ending today, not aligned to Sunday.
        return add_days(now, -6 + offset * 7), add_days(now, 1 + offset * 7)
    if kind == "month":
        start_year, start_month0 = shift_month(year, month0, offset)
        end_year, end_month0 = shift_month(start_year, start_month0, 1)
        return first_of_month(start_year, start_month0), first_of_month(end_year, end_month0)
    if kind == "year":
        return format_local_date(year + offset, 0, 1), format_local_date(year + offset + 1, 0, 1)

    window = ViewWindow(kind="custom", start=start, end=end)
    return window.start, add_days(window.end, 1)


def resolve(window: ViewWindow, now=None) -> tuple[str, str]:
    return resolve_window(window.kind, window.offset, now, window.start, window.end)


def filter_and_sort(logs, window) -> list:
    start, end = window
    selected = [log for log in logs or [] if start <= log["date"] < end]
    return sorted(selected, key=lambda log: log["date"])


def _short(iso: str, with_year: bool) -> str:
    year, month0, day = parse_local_date(iso)
    label = f"{MONTH_LABELS[month0]} {day}"
    return f"{label}, {year}" if with_year else label


def period_label(kind, offset=0, now=None, start=None, end=None) -> str:
    window_start, window_end = resolve_window(kind, offset, now, start, end)
    start_year, start_month0, _day = parse_local_date(window_start)
    if kind == "month":
        return f"{MONTH_NAMES[start_month0]} {start_year}"
    if kind == "year":
        return str(start_year)
    last_day = add_days(window_end, -1)
    if kind == "custom":
        return f"{_short(window_start, True)} – {_short(last_day, True)}"

    end_year = parse_local_date(last_day)[0]
    if start_year != end_year:
        return f"{_short(window_start, True)} – {_short(last_day, True)}"
    return f"{_short(window_start, False)} – {_short(last_day, False)}, {end_year}"


def window_days(kind, window) -> int:
    """Days a window is expected to hold, used for the unrecorded count."""
    if kind == "week":
        return 7
    if kind == "month":
        year, month0, _day = parse_local_date(window[0])
        return days_in_month(year, month0)
    if kind == "year":
        return YEAR_WINDOW_DAYS
    return days_between(*window)


def average_mood(logs) -> float:
    moods = [log["mood"] for log in logs or [] if log.get("mood") is not None]
    if not moods:
        return 0
    return sum(moods) / len(moods)


def exercise_stats(logs, kind, offset=0, now=None, start=None, end=None) -> dict:
    logs = list(logs or [])
    window = resolve_window(kind, offset, now, start, end)
    yes = sum(1 for log in logs if log.get("worked_out"))
    no = len(logs) - yes
    # Halves round up.
    percentage = math.floor(yes / len(logs) * 100 + 0.5) if logs else 0
    return {
        "yes": yes,
        "no": no,
        "unrecorded": window_days(kind, window) - len(logs),
        "percentage": percentage,
    }


def drink_stats(logs) -> dict:
    logs = list(logs or [])
    counts = [int(log.get("drinks") or 0) for log in logs]
    total = sum(counts)
    return {
        "total": total,
        "average": round(total / len(counts), 1) if counts else 0,
        "dry_days": sum(1 for count in counts if count == 0),
    }


def display_date(iso, kind) -> str:
    label = _short(iso, False)
    if kind == "week":
        return f"{DAY_LABELS[weekday_of_iso(iso)]}, {label}"
    return label


def build_series(logs, kind) -> list[dict]:
    return [
        {
            "date": log["date"],
            "display_date": display_date(log["date"], kind),
            "mood": log.get("mood"),
            "drinks": int(log.get("drinks") or 0),
            "worked_out": bool(log.get("worked_out")),
        }
        for log in logs
    ]


@dataclass
class PeriodSummary:
    window: ViewWindow
    start: str
    end: str
    label: str
    logs: list = field(default_factory=list)
    series: list = field(default_factory=list)
    average_mood: float = 0
    exercise: dict = field(default_factory=dict)
    drinks: dict = field(default_factory=dict)


def summarize(window: ViewWindow, logs, now=None) -> PeriodSummary:
    now = now or today_local_string()
    start, end = resolve(window, now)
    selected = filter_and_sort(logs, (start, end))
    return PeriodSummary(
        window=window,
        start=start,
        end=end,
        label=period_label(window.kind, window.offset, now, window.start, window.end),
        logs=selected,
        series=build_series(selected, window.kind),
        average_mood=round(average_mood(selected), 1),
        exercise=exercise_stats(selected, window.kind, window.offset, now, window.start, window.end),
        drinks=drink_stats(selected),
    )
