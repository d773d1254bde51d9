"""Calendar grids for the history views.

Every builder takes the logs indexed by date plus an explicit ``today`` and
``selected_date`` and returns plain data: no view state is kept between calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from daylog.constants import (
    MAX_DRINK_BUCKET,
    METRIC_PALETTES,
    METRICS,
    MONTH_LABELS,
    MOOD_LABELS,
    YEAR_GRID_ROWS,
)
from daylog.datemath import (
    add_days,
    days_in_month,
    format_local_date,
    is_future,
    parse_local_date,
    shift_month,
    today_local_string,
    weekday_of,
)


@dataclass(frozen=True)
class Cell:
    date: str
    day: int
    log: Optional[dict] = None
    is_valid: bool = True
    is_current_period: bool = True
    is_future: bool = False
    is_selected: bool = False
    is_today: bool = False

    @property
    def is_interactive(self) -> bool:
        return self.is_valid and self.is_current_period and not self.is_future


@dataclass(frozen=True)
class MonthColumn:
    month0: int
    label: str
    cells: list


def index_logs(logs) -> dict:
    return {log["date"]: log for log in logs or []}


def _check_month(month0: int) -> None:
    if not 0 <= month0 <= 11:
        raise ValueError(f"Month index out of range: {month0}")


def _check_metric(metric: str) -> None:
    if metric not in METRICS:
        raise ValueError(f"Unknown metric: {metric}")


def _make_cell(iso, day, logs_by_date, today, selected_date, current_period=True) -> Cell:
    return Cell(
        date=iso,
        day=day,
        log=logs_by_date.get(iso),
        is_valid=True,
        is_current_period=current_period,
        is_future=is_future(iso, today),
        is_selected=iso == selected_date,
        is_today=iso == today,
    )


def build_month_grid(year, month0, logs_by_date, today=None, selected_date=None) -> list[list]:
    """Week rows of seven slots, Sunday first.

    Slots before day 1 and after the last day are ``None`` so every row
    lines up under the weekday headers.
    """
    _check_month(month0)
    today = today or today_local_string()
    logs_by_date = logs_by_date or {}

    weeks = []
    current = [None] * weekday_of(year, month0, 1)
    for day in range(1, days_in_month(year, month0) + 1):
        iso = format_local_date(year, month0, day)
        current.append(_make_cell(iso, day, logs_by_date, today, selected_date))
        if len(current) == 7:
            weeks.append(current)
            current = []
    if current:
        current.extend([None] * (7 - len(current)))
        weeks.append(current)
    return weeks


def build_year_grid(year, logs_by_date, today=None, selected_date=None) -> list[MonthColumn]:
    """Twelve month columns sharing a fixed 31-row layout.

    Rows past a month's last day are kept as invalid cells rather than
    dropped, so the columns stay aligned.
    """
    today = today or today_local_string()
    logs_by_date = logs_by_date or {}

    columns = []
    for month0 in range(12):
        last_day = days_in_month(year, month0)
        cells = []
        for day in range(1, YEAR_GRID_ROWS + 1):
            iso = format_local_date(year, month0, day)
            if day <= last_day:
                cells.append(_make_cell(iso, day, logs_by_date, today, selected_date))
            else:
                # The date string names a day that does not exist; it is
                # only an identifier for the placeholder slot.
                cells.append(Cell(date=iso, day=day, is_valid=False))
        columns.append(MonthColumn(month0=month0, label=MONTH_LABELS[month0], cells=cells))
    return columns


def build_activity_grid(year, logs_by_date, today=None, selected_date=None) -> list[list[Cell]]:
    """Week columns covering ``year``, each running Sunday to Saturday.

    The first column starts on the Sunday on or before January 1 and the last
    ends on the Saturday on or after December 31. Days from the neighbouring
    years fill those columns with ``is_current_period`` unset.
    """
    today = today or today_local_string()
    logs_by_date = logs_by_date or {}

    current = add_days(format_local_date(year, 0, 1), -weekday_of(year, 0, 1))
    last = format_local_date(year, 11, 31)
    last = add_days(last, 6 - weekday_of(year, 11, 31))

    weeks = []
    while current <= last:
        week = []
        for _ in range(7):
            cell_year, _month0, day = parse_local_date(current)
            week.append(
                _make_cell(current, day, logs_by_date, today, selected_date, current_period=cell_year == year)
            )
            current = add_days(current, 1)
        weeks.append(week)
    return weeks


def recent_months(today=None, count=12) -> list[tuple[int, int]]:
    year, month0, _day = parse_local_date(today or today_local_string())
    return [shift_month(year, month0, -back) for back in range(count - 1, -1, -1)]


def adjacent_month(year, month0, delta, today=None):
    """Shifted ``(year, month0)``, or ``None`` past the current month."""
    _check_month(month0)
    today_year, today_month0, _day = parse_local_date(today or today_local_string())
    target = shift_month(year, month0, delta)
    if target > (today_year, today_month0):
        return None
    return target


def step_selection(selected_date, delta, today=None) -> str:
    today = today or today_local_string()
    target = add_days(selected_date, delta)
    if is_future(target, today):
        return selected_date
    return target


def cell_bucket(metric, log) -> int:
    _check_metric(metric)
    if not log:
        return 0
    if metric == "mood":
        mood = int(log.get("mood") or 0)
        return mood if mood in MOOD_LABELS else 0
    if metric == "workout":
        return 1 if log.get("worked_out") else 0
    drinks = max(int(log.get("drinks") or 0), 0)
    return min(drinks, MAX_DRINK_BUCKET)


def cell_color(metric, log) -> str:
    return METRIC_PALETTES[metric][cell_bucket(metric, log)]


def cell_tooltip(metric, cell: Cell):
    _check_metric(metric)
    if not cell.is_valid or cell.is_future:
        return None
    log = cell.log
    if not log:
        return cell.date
    if metric == "mood":
        return f"{cell.date}: {MOOD_LABELS.get(log.get('mood'), 'N/A')}"
    if metric == "workout":
        return f"{cell.date}: {'Yes' if log.get('worked_out') else 'No'}"
    drinks = int(log.get("drinks") or 0)
    return f"{cell.date}: {drinks} {'drink' if drinks == 1 else 'drinks'}"


def select_cell(cell: Optional[Cell], on_select: Callable[[str], None]) -> bool:
    if cell is None or not cell.is_interactive:
        return False
    on_select(cell.date)
    return True
