from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import require_user_id
from backend.routes.logs import require_day
from backend.schemas import ActivityGridResponse, MonthGridResponse, StreaksResponse, YearGridResponse
from backend.settings import local_today
from backend import repositories
from daylog.constants import DAY_LABELS, METRICS
from daylog.datemath import add_days, first_of_month, format_local_date, parse_local_date, shift_month
from daylog.grid import (
    build_activity_grid,
    build_month_grid,
    build_year_grid,
    cell_bucket,
    cell_color,
    cell_tooltip,
    index_logs,
)
from daylog.metrics import compute_streaks

router = APIRouter()

# Longest streak window looked at; older history does not change the count
# unless a streak is longer than this.
STREAK_LOOKBACK_DAYS = 400


def _require_metric(metric: str) -> str:
    if metric not in METRICS:
        raise HTTPException(status_code=400, detail="Invalid metric")
    return metric


def _cell_payload(cell, metric: str) -> dict | None:
    if cell is None:
        return None
    return {
        "date": cell.date,
        "day": cell.day,
        "is_valid": cell.is_valid,
        "is_current_period": cell.is_current_period,
        "is_future": cell.is_future,
        "is_selected": cell.is_selected,
        "is_today": cell.is_today,
        "is_interactive": cell.is_interactive,
        "bucket": cell_bucket(metric, cell.log),
        "color": cell_color(metric, cell.log),
        "tooltip": cell_tooltip(metric, cell),
        "log": cell.log,
    }


@router.get("/v1/history/month", response_model=MonthGridResponse)
async def month_history(
    year: int | None = Query(None),
    month: int | None = Query(None, description="1-based month"),
    metric: str = Query("mood"),
    selected: str | None = Query(None),
    user_id: str = Depends(require_user_id),
):
    _require_metric(metric)
    require_day(selected, "selected date")
    today = local_today()
    today_year, today_month0, _day = parse_local_date(today)
    year = year if year is not None else today_year
    month0 = month - 1 if month is not None else today_month0
    if not 0 <= month0 <= 11:
        raise HTTPException(status_code=400, detail="Invalid month")

    next_year, next_month0 = shift_month(year, month0, 1)
    logs = await repositories.fetch_logs(user_id, first_of_month(year, month0), first_of_month(next_year, next_month0))
    weeks = build_month_grid(year, month0, index_logs(logs), today=today, selected_date=selected)
    return {
        "year": year,
        "month": month0 + 1,
        "metric": metric,
        "day_labels": DAY_LABELS,
        "weeks": [[_cell_payload(cell, metric) for cell in week] for week in weeks],
    }


@router.get("/v1/history/year", response_model=YearGridResponse)
async def year_history(
    year: int | None = Query(None),
    metric: str = Query("mood"),
    selected: str | None = Query(None),
    user_id: str = Depends(require_user_id),
):
    _require_metric(metric)
    require_day(selected, "selected date")
    today = local_today()
    year = year if year is not None else parse_local_date(today)[0]

    logs = await repositories.fetch_logs(user_id, format_local_date(year, 0, 1), format_local_date(year + 1, 0, 1))
    columns = build_year_grid(year, index_logs(logs), today=today, selected_date=selected)
    return {
        "year": year,
        "metric": metric,
        "columns": [
            {
                "month": column.month0 + 1,
                "label": column.label,
                "cells": [_cell_payload(cell, metric) for cell in column.cells],
            }
            for column in columns
        ],
    }


@router.get("/v1/history/activity", response_model=ActivityGridResponse)
async def activity_history(
    year: int | None = Query(None),
    metric: str = Query("mood"),
    selected: str | None = Query(None),
    user_id: str = Depends(require_user_id),
):
    _require_metric(metric)
    require_day(selected, "selected date")
    today = local_today()
    year = year if year is not None else parse_local_date(today)[0]

    # The grid spills up to six days into each neighbouring year.
    logs = await repositories.fetch_logs(
        user_id,
        add_days(format_local_date(year, 0, 1), -6),
        add_days(format_local_date(year + 1, 0, 1), 6),
    )
    weeks = build_activity_grid(year, index_logs(logs), today=today, selected_date=selected)
    return {
        "year": year,
        "metric": metric,
        "weeks": [[_cell_payload(cell, metric) for cell in week] for week in weeks],
    }


@router.get("/v1/history/streaks", response_model=StreaksResponse)
async def streaks(user_id: str = Depends(require_user_id)):
    today = local_today()
    logs = await repositories.fetch_logs(user_id, add_days(today, -STREAK_LOOKBACK_DAYS), add_days(today, 1))
    return {"today": today, **compute_streaks(index_logs(logs), today)}
