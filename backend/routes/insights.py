from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import require_user_id
from backend.routes.logs import require_day
from backend.schemas import InsightsResponse
from backend.settings import local_today
from backend import repositories
from daylog.constants import VIEW_KINDS
from daylog.periods import ViewWindow, resolve, summarize

router = APIRouter()


@router.get("/v1/insights", response_model=InsightsResponse)
async def insights(
    view: str = Query("week"),
    offset: int = Query(0),
    start: str | None = Query(None),
    end: str | None = Query(None),
    user_id: str = Depends(require_user_id),
):
    if view not in VIEW_KINDS:
        raise HTTPException(status_code=400, detail="Invalid view")
    require_day(start, "start date")
    require_day(end, "end date")
    try:
        window = ViewWindow(kind=view, offset=offset, start=start, end=end)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    today = local_today()
    window_start, window_end = resolve(window, today)
    logs = await repositories.fetch_logs(user_id, window_start, window_end)
    summary = summarize(window, logs, today)
    return {
        "view": window.kind,
        "offset": window.offset,
        "start": summary.start,
        "end": summary.end,
        "label": summary.label,
        "average_mood": summary.average_mood,
        "exercise": summary.exercise,
        "drinks": summary.drinks,
        "series": summary.series,
    }
