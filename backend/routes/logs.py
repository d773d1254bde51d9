from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import require_user_id
from backend.schemas import LogPayload, LogResponse, LogsResponse
from backend.settings import local_today
from backend import repositories
from daylog.datemath import is_future, is_valid_iso

router = APIRouter()


def require_day(day: str | None, name: str = "date") -> str | None:
    if day is not None and not is_valid_iso(day):
        raise HTTPException(status_code=400, detail=f"Invalid {name} format")
    return day


@router.get("/v1/logs", response_model=LogsResponse)
async def list_logs(
    start: str | None = Query(None),
    end: str | None = Query(None),
    user_id: str = Depends(require_user_id),
):
    require_day(start, "start date")
    require_day(end, "end date")
    if start and end and end < start:
        raise HTTPException(status_code=400, detail="End date must be after start date")
    items = await repositories.fetch_logs(user_id, start, end)
    return {"items": items}


@router.get("/v1/logs/{day}", response_model=LogResponse)
async def get_log(day: str, user_id: str = Depends(require_user_id)):
    require_day(day)
    log = await repositories.get_log(user_id, day)
    if not log:
        raise HTTPException(status_code=404, detail="No log for this date")
    return log


@router.put("/v1/logs/{day}", response_model=LogResponse)
async def put_log(day: str, payload: LogPayload, user_id: str = Depends(require_user_id)):
    require_day(day)
    if is_future(day, local_today()):
        raise HTTPException(status_code=400, detail="Future dates cannot be edited")
    return await repositories.upsert_log(user_id, day, payload.model_dump())


@router.delete("/v1/logs/{day}")
async def delete_log(day: str, user_id: str = Depends(require_user_id)):
    require_day(day)
    deleted = await repositories.delete_log(user_id, day)
    if not deleted:
        raise HTTPException(status_code=404, detail="No log for this date")
    return {"ok": True}
