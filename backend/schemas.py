from __future__ import annotations

from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field


class LogPayload(BaseModel):
    mood: int = Field(..., ge=1, le=5)
    worked_out: bool = False
    exercises: List[str] = Field(default_factory=list)
    drinks: int = Field(0, ge=0)
    notes: Optional[str] = None


class LogResponse(BaseModel):
    date: str
    mood: Optional[int] = None
    worked_out: bool = False
    exercises: List[str] = Field(default_factory=list)
    drinks: int = 0
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LogsResponse(BaseModel):
    items: List[LogResponse]


class CellResponse(BaseModel):
    date: str
    day: int
    is_valid: bool
    is_current_period: bool
    is_future: bool
    is_selected: bool
    is_today: bool
    is_interactive: bool
    bucket: int
    color: str
    tooltip: Optional[str] = None
    log: Optional[LogResponse] = None


class MonthGridResponse(BaseModel):
    year: int
    month: int
    metric: str
    day_labels: List[str]
    weeks: List[List[Optional[CellResponse]]]


class MonthColumnResponse(BaseModel):
    month: int
    label: str
    cells: List[CellResponse]


class YearGridResponse(BaseModel):
    year: int
    metric: str
    columns: List[MonthColumnResponse]


class ActivityGridResponse(BaseModel):
    year: int
    metric: str
    weeks: List[List[CellResponse]]


class StreaksResponse(BaseModel):
    today: str
    workout: int
    sober: int
    logging: int


class InsightsResponse(BaseModel):
    view: str
    offset: int
    start: str
    end: str
    label: str
    average_mood: float
    exercise: Dict[str, int]
    drinks: Dict[str, Any]
    series: List[Dict[str, Any]]
